"""Texture descriptions and subresource layouts for DDS data."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union

from guifile_toolkit.dds_formats import (
    DxgiFormat,
    bits_per_pixel,
    make_linear,
    make_srgb,
    surface_info,
)
from guifile_toolkit.dds_header import (
    DDS_CUBEMAP,
    DDS_CUBEMAP_ALLFACES,
    DDS_HEADER_FLAGS_VOLUME,
    DDS_HEIGHT,
    DDSError,
    DDSTexture,
    dxgi_format_from_pixel_format,
)

_UINT32_MAX = 0xFFFFFFFF

RESOURCE_MISC_TEXTURECUBE = 0x4

REQ_MIP_LEVELS = 15
REQ_TEXTURE1D_ARRAY_AXIS_DIMENSION = 2048
REQ_TEXTURE1D_U_DIMENSION = 16384
REQ_TEXTURE2D_ARRAY_AXIS_DIMENSION = 2048
REQ_TEXTURE2D_U_OR_V_DIMENSION = 16384
REQ_TEXTURECUBE_DIMENSION = 16384
REQ_TEXTURE3D_U_V_OR_W_DIMENSION = 2048

_PALETTED = frozenset({DxgiFormat.AI44, DxgiFormat.IA44, DxgiFormat.P8, DxgiFormat.A8P8})


class LoaderFlags(enum.IntFlag):
    """Options that adjust the format of a loaded texture."""

    DEFAULT = 0
    FORCE_SRGB = 0x1
    IGNORE_SRGB = 0x2


class ResourceDimension(enum.IntEnum):
    """Kind of texture resource a DDS file describes."""

    UNKNOWN = 0
    BUFFER = 1
    TEXTURE1D = 2
    TEXTURE2D = 3
    TEXTURE3D = 4


@dataclass(frozen=True)
class TextureDescription:
    """Shape and format of the texture a DDS file holds."""

    dimension: ResourceDimension
    width: int
    height: int
    depth: int
    mip_count: int
    array_size: int
    format: Union[DxgiFormat, int]
    is_cube_map: bool = False


@dataclass(frozen=True)
class Subresource:
    """One mip level of one array item: where its bytes start and how they are laid out."""

    offset: int
    row_pitch: int
    slice_pitch: int


@dataclass
class SubresourceLayout:
    """The subresources kept after dropping mips larger than a size limit."""

    width: int
    height: int
    depth: int
    skip_mip: int
    subresources: list[Subresource] = field(default_factory=list)


def _not_supported(reason: str) -> DDSError:
    return DDSError(f"not supported: {reason}")


def describe_texture(
    texture: DDSTexture, loader_flags: LoaderFlags = LoaderFlags.DEFAULT
) -> TextureDescription:
    """Validate a loaded DDS file and describe the texture it holds.

    Raises ``DDSError`` for invalid or unsupported contents.
    """
    header = texture.header
    width = header.width
    height = header.height
    depth = header.depth
    array_size = 1
    is_cube_map = False
    mip_count = header.mip_map_count or 1

    if header.has_dx10 and texture.dx10 is not None:
        ext = texture.dx10
        array_size = ext.array_size
        if array_size == 0:
            raise DDSError("DX10 header has an array size of 0")
        fmt = ext.dxgi_format
        if fmt in _PALETTED or bits_per_pixel(fmt) == 0:
            raise _not_supported(f"pixel format {fmt!r}")

        if ext.resource_dimension == ResourceDimension.TEXTURE1D:
            if header.flags & DDS_HEIGHT and height != 1:
                raise DDSError("1D texture with a height other than 1")
            height = depth = 1
        elif ext.resource_dimension == ResourceDimension.TEXTURE2D:
            if ext.misc_flag & RESOURCE_MISC_TEXTURECUBE:
                array_size *= 6
                is_cube_map = True
            depth = 1
        elif ext.resource_dimension == ResourceDimension.TEXTURE3D:
            if not header.flags & DDS_HEADER_FLAGS_VOLUME:
                raise DDSError("3D texture without the volume flag")
            if array_size > 1:
                raise _not_supported("3D texture arrays")
        else:
            raise _not_supported(f"resource dimension {ext.resource_dimension}")
        dimension = ResourceDimension(ext.resource_dimension)
    else:
        fmt = dxgi_format_from_pixel_format(header.pixel_format)
        if fmt == DxgiFormat.UNKNOWN:
            raise _not_supported("legacy pixel format")
        if header.flags & DDS_HEADER_FLAGS_VOLUME:
            dimension = ResourceDimension.TEXTURE3D
        else:
            if header.caps2 & DDS_CUBEMAP:
                if header.caps2 & DDS_CUBEMAP_ALLFACES != DDS_CUBEMAP_ALLFACES:
                    raise _not_supported("cube maps without all six faces")
                array_size = 6
                is_cube_map = True
            depth = 1
            dimension = ResourceDimension.TEXTURE2D

    if mip_count > REQ_MIP_LEVELS:
        raise _not_supported(f"{mip_count} mip levels")

    if dimension == ResourceDimension.TEXTURE1D:
        too_big = (
            array_size > REQ_TEXTURE1D_ARRAY_AXIS_DIMENSION
            or width > REQ_TEXTURE1D_U_DIMENSION
        )
    elif dimension == ResourceDimension.TEXTURE2D:
        limit = REQ_TEXTURECUBE_DIMENSION if is_cube_map else REQ_TEXTURE2D_U_OR_V_DIMENSION
        too_big = (
            array_size > REQ_TEXTURE2D_ARRAY_AXIS_DIMENSION or width > limit or height > limit
        )
    else:
        too_big = (
            array_size > 1
            or width > REQ_TEXTURE3D_U_V_OR_W_DIMENSION
            or height > REQ_TEXTURE3D_U_V_OR_W_DIMENSION
            or depth > REQ_TEXTURE3D_U_V_OR_W_DIMENSION
        )
    if too_big:
        raise _not_supported("texture dimensions exceed the hardware limits")

    if loader_flags & LoaderFlags.FORCE_SRGB:
        fmt = make_srgb(fmt)
    elif loader_flags & LoaderFlags.IGNORE_SRGB:
        fmt = make_linear(fmt)

    return TextureDescription(
        dimension, width, height, depth, mip_count, array_size, fmt, is_cube_map
    )


def layout_subresources(
    width: int,
    height: int,
    depth: int,
    mip_count: int,
    array_size: int,
    fmt: Union[DxgiFormat, int],
    maxsize: int,
    bits: bytes,
) -> SubresourceLayout:
    """Lay out the mips of every array item within ``bits``.

    Mips larger than ``maxsize`` in any direction are skipped, unless
    ``maxsize`` is 0 or there is only one mip. Raises ``DDSError`` when the
    data runs out or nothing is left.
    """
    layout = SubresourceLayout(0, 0, 0, 0)
    total = len(bits)
    offset = 0

    for item in range(array_size):
        w, h, d = width, height, depth
        for _ in range(mip_count):
            info = surface_info(w, h, fmt)
            if info.num_bytes > _UINT32_MAX or info.row_bytes > _UINT32_MAX:
                raise DDSError("surface size overflows 32 bits")

            if mip_count <= 1 or not maxsize or (w <= maxsize and h <= maxsize and d <= maxsize):
                if not layout.width:
                    layout.width, layout.height, layout.depth = w, h, d
                layout.subresources.append(Subresource(offset, info.row_bytes, info.num_bytes))
            elif item == 0:
                layout.skip_mip += 1

            step = info.num_bytes * d
            if offset + step > total:
                raise DDSError("unexpected end of surface data")
            offset += step

            w = max(w >> 1, 1)
            h = max(h >> 1, 1)
            d = max(d >> 1, 1)

    if not layout.subresources:
        raise DDSError("no subresources fit within the size limit")
    return layout