"""Parsing and validation of DDS file headers."""

from __future__ import annotations

import enum
import os
import struct
from dataclasses import dataclass
from typing import Optional, Union

from guifile_toolkit.dds_formats import DxgiFormat, make_fourcc

DDS_MAGIC = 0x20534444  # "DDS "

DDS_FOURCC = 0x00000004
DDS_RGB = 0x00000040
DDS_LUMINANCE = 0x00020000
DDS_ALPHA = 0x00000002
DDS_BUMPDUDV = 0x00080000

DDS_HEADER_FLAGS_VOLUME = 0x00800000
DDS_HEIGHT = 0x00000002

DDS_CUBEMAP_POSITIVEX = 0x00000600
DDS_CUBEMAP_NEGATIVEX = 0x00000A00
DDS_CUBEMAP_POSITIVEY = 0x00001200
DDS_CUBEMAP_NEGATIVEY = 0x00002200
DDS_CUBEMAP_POSITIVEZ = 0x00004200
DDS_CUBEMAP_NEGATIVEZ = 0x00008200
DDS_CUBEMAP_ALLFACES = (
    DDS_CUBEMAP_POSITIVEX
    | DDS_CUBEMAP_NEGATIVEX
    | DDS_CUBEMAP_POSITIVEY
    | DDS_CUBEMAP_NEGATIVEY
    | DDS_CUBEMAP_POSITIVEZ
    | DDS_CUBEMAP_NEGATIVEZ
)
DDS_CUBEMAP = 0x00000200

DDS_MISC_FLAGS2_ALPHA_MODE_MASK = 0x7

_UINT32_MAX = 0xFFFFFFFF
_MAGIC_SIZE = 4

FOURCC_DX10 = make_fourcc("DX10")


class DDSError(ValueError):
    """Raised when data is not a valid DDS file."""


class AlphaMode(enum.IntEnum):
    """How the alpha channel of a texture is to be interpreted."""

    UNKNOWN = 0
    STRAIGHT = 1
    PREMULTIPLIED = 2
    OPAQUE = 3
    CUSTOM = 4


def _unpack(layout: struct.Struct, data: bytes, what: str) -> tuple:
    if len(data) < layout.size:
        raise DDSError(f"{what} needs {layout.size} bytes, got {len(data)}")
    return layout.unpack_from(data)


@dataclass(frozen=True)
class PixelFormat:
    """The DDS_PIXELFORMAT block of a DDS header."""

    size: int
    flags: int
    fourcc: int
    rgb_bit_count: int
    r_bit_mask: int
    g_bit_mask: int
    b_bit_mask: int
    a_bit_mask: int

    SIZE = 32
    _LAYOUT = struct.Struct("<8I")

    @classmethod
    def parse(cls, data: bytes) -> "PixelFormat":
        return cls(*_unpack(cls._LAYOUT, data, "pixel format"))

    def has_masks(self, r: int, g: int, b: int, a: int) -> bool:
        return (self.r_bit_mask, self.g_bit_mask, self.b_bit_mask, self.a_bit_mask) == (r, g, b, a)


@dataclass(frozen=True)
class DDSHeader:
    """The DDS_HEADER block that follows the magic number."""

    size: int
    flags: int
    height: int
    width: int
    pitch_or_linear_size: int
    depth: int
    mip_map_count: int
    reserved1: tuple
    pixel_format: PixelFormat
    caps: int
    caps2: int
    caps3: int
    caps4: int
    reserved2: int

    SIZE = 124
    _HEAD = struct.Struct("<7I11I")
    _TAIL = struct.Struct("<5I")

    @classmethod
    def parse(cls, data: bytes) -> "DDSHeader":
        if len(data) < cls.SIZE:
            raise DDSError(f"header needs {cls.SIZE} bytes, got {len(data)}")
        head = cls._HEAD.unpack_from(data)
        pixel_format = PixelFormat.parse(data[cls._HEAD.size:cls._HEAD.size + PixelFormat.SIZE])
        tail = cls._TAIL.unpack_from(data, cls._HEAD.size + PixelFormat.SIZE)
        return cls(*head[:7], tuple(head[7:]), pixel_format, *tail)

    @property
    def has_dx10(self) -> bool:
        return bool(self.pixel_format.flags & DDS_FOURCC) and self.pixel_format.fourcc == FOURCC_DX10


@dataclass(frozen=True)
class DX10Header:
    """The DDS_HEADER_DXT10 extension block."""

    dxgi_format: Union[DxgiFormat, int]
    resource_dimension: int
    misc_flag: int
    array_size: int
    misc_flags2: int

    SIZE = 20
    _LAYOUT = struct.Struct("<5I")

    @classmethod
    def parse(cls, data: bytes) -> "DX10Header":
        fmt, *rest = _unpack(cls._LAYOUT, data, "DX10 header")
        try:
            fmt = DxgiFormat(fmt)
        except ValueError:
            pass
        return cls(fmt, *rest)


@dataclass(frozen=True)
class DDSTexture:
    """A validated DDS file: its headers and the surface bytes after them."""

    header: DDSHeader
    dx10: Optional[DX10Header]
    data: bytes

    def alpha_mode(self) -> AlphaMode:
        """The alpha mode the headers declare."""
        pf = self.header.pixel_format
        if pf.flags & DDS_FOURCC:
            if pf.fourcc == FOURCC_DX10:
                if self.dx10 is not None:
                    mode = self.dx10.misc_flags2 & DDS_MISC_FLAGS2_ALPHA_MODE_MASK
                    if mode in (
                        AlphaMode.STRAIGHT,
                        AlphaMode.PREMULTIPLIED,
                        AlphaMode.OPAQUE,
                        AlphaMode.CUSTOM,
                    ):
                        return AlphaMode(mode)
            elif pf.fourcc in (make_fourcc("DXT2"), make_fourcc("DXT4")):
                return AlphaMode.PREMULTIPLIED
        return AlphaMode.UNKNOWN


_FOURCC_FORMATS: dict[int, DxgiFormat] = {
    make_fourcc("DXT1"): DxgiFormat.BC1_UNORM,
    make_fourcc("DXT3"): DxgiFormat.BC2_UNORM,
    make_fourcc("DXT5"): DxgiFormat.BC3_UNORM,
    make_fourcc("DXT2"): DxgiFormat.BC2_UNORM,
    make_fourcc("DXT4"): DxgiFormat.BC3_UNORM,
    make_fourcc("ATI1"): DxgiFormat.BC4_UNORM,
    make_fourcc("BC4U"): DxgiFormat.BC4_UNORM,
    make_fourcc("BC4S"): DxgiFormat.BC4_SNORM,
    make_fourcc("ATI2"): DxgiFormat.BC5_UNORM,
    make_fourcc("BC5U"): DxgiFormat.BC5_UNORM,
    make_fourcc("BC5S"): DxgiFormat.BC5_SNORM,
    make_fourcc("RGBG"): DxgiFormat.R8G8_B8G8_UNORM,
    make_fourcc("GRGB"): DxgiFormat.G8R8_G8B8_UNORM,
    make_fourcc("YUY2"): DxgiFormat.YUY2,
    # Legacy D3DFORMAT values stored in the fourCC field.
    36: DxgiFormat.R16G16B16A16_UNORM,
    110: DxgiFormat.R16G16B16A16_SNORM,
    111: DxgiFormat.R16_FLOAT,
    112: DxgiFormat.R16G16_FLOAT,
    113: DxgiFormat.R16G16B16A16_FLOAT,
    114: DxgiFormat.R32_FLOAT,
    115: DxgiFormat.R32G32_FLOAT,
    116: DxgiFormat.R32G32B32A32_FLOAT,
}

_RGB_FORMATS: dict[int, list[tuple[tuple[int, int, int, int], DxgiFormat]]] = {
    32: [
        ((0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000), DxgiFormat.R8G8B8A8_UNORM),
        ((0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000), DxgiFormat.B8G8R8A8_UNORM),
        ((0x00FF0000, 0x0000FF00, 0x000000FF, 0), DxgiFormat.B8G8R8X8_UNORM),
        # Masks swapped the way most writers store 10:10:10:2 data.
        ((0x3FF00000, 0x000FFC00, 0x000003FF, 0xC0000000), DxgiFormat.R10G10B10A2_UNORM),
        ((0x0000FFFF, 0xFFFF0000, 0, 0), DxgiFormat.R16G16_UNORM),
        ((0xFFFFFFFF, 0, 0, 0), DxgiFormat.R32_FLOAT),
    ],
    16: [
        ((0x7C00, 0x03E0, 0x001F, 0x8000), DxgiFormat.B5G5R5A1_UNORM),
        ((0xF800, 0x07E0, 0x001F, 0), DxgiFormat.B5G6R5_UNORM),
        ((0x0F00, 0x00F0, 0x000F, 0xF000), DxgiFormat.B4G4R4A4_UNORM),
        ((0x00FF, 0, 0, 0xFF00), DxgiFormat.R8G8_UNORM),
        ((0xFFFF, 0, 0, 0), DxgiFormat.R16_UNORM),
    ],
    8: [
        ((0xFF, 0, 0, 0), DxgiFormat.R8_UNORM),
    ],
}

_LUMINANCE_FORMATS: dict[int, list[tuple[tuple[int, int, int, int], DxgiFormat]]] = {
    16: [
        ((0xFFFF, 0, 0, 0), DxgiFormat.R16_UNORM),
        ((0x00FF, 0, 0, 0xFF00), DxgiFormat.R8G8_UNORM),
    ],
    8: [
        ((0xFF, 0, 0, 0), DxgiFormat.R8_UNORM),
        ((0x00FF, 0, 0, 0xFF00), DxgiFormat.R8G8_UNORM),
    ],
}

_BUMP_FORMATS: dict[int, list[tuple[tuple[int, int, int, int], DxgiFormat]]] = {
    32: [
        ((0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000), DxgiFormat.R8G8B8A8_SNORM),
        ((0x0000FFFF, 0xFFFF0000, 0, 0), DxgiFormat.R16G16_SNORM),
    ],
    16: [
        ((0x00FF, 0xFF00, 0, 0), DxgiFormat.R8G8_SNORM),
    ],
}


def _match_masks(pf: PixelFormat, table: dict) -> DxgiFormat:
    for masks, fmt in table.get(pf.rgb_bit_count, ()):
        if pf.has_masks(*masks):
            return fmt
    return DxgiFormat.UNKNOWN


def dxgi_format_from_pixel_format(pixel_format: PixelFormat) -> DxgiFormat:
    """Map a legacy pixel format block to a DXGI format, or UNKNOWN."""
    flags = pixel_format.flags
    if flags & DDS_RGB:
        return _match_masks(pixel_format, _RGB_FORMATS)
    if flags & DDS_LUMINANCE:
        return _match_masks(pixel_format, _LUMINANCE_FORMATS)
    if flags & DDS_ALPHA:
        return DxgiFormat.A8_UNORM if pixel_format.rgb_bit_count == 8 else DxgiFormat.UNKNOWN
    if flags & DDS_BUMPDUDV:
        return _match_masks(pixel_format, _BUMP_FORMATS)
    if flags & DDS_FOURCC:
        return _FOURCC_FORMATS.get(pixel_format.fourcc, DxgiFormat.UNKNOWN)
    return DxgiFormat.UNKNOWN


def load_dds(data: bytes) -> DDSTexture:
    """Validate DDS file contents and split them into headers and surface bytes."""
    data = bytes(data)
    if len(data) > _UINT32_MAX:
        raise DDSError("DDS data is too large")
    if len(data) < _MAGIC_SIZE + DDSHeader.SIZE:
        raise DDSError("DDS data is too short to hold a header")

    if int.from_bytes(data[:_MAGIC_SIZE], "little") != DDS_MAGIC:
        raise DDSError("missing DDS magic number")

    header = DDSHeader.parse(data[_MAGIC_SIZE:_MAGIC_SIZE + DDSHeader.SIZE])
    if header.size != DDSHeader.SIZE or header.pixel_format.size != PixelFormat.SIZE:
        raise DDSError("DDS header has an invalid size field")

    offset = _MAGIC_SIZE + DDSHeader.SIZE
    dx10 = None
    if header.has_dx10:
        if len(data) < offset + DX10Header.SIZE:
            raise DDSError("DDS data is too short to hold the DX10 header")
        dx10 = DX10Header.parse(data[offset:offset + DX10Header.SIZE])
        offset += DX10Header.SIZE

    return DDSTexture(header, dx10, data[offset:])


def load_dds_file(path: Union[str, os.PathLike]) -> DDSTexture:
    """Read and validate a DDS file from disk."""
    with open(path, "rb") as stream:
        return load_dds(stream.read())