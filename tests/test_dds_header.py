import struct

import pytest

from guifile_toolkit.dds_formats import DxgiFormat, make_fourcc
from guifile_toolkit.dds_header import (
    DDS_ALPHA,
    DDS_BUMPDUDV,
    DDS_FOURCC,
    DDS_LUMINANCE,
    DDS_RGB,
    AlphaMode,
    DDSError,
    DDSHeader,
    DDSTexture,
    DX10Header,
    PixelFormat,
    dxgi_format_from_pixel_format,
    load_dds,
    load_dds_file,
)


def pixel_format_bytes(flags=0, fourcc=0, bits=0, masks=(0, 0, 0, 0), size=32):
    return struct.pack("<8I", size, flags, fourcc, bits, *masks)


def header_bytes(width=16, height=8, mips=1, pf=None, size=124, flags=0, caps2=0):
    pf = pf if pf is not None else pixel_format_bytes(DDS_FOURCC, make_fourcc("DXT1"))
    head = struct.pack("<7I11I", size, flags, height, width, 0, 0, mips, *([0] * 11))
    tail = struct.pack("<5I", 0x1000, caps2, 0, 0, 0)
    return head + pf + tail


def dds_bytes(header=None, dx10=None, payload=b""):
    return b"DDS " + (header if header is not None else header_bytes()) + (dx10 or b"") + payload


def dx10_bytes(fmt=DxgiFormat.BC7_UNORM, dim=3, misc=0, array=1, misc2=0):
    return struct.pack("<5I", int(fmt), dim, misc, array, misc2)


def dx10_header():
    return header_bytes(pf=pixel_format_bytes(DDS_FOURCC, make_fourcc("DX10")))


def test_load_plain_texture():
    payload = bytes(range(32))
    texture = load_dds(dds_bytes(header_bytes(width=16, height=8), payload=payload))
    assert texture.header.width == 16
    assert texture.header.height == 8
    assert texture.dx10 is None
    assert texture.data == payload


def test_load_dx10_texture():
    payload = b"\xaa" * 16
    texture = load_dds(dds_bytes(dx10_header(), dx10_bytes(array=2), payload))
    assert texture.dx10.dxgi_format == DxgiFormat.BC7_UNORM
    assert texture.dx10.array_size == 2
    assert texture.data == payload


def test_bad_magic():
    data = b"XXXX" + header_bytes()
    with pytest.raises(DDSError):
        load_dds(data)


def test_too_short():
    with pytest.raises(DDSError):
        load_dds(b"DDS " + b"\0" * 10)


def test_bad_header_size():
    with pytest.raises(DDSError):
        load_dds(dds_bytes(header_bytes(size=100)))


def test_bad_pixel_format_size():
    with pytest.raises(DDSError):
        load_dds(dds_bytes(header_bytes(pf=pixel_format_bytes(DDS_FOURCC, size=16))))


def test_dx10_header_missing():
    with pytest.raises(DDSError):
        load_dds(dds_bytes(dx10_header(), payload=b"\0" * 8))


def test_pixel_format_parse_short():
    with pytest.raises(DDSError):
        PixelFormat.parse(b"\0" * 8)


def test_header_parse_keeps_fields():
    header = DDSHeader.parse(header_bytes(width=32, height=4, mips=3, caps2=0x200))
    assert (header.width, header.height, header.mip_map_count) == (32, 4, 3)
    assert header.caps2 == 0x200
    assert header.pixel_format.fourcc == make_fourcc("DXT1")


def test_dx10_parse_unknown_format_kept_as_int():
    parsed = DX10Header.parse(struct.pack("<5I", 5000, 3, 0, 1, 0))
    assert parsed.dxgi_format == 5000


@pytest.mark.parametrize(
    "flags, fourcc, bits, masks, expected",
    [
        (DDS_FOURCC, make_fourcc("DXT1"), 0, (0, 0, 0, 0), DxgiFormat.BC1_UNORM),
        (DDS_FOURCC, make_fourcc("DXT5"), 0, (0, 0, 0, 0), DxgiFormat.BC3_UNORM),
        (DDS_FOURCC, make_fourcc("ATI2"), 0, (0, 0, 0, 0), DxgiFormat.BC5_UNORM),
        (DDS_FOURCC, 114, 0, (0, 0, 0, 0), DxgiFormat.R32_FLOAT),
        (DDS_RGB, 0, 32, (0xFF, 0xFF00, 0xFF0000, 0xFF000000), DxgiFormat.R8G8B8A8_UNORM),
        (DDS_RGB, 0, 32, (0xFF0000, 0xFF00, 0xFF, 0), DxgiFormat.B8G8R8X8_UNORM),
        (DDS_RGB, 0, 16, (0xF800, 0x07E0, 0x001F, 0), DxgiFormat.B5G6R5_UNORM),
        (DDS_RGB, 0, 24, (0xFF0000, 0xFF00, 0xFF, 0), DxgiFormat.UNKNOWN),
        (DDS_LUMINANCE, 0, 8, (0xFF, 0, 0, 0), DxgiFormat.R8_UNORM),
        (DDS_ALPHA, 0, 8, (0, 0, 0, 0xFF), DxgiFormat.A8_UNORM),
        (DDS_BUMPDUDV, 0, 16, (0x00FF, 0xFF00, 0, 0), DxgiFormat.R8G8_SNORM),
        (0, 0, 32, (0, 0, 0, 0), DxgiFormat.UNKNOWN),
    ],
)
def test_dxgi_format_mapping(flags, fourcc, bits, masks, expected):
    pf = PixelFormat.parse(pixel_format_bytes(flags, fourcc, bits, masks))
    assert dxgi_format_from_pixel_format(pf) == expected


def test_alpha_mode_premultiplied_dxt2():
    header = header_bytes(pf=pixel_format_bytes(DDS_FOURCC, make_fourcc("DXT2")))
    assert load_dds(dds_bytes(header)).alpha_mode() == AlphaMode.PREMULTIPLIED


def test_alpha_mode_from_dx10():
    texture = load_dds(dds_bytes(dx10_header(), dx10_bytes(misc2=AlphaMode.OPAQUE)))
    assert texture.alpha_mode() == AlphaMode.OPAQUE


def test_alpha_mode_dx10_out_of_range_is_unknown():
    texture = load_dds(dds_bytes(dx10_header(), dx10_bytes(misc2=5)))
    assert texture.alpha_mode() == AlphaMode.UNKNOWN


def test_alpha_mode_plain_is_unknown():
    assert load_dds(dds_bytes()).alpha_mode() == AlphaMode.UNKNOWN


def test_alpha_mode_dx10_without_extension_block():
    header = DDSHeader.parse(dx10_header())
    assert DDSTexture(header, None, b"").alpha_mode() == AlphaMode.UNKNOWN


def test_load_file(tmp_path):
    path = tmp_path / "tex.dds"
    path.write_bytes(dds_bytes(payload=b"\x01\x02"))
    texture = load_dds_file(path)
    assert texture.data == b"\x01\x02"
    assert texture.header.width == 16


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_dds_file(tmp_path / "absent.dds")