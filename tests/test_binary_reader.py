import io
import struct

import pytest

from guifile_toolkit.binary_reader import BinaryReader


def test_read_single_value():
    reader = BinaryReader.from_bytes(struct.pack("<I", 0x12345678))
    assert reader.read("I") == 0x12345678
    assert reader.tell() == 4


def test_read_multiple_values_returns_tuple():
    data = struct.pack("<HHf", 7, 9, 1.5)
    reader = BinaryReader.from_bytes(data)
    assert reader.read("HHf") == (7, 9, 1.5)


def test_explicit_byte_order_is_respected():
    reader = BinaryReader.from_bytes(struct.pack(">I", 0xAABBCCDD))
    assert reader.read(">I") == 0xAABBCCDD


def test_read_null_terminated_strings():
    data = b"abc\0def\0"
    reader = BinaryReader.from_bytes(data)
    assert reader.read_string() == "abc"
    assert reader.read_string() == "def"
    assert reader.tell() == len(data)
    assert reader.eof()


def test_read_null_terminated_string_without_terminator():
    data = b"tail"
    reader = BinaryReader.from_bytes(data)
    assert reader.read_string() == "tail"
    assert reader.eof()


def test_read_long_null_terminated_string_spans_chunks():
    text = "x" * 200
    reader = BinaryReader.from_bytes(text.encode() + b"\0" + struct.pack("<H", 5))
    assert reader.read_string() == text
    assert reader.read("H") == 5


def test_read_fixed_length_string_stops_at_nul():
    reader = BinaryReader.from_bytes(b"ab\0\0xyz")
    assert reader.read_string(4) == "ab"
    assert reader.tell() == 4


def test_read_skip_advances():
    data = struct.pack("<II", 3, 0) + struct.pack("<H", 11)
    reader = BinaryReader.from_bytes(data)
    assert reader.read_skip("I", 4) == 3
    assert reader.read("H") == 11


def test_abs_offset_read_restores_position():
    data = struct.pack("<III", 1, 2, 3)
    reader = BinaryReader.from_bytes(data)
    reader.seek_absolute(4)
    assert reader.abs_offset_read("I", 8) == 3
    assert reader.tell() == 4


def test_abs_offset_read_without_restore():
    data = struct.pack("<III", 1, 2, 3)
    reader = BinaryReader.from_bytes(data)
    assert reader.abs_offset_read("I", 4, restore_position=False) == 2
    assert reader.tell() == 8


def test_rel_offset_read():
    data = struct.pack("<III", 1, 2, 3)
    reader = BinaryReader.from_bytes(data)
    reader.seek_absolute(4)
    assert reader.rel_offset_read("I", 4) == 3
    assert reader.tell() == 4


def test_offset_string_reads():
    data = struct.pack("<I", 0) + b"name\0other\0"
    reader = BinaryReader.from_bytes(data)
    assert reader.abs_offset_read_string(4) == "name"
    assert reader.tell() == 0
    assert reader.rel_offset_read_string(9) == "other"
    assert reader.tell() == 0
    assert reader.abs_offset_read_string(4, 2) == "na"
    assert reader.rel_offset_read_string(9, 3, restore_position=False) == "oth"
    assert reader.tell() == 12


def test_read_past_end_raises():
    reader = BinaryReader.from_bytes(b"\x01\x02")
    with pytest.raises(EOFError):
        reader.read("I")


def test_read_bytes_and_size():
    data = bytes(range(10))
    reader = BinaryReader.from_bytes(data)
    assert reader.size() == len(data)
    assert reader.read_bytes(3) == data[:3]
    reader.seek_relative(2)
    assert reader.read_bytes(5) == data[5:]
    assert reader.eof()


def test_reads_from_file(tmp_path):
    path = tmp_path / "sample.bin"
    path.write_bytes(struct.pack("<H", 42) + b"hi\0")
    with BinaryReader(path) as reader:
        assert reader.size() == 5
        assert reader.read("H") == 42
        assert reader.read_string() == "hi"


def test_stream_source_keeps_current_position():
    stream = io.BytesIO(struct.pack("<HH", 1, 2))
    stream.seek(2)
    reader = BinaryReader(stream)
    assert reader.read("H") == 2
    reader.close()
    assert not stream.closed


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        BinaryReader(tmp_path / "missing.bin")