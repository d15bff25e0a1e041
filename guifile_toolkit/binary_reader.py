"""Little-endian binary reading from files or in-memory buffers."""

from __future__ import annotations

import io
import os
import struct
from functools import lru_cache
from typing import Any, BinaryIO, Union

_BYTE_ORDER_PREFIXES = "<>!=@"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_CHUNK = 64


@lru_cache(maxsize=None)
def _compile(fmt: str) -> struct.Struct:
    if not fmt or fmt[0] not in _BYTE_ORDER_PREFIXES:
        fmt = "<" + fmt
    return struct.Struct(fmt)


def _decode(data: bytes) -> str:
    return data.decode(_ENCODING, _ERRORS)


class BinaryReader:
    """Reads typed values and strings from a seekable binary source.

    Formats are ``struct`` format strings; little-endian is assumed unless
    the format names a byte order itself.
    """

    def __init__(self, source: Union[str, os.PathLike, BinaryIO]) -> None:
        if isinstance(source, (str, os.PathLike)):
            self._stream: BinaryIO = open(source, "rb")
            self._owned = True
        else:
            self._stream = source
            self._owned = False
        start = self._stream.tell()
        self._size = self._stream.seek(0, io.SEEK_END)
        self._stream.seek(start)

    @classmethod
    def from_bytes(cls, data: bytes) -> "BinaryReader":
        """Create a reader over an in-memory byte string."""
        reader = cls(io.BytesIO(bytes(data)))
        reader._owned = True
        return reader

    def read(self, fmt: str) -> Any:
        """Read one value, or a tuple when the format holds several."""
        packer = _compile(fmt)
        values = packer.unpack(self.read_bytes(packer.size))
        return values[0] if len(values) == 1 else values

    def read_skip(self, fmt: str, skip_after: int) -> Any:
        """Read a value, then move ``skip_after`` bytes further."""
        value = self.read(fmt)
        self.seek_relative(skip_after)
        return value

    def read_string(self, length: int | None = None) -> str:
        """Read a string of ``length`` bytes, or up to the next NUL byte.

        A fixed-length string ends at its first NUL byte, if any.
        """
        if length is not None:
            data = self.read_bytes(length)
            return _decode(data.split(b"\0", 1)[0])

        collected = bytearray()
        while True:
            block = self._stream.read(_CHUNK)
            if not block:
                break
            nul = block.find(0)
            if nul >= 0:
                collected += block[:nul]
                self._stream.seek(nul + 1 - len(block), io.SEEK_CUR)
                break
            collected += block
        return _decode(bytes(collected))

    def read_bytes(self, size: int) -> bytes:
        """Read exactly ``size`` bytes."""
        data = self._stream.read(size)
        if len(data) < size:
            raise EOFError(
                f"wanted {size} bytes at offset {self.tell() - len(data)}, got {len(data)}"
            )
        return data

    def abs_offset_read(self, fmt: str, offset: int, restore_position: bool = True) -> Any:
        """Read a value at an absolute offset."""
        position = self.tell()
        self.seek_absolute(offset)
        value = self.read(fmt)
        if restore_position:
            self.seek_absolute(position)
        return value

    def rel_offset_read(self, fmt: str, offset: int, restore_position: bool = True) -> Any:
        """Read a value at an offset relative to the current position."""
        position = self.tell()
        self.seek_relative(offset)
        value = self.read(fmt)
        if restore_position:
            self.seek_absolute(position)
        return value

    def abs_offset_read_string(
        self, offset: int, length: int | None = None, restore_position: bool = True
    ) -> str:
        """Read a string at an absolute offset."""
        position = self.tell()
        self.seek_absolute(offset)
        value = self.read_string(length)
        if restore_position:
            self.seek_absolute(position)
        return value

    def rel_offset_read_string(
        self, offset: int, length: int | None = None, restore_position: bool = True
    ) -> str:
        """Read a string at an offset relative to the current position."""
        position = self.tell()
        self.seek_relative(offset)
        value = self.read_string(length)
        if restore_position:
            self.seek_absolute(position)
        return value

    def seek_absolute(self, offset: int) -> None:
        self._stream.seek(offset, io.SEEK_SET)

    def seek_relative(self, offset: int) -> None:
        self._stream.seek(offset, io.SEEK_CUR)

    def tell(self) -> int:
        return self._stream.tell()

    def size(self) -> int:
        """Total size of the source in bytes."""
        return self._size

    def eof(self) -> bool:
        """Whether the position is at or past the end of the source."""
        return self.tell() >= self._size

    def close(self) -> None:
        if self._owned:
            self._stream.close()

    def __enter__(self) -> "BinaryReader":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()