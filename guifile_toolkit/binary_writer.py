"""Little-endian binary writing to files or streams."""

from __future__ import annotations

import io
import os
from typing import Any, BinaryIO, Iterable, Union

from guifile_toolkit.binary_reader import _ENCODING, _ERRORS, _compile

END = -1
BEGIN = 0


class BinaryWriter:
    """Writes typed values and strings to a seekable binary target.

    A path is opened for writing and truncated. Formats are ``struct``
    format strings, little-endian unless they name a byte order.
    """

    def __init__(self, target: Union[str, os.PathLike, BinaryIO]) -> None:
        if isinstance(target, (str, os.PathLike)):
            self._stream: BinaryIO = open(target, "wb")
            self._owned = True
        else:
            self._stream = target
            self._owned = False

    def write(self, fmt: str, value: Any) -> None:
        """Write a single value."""
        self._stream.write(_compile(fmt).pack(value))

    def write_n(self, fmt: str, value: Any, n: int) -> None:
        """Write the same value ``n`` times."""
        self._stream.write(_compile(fmt).pack(value) * n)

    def write_tuple(self, fmt: str, values: Iterable[Any]) -> None:
        """Write several values, one format code each."""
        self._stream.write(_compile(fmt).pack(*values))

    def write_string(self, value: str, null_terminator: bool = True) -> None:
        """Write a string, followed by a NUL byte unless told otherwise."""
        data = value.encode(_ENCODING, _ERRORS)
        if null_terminator:
            data += b"\0"
        self._stream.write(data)

    def write_bytes(self, data: bytes) -> None:
        self._stream.write(bytes(data))

    def pad_to(self, alignment: int) -> None:
        """Write zero bytes until the position is a multiple of ``alignment``."""
        position = self.tell()
        if alignment <= 0 or position % alignment == 0:
            return
        self.write_n("B", 0, alignment - position % alignment)

    def seek_absolute(self, offset: int) -> None:
        """Seek from the start; a negative offset counts from the end, -1 being the end."""
        if offset < 0:
            self._stream.seek(offset + 1, io.SEEK_END)
        else:
            self._stream.seek(offset, io.SEEK_SET)

    def seek_relative(self, offset: int) -> None:
        self._stream.seek(offset, io.SEEK_CUR)

    def tell(self) -> int:
        return self._stream.tell()

    def size(self) -> int:
        """Size of what has been written so far, keeping the position."""
        position = self.tell()
        self.seek_absolute(END)
        size = self.tell()
        self.seek_absolute(position)
        return size

    def close(self) -> None:
        if self._owned:
            self._stream.close()

    def __enter__(self) -> "BinaryWriter":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()