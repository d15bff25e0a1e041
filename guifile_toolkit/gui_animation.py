"""Animation entries of a GUI file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from guifile_toolkit.binary_reader import BinaryReader
from guifile_toolkit.binary_writer import BinaryWriter

NO_INDEX = 0xFFFFFFFF


class StringTable(Protocol):
    """A string pool that returns the offset of each stored string."""

    def append_no_duplicate(self, value: str) -> int: ...


@dataclass
class GUIAnimation:
    """One animation record; ``SIZE`` is its length in the MHW layout."""

    id: int
    object_num: int
    sequence_num: int
    drawable_object_num: int
    animate_param_num: int
    root_object_index: int
    name: str
    sequence_index: int
    index: int = 0

    SIZE = 0x20

    @classmethod
    def read(cls, reader: BinaryReader, text_offset: int) -> "GUIAnimation":
        """Read a record in the MHW layout, with 64-bit name and sequence fields."""
        id_, object_num, sequence_num, drawable, animate, root = reader.read("IHHHHI")
        name = reader.abs_offset_read_string(text_offset + reader.read_skip("I", 4))
        sequence_index = reader.read_skip("I", 4)
        return cls(id_, object_num, sequence_num, drawable, animate, root, name, sequence_index)

    @classmethod
    def read_mhgu(cls, reader: BinaryReader, text_offset: int) -> "GUIAnimation":
        """Read a record in the MHGU layout, with 32-bit name and sequence fields."""
        id_, object_num, sequence_num, drawable, animate, root = reader.read("IHHHHI")
        name = reader.abs_offset_read_string(text_offset + reader.read("I"))
        sequence_index = reader.read("I")
        return cls(id_, object_num, sequence_num, drawable, animate, root, name, sequence_index)

    def _write_common(self, writer: BinaryWriter) -> None:
        writer.write_tuple(
            "IHHHHI",
            (
                self.id,
                self.object_num,
                self.sequence_num,
                self.drawable_object_num,
                self.animate_param_num,
                self.root_object_index,
            ),
        )

    def write(self, writer: BinaryWriter, strings: StringTable) -> None:
        """Write the record in the MHW layout."""
        self._write_common(writer)
        writer.write("Q", strings.append_no_duplicate(self.name))
        writer.write("Q", self.sequence_index)

    def write_mhgu(self, writer: BinaryWriter, strings: StringTable) -> None:
        """Write the record in the MHGU layout."""
        self._write_common(writer)
        writer.write("I", strings.append_no_duplicate(self.name) & 0xFFFFFFFF)
        writer.write("I", self.sequence_index)

    def preview(self, index: int | None = None) -> str:
        """Rich-text label for display, optionally prefixed with a list index."""
        label = f"Animation<<C FFA3D7B8>{self.id}</C>> <C FFFEDC9C>{self.name}</C>"
        if index is None or index == NO_INDEX:
            return label
        return f"[<C FFA3D7B8>{index}</C>] {label}"