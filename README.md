# guifile_toolkit

This package works with the binary GUI layout files of a game engine and
with the DDS textures those files reference. It uses only the standard
library.

## What is in it

- `guifile_toolkit.binary_reader.BinaryReader` reads little-endian values
  from a file path, a binary stream, or bytes passed to
  `BinaryReader.from_bytes`. Formats are `struct` format strings. It can
  do the following:
  - `read` and `read_skip`.
  - `read_string`, which reads a fixed length or up to the next NUL byte.
  - `read_bytes`, which raises `EOFError` when the data is too short.
  - `abs_offset_read`, `rel_offset_read`, `abs_offset_read_string` and
    `rel_offset_read_string`, which restore the position afterwards by
    default.
  - `seek_absolute`, `seek_relative`, `tell`, `size` and `eof`.
- `guifile_toolkit.binary_writer.BinaryWriter` writes to a path, which it
  truncates, or to a binary stream. It provides these methods:
  - `write`, `write_n`, `write_tuple`, `write_string` (NUL-terminated by
    default) and `write_bytes`.
  - `pad_to`, which writes zero bytes up to the next alignment boundary.
  - `seek_absolute`, where a negative offset counts from the end and `-1`
    means the end.
  - `seek_relative`, `tell` and `size`.

  Both classes are context managers. They close only the streams they
  opened themselves.
- `guifile_toolkit.gui_animation.GUIAnimation` is one animation record.
  - `read` and `write` use the MHW layout, which has 64-bit name and
    sequence fields. `read_mhgu` and `write_mhgu` use the MHGU layout,
    which has 32-bit fields.
  - Names are read from the text section at `text_offset`. When writing,
    names go through any object with an `append_no_duplicate(str) -> int`
    method.
  - `preview(index)` gives a rich-text label.
- `guifile_toolkit.dds_formats` covers DXGI pixel formats:
  - `DxgiFormat`.
  - `bits_per_pixel`.
  - `surface_info`, which returns a `SurfaceInfo` with `num_bytes`,
    `row_bytes` and `num_rows`. It raises `ValueError` for formats of
    unknown size.
  - `make_srgb`, `make_linear` and `make_fourcc`.
- `guifile_toolkit.dds_header` parses and validates DDS files:
  - `load_dds` and `load_dds_file`, which return a `DDSTexture` that holds
    the headers and the surface bytes.
  - The header types `DDSHeader`, `PixelFormat` and `DX10Header`.
  - `dxgi_format_from_pixel_format` for legacy headers.
  - `DDSTexture.alpha_mode()`, which returns an `AlphaMode`.

  Malformed data raises `DDSError`.
- `guifile_toolkit.dds_texture` has two functions:
  - `describe_texture` checks a loaded texture against the hardware size
    limits. It returns a `TextureDescription` with its
    `ResourceDimension`, size, mip count, array size and format, and
    applies the sRGB adjustments in `LoaderFlags`.
  - `layout_subresources` lists the byte offset and pitches of every mip
    of every array item, as a `SubresourceLayout` of `Subresource`
    entries. It skips mips larger than a size limit.
- `guifile_toolkit.menus` holds a `MenuBar` of `Menu`s and `MenuItem`s.
  `activate` runs an item by menu and item name, and raises `KeyError` if
  there is no such item.
- `guifile_toolkit.editor_tabs.EditorTabs` keeps a list of open documents
  and tracks which one is active. You can `open`, `close` and `select`
  tabs and get the `active` document.
- `guifile_toolkit.shortcuts.action_for(key, ctrl, shift, alt)` maps a
  key combination to an `Action`: save, save as, open, preview or quit.

## What it does not do

The package draws nothing. It has no window, no editor screen, no popup
dialogs and no command to run. It does not load or save a complete GUI
file: animation records are the only record type it can read and write.
It does not create GPU textures. It only describes how DDS data would be
laid out.

## Install

```
pip install .
```

## Examples

Inspect a DDS file:

```python
from guifile_toolkit.dds_header import load_dds_file
from guifile_toolkit.dds_texture import describe_texture

texture = load_dds_file("icon.dds")
print(texture.alpha_mode())
print(describe_texture(texture))
```

Work out the size of a surface:

```python
from guifile_toolkit.dds_formats import DxgiFormat, surface_info

info = surface_info(256, 256, DxgiFormat.BC1_UNORM)
print(info.num_bytes, info.row_bytes, info.num_rows)
```

Read an animation record from a GUI file:

```python
from guifile_toolkit.binary_reader import BinaryReader
from guifile_toolkit.gui_animation import GUIAnimation

with BinaryReader("menu.gui") as reader:
    reader.seek_absolute(animation_offset)
    animation = GUIAnimation.read(reader, text_offset)
    print(animation.preview(0))
```

Find the action bound to a key combination:

```python
from guifile_toolkit.shortcuts import action_for

action = action_for("S", ctrl=True, shift=True)  # Action.SAVE_AS
```

## Tests

```
pip install .[test]
pytest
```