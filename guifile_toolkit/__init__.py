"""Binary GUI layout records, DDS texture inspection, and editor menus, tabs and shortcuts."""

__version__ = "0.1.0"

__all__ = [
    "binary_reader",
    "binary_writer",
    "gui_animation",
    "shortcuts",
    "dds_formats",
    "dds_header",
    "dds_texture",
    "menus",
    "editor_tabs",
]