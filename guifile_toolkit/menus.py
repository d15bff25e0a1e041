"""The editor's main menu bar: named menus holding actionable items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator


@dataclass(frozen=True)
class MenuItem:
    """A menu entry: its label, shortcut text and the action it runs."""

    name: str
    shortcut: str
    callback: Callable[[Any], None]


@dataclass
class Menu:
    """A named menu and its items, in insertion order."""

    name: str
    items: list[MenuItem] = field(default_factory=list)


class MenuBar:
    """Menus in the order they were first added."""

    def __init__(self) -> None:
        self._menus: list[Menu] = []

    def add_menu_item(self, menu: str, item: MenuItem) -> None:
        """Append an item to the named menu, creating the menu if needed."""
        for existing in self._menus:
            if existing.name == menu:
                existing.items.append(item)
                return
        self._menus.append(Menu(menu, [item]))

    def activate(self, menu: str, name: str, editor: Any = None) -> None:
        """Run the named item of the named menu with ``editor`` as argument.

        Raises ``KeyError`` when no such item exists.
        """
        for existing in self._menus:
            if existing.name != menu:
                continue
            for item in existing.items:
                if item.name == name:
                    item.callback(editor)
                    return
        raise KeyError(f"no menu item {name!r} in menu {menu!r}")

    def __iter__(self) -> Iterator[Menu]:
        return iter(self._menus)