"""Keyboard shortcuts of the editor."""

from __future__ import annotations

import enum


class Action(enum.Enum):
    """Editor commands reachable by keyboard."""

    SAVE = "save"
    SAVE_AS = "save_as"
    OPEN = "open"
    PREVIEW = "preview"
    QUIT = "quit"


def action_for(
    key: str, ctrl: bool = False, shift: bool = False, alt: bool = False
) -> Action | None:
    """Return the action a key press with the given modifiers triggers, if any."""
    key = key.upper()
    if ctrl:
        if key == "S":
            return Action.SAVE_AS if shift else Action.SAVE
        if key == "O":
            return Action.OPEN
        if key == "P" and shift:
            return Action.PREVIEW
    if alt and key == "F4":
        return Action.QUIT
    return None