"""The set of open documents shown as tabs, one of which is active."""

from __future__ import annotations

from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class EditorTabs(Generic[T]):
    """Open documents in tab order, tracking which one is active.

    Opening a document makes it active. Closing the active tab makes the
    first remaining tab active; closing a tab before the active one keeps
    the same document active.
    """

    def __init__(self) -> None:
        self._documents: list[T] = []
        self._active: Optional[int] = None

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._documents):
            raise IndexError(f"no tab at index {index}")
        return index

    def open(self, document: T) -> int:
        """Add a document as a new tab, make it active and return its index."""
        self._documents.append(document)
        self._active = len(self._documents) - 1
        return self._active

    def close(self, index: int) -> T:
        """Close the tab at ``index`` and return its document.

        Raises ``IndexError`` when there is no such tab.
        """
        self._check(index)
        document = self._documents.pop(index)
        if self._active == index:
            self._active = 0 if self._documents else None
        elif self._active is not None and self._active > index:
            self._active -= 1
        return document

    def select(self, index: Optional[int]) -> None:
        """Make the tab at ``index`` active, or none when ``index`` is None.

        Raises ``IndexError`` when there is no such tab.
        """
        self._active = None if index is None else self._check(index)

    @property
    def active_index(self) -> Optional[int]:
        """Index of the active tab, or None."""
        return self._active

    def active(self) -> Optional[T]:
        """The active document, or None when no tab is active."""
        if self._active is None or not self._documents:
            return None
        return self._documents[self._active]

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[T]:
        return iter(self._documents)