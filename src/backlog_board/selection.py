"""Cursor over an ordered sequence with an optional selection."""

from typing import Generic, Iterable, Iterator, Optional, TypeVar


T = TypeVar("T")


class SelectionList(Generic[T]):
    """Ordered items plus a cursor that is either ``None`` or a valid index.

    Movement wraps around at both ends. On an empty sequence every
    operation is a no-op and the cursor stays ``None``.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)
        self._index: Optional[int] = None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def index(self) -> Optional[int]:
        """Current cursor position, or ``None`` when nothing is selected."""
        return self._index

    def replace(self, items: Iterable[T]) -> None:
        """Install a new sequence and clear the selection."""
        self._items = tuple(items)
        self._index = None

    def next(self) -> None:
        """Select the following item, wrapping from the last to the first."""
        if not self._items:
            return
        if self._index is None:
            self._index = 0
        else:
            self._index = (self._index + 1) % len(self._items)

    def previous(self) -> None:
        """Select the preceding item, wrapping from the first to the last.

        With no current selection the first item is selected.
        """
        if not self._items:
            return
        if self._index is None:
            self._index = 0
        else:
            self._index = (self._index - 1) % len(self._items)

    def unselect(self) -> None:
        self._index = None

    def selected(self) -> Optional[T]:
        if self._index is None:
            return None
        return self._items[self._index]
