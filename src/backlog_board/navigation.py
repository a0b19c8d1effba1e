"""Keyboard input to store operations."""

from enum import Enum
from typing import Optional

from backlog_board.store import IssueStore


class InputSymbol(str, Enum):
    """Discrete navigation inputs."""

    QUIT = "quit"
    CLEAR_SELECTION = "clear-selection"
    MOVE_DOWN = "move-down"
    MOVE_UP = "move-up"


KEYMAP: dict[str, InputSymbol] = {
    "q": InputSymbol.QUIT,
    "left": InputSymbol.CLEAR_SELECTION,
    "escape": InputSymbol.CLEAR_SELECTION,
    "j": InputSymbol.MOVE_DOWN,
    "down": InputSymbol.MOVE_DOWN,
    "k": InputSymbol.MOVE_UP,
    "up": InputSymbol.MOVE_UP,
}


def symbol_for_key(key: str) -> Optional[InputSymbol]:
    """Map a key name to its symbol; unknown keys map to ``None``."""
    return KEYMAP.get(key)


class NavigationController:
    """Applies input symbols to an ``IssueStore``.

    Every cursor move is followed by a comment load for the newly selected
    issue, whichever direction it moved in. The load runs synchronously so
    no further input is handled until it settles.
    """

    def __init__(self, store: IssueStore) -> None:
        self.store = store

    def handle(self, symbol: InputSymbol) -> bool:
        """Apply ``symbol``. Returns ``False`` when the caller should quit."""
        selection = self.store.selection

        if symbol is InputSymbol.QUIT:
            return False
        if symbol is InputSymbol.CLEAR_SELECTION:
            selection.unselect()
        elif symbol is InputSymbol.MOVE_DOWN:
            selection.next()
            self._load_selected()
        elif symbol is InputSymbol.MOVE_UP:
            selection.previous()
            self._load_selected()
        return True

    def handle_key(self, key: str) -> bool:
        """Like ``handle`` but takes a key name; unmapped keys are ignored."""
        symbol = symbol_for_key(key)
        if symbol is None:
            return True
        return self.handle(symbol)

    def _load_selected(self) -> None:
        index = self.store.selection.index
        if index is not None:
            self.store.ensure_comments_loaded(index)
