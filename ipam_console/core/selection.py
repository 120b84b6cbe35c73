"""Row selection for the page currently on screen."""

from __future__ import annotations

from enum import Enum
from typing import Any, FrozenSet, Iterable, List, NamedTuple, Set, Tuple, Union


class Tristate(Enum):
    """Header checkbox value. INDETERMINATE is display-only."""

    CHECKED = "checked"
    UNCHECKED = "unchecked"
    INDETERMINATE = "indeterminate"

    @classmethod
    def from_value(cls, value: Any) -> "Tristate":
        """Map widget values (True / False / "indeterminate") onto the enum."""
        if isinstance(value, cls):
            return value
        if value is True:
            return cls.CHECKED
        if value == "indeterminate":
            return cls.INDETERMINATE
        return cls.UNCHECKED

    def to_command(self) -> bool:
        """Normalize to a select-all command; only CHECKED means "select"."""
        return self is Tristate.CHECKED

    @property
    def glyph(self) -> str:
        return {"checked": "[x]", "unchecked": "[ ]", "indeterminate": "[-]"}[self.value]


class SelectionLevel(Enum):
    ALL = "all"
    SOME = "some"
    NONE = "none"

    @property
    def checkbox(self) -> Tristate:
        if self is SelectionLevel.ALL:
            return Tristate.CHECKED
        if self is SelectionLevel.SOME:
            return Tristate.INDETERMINATE
        return Tristate.UNCHECKED


class DerivedSelection(NamedTuple):
    count: int
    level: SelectionLevel

    @property
    def checkbox(self) -> Tristate:
        return self.level.checkbox


class SelectionTracker:
    """
    Tracks which rows of the loaded page are selected.

    Every id in the selection is an id of the current page; `set_items`
    replaces the page and empties the selection before anything is derived.
    """

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._page_ids: Tuple[str, ...] = ()
        self._selected: Set[str] = set()
        self.set_items(items)

    # ------------------------------------------------------------------ #
    # page data
    # ------------------------------------------------------------------ #

    def set_items(self, items: Iterable[Any]) -> None:
        self._page_ids = tuple(item.id for item in items)
        self._selected = set()

    @property
    def page_ids(self) -> Tuple[str, ...]:
        return self._page_ids

    # ------------------------------------------------------------------ #
    # commands
    # ------------------------------------------------------------------ #

    def select_all(self, state: Union[Tristate, bool, str]) -> None:
        if not isinstance(state, bool):
            # raw widget values ("indeterminate", None, ...) go through the enum
            state = Tristate.from_value(state)
            if state is Tristate.INDETERMINATE:
                raise ValueError(
                    "INDETERMINATE is a display state; normalize it with to_command() first"
                )
            state = state.to_command()
        if state:
            self._selected = set(self._page_ids)
        else:
            self._selected = set()

    def select_one(self, record_id: str, selected: bool) -> None:
        if record_id not in self._page_ids:
            return
        if selected:
            self._selected.add(record_id)
        else:
            self._selected.discard(record_id)

    def toggle(self, record_id: str) -> bool:
        """Flip one row; returns the new state."""
        selected = record_id not in self._selected
        self.select_one(record_id, selected)
        return self.is_selected(record_id)

    def toggle_all(self) -> None:
        """Header checkbox click: anything but ALL selects everything."""
        self.select_all(self.derived_state().level is not SelectionLevel.ALL)

    def clear(self) -> None:
        self._selected = set()

    # ------------------------------------------------------------------ #
    # queries
    # ------------------------------------------------------------------ #

    def is_selected(self, record_id: str) -> bool:
        return record_id in self._selected

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    def selected_in_page_order(self) -> List[str]:
        return [record_id for record_id in self._page_ids if record_id in self._selected]

    def derived_state(self) -> DerivedSelection:
        size = len(self._selected)
        total = len(self._page_ids)
        if total > 0 and size == total:
            level = SelectionLevel.ALL
        elif 0 < size < total:
            level = SelectionLevel.SOME
        else:
            level = SelectionLevel.NONE
        return DerivedSelection(count=size, level=level)
