"""Multi-row selection across a paginated table.

Selection is a map of entry id to bool. Only persisted entries (ids in
the store's 24-hex-char format) can be selected; placeholder rows are left
out of every count. Each operation takes a ``SelectionState`` and returns a
new one; ``selection_view`` derives the counters the table displays.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Protocol

from ..models.weight_entry import is_valid_object_id


class Region(Protocol):
    """Something a pointer event can land inside, such as a menu."""

    def contains(self, target: object) -> bool:
        ...


@dataclass(frozen=True)
class SelectionState:
    """Selected ids plus the open state of the selection menu."""

    selected: dict[str, bool] = field(default_factory=dict)
    menu_open: bool = False


@dataclass(frozen=True)
class SelectionView:
    """Counters derived from a selection for the current dataset and page."""

    selected_count: int
    current_page_selected_count: int
    is_current_page_all_selected: bool
    select_all: bool
    selected_ids: list[str]


def record_id(record) -> str | None:
    """Get the id of a dict record or an entry object."""
    if isinstance(record, dict):
        return record.get("id")
    return getattr(record, "id", None)


def valid_ids(records: Iterable | None) -> list[str]:
    """Ids of the selectable records, in order."""
    ids = []
    for record in records or []:
        rid = record_id(record)
        if is_valid_object_id(rid):
            ids.append(rid)
    return ids


def selected_ids(state: SelectionState) -> list[str]:
    return [rid for rid, chosen in state.selected.items() if chosen]


def is_all_selected(state: SelectionState, records: Iterable | None) -> bool:
    """True when every selectable record in the dataset is selected."""
    ids = valid_ids(records)
    if not ids:
        return False
    return sum(1 for rid in ids if state.selected.get(rid)) == len(ids)


def toggle_row(state: SelectionState, entry_id: str) -> SelectionState:
    """Flip one row. Ids that are not selectable are ignored."""
    if not is_valid_object_id(entry_id):
        return state
    selected = dict(state.selected)
    selected[entry_id] = not selected.get(entry_id, False)
    return replace(state, selected=selected)


def toggle_page(state: SelectionState, page_rows: Iterable) -> SelectionState:
    """Select every row on the page, or deselect them if all already are."""
    ids = valid_ids(page_rows)
    if not ids:
        return state
    all_selected = all(state.selected.get(rid) for rid in ids)
    selected = dict(state.selected)
    for rid in ids:
        selected[rid] = not all_selected
    return replace(state, selected=selected)


def toggle_all(state: SelectionState, records: Iterable | None) -> SelectionState:
    """Select every row in the dataset (all pages), or clear if all already are."""
    records = list(records or [])
    if is_all_selected(state, records):
        return replace(state, selected={})
    return replace(state, selected={rid: True for rid in valid_ids(records)})


def clear(state: SelectionState) -> SelectionState:
    return replace(state, selected={})


def selection_view(
    state: SelectionState,
    records: Iterable | None,
    page_rows: Iterable,
) -> SelectionView:
    """Derive the selection counters for the current dataset and page."""
    records = list(records or [])
    page_ids = valid_ids(page_rows)
    page_selected = sum(1 for rid in page_ids if state.selected.get(rid))
    chosen = selected_ids(state)
    return SelectionView(
        selected_count=len(chosen),
        current_page_selected_count=page_selected,
        is_current_page_all_selected=bool(page_ids) and page_selected == len(page_ids),
        select_all=is_all_selected(state, records),
        selected_ids=chosen,
    )


def toggle_menu(state: SelectionState) -> SelectionState:
    return replace(state, menu_open=not state.menu_open)


def close_menu_on_pointer(
    state: SelectionState,
    target: object,
    trigger: Region,
    menu: Region,
) -> SelectionState:
    """Close the selection menu for a pointer press outside it and its trigger."""
    if not state.menu_open:
        return state
    if trigger.contains(target) or menu.contains(target):
        return state
    return replace(state, menu_open=False)
