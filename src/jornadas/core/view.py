"""Sorted, paginated projection of the record set - pure functions."""

import math
from dataclasses import dataclass, replace
from enum import Enum

from .records import Record, disk_key, resolve_field
from .store import SEARCH_ALL, RecordStore

DEFAULT_PAGE_SIZE = 10


class SortOrder(Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortOrder":
        return SortOrder.ASC if self is SortOrder.DESC else SortOrder.DESC


@dataclass(frozen=True)
class Page:
    """One page of records plus pagination metadata."""

    items: list[Record]
    total_records: int
    total_pages: int
    page_number: int

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages

    def summary(self) -> str:
        """Pagination line shown under the table."""
        if self.total_pages <= 1:
            if not self.total_records:
                return ""
            plural = "s" if self.total_records != 1 else ""
            return f"{self.total_records} record{plural}"
        return f"Page {self.page_number} of {self.total_pages} ({self.total_records} records)"


@dataclass(frozen=True)
class ViewState:
    """Query parameters for the current view."""

    search_field: str = SEARCH_ALL
    search_term: str = ""
    sort_field: str = "proyecto"
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def is_filtered(self) -> bool:
        return bool(self.search_term.strip())


def sort_records(records: list[Record], field_name: str, order: SortOrder = SortOrder.ASC) -> list[Record]:
    """
    Stable lexical sort on one field.

    Missing values sort as empty strings. Ties keep their input order in
    both directions.
    """
    attr = resolve_field(field_name)

    def sort_key(r: Record) -> str:
        return getattr(r, attr) or ""

    return sorted(records, key=sort_key, reverse=order is SortOrder.DESC)


def total_pages(total_records: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return math.ceil(total_records / page_size)


def page_records(records: list[Record], page_number: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """
    Slice one 1-indexed page.

    Does not clamp: pages outside 1..total_pages come back empty.
    """
    pages = total_pages(len(records), page_size)
    if page_number < 1:
        items = []
    else:
        start = (page_number - 1) * page_size
        items = records[start:start + page_size]
    return Page(items=items, total_records=len(records), total_pages=pages, page_number=page_number)


# ============== Commands ==============


def visible_records(store: RecordStore, state: ViewState) -> list[Record]:
    """Filtered (when a search is active) and sorted records."""
    records = store.filter(state.search_field, state.search_term) if state.is_filtered else store.records
    return sort_records(records, state.sort_field, state.sort_order)


def project(store: RecordStore, state: ViewState) -> Page:
    """Current page for a store and view state."""
    return page_records(visible_records(store, state), state.page, state.page_size)


def apply_filter(state: ViewState, field_name: str, term: str) -> ViewState:
    if field_name != SEARCH_ALL:
        field_name = disk_key(field_name)
    return replace(state, search_field=field_name, search_term=term.strip(), page=1)


def clear_search(state: ViewState) -> ViewState:
    return replace(state, search_field=SEARCH_ALL, search_term="", page=1)


def change_page(state: ViewState, page: int) -> ViewState:
    return replace(state, page=page)


def next_page(store: RecordStore, state: ViewState) -> ViewState:
    """Advance one page, staying put on the last one."""
    pages = total_pages(len(visible_records(store, state)), state.page_size)
    if state.page < pages:
        return replace(state, page=state.page + 1)
    return state


def previous_page(state: ViewState) -> ViewState:
    if state.page > 1:
        return replace(state, page=state.page - 1)
    return state


def change_sort(state: ViewState, field_name: str, order: SortOrder | None = None) -> ViewState:
    """
    Sort by a field.

    Re-selecting the current field without an explicit order flips the
    direction; a new field keeps the current direction.
    """
    key = disk_key(field_name)
    if order is None:
        order = state.sort_order.toggled() if key == state.sort_field else state.sort_order
    return replace(state, sort_field=key, sort_order=order)


def toggle_sort_order(state: ViewState) -> ViewState:
    return replace(state, sort_order=state.sort_order.toggled())
