"""Tests for sorting, paging and view-state commands."""

import pytest

from jornadas.core.records import Record
from jornadas.core.store import RecordStore
from jornadas.core.view import (
    Page,
    SortOrder,
    ViewState,
    apply_filter,
    change_page,
    change_sort,
    clear_search,
    next_page,
    page_records,
    previous_page,
    project,
    sort_records,
    toggle_sort_order,
)


def rec(project: str, description: str = "d", location: str = "Madrid") -> Record:
    return Record(
        project=project,
        date="2025-01-01",
        location=location,
        referee="Ref",
        status="Pendiente",
        result="",
        description=description,
    )


@pytest.fixture
def twenty_five():
    return [rec(f"J{i:02d}") for i in range(1, 26)]


class TestPageRecords:
    def test_first_page(self, twenty_five):
        page = page_records(twenty_five, 1, 10)
        assert len(page.items) == 10
        assert page.total_pages == 3
        assert page.total_records == 25
        assert page.items[0].project == "J01"

    def test_last_partial_page(self, twenty_five):
        page = page_records(twenty_five, 3, 10)
        assert len(page.items) == 5
        assert page.items[-1].project == "J25"

    def test_out_of_range_page(self, twenty_five):
        page = page_records(twenty_five, 4, 10)
        assert page.items == []
        assert page.total_pages == 3

    def test_page_zero_is_empty(self, twenty_five):
        page = page_records(twenty_five, 0, 10)
        assert page.items == []
        assert page.total_pages == 3

    def test_no_records(self):
        page = page_records([], 1, 10)
        assert page.items == []
        assert page.total_pages == 0
        assert page.total_records == 0

    def test_exact_multiple(self, twenty_five):
        assert page_records(twenty_five[:20], 1, 10).total_pages == 2

    def test_default_page_size(self, twenty_five):
        assert len(page_records(twenty_five, 1).items) == 10

    def test_invalid_page_size(self, twenty_five):
        with pytest.raises(ValueError):
            page_records(twenty_five, 1, 0)


class TestPageSummary:
    def test_multiple_pages(self):
        page = Page(items=[], total_records=25, total_pages=3, page_number=2)
        assert page.summary() == "Page 2 of 3 (25 records)"
        assert page.has_previous and page.has_next

    def test_first_and_last_pages(self):
        first = Page(items=[], total_records=25, total_pages=3, page_number=1)
        last = Page(items=[], total_records=25, total_pages=3, page_number=3)
        assert not first.has_previous and first.has_next
        assert last.has_previous and not last.has_next

    def test_single_record(self):
        assert Page(items=[], total_records=1, total_pages=1, page_number=1).summary() == "1 record"

    def test_empty(self):
        assert Page(items=[], total_records=0, total_pages=0, page_number=1).summary() == ""


class TestSortRecords:
    def test_descending_is_reverse_of_ascending(self):
        records = [rec("B"), rec("D"), rec("A"), rec("C")]
        asc = sort_records(records, "proyecto", SortOrder.ASC)
        desc = sort_records(records, "proyecto", SortOrder.DESC)
        assert [r.project for r in asc] == ["A", "B", "C", "D"]
        assert desc == list(reversed(asc))

    def test_stable_ascending(self):
        records = [rec("B", "first"), rec("A"), rec("B", "second"), rec("B", "third")]
        result = sort_records(records, "proyecto", SortOrder.ASC)
        assert [r.description for r in result if r.project == "B"] == ["first", "second", "third"]

    def test_stable_descending(self):
        records = [rec("B", "first"), rec("C"), rec("B", "second")]
        result = sort_records(records, "proyecto", SortOrder.DESC)
        assert [r.project for r in result] == ["C", "B", "B"]
        assert [r.description for r in result[1:]] == ["first", "second"]

    def test_missing_values_sort_first_ascending(self):
        records = [rec("A", location="Zaragoza"), rec("B", location=None)]
        result = sort_records(records, "ubicacion", SortOrder.ASC)
        assert [r.project for r in result] == ["B", "A"]

    def test_does_not_mutate_input(self):
        records = [rec("B"), rec("A")]
        sort_records(records, "proyecto")
        assert [r.project for r in records] == ["B", "A"]


class TestViewState:
    def test_defaults(self):
        state = ViewState()
        assert state.sort_field == "proyecto"
        assert state.sort_order is SortOrder.DESC
        assert state.page == 1
        assert state.page_size == 10
        assert not state.is_filtered

    def test_apply_filter_resets_page(self):
        state = apply_filter(ViewState(page=3), "ubicacion", " madrid ")
        assert state.search_field == "ubicacion"
        assert state.search_term == "madrid"
        assert state.page == 1
        assert state.is_filtered

    def test_apply_filter_normalises_attribute_names(self):
        assert apply_filter(ViewState(), "location", "x").search_field == "ubicacion"

    def test_clear_search(self):
        state = clear_search(apply_filter(ViewState(), "proyecto", "J1"))
        assert state.search_field == "all"
        assert state.search_term == ""
        assert not state.is_filtered

    def test_commands_return_new_state(self):
        state = ViewState()
        changed = change_page(state, 2)
        assert state.page == 1
        assert changed.page == 2

    def test_change_sort_same_field_toggles(self):
        state = change_sort(ViewState(), "proyecto")
        assert state.sort_order is SortOrder.ASC

    def test_change_sort_new_field_keeps_order(self):
        state = change_sort(ViewState(), "fecha")
        assert state.sort_field == "fecha"
        assert state.sort_order is SortOrder.DESC

    def test_change_sort_explicit_order(self):
        state = change_sort(ViewState(), "proyecto", SortOrder.DESC)
        assert state.sort_order is SortOrder.DESC

    def test_toggle_sort_order(self):
        assert toggle_sort_order(ViewState()).sort_order is SortOrder.ASC

    def test_previous_page_stops_at_one(self):
        assert previous_page(ViewState(page=1)).page == 1
        assert previous_page(ViewState(page=2)).page == 1

    def test_next_page_stops_at_last(self, twenty_five):
        store = RecordStore(twenty_five)
        state = ViewState(page=2)
        state = next_page(store, state)
        assert state.page == 3
        assert next_page(store, state).page == 3

    def test_next_page_uses_filtered_set(self, twenty_five):
        store = RecordStore(twenty_five)
        state = apply_filter(ViewState(), "proyecto", "J0")  # J01..J09
        assert next_page(store, state).page == 1


class TestProject:
    def test_full_set_sorted_descending_by_default(self, twenty_five):
        page = project(RecordStore(twenty_five), ViewState())
        assert page.items[0].project == "J25"
        assert page.total_pages == 3

    def test_filtered_subset(self):
        store = RecordStore([rec("J1", location="Madrid Centro"), rec("J2", location="Sevilla")])
        state = apply_filter(ViewState(), "all", "madrid")
        page = project(store, state)
        assert [r.project for r in page.items] == ["J1"]
        assert page.total_records == 1

    def test_filter_with_no_matches(self, twenty_five):
        state = apply_filter(ViewState(), "proyecto", "zzz")
        page = project(RecordStore(twenty_five), state)
        assert page.items == []
        assert page.total_pages == 0
