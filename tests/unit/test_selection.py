from datetime import UTC, datetime, timedelta

from app.enums import DateFilter, EntityKind, SortDirection
from app.services.kinds import get_kind
from app.services.selection import ConsoleState, Selection, recompute
from app.services.views import ViewParams
from tests.helpers import make_volunteer_row

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _view(*ids):
    return [{"id": record_id} for record_id in ids]


def test_toggle_adds_and_removes_without_mutating():
    empty = Selection()
    one = empty.toggle(3)
    assert one.is_selected(3)
    assert one.size() == 1
    assert empty.size() == 0
    assert one.toggle(3).size() == 0


def test_toggle_all_twice_returns_to_empty():
    view = _view(1, 2, 3)
    selected = Selection().toggle_all(view)
    assert selected.ordered() == [1, 2, 3]
    assert selected.toggle_all(view).size() == 0


def test_toggle_all_replaces_partial_selection_with_view():
    partial = Selection(frozenset({1, 9}))
    assert partial.toggle_all(_view(1, 2, 3)).ordered() == [1, 2, 3]


def test_toggle_all_uses_id_equality_not_size():
    unrelated = Selection(frozenset({7, 8}))
    assert unrelated.toggle_all(_view(1, 2)).ordered() == [1, 2]


def test_toggle_all_on_empty_view_is_empty():
    assert Selection(frozenset({4})).toggle_all([]).size() == 0


def test_clear_reconcile_and_discard():
    selection = Selection(frozenset({1, 2, 5}))
    assert selection.clear().size() == 0
    assert selection.reconcile({1, 2, 3}).ordered() == [1, 2]
    assert selection.discard([2]).ordered() == [1, 5]
    assert 5 in selection
    assert len(selection) == 3


def test_recompute_prunes_selection_to_view():
    rows = [
        make_volunteer_row(1, "Jane Doe", NOW - timedelta(days=1)),
        make_volunteer_row(2, "John Roe", NOW - timedelta(days=40)),
        make_volunteer_row(3, "Jill Poe", NOW - timedelta(days=2)),
    ]
    state = ConsoleState(
        kind=EntityKind.volunteers,
        params=ViewParams(date_filter=DateFilter.month, sort_field="createdAt", sort_direction=SortDirection.asc),
        selection=Selection(frozenset({1, 2, 99})),
    )
    view, next_state = recompute(state, rows, now=NOW)
    assert [row.id for row in view] == [3, 1]
    assert next_state.selection.ordered() == [1]
    assert next_state.params.sort_field == "created_at"
    assert state.selection.ordered() == [1, 2, 99]


def test_recompute_uses_default_search_fields_for_kind():
    rows = [
        make_volunteer_row(1, "Jane Doe", NOW, phone="555-0100"),
        make_volunteer_row(2, "John Roe", NOW),
    ]
    state = ConsoleState(kind=EntityKind.volunteers, params=ViewParams(query="0100"))
    view, next_state = recompute(state, rows, now=NOW)
    assert [row.id for row in view] == [1]
    assert next_state.params.search_fields == get_kind(EntityKind.volunteers).search_fields


def test_switching_kind_clears_selection():
    state = ConsoleState(kind=EntityKind.volunteers, selection=Selection(frozenset({1})))
    assert state.with_kind(EntityKind.volunteers) is state
    switched = state.with_kind(EntityKind.donations)
    assert switched.kind == EntityKind.donations
    assert switched.selection.size() == 0
    assert state.with_params(query="x").params.query == "x"
