from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from app.enums import EntityKind
from app.services.kinds import KindDefinition, get_kind
from app.services.utils import read_field
from app.services.views import ViewParams, apply_view


def record_ids(records: Iterable[Any]) -> list[int]:
    return [read_field(record, "id") for record in records]


@dataclass(frozen=True)
class Selection:
    """Ids an admin has ticked within one kind's view.

    Every transition returns a new ``Selection``; nothing is mutated in place.
    """

    ids: frozenset[int] = field(default_factory=frozenset)

    def toggle(self, record_id: int) -> Selection:
        if record_id in self.ids:
            return Selection(self.ids - {record_id})
        return Selection(self.ids | {record_id})

    def toggle_all(self, view: Sequence[Any]) -> Selection:
        view_ids = frozenset(record_ids(view))
        if len(self.ids) == len(view) and view_ids <= self.ids:
            return Selection()
        return Selection(view_ids)

    def clear(self) -> Selection:
        return Selection()

    def is_selected(self, record_id: int) -> bool:
        return record_id in self.ids

    def size(self) -> int:
        return len(self.ids)

    def reconcile(self, available_ids: Iterable[int]) -> Selection:
        return Selection(self.ids & frozenset(available_ids))

    def discard(self, removed_ids: Iterable[int]) -> Selection:
        return Selection(self.ids - frozenset(removed_ids))

    def ordered(self) -> list[int]:
        return sorted(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self.ids


@dataclass(frozen=True)
class ConsoleState:
    kind: EntityKind
    params: ViewParams = field(default_factory=ViewParams)
    selection: Selection = field(default_factory=Selection)

    def with_kind(self, kind: EntityKind) -> ConsoleState:
        if kind == self.kind:
            return self
        return ConsoleState(kind=kind, params=self.params)

    def with_params(self, **changes: Any) -> ConsoleState:
        return replace(self, params=replace(self.params, **changes))

    def with_selection(self, selection: Selection) -> ConsoleState:
        return replace(self, selection=selection)


def recompute(
    state: ConsoleState,
    records: Sequence[Any],
    *,
    now: datetime | None = None,
) -> tuple[list[Any], ConsoleState]:
    definition = get_kind(state.kind)
    resolved = resolve_params(definition, state.params)
    view = apply_view(records, resolved, now=now, accessors=definition.accessors)
    pruned = state.selection.reconcile(record_ids(view))
    return view, replace(state, params=resolved, selection=pruned)


def resolve_params(definition: KindDefinition, params: ViewParams) -> ViewParams:
    search_fields = tuple(definition.require_field(name) for name in params.search_fields) or definition.search_fields
    sort_field = definition.resolve_field(params.sort_field) or params.sort_field
    return replace(params, search_fields=search_fields, sort_field=sort_field)
