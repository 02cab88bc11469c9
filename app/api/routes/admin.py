from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_dispatcher, get_store
from app.enums import DateFilter, EntityKind, SortDirection
from app.schemas import BulkDeleteRequest, BulkDeleteResponse, StatsResponse, ViewResponse
from app.services.bulk import BulkActionDispatcher
from app.services.entities import EntityStore
from app.services.kinds import get_kind
from app.services.selection import ConsoleState, Selection, recompute
from app.services.stats import dashboard_stats
from app.services.validation import ValidationError
from app.services.views import ViewParams

router = APIRouter(prefix="/api/admin", tags=["admin"])


def build_console_state(
    kind: EntityKind,
    *,
    query: str,
    search_fields: list[str],
    date_filter: DateFilter,
    sort_field: str,
    sort_direction: SortDirection,
    selected: list[int] | None = None,
) -> ConsoleState:
    definition = get_kind(kind)
    params = ViewParams(
        query=query,
        search_fields=tuple(definition.require_field(name) for name in search_fields),
        date_filter=date_filter,
        sort_field=definition.require_field(sort_field),
        sort_direction=sort_direction,
    )
    return ConsoleState(kind=kind, params=params, selection=Selection(frozenset(selected or [])))


@router.get("/stats", response_model=StatsResponse)
def get_stats(store: EntityStore = Depends(get_store)) -> StatsResponse:
    return StatsResponse(**dashboard_stats(store))


@router.get("/{kind}/view", response_model=ViewResponse)
def get_view(
    kind: EntityKind,
    query: str = Query(default=""),
    search_fields: list[str] = Query(default=[]),
    date_filter: DateFilter = Query(default=DateFilter.all),
    sort_field: str = Query(default="created_at"),
    sort_direction: SortDirection = Query(default=SortDirection.desc),
    selected: list[int] = Query(default=[]),
    store: EntityStore = Depends(get_store),
) -> ViewResponse:
    definition = get_kind(kind)
    try:
        state = build_console_state(
            kind,
            query=query,
            search_fields=search_fields,
            date_filter=date_filter,
            sort_field=sort_field,
            sort_direction=sort_direction,
            selected=selected,
        )
        records = store.list(kind)
        view, state = recompute(state, records)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ViewResponse(
        kind=kind.value,
        total=len(records),
        count=len(view),
        query=state.params.query,
        search_fields=list(state.params.search_fields or definition.search_fields),
        date_filter=state.params.date_filter,
        sort_field=state.params.sort_field,
        sort_direction=state.params.sort_direction,
        selection=state.selection.ordered(),
        items=[definition.payload(record) for record in view],
    )


@router.post("/{kind}/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete(
    kind: EntityKind,
    request: BulkDeleteRequest,
    dispatcher: BulkActionDispatcher = Depends(get_dispatcher),
) -> BulkDeleteResponse:
    result = dispatcher.bulk_delete(kind, Selection(frozenset(request.ids)))
    return BulkDeleteResponse(
        kind=kind.value,
        requested=result.requested,
        attempted=result.attempted,
        succeeded=result.succeeded,
        failed=result.failed_count,
        deleted_ids=result.succeeded_ids,
        failures=result.failed,
        remaining_selection=result.selection.ordered(),
    )
