from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from app.api.deps import get_dispatcher, get_store
from app.api.routes.admin import build_console_state
from app.enums import DateFilter, EntityKind, SortDirection
from app.schemas import ExportRequest
from app.services.bulk import BulkActionDispatcher
from app.services.entities import EntityStore
from app.services.exports import CSV_MEDIA_TYPE, ColumnSpec, ExportDocument
from app.services.kinds import get_kind
from app.services.selection import ConsoleState, recompute
from app.services.validation import ValidationError

router = APIRouter(prefix="/api/admin", tags=["exports"])


def _csv_response(document: ExportDocument) -> Response:
    return Response(
        content=document.content,
        media_type=CSV_MEDIA_TYPE,
        headers={
            "Content-Disposition": document.content_disposition,
            "X-Export-Row-Count": str(document.row_count),
        },
    )


def _export(
    kind: EntityKind,
    state: ConsoleState,
    store: EntityStore,
    dispatcher: BulkActionDispatcher,
    *,
    export_all: bool,
    columns: list[ColumnSpec] | None = None,
) -> ExportDocument:
    definition = get_kind(kind)
    view, state = recompute(state, store.list(kind))
    resolved_columns = definition.resolve_columns(columns) if columns else list(definition.export_columns)
    return dispatcher.bulk_export(
        view,
        state.selection,
        resolved_columns,
        base_name=definition.export_base_name,
        export_all=export_all,
        accessors=definition.accessors,
    )


@router.get("/{kind}/export.csv")
def export_view(
    kind: EntityKind,
    query: str = Query(default=""),
    search_fields: list[str] = Query(default=[]),
    date_filter: DateFilter = Query(default=DateFilter.all),
    sort_field: str = Query(default="created_at"),
    sort_direction: SortDirection = Query(default=SortDirection.desc),
    store: EntityStore = Depends(get_store),
    dispatcher: BulkActionDispatcher = Depends(get_dispatcher),
) -> Response:
    try:
        state = build_console_state(
            kind,
            query=query,
            search_fields=search_fields,
            date_filter=date_filter,
            sort_field=sort_field,
            sort_direction=sort_direction,
        )
        document = _export(kind, state, store, dispatcher, export_all=True)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _csv_response(document)


@router.post("/{kind}/export")
def export_selection(
    kind: EntityKind,
    request: ExportRequest,
    store: EntityStore = Depends(get_store),
    dispatcher: BulkActionDispatcher = Depends(get_dispatcher),
) -> Response:
    columns = [ColumnSpec(column.display_name, column.field_key) for column in request.columns or []]
    try:
        state = build_console_state(
            kind,
            query=request.query,
            search_fields=request.search_fields,
            date_filter=request.date_filter,
            sort_field=request.sort_field,
            sort_direction=request.sort_direction,
            selected=request.ids,
        )
        document = _export(kind, state, store, dispatcher, export_all=request.export_all, columns=columns or None)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _csv_response(document)
