import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError

from app.enums import EntityKind
from app.services.exports import ColumnSpec, ExportDocument, export_filename, serialize
from app.services.selection import Selection
from app.services.utils import read_field
from app.services.validation import NotFoundError

logger = logging.getLogger(__name__)


class RecordStore(Protocol):
    def ids(self, kind: EntityKind | str) -> set[int]:
        ...

    def delete(self, kind: EntityKind | str, record_id: int) -> None:
        ...


@dataclass(frozen=True)
class BulkDeleteResult:
    kind: EntityKind
    requested: int
    succeeded_ids: list[int] = field(default_factory=list)
    failed: dict[int, str] = field(default_factory=dict)
    selection: Selection = field(default_factory=Selection)

    @property
    def attempted(self) -> int:
        return len(self.succeeded_ids) + len(self.failed)

    @property
    def succeeded(self) -> int:
        return len(self.succeeded_ids)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def partial_failure(self) -> bool:
        return bool(self.failed)


class BulkActionDispatcher:
    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def bulk_delete(self, kind: EntityKind | str, selection: Selection) -> BulkDeleteResult:
        kind = EntityKind(kind)
        live = selection.reconcile(self.store.ids(kind))
        dropped = selection.size() - live.size()
        if dropped:
            logger.info("Dropped %d stale %s ids from bulk delete", dropped, kind.value)

        succeeded: list[int] = []
        failed: dict[int, str] = {}
        for record_id in live.ordered():
            try:
                self.store.delete(kind, record_id)
            except (NotFoundError, SQLAlchemyError) as exc:
                logger.warning("Bulk delete failed for %s:%s: %s", kind.value, record_id, exc)
                failed[record_id] = str(exc)
                continue
            succeeded.append(record_id)

        return BulkDeleteResult(
            kind=kind,
            requested=selection.size(),
            succeeded_ids=succeeded,
            failed=failed,
            selection=live.discard(succeeded),
        )

    def bulk_export(
        self,
        records: Sequence[Any],
        selection: Selection,
        columns: list[ColumnSpec],
        *,
        base_name: str,
        export_all: bool = False,
        now: datetime | None = None,
        accessors: Mapping[str, Callable[[Any], Any]] | None = None,
    ) -> ExportDocument:
        if export_all and selection.size() == 0:
            chosen = list(records)
        else:
            chosen = [record for record in records if read_field(record, "id", accessors) in selection]
        return ExportDocument(
            filename=export_filename(base_name, now),
            content=serialize(chosen, columns, accessors),
            row_count=len(chosen),
        )
