import argparse
from pathlib import Path

from app.database import session_scope
from app.enums import DateFilter, EntityKind, SortDirection
from app.services.bulk import BulkActionDispatcher
from app.services.entities import EntityStore
from app.services.kinds import get_kind
from app.services.selection import ConsoleState, Selection, recompute
from app.services.views import ViewParams


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export campaign records to CSV")
    parser.add_argument("kind", choices=[kind.value for kind in EntityKind])
    parser.add_argument("--query", default="", help="Case-insensitive text filter")
    parser.add_argument("--date-filter", default=DateFilter.all.value, choices=[item.value for item in DateFilter])
    parser.add_argument("--sort-field", default="created_at")
    parser.add_argument("--sort-direction", default=SortDirection.desc.value, choices=[item.value for item in SortDirection])
    parser.add_argument("--output-dir", type=Path, default=Path("."))
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    kind = EntityKind(args.kind)
    definition = get_kind(kind)
    state = ConsoleState(
        kind=kind,
        params=ViewParams(
            query=args.query,
            date_filter=DateFilter(args.date_filter),
            sort_field=definition.require_field(args.sort_field),
            sort_direction=SortDirection(args.sort_direction),
        ),
    )
    with session_scope() as db:
        store = EntityStore(db)
        view, _ = recompute(state, store.list(kind))
        document = BulkActionDispatcher(store).bulk_export(
            view,
            Selection(),
            list(definition.export_columns),
            base_name=definition.export_base_name,
            export_all=True,
            accessors=definition.accessors,
        )
    args.output_dir.mkdir(parents=True, exist_ok=True)
    path = args.output_dir / document.filename
    path.write_text(document.content, encoding="utf-8")
    print(f"exported {document.row_count} {kind.value} to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
