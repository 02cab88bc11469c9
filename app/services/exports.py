import csv
import io
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from app.services.utils import as_utc, now_utc, read_field

TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M"
LIST_SEPARATOR = "; "
CSV_MEDIA_TYPE = "text/csv"


@dataclass(frozen=True)
class ColumnSpec:
    display_name: str
    field_key: str


@dataclass(frozen=True)
class ExportDocument:
    filename: str
    content: str
    row_count: int

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'


def coerce_value(value: Any) -> str:
    """Render one field value as the text placed inside a CSV cell.

    Missing values become the empty string, sequences are joined with "; ",
    timestamps are rendered in UTC as MM/DD/YYYY HH:mm and enums by value.
    """
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return as_utc(value).strftime(TIMESTAMP_FORMAT)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(coerce_value(item) for item in value)
    return str(value)


def serialize(
    records: Iterable[Any],
    columns: list[ColumnSpec],
    accessors: Mapping[str, Callable[[Any], Any]] | None = None,
) -> str:
    output = io.StringIO()
    header_writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    row_writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

    header_writer.writerow([column.display_name for column in columns])
    for record in records:
        row_writer.writerow([coerce_value(read_field(record, column.field_key, accessors)) for column in columns])
    return output.getvalue().removesuffix("\n")


def export_filename(base_name: str, at: datetime | None = None) -> str:
    moment = as_utc(at) if at is not None else now_utc()
    return f"{base_name}-{moment.date().isoformat()}.csv"
