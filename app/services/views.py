from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from app.enums import DateFilter, SortDirection
from app.services.utils import as_utc, now_utc, read_field

DATE_WINDOWS: dict[DateFilter, timedelta | None] = {
    DateFilter.all: None,
    DateFilter.week: timedelta(days=7),
    DateFilter.month: timedelta(days=30),
    DateFilter.quarter: timedelta(days=90),
}

DATE_FIELD = "created_at"


@dataclass(frozen=True)
class ViewParams:
    query: str = ""
    search_fields: tuple[str, ...] = ()
    date_filter: DateFilter = DateFilter.all
    sort_field: str = DATE_FIELD
    sort_direction: SortDirection = SortDirection.desc


def _stringify(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(item for item in (_stringify(nested) for nested in value) if item is not None)
    return str(value)


def _sort_key(value: Any) -> tuple[int, Any]:
    # None < numbers < timestamps < strings, so mixed shapes never compare across types.
    if value is None:
        return (0, 0)
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return (1, int(value))
    if isinstance(value, (int, float)):
        return (1, value)
    if isinstance(value, datetime):
        return (2, as_utc(value).timestamp())
    if isinstance(value, str):
        return (3, value.casefold())
    return (3, str(value).casefold())


def date_cutoff(date_filter: DateFilter, now: datetime | None = None) -> datetime | None:
    window = DATE_WINDOWS[DateFilter(date_filter)]
    if window is None:
        return None
    return as_utc(now or now_utc()) - window


def matches_query(
    record: Any,
    query: str,
    search_fields: Iterable[str],
    accessors: Mapping[str, Callable[[Any], Any]] | None = None,
) -> bool:
    if not query:
        return True
    needle = query.lower()
    for name in search_fields:
        text = _stringify(read_field(record, name, accessors))
        if text is not None and needle in text.lower():
            return True
    return False


def within_window(
    record: Any,
    cutoff: datetime | None,
    accessors: Mapping[str, Callable[[Any], Any]] | None = None,
) -> bool:
    if cutoff is None:
        return True
    created_at = read_field(record, DATE_FIELD, accessors)
    if not isinstance(created_at, datetime):
        return False
    return as_utc(created_at) > cutoff


def compute_view(
    records: Sequence[Any],
    *,
    query: str = "",
    search_fields: Iterable[str] = (),
    date_filter: DateFilter = DateFilter.all,
    sort_field: str = DATE_FIELD,
    sort_direction: SortDirection = SortDirection.desc,
    now: datetime | None = None,
    accessors: Mapping[str, Callable[[Any], Any]] | None = None,
) -> list[Any]:
    """Filter and order one kind's records for display.

    The text query keeps a record when any search field contains it
    (case-insensitive); the date filter keeps records created strictly after
    ``now`` minus the window. Ordering is stable in both directions and the
    input sequence is never mutated.
    """
    fields = tuple(search_fields)
    cutoff = date_cutoff(date_filter, now)
    filtered = [
        record
        for record in records
        if matches_query(record, query, fields, accessors) and within_window(record, cutoff, accessors)
    ]
    return sorted(
        filtered,
        key=lambda record: _sort_key(read_field(record, sort_field, accessors)),
        reverse=SortDirection(sort_direction) == SortDirection.desc,
    )


def apply_view(
    records: Sequence[Any],
    params: ViewParams,
    *,
    now: datetime | None = None,
    accessors: Mapping[str, Callable[[Any], Any]] | None = None,
) -> list[Any]:
    return compute_view(
        records,
        query=params.query,
        search_fields=params.search_fields,
        date_filter=params.date_filter,
        sort_field=params.sort_field,
        sort_direction=params.sort_direction,
        now=now,
        accessors=accessors,
    )
