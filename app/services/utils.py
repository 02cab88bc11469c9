import re
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any


def now_utc() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def snake_case(name: str) -> str:
    compact = name.strip().replace("-", "_")
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", compact).lower()


def dollars_to_cents(amount: float) -> int:
    return int(round(amount * 100))


def format_dollars(cents: int) -> str:
    return f"${cents / 100:.2f}"


def read_field(record: Any, key: str, accessors: Mapping[str, Callable[[Any], Any]] | None = None) -> Any:
    if accessors is not None:
        accessor = accessors.get(key)
        return accessor(record) if accessor is not None else None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)
