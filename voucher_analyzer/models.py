from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping

Row = Mapping[str, Any]


@dataclass(frozen=True)
class AggregateEntry:
    name: str
    value: float


@dataclass(frozen=True)
class DetailedAggregateEntry:
    name: str
    value: float
    details: tuple[Row, ...]


@dataclass(frozen=True)
class SummaryStats:
    total_rows: int = 0
    distinct_entities: int = 0
    total_monetary: float = 0.0


def freeze_rows(records: Iterable[Mapping[str, Any]]) -> tuple[Row, ...]:
    """Wrap decoded records as read-only mappings, keeping key order."""
    return tuple(MappingProxyType(dict(record)) for record in records)


def columns_from_rows(rows: tuple[Row, ...]) -> tuple[str, ...]:
    if not rows:
        return ()
    return tuple(str(column) for column in rows[0].keys())
