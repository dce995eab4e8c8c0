"""
Aggregation and Ranking
=======================

Grouping, counting and multi-key ordering over matched rows.

Rows are either mappings or objects with attributes; a key is a field
name or a callable taking the row.

Version: 0.1.0
"""

from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar


T = TypeVar("T")
H = TypeVar("H", bound=Hashable)

RowKey = str | int | Callable[[Any], Any]


class SortDirection(str, Enum):
    """Sort direction for a single key."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortKey:
    """One key of a multi-key ordering."""

    field: RowKey
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def asc(cls, field: RowKey) -> "SortKey":
        return cls(field, SortDirection.ASC)

    @classmethod
    def desc(cls, field: RowKey) -> "SortKey":
        return cls(field, SortDirection.DESC)


def get_field(row: Any, key: RowKey) -> Any:
    """Read `key` from a row (mapping, sequence index, attribute or callable)."""
    if callable(key):
        return key(row)
    if isinstance(row, Mapping):
        return row[key]
    if isinstance(key, int):
        return row[key]
    return getattr(row, key)


def count_group_by(rows: Iterable[Any], group_key: RowKey) -> dict[Any, int]:
    """
    Count rows per distinct value of `group_key`.

    Only values present among the rows appear; there are no zero-valued
    groups. Groups are returned in first-seen order.
    """
    counts: dict[Any, int] = {}
    for row in rows:
        value = get_field(row, group_key)
        counts[value] = counts.get(value, 0) + 1
    return counts


def sort_by(rows: Iterable[T], keys: Sequence[SortKey]) -> list[T]:
    """
    Stable multi-key sort.

    Earlier keys take precedence; rows equal on every key keep their
    input order.
    """
    result = list(rows)
    # Sort by the least significant key first; list.sort is stable,
    # including with reverse=True.
    for sort_key in reversed(keys):
        result.sort(
            key=lambda row, k=sort_key.field: get_field(row, k),
            reverse=sort_key.direction == SortDirection.DESC,
        )
    return result


def distinct_ordered(values: Iterable[H]) -> list[H]:
    """Deduplicate values, keeping the first occurrence of each."""
    seen: set[H] = set()
    result: list[H] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def distinct_sorted(values: Iterable[str]) -> list[str]:
    """Deduplicate, then order ascending lexicographically."""
    return sorted(distinct_ordered(values))
