"""SQL fragment builders for partial updates and filtered searches.

Both builders emit asyncpg-style positional placeholders (``$1``, ``$2``, ...)
and return the bound values separately, so user input never lands in the
statement text. Column names come from application-owned tables only.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from jobly.services.errors import RepositoryValidationError

PredicateKind = Literal["substring", "range", "flag"]

NO_COLUMN_MAP: Mapping[str, str] = MappingProxyType({})


@dataclass(slots=True)
class SqlParams:
    """Ordered positional values; ``bind`` hands out the matching placeholder."""

    values: list[Any] = field(default_factory=list)

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class Predicate:
    """One recognized search filter.

    ``sql`` holds a single ``{}`` slot for the bound placeholder, except for
    flags, whose fragment is used verbatim and binds nothing.
    """

    key: str
    sql: str
    kind: PredicateKind = "range"


def build_set_clause(fields: Mapping[str, Any], column_map: Mapping[str, str] = NO_COLUMN_MAP) -> tuple[str, list[Any]]:
    """Build the SET clause of a partial UPDATE.

    >>> build_set_clause({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
    ('"first_name"=$1, "age"=$2', ['Aliya', 32])

    Keys missing from ``column_map`` are used as column names unchanged.
    Raises RepositoryValidationError when ``fields`` is empty.
    """
    if not fields:
        raise RepositoryValidationError("No data")

    params = SqlParams()
    columns = [f'"{column_map.get(key, key)}"={params.bind(value)}' for key, value in fields.items()]
    assert len(columns) == len(params), "placeholder count diverged from bound values"
    return ", ".join(columns), params.values


def build_filter_clause(filters: Mapping[str, Any], predicates: Sequence[Predicate]) -> tuple[str, list[Any]]:
    """Build a ``where`` clause from the filters present in ``filters``.

    Predicates are applied in the order given, joined with AND. A filter is
    present when its value is not None; blank strings count as absent, zero
    counts as a real bound, and flags apply only when the value is exactly
    True. Returns ``("", [])`` when nothing applies.
    """
    params = SqlParams()
    conditions: list[str] = []

    for predicate in predicates:
        value = filters.get(predicate.key)
        if predicate.kind == "flag":
            if value is True:
                conditions.append(predicate.sql)
            continue
        if value is None:
            continue
        if predicate.kind == "substring":
            text = value.strip() if isinstance(value, str) else str(value)
            if not text:
                continue
            value = f"%{text}%"
        conditions.append(predicate.sql.format(params.bind(value)))

    if not conditions:
        return "", []
    return "where " + " and ".join(conditions), params.values
