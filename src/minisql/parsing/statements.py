"""Statement objects produced by the query parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Union

from minisql.values import Value


@dataclass(frozen=True)
class WhereClause:
    """A single ``column <operator> value`` condition."""

    column: str
    operator: str  # =, !=, >, <, >=, <=
    value: Value

    def __post_init__(self) -> None:
        object.__setattr__(self, "column", self.column.lower())
        object.__setattr__(self, "value", Value.of(self.value))

    def to_sql(self) -> str:
        return f"WHERE {self.column} {self.operator} {self.value.to_sql()}"


@dataclass(frozen=True, init=False)
class SelectStatement:
    """A SELECT query.

    ``columns`` is either ``("*",)`` or the requested column names, in
    request order.
    """

    columns: tuple[str, ...]
    table: str
    where: WhereClause | None = None

    def __init__(
        self,
        columns: Sequence[str],
        table: str,
        where: WhereClause | None = None,
    ) -> None:
        object.__setattr__(self, "columns", tuple(c.lower() for c in columns))
        object.__setattr__(self, "table", table.lower())
        object.__setattr__(self, "where", where)

    @property
    def is_select_all(self) -> bool:
        return self.columns == ("*",)

    @property
    def has_where(self) -> bool:
        return self.where is not None

    def to_sql(self) -> str:
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"
        if self.where is not None:
            sql += " " + self.where.to_sql()
        return sql

    def __str__(self) -> str:
        return self.to_sql()


@dataclass(frozen=True, init=False)
class InsertStatement:
    """An INSERT query: one row of positional values."""

    table: str
    values: tuple[Value, ...]

    def __init__(self, table: str, values: Sequence[Any]) -> None:
        object.__setattr__(self, "table", table.lower())
        object.__setattr__(self, "values", tuple(Value.of(v) for v in values))

    @property
    def value_count(self) -> int:
        return len(self.values)

    def to_sql(self) -> str:
        rendered = ", ".join(v.to_sql() for v in self.values)
        return f"INSERT INTO {self.table} VALUES ({rendered})"

    def __str__(self) -> str:
        return self.to_sql()


Statement = Union[SelectStatement, InsertStatement]
