"""In-memory table storage: columns, rows and tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Sequence

from minisql.values import Value, ValueKind, compare_values


class DataType(Enum):
    """Declared column types."""

    INTEGER = "INTEGER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"

    @classmethod
    def from_name(cls, name: str) -> DataType:
        """Look up a type by name, accepting the INT/VARCHAR/BOOL aliases."""
        canonical = _TYPE_ALIASES.get(name.strip().upper(), name.strip().upper())
        try:
            return cls(canonical)
        except ValueError:
            raise ValueError(f"Unknown data type: {name}") from None

    @property
    def value_kind(self) -> ValueKind:
        """Return the value kind stored in columns of this type."""
        return _VALUE_KINDS[self]

    def accepts(self, value: Value) -> bool:
        """Return whether a value may be stored in a column of this type.

        Null is valid for every type.
        """
        return value.is_null or value.kind is self.value_kind


_TYPE_ALIASES = {
    "INT": "INTEGER",
    "VARCHAR": "STRING",
    "BOOL": "BOOLEAN",
}

_VALUE_KINDS = {
    DataType.INTEGER: ValueKind.INTEGER,
    DataType.STRING: ValueKind.TEXT,
    DataType.BOOLEAN: ValueKind.BOOLEAN,
}


@dataclass(frozen=True, init=False)
class Column:
    """A named, typed column definition."""

    name: str
    data_type: DataType

    def __init__(self, name: str, data_type: DataType | str) -> None:
        if name is None or not name.strip():
            raise ValueError("Column name cannot be empty")
        if data_type is None:
            raise ValueError("Column type cannot be None")
        if isinstance(data_type, str):
            data_type = DataType.from_name(data_type)
        object.__setattr__(self, "name", name.strip().lower())
        object.__setattr__(self, "data_type", data_type)

    def accepts(self, value: Value) -> bool:
        return self.data_type.accepts(value)

    def __str__(self) -> str:
        return f"{self.name}:{self.data_type.value}"


class Row:
    """An ordered, fixed-length tuple of values.

    Rows are immutable: the values are copied into a tuple on construction
    and every accessor hands back that tuple or a single element.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Sequence[Any]) -> None:
        self._values: tuple[Value, ...] = tuple(Value.of(v) for v in values)

    @property
    def values(self) -> tuple[Value, ...]:
        return self._values

    def value(self, index: int) -> Value:
        """Return the value at a column position."""
        if index < 0 or index >= len(self._values):
            raise IndexError(
                f"Column index {index} is out of range. "
                f"Valid range: 0 to {len(self._values) - 1}"
            )
        return self._values[index]

    def to_python(self) -> list[int | str | bool | None]:
        """Return the row as a list of plain Python values."""
        return [v.to_python() for v in self._values]

    def format(self, separator: str = " | ") -> str:
        """Render the values joined by a separator, e.g. ``1 | Alice | NULL``."""
        return separator.join(str(v) for v in self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Value]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"Row({self.to_python()!r})"


class Table:
    """A named table: an ordered column list plus append-only rows."""

    def __init__(self, name: str, columns: Sequence[Column]) -> None:
        if name is None or not name.strip():
            raise ValueError("Table name cannot be empty")
        if not columns:
            raise ValueError("Table must have at least one column")

        self.name = name.strip().lower()
        self._columns: list[Column] = list(columns)
        self._rows: list[Row] = []

        self._column_index: dict[str, int] = {}
        for i, column in enumerate(self._columns):
            if column.name in self._column_index:
                raise ValueError(f"Duplicate column name: {column.name}")
            self._column_index[column.name] = i

    # --- Schema ---

    @property
    def columns(self) -> list[Column]:
        """Return a copy of the column list."""
        return list(self._columns)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self._columns]

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def column_index(self, column_name: str) -> int:
        """Return the position of a column, or -1 if there is no such column."""
        return self._column_index.get(column_name.lower(), -1)

    def get_column(self, column_name: str) -> Column | None:
        index = self.column_index(column_name)
        return self._columns[index] if index >= 0 else None

    def has_column(self, column_name: str) -> bool:
        return column_name.lower() in self._column_index

    # --- Insert ---

    def insert(self, values: Sequence[Any]) -> Row:
        """Validate and append a row, returning it.

        Raises ValueError on an arity or type mismatch; the table is left
        unchanged in that case.
        """
        if len(values) != len(self._columns):
            raise ValueError(
                f"Expected {len(self._columns)} values, got {len(values)}. "
                f"Columns: {self.column_names}"
            )

        typed = [Value.of(v) for v in values]
        for column, value in zip(self._columns, typed):
            if not column.accepts(value):
                raise ValueError(
                    f"Invalid value for column '{column.name}': "
                    f"expected {column.data_type.value}, got {value.kind.value}"
                )

        row = Row(typed)
        self._rows.append(row)
        return row

    # --- Select ---

    def select_all(self) -> list[Row]:
        """Return a snapshot of every row, in insertion order."""
        return list(self._rows)

    def select_where(self, predicate: Callable[[Row], bool]) -> list[Row]:
        """Return the rows for which ``predicate`` is true."""
        return [row for row in self._rows if predicate(row)]

    def filter(self, column_name: str, operator: str, value: Any) -> list[Row]:
        """Return the rows where ``column <operator> value`` holds."""
        index = self.column_index(column_name)
        if index < 0:
            raise ValueError(f"Column not found: {column_name}")
        operand = Value.of(value)
        return self.select_where(
            lambda row: compare_values(row.value(index), operator, operand)
        )

    def __iter__(self) -> Iterator[Row]:
        return iter(list(self._rows))

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self) -> str:
        return (
            f"Table(name={self.name!r}, columns={len(self._columns)}, "
            f"rows={len(self._rows)})"
        )
