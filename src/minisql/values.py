"""Typed cell values and comparison semantics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class ValueKind(Enum):
    """Runtime kind of a cell value."""

    INTEGER = "integer"
    TEXT = "text"
    BOOLEAN = "boolean"
    NULL = "null"

    @property
    def is_orderable(self) -> bool:
        """Return whether values of this kind support <, >, <= and >=."""
        return self in (ValueKind.INTEGER, ValueKind.TEXT)


# Comparison operators accepted in WHERE clauses. "<>" is an alternate
# spelling of "!=" and is normalized by the parser.
EQUALITY_OPERATORS = frozenset({"=", "!=", "<>"})
ORDERING_OPERATORS = frozenset({">", "<", ">=", "<="})
COMPARISON_OPERATORS = EQUALITY_OPERATORS | ORDERING_OPERATORS


@dataclass(frozen=True)
class Value:
    """A single typed value: integer, text, boolean or null.

    Structural equality (``==``) compares kind and payload and is what the
    statement model uses.  SQL equality, where null never equals anything,
    is :meth:`sql_equals`.
    """

    kind: ValueKind
    payload: int | str | bool | None = None

    NULL: ClassVar[Value]

    def __post_init__(self) -> None:
        expected = {
            ValueKind.INTEGER: int,
            ValueKind.TEXT: str,
            ValueKind.BOOLEAN: bool,
        }
        if self.kind is ValueKind.NULL:
            if self.payload is not None:
                raise ValueError("A null value cannot carry a payload")
            return
        py_type = expected[self.kind]
        # bool is a subclass of int, so reject it explicitly for integers
        if not isinstance(self.payload, py_type) or (
            self.kind is ValueKind.INTEGER and isinstance(self.payload, bool)
        ):
            raise ValueError(
                f"Payload {self.payload!r} is not a valid {self.kind.value} value"
            )

    @classmethod
    def integer(cls, number: int) -> Value:
        return cls(ValueKind.INTEGER, number)

    @classmethod
    def text(cls, string: str) -> Value:
        return cls(ValueKind.TEXT, string)

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls(ValueKind.BOOLEAN, flag)

    @classmethod
    def null(cls) -> Value:
        return cls.NULL

    @classmethod
    def of(cls, obj: Any) -> Value:
        """Wrap a plain Python object (or pass a Value through unchanged)."""
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.NULL
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, str):
            return cls.text(obj)
        raise TypeError(f"Unsupported value type: {type(obj).__name__}")

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def to_python(self) -> int | str | bool | None:
        """Return the plain Python payload (None for null)."""
        return self.payload

    def sql_equals(self, other: Value) -> bool:
        """SQL equality: null matches nothing, mismatched kinds never match."""
        if self.is_null or other.is_null:
            return False
        if self.kind is not other.kind:
            return False
        return self.payload == other.payload

    def compare_to(self, other: Value) -> int:
        """Order two values of the same orderable kind.

        Returns a negative number, zero or a positive number.  Raises
        TypeError when the kinds differ or are not orderable.
        """
        if self.kind is not other.kind or not self.kind.is_orderable:
            raise TypeError(
                f"Cannot compare {self.kind.value} with {other.kind.value}"
            )
        if self.payload < other.payload:  # type: ignore[operator]
            return -1
        if self.payload > other.payload:  # type: ignore[operator]
            return 1
        return 0

    def to_sql(self) -> str:
        """Render this value as a literal the parser reads back unchanged."""
        if self.kind is ValueKind.NULL:
            return "NULL"
        if self.kind is ValueKind.BOOLEAN:
            return "TRUE" if self.payload else "FALSE"
        if self.kind is ValueKind.TEXT:
            escaped = self.payload.replace("'", "\\'")  # type: ignore[union-attr]
            return f"'{escaped}'"
        return str(self.payload)

    def __str__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "NULL"
        if self.kind is ValueKind.BOOLEAN:
            return "true" if self.payload else "false"
        return str(self.payload)


Value.NULL = Value(ValueKind.NULL)


def compare_values(row_value: Value, operator: str, value: Value) -> bool:
    """Evaluate ``row_value <operator> value`` with SQL null semantics.

    A null row value never satisfies any operator.  Equality operators
    compare across kinds without error (mismatched kinds are unequal);
    ordering operators require both sides to be integers or both text.
    """
    if operator not in COMPARISON_OPERATORS:
        raise ValueError(f"Unknown operator: {operator}")
    if row_value.is_null:
        return False

    if operator == "=":
        return row_value.sql_equals(value)
    if operator in ("!=", "<>"):
        return not row_value.sql_equals(value)

    comparison = row_value.compare_to(value)
    if operator == ">":
        return comparison > 0
    elif operator == "<":
        return comparison < 0
    elif operator == ">=":
        return comparison >= 0
    else:  # <=
        return comparison <= 0
