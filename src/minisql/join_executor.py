"""Nested-loop joins between two tables."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from minisql.table import Column, Row, Table
from minisql.values import Value

logger = logging.getLogger(__name__)


@dataclass
class JoinResult:
    """Rows produced by joining a left table with a right table.

    Columns are the left table's followed by the right table's; each also
    has a qualified ``table.column`` name so duplicate names stay distinct.
    """

    left_table_name: str
    right_table_name: str
    columns: list[Column] = field(default_factory=list)
    qualified_column_names: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    @classmethod
    def for_tables(cls, left: Table, right: Table) -> JoinResult:
        """Create an empty result with the combined schema of two tables."""
        result = cls(left.name, right.name)
        result._add_columns(left)
        result._add_columns(right)
        return result

    def _add_columns(self, table: Table) -> None:
        for column in table.columns:
            self.columns.append(column)
            self.qualified_column_names.append(f"{table.name}.{column.name}")

    def add_joined_row(self, left_row: Row, right_row: Row) -> None:
        self.rows.append(Row(left_row.values + right_row.values))

    def add_left_padded_row(self, left_row: Row, right_column_count: int) -> None:
        """Add an unmatched left row, with nulls in place of the right side."""
        self.rows.append(Row(left_row.values + (Value.NULL,) * right_column_count))

    def add_right_padded_row(self, right_row: Row, left_column_count: int) -> None:
        """Add an unmatched right row, with nulls in place of the left side."""
        self.rows.append(Row((Value.NULL,) * left_column_count + right_row.values))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def column_index(self, qualified_name: str) -> int:
        """Return the position of a ``table.column`` name, or -1."""
        try:
            return self.qualified_column_names.index(qualified_name.lower())
        except ValueError:
            return -1

    def column_index_by_name(self, column_name: str) -> int:
        """Return the first column whose qualified name ends in ``.name``, or -1."""
        suffix = "." + column_name.lower()
        for i, qualified in enumerate(self.qualified_column_names):
            if qualified.endswith(suffix):
                return i
        return -1

    def value(self, row: Row, name: str) -> Value:
        """Look up a value in a result row by qualified or bare column name."""
        index = self.column_index(name) if "." in name else self.column_index_by_name(name)
        if index < 0:
            raise KeyError(f"Column not in join result: {name}")
        return row.value(index)


@dataclass(frozen=True)
class JoinStats:
    """Observations from a join run."""

    left_rows: int
    right_rows: int
    comparisons: int
    result_rows: int
    elapsed_ms: float


class JoinExecutor:
    """Inner, left outer, right outer and cross joins by nested loops.

    Join keys match with SQL equality: null never matches, not even null.
    """

    def inner_join(
        self, left: Table, right: Table, left_column: str, right_column: str
    ) -> JoinResult:
        """Combine every pair of rows whose join keys are equal."""
        left_index, right_index = self._resolve_columns(
            left, right, left_column, right_column
        )
        result = JoinResult.for_tables(left, right)
        right_rows = right.select_all()

        for left_row in left.select_all():
            left_value = left_row.value(left_index)
            for right_row in right_rows:
                if left_value.sql_equals(right_row.value(right_index)):
                    result.add_joined_row(left_row, right_row)

        return result

    def left_join(
        self, left: Table, right: Table, left_column: str, right_column: str
    ) -> JoinResult:
        """Inner join, plus each unmatched left row padded with nulls."""
        left_index, right_index = self._resolve_columns(
            left, right, left_column, right_column
        )
        result = JoinResult.for_tables(left, right)
        right_rows = right.select_all()

        for left_row in left.select_all():
            left_value = left_row.value(left_index)
            matched = False
            for right_row in right_rows:
                if left_value.sql_equals(right_row.value(right_index)):
                    result.add_joined_row(left_row, right_row)
                    matched = True
            if not matched:
                result.add_left_padded_row(left_row, right.column_count)

        return result

    def right_join(
        self, left: Table, right: Table, left_column: str, right_column: str
    ) -> JoinResult:
        """Inner join, plus each unmatched right row padded with nulls.

        Matched right rows are tracked by position so duplicate keys on the
        right are each accounted for.  Unmatched right rows follow all
        matched pairs, in right-table order.
        """
        left_index, right_index = self._resolve_columns(
            left, right, left_column, right_column
        )
        result = JoinResult.for_tables(left, right)
        right_rows = right.select_all()
        matched_positions: set[int] = set()

        for left_row in left.select_all():
            left_value = left_row.value(left_index)
            for position, right_row in enumerate(right_rows):
                if left_value.sql_equals(right_row.value(right_index)):
                    result.add_joined_row(left_row, right_row)
                    matched_positions.add(position)

        for position, right_row in enumerate(right_rows):
            if position not in matched_positions:
                result.add_right_padded_row(right_row, left.column_count)

        return result

    def cross_join(self, left: Table, right: Table) -> JoinResult:
        """Pair every left row with every right row."""
        result = JoinResult.for_tables(left, right)
        right_rows = right.select_all()
        for left_row in left.select_all():
            for right_row in right_rows:
                result.add_joined_row(left_row, right_row)
        return result

    def inner_join_with_stats(
        self, left: Table, right: Table, left_column: str, right_column: str
    ) -> tuple[JoinResult, JoinStats]:
        """Run :meth:`inner_join` and report timing and comparison counts."""
        start = time.perf_counter()
        result = self.inner_join(left, right, left_column, right_column)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        stats = JoinStats(
            left_rows=left.row_count,
            right_rows=right.row_count,
            comparisons=left.row_count * right.row_count,
            result_rows=result.row_count,
            elapsed_ms=elapsed_ms,
        )
        logger.debug(
            "Inner join %s x %s: %d comparisons, %d rows, %.2f ms",
            left.name,
            right.name,
            stats.comparisons,
            stats.result_rows,
            stats.elapsed_ms,
        )
        return result, stats

    @staticmethod
    def _resolve_columns(
        left: Table, right: Table, left_column: str, right_column: str
    ) -> tuple[int, int]:
        left_index = left.column_index(left_column)
        if left_index < 0:
            raise ValueError(
                f"Column '{left_column}' not found in table '{left.name}'"
            )
        right_index = right.column_index(right_column)
        if right_index < 0:
            raise ValueError(
                f"Column '{right_column}' not found in table '{right.name}'"
            )
        return left_index, right_index
