"""Query executor for SQL statements."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from minisql.parsing.query_parser import QueryParser
from minisql.parsing.statements import (
    InsertStatement,
    SelectStatement,
    Statement,
    WhereClause,
)
from minisql.table import Row, Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """Result of executing one statement.

    Exactly one shape is populated: rows plus column names (SELECT), an
    affected-row count (INSERT), or an error message.
    """

    success: bool
    rows: list[Row] | None = None
    columns: list[str] | None = None
    rows_affected: int = 0
    error: str | None = None

    @classmethod
    def with_rows(cls, rows: list[Row], columns: list[str]) -> ExecutionResult:
        return cls(
            success=True,
            rows=list(rows),
            columns=list(columns),
            rows_affected=len(rows),
        )

    @classmethod
    def with_count(cls, rows_affected: int) -> ExecutionResult:
        return cls(success=True, rows_affected=rows_affected)

    @classmethod
    def failure(cls, message: str) -> ExecutionResult:
        return cls(success=False, error=message)

    @property
    def has_rows(self) -> bool:
        return self.rows is not None


@dataclass
class QueryExecutor:
    """Executes SQL statements against a catalog of in-memory tables.

    The catalog maps lower-cased table names to tables; callers populate it
    with :meth:`add_table` or by passing a mapping in.  No locking is done
    here, so concurrent callers must serialize access themselves.
    """

    tables: dict[str, Table] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.tables = {name.lower(): table for name, table in self.tables.items()}
        self._parser = QueryParser()

    # --- Catalog ---

    def add_table(self, table: Table) -> None:
        """Register a table under its (lower-cased) name, replacing any other."""
        self.tables[table.name.lower()] = table

    def get_table(self, name: str) -> Table | None:
        return self.tables.get(name.lower())

    @property
    def table_names(self) -> list[str]:
        return list(self.tables)

    # --- Execution ---

    def execute(self, sql: str) -> ExecutionResult:
        """Parse and execute a query string.

        Never raises: parse and runtime errors come back as a failed result.
        """
        try:
            statement = self._parser.parse(sql)
            return self.execute_statement(statement)
        except SyntaxError as e:
            logger.warning("Rejected query %r: %s", sql, e)
            return ExecutionResult.failure(str(e))
        except Exception as e:
            logger.warning("Query %r failed: %s", sql, e)
            return ExecutionResult.failure(f"Execution error: {e}")

    def execute_statement(self, statement: Statement) -> ExecutionResult:
        """Execute a parsed statement.

        Unknown tables and rejected inserts produce a failed result; unknown
        columns and invalid comparisons raise.
        """
        logger.debug("Executing %s", statement)
        if isinstance(statement, SelectStatement):
            return self._execute_select(statement)
        elif isinstance(statement, InsertStatement):
            return self._execute_insert(statement)
        else:
            raise ValueError(f"Unknown statement type: {type(statement).__name__}")

    def _execute_select(self, statement: SelectStatement) -> ExecutionResult:
        table = self.tables.get(statement.table)
        if table is None:
            return ExecutionResult.failure(f"Table not found: {statement.table}")

        if statement.where is not None:
            rows = self._apply_where(table, statement.where)
        else:
            rows = table.select_all()

        if statement.is_select_all:
            return ExecutionResult.with_rows(rows, table.column_names)

        columns = list(statement.columns)
        return ExecutionResult.with_rows(
            self._project(table, rows, columns), columns
        )

    def _apply_where(self, table: Table, where: WhereClause) -> list[Row]:
        if not table.has_column(where.column):
            raise ValueError(f"Column not found: {where.column}")
        return table.filter(where.column, where.operator, where.value)

    def _project(self, table: Table, rows: list[Row], columns: list[str]) -> list[Row]:
        """Build new rows holding only the requested columns, in request order."""
        indices = []
        for name in columns:
            index = table.column_index(name)
            if index < 0:
                raise ValueError(f"Column not found: {name}")
            indices.append(index)
        return [Row([row.value(i) for i in indices]) for row in rows]

    def _execute_insert(self, statement: InsertStatement) -> ExecutionResult:
        table = self.tables.get(statement.table)
        if table is None:
            return ExecutionResult.failure(f"Table not found: {statement.table}")

        try:
            table.insert(statement.values)
        except ValueError as e:
            return ExecutionResult.failure(f"Insert failed: {e}")
        return ExecutionResult.with_count(1)
