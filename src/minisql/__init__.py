"""MiniSQL - A minimal in-memory relational query engine."""

from minisql.join_executor import JoinExecutor, JoinResult, JoinStats
from minisql.parsing import (
    InsertStatement,
    ParseError,
    QueryParser,
    SelectStatement,
    WhereClause,
    parse,
    tokenize,
)
from minisql.query_executor import ExecutionResult, QueryExecutor
from minisql.table import Column, DataType, Row, Table
from minisql.values import Value, ValueKind, compare_values

__all__ = [
    # Query pipeline
    "QueryExecutor",
    "ExecutionResult",
    "QueryParser",
    "ParseError",
    "parse",
    "tokenize",
    # Statements
    "SelectStatement",
    "InsertStatement",
    "WhereClause",
    # Joins
    "JoinExecutor",
    "JoinResult",
    "JoinStats",
    # Storage
    "Table",
    "Column",
    "Row",
    "DataType",
    # Values
    "Value",
    "ValueKind",
    "compare_values",
]

__version__ = "0.1.0"
