"""Lexing and parsing for the SQL query language."""

from minisql.parsing.query_lexer import QueryLexer, tokenize
from minisql.parsing.query_parser import ParseError, QueryParser, parse
from minisql.parsing.statements import (
    InsertStatement,
    SelectStatement,
    Statement,
    WhereClause,
)
from minisql.parsing.tokens import Token, TokenKind

__all__ = [
    "InsertStatement",
    "ParseError",
    "QueryLexer",
    "QueryParser",
    "SelectStatement",
    "Statement",
    "Token",
    "TokenKind",
    "WhereClause",
    "parse",
    "tokenize",
]
