"""Recursive-descent parser for the SQL query language.

Grammar::

    statement   := select_stmt | insert_stmt
    select_stmt := SELECT column_list FROM IDENTIFIER [where_clause] (END | ';')
    column_list := '*' | IDENTIFIER (',' IDENTIFIER)*
    where_clause:= WHERE IDENTIFIER operator value
    operator    := '=' | '!=' | '<>' | '>' | '<' | '>=' | '<='
    value       := NUMBER | STRING_LITERAL | TRUE | FALSE | NULL
    insert_stmt := INSERT INTO IDENTIFIER VALUES '(' value_list ')' (END | ';')
    value_list  := value (',' value)*

The grammar is LL(1): each rule looks only at the current token and never
backtracks.
"""

from __future__ import annotations

from typing import Sequence

from minisql.parsing.query_lexer import QueryLexer, tokenize
from minisql.parsing.statements import (
    InsertStatement,
    SelectStatement,
    Statement,
    WhereClause,
)
from minisql.parsing.tokens import Token, TokenKind
from minisql.values import Value


class ParseError(SyntaxError):
    """Raised when a token sequence does not match the grammar."""

    def __init__(self, message: str, token: Token | None = None) -> None:
        super().__init__(f"Parse error: {message}")
        self.token = token


class QueryParser:
    """Parser for SQL statements."""

    def __init__(self) -> None:
        self.lexer: QueryLexer | None = None
        self._tokens: list[Token] = []
        self._position = 0

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the underlying lexer."""
        self.lexer = QueryLexer()
        self.lexer.build(**kwargs)

    def parse(self, data: str) -> Statement:
        """Parse a query string."""
        if self.lexer is None:
            self.build()
        return self.parse_tokens(self.lexer.tokenize(data))  # type: ignore[union-attr]

    def parse_tokens(self, tokens: Sequence[Token]) -> Statement:
        """Parse an already tokenized statement."""
        self._tokens = list(tokens)
        self._position = 0
        return self._parse_statement()

    # --- Cursor ---

    @property
    def _current(self) -> Token:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return Token(TokenKind.END, "")

    def _advance(self) -> Token:
        token = self._current
        self._position += 1
        return token

    def _expect(self, kind: TokenKind) -> Token:
        token = self._current
        if not token.is_(kind):
            raise ParseError(
                f"Expected {kind.value}, got {token.kind.value} ('{token.text}')",
                token,
            )
        return self._advance()

    def _expect_identifier(self) -> str:
        token = self._current
        if not token.is_(TokenKind.IDENTIFIER):
            raise ParseError(
                "Expected identifier (table or column name), got "
                f"{token.kind.value} ('{token.text}')",
                token,
            )
        return self._advance().text

    def _expect_end(self, statement_name: str) -> None:
        token = self._current
        if not token.is_one_of(TokenKind.END, TokenKind.SEMICOLON):
            raise ParseError(
                f"Unexpected token after {statement_name}: {token.text}", token
            )
        if token.is_(TokenKind.SEMICOLON):
            self._advance()
            if not self._current.is_(TokenKind.END):
                raise ParseError(
                    f"Unexpected token after ';': {self._current.text}",
                    self._current,
                )

    # --- Rules ---

    def _parse_statement(self) -> Statement:
        token = self._current
        if token.is_(TokenKind.SELECT):
            return self._parse_select()
        elif token.is_(TokenKind.INSERT):
            return self._parse_insert()
        elif token.is_(TokenKind.END):
            raise ParseError("Empty SQL statement", token)
        else:
            raise ParseError(
                f"Expected SELECT or INSERT, got {token.kind.value} ('{token.text}')",
                token,
            )

    def _parse_select(self) -> SelectStatement:
        self._expect(TokenKind.SELECT)
        columns = self._parse_column_list()
        self._expect(TokenKind.FROM)
        table = self._expect_identifier()

        where = None
        if self._current.is_(TokenKind.WHERE):
            where = self._parse_where_clause()

        self._expect_end("SELECT")
        return SelectStatement(columns, table, where)

    def _parse_insert(self) -> InsertStatement:
        self._expect(TokenKind.INSERT)
        self._expect(TokenKind.INTO)
        table = self._expect_identifier()
        self._expect(TokenKind.VALUES)
        self._expect(TokenKind.LEFT_PAREN)
        values = self._parse_value_list()
        self._expect(TokenKind.RIGHT_PAREN)

        self._expect_end("INSERT")
        return InsertStatement(table, values)

    def _parse_column_list(self) -> list[str]:
        if self._current.is_(TokenKind.ASTERISK):
            self._advance()
            return ["*"]

        columns = [self._expect_identifier()]
        while self._current.is_(TokenKind.COMMA):
            self._advance()
            columns.append(self._expect_identifier())
        return columns

    def _parse_where_clause(self) -> WhereClause:
        self._expect(TokenKind.WHERE)
        column = self._expect_identifier()
        operator = self._parse_operator()
        value = self._parse_value()
        return WhereClause(column, operator, value)

    def _parse_operator(self) -> str:
        token = self._current
        if not token.is_comparison_operator:
            raise ParseError(
                f"Expected operator (=, !=, <>, >, <, >=, <=), got '{token.text}'",
                token,
            )
        self._advance()
        return token.operator_text

    def _parse_value(self) -> Value:
        token = self._current
        if token.is_(TokenKind.NUMBER):
            self._advance()
            return Value.integer(token.numeric_value)
        elif token.is_(TokenKind.STRING_LITERAL):
            self._advance()
            return Value.text(token.text)
        elif token.is_(TokenKind.TRUE):
            self._advance()
            return Value.boolean(True)
        elif token.is_(TokenKind.FALSE):
            self._advance()
            return Value.boolean(False)
        elif token.is_(TokenKind.NULL):
            self._advance()
            return Value.NULL
        raise ParseError(
            f"Expected value (number, string, true, false, null), got '{token.text}'",
            token,
        )

    def _parse_value_list(self) -> list[Value]:
        values = [self._parse_value()]
        while self._current.is_(TokenKind.COMMA):
            self._advance()
            values.append(self._parse_value())
        return values


def parse(data: str) -> Statement:
    """Tokenize and parse a single statement using the shared lexer."""
    return QueryParser().parse_tokens(tokenize(data))
