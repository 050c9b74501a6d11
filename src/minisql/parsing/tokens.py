"""Token kinds and token values produced by the query lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Every kind of token the lexer can produce."""

    # Keywords
    SELECT = "SELECT"
    INSERT = "INSERT"
    INTO = "INTO"
    VALUES = "VALUES"
    FROM = "FROM"
    WHERE = "WHERE"
    AND = "AND"
    OR = "OR"
    CREATE = "CREATE"
    TABLE = "TABLE"
    JOIN = "JOIN"
    ON = "ON"
    NULL = "NULL"
    TRUE = "TRUE"
    FALSE = "FALSE"

    # Type names
    INTEGER = "INTEGER"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"

    # Names and literals
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING_LITERAL = "STRING_LITERAL"

    # Comparison operators
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    GREATER_EQUALS = "GREATER_EQUALS"
    LESS_EQUALS = "LESS_EQUALS"

    # Punctuation
    ASTERISK = "ASTERISK"
    COMMA = "COMMA"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    SEMICOLON = "SEMICOLON"

    # Special
    END = "END"
    ILLEGAL = "ILLEGAL"

    @property
    def is_keyword(self) -> bool:
        return self in _KEYWORD_KINDS

    @property
    def is_comparison_operator(self) -> bool:
        return self in OPERATOR_TEXT

    @property
    def is_literal(self) -> bool:
        """True for tokens that can stand for a value in a statement."""
        return self in _LITERAL_KINDS

    @staticmethod
    def lookup_keyword(word: str) -> TokenKind | None:
        """Return the keyword kind for a word (case-insensitive), or None."""
        return KEYWORDS.get(word.lower())


# Reserved words, lower-cased. INT, VARCHAR and BOOL are aliases.
KEYWORDS: dict[str, TokenKind] = {
    "select": TokenKind.SELECT,
    "insert": TokenKind.INSERT,
    "into": TokenKind.INTO,
    "values": TokenKind.VALUES,
    "from": TokenKind.FROM,
    "where": TokenKind.WHERE,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "create": TokenKind.CREATE,
    "table": TokenKind.TABLE,
    "join": TokenKind.JOIN,
    "on": TokenKind.ON,
    "null": TokenKind.NULL,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "integer": TokenKind.INTEGER,
    "int": TokenKind.INTEGER,
    "string": TokenKind.STRING,
    "varchar": TokenKind.STRING,
    "boolean": TokenKind.BOOLEAN,
    "bool": TokenKind.BOOLEAN,
}

_KEYWORD_KINDS = frozenset(KEYWORDS.values())

_LITERAL_KINDS = frozenset({
    TokenKind.NUMBER,
    TokenKind.STRING_LITERAL,
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.NULL,
})

# Canonical spelling of each comparison operator
OPERATOR_TEXT: dict[TokenKind, str] = {
    TokenKind.EQUALS: "=",
    TokenKind.NOT_EQUALS: "!=",
    TokenKind.GREATER_THAN: ">",
    TokenKind.LESS_THAN: "<",
    TokenKind.GREATER_EQUALS: ">=",
    TokenKind.LESS_EQUALS: "<=",
}


@dataclass(frozen=True)
class Token:
    """A classified piece of query text.

    ``offset`` is the character position where the token starts, or -1
    when the token was built by hand rather than by the lexer.
    """

    kind: TokenKind
    text: str
    offset: int = -1

    def is_(self, kind: TokenKind) -> bool:
        return self.kind is kind

    def is_one_of(self, *kinds: TokenKind) -> bool:
        return self.kind in kinds

    @property
    def is_keyword(self) -> bool:
        return self.kind.is_keyword

    @property
    def is_comparison_operator(self) -> bool:
        return self.kind.is_comparison_operator

    @property
    def is_literal(self) -> bool:
        return self.kind.is_literal

    @property
    def numeric_value(self) -> int:
        """Integer value of a NUMBER token."""
        if self.kind is not TokenKind.NUMBER:
            raise ValueError(f"{self.kind.value} token has no numeric value")
        return int(self.text)

    @property
    def operator_text(self) -> str:
        """Canonical operator spelling; ``<>`` comes back as ``!=``."""
        return OPERATOR_TEXT.get(self.kind, self.text)

    def __str__(self) -> str:
        if self.offset >= 0:
            return f"Token({self.kind.value}, {self.text!r}, pos={self.offset})"
        return f"Token({self.kind.value}, {self.text!r})"
