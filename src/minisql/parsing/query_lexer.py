"""Lexer for the SQL query language."""

from __future__ import annotations

import ply.lex as lex

from minisql.parsing.tokens import KEYWORDS, Token, TokenKind

# A quoted string in either quote style. A backslash directly before the
# matching quote escapes it; a missing closing quote runs to end of input.
_STRING_PATTERN = r"""'(?:\\'|[^'])*'?|"(?:\\"|[^"])*"?"""


class QueryLexer:
    """Lexer for tokenizing SQL queries.

    Every character of the input ends up in some token: characters that
    start no valid token become one-character ILLEGAL tokens so that the
    parser can report them.
    """

    tokens = [kind.name for kind in TokenKind]

    # Punctuation
    t_ASTERISK = r"\*"
    t_COMMA = r","
    t_LEFT_PAREN = r"\("
    t_RIGHT_PAREN = r"\)"
    t_SEMICOLON = r";"

    # Comparison operators. PLY sorts string-defined tokens longest-first
    t_NOT_EQUALS = r"!=|<>"
    t_GREATER_EQUALS = r">="
    t_LESS_EQUALS = r"<="
    t_GREATER_THAN = r">"
    t_LESS_THAN = r"<"
    t_EQUALS = r"="

    t_ignore = " \t\r\n\f\v"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_NUMBER(self, t: lex.LexToken) -> lex.LexToken:
        r"\d+"
        return t

    @lex.TOKEN(_STRING_PATTERN)
    def t_STRING_LITERAL(self, t: lex.LexToken) -> lex.LexToken:
        t.value = _unquote(t.value)
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\W\d]\w*"
        kind = KEYWORDS.get(t.value.lower())
        if kind is not None:
            t.type = kind.name
            t.value = t.value.upper()
        return t

    def t_error(self, t: lex.LexToken) -> lex.LexToken:
        t.type = TokenKind.ILLEGAL.name
        t.value = t.value[0]
        t.lexer.skip(1)
        return t

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        if self.lexer is None:
            self.build()
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next raw PLY token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[Token]:
        """Tokenize the input, always ending with a single END token."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(Token(TokenKind[tok.type], tok.value, tok.lexpos))
        tokens.append(Token(TokenKind.END, "", len(data)))
        return tokens


def _unquote(raw: str) -> str:
    """Strip the quotes from a string literal and resolve escaped quotes."""
    quote = raw[0]
    chars = []
    i = 1
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and i + 1 < len(raw) and raw[i + 1] == quote:
            chars.append(quote)
            i += 2
        elif ch == quote:
            break
        else:
            chars.append(ch)
            i += 1
    return "".join(chars)


_default_lexer: QueryLexer | None = None


def tokenize(data: str) -> list[Token]:
    """Tokenize a query string with a shared lexer instance."""
    global _default_lexer
    if _default_lexer is None:
        _default_lexer = QueryLexer()
        _default_lexer.build()
    return _default_lexer.tokenize(data)
