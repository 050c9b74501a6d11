"""Tests for the SQL query lexer."""

import pytest

from minisql.parsing.query_lexer import QueryLexer, tokenize
from minisql.parsing.tokens import Token, TokenKind


def kinds(text):
    return [t.kind for t in tokenize(text)]


class TestQueryLexer:
    """Tests for tokenizing whole queries."""

    def test_tokenize_select_where(self):
        """Test the canonical SELECT ... WHERE example."""
        tokens = tokenize("SELECT * FROM users WHERE age > 25")

        assert [t.kind for t in tokens] == [
            TokenKind.SELECT,
            TokenKind.ASTERISK,
            TokenKind.FROM,
            TokenKind.IDENTIFIER,
            TokenKind.WHERE,
            TokenKind.IDENTIFIER,
            TokenKind.GREATER_THAN,
            TokenKind.NUMBER,
            TokenKind.END,
        ]
        assert tokens[3].text == "users"
        assert tokens[5].text == "age"
        assert tokens[7].text == "25"

    def test_offsets(self):
        """Each token records where it starts; END sits at the input length."""
        tokens = tokenize("SELECT * FROM users WHERE age > 25")
        assert [t.offset for t in tokens] == [0, 7, 9, 14, 20, 26, 30, 32, 34]

    def test_always_ends_with_single_end(self):
        """Test that every token list ends with exactly one END token."""
        for text in ["", "   ", "SELECT", "'open string", "!!!", "a;b;"]:
            tokens = tokenize(text)
            assert tokens[-1].kind is TokenKind.END
            assert sum(1 for t in tokens if t.kind is TokenKind.END) == 1

    def test_empty_input(self):
        assert tokenize("") == [Token(TokenKind.END, "", 0)]

    def test_deterministic(self):
        """Tokenizing the same text twice gives the same tokens."""
        text = "INSERT INTO t VALUES (1, 'x', true, null);"
        assert tokenize(text) == tokenize(text)

    def test_lexer_instance_is_reusable(self):
        """Test that one lexer can tokenize several inputs in a row."""
        lexer = QueryLexer()
        lexer.build()

        first = lexer.tokenize("SELECT a FROM t")
        second = lexer.tokenize("INSERT INTO t VALUES (1)")

        assert first[0].kind is TokenKind.SELECT
        assert second[0].kind is TokenKind.INSERT
        assert second[0].offset == 0


class TestKeywordsAndIdentifiers:
    """Tests for word tokens."""

    def test_keywords_are_case_insensitive(self):
        tokens = tokenize("select From wHeRe")
        assert [t.kind for t in tokens[:3]] == [
            TokenKind.SELECT,
            TokenKind.FROM,
            TokenKind.WHERE,
        ]
        assert [t.text for t in tokens[:3]] == ["SELECT", "FROM", "WHERE"]

    def test_identifier_keeps_case(self):
        tokens = tokenize("Users user_Name _tmp1")
        assert [t.kind for t in tokens[:3]] == [TokenKind.IDENTIFIER] * 3
        assert [t.text for t in tokens[:3]] == ["Users", "user_Name", "_tmp1"]

    def test_type_aliases(self):
        """Test that INT, VARCHAR and BOOL map to the type keywords."""
        assert kinds("int integer varchar string bool boolean")[:6] == [
            TokenKind.INTEGER,
            TokenKind.INTEGER,
            TokenKind.STRING,
            TokenKind.STRING,
            TokenKind.BOOLEAN,
            TokenKind.BOOLEAN,
        ]

    def test_literal_keywords(self):
        assert kinds("NULL true FALSE")[:3] == [
            TokenKind.NULL,
            TokenKind.TRUE,
            TokenKind.FALSE,
        ]

    def test_word_with_keyword_prefix_is_identifier(self):
        tokens = tokenize("selected fromage")
        assert tokens[0].kind is TokenKind.IDENTIFIER
        assert tokens[1].kind is TokenKind.IDENTIFIER

    def test_number_then_word(self):
        """A digit run stops at the first letter."""
        tokens = tokenize("123abc")
        assert tokens[0] == Token(TokenKind.NUMBER, "123", 0)
        assert tokens[1] == Token(TokenKind.IDENTIFIER, "abc", 3)


class TestStringLiterals:
    """Tests for quoted strings."""

    def test_single_quoted(self):
        tokens = tokenize("'Alice'")
        assert tokens[0] == Token(TokenKind.STRING_LITERAL, "Alice", 0)

    def test_double_quoted(self):
        tokens = tokenize('"Bob Smith"')
        assert tokens[0] == Token(TokenKind.STRING_LITERAL, "Bob Smith", 0)

    def test_case_preserved(self):
        tokens = tokenize("'SeLeCt'")
        assert tokens[0].kind is TokenKind.STRING_LITERAL
        assert tokens[0].text == "SeLeCt"

    def test_escaped_quote(self):
        tokens = tokenize(r"'it\'s'")
        assert tokens[0].text == "it's"
        assert tokens[1].kind is TokenKind.END

    def test_other_quote_needs_no_escape(self):
        tokens = tokenize("'say \"hi\"'")
        assert tokens[0].text == 'say "hi"'

    def test_backslash_before_other_char_is_literal(self):
        tokens = tokenize(r"'a\nb'")
        assert tokens[0].text == "a\\nb"

    def test_unterminated_runs_to_end(self):
        tokens = tokenize("SELECT 'abc def")
        assert tokens[1] == Token(TokenKind.STRING_LITERAL, "abc def", 7)
        assert tokens[2].kind is TokenKind.END

    def test_empty_string(self):
        tokens = tokenize("''")
        assert tokens[0] == Token(TokenKind.STRING_LITERAL, "", 0)


class TestOperatorsAndPunctuation:
    """Tests for symbol tokens."""

    def test_punctuation(self):
        assert kinds("*,();")[:5] == [
            TokenKind.ASTERISK,
            TokenKind.COMMA,
            TokenKind.LEFT_PAREN,
            TokenKind.RIGHT_PAREN,
            TokenKind.SEMICOLON,
        ]

    @pytest.mark.parametrize(
        "text, kind",
        [
            ("=", TokenKind.EQUALS),
            ("!=", TokenKind.NOT_EQUALS),
            ("<>", TokenKind.NOT_EQUALS),
            (">", TokenKind.GREATER_THAN),
            ("<", TokenKind.LESS_THAN),
            (">=", TokenKind.GREATER_EQUALS),
            ("<=", TokenKind.LESS_EQUALS),
        ],
    )
    def test_comparison_operators(self, text, kind):
        tokens = tokenize(text)
        assert len(tokens) == 2
        assert tokens[0].kind is kind
        assert tokens[0].text == text

    def test_operators_without_spaces(self):
        assert kinds("a>=1")[:3] == [
            TokenKind.IDENTIFIER,
            TokenKind.GREATER_EQUALS,
            TokenKind.NUMBER,
        ]

    def test_bang_alone_is_illegal(self):
        tokens = tokenize("a ! b")
        assert tokens[1] == Token(TokenKind.ILLEGAL, "!", 2)
        assert tokens[2].kind is TokenKind.IDENTIFIER

    def test_unknown_characters_are_illegal(self):
        """Test that scanning continues past unrecognized characters."""
        tokens = tokenize("a @ # b")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.ILLEGAL,
            TokenKind.ILLEGAL,
            TokenKind.IDENTIFIER,
            TokenKind.END,
        ]
        assert tokens[1].text == "@"
        assert tokens[2].text == "#"

    def test_negative_number_is_not_a_literal(self):
        """Numbers carry no sign; '-' is not part of the language."""
        tokens = tokenize("-5")
        assert tokens[0].kind is TokenKind.ILLEGAL
        assert tokens[1] == Token(TokenKind.NUMBER, "5", 1)


class TestTokenKind:
    """Tests for token classification."""

    def test_is_keyword(self):
        assert TokenKind.SELECT.is_keyword
        assert TokenKind.BOOLEAN.is_keyword
        assert not TokenKind.IDENTIFIER.is_keyword
        assert not TokenKind.EQUALS.is_keyword

    def test_is_comparison_operator(self):
        assert TokenKind.LESS_EQUALS.is_comparison_operator
        assert not TokenKind.ASTERISK.is_comparison_operator

    def test_is_literal(self):
        for kind in (
            TokenKind.NUMBER,
            TokenKind.STRING_LITERAL,
            TokenKind.TRUE,
            TokenKind.FALSE,
            TokenKind.NULL,
        ):
            assert kind.is_literal
        assert not TokenKind.IDENTIFIER.is_literal

    def test_lookup_keyword(self):
        assert TokenKind.lookup_keyword("VarChar") is TokenKind.STRING
        assert TokenKind.lookup_keyword("users") is None

    def test_token_helpers(self):
        token = Token(TokenKind.NOT_EQUALS, "<>", 4)
        assert token.is_(TokenKind.NOT_EQUALS)
        assert token.is_one_of(TokenKind.EQUALS, TokenKind.NOT_EQUALS)
        assert token.operator_text == "!="
        assert Token(TokenKind.NUMBER, "42").numeric_value == 42
        with pytest.raises(ValueError):
            Token(TokenKind.IDENTIFIER, "x").numeric_value
