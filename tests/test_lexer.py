# =============================================================================
# test_lexer.py - Lexer Unit Tests
# =============================================================================
# Tests for the SimpleLang lexer/tokenizer and its character source.
#
# Test coverage includes:
#   - Keywords, identifiers and numbers
#   - '=' versus '==' disambiguation
#   - Single character tokens and UNKNOWN characters
#   - Identifier/number truncation
#   - Token locations
#   - One-token pushback and the token observer
# =============================================================================

import io

import pytest
from simplelang.lexer import Lexer, Token, TokenType
from simplelang.source import CharSource


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str, **kwargs) -> list:
    """Tokenize and drop the trailing EOF token."""
    lexer = Lexer(source, "<test>", **kwargs)
    return [t for t in lexer.tokenize() if t.type != TokenType.EOF]


def kinds(source: str) -> list:
    return [t.type for t in tokenize(source)]


# =============================================================================
# Character Source Tests
# =============================================================================

class TestCharSource:
    """Tests for the read_char/unread_char pull interface."""

    def test_read_until_end(self):
        src = CharSource.from_string("ab")
        assert src.read_char() == "a"
        assert src.read_char() == "b"
        assert src.read_char() == ""
        assert src.read_char() == ""

    def test_unread_returns_same_character(self):
        src = CharSource.from_string("xy")
        char = src.read_char()
        src.unread_char(char)
        assert src.read_char() == "x"
        assert src.read_char() == "y"

    def test_unread_restores_position_across_newline(self):
        """Handing back a newline moves back to the end of the previous line."""
        src = CharSource.from_string("a\nb")
        src.read_char()
        newline = src.read_char()
        assert (src.line, src.column) == (2, 1)
        src.unread_char(newline)
        assert (src.line, src.column) == (1, 2)

    def test_unread_of_end_of_input_is_ignored(self):
        src = CharSource.from_string("")
        src.unread_char(src.read_char())
        assert src.read_char() == ""

    def test_double_unread_rejected(self):
        src = CharSource.from_string("ab")
        src.unread_char(src.read_char())
        with pytest.raises(RuntimeError):
            src.unread_char("z")

    def test_reads_from_stream(self):
        src = CharSource(io.StringIO("int"), "prog.sl")
        assert src.read_char() == "i"
        assert src.location.filename == "prog.sl"


# =============================================================================
# Basic Token Recognition Tests
# =============================================================================

class TestBasicTokens:
    """Test basic token recognition for simple inputs."""

    def test_empty_source(self):
        """Empty source should produce only EOF."""
        tokens = list(Lexer("").tokenize())
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].text == ""

    def test_whitespace_only(self):
        assert tokenize("  \t\n\r\n  ") == []

    def test_keywords(self):
        assert kinds("int if") == [TokenType.INT, TokenType.IF]

    def test_keyword_prefix_is_identifier(self):
        """Words that merely start with a keyword are identifiers."""
        tokens = tokenize("integer iff in")
        assert [t.type for t in tokens] == [TokenType.IDENTIFIER] * 3
        assert [t.text for t in tokens] == ["integer", "iff", "in"]

    def test_identifier_with_digits(self):
        tokens = tokenize("count2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].text == "count2"

    def test_keywords_are_case_sensitive(self):
        assert kinds("INT If") == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_number(self):
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].text == "42"

    def test_number_keeps_leading_zeros(self):
        assert tokenize("007")[0].text == "007"

    def test_number_followed_by_letters(self):
        """Numbers stop at the first non-digit."""
        tokens = tokenize("12ab")
        assert [(t.type, t.text) for t in tokens] == [
            (TokenType.NUMBER, "12"),
            (TokenType.IDENTIFIER, "ab"),
        ]

    def test_no_signed_numbers(self):
        assert kinds("-5") == [TokenType.MINUS, TokenType.NUMBER]

    def test_delimiters_and_operators(self):
        assert kinds("+ - ( ) { } ;") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.SEMICOLON,
        ]

    def test_tokens_without_spaces(self):
        assert kinds("x=y+1;") == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.IDENTIFIER,
            TokenType.PLUS,
            TokenType.NUMBER,
            TokenType.SEMICOLON,
        ]


# =============================================================================
# Assignment vs. Equality
# =============================================================================

class TestEquals:
    """'=' and '==' need one character of lookahead."""

    def test_assign(self):
        tokens = tokenize("=")
        assert tokens[0].type == TokenType.ASSIGN
        assert tokens[0].text == "="

    def test_equal(self):
        tokens = tokenize("==")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EQUAL
        assert tokens[0].text == "=="

    def test_separated_equals_are_two_assigns(self):
        assert kinds("= =") == [TokenType.ASSIGN, TokenType.ASSIGN]

    def test_triple_equals(self):
        assert kinds("===") == [TokenType.EQUAL, TokenType.ASSIGN]

    def test_assign_followed_by_number(self):
        assert kinds("=5") == [TokenType.ASSIGN, TokenType.NUMBER]


# =============================================================================
# Unknown Characters
# =============================================================================

class TestUnknown:
    """Unrecognised characters become UNKNOWN tokens, not errors."""

    @pytest.mark.parametrize("char", ["*", "/", "_", "@", "<", "!", "#"])
    def test_unknown_character(self, char):
        tokens = tokenize(char)
        assert tokens[0].type == TokenType.UNKNOWN
        assert tokens[0].text == char

    def test_underscore_splits_identifier(self):
        """Only letters and digits continue an identifier."""
        assert kinds("a_b") == [
            TokenType.IDENTIFIER,
            TokenType.UNKNOWN,
            TokenType.IDENTIFIER,
        ]


# =============================================================================
# Truncation
# =============================================================================

class TestTruncation:
    """Identifier and number text is bounded by max_token_length."""

    def test_long_identifier_truncated(self):
        tokens = tokenize("a" * 150 + ";")
        assert tokens[0].text == "a" * 99
        # Remaining characters are consumed, not turned into another token
        assert tokens[1].type == TokenType.SEMICOLON

    def test_long_number_truncated(self):
        tokens = tokenize("1" * 120, max_token_length=10)
        assert tokens[0].text == "1" * 10
        assert len(tokens) == 1

    def test_truncation_disabled(self):
        tokens = tokenize("b" * 150, max_token_length=None)
        assert tokens[0].text == "b" * 150


# =============================================================================
# Location Tests
# =============================================================================

class TestLocations:
    """Tokens carry the line and column where they start."""

    def test_first_token(self):
        token = tokenize("int")[0]
        assert (token.line, token.column) == (1, 1)

    def test_columns_on_one_line(self):
        tokens = tokenize("int x;")
        assert [t.column for t in tokens] == [1, 5, 6]

    def test_second_line(self):
        tokens = tokenize("int x;\n  y")
        assert (tokens[-1].line, tokens[-1].column) == (2, 3)

    def test_equal_location(self):
        token = tokenize("a == b")[1]
        assert (token.line, token.column) == (1, 3)

    def test_eof_location(self):
        eof = list(Lexer("int x;").tokenize())[-1]
        assert (eof.line, eof.column) == (1, 7)

    def test_location_uses_filename(self):
        token = list(Lexer("x", "prog.sl").tokenize())[0]
        assert str(token.location) == "prog.sl:1:1"


# =============================================================================
# Pushback and Observer
# =============================================================================

class TestPushback:
    """One token may be handed back to the lexer."""

    def test_pushback_returns_same_token(self):
        lexer = Lexer("a b")
        first = lexer.next_token()
        lexer.push_back(first)
        assert lexer.next_token() is first
        assert lexer.next_token().text == "b"

    def test_double_pushback_rejected(self):
        lexer = Lexer("a b")
        lexer.push_back(lexer.next_token())
        with pytest.raises(RuntimeError):
            lexer.push_back(Token(TokenType.SEMICOLON, ";"))

    def test_eof_repeats(self):
        lexer = Lexer("")
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF

    def test_token_count_ignores_pushback(self):
        lexer = Lexer("a b")
        token = lexer.next_token()
        lexer.push_back(token)
        lexer.next_token()
        lexer.next_token()
        assert lexer.token_count == 2

    def test_observer_sees_each_token_once(self):
        seen = []
        lexer = Lexer("x = 1;", on_token=seen.append)
        token = lexer.next_token()
        lexer.push_back(token)
        list(lexer.tokenize())
        assert [t.type for t in seen] == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.NUMBER,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]

    def test_accepts_char_source(self):
        lexer = Lexer(CharSource.from_string("if", "f.sl"))
        token = lexer.next_token()
        assert token.type == TokenType.IF
        assert token.filename == "f.sl"


class TestTokenFormatting:
    """repr, error description and trace formatting."""

    def test_trace_line(self):
        assert Token(TokenType.INT, "int").trace_line() == "Token: TOKEN_INT ('int')"

    def test_trace_line_eof(self):
        assert Token(TokenType.EOF, "").trace_line() == "Token: TOKEN_EOF ('')"

    def test_describe(self):
        assert Token(TokenType.NUMBER, "5").describe() == "'5'"
        assert Token(TokenType.EOF, "").describe() == "end of input"

    def test_repr(self):
        assert repr(Token(TokenType.IDENTIFIER, "x", 2, 3)) == "Token(IDENTIFIER, 'x', 2:3)"
        assert repr(Token(TokenType.EOF, "", 1, 1)) == "Token(EOF, 1:1)"
