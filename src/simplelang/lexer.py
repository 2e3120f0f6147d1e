"""
SimpleLang Lexer (Tokenizer)
============================

This module converts a character source into SimpleLang tokens. The parser
pulls tokens one at a time with ``next_token()`` and may hand a single token
back with ``push_back()`` when it has looked one token too far.

Token Categories
----------------
- Keywords: int, if
- Identifiers: a letter followed by letters/digits
- Numbers: decimal digits only (no sign, no fraction)
- Operators: = == + -
- Delimiters: ( ) { } ;
- UNKNOWN: any other single character. This is not an error by itself;
  the parser rejects it when it appears where it does not belong.

Identifier and number text is truncated to ``max_token_length`` characters
(99 by default); the extra characters are still consumed.

Example Usage
-------------
>>> from simplelang.lexer import Lexer
>>> lexer = Lexer("int x;")
>>> for token in lexer.tokenize():
...     print(token)
Token(INT, 'int', 1:1)
Token(IDENTIFIER, 'x', 1:5)
Token(SEMICOLON, ';', 1:6)
Token(EOF, 1:7)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterator, Optional, Union
import logging
import string

from simplelang.errors import SourceLocation
from simplelang.source import CharSource

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token kinds of the SimpleLang language."""

    # === Keywords ===
    INT = auto()            # int
    IF = auto()             # if

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable names
    NUMBER = auto()         # Unsigned decimal literals

    # === Operators ===
    ASSIGN = auto()         # =
    EQUAL = auto()          # ==
    PLUS = auto()           # +
    MINUS = auto()          # -

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    SEMICOLON = auto()      # ;

    # === Structural ===
    EOF = auto()            # End of input
    UNKNOWN = auto()        # Any other character


KEYWORDS: dict[str, TokenType] = {
    "int": TokenType.INT,
    "if": TokenType.IF,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
}

DEFAULT_MAX_TOKEN_LENGTH = 99


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of SimpleLang source.

    Attributes:
        type: The TokenType classification
        text: The (possibly truncated) source text; "" for EOF
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    text: str
    line: int = 1
    column: int = 1
    filename: str = "<input>"

    def __repr__(self) -> str:
        if self.text:
            return f"Token({self.type.name}, {self.text!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        return f"'{self.text}'"

    def trace_line(self) -> str:
        """Render the token in the trace format: Token: TOKEN_INT ('int')."""
        return f"Token: TOKEN_{self.type.name} ('{self.text}')"


TokenObserver = Callable[[Token], None]


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes SimpleLang source with one token of pushback.

    Usage:
        lexer = Lexer(source_text, "prog.sl")
        token = lexer.next_token()
        lexer.push_back(token)      # next call returns the same token

    Attributes:
        source: The CharSource being read
        max_token_length: Characters kept for identifier/number text
            (None keeps everything)
        token_count: Number of tokens scanned from the source so far
    """

    IDENT_START = string.ascii_letters
    IDENT_CHARS = string.ascii_letters + string.digits
    WHITESPACE = " \t\n\r\v\f"

    def __init__(
        self,
        source: Union[CharSource, str],
        filename: str = "<input>",
        max_token_length: Optional[int] = DEFAULT_MAX_TOKEN_LENGTH,
        on_token: Optional[TokenObserver] = None,
    ):
        """
        Initialize the lexer.

        Args:
            source: A CharSource, or source text to wrap in one
            filename: Source filename when ``source`` is a string
            max_token_length: Truncation limit for identifier/number text
            on_token: Observer called once for every freshly scanned token
        """
        if isinstance(source, str):
            source = CharSource.from_string(source, filename)
        self.source = source
        self.max_token_length = max_token_length
        self.token_count = 0
        self._on_token = on_token

        # One-token pushback slot
        self._pushed_back: Optional[Token] = None

    # =========================================================================
    # Public Interface
    # =========================================================================

    def next_token(self) -> Token:
        """
        Return the pending pushed-back token, or scan the next one.

        After end of input every call returns an EOF token.
        """
        if self._pushed_back is not None:
            token = self._pushed_back
            self._pushed_back = None
            return token

        token = self._scan_token()
        self.token_count += 1
        logger.debug(f"Scanned {token!r}")
        if self._on_token is not None:
            self._on_token(token)
        return token

    def push_back(self, token: Token) -> None:
        """
        Store one token to be returned by the next ``next_token()`` call.

        Raises:
            RuntimeError: If a token is already pending
        """
        if self._pushed_back is not None:
            raise RuntimeError(
                f"token pushback slot already holds {self._pushed_back!r}"
            )
        self._pushed_back = token

    def tokenize(self) -> Iterator[Token]:
        """Yield every remaining token, ending with (and including) EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _make_token(self, token_type: TokenType, text: str, line: int, column: int) -> Token:
        return Token(token_type, text, line, column, self.source.filename)

    def _skip_whitespace(self) -> str:
        """Skip whitespace and return the first other character ("" at EOF)."""
        char = self.source.read_char()
        while char and char in self.WHITESPACE:
            char = self.source.read_char()
        return char

    def _scan_token(self) -> Token:
        char = self._skip_whitespace()

        # The character was already consumed, so step back one column
        line, column = self.source.line, self.source.column - 1

        if not char:
            return self._make_token(TokenType.EOF, "", self.source.line, self.source.column)

        if char in self.IDENT_START:
            text = self._scan_run(char, self.IDENT_CHARS)
            token_type = KEYWORDS.get(text, TokenType.IDENTIFIER)
            return self._make_token(token_type, text, line, column)

        if char in string.digits:
            text = self._scan_run(char, string.digits)
            return self._make_token(TokenType.NUMBER, text, line, column)

        if char == "=":
            following = self.source.read_char()
            if following == "=":
                return self._make_token(TokenType.EQUAL, "==", line, column)
            self.source.unread_char(following)
            return self._make_token(TokenType.ASSIGN, "=", line, column)

        token_type = SINGLE_CHAR_TOKENS.get(char, TokenType.UNKNOWN)
        return self._make_token(token_type, char, line, column)

    def _scan_run(self, first: str, allowed: str) -> str:
        """
        Consume ``first`` plus every following character in ``allowed``.

        Characters beyond max_token_length are consumed but dropped.
        """
        chars = [first]
        char = self.source.read_char()
        while char and char in allowed:
            if self.max_token_length is None or len(chars) < self.max_token_length:
                chars.append(char)
            char = self.source.read_char()
        self.source.unread_char(char)

        if self.max_token_length is not None:
            chars = chars[:self.max_token_length]
        return "".join(chars)
