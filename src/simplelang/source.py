"""
Character Source
================

Pull interface over SimpleLang source text used by the lexer.

The lexer reads one character at a time and occasionally needs to look one
character ahead (when finishing an identifier or number, and when deciding
between ``=`` and ``==``). It does so by reading the character and handing
it back with ``unread_char``. Exactly one character may be pending.

The source can wrap a string or any text stream (an open file, StringIO).
Line and column are tracked so tokens can carry a SourceLocation.

Example Usage
-------------
>>> from simplelang.source import CharSource
>>> src = CharSource.from_string("ab")
>>> src.read_char()
'a'
>>> src.unread_char('a')
>>> src.read_char(), src.read_char(), src.read_char()
('a', 'b', '')
"""

import io
from typing import Optional, TextIO

from simplelang.errors import SourceLocation


class CharSource:
    """
    Character stream with one character of pushback.

    ``read_char`` returns the empty string at end of input.

    Attributes:
        filename: Name reported in source locations
    """

    def __init__(self, stream: TextIO, filename: str = "<input>"):
        self.filename = filename
        self._stream = stream

        # Single pending character handed back by unread_char
        self._pending: Optional[str] = None

        self._line = 1
        self._column = 1

        # Position before the last read, restored by unread_char
        self._previous = (1, 1)

    @classmethod
    def from_string(cls, text: str, filename: str = "<input>") -> "CharSource":
        """Create a source reading from an in-memory string."""
        return cls(io.StringIO(text), filename)

    @property
    def line(self) -> int:
        """Line of the next character to be read (1-indexed)."""
        return self._line

    @property
    def column(self) -> int:
        """Column of the next character to be read (1-indexed)."""
        return self._column

    @property
    def location(self) -> SourceLocation:
        """SourceLocation of the next character to be read."""
        return SourceLocation(self.filename, self._line, self._column)

    def read_char(self) -> str:
        """
        Consume and return the next character.

        Returns:
            A single character, or "" at end of input
        """
        if self._pending is not None:
            char = self._pending
            self._pending = None
        else:
            char = self._stream.read(1)
            if not char:
                return ""

        self._previous = (self._line, self._column)
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def unread_char(self, char: str) -> None:
        """
        Push back the character returned by the last read_char.

        Raises:
            RuntimeError: If a character is already pending
        """
        if not char:
            return
        if self._pending is not None:
            raise RuntimeError("character pushback slot already occupied")
        self._pending = char
        self._line, self._column = self._previous
