"""
SimpleLang Compiler Error Hierarchy
===================================

This module defines the exception hierarchy for the SimpleLang compiler.
All exceptions inherit from SimpleLangError, allowing callers to catch
every compiler error with a single except clause.

Exception Hierarchy
-------------------
SimpleLangError (base)
├── SimpleLangSyntaxError - token does not fit the grammar
│   ├── UnexpectedTokenError - expected construct vs. token found
│   └── UnterminatedBlockError - end of input inside an if body
└── CapacityError - a configured compiler limit was exceeded
    ├── TooManyVariablesError - symbol table is full
    └── TooManyLinesError - assembly output is full

Every error is fatal. The compiler stops at the first one and any output
produced so far must be discarded.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)

Example:
    prog.sl:1:5: error: expected identifier after 'int', found '5'
        int 5;
            ^
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception
# =============================================================================

class SimpleLangError(Exception):
    """
    Base exception for all SimpleLang compiler errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with location, source context, and hint."""
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Caret under the offending column
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Syntax Errors
# =============================================================================

class SimpleLangSyntaxError(SimpleLangError):
    """
    Syntax error in SimpleLang source.

    Raised by the parser when a token does not match the production being
    compiled. There is no error recovery: parsing halts immediately.
    """
    pass


class UnexpectedTokenError(SimpleLangSyntaxError):
    """
    A token other than the expected construct was found.

    Attributes:
        expected: Description of the expected construct
            (e.g. "identifier after 'int'")
        found: Text of the token actually found ("end of input" at EOF)
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected {expected}, found {found}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedBlockError(SimpleLangSyntaxError):
    """
    End of input reached inside an ``if`` body.

    Example:
        if (x == 1) { x = 2;     // Missing closing brace
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unexpected end of input while parsing if block",
            location=location,
            hint="add '}' to close the block",
            source_line=source_line,
        )


# =============================================================================
# Capacity Errors
# =============================================================================

class CapacityError(SimpleLangError):
    """
    A configured compiler limit was exceeded.

    Attributes:
        limit: The configured maximum that was hit
    """

    def __init__(
        self,
        message: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.limit = limit
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class TooManyVariablesError(CapacityError):
    """Raised when a new distinct name would overflow the symbol table."""

    def __init__(
        self,
        name: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        super().__init__(
            f"too many variables: cannot allocate '{name}' (limit is {limit})",
            limit,
            location=location,
            hint="raise the variable limit with --max-vars",
            source_line=source_line,
        )


class TooManyLinesError(CapacityError):
    """Raised when emitting one more line would overflow the assembly output."""

    def __init__(self, limit: int):
        super().__init__(
            f"too many lines of assembly output (limit is {limit})",
            limit,
            hint="raise the output limit with --max-lines",
        )
