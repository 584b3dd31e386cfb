"""
C1 Error Hierarchy
==================

This module defines the exception hierarchy for the C1 syntax checker.
All exceptions inherit from C1Error, allowing callers to catch every
checker-related error with a single except clause if desired.

Exception Hierarchy
-------------------
C1Error (base)
└── C1SyntaxError - the input is not a valid C1 program
    ├── UnexpectedTokenError - a required token or construct is missing
    ├── InvalidCharacterError - character outside the C1 alphabet
    └── UnterminatedCommentError - '/*' without a closing '*/'

Lexical errors are reported as syntax errors: for the caller there is
only one way a program can be rejected.

Error Message Format
--------------------
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)

Example:
    main.c-1:3:5: error: expected ';', got '}', line 3
        }
        ^
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class C1Error(Exception):
    """
    Base exception for all C1 syntax checker errors.

        try:
            parse(source)
        except C1Error as e:
            print(f"Error: {e}")
    """
    pass


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
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Syntax Errors (Lexer and Parser)
# =============================================================================

class C1SyntaxError(C1Error):
    """
    Syntax error in C1 source code.

    Raised when the lexer or parser finds input that does not belong to
    the C1 grammar. Parsing stops at the first such error.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
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

    @property
    def line(self) -> Optional[int]:
        """Line number of the error, if known."""
        if self.location is None:
            return None
        return self.location.line

    def with_source_line(self, source_line: Optional[str]) -> "C1SyntaxError":
        """Attach source context and rebuild the formatted message."""
        self.source_line = source_line
        self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            main.c-1:1:15: error: expected ';', got '}', line 1
                int main(){a=1}
                              ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Caret only when the column is known
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnexpectedTokenError(C1SyntaxError):
    """
    A required token or alternative set of tokens was not found.

    Attributes:
        expected: Description of the construct the parser wanted
        found: Description of the actual token, or "end of input"
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

        message = f"expected {expected}, got {found}"
        if location is not None:
            message = f"{message}, line {location.line}"

        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidCharacterError(C1SyntaxError):
    """
    Invalid character in source code.

    Raised when the lexer encounters a character that cannot start
    any C1 token.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnterminatedCommentError(C1SyntaxError):
    """Multi-line comment opened with '/*' but never closed."""

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated multi-line comment",
            location=location,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
        )
