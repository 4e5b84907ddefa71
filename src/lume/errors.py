"""
Lume Error Hierarchy
====================

This module defines the base of the exception hierarchy for the Lume
toolchain. All exceptions inherit from LumeError, allowing callers to
catch every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
LumeError (base)
└── LexicalError (lume.lexer.errors) - malformed source text
    ├── UnterminatedLiteralError - string, character or comment not closed
    └── UnexpectedCharacterError - character that starts no token

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^^^ (underline of the offending text)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Human-oriented position in a source file.

    Tokens and errors carry byte-offset spans; a SourceLocation is only
    computed when a diagnostic has to be shown to a person.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number in characters (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Base Exception Class
# =============================================================================

class LumeError(Exception):
    """
    Base exception for all Lume toolchain errors.

    Provides common formatting for error messages including source
    location, the offending source line underlined where the error
    occurred, and an optional hint:

        try:
            tokens = lex(source, "main.lume")
        except LumeError as e:
            print(e)

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
        width: Number of characters to underline from the location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        width: int = 1,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        self.width = width
        super().__init__(self._format_message())

    def _underline(self) -> str:
        """
        Build the marker line under ``source_line``.

        The underline is clipped to the end of the line and is at least
        one character wide.
        """
        start = self.location.column - 1
        width = min(self.width, len(self.source_line) - start)
        return " " * (4 + start) + "^" * max(width, 1)

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            main.lume:3:9: error: unterminated string literal
                let s = "hello
                        ^^^^^^
            hint: add a closing '"' to complete the string
        """
        if self.location is None:
            parts = [f"error: {self.message}"]
        else:
            parts = [f"{self.location}: error: {self.message}"]
            if self.source_line is not None and self.location.column > 0:
                parts.append(f"    {self.source_line}")
                parts.append(self._underline())

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)
