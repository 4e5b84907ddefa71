"""
Lexical Errors
==============

The lexer reports exactly one kind of failure: a LexicalError carrying a
human-readable message and the Span of the offending text. Callers that
need to tell conditions apart do so by the message text, which is stable:

    - invalid integer literal / invalid exponent / integer literal too large
    - unterminated string literal / unterminated character literal
    - unterminated block comment / unterminated escape sequence
    - unknown escape sequence \\X / invalid unicode codepoint / ...
    - empty character literal
    - character literal must contain exactly one character
    - unexpected character: 'X'
    - unexpected '!'; logical NOT is written as 'not'

Errors are always fatal: the scan stops at the first one and no partial
token list is returned.

Example:
    main.lume:2:12: error: unterminated string literal
        let name = "Ada
                   ^^^^
    hint: add a closing '"' to complete the string
"""

from typing import Optional

from lume.errors import LumeError
from lume.lexer.span import Span, line_at


class LexicalError(LumeError):
    """
    Malformed source text.

    Attributes:
        message: The error description (stable, used to distinguish cases)
        span: Byte range of the offending text
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        span: Span,
        source: Optional[str] = None,
        hint: Optional[str] = None,
        first_line: int = 1,
    ):
        self.span = span
        location = None
        source_line = None
        width = 1
        if source is not None:
            location = span.location(source, first_line)
            source_line = line_at(source, span.start)
            width = len(span.text(source))
        super().__init__(
            message, location=location, hint=hint, source_line=source_line, width=width
        )

    def _format_message(self) -> str:
        if self.location is None:
            # No source text available, fall back to the raw byte span
            text = f"{self.span}: error: {self.message}"
            if self.hint:
                text += f"\nhint: {self.hint}"
            return text
        return super()._format_message()


class UnterminatedLiteralError(LexicalError):
    """
    A string, character literal or block comment reached end of input.

    Example:
        let s = "hello    // closing quote missing
    """

    HINTS = {
        "unterminated string literal": "add a closing '\"' to complete the string",
        "unterminated character literal": "add a closing \"'\" to complete the character literal",
        "unterminated block comment": "every '/*' needs a matching '*/', including nested ones",
    }

    def __init__(
        self,
        message: str,
        span: Span,
        source: Optional[str] = None,
        first_line: int = 1,
    ):
        super().__init__(
            message, span, source, hint=self.HINTS.get(message), first_line=first_line
        )


class UnexpectedCharacterError(LexicalError):
    """
    A character that cannot start any token.

    The message quotes the character; ``char`` holds it for callers.
    """

    def __init__(
        self,
        char: str,
        span: Span,
        source: Optional[str] = None,
        first_line: int = 1,
    ):
        self.char = char
        hint = None
        if not char.isprintable():
            hint = f"non-printable character U+{ord(char):04X} is not allowed in source"
        super().__init__(
            f"unexpected character: '{char}'", span, source, hint=hint, first_line=first_line
        )
