"""
Character Cursor
================

The cursor walks a ``str`` one character at a time while keeping the
current position as a UTF-8 *byte* offset. Python strings are indexed by
code point, so the two counters are tracked side by side: the character
index gives O(1) lookahead, the byte offset is what ends up in spans.
"""


def utf8_length(char: str) -> int:
    """Return the number of bytes ``char`` occupies in UTF-8."""
    code = ord(char)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def strip_shebang(source: str) -> str:
    """
    Remove a leading ``#!`` interpreter line.

    The newline ending the line is removed too, so offsets in the
    remaining text start at the following line. A shebang with no newline
    leaves nothing to scan.
    """
    if not source.startswith("#!"):
        return source
    newline = source.find("\n")
    if newline == -1:
        return ""
    return source[newline + 1:]


class Cursor:
    """
    Position in a source string with one-character lookahead.

    Attributes:
        text: The text being scanned
        offset: Current UTF-8 byte offset (start of the next character)
    """

    def __init__(self, text: str):
        self.text = text
        self.offset = 0
        self._index = 0

    @property
    def byte_length(self) -> int:
        """Total UTF-8 length of the text."""
        return len(self.text.encode("utf-8", "surrogatepass"))

    def at_end(self) -> bool:
        """Check if every character has been consumed."""
        return self._index >= len(self.text)

    def peek(self, lookahead: int = 0) -> str:
        """
        Look at the character ``lookahead`` places ahead without consuming.

        Returns an empty string past the end of the text.
        """
        index = self._index + lookahead
        if index >= len(self.text):
            return ""
        return self.text[index]

    def advance(self) -> str:
        """Consume and return the next character ("" at end of text)."""
        if self.at_end():
            return ""
        char = self.text[self._index]
        self._index += 1
        self.offset += utf8_length(char)
        return char

    def match(self, expected: str) -> bool:
        """Consume the next character if it equals ``expected``."""
        if self.peek() == expected:
            self.advance()
            return True
        return False
