"""
Source Spans
============

Every token and every lexical error carries a Span: a half-open range of
UTF-8 byte offsets into the scanned text plus the name of the source it
came from. Offsets are bytes, not characters, so spans stay accurate for
tools that read the file as raw bytes.

Line and column numbers are never stored; they are derived on demand
when a diagnostic is rendered.
"""

from dataclasses import dataclass

from lume.errors import SourceLocation


@dataclass(frozen=True)
class Span:
    """
    Byte range [start, end) in a named source.

    Attributes:
        start: Byte offset of the first byte covered
        end: Byte offset just past the last byte covered
        filename: Source identifier supplied by the caller
    """
    start: int
    end: int
    filename: str

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")

    def __str__(self) -> str:
        return f"{self.filename}[{self.start}..{self.end}]"

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        """Return the text covered by this span in ``source``."""
        data = source.encode("utf-8", "surrogatepass")
        return data[self.start:self.end].decode("utf-8", "surrogatepass")

    def location(self, source: str, first_line: int = 1) -> SourceLocation:
        """
        Resolve the start offset to a line and column.

        ``first_line`` is the line number of the first line of ``source``;
        it is 2 when a shebang line was stripped before scanning.
        """
        line, column = offset_to_line_column(source, self.start, first_line)
        return SourceLocation(self.filename, line, column)


def offset_to_line_column(
    source: str,
    offset: int,
    first_line: int = 1,
) -> tuple[int, int]:
    """
    Convert a UTF-8 byte offset into a (line, column) pair.

    The column is 1-indexed and counts characters. Offsets past the end
    of ``source`` resolve to the position just after the last character.
    """
    data = source.encode("utf-8", "surrogatepass")
    prefix = data[:offset].decode("utf-8", "surrogatepass")
    line = prefix.count("\n") + first_line
    column = len(prefix) - (prefix.rfind("\n") + 1) + 1
    return line, column


def line_at(source: str, offset: int) -> str:
    """Return the full source line containing the byte ``offset``."""
    data = source.encode("utf-8", "surrogatepass")
    line_start = data.rfind(b"\n", 0, offset) + 1
    line_end = data.find(b"\n", offset)
    if line_end == -1:
        line_end = len(data)
    return data[line_start:line_end].decode("utf-8", "surrogatepass").rstrip("\r")
