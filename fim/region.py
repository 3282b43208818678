"""
Clamped, total string primitives for position arithmetic.

Every slice here uses an exclusive end, like Python slicing. Offsets outside
the text are clamped rather than rejected, so callers can chain operations
without guarding each index.
"""

import re
from typing import NamedTuple

_INDENT_RE = re.compile(r"^\s*")


class TextSlice(NamedTuple):
    """Reference to text[start:end] (exclusive end) inside build_with_tokens."""
    start: int
    end: int


class TokenInsertion(NamedTuple):
    before: str
    after: str
    combined: str


class LineContext(NamedTuple):
    line_number: int
    line_start: int
    line_end: int  # offset just past the last char of the line
    line_text: str
    position_in_line: int


class BlockBoundaries(NamedTuple):
    start: int
    end: int  # offset just past the last char of end_line
    start_line: int
    end_line: int


class SplitResult(NamedTuple):
    prefix: str
    suffix: str
    position: int


class TextStatistics(NamedTuple):
    length: int
    lines: int
    non_empty_lines: int
    average_line_length: int


class TextRegion:
    """Immutable text with safe slicing, token insertion and line lookup."""

    def __init__(self, text: str | None = None):
        self._text = text or ""
        self._lines: list[str] | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def length(self) -> int:
        return len(self._text)

    def __len__(self) -> int:
        return len(self._text)

    @property
    def lines(self) -> list[str]:
        if self._lines is None:
            self._lines = self._text.split("\n")
        return self._lines

    def clamp_position(self, position: int) -> int:
        return max(0, min(position, self.length))

    def is_valid_position(self, position: int) -> bool:
        return 0 <= position <= self.length

    def extract_region(self, start: int, end: int) -> str:
        """Return text[start:end] with both ends clamped; "" when end <= start."""
        valid_start = max(0, min(start, self.length))
        valid_end = max(valid_start, min(end, self.length))
        return self._text[valid_start:valid_end]

    def insert_token(self, position: int, token: str) -> TokenInsertion:
        pos = self.clamp_position(position)
        before = self._text[:pos]
        after = self._text[pos:]
        return TokenInsertion(before, after, before + token + after)

    def build_with_tokens(self, parts) -> str:
        """
        Concatenate literal tokens and TextSlice references in order.

        >>> TextRegion("hello world").build_with_tokens(
        ...     [TextSlice(0, 5), "<|cursor|>", TextSlice(5, 11)])
        'hello<|cursor|> world'
        """
        out = []
        for part in parts:
            if isinstance(part, TextSlice):
                out.append(self.extract_region(part.start, part.end))
            else:
                out.append(part)
        return "".join(out)

    def get_line_context(self, position: int) -> LineContext | None:
        if not self.is_valid_position(position):
            return None

        current = 0
        lines = self.lines
        for i, line in enumerate(lines):
            line_end = current + len(line)
            if position <= line_end:
                return LineContext(
                    line_number=i,
                    line_start=current,
                    line_end=line_end,
                    line_text=line,
                    position_in_line=position - current,
                )
            current = line_end + 1  # newline

        # Unreachable for valid positions: the last line always ends at length.
        last = lines[-1]
        return LineContext(len(lines) - 1, self.length - len(last), self.length, last, len(last))

    def find_block_boundaries(self, position: int) -> BlockBoundaries:
        """
        Approximate the indentation block that contains ``position``.

        Walks backward to the nearest non-blank line indented less than the
        current line (the block header), then forward to the first non-blank
        line indented at or below the header. A lone closing brace at the
        header's indentation is kept inside the block. With no header found
        the block collapses to the current line and its deeper continuation.
        """
        lines = self.lines
        ctx = self.get_line_context(position)
        if ctx is None:
            return BlockBoundaries(0, self.length, 0, len(lines) - 1)

        current_line = ctx.line_number
        current_indent = _indent_of(lines[current_line])

        block_start = current_line
        block_indent = current_indent
        for i in range(current_line - 1, -1, -1):
            line = lines[i]
            if not line.strip():
                continue
            indent = _indent_of(line)
            if indent < current_indent:
                block_start = i
                block_indent = indent
                break

        block_end = current_line
        for i in range(current_line + 1, len(lines)):
            line = lines[i]
            indent = _indent_of(line)
            if line.strip() and indent <= block_indent:
                if indent == block_indent and line.strip() == "}":
                    block_end = i
                else:
                    block_end = i - 1
                break
            block_end = i

        start = self._line_to_position(block_start)
        end = self._line_to_position(block_end) + len(lines[block_end])
        return BlockBoundaries(start, end, block_start, block_end)

    def get_statistics(self) -> TextStatistics:
        lines = self.lines
        return TextStatistics(
            length=self.length,
            lines=len(lines),
            non_empty_lines=sum(1 for l in lines if l.strip()),
            average_line_length=int(self.length / len(lines) + 0.5),
        )

    def split_at(self, position: int) -> SplitResult:
        pos = self.clamp_position(position)
        return SplitResult(self._text[:pos], self._text[pos:], pos)

    def create_subregion(self, start: int, end: int) -> "TextRegion":
        return TextRegion(self.extract_region(start, end))

    def _line_to_position(self, line_number: int) -> int:
        lines = self.lines
        if line_number < 0 or line_number >= len(lines):
            return 0
        return sum(len(l) + 1 for l in lines[:line_number])


def _indent_of(line: str) -> int:
    return len(_INDENT_RE.match(line).group(0))
