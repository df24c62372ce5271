"""
Signature Tokenizer
===================

Splits a signature document into tokens one at a time.

Whitespace (space, tab, CR, LF) and ``#`` line comments are skipped. A comment
is recognized at a token start that is the beginning of the buffer or follows
whitespace, so ``ttl=#1`` yields the token ``#1`` rather than a comment.
A ``#`` at offset 0 deliberately opens a comment too, so a document may begin
with a comment line.

``=``, ``,``, ``[`` and ``]`` are single character tokens. A token starting
with a double quote runs to the matching unescaped quote, both quotes
included; a backslash makes the scanner step over the next character without
interpreting it. Everything else is the longest run of characters that are
neither whitespace nor structural.
"""

import bisect
from typing import List, NamedTuple, Tuple

BLANKS = frozenset(" \t\r\n")
STRUCTURAL = frozenset("=,[]")
COMMENT = "#"
QUOTE = '"'
ESCAPE = "\\"


class Token(NamedTuple):
    """A token and where it sits in the source buffer."""
    text: str
    start: int
    end: int
    line: int
    column: int

    @property
    def is_end(self) -> bool:
        return self.start == self.end


def skip_blanks(buffer: str, position: int) -> int:
    """Return the first offset at or after ``position`` that can start a token."""
    size = len(buffer)
    while position < size:
        char = buffer[position]
        if char in BLANKS:
            position += 1
        elif char == COMMENT and (position == 0 or buffer[position - 1] in BLANKS):
            newline = buffer.find("\n", position)
            position = size if newline == -1 else newline
        else:
            break
    return position


def _scan_string(buffer: str, start: int) -> int:
    size = len(buffer)
    position = start + 1
    while position < size:
        char = buffer[position]
        if char == ESCAPE:
            position += 2
            continue
        if char == QUOTE:
            return position + 1
        position += 1
    # unterminated: the token runs to the end of the buffer
    return size


def scan_token(buffer: str, position: int) -> Tuple[int, int]:
    """
    Locate the next token.

    Args:
        buffer: Source text
        position: Cursor to scan from

    Returns:
        (start, end) offsets of the token. At end of input both equal
        ``len(buffer)`` and the token is empty.
    """
    start = skip_blanks(buffer, position)
    size = len(buffer)
    if start >= size:
        return size, size

    char = buffer[start]
    if char in STRUCTURAL:
        return start, start + 1
    if char == QUOTE:
        return start, _scan_string(buffer, start)

    end = start
    while end < size and buffer[end] not in BLANKS and buffer[end] not in STRUCTURAL:
        end += 1
    return start, end


class Tokenizer:
    """Cursor over a signature buffer producing one token per call."""

    def __init__(self, buffer: str, position: int = 0) -> None:
        self.buffer = buffer
        self.position = position
        self._line_starts: List[int] = [0]
        self._line_starts.extend(i + 1 for i, char in enumerate(buffer) if char == "\n")

    def next_token(self) -> Token:
        start, end = scan_token(self.buffer, self.position)
        self.position = end
        line, column = self.location(start)
        return Token(self.buffer[start:end], start, end, line, column)

    def location(self, offset: int) -> Tuple[int, int]:
        """1-based (line, column) of a buffer offset."""
        line = bisect.bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1
