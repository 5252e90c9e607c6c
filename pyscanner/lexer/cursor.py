"""
Position-tracking character cursor used by the collectors.

Author: xwest
"""

from typing import Callable, Optional, Tuple

from .tokens import SourceLocation


class Cursor:
    """
    Peekable stream of characters over an immutable string.

    ``line`` and ``column`` are 1-based and always describe the character
    about to be read. Reading past the end returns ``None`` forever.
    """

    __slots__ = ("text", "filename", "pos", "line", "column")

    def __init__(self, text: str, filename: str = "<string>",
                 pos: int = 0, line: int = 1, column: int = 1):
        self.text = text
        self.filename = filename
        self.pos = pos
        self.line = line
        self.column = column

    def peek(self, offset: int = 0) -> Optional[str]:
        """Look at a character ahead without consuming it."""
        index = self.pos + offset
        if index < len(self.text):
            return self.text[index]
        return None

    def advance(self) -> Optional[str]:
        """Consume one character, updating line/column."""
        if self.pos >= len(self.text):
            return None
        char = self.text[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def consume_if(self, predicate: Callable[[str], bool]) -> Optional[str]:
        """Consume and return the next character only if ``predicate`` accepts it."""
        char = self.peek()
        if char is not None and predicate(char):
            return self.advance()
        return None

    def position(self) -> Tuple[int, int]:
        return (self.line, self.column)

    @property
    def offset(self) -> int:
        return self.pos

    def location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def duplicate(self) -> "Cursor":
        """Snapshot for lookahead; advancing the copy leaves this cursor untouched."""
        return Cursor(self.text, self.filename, self.pos, self.line, self.column)

    def at_line_start(self) -> bool:
        return self.column == 1

    def exhausted(self) -> bool:
        return self.pos >= len(self.text)

    def __repr__(self) -> str:
        return f"Cursor(line={self.line}, column={self.column}, offset={self.pos})"
