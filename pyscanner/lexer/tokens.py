"""
Token definitions for the pyscanner lexer.

This module defines the token types produced when scanning Python source:
- Names (keywords are not special, they come out as plain names)
- Literals (numbers, strings, f-string fragments)
- Operators and punctuation
- Structural tokens (NEWLINE, NL, INDENT, DEDENT, ENDMARKER)
- Comments

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass, field, replace
from typing import Any, Optional


class TokenType(Enum):
    """
    Enumeration of all token types produced by the scanner.

    Names follow the standard library ``token`` module where one exists.
    """

    # ========================================================================
    # Structural Tokens
    # ========================================================================
    ENDMARKER = auto()             # End of input
    NEWLINE = auto()               # End of a logical line
    NL = auto()                    # Newline that does not end a logical line
    INDENT = auto()                # Indentation increase
    DEDENT = auto()                # Indentation decrease
    COMMENT = auto()               # '# ...' (text without the hash)

    # ========================================================================
    # Names and Literals
    # ========================================================================
    NAME = auto()                  # for, print, _private
    NUMBER = auto()                # 42, 1_000, 3.14, .5, 1e-3, 2j
    STRING = auto()                # 'a', "b", r'raw', b'bytes', '''triple'''

    # ========================================================================
    # Formatted Strings
    # ========================================================================
    FSTRING_START = auto()         # f" or f'''
    FSTRING_MIDDLE = auto()        # literal text between expressions
    FSTRING_END = auto()           # closing quote(s)

    # ========================================================================
    # Operators and Punctuation
    # ========================================================================
    OP = auto()                    # + ** //= -> ( ] :


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and for mapping tokens back to the source.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"

    def translated(self, origin: "SourceLocation") -> "SourceLocation":
        """Re-express a location found inside a substring that starts at ``origin``."""
        if self.line == 1:
            column = origin.column + self.column - 1
        else:
            column = self.column
        return SourceLocation(
            origin.filename,
            origin.line + self.line - 1,
            column,
            origin.offset + self.offset,
        )


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Only the type and the lexeme take part in equality, so a token built by
    hand (``Token(TokenType.NAME, "x")``) compares equal to a scanned one.
    The semantic value and the location ride along for consumers that want them.
    """
    type: TokenType
    lexeme: str = ""                                    # Raw text from source
    value: Any = field(default=None, compare=False)     # Decoded value (int, str, bytes...)
    location: Optional[SourceLocation] = field(default=None, compare=False)

    def __str__(self) -> str:
        if not self.lexeme:
            return self.type.name
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.value!r}, {self.location!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_operator(self) -> bool:
        """Check if this token is an operator or punctuation."""
        return self.type == TokenType.OP

    @property
    def is_structural(self) -> bool:
        """Check if this token only carries layout information."""
        return self.type in STRUCTURAL_TYPES

    def relocated(self, origin: SourceLocation) -> "Token":
        """Return a copy whose location is translated to start at ``origin``."""
        if self.location is None:
            return self
        return replace(self, location=self.location.translated(origin))


LITERAL_TYPES = {
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.FSTRING_START,
    TokenType.FSTRING_MIDDLE,
    TokenType.FSTRING_END,
}

STRUCTURAL_TYPES = {
    TokenType.NEWLINE,
    TokenType.NL,
    TokenType.INDENT,
    TokenType.DEDENT,
    TokenType.ENDMARKER,
}


# Character tables used by the collectors and the dispatcher

# Every character that can start an operator or punctuation token
OPERATORS = "=+-*/%&|<>!^:;.,()[]{}@$?~`"

# Operators that take a trailing '=' (+=, ==, <=, :=, @= ...)
AUGMENTABLE_OPERATORS = "=+-*/%&|<>!^:@"

# Operators that can be doubled (** // << >>), each optionally followed by '='
DOUBLED_OPERATORS = "*/<>"

OPEN_BRACKETS = "([{"
CLOSE_BRACKETS = {")": "(", "]": "[", "}": "{"}

QUOTES = "'\""

INDENT_CHARS = " \t"

# Whitespace skipped between tokens
BLANK_CHARS = " \t\f"

# Valid literal prefixes, compared case-insensitively
STRING_PREFIXES = {"r", "b", "u", "rb", "br"}
FSTRING_PREFIXES = {"f", "rf", "fr"}
PREFIX_CHARS = "rbufRBUF"

ESCAPE_SEQUENCES = {
    "\\": "\\",
    '"': '"',
    "'": "'",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "a": "\a",
}
