"""
Error handling for the pyscanner lexer.

Every failure aborts the scan. The exception raised carries the failure
category, a human-readable message, the (line, column) where scanning
stopped, and an IDE-friendly diagnostic.

Author: xwest
"""

from typing import Optional, List, Tuple
from dataclasses import dataclass
from .tokens import SourceLocation


Position = Tuple[int, int]


@dataclass
class Diagnostic:
    """Diagnostic record attached to every lexer error."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info", "hint"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class TokenizeError(Exception):
    """
    Base class of all errors raised while tokenizing.

    Subclasses fix the category (``kind``) and the error code; instances
    compare equal when category, message and position all match.
    """

    kind = "Tokenize"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __init__(
        self,
        message: str,
        position: Position,
        location: Optional[SourceLocation] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.position = (position[0], position[1])
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=self.code,
            help_text=self.help_text,
            suggestions=suggestions
        )

    @property
    def line(self) -> int:
        return self.position[0]

    @property
    def column(self) -> int:
        return self.position[1]

    def translated(self, origin: SourceLocation) -> "TokenizeError":
        """
        Return the same error re-expressed against an embedding source.

        ``origin`` is where the scanned substring starts in the outer text;
        used when an f-string expression fails inside the nested scan.
        """
        if self.location is not None:
            location = self.location.translated(origin)
        else:
            location = SourceLocation(origin.filename, self.line, self.column, 0).translated(origin)
        return type(self)(
            self.message,
            (location.line, location.column),
            location,
            self.diagnostic.suggestions
        )

    def __str__(self) -> str:
        return f"{self.kind} Error: {self.message} at pos {self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, {self.position!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenizeError):
            return NotImplemented
        return (type(self) is type(other)
                and self.message == other.message
                and self.position == other.position)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message, self.position))


class EscapeSequenceError(TokenizeError):
    """Unknown escape sequence inside a non-raw string literal."""
    kind = "Escape Sequence"
    code = "T001"
    help_text = "Supported escapes are \\\\ \\' \\\" \\n \\r \\t \\b \\f \\v \\a; use a raw string for anything else."


class StringError(TokenizeError):
    """Malformed or unterminated string literal."""
    kind = "String"
    code = "T002"
    help_text = "String literals must be closed with the quote they were opened with."


class NumberError(TokenizeError):
    """Malformed numeric literal."""
    kind = "Number"
    code = "T003"
    help_text = "Underscores may only separate digits, and an exponent sign must be followed by a digit."


class OperatorError(TokenizeError):
    """A character that cannot start an operator was handed to the operator scanner."""
    kind = "Operator"
    code = "T004"


class CharError(TokenizeError):
    """A character that cannot start any token."""
    kind = "Character"
    code = "T005"


class IndentError(TokenizeError):
    """Indentation that cannot be reconciled with the indentation stack."""
    kind = "Indentation"
    code = "T006"
    help_text = "A dedent must return to an indentation level used by an enclosing block."


class EndOfFileError(TokenizeError):
    """Input ended in the middle of a token."""
    kind = "End of File"
    code = "T007"


# Error codes for categorization
ERROR_CODES = {
    EscapeSequenceError.code: "Invalid escape sequence",
    StringError.code: "Malformed string literal",
    NumberError.code: "Invalid numeric literal",
    OperatorError.code: "Invalid operator",
    CharError.code: "Invalid character",
    IndentError.code: "Inconsistent indentation",
    EndOfFileError.code: "Unexpected end of input",
}


def create_invalid_character_error(char: str, position: Position,
                                   location: Optional[SourceLocation] = None) -> CharError:
    """Create an error for a character that cannot start a token."""
    if char.isprintable():
        detail = f"'{char}'"
    else:
        detail = f"U+{ord(char):04X}"
    return CharError(f"Invalid character: {detail}", position, location)


def create_unterminated_string_error(position: Position,
                                     location: Optional[SourceLocation] = None) -> StringError:
    """Create an error for a single-quoted literal cut off by a newline."""
    return StringError(
        "Unterminated string literal",
        position,
        location,
        suggestions=["Add the closing quote", "Use a triple-quoted string for multi-line text"]
    )


def create_invalid_number_error(position: Position,
                                location: Optional[SourceLocation] = None) -> NumberError:
    """Create an error for a malformed numeric literal."""
    return NumberError("Invalid decimal literal", position, location)
