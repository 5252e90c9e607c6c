"""
pyscanner Lexer - turns Python source text into tokens

The scan is a single pass over a Cursor. Two stacks drive the layout
tokens: the indentation stack (bottom is always "") decides INDENT/DEDENT,
and the bracket stack decides whether a newline is NEWLINE or NL.

Any error aborts the whole scan; nothing is recovered or returned partially.

xwest
"""

import logging
from typing import Iterator, List, Optional

from .cursor import Cursor
from .tokens import (
    Token, TokenType, OPERATORS, OPEN_BRACKETS, CLOSE_BRACKETS, QUOTES,
    BLANK_CHARS, PREFIX_CHARS
)
from .errors import IndentError, TokenizeError, create_invalid_character_error
from .collectors import (
    DIGITS, collect_comment, collect_fstring, collect_indent, collect_name,
    collect_number, collect_operator, collect_string, number_value
)

logger = logging.getLogger(__name__)


class Lexer:
    """
    Python source lexical analyzer.

    Holds no state between scans: every call to ``tokenize`` or
    ``iter_tokens`` starts from a fresh cursor and fresh stacks.
    """

    def __init__(self, source: str, filename: str = "<string>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting and token locations
        """
        self.source = source
        self.filename = filename
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens ending with ENDMARKER

        Raises:
            TokenizeError: on the first malformed token
        """
        logger.debug("Tokenizing %s (%d characters)", self.filename, len(self.source))
        try:
            tokens = list(self.iter_tokens())
        except TokenizeError as error:
            logger.debug("Tokenizing %s failed: %s", self.filename, error)
            raise
        self.tokens = tokens
        logger.debug("Tokenized %s into %d tokens", self.filename, len(tokens))
        return tokens

    def iter_tokens(self) -> Iterator[Token]:
        """Generate tokens lazily. An error is raised when the scan reaches it."""
        cursor = Cursor(_prepare_source(self.source), self.filename)
        indent_stack = [""]
        bracket_stack: List[str] = []
        # Whether the current line has produced anything but comments
        line_has_content = False

        yield from self._measure_indent(cursor, indent_stack)

        while True:
            char = cursor.peek()
            if char is None:
                break

            start = cursor.location()

            if char == "\n":
                cursor.advance()
                if bracket_stack or not line_has_content:
                    yield Token(TokenType.NL, "", None, start)
                else:
                    yield Token(TokenType.NEWLINE, "", None, start)
                if not bracket_stack:
                    line_has_content = False
                    yield from self._measure_indent(cursor, indent_stack)
                continue

            if char in BLANK_CHARS:
                cursor.advance()
                continue

            # Explicit line joining
            if char == "\\" and cursor.peek(1) == "\n":
                cursor.advance()
                cursor.advance()
                continue

            if char == "#":
                comment = collect_comment(cursor)
                yield Token(TokenType.COMMENT, comment, None, start)
                continue

            line_has_content = True

            if char in PREFIX_CHARS:
                prefix = _string_prefix(cursor)
                if prefix:
                    for _ in prefix:
                        cursor.advance()
                    if "f" in prefix.lower():
                        yield from collect_fstring(cursor, prefix)
                    else:
                        lexeme, value = collect_string(cursor, prefix)
                        yield Token(TokenType.STRING, lexeme, value, start)
                    continue
                name = collect_name(cursor, cursor.advance())
                yield Token(TokenType.NAME, name, name, start)
                continue

            if char in QUOTES:
                lexeme, value = collect_string(cursor)
                yield Token(TokenType.STRING, lexeme, value, start)
                continue

            if char in DIGITS:
                lexeme = collect_number(cursor)
                yield Token(TokenType.NUMBER, lexeme, number_value(lexeme, start), start)
                continue

            if char in OPERATORS:
                operator = cursor.advance()
                if operator in OPEN_BRACKETS:
                    bracket_stack.append(operator)
                elif operator in CLOSE_BRACKETS:
                    if bracket_stack and bracket_stack[-1] == CLOSE_BRACKETS[operator]:
                        bracket_stack.pop()
                elif operator == "." and cursor.peek() is not None and cursor.peek() in DIGITS:
                    lexeme = collect_number(cursor, operator)
                    yield Token(TokenType.NUMBER, lexeme, number_value(lexeme, start), start)
                    continue
                yield Token(TokenType.OP, collect_operator(cursor, operator), None, start)
                continue

            if char.isalpha() or char == "_":
                name = collect_name(cursor)
                yield Token(TokenType.NAME, name, name, start)
                continue

            raise create_invalid_character_error(char, cursor.position(), start)

        end = cursor.location()
        while indent_stack[-1]:
            indent_stack.pop()
            yield Token(TokenType.DEDENT, "", None, end)
        yield Token(TokenType.ENDMARKER, "", None, end)

    def _measure_indent(self, cursor: Cursor, indent_stack: List[str]) -> Iterator[Token]:
        """
        Reconcile the indentation of a new line with the indentation stack.

        Blank and comment-only lines are skipped without touching the stack.
        Levels are compared by length; tabs are not expanded.
        """
        start = cursor.location()
        indent = collect_indent(cursor)
        # A form feed resets the indentation measured so far
        while cursor.peek() == "\f":
            cursor.advance()
            start = cursor.location()
            indent = collect_indent(cursor)
        following = cursor.peek()
        if following is None or following in "\n#":
            return

        if len(indent) > len(indent_stack[-1]):
            indent_stack.append(indent)
            yield Token(TokenType.INDENT, indent, None, start)
            return

        while len(indent) < len(indent_stack[-1]):
            indent_stack.pop()
            yield Token(TokenType.DEDENT, "", None, cursor.location())

        if len(indent) != len(indent_stack[-1]):
            raise IndentError(
                "unindent does not match any outer indentation level",
                cursor.position(),
                cursor.location()
            )


def _prepare_source(source: str) -> str:
    """Normalize line endings and make sure the last line is terminated."""
    text = source.replace("\r\n", "\n").replace("\r", "\n")
    if not text.endswith("\n"):
        text += "\n"
    return text


def _string_prefix(cursor: Cursor) -> Optional[str]:
    """
    Look ahead for a literal prefix (up to two letters) followed by a quote.

    Returns the prefix text without consuming anything, or None when the
    letters start a name instead.
    """
    probe = cursor.duplicate()
    prefix = ""
    while len(prefix) < 2 and probe.peek() is not None and probe.peek() in PREFIX_CHARS:
        prefix += probe.advance()
    if probe.peek() is not None and probe.peek() in QUOTES:
        return prefix
    return None


def tokenize(text: str, filename: str = "<string>") -> List[Token]:
    """
    Tokenize a source string.

    Args:
        text: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens ending with ENDMARKER

    Raises:
        TokenizeError: If lexing fails
    """
    return Lexer(text, filename).tokenize()


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Args:
        filepath: Path to source file

    Returns:
        List of tokens

    Raises:
        TokenizeError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize(source, filepath)
