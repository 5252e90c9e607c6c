"""
Collectors for each token category.

Each collector reads from a ``Cursor`` positioned at (or just past) the start
of a token and returns its lexeme. The dispatcher in ``lexer.py`` decides
which collector to run and wraps the result in a ``Token``.

Author: xwest
"""

from typing import List, Optional, Tuple, Type, Union

from .cursor import Cursor
from .tokens import (
    Token, TokenType, SourceLocation, OPERATORS, AUGMENTABLE_OPERATORS,
    DOUBLED_OPERATORS, INDENT_CHARS, STRING_PREFIXES, FSTRING_PREFIXES,
    ESCAPE_SEQUENCES
)
from .errors import (
    TokenizeError, EscapeSequenceError, StringError, NumberError, OperatorError,
    EndOfFileError, create_unterminated_string_error, create_invalid_number_error
)


DIGITS = "0123456789"


def _is_digit(char: Optional[str]) -> bool:
    return char is not None and char in DIGITS


def _fail(error_class: Type[TokenizeError], message: str, cursor: Cursor) -> TokenizeError:
    return error_class(message, cursor.position(), cursor.location())


def _prefix_start(cursor: Cursor, prefix: str) -> SourceLocation:
    # The prefix was consumed by the dispatcher and never spans a newline
    return SourceLocation(
        cursor.filename,
        cursor.line,
        cursor.column - len(prefix),
        cursor.pos - len(prefix),
    )


def _closes(cursor: Cursor, quote: str, triple: bool) -> bool:
    """Check whether the cursor sits on the closing quote(s) of a literal."""
    if cursor.peek() != quote:
        return False
    if not triple:
        return True
    return cursor.peek(1) == quote and cursor.peek(2) == quote


def _open_quote(cursor: Cursor) -> Tuple[str, bool]:
    """Consume the opening quote, detecting the triple-quoted form by lookahead."""
    quote = cursor.advance()
    probe = cursor.duplicate()
    triple = probe.advance() == quote and probe.advance() == quote
    if triple:
        cursor.advance()
        cursor.advance()
    return quote, triple


def _collect_escape(cursor: Cursor, raw: bool, lexeme: List[str], body: List[str]):
    """
    Handle a backslash inside a literal body.

    Raw literals keep the backslash and the character after it verbatim, so an
    escaped quote never ends the literal. Otherwise the pair is decoded through
    ``ESCAPE_SEQUENCES``; backslash-newline is a line continuation.
    """
    lexeme.append(cursor.advance())
    escaped = cursor.peek()
    if escaped is None:
        raise _fail(EndOfFileError, "Unexpected end of input after backslash", cursor)

    if raw:
        lexeme.append(cursor.advance())
        body.append("\\" + escaped)
    elif escaped == "\n":
        lexeme.append(cursor.advance())
    elif escaped in ESCAPE_SEQUENCES:
        lexeme.append(cursor.advance())
        body.append(ESCAPE_SEQUENCES[escaped])
    else:
        raise _fail(EscapeSequenceError, f"Unexpected escape sequence: '\\{escaped}'", cursor)


def collect_indent(cursor: Cursor) -> str:
    """Collect leading spaces and tabs verbatim."""
    indent = []
    while True:
        char = cursor.consume_if(lambda c: c in INDENT_CHARS)
        if char is None:
            break
        indent.append(char)
    return "".join(indent)


def collect_name(cursor: Cursor, seed: Optional[str] = None) -> str:
    """
    Collect a name.

    ``seed`` is a character the dispatcher already consumed while checking
    for a string prefix. Keywords are not recognized here.
    """
    name = [seed] if seed else []
    while True:
        char = cursor.consume_if(lambda c: not c.isspace() and c not in OPERATORS)
        if char is None:
            break
        name.append(char)
    return "".join(name)


def collect_comment(cursor: Cursor) -> str:
    """Collect a comment up to the end of the line, dropping the leading '#'."""
    cursor.advance()
    comment = []
    while True:
        char = cursor.consume_if(lambda c: c != "\n")
        if char is None:
            break
        comment.append(char)
    return "".join(comment)


def collect_number(cursor: Cursor, seed: Optional[str] = None) -> str:
    """
    Collect a decimal, float or imaginary literal.

    Grammar, greedy left to right:
    - digits, with single underscores allowed between two digits
    - at most one '.', before any exponent (``1.`` and ``.5`` are valid)
    - at most one exponent, only in the signed form ``e+N``/``e-N``;
      a bare ``1e`` leaves the ``e`` for the next token
    - a trailing ``j`` ends the literal
    """
    number = [seed] if seed else []
    seen_dot = seed == "."
    seen_exponent = False

    while True:
        char = cursor.peek()
        if char is None:
            break

        if char in DIGITS:
            number.append(cursor.advance())
        elif char == "_":
            cursor.advance()
            if not _is_digit(cursor.peek()):
                raise create_invalid_number_error(cursor.position(), cursor.location())
            number.append("_")
        elif char == "." and not seen_dot and not seen_exponent:
            seen_dot = True
            number.append(cursor.advance())
            if not _is_digit(cursor.peek()):
                break
        elif char in "eE" and not seen_exponent:
            if cursor.peek(1) not in ("+", "-"):
                break
            seen_exponent = True
            number.append(cursor.advance())
            number.append(cursor.advance())
            if not _is_digit(cursor.peek()):
                raise create_invalid_number_error(cursor.position(), cursor.location())
        elif char in "jJ":
            number.append(cursor.advance())
            break
        else:
            break

    return "".join(number)


def number_value(lexeme: str, location: Optional[SourceLocation] = None) -> Union[int, float, complex]:
    """Convert a collected number lexeme into its Python value."""
    try:
        if lexeme[-1] in "jJ":
            return complex(lexeme)
        if "." in lexeme or "e" in lexeme or "E" in lexeme:
            return float(lexeme)
        return int(lexeme)
    except ValueError:
        position = (location.line, location.column) if location else (0, 0)
        raise NumberError(f"Cannot convert numeric literal: '{lexeme}'", position, location)


def collect_operator(cursor: Cursor, seed: str) -> str:
    """
    Collect the longest operator starting with ``seed`` (already consumed).

    Forms: ``X=`` for augmentable X, ``->``, ``<>``, doubled ``** // << >>``
    with an optional trailing ``=``, and single characters otherwise.
    """
    if len(seed) != 1 or seed not in OPERATORS:
        raise _fail(OperatorError, f"Invalid operator: {seed!r}", cursor)

    following = cursor.peek()

    if following == "=" and seed in AUGMENTABLE_OPERATORS:
        cursor.advance()
        return seed + "="
    if seed == "-" and following == ">":
        cursor.advance()
        return "->"
    if seed == "<" and following == ">":
        cursor.advance()
        return "<>"
    if following == seed and seed in DOUBLED_OPERATORS:
        cursor.advance()
        if cursor.peek() == "=":
            cursor.advance()
            return seed * 2 + "="
        return seed * 2

    return seed


def collect_string(cursor: Cursor, prefix: Optional[str] = None) -> Tuple[str, Union[str, bytes]]:
    """
    Collect a string or bytes literal.

    The cursor sits on the opening quote; ``prefix`` (already consumed) is one
    of ``r b u rb br`` in any case. Returns the verbatim lexeme, prefix and
    quotes included, and the decoded value.
    """
    prefix = prefix or ""
    if prefix and prefix.lower() not in STRING_PREFIXES:
        raise _fail(StringError, f"Invalid prefix: {prefix!r}", cursor)

    raw = "r" in prefix.lower()
    quote, triple = _open_quote(cursor)
    lexeme = [prefix, quote * 3 if triple else quote]
    body: List[str] = []

    while True:
        char = cursor.peek()
        if char is None:
            form = "triple-quoted string" if triple else "string literal"
            raise _fail(EndOfFileError, f"Unexpected end of input in {form}", cursor)

        if _closes(cursor, quote, triple):
            for _ in range(3 if triple else 1):
                lexeme.append(cursor.advance())
            break

        if char == "\\":
            _collect_escape(cursor, raw, lexeme, body)
        elif char == "\n" and not triple:
            raise create_unterminated_string_error(cursor.position(), cursor.location())
        else:
            lexeme.append(cursor.advance())
            body.append(char)

    text = "".join(lexeme)
    if text.count(quote) < 2:
        raise _fail(StringError, "Unterminated string literal", cursor)

    value = "".join(body)
    if "b" in prefix.lower():
        if not value.isascii():
            raise _fail(StringError, "Bytes can only contain ASCII literal characters", cursor)
        return text, value.encode("ascii")
    return text, value


def _collect_fstring_expression(cursor: Cursor, triple: bool) -> List[Token]:
    """
    Collect ``{...}`` up to the first '}' and tokenize it on its own.

    The nested scan gets an independent copy of the expression text; its
    tokens and errors are translated back into outer coordinates.
    """
    from .lexer import tokenize

    origin = cursor.location()
    source = []
    while True:
        char = cursor.peek()
        if char is None:
            raise _fail(EndOfFileError, "Unexpected end of input in f-string expression", cursor)
        if char == "\n" and not triple:
            raise _fail(StringError, "f-string expression is missing '}'", cursor)
        source.append(cursor.advance())
        if char == "}":
            break

    try:
        inner = tokenize("".join(source), cursor.filename)
    except TokenizeError as error:
        raise error.translated(origin) from error

    # The expression is not a whole program: drop its end of line and end marker
    if inner and inner[-1].type == TokenType.ENDMARKER:
        inner.pop()
    if inner and inner[-1].type in (TokenType.NEWLINE, TokenType.NL):
        inner.pop()
    return [token.relocated(origin) for token in inner]


def collect_fstring(cursor: Cursor, prefix: str = "f") -> List[Token]:
    """
    Collect a formatted string as a token run.

    Produces FSTRING_START, then FSTRING_MIDDLE for each non-empty literal run
    interleaved with the tokens of each embedded expression, then FSTRING_END.
    Braces do not nest: an expression ends at its first '}'.
    """
    if prefix.lower() not in FSTRING_PREFIXES:
        raise _fail(StringError, f"Invalid prefix: {prefix!r}", cursor)

    raw = "r" in prefix.lower()
    start = _prefix_start(cursor, prefix)
    quote, triple = _open_quote(cursor)
    closing = quote * 3 if triple else quote
    tokens = [Token(TokenType.FSTRING_START, prefix + closing, None, start)]

    while True:
        char = cursor.peek()
        if char is None:
            raise _fail(StringError, "Unterminated triple-quoted f-string", cursor)

        if _closes(cursor, quote, triple):
            end = cursor.location()
            for _ in closing:
                cursor.advance()
            tokens.append(Token(TokenType.FSTRING_END, closing, None, end))
            break

        if char == "{":
            tokens.extend(_collect_fstring_expression(cursor, triple))
            continue

        location = cursor.location()
        lexeme: List[str] = []
        body: List[str] = []
        while True:
            char = cursor.peek()
            if char is None or char == "{" or _closes(cursor, quote, triple):
                break
            if char == "\\":
                _collect_escape(cursor, raw, lexeme, body)
            elif char == "\n" and not triple:
                raise _fail(StringError, "Unterminated f-string", cursor)
            else:
                lexeme.append(cursor.advance())
                body.append(char)

        if lexeme:
            tokens.append(Token(TokenType.FSTRING_MIDDLE, "".join(lexeme), "".join(body), location))

    return tokens
