"""
pyscanner Lexer Package

Implements a from-scratch lexical analyzer for Python source text, producing
the same token categories as the standard library ``tokenize`` module.

Key Features:
- Significant-whitespace handling (INDENT/DEDENT, NEWLINE vs NL)
- String, bytes, raw and triple-quoted literals with verbatim lexemes
- f-strings split into start/middle/end tokens with embedded expressions tokenized
- Numeric literals with underscores, exponents and imaginary suffix
- Source location tracking on every token and error

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, OPERATORS
from .cursor import Cursor
from .lexer import Lexer, tokenize, tokenize_file
from .errors import (
    TokenizeError, EscapeSequenceError, StringError, NumberError,
    OperatorError, CharError, IndentError, EndOfFileError
)

__all__ = [
    "Lexer",
    "tokenize",
    "tokenize_file",
    "Cursor",
    "Token",
    "TokenType",
    "SourceLocation",
    "OPERATORS",
    "TokenizeError",
    "EscapeSequenceError",
    "StringError",
    "NumberError",
    "OperatorError",
    "CharError",
    "IndentError",
    "EndOfFileError",
]
