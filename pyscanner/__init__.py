"""
pyscanner Package

A lexical scanner for Python source text. It turns source into a flat list
of tokens for parsers, formatters and REPLs, and stops at the first error.

Architecture:
    pyscanner/
    └── lexer/           # Cursor, token model, collectors and the dispatcher

Author: xwest
License: MIT
"""

__version__ = "0.1.0-alpha"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import (
    Lexer, tokenize, tokenize_file, Token, TokenType, SourceLocation,
    OPERATORS, TokenizeError
)

__all__ = [
    # Core entry points
    "Lexer",
    "tokenize",
    "tokenize_file",

    # Data model
    "Token",
    "TokenType",
    "SourceLocation",
    "OPERATORS",
    "TokenizeError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
