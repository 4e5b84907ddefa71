"""
Lume - Language Toolchain
=========================

Lume is a general-purpose language with C-like syntax, explicit
ownership annotations (own, mut), lifetime markers ('static), pattern
matching (match/case) and prefixed string literals (r"...", sql"...").

Main Components
---------------
- **lexer**: Source text to token stream (lume.lexer)
    Byte-accurate spans on every token, fail-fast lexical errors

- **cli**: Developer tools (lumelex)
    Dumps the token stream of a source file

The parser, checker and interpreter consume the lexer's token list and
error type; they live outside this package.

Quick Start
-----------
    >>> from lume import lex
    >>> [t.type.name for t in lex("let x = 1;")]
    ['LET', 'IDENTIFIER', 'ASSIGN', 'INT', 'SEMICOLON', 'EOF']

Or from the command line:
    $ lumelex main.lume
"""

__version__ = "0.1.0"

# =============================================================================
# Public API Exports
# =============================================================================

from lume.errors import LumeError, SourceLocation
from lume.lexer import (
    Lexer,
    LexicalError,
    Span,
    Token,
    TokenType,
    lex,
)

__all__ = [
    "__version__",
    # Lexer
    "lex",
    "Lexer",
    "Token",
    "TokenType",
    "Span",
    # Errors
    "LumeError",
    "LexicalError",
    "SourceLocation",
]
