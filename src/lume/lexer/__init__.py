"""
Lume Lexer
==========

Converts Lume source text into a list of typed tokens, each carrying the
exact byte range it was scanned from, or raises a LexicalError pointing
at the malformed text.

Usage
-----
>>> from lume.lexer import lex, TokenType
>>> tokens = lex('let s = r"C:\\\\tmp";', "demo.lume")
>>> tokens[3].type.name, tokens[3].prefix
('PREFIXED_STRING', 'r')
>>> tokens[-1].type.name
'EOF'
"""

from lume.lexer.cursor import Cursor, strip_shebang
from lume.lexer.errors import (
    LexicalError,
    UnexpectedCharacterError,
    UnterminatedLiteralError,
)
from lume.lexer.lexer import Lexer, lex
from lume.lexer.span import Span
from lume.lexer.tokens import KEYWORDS, Token, TokenType, keyword_or_identifier

__all__ = [
    # Entry points
    "lex",
    "Lexer",
    # Tokens
    "Token",
    "TokenType",
    "KEYWORDS",
    "keyword_or_identifier",
    # Positions
    "Span",
    "Cursor",
    "strip_shebang",
    # Errors
    "LexicalError",
    "UnterminatedLiteralError",
    "UnexpectedCharacterError",
]
