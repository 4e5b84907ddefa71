"""
Lume Token Definitions
======================

Token Categories
----------------
- Keywords: let, mut, func, if, else, match, case, on, own, throws,
  recover, return, import, export, from, enum, class, with, type, is,
  and, or, not
- Literals: integers, floats, booleans, strings, characters, and their
  prefixed forms (r"raw", sql"...", u'x')
- Identifiers (Unicode-aware) and lifetime markers ('static)
- Operators: arithmetic, comparison, bitwise, compound assignment
- Delimiters: ( ) { } [ ] , ; . : -> => ?

Logical operators are spelled as keywords (and, or, not); the symbolic
'!' only exists as part of '!='.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from lume.lexer.span import Span


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the Lume language.

    The set is closed: the parser can match on it exhaustively. Keywords
    are distinguished from identifiers to simplify parsing.
    """

    # === Structural Tokens ===
    EOF = auto()                # End of input, always the last token

    # === Keywords - Declarations ===
    LET = auto()                # let
    MUT = auto()                # mut
    FUNC = auto()               # func
    OWN = auto()                # own
    ENUM = auto()               # enum
    CLASS = auto()              # class
    TYPE = auto()               # type

    # === Keywords - Control Flow ===
    IF = auto()                 # if
    ELSE = auto()               # else
    MATCH = auto()              # match
    CASE = auto()               # case
    ON = auto()                 # on
    THROWS = auto()             # throws
    RECOVER = auto()            # recover
    RETURN = auto()             # return
    IS = auto()                 # is

    # === Keywords - Modules ===
    IMPORT = auto()             # import
    EXPORT = auto()             # export
    FROM = auto()               # from
    WITH = auto()               # with

    # === Keywords - Logical Operators ===
    AND = auto()                # and
    OR = auto()                 # or
    NOT = auto()                # not

    # === Literals ===
    INT = auto()                # 42, 0x2A, 0b1010, 0o52, 1_000
    FLOAT = auto()              # 3.14, 1e5, 1.23e-4
    BOOL = auto()               # true, false
    STRING = auto()             # "decoded\n"
    PREFIXED_STRING = auto()    # r"raw\n" (content kept undecoded)
    CHAR = auto()               # 'a', '\n', '\u{1F600}'
    PREFIXED_CHAR = auto()      # u'a'

    # === Identifiers ===
    IDENTIFIER = auto()         # name, café
    LIFETIME = auto()           # 'static (value is "static")

    # === Arithmetic Operators ===
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /
    PERCENT = auto()            # %

    # === Comparison Operators ===
    EQ = auto()                 # ==
    NE = auto()                 # !=
    LT = auto()                 # <
    GT = auto()                 # >
    LE = auto()                 # <=
    GE = auto()                 # >=

    # === Bitwise Operators ===
    AMPERSAND = auto()          # &
    PIPE = auto()               # |
    CARET = auto()              # ^
    LSHIFT = auto()             # <<
    RSHIFT = auto()             # >>

    # === Assignment Operators ===
    ASSIGN = auto()             # =
    PLUS_ASSIGN = auto()        # +=
    MINUS_ASSIGN = auto()       # -=
    STAR_ASSIGN = auto()        # *=
    SLASH_ASSIGN = auto()       # /=
    PERCENT_ASSIGN = auto()     # %=
    AND_ASSIGN = auto()         # &=
    OR_ASSIGN = auto()          # |=
    XOR_ASSIGN = auto()         # ^=
    LSHIFT_ASSIGN = auto()      # <<=
    RSHIFT_ASSIGN = auto()      # >>=

    # === Delimiters ===
    LPAREN = auto()             # (
    RPAREN = auto()             # )
    LBRACE = auto()             # {
    RBRACE = auto()             # }
    LBRACKET = auto()           # [
    RBRACKET = auto()           # ]
    COMMA = auto()              # ,
    SEMICOLON = auto()          # ;
    DOT = auto()                # .
    COLON = auto()              # :
    ARROW = auto()              # ->
    FAT_ARROW = auto()          # =>
    QUESTION = auto()           # ?


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    # Declarations
    "let": TokenType.LET,
    "mut": TokenType.MUT,
    "func": TokenType.FUNC,
    "own": TokenType.OWN,
    "enum": TokenType.ENUM,
    "class": TokenType.CLASS,
    "type": TokenType.TYPE,

    # Control flow
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "match": TokenType.MATCH,
    "case": TokenType.CASE,
    "on": TokenType.ON,
    "throws": TokenType.THROWS,
    "recover": TokenType.RECOVER,
    "return": TokenType.RETURN,
    "is": TokenType.IS,

    # Modules
    "import": TokenType.IMPORT,
    "export": TokenType.EXPORT,
    "from": TokenType.FROM,
    "with": TokenType.WITH,

    # Logic
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
}

BOOLEANS: dict[str, bool] = {"true": True, "false": False}

ASSIGNMENT_OPERATORS = frozenset({
    TokenType.ASSIGN,
    TokenType.PLUS_ASSIGN,
    TokenType.MINUS_ASSIGN,
    TokenType.STAR_ASSIGN,
    TokenType.SLASH_ASSIGN,
    TokenType.PERCENT_ASSIGN,
    TokenType.AND_ASSIGN,
    TokenType.OR_ASSIGN,
    TokenType.XOR_ASSIGN,
    TokenType.LSHIFT_ASSIGN,
    TokenType.RSHIFT_ASSIGN,
})

LITERALS = frozenset({
    TokenType.INT,
    TokenType.FLOAT,
    TokenType.BOOL,
    TokenType.STRING,
    TokenType.PREFIXED_STRING,
    TokenType.CHAR,
    TokenType.PREFIXED_CHAR,
})

TokenValue = Union[int, float, bool, str, None]


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Lume source code.

    Immutable once created. Each token owns its Span; nothing points back
    into the lexer.

    Attributes:
        type: The TokenType classification
        value: Payload (int, float, bool or str); None for operators,
               delimiters, keywords and EOF
        span: Byte range of the token in the scanned text
        prefix: Identifier in front of a prefixed string or character
    """
    type: TokenType
    value: TokenValue
    span: Span
    prefix: Optional[str] = None

    def __repr__(self) -> str:
        """Format token for debugging output."""
        where = f"{self.span.start}..{self.span.end}"
        if self.prefix is not None:
            return f"Token({self.type.name}, {self.prefix}{self.value!r}, {where})"
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {where})"
        return f"Token({self.type.name}, {where})"

    def is_keyword(self) -> bool:
        """Return True if this token is a keyword (including and/or/not)."""
        return self.type in _KEYWORD_TYPES

    def is_literal(self) -> bool:
        """Return True if this token is a literal value."""
        return self.type in LITERALS

    def is_assignment_operator(self) -> bool:
        """Return True if this token is '=' or a compound assignment."""
        return self.type in ASSIGNMENT_OPERATORS


_KEYWORD_TYPES = frozenset(KEYWORDS.values())


def keyword_or_identifier(name: str) -> tuple[TokenType, TokenValue]:
    """Classify an identifier run against the keyword table."""
    if name in KEYWORDS:
        return KEYWORDS[name], None
    if name in BOOLEANS:
        return TokenType.BOOL, BOOLEANS[name]
    return TokenType.IDENTIFIER, name
