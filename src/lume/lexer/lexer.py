"""
Lume Lexer (Tokenizer)
======================

This module implements the lexer for the Lume language. It converts
source text into a stream of tokens for the parser in a single
left-to-right pass.

The lexer looks at the next character and dispatches to a sub-scanner:

| Leading character      | Sub-scanner                                   |
|------------------------|-----------------------------------------------|
| space, tab, CR, LF     | skipped                                       |
| // or /*               | comment skipper (block comments nest)         |
| 0-9                    | number scanner                                |
| letter or _            | identifier, keyword or prefixed literal       |
| "                      | string scanner (escapes processed)            |
| '                      | lifetime marker or character literal          |
| anything else          | operator / delimiter dispatcher               |

Number Formats
--------------
| Format      | Prefix  | Example     | Value   |
|-------------|---------|-------------|---------|
| Decimal     | (none)  | 1_000       | 1000    |
| Hexadecimal | 0x/0X   | 0x2A        | 42      |
| Binary      | 0b/0B   | 0b10_1010   | 42      |
| Octal       | 0o/0O   | 0o52        | 42      |
| Float       | (none)  | 6.022e23    | 6.022e23|

Escape Sequences
----------------
\\n \\r \\t \\\\ \\" \\' and \\u{H..H} (1 to 6 hex digits). Strings with an
identifier prefix (r"...", sql"...") are raw: backslashes are kept.

Spans
-----
Spans are UTF-8 byte offsets into the source after a leading ``#!``
line has been removed. The EOF token sits at the end of the text.

Example Usage
-------------
>>> from lume.lexer import lex
>>> for token in lex('let x = 0x2A;', "demo.lume"):
...     print(token)
Token(LET, 0..3)
Token(IDENTIFIER, 'x', 4..5)
Token(ASSIGN, 6..7)
Token(INT, 42, 8..12)
Token(SEMICOLON, 12..13)
Token(EOF, 13..13)
"""

import logging
import unicodedata
from typing import Iterator, Optional

from lume.lexer.cursor import Cursor, strip_shebang, utf8_length
from lume.lexer.errors import (
    LexicalError,
    UnexpectedCharacterError,
    UnterminatedLiteralError,
)
from lume.lexer.span import Span
from lume.lexer.tokens import Token, TokenType, TokenValue, keyword_or_identifier

logger = logging.getLogger(__name__)


# Largest value of a signed 64-bit integer literal
I64_MAX = 2 ** 63 - 1

DECIMAL_DIGITS = frozenset("0123456789")
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Base prefixes following a leading 0 and the digits valid after each
RADIX_PREFIXES = {
    "x": 16, "X": 16,
    "b": 2, "B": 2,
    "o": 8, "O": 8,
}
RADIX_DIGITS = {
    2: frozenset("01"),
    8: frozenset("01234567"),
    10: DECIMAL_DIGITS,
    16: HEX_DIGITS,
}

WHITESPACE = frozenset(" \t\n\r")

# Combining marks (nonspacing, spacing, enclosing) that may continue an identifier
IDENTIFIER_MARK_CATEGORIES = frozenset({"Mn", "Mc", "Me"})

# Unicode escapes accept at most this many hex digits
MAX_UNICODE_ESCAPE_DIGITS = 6


class Lexer:
    """
    Tokenizes Lume source code.

    Usage:
        lexer = Lexer(source_text, "main.lume")
        tokens = list(lexer.tokenize())

    The lexer stops at the first malformed construct and raises a
    LexicalError; there is no recovery.

    Attributes:
        source: The source text as given by the caller
        filename: Name of the source (carried by every span)
        text: The text actually scanned (source minus any shebang line)
    """

    # Single-character escape sequences in strings and characters
    ESCAPE_SEQUENCES = {
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "\\": "\\",
        '"': '"',
        "'": "'",
    }

    # Characters that always form a token on their own
    SINGLE_TOKENS = {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ";": TokenType.SEMICOLON,
        ",": TokenType.COMMA,
        ":": TokenType.COLON,
        ".": TokenType.DOT,
        "?": TokenType.QUESTION,
    }

    # Operators whose only longer form is the same symbol followed by '='
    COMPOUND_OPERATORS = {
        "+": (TokenType.PLUS, TokenType.PLUS_ASSIGN),
        "*": (TokenType.STAR, TokenType.STAR_ASSIGN),
        "%": (TokenType.PERCENT, TokenType.PERCENT_ASSIGN),
        "&": (TokenType.AMPERSAND, TokenType.AND_ASSIGN),
        "|": (TokenType.PIPE, TokenType.OR_ASSIGN),
        "^": (TokenType.CARET, TokenType.XOR_ASSIGN),
    }

    # Comparison and shift families: single, doubled, single+'=', doubled+'='
    SHIFT_COMPARE_OPERATORS = {
        "<": (TokenType.LT, TokenType.LSHIFT, TokenType.LE, TokenType.LSHIFT_ASSIGN),
        ">": (TokenType.GT, TokenType.RSHIFT, TokenType.GE, TokenType.RSHIFT_ASSIGN),
    }

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: The Lume source text
            filename: Name of the source (for spans and error messages)
        """
        self.source = source
        self.filename = filename
        self.text = strip_shebang(source)

        # Diagnostics count lines from the original file
        self._first_line = 1 if self.text is source else 2

        self._cursor = Cursor(self.text)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order, ending with exactly one EOF

        Raises:
            LexicalError: If malformed source is encountered
        """
        count = 0
        while True:
            self._skip_whitespace_and_comments()
            if self._cursor.at_end():
                break

            token = self._scan_token()
            logger.debug(f"token {token!r}")
            count += 1
            yield token

        end = self._cursor.offset
        logger.debug(f"Lexed {self.filename}: {count} tokens, {end} bytes")
        yield Token(TokenType.EOF, None, self.span(end, end))

    # =========================================================================
    # Span and Token Creation
    # =========================================================================

    def span(self, start: int, end: int) -> Span:
        """Create a span over [start, end) in the scanned text."""
        return Span(start, end, self.filename)

    def _make_token(
        self,
        token_type: TokenType,
        start: int,
        value: TokenValue = None,
        prefix: Optional[str] = None,
    ) -> Token:
        """Create a token from ``start`` to the current offset."""
        return Token(token_type, value, self.span(start, self._cursor.offset), prefix)

    def _error(
        self,
        message: str,
        start: int,
        end: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> LexicalError:
        """
        Create a lexical error spanning [start, end).

        ``end`` defaults to the current offset.
        """
        if end is None:
            end = self._cursor.offset
        return LexicalError(
            message,
            self.span(start, end),
            self.text,
            hint=hint,
            first_line=self._first_line,
        )

    def _unterminated(self, message: str, start: int) -> UnterminatedLiteralError:
        """Create an error for a construct cut off by the end of input."""
        return UnterminatedLiteralError(
            message,
            self.span(start, self._cursor.byte_length),
            self.text,
            first_line=self._first_line,
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comments."""
        cursor = self._cursor
        while not cursor.at_end():
            char = cursor.peek()

            if char in WHITESPACE:
                cursor.advance()
                continue

            if char == "/" and cursor.peek(1) == "/":
                self._skip_line_comment()
                continue

            if char == "/" and cursor.peek(1) == "*":
                self._skip_block_comment()
                continue

            break

    def _skip_line_comment(self) -> None:
        """Skip a line comment (// or ///) including its newline."""
        cursor = self._cursor
        cursor.advance()
        cursor.advance()
        # Third slash marks a doc comment; it is discarded all the same
        cursor.match("/")

        while not cursor.at_end():
            if cursor.advance() == "\n":
                return

    def _skip_block_comment(self) -> None:
        """
        Skip a block comment, honouring nested /* ... */ pairs.

        Raises:
            UnterminatedLiteralError: If input ends before depth returns to 0
        """
        cursor = self._cursor
        start = cursor.offset
        cursor.advance()
        cursor.advance()

        depth = 1
        while depth > 0:
            if cursor.at_end():
                raise self._unterminated("unterminated block comment", start)

            char = cursor.advance()
            if char == "*" and cursor.match("/"):
                depth -= 1
            elif char == "/" and cursor.match("*"):
                depth += 1

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        """Scan the next token; whitespace and comments are already skipped."""
        start = self._cursor.offset
        char = self._cursor.peek()

        if char in DECIMAL_DIGITS:
            return self._scan_number(start)

        if _is_identifier_start(char):
            return self._scan_identifier(start)

        if char == '"':
            self._cursor.advance()
            content = self._scan_string_content(start, escapes=True)
            return self._make_token(TokenType.STRING, start, content)

        if char == "'":
            return self._scan_quote(start)

        return self._scan_operator(start)

    # =========================================================================
    # Numbers
    # =========================================================================

    def _scan_number(self, start: int) -> Token:
        """
        Scan a numeric literal.

        A base prefix (0x, 0b, 0o) produces an integer and never a float;
        otherwise a decimal run may continue with a fraction and/or an
        exponent, which turns the literal into a float.
        """
        cursor = self._cursor

        base = RADIX_PREFIXES.get(cursor.peek(1)) if cursor.peek() == "0" else None
        if base is not None:
            cursor.advance()  # consume 0
            cursor.advance()  # consume x, b or o
            digits = self._scan_digits(RADIX_DIGITS[base])
            if not digits.replace("_", ""):
                raise self._error("invalid integer literal", start)
            return self._make_integer(digits, base, start)

        parts = [self._scan_digits(DECIMAL_DIGITS)]
        is_float = False

        # Fraction: only when a digit follows the dot, so `1.foo` stays INT DOT
        if cursor.peek() == "." and cursor.peek(1) in DECIMAL_DIGITS:
            is_float = True
            parts.append(cursor.advance())
            parts.append(self._scan_digits(DECIMAL_DIGITS))

        if cursor.peek() in ("e", "E"):
            is_float = True
            parts.append(cursor.advance())
            if cursor.peek() in ("+", "-"):
                parts.append(cursor.advance())
            exponent = self._scan_digits(DECIMAL_DIGITS)
            if not exponent.replace("_", ""):
                raise self._error("invalid exponent", start)
            parts.append(exponent)

        literal = "".join(parts).replace("_", "")
        if is_float:
            return self._make_token(TokenType.FLOAT, start, float(literal))
        return self._make_integer(literal, 10, start)

    def _scan_digits(self, valid: frozenset) -> str:
        """Consume a run of ``valid`` digits and underscores."""
        cursor = self._cursor
        chars = []
        while cursor.peek() in valid or cursor.peek() == "_":
            chars.append(cursor.advance())
        return "".join(chars)

    def _make_integer(self, digits: str, base: int, start: int) -> Token:
        """Convert a digit run to a signed 64-bit INT token."""
        value = int(digits.replace("_", ""), base)
        if value > I64_MAX:
            raise self._error(
                "integer literal too large",
                start,
                hint=f"the largest integer literal is {I64_MAX}",
            )
        return self._make_token(TokenType.INT, start, value)

    # =========================================================================
    # Identifiers, Keywords and Prefixed Literals
    # =========================================================================

    def _scan_identifier_run(self) -> str:
        """Consume a maximal run of identifier characters."""
        cursor = self._cursor
        chars = []
        while _is_identifier_char(cursor.peek()):
            chars.append(cursor.advance())
        return "".join(chars)

    def _scan_identifier(self, start: int) -> Token:
        """
        Scan an identifier, keyword, or prefixed literal.

        An identifier immediately followed by a quote is a literal prefix:
        r"C:\\dir" is a raw string with prefix "r", u'x' a character with
        prefix "u".
        """
        cursor = self._cursor
        name = self._scan_identifier_run()

        if cursor.peek() == '"':
            quote = cursor.offset
            cursor.advance()
            content = self._scan_string_content(quote, escapes=False)
            return self._make_token(TokenType.PREFIXED_STRING, start, content, prefix=name)

        if cursor.peek() == "'":
            cursor.advance()
            char = self._scan_char_content(start)
            return self._make_token(TokenType.PREFIXED_CHAR, start, char, prefix=name)

        token_type, value = keyword_or_identifier(name)
        return self._make_token(token_type, start, value)

    # =========================================================================
    # Lifetimes and Character Literals
    # =========================================================================

    def _scan_quote(self, start: int) -> Token:
        """
        Scan a token starting with a single quote.

        'a' is a character literal, 'abc (no closing quote right after the
        first letter) is a lifetime marker, and anything not starting with
        a letter ('1', '\\n', '中') is a character literal.
        """
        cursor = self._cursor
        first = cursor.peek(1)
        second = cursor.peek(2)

        if not first:
            raise self._error("unexpected end of input after quote", start, start + 1)

        if _is_identifier_start(first):
            if second == "'":
                cursor.advance()
                char = self._scan_char_content(start)
                return self._make_token(TokenType.CHAR, start, char)
            if not second:
                raise self._error("unexpected end of input after quote", start, start + 1)

            cursor.advance()  # consume the sigil
            name = self._scan_identifier_run()
            return self._make_token(TokenType.LIFETIME, start, name)

        cursor.advance()
        char = self._scan_char_content(start)
        return self._make_token(TokenType.CHAR, start, char)

    def _scan_char_content(self, start: int) -> str:
        """
        Scan the body of a character literal after its opening quote.

        Exactly one escaped or literal Unicode scalar value must appear
        before the closing quote.

        Args:
            start: Offset where the literal (or its prefix) begins
        """
        cursor = self._cursor

        if cursor.at_end():
            raise self._unterminated("unterminated character literal", start)

        if cursor.peek() == "'":
            cursor.advance()
            raise self._error(
                "empty character literal",
                start,
                hint="use '\\'' for a quote character",
            )

        content_start = cursor.offset
        char = cursor.advance()
        if char == "\\":
            char = self._scan_escape_sequence(content_start)

        if _is_surrogate(ord(char)):
            raise self._error("character literal contains invalid Unicode surrogate", content_start)

        if cursor.at_end():
            raise self._unterminated("unterminated character literal", start)

        if cursor.peek() != "'":
            end = cursor.offset + utf8_length(cursor.peek())
            raise self._error(
                "character literal must contain exactly one character",
                start,
                end,
                hint='use a string literal ("...") for more than one character',
            )
        cursor.advance()
        return char

    # =========================================================================
    # Strings and Escape Sequences
    # =========================================================================

    def _scan_string_content(self, quote: int, escapes: bool) -> str:
        """
        Scan string content up to the closing double quote.

        Args:
            quote: Offset of the opening quote
            escapes: Decode escape sequences; when False, backslashes are
                     kept as written and the next '"' always closes

        Raises:
            UnterminatedLiteralError: If input ends before the closing quote
        """
        cursor = self._cursor
        chars = []
        while not cursor.at_end():
            char_start = cursor.offset
            char = cursor.advance()
            if char == '"':
                return "".join(chars)
            if escapes and char == "\\":
                chars.append(self._scan_escape_sequence(char_start))
            else:
                chars.append(char)

        raise self._unterminated("unterminated string literal", quote)

    def _scan_escape_sequence(self, start: int) -> str:
        """
        Decode an escape sequence whose backslash has been consumed.

        Args:
            start: Offset of the backslash

        Returns:
            The character represented by the escape sequence
        """
        cursor = self._cursor
        if cursor.at_end():
            raise self._unterminated("unterminated escape sequence", start)

        char = cursor.advance()
        if char in self.ESCAPE_SEQUENCES:
            return self.ESCAPE_SEQUENCES[char]

        if char == "u":
            return self._scan_unicode_escape(start)

        raise self._error(
            f"unknown escape sequence \\{char}",
            start,
            hint="valid escapes are \\n \\r \\t \\\\ \\\" \\' and \\u{...}",
        )

    def _scan_unicode_escape(self, start: int) -> str:
        """Decode the {H..H} part of a \\u{...} escape."""
        cursor = self._cursor
        if cursor.at_end():
            raise self._unterminated("unterminated escape sequence", start)
        if not cursor.match("{"):
            raise self._error("expected '{' after \\u", start, cursor.offset + utf8_length(cursor.peek()))

        digits = []
        while True:
            if cursor.at_end():
                raise self._unterminated("unterminated escape sequence", start)
            char = cursor.peek()
            if char == "}":
                cursor.advance()
                break
            if char not in HEX_DIGITS:
                raise self._error(
                    "invalid hex digit in \\u{...}",
                    cursor.offset,
                    cursor.offset + utf8_length(char),
                )
            digits.append(cursor.advance())

        if not digits or len(digits) > MAX_UNICODE_ESCAPE_DIGITS:
            raise self._error("unicode escape must have 1-6 hex digits", start)

        code = int("".join(digits), 16)
        if code > 0x10FFFF:
            raise self._error(
                "invalid unicode codepoint",
                start,
                hint=f"U+{code:X} is beyond the last code point U+10FFFF",
            )
        if _is_surrogate(code):
            raise self._error(
                "invalid unicode codepoint",
                start,
                hint=f"U+{code:04X} is a surrogate, not a Unicode scalar value",
            )
        return chr(code)

    # =========================================================================
    # Operators and Delimiters
    # =========================================================================

    def _scan_operator(self, start: int) -> Token:
        """
        Scan an operator or delimiter.

        Longest match first, with at most two characters of lookahead.
        """
        cursor = self._cursor
        char = cursor.advance()

        if char in self.SINGLE_TOKENS:
            return self._make_token(self.SINGLE_TOKENS[char], start)

        if char in self.COMPOUND_OPERATORS:
            plain, compound = self.COMPOUND_OPERATORS[char]
            if cursor.match("="):
                return self._make_token(compound, start)
            return self._make_token(plain, start)

        if char in self.SHIFT_COMPARE_OPERATORS:
            single, double, single_eq, double_eq = self.SHIFT_COMPARE_OPERATORS[char]
            if cursor.match(char):
                if cursor.match("="):
                    return self._make_token(double_eq, start)
                return self._make_token(double, start)
            if cursor.match("="):
                return self._make_token(single_eq, start)
            return self._make_token(single, start)

        if char == "=":
            if cursor.match("="):
                return self._make_token(TokenType.EQ, start)
            if cursor.match(">"):
                return self._make_token(TokenType.FAT_ARROW, start)
            return self._make_token(TokenType.ASSIGN, start)

        if char == "-":
            if cursor.match(">"):
                return self._make_token(TokenType.ARROW, start)
            if cursor.match("="):
                return self._make_token(TokenType.MINUS_ASSIGN, start)
            return self._make_token(TokenType.MINUS, start)

        if char == "/":
            # Comments were consumed before dispatch
            if cursor.match("="):
                return self._make_token(TokenType.SLASH_ASSIGN, start)
            return self._make_token(TokenType.SLASH, start)

        if char == "!":
            if cursor.match("="):
                return self._make_token(TokenType.NE, start)
            raise self._error(
                "unexpected '!'; logical NOT is written as 'not'",
                start,
                hint="write 'not x' instead of '!x'",
            )

        raise UnexpectedCharacterError(
            char,
            self.span(start, cursor.offset),
            self.text,
            first_line=self._first_line,
        )


# =============================================================================
# Character Classification
# =============================================================================

def _is_identifier_start(char: str) -> bool:
    """Letters (any script) and underscore can start an identifier."""
    return char == "_" or char.isalpha()


def _is_identifier_char(char: str) -> bool:
    """
    Letters, digits (any script), underscore and combining marks continue
    an identifier. Marks cover viramas and vowel signs (नमस्ते, ভাষা) and
    decomposed accents (cafe + U+0301).
    """
    if char == "_" or char.isalnum():
        return True
    return bool(char) and unicodedata.category(char) in IDENTIFIER_MARK_CATEGORIES


def _is_surrogate(code: int) -> bool:
    return 0xD800 <= code <= 0xDFFF


# =============================================================================
# Entry Point
# =============================================================================

def lex(source: str, filename: str = "<input>") -> list[Token]:
    """
    Tokenize a complete source text.

    Args:
        source: Source code string
        filename: Source identifier carried by every span

    Returns:
        List of tokens in source order, ending with a single EOF token

    Raises:
        LexicalError: On the first malformed construct; no partial result
    """
    return list(Lexer(source, filename).tokenize())
