"""
Lexer/Tokenizer for the UI description syntax.

Converts raw text into a stream of tokens with source location tracking:

    column(padding = 16, gap = 8) {
        text("Login")
        button(on_click = submit) { text("Sign In") }
    }
"""

from dataclasses import dataclass
from enum import Enum

from ..core.errors import MalformedElement, SourceLocation


class TokenType(Enum):
    """Token types in the UI description syntax."""

    # Literals
    IDENTIFIER = "IDENTIFIER"
    STRING = "STRING"
    NUMBER = "NUMBER"
    TRUE = "true"
    FALSE = "false"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    COMMA = ","
    EQUALS = "="
    DOT = "."

    EOF = "EOF"


KEYWORD_LITERALS = {
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    "=": TokenType.EQUALS,
    ".": TokenType.DOT,
}


@dataclass(frozen=True)
class Token:
    """
    A single token.

    Attributes:
        type: Type of token
        value: String value of the token (unescaped for strings)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.line, self.column)

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """Converts source text into a list of tokens."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def error(self, message: str, line: int | None = None, column: int | None = None) -> MalformedElement:
        return MalformedElement(
            message,
            SourceLocation(line if line is not None else self.line, column if column is not None else self.column),
        )

    def skip_whitespace_and_comments(self) -> None:
        """Skip whitespace and ``//`` line comments."""
        while True:
            current = self.current_char()
            if current is not None and current.isspace():
                self.advance()
            elif current == "/" and self.peek_char() == "/":
                while self.current_char() not in (None, "\n"):
                    self.advance()
            else:
                return

    def read_string(self) -> str:
        """Read a quoted string."""
        start_line = self.line
        start_col = self.column
        quote = self.current_char()  # " or '
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current == quote or current == "\n":
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char is not None:
                    chars.append(escape_char)
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != quote:
            raise self.error("unterminated string literal", start_line, start_col)

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_number(self) -> str:
        """Read an integer or decimal, with optional leading minus."""
        start_line = self.line
        start_col = self.column
        chars = []

        if self.current_char() == "-":
            chars.append("-")
            self.advance()

        current = self.current_char()
        while current is not None and (current.isdecimal() or current == "."):
            chars.append(current)
            self.advance()
            current = self.current_char()

        number_str = "".join(chars)
        digits = number_str.lstrip("-")
        if (
            not digits
            or digits.count(".") > 1
            or digits.startswith(".")
            or digits.endswith(".")
        ):
            raise self.error(f"malformed number '{number_str}'", start_line, start_col)

        if current is not None and (current.isalpha() or current == "_"):
            raise self.error(f"malformed number '{number_str}{current}'", start_line, start_col)

        return number_str

    def read_identifier(self) -> str:
        """Read an identifier or keyword literal."""
        chars = []
        current = self.current_char()
        while current is not None and (current.isalnum() or current == "_"):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire input.

        Returns:
            List of tokens ending with EOF

        Raises:
            MalformedElement: On unterminated strings, bad numbers or stray characters
        """
        while True:
            self.skip_whitespace_and_comments()
            current = self.current_char()
            line, column = self.line, self.column

            if current is None:
                self.tokens.append(Token(TokenType.EOF, "", line, column))
                return self.tokens

            if current in ("'", '"'):
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, line, column))
            elif current.isdecimal() or (current == "-" and (self.peek_char() or "").isdecimal()):
                value = self.read_number()
                self.tokens.append(Token(TokenType.NUMBER, value, line, column))
            elif current.isalpha() or current == "_":
                value = self.read_identifier()
                token_type = KEYWORD_LITERALS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, line, column))
            elif current in PUNCTUATION:
                self.advance()
                self.tokens.append(Token(PUNCTUATION[current], current, line, column))
            else:
                raise self.error(f"unexpected character {current!r}")


def tokenize(text: str) -> list[Token]:
    """
    Convenience function to tokenize text.

    Args:
        text: Source text

    Returns:
        List of tokens
    """
    return Lexer(text).tokenize()


__all__ = ["TokenType", "Token", "Lexer", "tokenize"]
