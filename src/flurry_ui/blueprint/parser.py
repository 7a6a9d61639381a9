"""Blueprint Parser - UI description text to element occurrences.

Recursive-descent over the token stream:

    document  := element* EOF
    element   := IDENTIFIER '(' [item (',' item)* [',']] ')' [block]
    item      := IDENTIFIER '=' value | literal
    value     := literal | IDENTIFIER ('.' IDENTIFIER)*
    literal   := STRING | NUMBER | 'true' | 'false'
    block     := '{' element* '}'

The parser knows nothing about element kinds; the compiler checks each
occurrence against the element catalog.
"""

import math
from typing import Any

from ..core import get_logger, LRUCache, MalformedElement, validate_depth, validate_source_size
from ..core.validate import MAX_DEPTH, MAX_SOURCE_SIZE
from ..elements.models import HandlerRef
from .lexer import Token, TokenType, tokenize
from .syntax import Attribute, AttributeTable, Occurrence

logger = get_logger(__name__)

LITERAL_TOKENS = (TokenType.STRING, TokenType.NUMBER, TokenType.TRUE, TokenType.FALSE)


def _describe(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.STRING:
        return f"string {token.value!r}"
    return f"'{token.value}'"


class _TokenStream:
    """Cursor over one token list; one instance per parse."""

    def __init__(self, tokens: list[Token], max_depth: int):
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        pos = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[pos]

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def expect(self, token_type: TokenType, what: str, keyword: str | None = None) -> Token:
        token = self.current()
        if token.type != token_type:
            raise MalformedElement(
                f"expected {what}, found {_describe(token)}",
                token.location,
                keyword=keyword,
            )
        return self.advance()

    def parse_document(self) -> tuple[Occurrence, ...]:
        elements = []
        while self.current().type != TokenType.EOF:
            elements.append(self.parse_element(depth=1))
        return tuple(elements)

    def parse_element(self, depth: int) -> Occurrence:
        validate_depth(depth, self.max_depth)

        head = self.expect(TokenType.IDENTIFIER, "element keyword")
        keyword = head.value
        self.expect(TokenType.LPAREN, f"'(' after '{keyword}'", keyword)
        arguments, attributes = self.parse_arguments(keyword)

        children = None
        if self.current().type == TokenType.LBRACE:
            self.advance()
            nested = []
            while self.current().type != TokenType.RBRACE:
                if self.current().type == TokenType.EOF:
                    raise MalformedElement(
                        f"unclosed children block of '{keyword}'", head.location, keyword=keyword
                    )
                nested.append(self.parse_element(depth + 1))
            self.advance()
            children = tuple(nested)

        return Occurrence(
            keyword=keyword,
            attributes=AttributeTable(tuple(attributes)),
            arguments=tuple(arguments),
            children=children,
            location=head.location,
        )

    def parse_arguments(self, keyword: str) -> tuple[list[Any], list[Attribute]]:
        arguments: list[Any] = []
        attributes: list[Attribute] = []

        if self.current().type == TokenType.RPAREN:
            self.advance()
            return arguments, attributes

        while True:
            token = self.current()
            if token.type == TokenType.IDENTIFIER and self.peek().type == TokenType.EQUALS:
                self.advance()
                self.advance()
                attributes.append(Attribute(token.value, self.parse_value(keyword), token.location))
            elif token.type in LITERAL_TOKENS:
                arguments.append(self.parse_literal(keyword))
            else:
                raise MalformedElement(
                    f"expected literal or 'name = value', found {_describe(token)}",
                    token.location,
                    keyword=keyword,
                )

            if self.current().type == TokenType.COMMA:
                self.advance()
                if self.current().type == TokenType.RPAREN:
                    self.advance()
                    break
                continue

            self.expect(TokenType.RPAREN, f"',' or ')' in arguments of '{keyword}'", keyword)
            break

        return arguments, attributes

    def parse_value(self, keyword: str) -> Any:
        token = self.current()
        if token.type in LITERAL_TOKENS:
            return self.parse_literal(keyword)
        if token.type == TokenType.IDENTIFIER:
            parts = [self.advance().value]
            while self.current().type == TokenType.DOT:
                self.advance()
                parts.append(self.expect(TokenType.IDENTIFIER, "name after '.'", keyword).value)
            return HandlerRef(name=".".join(parts))
        raise MalformedElement(
            f"expected attribute value, found {_describe(token)}",
            token.location,
            keyword=keyword,
        )

    def parse_literal(self, keyword: str | None = None) -> Any:
        token = self.advance()
        if token.type == TokenType.STRING:
            return token.value
        if token.type == TokenType.TRUE:
            return True
        if token.type == TokenType.FALSE:
            return False

        try:
            value = float(token.value) if "." in token.value else int(token.value)
        except ValueError as e:
            # int() refuses very long digit strings
            raise MalformedElement(
                f"number literal too large ({len(token.value)} characters)",
                token.location,
                keyword=keyword,
            ) from e
        if isinstance(value, float) and math.isinf(value):
            raise MalformedElement(
                f"number literal too large ({len(token.value)} characters)",
                token.location,
                keyword=keyword,
            )
        return value


class BlueprintParser:
    """Parses UI description text into element occurrences.

    Results are cached per instance when a cache is supplied; occurrences
    are immutable so a cached forest can be handed out repeatedly. Keys
    cover the depth limit as well as the source, so parsers with different
    limits can share one cache.
    """

    def __init__(
        self,
        max_depth: int = MAX_DEPTH,
        max_source_length: int = MAX_SOURCE_SIZE,
        cache: LRUCache[tuple[Occurrence, ...]] | None = None,
    ):
        self.max_depth = max_depth
        self.max_source_length = max_source_length
        self.cache = cache

    def parse(self, source: str) -> tuple[Occurrence, ...]:
        """
        Parse UI description text.

        Args:
            source: Text in the declarative UI syntax

        Returns:
            Top-level occurrences in source order

        Raises:
            MalformedElement: On any syntax error
            ValidationError: If the source is too large or nested too deeply
        """
        validate_source_size(source, self.max_source_length)

        cache_key = f"{self.max_depth}:{source}"
        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("parse_cache_hit", elements=len(cached))
                return cached

        logger.debug("parse_started", length=len(source))
        forest = _TokenStream(tokenize(source), self.max_depth).parse_document()

        if self.cache is not None:
            self.cache.set(cache_key, forest)
        return forest


def parse_blueprint(source: str) -> tuple[Occurrence, ...]:
    """
    Convenience function to parse UI description text

    Args:
        source: UI description text

    Returns:
        Top-level occurrences
    """
    parser = BlueprintParser()
    return parser.parse(source)


__all__ = ["BlueprintParser", "parse_blueprint"]
