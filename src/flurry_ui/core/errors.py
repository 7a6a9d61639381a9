"""
Error types for UI description parsing and compilation.

Every failure is raised at compile time, before any tree is handed back.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Position of a construct in the source description.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    line: int
    column: int

    def format(self) -> str:
        """Format as ``line:column``."""
        return f"{self.line}:{self.column}"


class FlurryError(Exception):
    """Base exception for all flurry-ui errors."""

    def __init__(self, message: str, location: SourceLocation | None = None):
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Prefix the message with its location if known."""
        if self.location:
            return f"{self.location.format()}: {self.message}"
        return self.message


class CompileError(FlurryError):
    """Raised when a UI description cannot be compiled into a tree."""

    def __init__(
        self,
        message: str,
        location: SourceLocation | None = None,
        keyword: str | None = None,
        attribute: str | None = None,
    ):
        self.keyword = keyword
        self.attribute = attribute
        super().__init__(message, location)


class UnknownElementKind(CompileError):
    """
    Raised when an element keyword is not in the element catalog.

    Examples:
    - ``box(){ }``
    - ``Column()`` (keywords are case-sensitive)
    """

    def __init__(self, keyword: str, location: SourceLocation | None = None):
        super().__init__(f"unknown element kind '{keyword}'", location, keyword=keyword)


class MalformedElement(CompileError):
    """
    Raised when an element occurrence does not fit its grammar rule.

    Examples:
    - ``text()`` (missing literal content)
    - ``input(){ text("x") }`` (children on a leaf kind)
    - ``column(padding = "wide")`` (wrong value type)
    - unterminated strings, stray characters, unbalanced braces
    """

    pass


class UnrecognizedAttribute(MalformedElement):
    """Raised in strict mode for an attribute the element kind does not declare."""

    pass


class DuplicateAttribute(MalformedElement):
    """Raised in strict mode when one attribute is given more than once."""

    pass


class ValidationError(FlurryError):
    """Input exceeded a configured limit (size, nesting depth)."""

    pass


__all__ = [
    "SourceLocation",
    "FlurryError",
    "CompileError",
    "UnknownElementKind",
    "MalformedElement",
    "UnrecognizedAttribute",
    "DuplicateAttribute",
    "ValidationError",
]
