"""Tree Compiler - element occurrences to UiNode trees.

Compilation is all-or-nothing: it returns a complete tree or raises one
``CompileError`` naming the offending construct.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence, Union

from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Result, Success

from ..core import (
    FlurryError,
    LogContext,
    LRUCache,
    MalformedElement,
    DuplicateAttribute,
    UnrecognizedAttribute,
    Settings,
    get_logger,
    get_settings,
    hash_string,
    validate_depth,
)
from ..elements.catalog import ElementRule, lookup
from ..elements.models import UiNode
from .loader import BlueprintLoader, load_blueprint_json
from .parser import BlueprintParser
from .resolver import resolve, resolve_event
from .syntax import Occurrence

logger = get_logger(__name__)

Handlers = Mapping[str, Callable[..., Any]]
Source = Union[str, Occurrence, Sequence[Any], Mapping[str, Any]]


@dataclass(frozen=True)
class Diagnostic:
    """Compile failure details (for Result pattern)."""

    message: str
    kind: str
    keyword: str | None = None
    attribute: str | None = None
    line: int | None = None
    column: int | None = None

    @classmethod
    def from_error(cls, error: FlurryError) -> "Diagnostic":
        location = error.location
        return cls(
            message=error.message,
            kind=type(error).__name__,
            keyword=getattr(error, "keyword", None),
            attribute=getattr(error, "attribute", None),
            line=location.line if location else None,
            column=location.column if location else None,
        )


class TreeCompiler:
    """Compiles UI descriptions into UiNode trees."""

    def __init__(
        self,
        handlers: Handlers | None = None,
        strict: bool | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize compiler.

        Args:
            handlers: Names available to event attributes; without it,
                named handlers stay unresolved ``HandlerRef``s
            strict: Reject unrecognized and duplicate attributes
                (defaults to the ``strict_attributes`` setting)
            settings: Settings override (defaults to environment settings)
        """
        self.settings = settings or get_settings()
        self.handlers = handlers
        self.strict = self.settings.strict_attributes if strict is None else strict

        cache = None
        if self.settings.enable_cache:
            cache = LRUCache[tuple[Occurrence, ...]](
                max_size=self.settings.cache_size,
                ttl_seconds=self.settings.cache_ttl,
            )

        self.parser = BlueprintParser(
            max_depth=self.settings.max_depth,
            max_source_length=self.settings.max_source_length,
            cache=cache,
        )
        self.loader = BlueprintLoader(max_depth=self.settings.max_depth)

    def occurrences(self, source: Source) -> tuple[Occurrence, ...]:
        """Normalize any accepted source form into top-level occurrences."""
        if isinstance(source, str):
            return self.parser.parse(source)
        if isinstance(source, Occurrence):
            return (source,)
        if isinstance(source, (list, tuple)) and all(isinstance(item, Occurrence) for item in source):
            return tuple(source)
        if isinstance(source, (Mapping, list, tuple)):
            return self.loader.load(list(source) if isinstance(source, tuple) else source)
        raise TypeError(f"cannot compile {type(source).__name__}")

    def compile_forest(self, source: Source) -> tuple[UiNode, ...]:
        """
        Compile every top-level element.

        Raises:
            UnknownElementKind: If a keyword is not in the catalog
            MalformedElement: If an occurrence violates its grammar rule
            ValidationError: If the input exceeds configured limits
        """
        context = {}
        if isinstance(source, str):
            context["source_hash"] = hash_string(source, truncate=16)

        with LogContext(**context):
            try:
                forest = tuple(self.compile_occurrence(occ) for occ in self.occurrences(source))
            except FlurryError as e:
                logger.warning("compile_failed", kind=type(e).__name__, error=str(e))
                raise

            logger.debug(
                "compile_finished",
                roots=len(forest),
                nodes=sum(1 for root in forest for _ in root.walk()),
            )
            return forest

    def compile(self, source: Source) -> UiNode:
        """
        Compile a description with exactly one top-level element.

        Raises:
            MalformedElement: If there are zero or several top-level elements
        """
        forest = self.compile_forest(source)
        if len(forest) != 1:
            logger.warning("compile_failed", kind="MalformedElement", roots=len(forest))
            raise MalformedElement(
                f"expected exactly one top-level element, found {len(forest)}"
            )
        return forest[0]

    def compile_occurrence(self, occurrence: Occurrence, depth: int = 1) -> UiNode:
        """Compile one occurrence and, recursively, its children."""
        validate_depth(depth, self.settings.max_depth)

        rule = lookup(occurrence.keyword, occurrence.location)
        self._check_arguments(rule, occurrence)
        if occurrence.children is not None and not rule.allows_children:
            raise MalformedElement(
                f"'{rule.keyword}' does not accept a children block",
                occurrence.location,
                keyword=rule.keyword,
            )
        if self.strict:
            self._check_attributes(rule, occurrence)

        table = occurrence.attributes
        values: dict[str, Any] = {}
        if rule.literal_argument:
            values[rule.literal_argument] = occurrence.arguments[0]
        for name, default in rule.data_attributes.items():
            values[name] = resolve(table, name, default)
        for name, wrapper in rule.event_attributes.items():
            values[name] = resolve_event(table, name, self.handlers, wrapper, rule.keyword)

        children = tuple(
            self.compile_occurrence(child, depth + 1) for child in occurrence.children or ()
        )

        try:
            return UiNode(element=rule.build(**values), children=children)
        except PydanticValidationError as e:
            raise self._malformed_value(rule, occurrence, e) from e

    def _check_arguments(self, rule: ElementRule, occurrence: Occurrence) -> None:
        args = occurrence.arguments
        if rule.literal_argument is None:
            if args:
                raise MalformedElement(
                    f"'{rule.keyword}' takes no positional arguments, got {len(args)}",
                    occurrence.location,
                    keyword=rule.keyword,
                )
            return

        if len(args) != 1:
            raise MalformedElement(
                f"'{rule.keyword}' takes exactly one literal argument, got {len(args)}",
                occurrence.location,
                keyword=rule.keyword,
            )
        if rule.literal_type is not None and not isinstance(args[0], rule.literal_type):
            raise MalformedElement(
                f"'{rule.keyword}' argument must be a {rule.literal_type.__name__} literal, "
                f"got {type(args[0]).__name__}",
                occurrence.location,
                keyword=rule.keyword,
            )

    def _check_attributes(self, rule: ElementRule, occurrence: Occurrence) -> None:
        accepted = rule.accepted_attributes
        for attr in occurrence.attributes:
            if attr.name not in accepted:
                raise UnrecognizedAttribute(
                    f"'{rule.keyword}' has no attribute '{attr.name}'",
                    attr.location or occurrence.location,
                    keyword=rule.keyword,
                    attribute=attr.name,
                )
        for attr in occurrence.attributes.duplicates():
            raise DuplicateAttribute(
                f"attribute '{attr.name}' given more than once",
                attr.location or occurrence.location,
                keyword=rule.keyword,
                attribute=attr.name,
            )

    def _malformed_value(
        self, rule: ElementRule, occurrence: Occurrence, error: PydanticValidationError
    ) -> MalformedElement:
        detail = error.errors()[0]
        names = [part for part in detail["loc"] if isinstance(part, str)]
        attribute = next(
            (name for name in names if name in rule.accepted_attributes),
            names[0] if names else None,
        )

        location = occurrence.location
        attr = occurrence.attributes.find(attribute) if attribute else None
        if attr is not None and attr.location is not None:
            location = attr.location

        return MalformedElement(
            f"invalid value for '{attribute}' in '{rule.keyword}': {detail['msg']}",
            location,
            keyword=rule.keyword,
            attribute=attribute,
        )


def compile_ui(source: Source, handlers: Handlers | None = None, *, strict: bool | None = None) -> UiNode:
    """
    Compile a UI description with a single root element.

    Args:
        source: Description text, blueprint mapping/list, or occurrences
        handlers: Handler names available to event attributes
        strict: Reject unrecognized and duplicate attributes

    Returns:
        Root node of the compiled tree
    """
    return TreeCompiler(handlers, strict).compile(source)


def compile_forest(
    source: Source, handlers: Handlers | None = None, *, strict: bool | None = None
) -> tuple[UiNode, ...]:
    """Compile a UI description into one node per top-level element."""
    return TreeCompiler(handlers, strict).compile_forest(source)


def compile_json(content: str, handlers: Handlers | None = None, *, strict: bool | None = None) -> UiNode:
    """Compile blueprint JSON text (fenced or slightly broken JSON is recovered)."""
    compiler = TreeCompiler(handlers, strict)
    return compiler.compile(load_blueprint_json(content, compiler.settings.max_depth))


def try_compile(
    source: Source, handlers: Handlers | None = None, *, strict: bool | None = None
) -> Result[UiNode, Diagnostic]:
    """
    Compile a UI description (Result pattern version).

    Returns:
        Success with the root node, or Failure with a Diagnostic
    """
    try:
        return Success(compile_ui(source, handlers, strict=strict))
    except FlurryError as e:
        return Failure(Diagnostic.from_error(e))


def ui(source: Source, /, **handlers: Callable[..., Any]) -> UiNode:
    """
    Compile with handlers given as keyword arguments.

    Examples:
        >>> root = ui('button(on_click = submit) { text("Sign In") }', submit=submit)
    """
    return compile_ui(source, handlers or None)


__all__ = [
    "Diagnostic",
    "TreeCompiler",
    "compile_ui",
    "compile_forest",
    "compile_json",
    "try_compile",
    "ui",
]
