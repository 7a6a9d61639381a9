"""Blueprint loader - mapping/JSON documents to element occurrences.

Two component shapes are accepted, mirroring the text syntax one to one:

- explicit: ``{"type": "button", "props": {...}, "on_event": {"click": "submit"},
  "children": [...]}``
- compact: ``{"button": {"@click": "submit", "children": [...]}}``

A bare string is a ``text`` element. A document is a single component, a
list of components, or ``{"components": [...]}`` (optionally under ``"ui"``).
"""

from typing import Any

from ..core import (
    get_logger,
    extract_json,
    parse_json,
    strip_code_fences,
    JSONParseError,
    MalformedElement,
    validate_depth,
)
from ..core.validate import MAX_DEPTH
from ..elements.catalog import CATALOG
from ..elements.models import HandlerRef
from .syntax import Attribute, AttributeTable, Occurrence

logger = get_logger(__name__)


def _event_attribute(event: str) -> str:
    return event if event.startswith("on_") else f"on_{event}"


def _check_names(keyword: Any, mapping: dict[Any, Any]) -> None:
    for name in mapping:
        if not isinstance(name, str):
            raise MalformedElement(
                f"attribute names of '{keyword}' must be strings, got {name!r}",
                keyword=keyword if isinstance(keyword, str) else None,
            )


def _event_value(value: Any) -> Any:
    """Strings in event position name a handler."""
    if isinstance(value, str):
        return HandlerRef(name=value)
    return value


class BlueprintLoader:
    """Converts blueprint mappings into occurrences."""

    def __init__(self, max_depth: int = MAX_DEPTH):
        self.max_depth = max_depth

    def load(self, data: Any) -> tuple[Occurrence, ...]:
        """
        Load a blueprint document.

        Returns:
            Top-level occurrences in document order

        Raises:
            MalformedElement: If a component has an unsupported shape
            ValidationError: If components nest deeper than ``max_depth``
        """
        if isinstance(data, dict) and isinstance(data.get("ui"), dict):
            data = data["ui"]
        if isinstance(data, dict) and "components" in data:
            data = data["components"]
            if not isinstance(data, list):
                raise MalformedElement("'components' must be a list")

        components = data if isinstance(data, list) else [data]
        return tuple(self._load_component(comp, depth=1) for comp in components)

    def _load_component(self, comp: Any, depth: int) -> Occurrence:
        validate_depth(depth, self.max_depth)

        # Simple string becomes text element
        if isinstance(comp, str):
            return Occurrence(keyword="text", arguments=(comp,))

        if not isinstance(comp, dict):
            raise MalformedElement(
                f"component must be a string or an object, got {type(comp).__name__}"
            )

        if "type" in comp:
            return self._load_explicit(comp, depth)

        if len(comp) != 1:
            raise MalformedElement(
                f"compact component must have exactly one key, got {list(comp)}"
            )

        # Compact format: {keyword: {props, "@event": handler, "children": [...]}}
        keyword, body = next(iter(comp.items()))
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise MalformedElement(f"body of '{keyword}' must be an object", keyword=keyword)

        props = {}
        events = {}
        explicit: dict[str, Any] = {"type": keyword}
        _check_names(keyword, body)
        for key, value in body.items():
            if key.startswith("@"):
                events[key[1:]] = value
            elif key == "children":
                explicit["children"] = value
            else:
                props[key] = value
        explicit["props"] = props
        if events:
            explicit["on_event"] = events

        return self._load_explicit(explicit, depth)

    def _load_explicit(self, comp: dict[str, Any], depth: int) -> Occurrence:
        keyword = comp["type"]
        if not isinstance(keyword, str):
            raise MalformedElement(f"component type must be a string, got {keyword!r}")

        props = comp.get("props") or {}
        events = comp.get("on_event") or {}
        if not isinstance(props, dict):
            raise MalformedElement(f"props of '{keyword}' must be an object", keyword=keyword)
        if not isinstance(events, dict):
            raise MalformedElement(f"on_event of '{keyword}' must be an object", keyword=keyword)
        _check_names(keyword, props)
        _check_names(keyword, events)

        # Unknown kinds pass through untouched; the compiler reports them
        rule = CATALOG.get(keyword)

        arguments = []
        attributes = []
        for name, value in props.items():
            if rule is not None and name == rule.literal_argument:
                arguments.append(value)
            elif rule is not None and name in rule.event_attributes:
                attributes.append(Attribute(name, _event_value(value)))
            else:
                attributes.append(Attribute(name, value))

        for event, handler in events.items():
            attributes.append(Attribute(_event_attribute(event), _event_value(handler)))

        children = None
        if "children" in comp:
            children_data = comp["children"]
            if not isinstance(children_data, list):
                raise MalformedElement(f"children of '{keyword}' must be a list", keyword=keyword)
            children = tuple(self._load_component(child, depth + 1) for child in children_data)

        return Occurrence(
            keyword=keyword,
            attributes=AttributeTable(tuple(attributes)),
            arguments=tuple(arguments),
            children=children,
        )


def load_blueprint(data: Any, max_depth: int = MAX_DEPTH) -> tuple[Occurrence, ...]:
    """Convenience function to load a blueprint mapping."""
    return BlueprintLoader(max_depth).load(data)


def load_blueprint_json(content: str, max_depth: int = MAX_DEPTH) -> tuple[Occurrence, ...]:
    """
    Load blueprint JSON text, repairing it if needed.

    A complete JSON document of any shape (including a top-level list) is
    decoded as is; otherwise an object is extracted from fenced or prose
    text and repaired.

    Raises:
        MalformedElement: If no JSON document can be recovered
    """
    try:
        data = parse_json(strip_code_fences(content))
    except JSONParseError:
        try:
            data = extract_json(content, repair=True)
        except JSONParseError as e:
            logger.warning("json_parse_failed", error=str(e))
            raise MalformedElement(f"invalid blueprint JSON: {e}") from e

    return load_blueprint(data, max_depth)


__all__ = ["BlueprintLoader", "load_blueprint", "load_blueprint_json"]
