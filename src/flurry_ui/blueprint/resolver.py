"""Attribute and event resolution against one occurrence's attribute table."""

from typing import Any, Callable, Mapping

from ..core import MalformedElement
from ..elements.catalog import EVENT_WRAPPERS
from ..elements.models import EventBinding, HandlerRef
from .syntax import Attribute, AttributeTable


def resolve(table: AttributeTable, name: str, default: Any) -> Any:
    """
    Value bound to ``name``, or ``default`` when the author left it out.

    The first entry wins when a name is repeated. Never fails.
    """
    attr = table.find(name)
    if attr is None:
        return default
    return attr.value


def bind_handler(
    attr: Attribute,
    handlers: Mapping[str, Callable[..., Any]] | None = None,
    keyword: str | None = None,
) -> Any:
    """
    Turn an event attribute's value into a handler.

    Callables pass through. A ``HandlerRef`` is looked up in ``handlers``
    when a mapping is given and kept as an opaque reference otherwise.

    Raises:
        MalformedElement: If the value is a plain literal or names a missing handler
    """
    value = attr.value
    if isinstance(value, HandlerRef):
        if handlers is None:
            return value
        if value.name not in handlers:
            raise MalformedElement(
                f"no handler named '{value.name}' for '{attr.name}'",
                attr.location,
                keyword=keyword,
                attribute=attr.name,
            )
        value = handlers[value.name]

    if not callable(value):
        raise MalformedElement(
            f"'{attr.name}' expects a handler reference, got {type(value).__name__}",
            attr.location,
            keyword=keyword,
            attribute=attr.name,
        )
    return value


def resolve_event(
    table: AttributeTable,
    name: str,
    handlers: Mapping[str, Callable[..., Any]] | None = None,
    wrapper: type[EventBinding] | None = None,
    keyword: str | None = None,
) -> EventBinding | None:
    """
    Wrapped handler bound to event ``name``, or ``None`` if absent.

    The wrapper type defaults to the one the catalog declares for the
    event name (``on_click`` -> ``OnClick``, ``on_input`` -> ``OnInput``).
    """
    attr = table.find(name)
    if attr is None:
        return None

    wrapper = wrapper or EVENT_WRAPPERS[name]
    return wrapper(handler=bind_handler(attr, handlers, keyword))


__all__ = ["resolve", "resolve_event", "bind_handler"]
