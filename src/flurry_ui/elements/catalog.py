"""
Element Catalog.

The static registry of recognized keywords and their grammar rules. The
compiler consults it before resolving any attribute, since which names
are data attributes and which are events depends on the kind.

Adding a kind means adding a model in ``models`` and one entry here.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from ..core.errors import SourceLocation, UnknownElementKind
from .models import (
    Button,
    Column,
    Common,
    ElementModel,
    EventBinding,
    Input,
    Layout,
    OnClick,
    OnInput,
    Row,
    Text,
)


@dataclass(frozen=True)
class ElementRule:
    """
    Grammar rule for one element kind.

    Attributes:
        keyword: Keyword that introduces the element
        data_attributes: Data attribute names mapped to their defaults
        event_attributes: Event attribute names mapped to their wrapper type
        literal_argument: Field bound from the single positional literal, if any
        literal_type: Python type the positional literal must have
        allows_children: Whether a children block is permitted
        build: Assembles the element from resolved attribute values
    """

    keyword: str
    data_attributes: Mapping[str, Any]
    event_attributes: Mapping[str, type[EventBinding]]
    literal_argument: str | None
    literal_type: type | None
    allows_children: bool
    build: Callable[..., ElementModel]

    @property
    def accepted_attributes(self) -> frozenset[str]:
        """Every named attribute this kind recognizes."""
        return frozenset(self.data_attributes) | frozenset(self.event_attributes)


def _build_column(padding: Any, gap: Any) -> Column:
    return Column(layout=Layout(padding=padding, gap=gap))


def _build_row(padding: Any, gap: Any) -> Row:
    return Row(layout=Layout(padding=padding, gap=gap))


def _build_text(content: Any) -> Text:
    return Text(content=content, common=Common())


def _build_button(on_click: OnClick | None) -> Button:
    return Button(common=Common(), on_click=on_click)


def _build_input(on_input: OnInput | None) -> Input:
    return Input(common=Common(), on_input=on_input)


_LAYOUT_DEFAULTS = MappingProxyType({"padding": 0, "gap": 0})
_NONE: Mapping[str, Any] = MappingProxyType({})


CATALOG: Mapping[str, ElementRule] = MappingProxyType(
    {
        "column": ElementRule(
            keyword="column",
            data_attributes=_LAYOUT_DEFAULTS,
            event_attributes=_NONE,
            literal_argument=None,
            literal_type=None,
            allows_children=True,
            build=_build_column,
        ),
        "row": ElementRule(
            keyword="row",
            data_attributes=_LAYOUT_DEFAULTS,
            event_attributes=_NONE,
            literal_argument=None,
            literal_type=None,
            allows_children=True,
            build=_build_row,
        ),
        "text": ElementRule(
            keyword="text",
            data_attributes=_NONE,
            event_attributes=_NONE,
            literal_argument="content",
            literal_type=str,
            allows_children=False,
            build=_build_text,
        ),
        "button": ElementRule(
            keyword="button",
            data_attributes=_NONE,
            event_attributes=MappingProxyType({"on_click": OnClick}),
            literal_argument=None,
            literal_type=None,
            allows_children=True,
            build=_build_button,
        ),
        "input": ElementRule(
            keyword="input",
            data_attributes=_NONE,
            event_attributes=MappingProxyType({"on_input": OnInput}),
            literal_argument=None,
            literal_type=None,
            allows_children=False,
            build=_build_input,
        ),
    }
)

# Event attribute name -> wrapper, across every kind
EVENT_WRAPPERS: Mapping[str, type[EventBinding]] = MappingProxyType(
    {name: wrapper for rule in CATALOG.values() for name, wrapper in rule.event_attributes.items()}
)


def lookup(keyword: str, location: SourceLocation | None = None) -> ElementRule:
    """
    Get the grammar rule for a keyword.

    Raises:
        UnknownElementKind: If the keyword is not in the catalog
    """
    rule = CATALOG.get(keyword)
    if rule is None:
        raise UnknownElementKind(keyword, location)
    return rule


def keywords() -> tuple[str, ...]:
    """Recognized element keywords, in catalog order."""
    return tuple(CATALOG)


__all__ = ["ElementRule", "CATALOG", "EVENT_WRAPPERS", "lookup", "keywords"]
