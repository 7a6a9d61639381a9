"""UI Tree Data Models.

Every model is frozen and validated in strict mode: a compiled tree is
immutable and values are never coerced (``padding="16"`` is rejected, not
turned into ``16``).
"""

from typing import Annotated, Any, ClassVar, Iterator, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from ..core.json import safe_json_dumps


Number = int | float


class FrozenModel(BaseModel):
    """Base for immutable, strictly validated tree records."""

    model_config = ConfigDict(
        frozen=True, strict=True, extra="forbid", arbitrary_types_allowed=True
    )


# ============================================================================
# Handler references and event wrappers
# ============================================================================


class HandlerRef(FrozenModel):
    """Named reference to a handler defined outside the UI description."""

    name: str

    def __str__(self) -> str:
        return self.name


class EventBinding(FrozenModel):
    """A handler bound to one event attribute."""

    event: ClassVar[str] = ""

    handler: Any

    @property
    def handler_name(self) -> str:
        """Readable handler name for logs and serialization."""
        if isinstance(self.handler, HandlerRef):
            return self.handler.name
        return getattr(self.handler, "__qualname__", None) or repr(self.handler)

    @property
    def is_bound(self) -> bool:
        """True when the wrapped handler can be invoked."""
        return not isinstance(self.handler, HandlerRef)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Invoke the wrapped handler with an event payload."""
        if not self.is_bound:
            raise TypeError(f"{self.event} handler '{self.handler_name}' is not bound to a callable")
        return self.handler(*args, **kwargs)


class OnClick(EventBinding):
    """Click handler wrapper."""

    event: ClassVar[str] = "click"


class OnInput(EventBinding):
    """Input handler wrapper."""

    event: ClassVar[str] = "input"


# ============================================================================
# Attribute records
# ============================================================================


class Layout(FrozenModel):
    """Spacing shared by container kinds."""

    padding: Number = Field(default=0)
    gap: Number = Field(default=0)


class Common(FrozenModel):
    """Attributes common to content and control kinds.

    The description language has no syntax for these yet, so every
    compiled node carries the defaults.
    """

    id: str | None = Field(default=None)
    disabled: bool = Field(default=False)
    hidden: bool = Field(default=False)


# ============================================================================
# Element kinds
# ============================================================================


class ElementModel(FrozenModel):
    """Base for the element variants."""

    def props(self) -> dict[str, Any]:
        """Data attributes in serialized form."""
        return {}

    def events(self) -> dict[str, str]:
        """Bound events as ``{event: handler_name}``."""
        return {}


class Column(ElementModel):
    """Vertical container."""

    kind: Literal["column"] = "column"
    layout: Layout = Field(default_factory=Layout)

    def props(self) -> dict[str, Any]:
        return self.layout.model_dump()


class Row(ElementModel):
    """Horizontal container."""

    kind: Literal["row"] = "row"
    layout: Layout = Field(default_factory=Layout)

    def props(self) -> dict[str, Any]:
        return self.layout.model_dump()


class Text(ElementModel):
    """Static text leaf."""

    kind: Literal["text"] = "text"
    content: str
    common: Common = Field(default_factory=Common)

    def props(self) -> dict[str, Any]:
        return {"content": self.content}


class Button(ElementModel):
    """Clickable container, usually holding a text label."""

    kind: Literal["button"] = "button"
    common: Common = Field(default_factory=Common)
    on_click: OnClick | None = Field(default=None)

    def events(self) -> dict[str, str]:
        if self.on_click is None:
            return {}
        return {OnClick.event: self.on_click.handler_name}


class Input(ElementModel):
    """Text input leaf."""

    kind: Literal["input"] = "input"
    common: Common = Field(default_factory=Common)
    on_input: OnInput | None = Field(default=None)

    def events(self) -> dict[str, str]:
        if self.on_input is None:
            return {}
        return {OnInput.event: self.on_input.handler_name}


Element = Annotated[
    Union[Column, Row, Text, Button, Input],
    Field(discriminator="kind"),
]


class UiNode(FrozenModel):
    """One compiled node: a typed element and the children it owns."""

    element: Element
    children: tuple["UiNode", ...] = ()

    @property
    def kind(self) -> str:
        """Keyword of the wrapped element."""
        return self.element.kind

    def walk(self) -> Iterator["UiNode"]:
        """Yield this node and its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Serialize in blueprint explicit form ``{type, props, on_event, children}``."""
        data: dict[str, Any] = {"type": self.kind, "props": self.element.props()}

        common = getattr(self.element, "common", None)
        if common is not None:
            data["common"] = common.model_dump()

        events = self.element.events()
        if events:
            data["on_event"] = events

        if self.children:
            data["children"] = [child.to_dict() for child in self.children]

        return data


UiNode.model_rebuild()


def dump_tree(node: UiNode, indent: int | None = None) -> str:
    """Render a tree as JSON text."""
    return safe_json_dumps(node.to_dict(), indent=indent)


__all__ = [
    "FrozenModel",
    "HandlerRef",
    "EventBinding",
    "OnClick",
    "OnInput",
    "Layout",
    "Common",
    "ElementModel",
    "Column",
    "Row",
    "Text",
    "Button",
    "Input",
    "Element",
    "UiNode",
    "dump_tree",
]
