"""
Element kinds, the compiled UI tree, and the element catalog.
"""

from .models import (
    HandlerRef,
    EventBinding,
    OnClick,
    OnInput,
    Layout,
    Common,
    Column,
    Row,
    Text,
    Button,
    Input,
    Element,
    UiNode,
    dump_tree,
)
from .catalog import ElementRule, CATALOG, EVENT_WRAPPERS, lookup, keywords

__all__ = [
    'HandlerRef', 'EventBinding', 'OnClick', 'OnInput',
    'Layout', 'Common',
    'Column', 'Row', 'Text', 'Button', 'Input', 'Element',
    'UiNode', 'dump_tree',
    'ElementRule', 'CATALOG', 'EVENT_WRAPPERS', 'lookup', 'keywords',
]
