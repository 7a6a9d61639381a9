"""
flurry-ui - declarative UI descriptions compiled into typed node trees.

    from flurry_ui import ui

    root = ui('''
        column(padding = 16, gap = 8) {
            text("Login")
            button(on_click = submit) { text("Sign In") }
        }
    ''', submit=submit)
"""

from .core import (
    Settings,
    get_settings,
    configure_logging,
    FlurryError,
    CompileError,
    UnknownElementKind,
    MalformedElement,
    UnrecognizedAttribute,
    DuplicateAttribute,
    ValidationError,
)
from .elements import (
    HandlerRef,
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
from .blueprint import (
    Occurrence,
    AttributeTable,
    Diagnostic,
    TreeCompiler,
    compile_ui,
    compile_forest,
    compile_json,
    try_compile,
    ui,
)

__version__ = "0.1.0"

__all__ = [
    # Compiler
    "ui",
    "compile_ui",
    "compile_forest",
    "compile_json",
    "try_compile",
    "TreeCompiler",
    "Diagnostic",
    "Occurrence",
    "AttributeTable",
    # Tree
    "UiNode",
    "Element",
    "Column",
    "Row",
    "Text",
    "Button",
    "Input",
    "Layout",
    "Common",
    "OnClick",
    "OnInput",
    "HandlerRef",
    "dump_tree",
    # Errors
    "FlurryError",
    "CompileError",
    "UnknownElementKind",
    "MalformedElement",
    "UnrecognizedAttribute",
    "DuplicateAttribute",
    "ValidationError",
    # Config
    "Settings",
    "get_settings",
    "configure_logging",
]
