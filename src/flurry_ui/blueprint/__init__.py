"""
Blueprint DSL Compiler
Converts UI descriptions (text or blueprint mappings) to UiNode trees
"""

from .syntax import Attribute, AttributeTable, Occurrence
from .lexer import Token, TokenType, Lexer, tokenize
from .parser import BlueprintParser, parse_blueprint
from .loader import BlueprintLoader, load_blueprint, load_blueprint_json
from .resolver import resolve, resolve_event, bind_handler
from .compiler import (
    Diagnostic,
    TreeCompiler,
    compile_ui,
    compile_forest,
    compile_json,
    try_compile,
    ui,
)

__all__ = [
    'Attribute', 'AttributeTable', 'Occurrence',
    'Token', 'TokenType', 'Lexer', 'tokenize',
    'BlueprintParser', 'parse_blueprint',
    'BlueprintLoader', 'load_blueprint', 'load_blueprint_json',
    'resolve', 'resolve_event', 'bind_handler',
    'Diagnostic', 'TreeCompiler', 'compile_ui', 'compile_forest', 'compile_json', 'try_compile', 'ui',
]
