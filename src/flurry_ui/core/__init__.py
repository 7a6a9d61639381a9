"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
    SourceLocation,
    FlurryError,
    CompileError,
    UnknownElementKind,
    MalformedElement,
    UnrecognizedAttribute,
    DuplicateAttribute,
    ValidationError,
)
from .validate import validate_source_size, validate_depth
from .logging_config import configure_logging, get_logger, LogContext
from .json import extract_json, parse_json, strip_code_fences, safe_json_dumps, JSONParseError
from .hash import Algorithm, hash_string
from .cache import LRUCache, Stats


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "SourceLocation",
    "FlurryError",
    "CompileError",
    "UnknownElementKind",
    "MalformedElement",
    "UnrecognizedAttribute",
    "DuplicateAttribute",
    "ValidationError",
    # Validation
    "validate_source_size",
    "validate_depth",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "extract_json",
    "parse_json",
    "strip_code_fences",
    "safe_json_dumps",
    "JSONParseError",
    # Hashing
    "Algorithm",
    "hash_string",
    # Caching
    "LRUCache",
    "Stats",
]
