"""Input limits for UI descriptions."""

from .errors import ValidationError


# Validation limits
MAX_SOURCE_SIZE = 256 * 1024  # 256KB
MAX_DEPTH = 64


def validate_source_size(source: str, max_size: int = MAX_SOURCE_SIZE, name: str = "source") -> None:
    """
    Validate source size before tokenizing.

    Args:
        source: Source text to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        ValidationError: If size exceeds limit
    """
    size = len(source.encode("utf-8"))
    if size > max_size:
        raise ValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_depth(depth: int, max_depth: int = MAX_DEPTH) -> None:
    """
    Check a single nesting level against the limit.

    Raises:
        ValidationError: If depth exceeds limit
    """
    if depth > max_depth:
        raise ValidationError(f"nesting depth {depth} exceeds maximum {max_depth}")

