"""JSON Parsing Utilities."""

import json
from typing import Any, Dict

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def strip_code_fences(text: str) -> str:
    """Return the body of the first markdown code block, or the text itself."""
    text = text.strip()
    if "```" not in text:
        return text

    if "```json" in text:
        start = text.find("```json") + 7
    else:
        start = text.find("```") + 3

    end = text.find("```", start)
    if end == -1:
        return text
    return text[start:end].strip()


def parse_json(text: str) -> Any:
    """
    Decode one complete JSON document of any top-level type.

    Raises:
        JSONParseError: If the text is not valid JSON
    """
    try:
        return _decoder.decode(text.encode("utf-8"))
    except (msgspec.DecodeError, UnicodeEncodeError) as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e


def extract_json(text: str, repair: bool = True) -> Dict[str, Any]:
    """
    Extract and parse a JSON object from text with automatic repair.

    Args:
        text: Text containing JSON, possibly inside a markdown code block
        repair: Attempt to repair invalid JSON

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If parsing fails
    """
    text = strip_code_fences(text)

    # Find JSON boundaries
    start = text.find("{")
    end = text.rfind("}")

    if start == -1 or end == -1:
        raise JSONParseError(f"No JSON braces found in text: {text[:200]}...")

    json_str = text[start:end + 1]

    try:
        result = parse_json(json_str)
    except JSONParseError:
        if not repair:
            raise

        try:
            result = json.loads(repair_json(json_str))
        except Exception as repair_error:
            raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string.

    Compact output goes through orjson; indented output uses the standard
    library for readability.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    if kwargs.get("indent"):
        return json.dumps(obj, **kwargs)
    return orjson.dumps(obj).decode("utf-8")
