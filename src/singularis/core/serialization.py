"""JSON shaping helpers shared by the runtime and the HTTP layer."""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


def camel_dict(obj: Any) -> Any:
    """Recursively convert a dataclass tree into camelCase JSON-ready data.

    Dict keys are kept as-is (they are data, e.g. measurement outcomes like
    "00"), only dataclass field names are renamed.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return {to_camel(f.name): camel_dict(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (list, tuple)):
        return [camel_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {key: camel_dict(value) for key, value in obj.items()}
    return obj
