"""Boolean coercion helpers for strings, characters, enums and numeric values."""

import enum
import unicodedata
from typing import Any

from reggie_extensions import strs

_FALSE_STRINGS = (
    "0",
    "false",
    "nan",
    "no",
    "none",
    "undefine",
    "undefined",
    "zero",
    "ложь",
    "нет",
    "ноль",
)
_FALSE_ENUM_NAMES = ("none", "undefined")


def to_bool(value: Any, default: bool = False) -> bool:
    """Coerce config style values to a boolean, using default for None."""
    if isinstance(value, bool):
        return value
    elif value is None:
        return default
    elif isinstance(value, str):
        return string_to_bool(value)
    return value_to_bool(value)


def string_to_bool(value: str | None) -> bool:
    """
    Return False for empty strings and known false tokens, True otherwise.

    Tokens are compared after stripping and case folding, so " NO " and
    "Нет" are both False.
    """
    if strs.is_empty(value):
        return False
    value = value.strip().casefold()
    return not any(value == s.casefold() for s in _FALSE_STRINGS)


def value_to_bool(value: Any) -> bool:
    """
    Coerce a primitive value to a boolean.

    - single character: False for "0", separators, whitespace and control chars
    - enum member: False when named None or Undefined, in any case
    - anything else: False when equal to the default value of its type
    """
    if isinstance(value, enum.Enum):
        name = value.name
        return not (name and name.casefold() in _FALSE_ENUM_NAMES)
    elif isinstance(value, str) and len(value) == 1:
        return not _is_false_char(value)
    try:
        default = type(value)()
    except TypeError:
        return bool(value)
    return value != default


def optional_value_to_bool(value: Any | None) -> bool:
    """Return False for None, otherwise delegate to value_to_bool."""
    return value is not None and value_to_bool(value)


def _is_false_char(ch: str) -> bool:
    category = unicodedata.category(ch)
    return ch == "0" or category.startswith("Z") or ch.isspace() or category == "Cc"
