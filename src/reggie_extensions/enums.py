"""Enum helpers for membership checks, parsing, flag decomposition and member metadata.

Python enums have no attribute syntax for members, so metadata is attached
with the attributes() class decorator and read back with get_attribute():

    @enums.attributes(RED=enums.Display("Red", description="Warm"), GREEN="Green")
    class Color(enum.Enum):
        RED = 1
        GREEN = 2

    enums.get_display_name(Color.GREEN)  # "Green"
"""

import enum
import functools
import operator
import re
import weakref
from dataclasses import dataclass
from typing import Any, Iterable, TypeVar

from reggie_extensions import logs

LOG = logs.logger(__name__)

E = TypeVar("E", bound=enum.Enum)
A = TypeVar("A")

_NONE_NAMES = ("none", "undefined")
_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLAG_SEPARATOR_PATTERN = re.compile(r"[,|]")
_ATTRIBUTES: "weakref.WeakKeyDictionary[type, dict[str, tuple[Any, ...]]]" = (
    weakref.WeakKeyDictionary()
)


@dataclass(frozen=True)
class Display:
    """Display metadata for an enum member."""

    name: str | None = None
    short_name: str | None = None
    description: str | None = None
    group_name: str | None = None
    order: int | None = None


def is_default(value: enum.Enum | None) -> bool:
    """Return True if value is the zero member of its enum."""
    return value is not None and value.value == 0


def has_enum_value(value: Any, enum_type: type[E], ignore_case: bool = False) -> bool:
    """
    Return True if value identifies a declared member of enum_type.

    With ignore_case, strings are stripped and compared case insensitively to
    the member names. Otherwise value must be a declared member, an exact
    member name or the value of a declared member.
    """
    if value is None:
        return False
    if ignore_case and isinstance(value, str):
        value = value.strip().casefold()
        return any(name.casefold() == value for name in enum_type.__members__)
    if isinstance(value, enum.Enum):
        return _is_declared(value, enum_type)
    if isinstance(value, str) and value in enum_type.__members__:
        return True
    return any(_value_equals(member, value) for member in values(enum_type))


def to_enum(
    value: Any,
    enum_type: type[E],
    default: E | None = None,
    ignore_case: bool = False,
) -> E:
    """
    Convert value to a declared member of enum_type.

    Member names (respecting ignore_case), integer literals, member values and,
    for flag enums, names separated by "," or "|" are accepted. The parsed
    result must be a declared member; otherwise default is returned when given.

    Raises:
        ValueError: If value cannot be converted and no default is given.
    """
    member = _parse(value, enum_type, ignore_case)
    if member is not None and _is_declared(member, enum_type):
        return member
    if default is not None:
        LOG.debug(
            f"Enum conversion defaulted - enum:{enum_type.__name__} value:{value!r} default:{default}"
        )
        return default
    raise ValueError(
        f"Can't convert value to Enum {enum_type.__name__} - value:{value!r}"
    )


def values(enum_type: type[E]) -> tuple[E, ...]:
    """
    Return every declared member of enum_type in declaration order.

    Unlike iterating a Flag class, zero and multi-bit members are included.
    Aliases are not.
    """
    return tuple(
        member
        for name, member in enum_type.__members__.items()
        if member.name == name
    )


def to_flag_list(value: E | None) -> list[E]:
    """
    Decompose a flag value into the declared members it contains.

    Members are returned in declaration order. When more than one member
    matches, members named None or Undefined are dropped.

    Examples:
        >>> to_flag_list(Perm.READ | Perm.WRITE)
        [<Perm.READ: 1>, <Perm.WRITE: 2>]
    """
    if value is None:
        return []
    bits = _bits(value)
    if bits is None:
        return []
    flags = [
        member
        for member in values(type(value))
        if (member_bits := _bits(member)) is not None
        and bits & member_bits == member_bits
    ]
    if len(flags) > 1:
        flags = [m for m in flags if m.name.casefold() not in _NONE_NAMES]
    return flags


def to_flag_name_list(value: E | None) -> list[str]:
    """Return the names of to_flag_list(value)."""
    return [member.name for member in to_flag_list(value)]


def attributes(**members: Any):
    """
    Class decorator attaching metadata objects to enum members by name.

    Each keyword names a member and maps to one attribute object or a
    list/tuple of them. A plain string is shorthand for Display(name=...).
    Decorators may be stacked; attributes accumulate per member.

    Raises:
        TypeError: If the decorated class is not an Enum.
        ValueError: If a keyword does not name a member.
    """

    def decorator(enum_type):
        if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
            raise TypeError(f"Enum class required - type:{enum_type!r}")
        registry = {k: list(v) for k, v in _ATTRIBUTES.get(enum_type, {}).items()}
        for name, attrs in members.items():
            member = enum_type.__members__.get(name)
            if member is None:
                raise ValueError(f"Unknown member:{name} - enum:{enum_type.__name__}")
            registry.setdefault(member.name, []).extend(_attribute_list(attrs))
        _ATTRIBUTES[enum_type] = {k: tuple(v) for k, v in registry.items()}
        LOG.debug(
            f"Enum attributes registered - enum:{enum_type.__name__} members:{list(members)}"
        )
        return enum_type

    return decorator


def get_attribute(value: enum.Enum | None, attribute_type: type[A]) -> A | None:
    """Return the first attribute of attribute_type attached to value's member."""
    if value is None or not value.name:
        return None
    for attr in _ATTRIBUTES.get(type(value), {}).get(value.name, ()):
        if isinstance(attr, attribute_type):
            return attr
    return None


def get_display_name(value: enum.Enum | None) -> str:
    """Return the Display name attached to value's member, or an empty string."""
    display = get_attribute(value, Display)
    return (display.name or "") if display else ""


def _attribute_list(attrs: Any) -> Iterable[Any]:
    if isinstance(attrs, str):
        return [Display(name=attrs)]
    elif isinstance(attrs, (list, tuple)):
        return [Display(name=a) if isinstance(a, str) else a for a in attrs]
    return [attrs]


def _is_declared(value: enum.Enum, enum_type: type[enum.Enum]) -> bool:
    return type(value) is enum_type and any(value is m for m in values(enum_type))


def _value_equals(member: enum.Enum, value: Any) -> bool:
    return not isinstance(value, bool) and member.value == value


def _bits(value: enum.Enum) -> int | None:
    bits = value.value
    return bits if isinstance(bits, int) and not isinstance(bits, bool) else None


def _parse(value: Any, enum_type: type[E], ignore_case: bool) -> E | None:
    """Best effort conversion of value to an enum_type instance, declared or not."""
    if value is None:
        return None
    if isinstance(value, enum_type):
        return value
    text = value.name if isinstance(value, enum.Enum) else str(value)
    text = (text or "").strip()
    if not text:
        return None
    if (member := _member_by_name(text, enum_type, ignore_case)) is not None:
        return member
    for candidate in (_int(text), value):
        if candidate is None or isinstance(candidate, (bool, enum.Enum)):
            continue
        try:
            return enum_type(candidate)
        except (ValueError, TypeError):
            pass
    if issubclass(enum_type, enum.Flag):
        names = [n.strip() for n in _FLAG_SEPARATOR_PATTERN.split(text)]
        if len(names) > 1:
            flags = [_member_by_name(n, enum_type, ignore_case) for n in names]
            if all(flag is not None for flag in flags):
                return functools.reduce(operator.or_, flags)
    return None


def _int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:
        # digit count above sys.get_int_max_str_digits()
        return None


def _member_by_name(name: str, enum_type: type[E], ignore_case: bool) -> E | None:
    if (member := enum_type.__members__.get(name)) is not None:
        return member
    if ignore_case:
        name = name.casefold()
        for member_name, member in enum_type.__members__.items():
            if member_name.casefold() == name:
                return member
    return None
