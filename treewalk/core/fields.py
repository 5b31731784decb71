"""Field selectors for reading node attributes.

Nodes are duck-typed: mappings expose their fields by key, every other
object exposes them by attribute. A selector is either a field name or a
callable taking the node, so callers can pass ``"children"``,
``operator.attrgetter("kids")`` or a lambda interchangeably.
"""

import numbers
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Union

from ..errors import InvalidSelectorError


class _Missing:
    """Sentinel type for a field that a node does not carry."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

FieldSelector = Union[str, Callable[[Any], Any]]


def resolve_field(selector: FieldSelector) -> Callable[[Any], Any]:
    """Build an accessor function for a field selector.

    Args:
        selector: Field name or callable ``node -> value``

    Returns:
        Callable that reads the field from a node, returning ``MISSING``
        when a named field is absent

    Raises:
        InvalidSelectorError: If selector is neither a str nor callable
    """
    if isinstance(selector, str):
        return lambda node: get_field(node, selector)
    if callable(selector):
        return selector
    raise InvalidSelectorError(
        f"Field selector must be a field name or a callable, "
        f"got {type(selector).__name__}"
    )


def get_field(node: Any, name: str) -> Any:
    """Read a named field from a node.

    Mappings are read by key, everything else by attribute.
    """
    if node is None:
        return MISSING
    if isinstance(node, Mapping):
        return node.get(name, MISSING)
    return getattr(node, name, MISSING)


# Values of these types compare by value; everything else by identity
_VALUE_TYPES = (str, bytes, numbers.Number, Enum)


def _compares_by_value(value: Any) -> bool:
    return value is None or isinstance(value, _VALUE_TYPES)


def strict_equals(left: Any, right: Any) -> bool:
    """Compare two field values without structural equality.

    Strings, bytes, numbers, enum members and None compare by value.
    Every other object compares by identity only, even when it defines
    ``__eq__``. A bool is never equal to a non-bool number. ``MISSING``
    never equals anything.
    """
    if left is MISSING or right is MISSING:
        return False
    if left is right:
        return True
    if not (_compares_by_value(left) and _compares_by_value(right)):
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return False
    return left == right
