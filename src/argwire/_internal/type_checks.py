from __future__ import annotations

import types
from typing import Any, TypeGuard

# Exact types treated as plain values rather than objects. Subclasses such as
# enums or named tuples count as objects.
_PLAIN_VALUE_TYPES: frozenset[type] = frozenset(
    {
        type(None),
        bool,
        int,
        float,
        complex,
        str,
        bytes,
        bytearray,
        list,
        tuple,
        dict,
        set,
        frozenset,
    },
)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_object_value(value: object) -> bool:
    """Return true when value may be passed as a positional argument.

    Args:
        value: Caller-supplied argument value.

    """
    return type(value) not in _PLAIN_VALUE_TYPES


def is_instance_of(value: object, cls: type) -> bool:
    """Return true when value is an instance of cls.

    Protocols that are not ``runtime_checkable`` cannot be checked with
    ``isinstance`` and never match.

    Args:
        value: Positional argument being matched.
        cls: Class, ABC or protocol from a parameter annotation.

    """
    if getattr(cls, "_is_protocol", False) and not getattr(cls, "_is_runtime_protocol", False):
        return False
    return isinstance(value, cls)


def is_instance_of_all(value: object, classes: tuple[type, ...]) -> bool:
    return all(is_instance_of(value, cls) for cls in classes)


__all__ = ["is_instance_of", "is_instance_of_all", "is_object_value", "is_runtime_class"]
