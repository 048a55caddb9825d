from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from argwire._internal.type_checks import is_instance_of_all, is_object_value
from argwire.descriptors import CallableDescriptor, ParameterDescriptor, ResolvedArguments
from argwire.exceptions import ArgWireInvalidArgumentError

MISSING = object()


class ResolvingState:
    """Hold caller arguments and resolved values for a single resolution call.

    Caller arguments are split into named arguments (``str`` keys) and
    positional objects (``int`` keys, kept in source order). Each entry is
    consumed at most once. Resolved values are accumulated in declaration
    order and forwarded as-is, so the callable receives the very objects the
    caller supplied.
    """

    def __init__(
        self,
        descriptor: CallableDescriptor,
        arguments: Mapping[Any, Any] | Iterable[Any] | None = None,
    ) -> None:
        self._descriptor = descriptor
        self._named: dict[str, Any] = {}
        self._positional: list[Any] = []
        self._args: list[Any] = []
        self._kwargs: dict[str, Any] = {}
        self._classify(arguments)

    @property
    def positional(self) -> tuple[Any, ...]:
        return tuple(self._positional)

    def has_named(self, name: str) -> bool:
        return name in self._named

    def consume_named(self, name: str) -> Any:
        """Remove and return the named argument, or ``MISSING`` when absent."""
        return self._named.pop(name, MISSING)

    def consume_one_by_type(self, classes: tuple[type, ...]) -> Any:
        """Remove and return the first positional object matching every class.

        An empty ``classes`` tuple matches any object. Returns ``MISSING`` and
        leaves the pool unchanged when nothing matches.
        """
        for index, value in enumerate(self._positional):
            if is_instance_of_all(value, classes):
                del self._positional[index]
                return value
        return MISSING

    def consume_all_by_type(self, classes: tuple[type, ...]) -> list[Any]:
        """Remove and return every positional object matching every class, in order."""
        matched: list[Any] = []
        remaining: list[Any] = []
        for value in self._positional:
            if is_instance_of_all(value, classes):
                matched.append(value)
            else:
                remaining.append(value)
        self._positional = remaining
        return matched

    def append_resolved(self, parameter: ParameterDescriptor, value: Any) -> None:
        if parameter.is_keyword_only:
            self._kwargs[parameter.name] = value
        elif parameter.collects_keywords:
            self._kwargs.update(value)
        else:
            self._args.append(value)

    def finalize(self, *, push_trailing: bool) -> ResolvedArguments:
        """Return resolved arguments, optionally followed by unconsumed positional objects."""
        args = list(self._args)
        if push_trailing:
            args.extend(self._positional)
        kwargs = dict(self._kwargs)
        if self._descriptor.collects_keywords:
            for name, value in self._named.items():
                kwargs.setdefault(name, value)
        return ResolvedArguments(args=args, kwargs=kwargs)

    def _classify(self, arguments: Mapping[Any, Any] | Iterable[Any] | None) -> None:
        if arguments is None:
            return
        items = arguments.items() if isinstance(arguments, Mapping) else enumerate(arguments)
        for key, value in items:
            if isinstance(key, str):
                self._named[key] = value
                continue
            if isinstance(key, bool) or not isinstance(key, int) or not is_object_value(value):
                raise ArgWireInvalidArgumentError(
                    str(key),
                    self._descriptor.name,
                    source_file=self._descriptor.source_file,
                    source_line=self._descriptor.source_line,
                )
            self._positional.append(value)


def is_missing(value: Any) -> bool:
    return value is MISSING


__all__ = ["MISSING", "ResolvingState", "is_missing"]
