from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from argwire._internal.resolving_state import MISSING, ResolvingState, is_missing
from argwire.container_interface import ContainerProtocol
from argwire.descriptors import (
    BuiltinConstraint,
    CallableDescriptor,
    ClassConstraint,
    IntersectionConstraint,
    ParameterDescriptor,
    ResolvedArguments,
    TypeConstraint,
    UnionConstraint,
)
from argwire.exceptions import (
    ArgWireDependencyNotFoundError,
    ArgWireInvalidArgumentError,
    ArgWireMissingInternalArgumentError,
    ArgWireMissingRequiredArgumentError,
)

TEMPLATE_CLASS = "{class}"
TEMPLATE_NAME = "{name}"

logger = logging.getLogger(__name__)


class _Outcome(Enum):
    RESOLVED = "resolved"
    MISSING = "missing"
    # Optional native parameter without an introspectable default.
    SKIPPED = "skipped"


@dataclass(slots=True)
class _Attempt:
    """Per-parameter bookkeeping: the last container not-found error seen."""

    error: BaseException | None = None


class ParameterResolver:
    """Bind a value to every declared parameter of a callable.

    Each parameter is resolved in declaration order with a fixed priority:
    named argument, positional object matching the declared type, container
    lookup, declared default, ``None`` for nullable required parameters, empty
    variadic. Anything else is a missing required argument.
    """

    def __init__(
        self,
        container: ContainerProtocol | None = None,
        *,
        id_templates: tuple[str, ...] = (TEMPLATE_CLASS,),
        not_found_errors: tuple[type[BaseException], ...] = (ArgWireDependencyNotFoundError,),
    ) -> None:
        self._container = container
        self._id_templates = id_templates
        self._not_found_errors = not_found_errors

    def resolve(self, descriptor: CallableDescriptor, state: ResolvingState) -> ResolvedArguments:
        """Resolve all parameters of ``descriptor`` against ``state``.

        Args:
            descriptor: Introspected callable whose parameters are bound.
            state: Fresh per-call state holding the caller arguments.

        Raises:
            ArgWireMissingRequiredArgumentError: A required parameter cannot be satisfied.
            ArgWireMissingInternalArgumentError: A named argument follows a skipped
                native optional parameter.
            ArgWireInvalidArgumentError: A ``**kwargs`` collector is named with a
                non-mapping value.

        """
        push_trailing = descriptor.accepts_trailing and not descriptor.is_native
        internal_parameter: str | None = None
        for parameter in descriptor.parameters:
            if internal_parameter is not None:
                if state.has_named(parameter.name):
                    raise ArgWireMissingInternalArgumentError(
                        internal_parameter,
                        descriptor.name,
                        source_file=descriptor.source_file,
                        source_line=descriptor.source_line,
                    )
                continue

            if parameter.is_variadic and parameter.has_type:
                push_trailing = False

            outcome = self._resolve_parameter(descriptor, parameter, state)
            if outcome is _Outcome.RESOLVED:
                continue
            if outcome is _Outcome.MISSING:
                raise ArgWireMissingRequiredArgumentError(parameter.name, descriptor.name)
            internal_parameter = parameter.name
            push_trailing = False

        if push_trailing and state.positional:
            logger.debug(
                "Appending %d unused positional argument(s) when calling %s",
                len(state.positional),
                descriptor.name,
            )
        return state.finalize(push_trailing=push_trailing)

    def _resolve_parameter(
        self,
        descriptor: CallableDescriptor,
        parameter: ParameterDescriptor,
        state: ResolvingState,
    ) -> _Outcome:
        value = state.consume_named(parameter.name)
        if not is_missing(value):
            self._bind_named(descriptor, parameter, state, value)
            return _Outcome.RESOLVED
        if parameter.collects_keywords:
            return _Outcome.RESOLVED

        attempt = _Attempt()
        if parameter.constraint is not None and self._resolve_constraint(
            parameter,
            parameter.constraint,
            state,
            attempt,
        ):
            return _Outcome.RESOLVED

        if parameter.has_default:
            state.append_resolved(parameter, parameter.default)
            return _Outcome.RESOLVED

        if not parameter.is_optional:
            if parameter.has_type and parameter.is_nullable:
                state.append_resolved(parameter, None)
                return _Outcome.RESOLVED
            if attempt.error is not None:
                raise attempt.error
            return _Outcome.MISSING

        if parameter.is_variadic:
            return _Outcome.RESOLVED
        return _Outcome.SKIPPED

    def _bind_named(
        self,
        descriptor: CallableDescriptor,
        parameter: ParameterDescriptor,
        state: ResolvingState,
        value: Any,
    ) -> None:
        """Bind a named argument to its parameter.

        A ``**kwargs`` collector only accepts a mapping under its own name,
        which is expanded into keyword arguments. A ``*args`` parameter expands
        a list, tuple or mapping (its values) and takes any other value as a
        single item.

        Raises:
            ArgWireInvalidArgumentError: A non-mapping value is named after a
                ``**kwargs`` collector.

        """
        if parameter.collects_keywords:
            if not isinstance(value, Mapping):
                raise ArgWireInvalidArgumentError(
                    parameter.name,
                    descriptor.name,
                    source_file=descriptor.source_file,
                    source_line=descriptor.source_line,
                )
            state.append_resolved(parameter, value)
            return
        if parameter.is_variadic and _is_collection(value):
            items = value.values() if isinstance(value, Mapping) else value
            for item in items:
                state.append_resolved(parameter, item)
            return
        state.append_resolved(parameter, value)

    def _resolve_constraint(
        self,
        parameter: ParameterDescriptor,
        constraint: TypeConstraint,
        state: ResolvingState,
        attempt: _Attempt,
    ) -> bool:
        if isinstance(constraint, UnionConstraint):
            return any(
                self._resolve_constraint(parameter, member, state, attempt)
                for member in constraint.members
            )
        if isinstance(constraint, IntersectionConstraint):
            return self._resolve_intersection(parameter, constraint.classes, state)
        if isinstance(constraint, ClassConstraint):
            return self._resolve_object(parameter, constraint.cls, state, attempt)
        if isinstance(constraint, BuiltinConstraint) and constraint.is_object:
            return self._resolve_object(parameter, None, state, attempt)
        return False

    def _resolve_intersection(
        self,
        parameter: ParameterDescriptor,
        classes: tuple[type, ...],
        state: ResolvingState,
    ) -> bool:
        if parameter.is_variadic:
            values = state.consume_all_by_type(classes)
            for value in values:
                state.append_resolved(parameter, value)
            return bool(values)
        value = state.consume_one_by_type(classes)
        if is_missing(value):
            return False
        state.append_resolved(parameter, value)
        return True

    def _resolve_object(
        self,
        parameter: ParameterDescriptor,
        cls: type | None,
        state: ResolvingState,
        attempt: _Attempt,
    ) -> bool:
        classes = () if cls is None else (cls,)
        if parameter.is_variadic:
            for value in state.consume_all_by_type(classes):
                state.append_resolved(parameter, value)
            return True

        value = state.consume_one_by_type(classes)
        if not is_missing(value):
            state.append_resolved(parameter, value)
            return True

        container = self._container
        if cls is None or container is None:
            return False
        value = self._lookup(container, parameter, cls, attempt)
        if is_missing(value):
            return False
        state.append_resolved(parameter, value)
        return True

    def _lookup(
        self,
        container: ContainerProtocol,
        parameter: ParameterDescriptor,
        cls: type,
        attempt: _Attempt,
    ) -> Any:
        for key in self._container_keys(parameter, cls):
            try:
                value = container.get(key)
            except self._not_found_errors as error:
                logger.debug("Container has no entry for %r (parameter %r)", key, parameter.name)
                attempt.error = error
                continue
            logger.debug("Resolved parameter %r from container key %r", parameter.name, key)
            return value
        return MISSING

    def _container_keys(self, parameter: ParameterDescriptor, cls: type) -> Iterator[Any]:
        for template in self._id_templates:
            if template == TEMPLATE_CLASS:
                yield cls
                continue
            yield template.replace(TEMPLATE_CLASS, f"{cls.__module__}.{cls.__qualname__}").replace(
                TEMPLATE_NAME,
                parameter.name,
            )


def _is_collection(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


__all__ = ["TEMPLATE_CLASS", "TEMPLATE_NAME", "ParameterResolver"]
