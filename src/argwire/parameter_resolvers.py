from __future__ import annotations

from typing import Any, Protocol

from argwire.container_interface import ContainerProtocol
from argwire.descriptors import ClassConstraint, ParameterDescriptor, TypeConstraint, UnionConstraint
from argwire.exceptions import ArgWireDependencyNotFoundError, ArgWireParameterNotResolvedError


class ParameterResolverProtocol(Protocol):
    """Protocol for pluggable single-parameter resolvers."""

    def resolve(self, parameter: ParameterDescriptor) -> Any:
        """Return a value for ``parameter``.

        Args:
            parameter: Parameter to supply a value for.

        Raises:
            ArgWireParameterNotResolvedError: The resolver cannot supply a value.

        """


class CompositeParameterResolver:
    """Ask resolvers in order and return the first value supplied."""

    def __init__(self, *resolvers: ParameterResolverProtocol) -> None:
        self._resolvers = resolvers

    def resolve(self, parameter: ParameterDescriptor) -> Any:
        for resolver in self._resolvers:
            try:
                return resolver.resolve(parameter)
            except ArgWireParameterNotResolvedError:
                continue
        raise ArgWireParameterNotResolvedError(parameter.name)


class ContainerParameterResolver:
    """Resolve class-typed parameters from a container.

    Variadic and untyped parameters are never resolved. For unions, class
    members are tried in declaration order. A container "not found" becomes
    ``ArgWireParameterNotResolvedError``; other container errors propagate.
    """

    def __init__(
        self,
        container: ContainerProtocol,
        *,
        not_found_errors: tuple[type[BaseException], ...] = (ArgWireDependencyNotFoundError,),
    ) -> None:
        self._container = container
        self._not_found_errors = not_found_errors

    def resolve(self, parameter: ParameterDescriptor) -> Any:
        if parameter.is_variadic or parameter.constraint is None:
            raise ArgWireParameterNotResolvedError(parameter.name)
        return self._resolve_constraint(parameter, parameter.constraint)

    def _resolve_constraint(self, parameter: ParameterDescriptor, constraint: TypeConstraint) -> Any:
        if isinstance(constraint, UnionConstraint):
            for member in constraint.members:
                try:
                    return self._resolve_constraint(parameter, member)
                except ArgWireParameterNotResolvedError:
                    continue
            raise ArgWireParameterNotResolvedError(parameter.name)
        if not isinstance(constraint, ClassConstraint):
            raise ArgWireParameterNotResolvedError(parameter.name)
        try:
            return self._container.get(constraint.cls)
        except self._not_found_errors as error:
            raise ArgWireParameterNotResolvedError(parameter.name) from error
