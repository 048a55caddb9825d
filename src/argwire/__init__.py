from argwire.container_interface import ContainerProtocol
from argwire.descriptors import (
    BuiltinConstraint,
    CallableDescriptor,
    ClassConstraint,
    IntersectionConstraint,
    ParameterDescriptor,
    ParameterKind,
    ResolvedArguments,
    UnionConstraint,
)
from argwire.exceptions import (
    ArgWireArgumentError,
    ArgWireContainerError,
    ArgWireDependencyNotFoundError,
    ArgWireError,
    ArgWireIntrospectionError,
    ArgWireInvalidArgumentError,
    ArgWireMissingInternalArgumentError,
    ArgWireMissingRequiredArgumentError,
    ArgWireNotInstantiableError,
    ArgWireParameterNotResolvedError,
)
from argwire.injector import Injector
from argwire.markers import Intersection, Ref
from argwire.parameter_resolvers import (
    CompositeParameterResolver,
    ContainerParameterResolver,
    ParameterResolverProtocol,
)

__all__ = [
    "ArgWireArgumentError",
    "ArgWireContainerError",
    "ArgWireDependencyNotFoundError",
    "ArgWireError",
    "ArgWireIntrospectionError",
    "ArgWireInvalidArgumentError",
    "ArgWireMissingInternalArgumentError",
    "ArgWireMissingRequiredArgumentError",
    "ArgWireNotInstantiableError",
    "ArgWireParameterNotResolvedError",
    "BuiltinConstraint",
    "CallableDescriptor",
    "ClassConstraint",
    "CompositeParameterResolver",
    "ContainerParameterResolver",
    "ContainerProtocol",
    "Injector",
    "Intersection",
    "IntersectionConstraint",
    "ParameterDescriptor",
    "ParameterKind",
    "ParameterResolverProtocol",
    "Ref",
    "ResolvedArguments",
    "UnionConstraint",
]
