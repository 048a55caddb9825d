from __future__ import annotations

from typing import Any


class ArgWireError(Exception):
    """Represent a base class for all ArgWire-specific failures.

    Catch this type when you want to handle any ArgWire error path without
    matching each concrete exception class individually.
    """


class ArgWireArgumentError(ArgWireError):
    """Signal a problem with a single argument of a resolved callable.

    Subclasses render a message that names the offending argument and the
    callable being resolved, including its source location when known.
    """

    message_template = 'Something is wrong with argument "{parameter}" when calling "{callable_name}"{where}.'

    def __init__(
        self,
        parameter: str,
        callable_name: str,
        *,
        source_file: str | None = None,
        source_line: int | None = None,
    ) -> None:
        self.parameter = parameter
        self.callable_name = callable_name
        self.source_file = source_file
        self.source_line = source_line
        where = ""
        if source_file and source_line:
            where = f' in "{source_file}" at line "{source_line}"'
        super().__init__(
            self.message_template.format(
                parameter=parameter,
                callable_name=callable_name,
                where=where,
            ),
        )


class ArgWireInvalidArgumentError(ArgWireArgumentError):
    """Signal a positional argument that is not an object.

    Raised while classifying caller arguments when a value supplied under an
    integer key is a plain value (``None``, numbers, strings, bytes, or builtin
    collections), or when a key is neither ``int`` nor ``str``.

    Typical fix is passing such values by parameter name instead of by
    position.
    """

    message_template = (
        'Invalid argument "{parameter}" when calling "{callable_name}"{where}. '
        "Non-object argument should be named explicitly when passed."
    )


class ArgWireMissingInternalArgumentError(ArgWireArgumentError):
    """Signal a named argument that follows an undeterminable native default.

    Native callables may declare optional parameters whose defaults cannot be
    introspected. Once such a parameter is skipped, later parameters cannot be
    passed positionally, so an explicit named value for them is rejected.

    Typical fix is passing the skipped optional parameter explicitly by name.
    """

    message_template = (
        'Can not determine default value of parameter "{parameter}" when calling '
        '"{callable_name}"{where} because it is native. Please specify argument explicitly.'
    )


class ArgWireMissingRequiredArgumentError(ArgWireError):
    """Signal a required parameter that nothing could satisfy.

    Raised when a required parameter has no named argument, no matching
    positional object, no container entry, no default, and does not accept
    ``None``.

    Typical fixes include passing the argument by name, registering its type
    in the container, or giving the parameter a default.
    """

    def __init__(self, parameter: str, callable_name: str) -> None:
        self.parameter = parameter
        self.callable_name = callable_name
        super().__init__(f'Missing required argument "{parameter}" when calling "{callable_name}".')


class ArgWireNotInstantiableError(ArgWireError):
    """Signal ``Injector.make`` on a target that cannot be instantiated.

    Abstract classes, protocols and non-class values are rejected before any
    argument is resolved.
    """

    def __init__(self, target: Any) -> None:
        self.target = target
        name = getattr(target, "__qualname__", repr(target))
        super().__init__(f"Class {name} is not instantiable.")


class ArgWireIntrospectionError(ArgWireError):
    """Signal that a callable signature or its annotations cannot be inspected.

    Common triggers are forward references that do not resolve in the
    callable's module and user-defined callables without a signature.
    """

    def __init__(self, target: Any, error: BaseException) -> None:
        self.target = target
        self.error = error
        super().__init__(f"Failed to inspect {target!r}: {error}")


class ArgWireParameterNotResolvedError(ArgWireError):
    """Signal that a pluggable parameter resolver cannot supply a value.

    Raised by ``ParameterResolverProtocol`` implementations and consumed by
    ``CompositeParameterResolver`` to move on to the next resolver.
    """


class ArgWireContainerError(ArgWireError):
    """Represent a base class for container lookup failures.

    Containers used with ArgWire may raise this type (or any other exception)
    for failures other than a missing key. Such errors always abort resolution.
    """


class ArgWireDependencyNotFoundError(ArgWireContainerError, LookupError):
    """Signal that a container has no entry for a requested key.

    The injector treats this error as "try the next option": another union
    member, another id template, a default value, or ``None`` for nullable
    parameters. It is re-raised only when no alternative exists.
    """

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"Dependency {key!r} is not registered in the container.")
