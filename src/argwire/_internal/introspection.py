from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Callable, Iterable
from typing import Annotated, Any, Literal, TypeVar, Union, get_args, get_origin, get_type_hints

from argwire._internal.type_checks import is_runtime_class
from argwire.descriptors import (
    ANY,
    OBJECT,
    BuiltinConstraint,
    CallableDescriptor,
    ClassConstraint,
    IntersectionConstraint,
    ParameterDescriptor,
    ParameterKind,
    TypeConstraint,
    UnionConstraint,
)
from argwire.exceptions import ArgWireIntrospectionError
from argwire.markers import extract_intersection_marker

_NONE = "None"

_NATIVE_CALLABLE_TYPES: tuple[type, ...] = (
    types.BuiltinFunctionType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.MethodWrapperType,
    types.ClassMethodDescriptorType,
)

_BUILTIN_TYPE_NAMES: dict[Any, str] = {
    bool: "bool",
    int: "int",
    float: "float",
    complex: "complex",
    str: "str",
    bytes: "bytes",
    bytearray: "bytearray",
    list: "list",
    tuple: "tuple",
    dict: "dict",
    set: "set",
    frozenset: "frozenset",
    type: "type",
    Callable: "callable",
    Iterable: "iterable",
}

_UNION_ORIGINS: tuple[Any, ...] = (Union, types.UnionType)


class CallableInspector:
    """Build ``CallableDescriptor`` objects from Python callables and classes."""

    def inspect_callable(self, target: Any) -> CallableDescriptor:
        """Describe the parameters of a function, method, lambda or callable instance.

        Args:
            target: Callable to describe. Classes are delegated to ``inspect_class``.

        Raises:
            ArgWireIntrospectionError: The signature or annotations of a
                user-defined callable cannot be inspected.

        """
        if inspect.isclass(target):
            return self.inspect_class(target)

        is_native = isinstance(target, _NATIVE_CALLABLE_TYPES)
        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError) as error:
            if is_native:
                return self._opaque_native_descriptor(target)
            raise ArgWireIntrospectionError(target, error) from error

        source = _annotation_source(target)
        return self._build_descriptor(
            target,
            signature,
            self._resolved_annotations(source),
            is_native=is_native,
            code_owner=source,
        )

    def inspect_class(self, cls: type) -> CallableDescriptor:
        """Describe the constructor parameters of ``cls``.

        Parameters are read from the Python ``__init__`` when the class has
        one, otherwise from a Python ``__new__``, without the leading
        ``self``/``cls``. Classes whose construction is implemented natively
        (builtins and their subclasses without a Python ``__init__``/``__new__``)
        are flagged native.

        Args:
            cls: Class to describe.

        """
        constructor = _python_constructor(cls)
        is_native = constructor is None and not is_plain_class(cls)
        try:
            signature = _constructor_signature(cls, constructor)
        except (TypeError, ValueError) as error:
            if is_native:
                return self._opaque_native_descriptor(cls)
            raise ArgWireIntrospectionError(cls, error) from error

        hints = self._resolved_annotations(constructor) if constructor is not None else {}
        return self._build_descriptor(
            cls,
            signature,
            hints,
            is_native=is_native,
            code_owner=constructor,
        )

    def constraint_from_annotation(self, annotation: Any) -> tuple[TypeConstraint, bool]:
        """Convert a resolved annotation to a type constraint and its nullability.

        Args:
            annotation: Annotation value as returned by ``typing.get_type_hints``.

        """
        marker = extract_intersection_marker(annotation)
        if marker is not None:
            return IntersectionConstraint(classes=marker.classes), False

        origin = get_origin(annotation)
        if origin is Annotated:
            return self.constraint_from_annotation(get_args(annotation)[0])
        if origin in _UNION_ORIGINS:
            return self._union_constraint(get_args(annotation))
        if annotation is Any or isinstance(annotation, TypeVar):
            return BuiltinConstraint(name=ANY), True
        if annotation is None or annotation is type(None):
            return BuiltinConstraint(name=_NONE), True
        if annotation is object:
            return BuiltinConstraint(name=OBJECT), False
        if origin is Literal:
            return BuiltinConstraint(name="literal"), None in get_args(annotation)

        candidate = origin if origin is not None else annotation
        builtin_name = _builtin_name(candidate)
        if builtin_name is not None:
            return BuiltinConstraint(name=builtin_name), False
        if is_runtime_class(candidate):
            return ClassConstraint(cls=candidate), False
        return BuiltinConstraint(name=repr(annotation)), False

    def _union_constraint(self, arguments: tuple[Any, ...]) -> tuple[TypeConstraint, bool]:
        members: list[TypeConstraint] = []
        is_nullable = False
        for argument in arguments:
            if argument is type(None):
                is_nullable = True
                continue
            member, member_nullable = self.constraint_from_annotation(argument)
            is_nullable = is_nullable or member_nullable
            if isinstance(member, UnionConstraint):
                members.extend(member.members)
            else:
                members.append(member)
        if not members:
            return BuiltinConstraint(name=_NONE), True
        if len(members) == 1:
            return members[0], is_nullable
        return UnionConstraint(members=tuple(members)), is_nullable

    def _build_descriptor(
        self,
        target: Any,
        signature: inspect.Signature,
        hints: dict[str, Any],
        *,
        is_native: bool,
        code_owner: Any,
    ) -> CallableDescriptor:
        parameters = tuple(
            self._describe_parameter(parameter, hints) for parameter in signature.parameters.values()
        )
        source_file, source_line = _source_location(code_owner)
        return CallableDescriptor(
            name=describe_callable(target),
            parameters=parameters,
            is_native=is_native,
            accepts_trailing=not is_native
            and any(parameter.is_variadic for parameter in parameters),
            source_file=source_file,
            source_line=source_line,
            target=target,
        )

    def _describe_parameter(
        self,
        parameter: inspect.Parameter,
        hints: dict[str, Any],
    ) -> ParameterDescriptor:
        kind = ParameterKind.from_inspect(parameter.kind)
        annotation = hints.get(parameter.name, parameter.annotation)
        constraint: TypeConstraint | None = None
        is_nullable = False
        if annotation is not inspect.Parameter.empty and not isinstance(annotation, str):
            constraint, is_nullable = self.constraint_from_annotation(annotation)

        has_default = parameter.default is not inspect.Parameter.empty
        collects = kind in (ParameterKind.VAR_POSITIONAL, ParameterKind.VAR_KEYWORD)
        return ParameterDescriptor(
            name=parameter.name,
            constraint=constraint,
            kind=kind,
            is_nullable=is_nullable,
            is_optional=has_default or collects,
            has_default=has_default,
            default=parameter.default if has_default else None,
        )

    def _resolved_annotations(self, source: Any) -> dict[str, Any]:
        try:
            return get_type_hints(source, include_extras=True)
        except NameError as error:
            raise ArgWireIntrospectionError(source, error) from error
        except TypeError:
            # Objects without annotations support (for example C-level callables).
            return {}

    def _opaque_native_descriptor(self, target: Any) -> CallableDescriptor:
        return CallableDescriptor(
            name=describe_callable(target),
            parameters=(),
            is_native=True,
            accepts_trailing=False,
            target=target,
        )


def is_plain_class(cls: type) -> bool:
    """Return true when ``cls`` neither defines nor inherits a custom constructor."""
    return getattr(cls, "__init__", None) is object.__init__ and getattr(cls, "__new__", None) is object.__new__


def describe_callable(target: Any) -> str:
    """Render a human-readable identity of a callable for error messages.

    Args:
        target: Function, method, lambda, class, partial or callable instance.

    """
    if inspect.isclass(target):
        return f"{target.__qualname__}.__init__"
    if isinstance(target, functools.partial):
        return describe_callable(target.func)
    qualname = getattr(target, "__qualname__", None)
    if qualname is None:
        return f"{type(target).__qualname__}.__call__"
    if getattr(target, "__name__", None) == "<lambda>":
        try:
            return f"lambda{inspect.signature(target)}"
        except (TypeError, ValueError):
            return qualname
    return qualname


def _annotation_source(target: Any) -> Any:
    if isinstance(target, functools.partial):
        return _annotation_source(target.func)
    if inspect.isroutine(target):
        return target
    call = getattr(type(target), "__call__", None)
    return call if call is not None else target


def _python_constructor(cls: type) -> Any:
    for name in ("__init__", "__new__"):
        member = inspect.getattr_static(cls, name, None)
        if isinstance(member, staticmethod):
            member = member.__func__
        if inspect.isfunction(member):
            return member
    return None


def _constructor_signature(cls: type, constructor: Any) -> inspect.Signature:
    if constructor is None:
        return inspect.signature(cls)
    signature = inspect.signature(constructor)
    # Drop the bound instance or class.
    return signature.replace(parameters=tuple(signature.parameters.values())[1:])


def _builtin_name(candidate: Any) -> str | None:
    try:
        return _BUILTIN_TYPE_NAMES.get(candidate)
    except TypeError:
        # Unhashable annotation objects are never builtins.
        return None


def _source_location(code_owner: Any) -> tuple[str | None, int | None]:
    code = getattr(code_owner, "__code__", None)
    if code is None:
        return None, None
    return code.co_filename, code.co_firstlineno


__all__ = ["CallableInspector", "describe_callable", "is_plain_class"]
