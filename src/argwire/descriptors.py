from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

ANY = "any"
OBJECT = "object"


@dataclass(frozen=True, slots=True)
class BuiltinConstraint:
    """Builtin type such as ``int``, ``list``, ``callable``, ``any`` or ``object``.

    Builtins never match positional arguments, except ``object`` which matches
    any positional object. Builtins are never looked up in the container.
    """

    name: str

    @property
    def is_object(self) -> bool:
        return self.name == OBJECT


@dataclass(frozen=True, slots=True)
class ClassConstraint:
    """User class, ABC or protocol. Matched with ``isinstance`` and used as a container key."""

    cls: type


@dataclass(frozen=True, slots=True)
class UnionConstraint:
    """Alternatives tried in declaration order."""

    members: tuple[TypeConstraint, ...]


@dataclass(frozen=True, slots=True)
class IntersectionConstraint:
    """Classes a value must be an instance of simultaneously."""

    classes: tuple[type, ...]


TypeConstraint = Union[BuiltinConstraint, ClassConstraint, UnionConstraint, IntersectionConstraint]


class ParameterKind(Enum):
    """Binding kind of a declared parameter, mirroring ``inspect.Parameter.kind``."""

    POSITIONAL_ONLY = "positional_only"
    POSITIONAL_OR_KEYWORD = "positional_or_keyword"
    VAR_POSITIONAL = "var_positional"
    KEYWORD_ONLY = "keyword_only"
    VAR_KEYWORD = "var_keyword"

    @classmethod
    def from_inspect(cls, kind: Any) -> ParameterKind:
        return _INSPECT_KINDS[kind]


_INSPECT_KINDS = {
    inspect.Parameter.POSITIONAL_ONLY: ParameterKind.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD: ParameterKind.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL: ParameterKind.VAR_POSITIONAL,
    inspect.Parameter.KEYWORD_ONLY: ParameterKind.KEYWORD_ONLY,
    inspect.Parameter.VAR_KEYWORD: ParameterKind.VAR_KEYWORD,
}


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """Read-only description of one declared parameter.

    ``constraint`` is ``None`` for untyped parameters. ``is_optional`` is true
    for parameters with a default and for variadic parameters. Native callables
    may declare optional parameters with ``has_default=False``; the resolver
    treats those as implicitly supplied by the native implementation.
    """

    name: str
    constraint: TypeConstraint | None = None
    kind: ParameterKind = ParameterKind.POSITIONAL_OR_KEYWORD
    is_nullable: bool = False
    is_optional: bool = False
    has_default: bool = False
    default: Any = None

    @property
    def is_variadic(self) -> bool:
        return self.kind is ParameterKind.VAR_POSITIONAL

    @property
    def collects_keywords(self) -> bool:
        return self.kind is ParameterKind.VAR_KEYWORD

    @property
    def is_keyword_only(self) -> bool:
        return self.kind is ParameterKind.KEYWORD_ONLY

    @property
    def has_type(self) -> bool:
        return self.constraint is not None


@dataclass(frozen=True, slots=True)
class CallableDescriptor:
    """Introspected callable: its rendered identity and declared parameters.

    ``accepts_trailing`` controls whether unconsumed positional arguments are
    appended after all declared parameters. Native callables never accept
    them.
    """

    name: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    is_native: bool = False
    accepts_trailing: bool = False
    source_file: str | None = None
    source_line: int | None = None
    target: Any = field(default=None, compare=False, repr=False)

    @property
    def collects_keywords(self) -> bool:
        return any(parameter.collects_keywords for parameter in self.parameters)


@dataclass(slots=True)
class ResolvedArguments:
    """Arguments ready to call the resolved callable with ``target(*args, **kwargs)``."""

    args: list[Any] = field(default_factory=list)
    kwargs: dict[str, Any] = field(default_factory=dict)

    def call(self, target: Any) -> Any:
        return target(*self.args, **self.kwargs)
