import functools
from collections.abc import Callable, Iterable
from typing import Annotated, Any, Literal, Optional, Union

import pytest

from argwire._internal.introspection import CallableInspector, describe_callable, is_plain_class
from argwire.descriptors import (
    BuiltinConstraint,
    ClassConstraint,
    IntersectionConstraint,
    ParameterKind,
    UnionConstraint,
)
from argwire.exceptions import ArgWireIntrospectionError
from argwire.markers import Intersection
from tests.support import Circle, ColorInterface, EngineInterface, EngineZIL130, Red


def _kinds(a, /, b: int, *rest: Circle, c: str = "x", **options: Any) -> None:  # type: ignore[no-untyped-def]
    pass


def _plain(engine: EngineInterface) -> None:
    pass


def _broken(value: "_Unknown") -> None:  # type: ignore[name-defined]  # noqa: F821
    pass


class _Plain:
    pass


class _Service:
    def __init__(self, engine: EngineInterface, name: str = "svc") -> None:
        self.engine = engine
        self.name = name

    def run(self, engine: EngineInterface) -> None:
        pass


class _CallableService:
    def __call__(self, engine: Optional[EngineInterface]) -> None:
        pass


class _Registry(dict):  # type: ignore[type-arg]
    pass


class _Pooled:
    def __new__(cls, *args: Any, **kwargs: Any) -> "_Pooled":
        return super().__new__(cls)

    def __init__(self, engine: EngineInterface) -> None:
        self.engine = engine


@pytest.fixture()
def inspector() -> CallableInspector:
    return CallableInspector()


@pytest.mark.parametrize(
    ("annotation", "expected", "nullable"),
    [
        pytest.param(int, BuiltinConstraint("int"), False, id="int"),
        pytest.param(int | None, BuiltinConstraint("int"), True, id="optional-int"),
        pytest.param(list[int], BuiltinConstraint("list"), False, id="generic-list"),
        pytest.param(type[EngineInterface], BuiltinConstraint("type"), False, id="type"),
        pytest.param(Callable[[int], str], BuiltinConstraint("callable"), False, id="callable"),
        pytest.param(Iterable[int], BuiltinConstraint("iterable"), False, id="iterable"),
        pytest.param(Any, BuiltinConstraint("any"), True, id="any"),
        pytest.param(object, BuiltinConstraint("object"), False, id="object"),
        pytest.param(None, BuiltinConstraint("None"), True, id="none"),
        pytest.param(Literal["a"], BuiltinConstraint("literal"), False, id="literal"),
        pytest.param(EngineInterface, ClassConstraint(EngineInterface), False, id="abc"),
        pytest.param(ColorInterface, ClassConstraint(ColorInterface), False, id="protocol"),
        pytest.param(Optional[EngineInterface], ClassConstraint(EngineInterface), True, id="optional-class"),
        pytest.param(
            Annotated[EngineInterface, "meta"],
            ClassConstraint(EngineInterface),
            False,
            id="annotated",
        ),
        pytest.param(
            EngineInterface | EngineZIL130,
            UnionConstraint((ClassConstraint(EngineInterface), ClassConstraint(EngineZIL130))),
            False,
            id="union",
        ),
        pytest.param(
            Union[int, EngineInterface, None],
            UnionConstraint((BuiltinConstraint("int"), ClassConstraint(EngineInterface))),
            True,
            id="nullable-union",
        ),
        pytest.param(
            Intersection[Circle, Red],
            IntersectionConstraint((Circle, Red)),
            False,
            id="intersection",
        ),
    ],
)
def test_constraint_from_annotation(
    inspector: CallableInspector,
    annotation: Any,
    expected: Any,
    nullable: bool,
) -> None:
    assert inspector.constraint_from_annotation(annotation) == (expected, nullable)


def test_parameter_kinds_and_defaults(inspector: CallableInspector) -> None:
    descriptor = inspector.inspect_callable(_kinds)

    a, b, rest, c, options = descriptor.parameters
    assert a.kind is ParameterKind.POSITIONAL_ONLY
    assert a.constraint is None
    assert not a.is_optional
    assert b.constraint == BuiltinConstraint("int")
    assert rest.is_variadic
    assert rest.is_optional
    assert not rest.has_default
    assert rest.constraint == ClassConstraint(Circle)
    assert c.is_keyword_only
    assert c.has_default
    assert c.default == "x"
    assert options.collects_keywords
    assert options.is_optional


def test_callable_with_variadic_accepts_trailing(inspector: CallableInspector) -> None:
    assert inspector.inspect_callable(_kinds).accepts_trailing
    assert not inspector.inspect_callable(_plain).accepts_trailing


def test_source_location_is_recorded(inspector: CallableInspector) -> None:
    descriptor = inspector.inspect_callable(_plain)

    assert descriptor.source_file == _plain.__code__.co_filename
    assert descriptor.source_line == _plain.__code__.co_firstlineno


def test_class_descriptor_describes_init(inspector: CallableInspector) -> None:
    descriptor = inspector.inspect_class(_Service)

    assert descriptor.name == "_Service.__init__"
    assert [parameter.name for parameter in descriptor.parameters] == ["engine", "name"]
    assert descriptor.parameters[0].constraint == ClassConstraint(EngineInterface)
    assert descriptor.source_line == _Service.__init__.__code__.co_firstlineno
    assert not descriptor.is_native


def test_callable_instance_uses_call_annotations(inspector: CallableInspector) -> None:
    descriptor = inspector.inspect_callable(_CallableService())

    (engine,) = descriptor.parameters
    assert engine.constraint == ClassConstraint(EngineInterface)
    assert engine.is_nullable


def test_builtin_function_is_native(inspector: CallableInspector) -> None:
    descriptor = inspector.inspect_callable(len)

    assert descriptor.is_native
    assert not descriptor.accepts_trailing


def test_builtin_subclass_is_native(inspector: CallableInspector) -> None:
    assert inspector.inspect_class(_Registry).is_native


def test_plain_class_is_not_native(inspector: CallableInspector) -> None:
    assert not inspector.inspect_class(_Plain).is_native


def test_is_plain_class() -> None:
    assert is_plain_class(_Plain)
    assert not is_plain_class(_Service)
    assert not is_plain_class(_Registry)


def test_unresolvable_forward_reference_raises(inspector: CallableInspector) -> None:
    with pytest.raises(ArgWireIntrospectionError):
        inspector.inspect_callable(_broken)


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        pytest.param(_plain, "_plain", id="function"),
        pytest.param(lambda engine: engine, "lambda(engine)", id="lambda"),
        pytest.param(_Service, "_Service.__init__", id="class"),
        pytest.param(_Service.run, "_Service.run", id="method"),
        pytest.param(functools.partial(_plain), "_plain", id="partial"),
        pytest.param(_CallableService(), "_CallableService.__call__", id="callable-instance"),
    ],
)
def test_describe_callable(target: Any, expected: str) -> None:
    assert describe_callable(target) == expected


def test_class_descriptor_reads_init_when_new_is_catch_all(inspector: CallableInspector) -> None:
    descriptor = inspector.inspect_class(_Pooled)

    assert [parameter.name for parameter in descriptor.parameters] == ["engine"]
    assert descriptor.parameters[0].constraint == ClassConstraint(EngineInterface)
    assert not descriptor.accepts_trailing
