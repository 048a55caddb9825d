from typing import TYPE_CHECKING, Annotated, Any, Generic, NamedTuple, TypeVar, get_args, get_origin

T = TypeVar("T")
_ANNOTATED_MARKER_MIN_ARGS = 2
_INTERSECTION_MIN_CLASSES = 2


class IntersectionMarker(NamedTuple):
    """Marker carrying the classes a value must satisfy simultaneously."""

    classes: tuple[type, ...]


if TYPE_CHECKING:
    Intersection = Annotated
    """Require a parameter value to be an instance of every listed class.

    At runtime ``Intersection[A, B]`` becomes
    ``Annotated[object, IntersectionMarker((A, B))]``. Intersection parameters
    are only satisfied by explicit arguments, never by a container lookup.

    Examples:
        .. code-block:: python

            def render(shape: Intersection[Circle, Colored]) -> str:
                return shape.color
    """

else:

    class Intersection:
        """Require a parameter value to be an instance of every listed class.

        At runtime ``Intersection[A, B]`` resolves to
        ``Annotated[object, IntersectionMarker((A, B))]``.

        Examples:
            .. code-block:: python

                def render(shape: Intersection[Circle, Colored]) -> str:
                    return shape.color

        """

        def __class_getitem__(cls, items: tuple[type, ...]) -> Any:
            if not isinstance(items, tuple) or len(items) < _INTERSECTION_MIN_CLASSES:
                msg = "Intersection[...] requires at least two classes."
                raise TypeError(msg)
            for item in items:
                if not isinstance(item, type):
                    msg = f"Intersection[...] accepts classes only, got {item!r}."
                    raise TypeError(msg)
            return _build_annotated((object, IntersectionMarker(classes=items)))


class Ref(Generic[T]):
    """Hold a value the invoked callable can replace in place.

    Python passes object references, so mutable arguments are already shared
    with the callee. ``Ref`` covers immutable values: the caller keeps the cell,
    the callee assigns ``ref.value``, and the caller reads the new value after
    the call returns.

    Examples:
        .. code-block:: python

            counter = Ref(1)
            injector.invoke(lambda count: setattr(count, "value", 3), {"count": counter})
            assert counter.value == 3

    """

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"


def extract_intersection_marker(annotation: Any) -> IntersectionMarker | None:
    """Return the intersection marker attached to an Annotated annotation."""
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    metadata = annotation_args[1:]
    return next(
        (item for item in metadata if isinstance(item, IntersectionMarker)),
        None,
    )


def _build_annotated(params: tuple[object, ...]) -> Any:
    """Return Annotated[...] with a pre-built params tuple (Py 3.10+ compatible)."""
    try:
        return Annotated.__class_getitem__(params)  # type: ignore[attr-defined]
    except AttributeError:
        return Annotated.__getitem__(params)  # type: ignore[attr-defined]
