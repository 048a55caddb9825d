from __future__ import annotations

import copy
import inspect
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from argwire._internal.introspection import CallableInspector, is_plain_class
from argwire._internal.parameter_resolver import TEMPLATE_CLASS, TEMPLATE_NAME, ParameterResolver
from argwire._internal.resolving_state import ResolvingState
from argwire.container_interface import ContainerProtocol
from argwire.descriptors import CallableDescriptor, ResolvedArguments
from argwire.exceptions import ArgWireDependencyNotFoundError, ArgWireNotInstantiableError

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")
Arguments = Mapping[Any, Any] | Iterable[Any] | None

logger = logging.getLogger(__name__)


class Injector:
    """Call functions and build objects with arguments resolved by type.

    Parameters are filled from caller arguments first: named arguments by
    parameter name, positional objects by declared type in the order they
    were passed. Remaining class-typed parameters are looked up in the
    container. Defaults, ``None`` for nullable parameters and empty variadics
    cover the rest.

    Examples:
        .. code-block:: python

            def format_string(string: str, formatter: MessageFormatter) -> str:
                return formatter.format(string)


            injector = Injector(container)
            injector.invoke(format_string, {"string": "Hello World!"})

    """

    TEMPLATE_CLASS = TEMPLATE_CLASS
    TEMPLATE_NAME = TEMPLATE_NAME

    def __init__(
        self,
        container: ContainerProtocol | None = None,
        *,
        cache_descriptors: bool = False,
        id_templates: Iterable[str] = (TEMPLATE_CLASS,),
        not_found_errors: Iterable[type[BaseException]] = (ArgWireDependencyNotFoundError,),
    ) -> None:
        """Initialize an injector.

        Args:
            container: Service locator for class-typed parameters. Without a
                container such parameters are only filled from arguments.
            cache_descriptors: Memoize class constructor descriptors for
                repeated ``make`` calls. Increases memory usage.
            id_templates: Container key templates tried in order for each
                class-typed parameter. ``"{class}"`` alone requests the class
                itself; other templates render ``{class}`` as
                ``module.qualname`` and ``{name}`` as the parameter name.
            not_found_errors: Exception types the container raises for
                unknown keys. Other container exceptions abort resolution.

        """
        self._container = container
        self._cache_descriptors = cache_descriptors
        self._id_templates = tuple(id_templates)
        self._not_found_errors = tuple(not_found_errors)
        self._inspector = CallableInspector()
        self._descriptors_cache: dict[type, CallableDescriptor] = {}
        self._descriptors_lock = threading.Lock()
        self._parameter_resolver = self._build_parameter_resolver()

    def with_cache_descriptors(self, enabled: bool = True) -> Self:  # noqa: FBT001, FBT002
        """Return a copy with class descriptor memoization toggled.

        Args:
            enabled: Whether the copy caches class constructor descriptors.

        """
        new = self._copy()
        new._cache_descriptors = enabled
        return new

    def with_id_templates(self, *templates: str) -> Self:
        """Return a copy that requests container keys built from ``templates``.

        Args:
            *templates: Key templates tried in order, using ``{class}`` and ``{name}``.

        """
        if not templates:
            msg = "At least one id template is required."
            raise ValueError(msg)
        new = self._copy()
        new._id_templates = templates
        new._parameter_resolver = new._build_parameter_resolver()
        return new

    def with_not_found_errors(self, *errors: type[BaseException]) -> Self:
        """Return a copy that treats ``errors`` as container "not found" signals.

        Args:
            *errors: Exception types raised by the container for unknown keys.

        """
        new = self._copy()
        new._not_found_errors = errors
        new._parameter_resolver = new._build_parameter_resolver()
        return new

    def invoke(self, target: Callable[..., T], arguments: Arguments = None) -> T:
        """Call ``target`` with resolved arguments and return its result.

        Args:
            target: Function, method, lambda or callable instance.
            arguments: Mapping with ``str`` keys for named arguments and ``int``
                keys for positional objects, or an iterable of positional objects.

        Raises:
            ArgWireInvalidArgumentError: A positional argument is not an object.
            ArgWireMissingRequiredArgumentError: A required parameter cannot be satisfied.

        """
        resolved = self.resolve_arguments(target, arguments)
        return resolved.call(target)

    def make(self, cls: type[T], arguments: Arguments = None) -> T:
        """Instantiate ``cls`` with resolved constructor arguments.

        Args:
            cls: Concrete class to instantiate.
            arguments: Same shape as for ``invoke``.

        Raises:
            ArgWireNotInstantiableError: ``cls`` is not a class, is abstract or is a protocol.

        """
        if not inspect.isclass(cls) or inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            raise ArgWireNotInstantiableError(cls)
        if is_plain_class(cls):
            return cls()
        resolved = self.resolve_arguments(self._class_descriptor(cls), arguments)
        return resolved.call(cls)

    def resolve_arguments(
        self,
        target: Callable[..., Any] | CallableDescriptor,
        arguments: Arguments = None,
    ) -> ResolvedArguments:
        """Resolve arguments for ``target`` without calling it.

        Args:
            target: Callable to inspect, or a prebuilt ``CallableDescriptor``
                (useful for native callables whose defaults are opaque).
            arguments: Same shape as for ``invoke``.

        """
        if isinstance(target, CallableDescriptor):
            descriptor = target
        elif inspect.isclass(target):
            descriptor = self._class_descriptor(target)
        else:
            descriptor = self._inspector.inspect_callable(target)
        state = ResolvingState(descriptor, arguments)
        return self._parameter_resolver.resolve(descriptor, state)

    def _class_descriptor(self, cls: type) -> CallableDescriptor:
        if not self._cache_descriptors:
            return self._inspector.inspect_class(cls)
        with self._descriptors_lock:
            cached = self._descriptors_cache.get(cls)
        if cached is not None:
            return cached
        descriptor = self._inspector.inspect_class(cls)
        with self._descriptors_lock:
            cached = self._descriptors_cache.setdefault(cls, descriptor)
        logger.debug("Cached constructor descriptor for %s", descriptor.name)
        return cached

    def _build_parameter_resolver(self) -> ParameterResolver:
        return ParameterResolver(
            self._container,
            id_templates=self._id_templates,
            not_found_errors=self._not_found_errors,
        )

    def _copy(self) -> Self:
        new = copy.copy(self)
        new._descriptors_cache = {}
        new._descriptors_lock = threading.Lock()
        return new
