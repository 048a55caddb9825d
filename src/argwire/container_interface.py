from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ContainerProtocol(Protocol):
    """Protocol for the service locator consulted by the injector.

    Keys are usually classes. With custom id templates the injector may also
    request string keys such as ``"app.Engine$engine"``.
    """

    def get(self, key: Any) -> Any:
        """Return the instance registered under ``key``.

        Implementations raise a not-found error (by default
        ``ArgWireDependencyNotFoundError``) for unknown keys and any other
        exception for failures that must abort resolution.

        Args:
            key: Dependency key to look up.

        """

    def has(self, key: Any) -> bool:
        """Return True when ``key`` can be resolved.

        Args:
            key: Dependency key to check.

        """
