"""Id templates choose container keys per parameter.

``{name}`` is replaced with the parameter name and ``{class}`` with the
annotated class. Templates are tried in order until the container has an
entry.
"""

from __future__ import annotations

from typing import Any

from argwire import ArgWireDependencyNotFoundError, Injector


class Connection:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class Container:
    def __init__(self, services: dict[Any, Any]) -> None:
        self._services = services

    def get(self, key: Any) -> Any:
        try:
            return self._services[key]
        except KeyError:
            raise ArgWireDependencyNotFoundError(key) from None

    def has(self, key: Any) -> bool:
        return key in self._services


def copy_rows(primary: Connection, replica: Connection) -> str:
    return f"{primary.dsn} -> {replica.dsn}"


def main() -> None:
    container = Container(
        {
            "primary": Connection("db://primary"),
            Connection: Connection("db://default"),
        },
    )

    by_class = Injector(container)
    print(by_class.invoke(copy_rows))  # => db://default -> db://default

    by_name = by_class.with_id_templates(Injector.TEMPLATE_NAME, Injector.TEMPLATE_CLASS)
    print(by_name.invoke(copy_rows))  # => db://primary -> db://default


if __name__ == "__main__":
    main()
