"""Quickstart: call functions and build objects with resolved arguments.

Plain values are passed by name. Class-typed parameters come from any
container that implements ``get`` and ``has``.
"""

from __future__ import annotations

from typing import Any

from argwire import ArgWireDependencyNotFoundError, Injector


class Greeter:
    def greet(self, name: str) -> str:
        return f"Hello, {name}!"


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


class Report:
    def __init__(self, greeter: Greeter, title: str = "Daily") -> None:
        self.greeter = greeter
        self.title = title


def welcome(name: str, greeter: Greeter, punctuation: str = "") -> str:
    return greeter.greet(name) + punctuation


def main() -> None:
    injector = Injector(Container({Greeter: Greeter()}))

    print(injector.invoke(welcome, {"name": "World"}))  # => Hello, World!
    print(injector.invoke(welcome, {"name": "argwire", "punctuation": "!!"}))  # => Hello, argwire!!!

    report = injector.make(Report, {"title": "Weekly"})
    print(f"title={report.title}")  # => title=Weekly
    print(f"greeter={type(report.greeter).__name__}")  # => greeter=Greeter


if __name__ == "__main__":
    main()
