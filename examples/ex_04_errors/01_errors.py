"""Errors raised while resolving arguments.

Plain values cannot be passed by position. Required parameters that nothing
satisfies raise ``ArgWireMissingRequiredArgumentError``. Abstract classes are
rejected by ``make``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from argwire import (
    ArgWireInvalidArgumentError,
    ArgWireMissingRequiredArgumentError,
    ArgWireNotInstantiableError,
    Injector,
)


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str) -> None: ...


def send(message: str, notifier: Notifier) -> None:
    notifier.notify(message)


def main() -> None:
    injector = Injector()

    try:
        injector.invoke(send, ["hello"])
    except ArgWireInvalidArgumentError as error:
        print(f"{type(error).__name__} parameter={error.parameter}")  # => ArgWireInvalidArgumentError parameter=0

    try:
        injector.invoke(send, {"message": "hello"})
    except ArgWireMissingRequiredArgumentError as error:
        print(f"{type(error).__name__}: {error}")  # => ArgWireMissingRequiredArgumentError: Missing required argument "notifier" when calling "send".

    try:
        injector.make(Notifier)
    except ArgWireNotInstantiableError as error:
        print(f"{type(error).__name__}: {error}")  # => ArgWireNotInstantiableError: Class Notifier is not instantiable.


if __name__ == "__main__":
    main()
