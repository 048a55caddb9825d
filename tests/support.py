"""Shared helper types for argwire tests."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol

from argwire.exceptions import ArgWireDependencyNotFoundError


class EngineInterface(ABC):
    NAME = ""

    @abstractmethod
    def get_name(self) -> str: ...

    @abstractmethod
    def get_power(self) -> int: ...


class LightEngine(EngineInterface, ABC):
    pass


class EngineMarkTwo(LightEngine):
    NAME = "Mark Two"

    def get_name(self) -> str:
        return self.NAME

    def get_power(self) -> int:
        return 147


class EngineZIL130(EngineInterface):
    NAME = "ZIL 130"

    def get_name(self) -> str:
        return self.NAME

    def get_power(self) -> int:
        return 150


class EngineVAZ2101(LightEngine):
    NAME = "VAZ 2101"

    def get_name(self) -> str:
        return self.NAME

    def get_power(self) -> int:
        return 59


class ColorInterface(Protocol):
    def get_color(self) -> str: ...


class Red:
    def get_color(self) -> str:
        return "red"


class Circle:
    pass


class ColoredCircle(Circle, Red):
    pass


class Timestamp:
    pass


class DictContainer:
    """Dictionary-backed container stub."""

    def __init__(self, entries: dict[Any, Any] | None = None) -> None:
        self.entries = dict(entries or {})
        self.requested: list[Any] = []

    def get(self, key: Any) -> Any:
        self.requested.append(key)
        try:
            return self.entries[key]
        except KeyError:
            raise ArgWireDependencyNotFoundError(key) from None

    def has(self, key: Any) -> bool:
        return key in self.entries


class BrokenContainer:
    """Container stub failing with a non not-found error."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def get(self, key: Any) -> Any:
        raise self.error

    def has(self, key: Any) -> bool:
        return True
