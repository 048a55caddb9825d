"""Shared pytest fixtures for argwire tests."""

import pytest

from argwire.injector import Injector
from tests.support import DictContainer, EngineInterface, EngineMarkTwo


@pytest.fixture()
def container() -> DictContainer:
    """Container with ``EngineInterface`` bound to ``EngineMarkTwo``."""
    return DictContainer({EngineInterface: EngineMarkTwo()})


@pytest.fixture()
def empty_container() -> DictContainer:
    """Container without entries."""
    return DictContainer()


@pytest.fixture()
def injector(container: DictContainer) -> Injector:
    """Injector backed by the default container."""
    return Injector(container)


@pytest.fixture()
def empty_injector(empty_container: DictContainer) -> Injector:
    """Injector backed by an empty container."""
    return Injector(empty_container)
