"""Positional objects are matched to parameters by type, in the order passed.

Each object is used at most once. A typed ``*args`` collects every remaining
object of its type. ``Ref`` lets the callee replace an immutable value.
"""

from __future__ import annotations

from argwire import Injector, Ref


class Engine:
    name = "engine"


class Diesel(Engine):
    name = "diesel"


class Electric(Engine):
    name = "electric"


def race(first: Engine, second: Electric, *others: Engine) -> str:
    return f"{first.name} vs {second.name} (+{len(others)})"


def increment(counter: Ref[int], step: int = 1) -> None:
    counter.value += step


def main() -> None:
    injector = Injector()

    print(injector.invoke(race, [Diesel(), Electric(), Diesel()]))  # => diesel vs electric (+1)
    print(injector.invoke(race, [Electric(), Electric()]))  # => electric vs electric (+0)
    print(injector.invoke(race, {0: Diesel(), "second": Electric()}))  # => diesel vs electric (+0)

    counter = Ref(1)
    injector.invoke(increment, {"counter": counter, "step": 2})
    print(f"counter={counter.value}")  # => counter=3


if __name__ == "__main__":
    main()
