"""Collections: fruit baskets in dictionaries and simple list work."""

from __future__ import annotations

import enum
from typing import Iterable, MutableMapping


class Fruit(enum.Enum):
    """Kinds of fruit that can go into a basket."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


def fruit_basket() -> dict[str, int]:
    """A basket of at least three kinds and at least five fruits."""
    basket = {"banana": 2}
    basket["apple"] = 3
    basket["prööt"] = 3
    return basket


def top_up_basket(basket: MutableMapping[Fruit, int]) -> None:
    """Add three of every fruit kind not yet in the basket, leaving others alone."""
    for fruit in Fruit:
        basket.setdefault(fruit, 3)


def array_and_vec() -> tuple[tuple[int, ...], list[int]]:
    """A fixed tuple and a list holding the same elements."""
    a = (10, 20, 30, 40)
    return a, list(a)


def vec_loop(values: Iterable[int]) -> list[int]:
    """Return a new list with every value doubled."""
    return [value * 2 for value in values]