"""Basics: variables, functions, primitive types and strings."""

from __future__ import annotations

from typing import Sequence, TypeVar

from .control import is_even

T = TypeVar("T")

NUMBER = 3
_COLOR_WORDS = frozenset({"green", "blue", "red"})


def describe_ten(x: int) -> str:
    """Say whether a number is ten."""
    return "Ten!" if x == 10 else "Not ten!"


def shadowed_number() -> list[str]:
    """Lines built from a name rebound from a spelled-out word to a number."""
    number = "T-H-R-E-E"
    spelled = f"Spell a Number : {number}"
    number = NUMBER
    return [spelled, f"Number plus two is : {number + 2}"]


def call_me(num: int) -> list[str]:
    """Print and return one ring line for each call, counting from one."""
    lines = [f"Ring! Call number {i}" for i in range(1, num + 1)]
    for line in lines:
        print(line)
    return lines


def sale_price(price: int) -> int:
    """Even prices get 10 off, odd prices get 3 off."""
    if is_even(price):
        return price - 10
    return price - 3


def square(num: int) -> int:
    """The square of a number."""
    return num * num


def greeting(is_morning: bool, is_evening: bool) -> list[str]:
    """The greetings that fit the time of day."""
    greetings = []
    if is_morning:
        greetings.append("Good morning!")
    if is_evening:
        greetings.append("Good evening!")
    return greetings


def classify_char(ch: str) -> str:
    """Describe a single character as alphabetic, numeric or neither."""
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    if ch.isalpha():
        return "Alphabetical!"
    if ch.isnumeric():
        return "Numerical!"
    return "Neither alphabetic nor numeric!"


def describe_array(values: Sequence) -> str:
    """Comment on how big a sequence is."""
    if len(values) >= 100:
        return "Wow, that's a big array!"
    return "Meh, I eat arrays like that for breakfast."


def nice_slice(values: Sequence[T]) -> Sequence[T]:
    """The second, third and fourth elements."""
    if len(values) < 4:
        raise IndexError(f"need at least 4 elements, got {len(values)}")
    return values[1:4]


def describe_cat(cat: tuple[str, float]) -> str:
    """Describe a (name, age) pair."""
    name, age = cat
    return f"{name} is {age} years old."


def second(values: Sequence[T]) -> T:
    """The second element."""
    return values[1]


def current_favorite_color() -> str:
    """The current favourite colour."""
    return "blue"


def is_a_color_word(attempt: str) -> bool:
    """True for a known colour word."""
    return attempt in _COLOR_WORDS