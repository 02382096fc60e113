"""Quiz solutions: prices, string values, doubling and greetings."""

from __future__ import annotations


def calculate_apple_price(quantity: int) -> int:
    """Apples cost 2 each, or 1 each when buying more than 40."""
    if quantity > 40:
        return quantity
    return quantity * 2


def string_values() -> list[str]:
    """The values the strings quiz builds, in order."""
    return [
        "blue",
        "red",
        "hi",
        "rust is fun!",
        "nice weather",
        "Interpolation {}".format("Station"),
        "abc"[0:1],
        "  hello there ".strip(),
        "Happy Monday!".replace("Mon", "Tues"),
        "mY sHiFt KeY iS sTiCkY".lower(),
    ]


def times_two(num: int) -> int:
    """Double a number."""
    return num * 2


def hello(value: str) -> str:
    """Prefix a value with "Hello "."""
    return "Hello " + value