"""
operators.py - Monoids and monoid actions to instantiate the segment trees with.
"""
import math
from collections import namedtuple
from typing import Optional

#: An aggregate that remembers how many elements it covers, so that effects
#: depending on the element count (e.g. "add 5 to each") can act on it.
Counted = namedtuple("Counted", ("value", "count"))

#: The affine map x -> x * mul + add.
Affine = namedtuple("Affine", ("mul", "add"))

INF = float("inf")
COUNTED_IDENTITY = Counted(0, 0)
AFFINE_IDENTITY = Affine(1, 0)


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return a * b // math.gcd(a, b)


def add_counted(a: Counted, b: Counted) -> Counted:
    return Counted(a.value + b.value, a.count + b.count)


def counted(values) -> list:
    """Wrap plain numbers as single-element aggregates."""
    return [Counted(value, 1) for value in values]


def add_to_counted(x: Counted, effect) -> Counted:
    return Counted(x.value + x.count * effect, x.count)


def assign(x, effect: Optional[object]):
    """Overwrite every element with ``effect``; ``None`` means no assignment.

    Only sound for idempotent operations (min, max), where the aggregate of
    equal elements is the element itself.
    """
    return x if effect is None else effect


def compose_assign(first: Optional[object], second: Optional[object]):
    # The latest assignment wins
    return first if second is None else second


def affine_counted(x: Counted, effect: Affine) -> Counted:
    return Counted(x.value * effect.mul + x.count * effect.add, x.count)


def affine(x, effect: Affine):
    return x * effect.mul + effect.add


def compose_affine(first: Affine, second: Affine) -> Affine:
    """Merge two affine maps into one that applies ``first`` then ``second``."""
    return Affine(first.mul * second.mul, first.add * second.mul + second.add)
