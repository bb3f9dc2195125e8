"""
fuzz.py - Randomised lockstep checks of the segment trees against a naive array.
"""
import string
from typing import Callable, Dict, List, Sequence

import numpy as np
import pandas as pd

from .data_structures import RangeAffineSumSegmentTree, SegmentTree
from .operators import Affine, Counted, affine

OPERATIONS = ("set_val", "update", "query")


class NaiveArray:
    """A plain list answering the same calls as a segment tree in linear time."""

    def __init__(
        self,
        values: Sequence[object],
        identity: object,
        operation: Callable[[object, object], object],
        apply: Callable[[object, object], object] = None,
    ):
        self.values = list(values)
        self.identity = identity
        self.operation = operation
        self.apply = apply

    def set_val(self, index: int, value: object):
        self.values[index] = value

    def update(self, start: int, end: int, effect: object):
        assert self.apply is not None, "No apply function given."
        for i in range(start, end):
            self.values[i] = self.apply(self.values[i], effect)

    def query(self, start: int, end: int) -> object:
        result = self.identity
        for value in self.values[start:end]:
            result = self.operation(result, value)
        return result


def _random_range(rng: np.random.Generator, length: int):
    start = int(rng.integers(0, length))
    end = int(rng.integers(start + 1, length + 1))
    return start, end


def _report(calls: Dict[str, int], mismatches: Dict[str, int]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "Calls": [calls[op] for op in OPERATIONS],
            "Mismatches": [mismatches[op] for op in OPERATIONS],
        },
        index=list(OPERATIONS),
    )


def fuzz_lazy(
    length: int, steps: int, rng: np.random.Generator, max_value: int = 10
) -> pd.DataFrame:
    """Drive a range-affine, range-sum tree and a naive array with the same random calls.

    Affine effects do not commute, so this also checks that effects are
    merged in the order they were issued.

    Args:
        length (int): the number of elements.
        steps (int): how many random calls to issue.
        rng (np.random.Generator): the source of randomness.
        max_value (int, optional): bound on the magnitude of written values. Defaults to 10.

    Returns:
        pd.DataFrame: number of calls and mismatching queries per operation.
    """
    assert length > 0, "Invalid length value."
    assert steps >= 0, "Invalid steps value."

    values = [int(v) for v in rng.integers(-max_value, max_value + 1, size=length)]
    tree = RangeAffineSumSegmentTree(values)
    naive = NaiveArray(values, 0, lambda a, b: a + b, affine)

    calls = {op: 0 for op in OPERATIONS}
    mismatches = {op: 0 for op in OPERATIONS}
    for _ in range(steps):
        op = OPERATIONS[int(rng.integers(0, len(OPERATIONS)))]
        calls[op] += 1
        if op == "set_val":
            index = int(rng.integers(0, length))
            value = int(rng.integers(-max_value, max_value + 1))
            tree.set_val(index, Counted(value, 1))
            naive.set_val(index, value)
        elif op == "update":
            start, end = _random_range(rng, length)
            # Multipliers kept in [-1, 1] so values stay small
            effect = Affine(int(rng.integers(-1, 2)), int(rng.integers(-5, 6)))
            tree.update(start, end, effect)
            naive.update(start, end, effect)
        else:
            start, end = _random_range(rng, length)
            if tree.sum(start, end) != naive.query(start, end):
                mismatches[op] += 1

    # A final full read catches corruption no random query happened to hit
    calls["query"] += 1
    if [v.value for v in tree.get_values()] != naive.values:
        mismatches["query"] += 1

    return _report(calls, mismatches)


def fuzz_plain(length: int, steps: int, rng: np.random.Generator) -> pd.DataFrame:
    """Drive a string-concatenation tree and a naive array with the same random calls.

    Args:
        length (int): the number of elements.
        steps (int): how many random calls to issue.
        rng (np.random.Generator): the source of randomness.

    Returns:
        pd.DataFrame: number of calls and mismatching queries per operation.
    """
    assert length > 0, "Invalid length value."
    assert steps >= 0, "Invalid steps value."

    def letters(size: int) -> List[str]:
        return [string.ascii_lowercase[i] for i in rng.integers(0, 26, size=size)]

    values = letters(length)
    concat = lambda a, b: a + b
    tree = SegmentTree(values, "", concat)
    naive = NaiveArray(values, "", concat)

    calls = {op: 0 for op in OPERATIONS}
    mismatches = {op: 0 for op in OPERATIONS}
    for _ in range(steps):
        if rng.random() < 0.5:
            calls["set_val"] += 1
            index = int(rng.integers(0, length))
            value = letters(1)[0]
            tree.set_val(index, value)
            naive.set_val(index, value)
        else:
            calls["query"] += 1
            start, end = _random_range(rng, length)
            if tree.query(start, end) != naive.query(start, end):
                mismatches["query"] += 1

    return _report(calls, mismatches)
