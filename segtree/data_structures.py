import math
import operator
from typing import Generic, List, Sequence

from .operators import (
    AFFINE_IDENTITY,
    COUNTED_IDENTITY,
    INF,
    add_counted,
    add_to_counted,
    affine_counted,
    assign,
    compose_affine,
    compose_assign,
    counted,
    lcm,
)
from .types import Apply, Combine, Compose, E, T


def _tree_size(length: int) -> int:
    size = 1
    while size < length:  # Get power of 2 closest to (but not lower than) the length.
        size *= 2
    return size


class SegmentTree(Generic[T]):
    """Implementation of a Segment Tree data structure."""

    def __init__(
        self, values: Sequence[T], identity: T, operation: Combine
    ) -> None:
        """Implementation of a Segment Tree data structure.

        Args:
            values (Sequence[T]): the initial contents of the array to represent.
            identity (T): the identity element for the operation.
            operation (Combine): an associative operation to answer range queries for.
                Arguments are always passed in array order.
        """
        self.length = len(values)
        self.size = _tree_size(self.length)
        self.operation = operation
        self.identity = identity

        self.data = [self.identity for _ in range(2 * self.size)]
        for i, value in enumerate(values):
            self.data[self.size + i] = value
        for i in range(self.size - 1, 0, -1):
            self.data[i] = self.operation(self.data[2 * i], self.data[2 * i + 1])

    def _bounds(self, start: int, end: int = None):
        if end is None:  # Argument not provided
            end = self.size
        if end < 0:  # Argument is relative to the end of the array
            end += self.size

        assert 0 <= start < self.size, f"Range start {start} out of bounds."
        assert 0 < end <= self.size, f"Range end {end} out of bounds."
        assert start < end, f"Empty range [{start}, {end})."
        return start, end

    def set_val(self, index: int, value: T):
        """Set an item on the given index.

        Args:
            index (int): the index of the item to set.
            value (T): the item to set.
        """
        assert 0 <= index < self.size, f"Index {index} out of bounds."

        index += self.size  # Get true index in the array
        self.data[index] = value
        index //= 2  # Navigate to parent node
        while index >= 1:  # Update all the way to the root node
            self.data[index] = self.operation(
                self.data[2 * index], self.data[2 * index + 1]
            )
            index //= 2

    def query(self, start: int = 0, end: int = None) -> T:
        """Find the result of the operation over the half-open range [start, end).

        Args:
            start (int, optional): the index at the start of the range. Defaults to 0.
            end (int, optional): one past the index at the end of the range.
                Defaults to None, meaning the whole tree.

        Returns:
            T: the result of the operation at the given range.
        """
        start, end = self._bounds(start, end)
        left = start + self.size
        right = end + self.size - 1

        acc_left = self.identity
        acc_right = self.identity
        while left <= right:
            if left % 2 == 1:  # Right child, fully inside
                acc_left = self.operation(acc_left, self.data[left])
                left += 1
            if right % 2 == 0:  # Left child, fully inside
                acc_right = self.operation(self.data[right], acc_right)
                right -= 1
            left //= 2
            right //= 2
        return self.operation(acc_left, acc_right)

    def __setitem__(self, index: int, value: T):
        self.set_val(index, value)

    def __getitem__(self, index: int) -> T:
        """Access an item on the given index.

        Args:
            index (int): the index of the item to access.

        Returns:
            T: the element at the given index.
        """
        assert 0 <= index < self.size, f"Index {index} out of bounds."
        return self.data[self.size + index]

    def get_values(self, end: int = None) -> List[T]:
        """Get the bottom-level leaf values of the segment tree.

        Args:
            end (int, optional): the index of the last element to include.
                Defaults to None, meaning the original input length.

        Returns:
            List[T]: the saved values.
        """
        if end is None:
            end = self.length
        return [self[i] for i in range(end)]

    def __len__(self) -> int:
        return self.length

    def print_data(self):
        print(" ".join(str(item) for item in self.data))


class LazySegmentTree(SegmentTree[T], Generic[T, E]):
    """A Segment Tree that also supports range updates through lazy propagation.

    Every node ``i`` holds a stored aggregate ``data[i]`` and a pending effect
    ``lazy[i]``. The effective value of a node is ``apply(data[i], lazy[i])``,
    and ``data[i]`` is always the combination of its children's effective values.
    Only nodes on a path that has just been cleaned from the root are free of
    pending effects.
    """

    def __init__(
        self,
        values: Sequence[T],
        identity: T,
        effect_identity: E,
        operation: Combine,
        apply: Apply,
        compose: Compose,
    ) -> None:
        """A Segment Tree that also supports range updates through lazy propagation.

        Args:
            values (Sequence[T]): the initial contents of the array to represent.
            identity (T): the identity element for the operation.
            effect_identity (E): the effect meaning "no change".
            operation (Combine): an associative operation to answer range queries for.
            apply (Apply): applies an effect to a value (or to an aggregate of values).
            compose (Compose): merges two effects, oldest first, into one.
        """
        super().__init__(values, identity, operation)
        self.apply = apply
        self.compose = compose
        self.effect_identity = effect_identity
        self.lazy = [self.effect_identity for _ in range(2 * self.size)]
        self.depth = self.size.bit_length() - 1

    def _operate(self, node: int):
        self.data[node] = self.apply(self.data[node], self.lazy[node])
        self.lazy[node] = self.effect_identity

    def _propagate(self, node: int):
        if node >= self.size:  # Leaf
            return
        effect = self.lazy[node]
        self.lazy[2 * node] = self.compose(self.lazy[2 * node], effect)
        self.lazy[2 * node + 1] = self.compose(self.lazy[2 * node + 1], effect)

    def _propagate_and_operate(self, node: int):
        self._propagate(node)
        self._operate(node)

    def _lazy_propagate_from_root(self, leaf: int):
        """Push pending effects down the path from the root to ``leaf``.

        Afterwards every node on the path, and the sibling of every node on
        the path, carries no pending effect.

        Args:
            leaf (int): the true index of the leaf in the array.
        """
        self._propagate_and_operate(1)
        for shift in range(self.depth - 1, -1, -1):
            node = leaf >> shift
            self._propagate_and_operate(node)
            self._propagate_and_operate(node ^ 1)

    def _data_propagate_from_leaf(self, leaf: int):
        """Recompute every ancestor of ``leaf`` from its children's effective values.

        The ancestors' own pending effects are left in place.

        Args:
            leaf (int): the true index of the leaf in the array.
        """
        node = leaf
        while node > 1:
            left = node & ~1
            self.data[node // 2] = self.operation(
                self.apply(self.data[left], self.lazy[left]),
                self.apply(self.data[left + 1], self.lazy[left + 1]),
            )
            node //= 2

    def set_val(self, index: int, value: T):
        """Set an item on the given index, discarding any effect pending on it.

        Args:
            index (int): the index of the item to set.
            value (T): the item to set.
        """
        assert 0 <= index < self.size, f"Index {index} out of bounds."

        leaf = index + self.size
        self._lazy_propagate_from_root(leaf)
        self.data[leaf] = value
        self._data_propagate_from_leaf(leaf)

    def update(self, start: int, end: int, effect: E):
        """Apply an effect to every item in the half-open range [start, end).

        Args:
            start (int): the index at the start of the range.
            end (int): one past the index at the end of the range.
            effect (E): the effect to apply, after any effect applied before.
        """
        start, end = self._bounds(start, end)
        first = left = start + self.size
        last = right = end + self.size - 1

        self._lazy_propagate_from_root(first)
        self._lazy_propagate_from_root(last)

        while left <= right:
            if left % 2 == 1:
                self.lazy[left] = self.compose(self.lazy[left], effect)
                left += 1
            if right % 2 == 0:
                self.lazy[right] = self.compose(self.lazy[right], effect)
                right -= 1
            left //= 2
            right //= 2

        self._data_propagate_from_leaf(first)
        self._data_propagate_from_leaf(last)

    def query(self, start: int = 0, end: int = None) -> T:
        """Find the result of the operation over the half-open range [start, end).

        Args:
            start (int, optional): the index at the start of the range. Defaults to 0.
            end (int, optional): one past the index at the end of the range.
                Defaults to None, meaning the whole tree.

        Returns:
            T: the result of the operation at the given range.
        """
        start, end = self._bounds(start, end)
        # Every node the fold reads is a child of an ancestor of one of the two
        # boundary leaves, so cleaning both paths leaves them effect-free.
        self._lazy_propagate_from_root(start + self.size)
        self._lazy_propagate_from_root(end + self.size - 1)
        return super().query(start, end)

    def __getitem__(self, index: int) -> T:
        """Access the current value of the item on the given index.

        Args:
            index (int): the index of the item to access.

        Returns:
            T: the element at the given index, with every pending effect applied.
        """
        assert 0 <= index < self.size, f"Index {index} out of bounds."
        leaf = index + self.size
        self._lazy_propagate_from_root(leaf)
        return self.data[leaf]

    def print_data(self):
        super().print_data()
        print(" ".join(str(effect) for effect in self.lazy))


class MinSegmentTree(SegmentTree):
    """A Segment Tree that allows for efficient min queries."""

    def __init__(self, values: Sequence[float]):
        super().__init__(values, identity=INF, operation=min)

    def min(self, start: int = 0, end: int = None) -> float:
        """Return the minimum of all the elements in the range [start, end)."""
        return super().query(start, end)


class GcdSegmentTree(SegmentTree):
    """A Segment Tree that allows for efficient greatest common divisor queries."""

    def __init__(self, values: Sequence[int]):
        super().__init__(values, identity=0, operation=math.gcd)

    def gcd(self, start: int = 0, end: int = None) -> int:
        return super().query(start, end)


class LcmSegmentTree(SegmentTree):
    """A Segment Tree that allows for efficient least common multiple queries."""

    def __init__(self, values: Sequence[int]):
        super().__init__(values, identity=1, operation=lcm)

    def lcm(self, start: int = 0, end: int = None) -> int:
        return super().query(start, end)


class RangeAssignMinSegmentTree(LazySegmentTree):
    """Range assignment, range minimum. ``None`` is the "no assignment" effect."""

    def __init__(self, values: Sequence[float]):
        super().__init__(
            values,
            identity=INF,
            effect_identity=None,
            operation=min,
            apply=assign,
            compose=compose_assign,
        )

    def min(self, start: int = 0, end: int = None) -> float:
        return super().query(start, end)


class RangeAddSumSegmentTree(LazySegmentTree):
    """Range addition, range sum."""

    def __init__(self, values: Sequence[float]):
        """Range addition, range sum.

        Args:
            values (Sequence[float]): the initial numbers. They are stored as
                ``Counted`` aggregates so an addition can scale with the range length.
        """
        super().__init__(
            counted(values),
            identity=COUNTED_IDENTITY,
            effect_identity=0,
            operation=add_counted,
            apply=add_to_counted,
            compose=operator.add,
        )

    def sum(self, start: int = 0, end: int = None) -> float:
        """Return the sum of the elements in the range [start, end)."""
        return super().query(start, end).value


class RangeAffineSumSegmentTree(LazySegmentTree):
    """Range affine map (x -> x * mul + add), range sum."""

    def __init__(self, values: Sequence[float]):
        super().__init__(
            counted(values),
            identity=COUNTED_IDENTITY,
            effect_identity=AFFINE_IDENTITY,
            operation=add_counted,
            apply=affine_counted,
            compose=compose_affine,
        )

    def sum(self, start: int = 0, end: int = None) -> float:
        return super().query(start, end).value
