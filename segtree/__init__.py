"""
segtree - Segment trees for range queries, with lazy propagation for range updates.
"""
from .data_structures import (
    GcdSegmentTree,
    LazySegmentTree,
    LcmSegmentTree,
    MinSegmentTree,
    RangeAddSumSegmentTree,
    RangeAffineSumSegmentTree,
    RangeAssignMinSegmentTree,
    SegmentTree,
)
from .operators import Affine, Counted
