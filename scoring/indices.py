"""
Network indices over the collaboration graph.

Both indices are a generalized h-index anchored at rank 0:
values are sorted descending and ranks are walked from 0. The first rank
whose value equals the rank is the index; the first rank whose value drops
below it yields rank - 1; a walk that finishes without either yields 0.

Example: [5, 3, 3, 2, 0] -> rank 3 has value 2 < 3, index 2.
"""
from typing import Iterable, List
from correlate.models import IdentityMetric


def generalized_h_index(values: Iterable[int]) -> int:
    ordered = sorted(values, reverse=True)
    for rank, value in enumerate(ordered):
        if value == rank:
            return rank
        if value < rank:
            return rank - 1
    return 0


def compute_c_index(metrics: List[IdentityMetric]) -> int:
    """Connections index: over per-contributor degree."""
    return generalized_h_index(m.connections_count for m in metrics)


def compute_p_index(metrics: List[IdentityMetric]) -> int:
    """Projects index: over per-contributor distinct projects in the window."""
    return generalized_h_index(m.projects_count for m in metrics)
