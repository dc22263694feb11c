# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Strategy Categories:
- Ranks (anywhere in range, or crowded at the edges and centre)
- Positions (explicit indexes and sentinels)

Usage:
    from tests.property.conftest import crowded_ranks, positions

    @given(existing=crowded_ranks, position=positions)
    def test_insert_keeps_ranks_unique(existing, position) -> None:
        ...
"""

# =============================================================================
# Hypothesis Settings
# =============================================================================
#
# For standardized @settings decorators, import from tests.property.settings:
#   from tests.property.settings import STANDARD_SETTINGS, STATE_MACHINE_SETTINGS
#
# Tiers: ARITHMETIC (500), STATE_MACHINE (100), STANDARD (100), SLOW (50)
# =============================================================================

from __future__ import annotations

from hypothesis import strategies as st

from rankline.contracts import Position, RankedRow
from rankline.core.ranking import MAX_RANK, MIN_RANK

# =============================================================================
# Rank Strategies
# =============================================================================

ranks = st.integers(min_value=MIN_RANK, max_value=MAX_RANK)

# Ranks near the ends of the range and around the midpoint, where
# collisions force shifts and rebalances
edge_ranks = st.one_of(
    st.integers(min_value=MIN_RANK, max_value=MIN_RANK + 3),
    st.integers(min_value=-3, max_value=3),
    st.integers(min_value=MAX_RANK - 3, max_value=MAX_RANK),
)

distinct_ranks = st.lists(ranks, unique=True, max_size=20)

crowded_ranks = st.lists(st.one_of(edge_ranks, ranks), unique=True, max_size=20)


def rows_for(rank_values: list[int]) -> list[RankedRow]:
    """Rows with identities 1..n, ordered by rank."""
    return [RankedRow(identity=i, rank=r) for i, r in enumerate(sorted(rank_values), start=1)]


# =============================================================================
# Position Strategies
# =============================================================================

sentinel_positions = st.sampled_from([Position.last(), Position.middle(), Position.unset()])

index_positions = st.integers(min_value=-2, max_value=25).map(Position.at)

positions = st.one_of(index_positions, sentinel_positions)

# Raw values callers put in the position field
raw_positions = st.one_of(
    st.none(),
    st.integers(min_value=-2, max_value=25),
    st.sampled_from(["last", "middle"]),
)
