"""Rank arithmetic: midpoints and even spacing inside [MIN_RANK, MAX_RANK].

Pure functions, no validation. Callers check bounds through conflict
detection.

Rounding:
    Halves round AWAY from zero (round(2.5) == 3, round(-2.5) == -3), not
    to even as Python's round() does. Computed on integers so the result is
    exact for any rank range.
"""

from typing import Final

MIN_RANK: Final[int] = -8388607
MAX_RANK: Final[int] = 8388607


def round_div(numerator: int, denominator: int) -> int:
    """numerator / denominator rounded half away from zero."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    quotient, remainder = divmod(abs(numerator), denominator)
    if 2 * remainder >= denominator:
        quotient += 1
    return quotient if numerator >= 0 else -quotient


def rank_between(above: int | None = None, below: int | None = None) -> int:
    """Midpoint between two ranks.

    With both bounds absent, bisects the full range.
    """
    if above is None and below is None:
        return rank_between(MAX_RANK, MIN_RANK)
    if above is None or below is None:
        raise ValueError("rank_between needs both bounds or neither")
    return round_div(above - below, 2) + below


def rebalance_spacing(count: int) -> int:
    """Distance between consecutive ranks when count rows share the range.

    The rounded spacing is used while the last of count slots still fits
    under MAX_RANK; past that it falls back to the floor. Zero means count
    rows cannot get distinct ranks.
    """
    spacing = round_div(MAX_RANK - MIN_RANK, count)
    if spacing * (count - 1) + MIN_RANK > MAX_RANK:
        spacing = (MAX_RANK - MIN_RANK) // count
    return spacing


def rank_for_row(old_rank: int, index: int, count: int, old_attempted_rank: int) -> int:
    """Evenly spaced rank for a row during rebalance.

    Rows ranked below the attempted rank keep their index; the rest move
    one slot up to leave room for the record being placed.
    """
    new_index = index if old_rank < old_attempted_rank else index + 1
    return rebalance_spacing(count) * new_index + MIN_RANK
