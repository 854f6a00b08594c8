"""Geometry utilities for the layer packer."""

from __future__ import annotations

from dataclasses import dataclass


def normalise_footprint(width: float, length: float) -> tuple[float, float]:
    """Return (width, length) with width <= length."""
    width, length = float(width), float(length)
    return min(width, length), max(width, length)


@dataclass(frozen=True)
class Fit:
    """Leftover space of one orientation against the layer's remaining footprint."""

    gap_width: float
    gap_length: float

    @property
    def min_gap(self) -> float:
        return min(self.gap_width, self.gap_length)

    @property
    def fits(self) -> bool:
        return self.min_gap >= 0


def fit_unrotated(
    remaining_width: float,
    remaining_length: float,
    item_width: float,
    item_length: float,
) -> Fit:
    return Fit(remaining_width - item_width, remaining_length - item_length)


def fit_rotated(
    remaining_width: float,
    remaining_length: float,
    item_width: float,
    item_length: float,
) -> Fit:
    """Item turned 90 degrees: its length runs along the remaining width."""
    return Fit(remaining_width - item_length, remaining_length - item_width)


def prefer_unrotated(unrotated: Fit, rotated: Fit) -> bool:
    """
    Unrotated wins if it fits with a gap no larger than the rotated one,
    or if the rotated orientation does not fit at all.
    """
    return (unrotated.fits and unrotated.min_gap <= rotated.min_gap) or not rotated.fits
