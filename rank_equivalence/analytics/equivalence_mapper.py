#!/usr/bin/env python3
"""
Cross-game rank equivalence.

Maps a tier of one game onto the tier of another game that sits at the same
cumulative percentile, plus the position inside that tier's band.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Union

import pandas as pd

from .distribution import Distribution, TierEntry

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)
RESULT_QUANTUM = Decimal("0.01")


def quantize_percent(value: Decimal) -> Decimal:
    """Round a percentage to two fractional digits, half up."""
    return value.quantize(RESULT_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class EquivalenceResult:
    """
    Equivalent rank in the target game.

    Attributes:
        source_tier: Tier the lookup started from
        tier: Matched tier in the target game
        tier_percentile: Cumulative percentile of the matched target tier
        source_percentile: Cumulative percentile of the source tier
        within_tier_percentile: Position of the source inside the matched band (0-100)
    """

    source_tier: str
    tier: str
    tier_percentile: Decimal
    source_percentile: Decimal
    within_tier_percentile: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_tier": self.source_tier,
            "tier": self.tier,
            "tier_percentile": str(self.tier_percentile),
            "source_percentile": str(self.source_percentile),
            "within_tier_percentile": str(self.within_tier_percentile),
        }


@dataclass(frozen=True)
class NoEquivalentRank:
    """The source tier ranks above every tier recorded for the target game."""

    source_tier: str
    source_percentile: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source_tier": self.source_tier,
            "tier": None,
            "source_percentile": str(self.source_percentile),
        }


def _within_tier_percentile(target: Distribution, equivalent_rank: TierEntry, source_percentile: Decimal) -> Decimal:
    # The top and bottom bands have no neighbour to interpolate against.
    if target.is_first(equivalent_rank):
        return HUNDRED
    if target.is_last(equivalent_rank):
        return HUNDRED

    lower_rank = target.previous(equivalent_rank)
    # lower_rank < source_percentile <= equivalent_rank, so the band is never empty
    band = equivalent_rank.cumulative_percentile - lower_rank.cumulative_percentile
    return (source_percentile - lower_rank.cumulative_percentile) / band * HUNDRED


def convert_rank(source: Distribution, source_tier: str,
                 target: Distribution) -> Union[EquivalenceResult, NoEquivalentRank]:
    """
    Find the tier in ``target`` equivalent to ``source_tier`` in ``source``.

    Args:
        source: Distribution of the game the player is ranked in
        source_tier: Tier label in ``source``
        target: Distribution of the game to convert into

    Returns:
        EquivalenceResult, or NoEquivalentRank when the source percentile is
        above the top of the target distribution

    Raises:
        UnknownTierError: If ``source_tier`` is not in ``source``
    """
    source_rank = source.find(source_tier)
    source_percentile = source_rank.cumulative_percentile

    equivalent_rank = target.first_at_or_above(source_percentile)
    if equivalent_rank is None:
        logger.info(f"No equivalent rank for {source_tier} ({source_percentile}%) in {target.game or 'target'}")
        return NoEquivalentRank(source_tier, quantize_percent(source_percentile))

    within_tier = _within_tier_percentile(target, equivalent_rank, source_percentile)

    result = EquivalenceResult(
        source_tier=source_tier,
        tier=equivalent_rank.tier,
        tier_percentile=quantize_percent(equivalent_rank.cumulative_percentile),
        source_percentile=quantize_percent(source_percentile),
        within_tier_percentile=quantize_percent(within_tier),
    )
    logger.debug(f"{source_tier} -> {result.tier} ({result.within_tier_percentile}% into tier)")
    return result


def build_equivalence_table(source: Distribution, target: Distribution) -> pd.DataFrame:
    """
    Convert every tier of ``source`` into ``target``.

    Returns:
        DataFrame with one row per source tier; tiers without an equivalent
        have ``tier`` set to None
    """
    rows = []
    for entry in source:
        outcome = convert_rank(source, entry.tier, target)
        if isinstance(outcome, NoEquivalentRank):
            rows.append({
                "source_tier": outcome.source_tier,
                "source_percentile": outcome.source_percentile,
                "tier": None,
                "tier_percentile": None,
                "within_tier_percentile": None,
            })
        else:
            rows.append({
                "source_tier": outcome.source_tier,
                "source_percentile": outcome.source_percentile,
                "tier": outcome.tier,
                "tier_percentile": outcome.tier_percentile,
                "within_tier_percentile": outcome.within_tier_percentile,
            })

    logger.info(f"Built equivalence table for {len(rows)} tiers "
                f"({source.game or 'source'} -> {target.game or 'target'})")
    # object dtype keeps None (no equivalent) from being inferred away as NaN
    return pd.DataFrame(rows, columns=["source_tier", "source_percentile", "tier",
                                       "tier_percentile", "within_tier_percentile"],
                        dtype=object)
