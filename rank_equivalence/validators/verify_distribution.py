"""
verify_distribution.py
----------------------
Post-build summary of a normalized rank distribution.

Compares the scraped (raw) entries with the normalized distribution so a run
log shows how far the published percentages were from 100 and which tier
absorbed the most correction.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from rank_equivalence.analytics.distribution import Distribution, TierEntry


def summarize_distribution(raw_entries: List[TierEntry], distribution: Distribution,
                           logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Summarize a normalized distribution against its raw scraped entries.

    Parameters
    ----------
    raw_entries : List[TierEntry]
        Entries as parsed, before normalization.
    distribution : Distribution
        The normalized distribution built from ``raw_entries``.
    logger : Optional[logging.Logger]
        If provided, the summary is logged.

    Returns
    -------
    Dict[str, Any]
        Summary dictionary containing:
        - game: Game name (or None)
        - tier_count: Number of tiers
        - raw_total: Sum of the scraped percentages
        - total_inaccuracy: 100 minus raw_total
        - largest_correction_tier: Tier whose share changed the most
        - largest_correction: Size of that change
        - zero_share_tiers: Tiers nobody occupies
        - top_tier: Highest tier
        - top_tier_share: Share of players in the highest tier
    """
    raw_total = raw_entries[-1].cumulative_percentile if raw_entries else Decimal(0)

    largest_correction_tier = None
    largest_correction = Decimal(0)
    for raw, normalized in zip(raw_entries, distribution):
        correction = abs(normalized.rank_share - raw.rank_share)
        if largest_correction_tier is None or correction > largest_correction:
            largest_correction_tier = raw.tier
            largest_correction = correction

    top_tier = distribution.last if len(distribution) else None

    summary = {
        "game": distribution.game,
        "tier_count": len(distribution),
        "raw_total": raw_total,
        "total_inaccuracy": Decimal(100) - raw_total,
        "largest_correction_tier": largest_correction_tier,
        "largest_correction": largest_correction,
        "zero_share_tiers": [entry.tier for entry in distribution if entry.rank_share == 0],
        "top_tier": top_tier.tier if top_tier else None,
        "top_tier_share": top_tier.rank_share if top_tier else None,
    }

    if logger:
        logger.info(f"📊 DISTRIBUTION SUMMARY ({distribution.game or 'unknown game'})")
        logger.info("=" * 50)
        logger.info(f"📈 Tiers: {summary['tier_count']}")
        logger.info(f"🧮 Raw total: {raw_total}% (inaccuracy {summary['total_inaccuracy']}%)")
        logger.info(f"🔧 Largest correction: {largest_correction_tier} ({largest_correction}%)")
        logger.info(f"🏆 Top tier: {summary['top_tier']} ({summary['top_tier_share']}%)")
        if summary["zero_share_tiers"]:
            logger.warning(f"⚠️ Tiers with zero share: {summary['zero_share_tiers']}")

    return summary
