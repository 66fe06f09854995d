#!/usr/bin/env python3
"""
Rank distribution builder.

Turns scraped "<tier> <percentage>%" lines into a cumulative percentile curve
whose shares sum to exactly 100. Published percentages are rounded for
display, so the raw total is rarely 100; the residual is spread over the tiers
in proportion to their share.

All percentage arithmetic uses ``decimal.Decimal``.
"""

import logging
import re
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from .distribution import Distribution, TierEntry
from .errors import DuplicateTierError, EmptyDistributionError, ParseError

logger = logging.getLogger(__name__)

HUNDRED = Decimal(100)

# Label text (may hold digits, e.g. "Iron 1" or "Top 500"), whitespace, then a
# decimal number immediately followed by '%' that ends the line. A merged cell
# such as "Iron 1 5.00% Iron 2 7.10%" must not match.
LINE_PATTERN = re.compile(r"^(?P<tier>.+?)\s+(?P<share>\d+(?:\.\d+)?)%\s*$")

# Scaled shares are quantized so every later sum stays exact within the
# default 28-digit context.
SHARE_QUANTUM = Decimal("1e-20")


def parse_lines(lines: Iterable[str]) -> List[TierEntry]:
    """
    Parse scraped lines into tier entries with a running cumulative percentile.

    Args:
        lines: Lines in skill-ascending order, e.g. ["Iron 1 10.00%", "Radiant 0.03%"]

    Returns:
        List of TierEntry in input order

    Raises:
        ParseError: If any line does not match; nothing is returned for the batch
        DuplicateTierError: If a tier label appears twice

    Example:
        >>> [e.cumulative_percentile for e in parse_lines(["Iron 1 10.00%", "Iron 2 5.00%"])]
        [Decimal('10.00'), Decimal('15.00')]
    """
    cumulative_percentile = Decimal(0)
    entries: List[TierEntry] = []
    seen = set()

    for line_number, line in enumerate(lines, start=1):
        match = LINE_PATTERN.match(line)
        if not match:
            logger.error(f'Could not parse line {line_number}: "{line}"')
            raise ParseError(line, line_number)

        tier = match.group("tier").strip()
        if not tier:
            logger.error(f'Missing tier label on line {line_number}: "{line}"')
            raise ParseError(line, line_number, reason="missing tier label")
        if tier in seen:
            logger.error(f"Duplicate tier '{tier}' on line {line_number}")
            raise DuplicateTierError(line, tier, line_number)
        seen.add(tier)

        rank_share = Decimal(match.group("share"))
        cumulative_percentile += rank_share
        entries.append(TierEntry(tier, rank_share, cumulative_percentile))

    logger.info(f"Parsed {len(entries)} tiers (raw total {cumulative_percentile}%)")
    return entries


def normalize_distribution(entries: List[TierEntry]) -> List[TierEntry]:
    """
    Redistribute rounding drift so the cumulative percentile ends at exactly 100.

    ``total_inaccuracy = 100 - last.cumulative_percentile`` is shared out in
    proportion to each tier's part of the raw total, so relative shares are
    preserved. Tier order is never changed. Whatever is left after quantizing
    the scaled shares is given to the largest tier.

    Args:
        entries: Parsed entries, lowest tier first

    Returns:
        New list of TierEntry whose last cumulative percentile == Decimal(100)

    Raises:
        EmptyDistributionError: If there are no entries or the shares total zero
    """
    if not entries:
        logger.error("Cannot normalize an empty distribution")
        raise EmptyDistributionError("Cannot normalize an empty distribution")

    raw_total = entries[-1].cumulative_percentile
    total_inaccuracy = HUNDRED - raw_total

    if total_inaccuracy == 0:
        logger.info("Percentages already sum to 100, no adjustment needed")
        return list(entries)

    if raw_total == 0:
        logger.error("Cannot normalize a distribution whose shares total zero")
        raise EmptyDistributionError("Cannot normalize a distribution whose shares total zero")

    shares = [
        (entry.rank_share + entry.rank_share * total_inaccuracy / raw_total).quantize(SHARE_QUANTUM)
        for entry in entries
    ]

    remainder = HUNDRED - sum(shares, Decimal(0))
    if remainder:
        largest = max(range(len(shares)), key=lambda i: shares[i])
        shares[largest] += remainder

    normalized: List[TierEntry] = []
    cumulative_percentile = Decimal(0)
    for entry, rank_share in zip(entries, shares):
        cumulative_percentile += rank_share
        normalized.append(TierEntry(entry.tier, rank_share, cumulative_percentile))

    logger.info(f"Adjusted percentages by {total_inaccuracy}% across {len(entries)} tiers")
    return normalized


def parse_and_build(lines: Iterable[str],
                    game: Optional[str] = None) -> Tuple[List[TierEntry], Distribution]:
    """
    Parse and normalize scraped lines, keeping the raw parsed entries.

    The raw entries are what the post-build summary compares against.
    Failures are logged and re-raised; no partial distribution is returned.

    Returns:
        Tuple of (raw entries as scraped, normalized Distribution)
    """
    label = game or "distribution"
    try:
        raw_entries = parse_lines(lines)
        entries = normalize_distribution(raw_entries)
    except (ParseError, EmptyDistributionError) as e:
        logger.error(f"❌ Failed to build {label}: {e}")
        raise

    distribution = Distribution(entries, game=game)
    logger.info(f"✅ Built {label} with {len(distribution)} tiers")
    return raw_entries, distribution


def build_distribution(lines: Iterable[str], game: Optional[str] = None) -> Distribution:
    """Parse and normalize scraped lines into a Distribution."""
    return parse_and_build(lines, game=game)[1]
