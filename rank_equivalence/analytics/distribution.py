#!/usr/bin/env python3
"""
Rank distribution data model.

A distribution is the ordered ladder of tiers for one game, lowest skill
first, with each tier's share of the player population and the running
cumulative percentile up to and including that tier.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Optional

import pandas as pd

from .errors import DistributionValidationError, EmptyDistributionError, UnknownTierError


RECORD_COLUMNS = ["tier", "rank_share", "cumulative_percentile"]


@dataclass(frozen=True)
class TierEntry:
    """One tier of a game's rank distribution."""

    tier: str
    rank_share: Decimal
    cumulative_percentile: Decimal

    def to_record(self) -> Dict[str, Any]:
        return {
            "tier": self.tier,
            "rank_share": self.rank_share,
            "cumulative_percentile": self.cumulative_percentile,
        }


class Distribution:
    """
    Immutable, ordered sequence of TierEntry for a single game.

    Neighbour lookups go through ``previous``/``is_first``/``is_last`` so
    callers never do index arithmetic at the boundaries of the ladder.

    Attributes:
        game (str): Game the distribution belongs to (optional)
    """

    def __init__(self, entries: Iterable[TierEntry], game: Optional[str] = None):
        self.game = game
        self._entries = tuple(entries)
        self._positions: Dict[str, int] = {}

        for position, entry in enumerate(self._entries):
            if entry.tier in self._positions:
                raise DistributionValidationError(
                    f"Duplicate tier '{entry.tier}' in {game or 'distribution'}"
                )
            self._positions[entry.tier] = position

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TierEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> TierEntry:
        return self._entries[index]

    def __repr__(self) -> str:
        return f"Distribution(game={self.game!r}, tiers={len(self)})"

    @property
    def entries(self) -> List[TierEntry]:
        return list(self._entries)

    @property
    def tiers(self) -> List[str]:
        return [entry.tier for entry in self._entries]

    @property
    def first(self) -> TierEntry:
        if not self._entries:
            raise EmptyDistributionError(f"{self.game or 'Distribution'} has no tiers")
        return self._entries[0]

    @property
    def last(self) -> TierEntry:
        if not self._entries:
            raise EmptyDistributionError(f"{self.game or 'Distribution'} has no tiers")
        return self._entries[-1]

    def find(self, tier: str) -> TierEntry:
        """
        Look up a tier by exact label.

        Raises:
            UnknownTierError: If the tier is not part of this distribution
        """
        position = self._positions.get(tier)
        if position is None:
            raise UnknownTierError(tier, self.game)
        return self._entries[position]

    def __contains__(self, tier: object) -> bool:
        return tier in self._positions

    def is_first(self, entry: TierEntry) -> bool:
        return self._positions.get(entry.tier) == 0

    def is_last(self, entry: TierEntry) -> bool:
        return self._positions.get(entry.tier) == len(self._entries) - 1

    def previous(self, entry: TierEntry) -> Optional[TierEntry]:
        """Return the tier directly below ``entry``, or None for the lowest tier."""
        position = self._positions[entry.tier]
        if position == 0:
            return None
        return self._entries[position - 1]

    def first_at_or_above(self, percentile: Decimal) -> Optional[TierEntry]:
        """
        Scan from the lowest tier upward for the first entry whose cumulative
        percentile reaches ``percentile``.

        Returns:
            The matching entry, or None when ``percentile`` is beyond the
            top of the distribution
        """
        for entry in self._entries:
            if entry.cumulative_percentile >= percentile:
                return entry
        return None

    def to_records(self) -> List[Dict[str, Any]]:
        """Records for a keyed upsert by ``tier``, lowest tier first."""
        return [entry.to_record() for entry in self._entries]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.to_records(), columns=RECORD_COLUMNS)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]], game: Optional[str] = None) -> "Distribution":
        entries = [
            TierEntry(
                tier=str(record["tier"]),
                rank_share=Decimal(str(record["rank_share"])),
                cumulative_percentile=Decimal(str(record["cumulative_percentile"])),
            )
            for record in records
        ]
        return cls(entries, game=game)
