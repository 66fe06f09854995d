#!/usr/bin/env python3
"""
Exceptions raised while building rank distributions and mapping ranks
between games.
"""

from typing import Optional


class RankDataError(Exception):
    """Base exception for rank distribution errors."""
    pass


class ParseError(RankDataError):
    """A scraped line does not match the '<tier> <percentage>%' pattern."""

    def __init__(self, line: str, line_number: Optional[int] = None, reason: Optional[str] = None):
        self.line = line
        self.line_number = line_number
        self.reason = reason or "does not match '<tier> <percentage>%'"

        location = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f'Could not parse line{location}: "{line}" - {self.reason}')


class DuplicateTierError(ParseError):
    """The same tier label appears twice in one distribution."""

    def __init__(self, line: str, tier: str, line_number: Optional[int] = None):
        self.tier = tier
        super().__init__(line, line_number, reason=f"duplicate tier '{tier}'")


class EmptyDistributionError(RankDataError):
    """Normalization was attempted on a distribution with no population."""
    pass


class UnknownTierError(RankDataError):
    """An equivalence lookup named a tier that the distribution does not contain."""

    def __init__(self, tier: str, game: Optional[str] = None):
        self.tier = tier
        self.game = game

        where = f" in {game}" if game else ""
        super().__init__(f"Unknown tier '{tier}'{where}")


class DistributionValidationError(RankDataError):
    """Stored distribution records fail schema validation."""
    pass
