"""
Analytics module for the rank equivalence engine.

This module provides the distribution model, the builder that turns scraped
rank percentages into a normalized percentile curve, and the mapper that
converts a tier of one game into the equivalent tier of another.
"""

from .distribution import Distribution, TierEntry
from .distribution_builder import build_distribution, normalize_distribution, parse_and_build, parse_lines
from .equivalence_mapper import (
    EquivalenceResult,
    NoEquivalentRank,
    build_equivalence_table,
    convert_rank,
)
from .errors import (
    DistributionValidationError,
    DuplicateTierError,
    EmptyDistributionError,
    ParseError,
    RankDataError,
    UnknownTierError,
)

__all__ = [
    'Distribution',
    'TierEntry',
    'parse_lines',
    'normalize_distribution',
    'build_distribution',
    'parse_and_build',
    'convert_rank',
    'build_equivalence_table',
    'EquivalenceResult',
    'NoEquivalentRank',
    'RankDataError',
    'ParseError',
    'DuplicateTierError',
    'EmptyDistributionError',
    'UnknownTierError',
    'DistributionValidationError',
]
