"""
Rank Equivalence

Converts a competitive-game rank into the equivalent rank of another game by
comparing the two games' rank distributions as cumulative percentile curves.
"""

__version__ = "1.0.0"
