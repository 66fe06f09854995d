#!/usr/bin/env python3
"""
Pytest configuration and fixtures
"""

import pytest
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from rank_equivalence.analytics.distribution import Distribution, TierEntry


def make_distribution(game, cumulative_points):
    """Build a Distribution from (tier, cumulative percentile) pairs."""
    entries = []
    previous = Decimal(0)
    for tier, cumulative in cumulative_points:
        cumulative = Decimal(str(cumulative))
        entries.append(TierEntry(tier, cumulative - previous, cumulative))
        previous = cumulative
    return Distribution(entries, game=game)


@pytest.fixture
def distribution_factory():
    """Factory building distributions from cumulative percentiles"""
    return make_distribution


@pytest.fixture
def sample_lines():
    """Scraped lines that already sum to exactly 100"""
    return ["Iron 1 10.00%", "Iron 2 5.00%", "Bronze 1 85.00%"]


@pytest.fixture
def rounded_lines():
    """Scraped lines whose display rounding leaves them 1% short"""
    return ["Silver 1 49.50%", "Silver 2 49.50%"]


@pytest.fixture
def valorant_cells():
    """Raw valorant stats table cells, two rank bands per cell"""
    return [
        "Iron 1 10.00%\n  Iron 2 15.00%",
        "Gold 1   25.00% Gold 2 25.00%",
        "Radiant 24.00%",
    ]


@pytest.fixture
def league_cells():
    """Raw league stats rows with a leading header row"""
    return [
        "Tier % of Players",
        "Bronze 20.00%",
        "Silver 30.00%",
        "Gold 30.00%",
        "Challenger 20.00%",
    ]


@pytest.fixture
def source_distribution():
    """Source game curve: 50th and 100th percentile tiers"""
    return make_distribution("source", [("S1", "50.00"), ("S2", "100.00")])


@pytest.fixture
def target_distribution():
    """Target game curve with a 40 -> 60 middle band"""
    return make_distribution("target", [("T1", "40.00"), ("T2", "60.00"), ("T3", "100.00")])


@pytest.fixture
def config_file(tmp_path):
    """App config pointing DATA_DIR into a temporary directory"""
    data_dir = tmp_path / "distributions"
    config_path = tmp_path / "app_conf.yaml"
    config_path.write_text(
        "LOGGING:\n"
        "  LEVEL: INFO\n"
        f"DATA_DIR: {data_dir.as_posix()}\n"
        "GAMES:\n"
        "  valorant:\n"
        "    DISPLAY_NAME: Valorant\n"
        "    HEADER: null\n"
        "    SPLIT_CELLS: true\n"
        "  league:\n"
        "    DISPLAY_NAME: League of Legends\n"
        "    HEADER: \"Tier % of Players\"\n"
        "    SPLIT_CELLS: false\n",
        encoding="utf-8",
    )
    return config_path
