#!/usr/bin/env python3
"""
Test suite for distribution CSV export and import
"""

import pytest
from decimal import Decimal

from rank_equivalence.analytics.distribution_builder import build_distribution
from rank_equivalence.analytics.errors import DistributionValidationError
from rank_equivalence.io.distribution_store import (
    distribution_path,
    load_distribution,
    save_distribution,
)
from rank_equivalence.io.safe_write import checksum_path, read_checksum_file, verify_file_integrity


class TestDistributionStore:
    """Test cases for saving and loading distributions"""

    def test_distribution_path(self, tmp_path):
        """Test the per-game file naming"""
        assert distribution_path(tmp_path, "valorant") == tmp_path / "valorant.csv"

    def test_save_and_load_round_trip(self, tmp_path):
        """Test that exact decimals survive a round trip"""
        distribution = build_distribution(["A 33.33%", "B 33.33%", "C 33.33%"], game="valorant")
        path = distribution_path(tmp_path / "nested", "valorant")

        info = save_distribution(distribution, path)
        loaded = load_distribution(path)

        assert path.exists()
        assert not path.with_suffix(".tmp").exists()
        assert verify_file_integrity(path, info["checksum"])
        assert loaded.game == "valorant"
        assert loaded.entries == distribution.entries
        assert loaded.last.cumulative_percentile == Decimal(100)
        assert read_checksum_file(path) == info["checksum"]

    def test_load_with_explicit_game(self, tmp_path, sample_lines):
        """Test that a game name can override the file stem"""
        path = tmp_path / "export.csv"
        save_distribution(build_distribution(sample_lines), path)

        assert load_distribution(path, game="league").game == "league"

    def test_load_edited_file_fails(self, tmp_path, sample_lines):
        """Test that a file changed after saving is rejected even if still well formed"""
        path = tmp_path / "league.csv"
        save_distribution(build_distribution(sample_lines, game="league"), path)

        path.write_text(
            "tier,rank_share,cumulative_percentile\n"
            "Iron 1,50.00,50.00\n"
            "Bronze 1,50.00,100.00\n",
            encoding="utf-8",
        )

        with pytest.raises(DistributionValidationError, match="Checksum mismatch"):
            load_distribution(path)

    def test_load_without_checksum_sidecar(self, tmp_path, sample_lines):
        """Test that a hand-written file with no sidecar is still accepted"""
        path = tmp_path / "league.csv"
        save_distribution(build_distribution(sample_lines, game="league"), path)
        checksum_path(path).unlink()

        assert load_distribution(path).tiers == ["Iron 1", "Iron 2", "Bronze 1"]

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file is reported"""
        with pytest.raises(FileNotFoundError):
            load_distribution(tmp_path / "missing.csv")

    def test_load_unnormalized_file_fails(self, tmp_path):
        """Test that a stored curve not ending at 100 is rejected"""
        path = tmp_path / "bad.csv"
        path.write_text(
            "tier,rank_share,cumulative_percentile\n"
            "A,49.50,49.50\n"
            "B,49.50,99.00\n",
            encoding="utf-8",
        )

        with pytest.raises(DistributionValidationError):
            load_distribution(path)

    def test_load_invalid_decimal_fails(self, tmp_path):
        """Test that non-numeric percentages are rejected"""
        path = tmp_path / "bad.csv"
        path.write_text(
            "tier,rank_share,cumulative_percentile\n"
            "A,fifty,50\n"
            "B,50,100\n",
            encoding="utf-8",
        )

        with pytest.raises(DistributionValidationError):
            load_distribution(path)

    def test_load_missing_column_fails(self, tmp_path):
        """Test that a file without the record columns is rejected"""
        path = tmp_path / "bad.csv"
        path.write_text("tier,share\nA,100\n", encoding="utf-8")

        with pytest.raises(DistributionValidationError):
            load_distribution(path)


if __name__ == "__main__":
    pytest.main([__file__])
