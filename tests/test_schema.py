#!/usr/bin/env python3
"""
Test suite for DistributionSchema validation
"""

import pytest
import pandas as pd
from decimal import Decimal

from rank_equivalence.analytics.distribution_builder import build_distribution
from rank_equivalence.analytics.errors import DistributionValidationError
from rank_equivalence.schema.distribution_schema import validate_distribution_frame


def _frame(tiers, shares, cumulative):
    return pd.DataFrame({
        "tier": tiers,
        "rank_share": [Decimal(v) for v in shares],
        "cumulative_percentile": [Decimal(v) for v in cumulative],
    })


class TestDistributionSchema:
    """Test cases for DistributionSchema validation"""

    def test_valid_distribution_passes(self, rounded_lines):
        """Test that a built distribution passes validation"""
        df = build_distribution(rounded_lines).to_dataframe()
        validated_df = validate_distribution_frame(df)

        assert len(validated_df) == 2
        assert list(validated_df.columns) == ["tier", "rank_share", "cumulative_percentile"]

    def test_total_not_hundred_fails(self):
        """Test that an unnormalized curve is rejected"""
        df = _frame(["A", "B"], ["49.50", "49.50"], ["49.50", "99.00"])

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)

    def test_duplicate_tier_fails(self):
        """Test that duplicate tier labels are rejected"""
        df = _frame(["A", "A"], ["50", "50"], ["50", "100"])

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)

    def test_running_sum_mismatch_fails(self):
        """Test that cumulative values must follow the shares"""
        df = _frame(["A", "B", "C"], ["20", "30", "50"], ["20", "60", "100"])

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)

    def test_negative_share_fails(self):
        """Test that negative shares are rejected"""
        df = _frame(["A", "B"], ["-10", "110"], ["-10", "100"])

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)

    def test_float_values_fail(self):
        """Test that binary floats are not accepted as percentages"""
        df = pd.DataFrame({
            "tier": ["A", "B"],
            "rank_share": [50.0, 50.0],
            "cumulative_percentile": [50.0, 100.0],
        })

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)

    def test_empty_frame_fails(self):
        """Test that a distribution without tiers is rejected"""
        df = _frame([], [], [])

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)

    def test_extra_column_fails(self):
        """Test that unexpected columns are rejected"""
        df = _frame(["A"], ["100"], ["100"])
        df["note"] = ["x"]

        with pytest.raises(DistributionValidationError):
            validate_distribution_frame(df)


if __name__ == "__main__":
    pytest.main([__file__])
