#!/usr/bin/env python3
"""
Distribution Schema Definition

Defines the canonical schema for normalized rank distribution records using
Pandera. Every distribution is validated against it before it is written and
after it is read back, so a corrupted curve never reaches an equivalence
lookup.
"""

import logging
from decimal import Decimal

import pandas as pd
import pandera as pa
from pandera.typing import DataFrame, Series

from rank_equivalence.analytics.errors import DistributionValidationError

logger = logging.getLogger(__name__)


def _is_decimal(value) -> bool:
    return isinstance(value, Decimal) and value.is_finite()


class DistributionSchema(pa.DataFrameModel):
    """
    Pandera schema for a normalized rank distribution.

    This schema enforces:
    - Unique, non-empty tier labels
    - Exact Decimal shares and percentiles (never floats)
    - A non-decreasing cumulative curve that is the running sum of the shares
    - A final cumulative percentile of exactly 100

    Fields:
    - tier: Rank tier label, lowest tier first
    - rank_share: Percentage of players in exactly this tier
    - cumulative_percentile: Percentage of players at or below this tier
    """

    tier: Series[str] = pa.Field(
        description="Rank tier label",
        unique=True,
        str_length={"min_value": 1},
    )

    rank_share: Series[object] = pa.Field(
        description="Percentage of players in this tier (Decimal)"
    )

    cumulative_percentile: Series[object] = pa.Field(
        description="Running sum of rank_share up to this tier (Decimal)"
    )

    class Config:
        """Pandera configuration."""
        coerce = True
        strict = True
        ordered = True

    @pa.check("rank_share")
    def non_negative_decimal_share(cls, series: Series[object]) -> Series[bool]:
        """Validate that shares are finite, non-negative Decimals."""
        return series.map(lambda v: _is_decimal(v) and v >= 0).astype(bool)

    @pa.check("cumulative_percentile")
    def decimal_percentile(cls, series: Series[object]) -> Series[bool]:
        """Validate that cumulative percentiles are finite Decimals."""
        return series.map(_is_decimal).astype(bool)

    @pa.dataframe_check
    def cumulative_is_running_sum(cls, df: DataFrame) -> Series[bool]:
        """Validate that each cumulative percentile is the running sum of shares."""
        running = Decimal(0)
        flags = []
        for share, cumulative in zip(df["rank_share"], df["cumulative_percentile"]):
            if not (_is_decimal(share) and _is_decimal(cumulative)):
                flags.append(False)
                continue
            running += share
            flags.append(cumulative == running)
        return pd.Series(flags, index=df.index, dtype=bool)

    @pa.dataframe_check
    def sums_to_hundred(cls, df: DataFrame) -> bool:
        """Validate that the last cumulative percentile is exactly 100."""
        if df.empty:
            return False
        last = df["cumulative_percentile"].iloc[-1]
        return _is_decimal(last) and last == Decimal(100)


def validate_distribution_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Validate a DataFrame of distribution records against DistributionSchema.

    Args:
        df: pandas DataFrame with tier, rank_share, cumulative_percentile columns

    Returns:
        Validated DataFrame

    Raises:
        DistributionValidationError: If validation fails
    """
    try:
        return DistributionSchema.validate(df)
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
        logger.error(f"Distribution schema validation failed: {e}")
        logger.error(f"DataFrame shape: {df.shape}, columns: {list(df.columns)}")

        if getattr(e, "failure_cases", None) is not None:
            logger.error(f"Failure cases:\n{e.failure_cases}")

        raise DistributionValidationError(f"Distribution schema validation failed: {e}") from e
