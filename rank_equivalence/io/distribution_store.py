#!/usr/bin/env python3
"""
CSV export and import of normalized distributions.

Decimals are written as their exact string form and read back as strings, so
a stored curve still sums to exactly 100 after a round trip.
"""

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

from rank_equivalence.analytics.distribution import RECORD_COLUMNS, Distribution
from rank_equivalence.analytics.errors import DistributionValidationError
from rank_equivalence.io.safe_write import read_checksum_file, safe_write_csv, verify_file_integrity
from rank_equivalence.schema.distribution_schema import validate_distribution_frame

logger = logging.getLogger(__name__)

DECIMAL_COLUMNS = ["rank_share", "cumulative_percentile"]


def distribution_path(data_dir: Union[str, Path], game: str) -> Path:
    """Path of the stored distribution for ``game``: ``<data_dir>/<game>.csv``."""
    return Path(data_dir) / f"{game}.csv"


def save_distribution(distribution: Distribution, path: Union[str, Path]) -> Dict[str, Union[str, int, Path]]:
    """
    Validate and atomically write a distribution to CSV, recording its MD5 in a
    ``<name>.md5`` sidecar.

    Returns:
        Write info from safe_write_csv (path, checksum, size_bytes, format)

    Raises:
        DistributionValidationError: If the distribution breaks the schema
    """
    df = validate_distribution_frame(distribution.to_dataframe())
    info = safe_write_csv(df, path, record_checksum=True)
    logger.info(f"✅ Saved {distribution.game or 'distribution'} ({len(distribution)} tiers) → {info['path']}")
    return info


def _to_decimal(value: str, column: str, row: int) -> Decimal:
    try:
        return Decimal(value.strip())
    except (InvalidOperation, AttributeError) as e:
        raise DistributionValidationError(
            f"Invalid decimal {value!r} in column '{column}' at row {row}"
        ) from e


def load_distribution(path: Union[str, Path], game: Optional[str] = None) -> Distribution:
    """
    Read a stored distribution CSV back into a Distribution.

    Args:
        path: CSV written by save_distribution
        game: Game name to attach (default: file stem)

    Raises:
        FileNotFoundError: If the file does not exist
        DistributionValidationError: If the file breaks the schema or no longer
            matches its recorded checksum
    """
    path = Path(path)
    if not path.exists():
        logger.error(f"Distribution file not found: {path}")
        raise FileNotFoundError(f"Distribution file not found: {path}")

    expected_checksum = read_checksum_file(path)
    if expected_checksum is not None and not verify_file_integrity(path, expected_checksum):
        logger.error(f"Checksum mismatch for {path}: expected MD5 {expected_checksum}")
        raise DistributionValidationError(f"Checksum mismatch for {path}; file changed since it was saved")

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        logger.error(f"Distribution file is empty: {path}")
        raise DistributionValidationError(f"Distribution file is empty: {path}") from e

    missing_cols = [col for col in RECORD_COLUMNS if col not in df.columns]
    if missing_cols:
        logger.error(f"Missing required columns in {path}: {missing_cols}")
        raise DistributionValidationError(f"Missing required columns in {path}: {missing_cols}")

    for column in DECIMAL_COLUMNS:
        df[column] = [_to_decimal(value, column, row) for row, value in enumerate(df[column])]

    df = validate_distribution_frame(df)

    distribution = Distribution.from_records(df.to_dict("records"), game=game or path.stem)
    logger.info(f"📂 Loaded {distribution.game} ({len(distribution)} tiers) from {path}")
    return distribution
