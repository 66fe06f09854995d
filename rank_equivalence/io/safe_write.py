#!/usr/bin/env python3
"""
Safe Write Operations with Atomic Writes and Checksums

Provides atomic file writing operations that write to temporary files first,
compute checksums, and then atomically rename to the final destination. The
checksum can be recorded in a ``<name>.md5`` sidecar so readers can detect a
file edited after it was written.
"""

import hashlib
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)


def compute_file_checksum(file_path: Path, algorithm: str = 'md5') -> str:
    """
    Compute checksum for a file.

    Args:
        file_path: Path to the file
        algorithm: Hash algorithm ('md5', 'sha1', 'sha256')

    Returns:
        Hexadecimal checksum string
    """
    hash_obj = hashlib.new(algorithm)

    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(4096), b""):
            hash_obj.update(chunk)

    return hash_obj.hexdigest()


def checksum_path(path: Union[str, Path]) -> Path:
    """Sidecar file holding the MD5 of ``path``: ``<name>.md5`` next to it."""
    path = Path(path)
    return path.with_name(f"{path.name}.md5")


def write_checksum_file(path: Union[str, Path], checksum: str) -> Path:
    """Atomically write ``checksum`` to the sidecar of ``path``."""
    sidecar = checksum_path(path)
    temp_path = sidecar.with_name(f"{sidecar.name}.tmp")
    temp_path.write_text(f"{checksum}  {Path(path).name}\n", encoding="utf-8")
    temp_path.replace(sidecar)
    return sidecar


def read_checksum_file(path: Union[str, Path]) -> Optional[str]:
    """
    Read the recorded checksum of ``path``.

    Returns:
        The hex digest, or None when no sidecar exists
    """
    sidecar = checksum_path(path)
    if not sidecar.exists():
        return None
    content = sidecar.read_text(encoding="utf-8").split()
    return content[0] if content else None


def safe_write_csv(df: pd.DataFrame, path: Union[str, Path],
                   log: Optional[logging.Logger] = None,
                   record_checksum: bool = False) -> Dict[str, Union[str, int, Path]]:
    """
    Safely write DataFrame to CSV with atomic operation and checksum.

    Args:
        df: pandas DataFrame to write
        path: Destination file path
        log: Optional logger instance (default: module logger)
        record_checksum: Also write the MD5 to a ``<name>.md5`` sidecar

    Returns:
        Dictionary with path, checksum, and size information

    Raises:
        OSError: If the write or rename fails; the temporary file is removed
    """
    log = log or logger

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temporary file in the same directory so the rename stays atomic
    temp_path = path.with_suffix('.tmp')

    try:
        log.debug(f"Writing CSV to temporary file: {temp_path}")
        df.to_csv(temp_path, index=False, encoding="utf-8")

        checksum = compute_file_checksum(temp_path)
        size_bytes = temp_path.stat().st_size

        temp_path.replace(path)

        if record_checksum:
            write_checksum_file(path, checksum)

        log.info(f"💾 Wrote CSV: {path} ({size_bytes:,} bytes, MD5: {checksum})")

        return {
            "path": path,
            "checksum": checksum,
            "size_bytes": size_bytes,
            "format": "csv"
        }

    except Exception as e:
        if temp_path.exists():
            temp_path.unlink()
        log.error(f"❌ Failed to write CSV to {path}: {e}")
        raise


def verify_file_integrity(file_path: Path, expected_checksum: str,
                          algorithm: str = 'md5') -> bool:
    """
    Verify file integrity by comparing checksums.

    Args:
        file_path: Path to the file to verify
        expected_checksum: Expected checksum value
        algorithm: Hash algorithm used

    Returns:
        True if checksums match, False otherwise
    """
    file_path = Path(file_path)
    if not file_path.exists():
        return False

    return compute_file_checksum(file_path, algorithm) == expected_checksum
