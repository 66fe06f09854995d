#!/usr/bin/env python3
"""
Scraped Text Normalizer

Cleans the text content scraped from rank statistics pages into one
"<tier> <percentage>%" line per rank band, ready for the distribution builder.
Stats pages wrap labels over several lines and some render two bands in a
single table cell, so both are undone here.
"""

import re
from typing import Iterable, List, Optional


CELL_SEPARATOR = "% "


def collapse_whitespace(text: str) -> str:
    """
    Collapse newlines and runs of whitespace into single spaces.

    Example:
        >>> collapse_whitespace("  Gold\\n 2   12.40%  ")
        'Gold 2 12.40%'
    """
    if not text or not isinstance(text, str):
        return ""

    return re.sub(r"\s+", " ", text).strip()


def split_rank_cells(texts: Iterable[str]) -> List[str]:
    """
    Split cells that hold two rank bands into separate lines.

    Only the first separator is used, matching how the stats page pairs
    bands two per cell.

    Example:
        >>> split_rank_cells(["Iron 1 5.00% Iron 2 7.10%", "Radiant 0.03%"])
        ['Iron 1 5.00%', 'Iron 2 7.10%', 'Radiant 0.03%']
    """
    lines: List[str] = []

    for text in texts:
        first, separator, second = text.partition(CELL_SEPARATOR)
        if separator and second:
            lines.append(first + "%")
            lines.append(second)
        elif first:
            lines.append(text)

    return lines


def prepare_lines(texts: Iterable[str], header: Optional[str] = None,
                  split_cells: bool = False) -> List[str]:
    """
    Turn raw scraped text into distribution builder input.

    Steps:
    1. Collapse whitespace in every text
    2. Drop blank texts
    3. Drop a leading header line if it matches ``header``
    4. Optionally split cells holding two bands

    Args:
        texts: Raw text content of the scraped elements, lowest tier first
        header: Header text to discard when it is the first line
        split_cells: Whether cells may hold two rank bands

    Returns:
        Cleaned lines in the original order
    """
    lines = [collapse_whitespace(text) for text in texts]
    lines = [line for line in lines if line]

    if header is not None and lines and lines[0] == collapse_whitespace(header):
        lines = lines[1:]

    if split_cells:
        lines = split_rank_cells(lines)

    return lines
