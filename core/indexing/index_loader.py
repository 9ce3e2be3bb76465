# core/indexing/index_loader.py
"""Reads persisted index permutations back into memory."""
import logging
import numpy as np
from pathlib import Path
from core.indexing.index_format import check_field, index_filename

logger = logging.getLogger(__name__)

class IndexParseError(ValueError):
    """Raised when an index file is malformed or doesn't match the archive."""
    pass

def load_index(field: str, expected_count: int, index_dir: Path) -> np.ndarray:
    """
    Load the permutation for field from index_dir.

    Args:
        field: Indexed field name (month, num, year, title)
        expected_count: Number of records in the archive (N)
        index_dir: Directory holding <field>_index files

    Returns:
        int64 array of N positions

    Raises:
        FileNotFoundError: Index file is missing
        IndexParseError: Non-integer line, wrong count, out-of-range or
                         duplicate position
    """
    check_field(field)
    path = Path(index_dir) / index_filename(field)
    if not path.exists():
        raise FileNotFoundError(f"Index file not found: {path}")

    with open(path, 'r', encoding='ascii', errors='replace') as f:
        lines = f.read().split("\n")

    # Trailing newline(s) leave empty strings at the end
    while lines and not lines[-1].strip():
        lines.pop()

    positions = np.empty(len(lines), dtype=np.int64)
    for line_no, line in enumerate(lines, 1):
        text = line.strip()
        if not text.isdigit():
            raise IndexParseError(f"{path.name} line {line_no}: not a position: {line!r}")
        positions[line_no - 1] = int(text)

    if len(positions) != expected_count:
        raise IndexParseError(
            f"{path.name} has {len(positions):,} positions, expected {expected_count:,}"
        )

    if expected_count:
        if positions.max() >= expected_count:
            raise IndexParseError(
                f"{path.name} references position {int(positions.max())} "
                f"outside [0, {expected_count})"
            )
        if len(np.unique(positions)) != expected_count:
            raise IndexParseError(f"{path.name} contains duplicate positions")

    logger.debug("Loaded %s (%d positions)", path.name, len(positions))
    return positions
