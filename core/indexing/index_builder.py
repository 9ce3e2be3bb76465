# core/indexing/index_builder.py
"""
Secondary Index Builder
=======================
Sorts a permutation of record positions by one field and writes it out.
The records themselves are never reordered.
"""
import logging
import numpy as np
from pathlib import Path
from typing import Dict, Optional, Sequence
from config import INDEX_FIELDS
from core.archive.comic_record import ComicRecord
from core.indexing.index_format import (
    SORT_KEYS, TIE_BREAK_BY_NUM, check_field, index_filename
)

logger = logging.getLogger(__name__)

class IndexWriteError(IOError):
    """Raised when an index file can't be created or written."""
    pass

def build_index(store: Sequence[ComicRecord], field: str) -> np.ndarray:
    """
    Return positions 0..N-1 ordered by field (ascending).

    month/year sort numerically with ties going to the lower comic number;
    num sorts by itself; title sorts by code point and keeps store order
    for equal titles (stable sort).
    """
    check_field(field)
    key_of = SORT_KEYS[field]
    n = len(store)
    if n == 0:
        return np.empty(0, dtype=np.int64)

    nums = np.fromiter((record.num for record in store), dtype=np.int64, count=n)

    if field == "num":
        order = np.argsort(nums, kind="stable")
    elif field in TIE_BREAK_BY_NUM:
        keys = np.fromiter((key_of(record) for record in store), dtype=np.int64, count=n)
        # lexsort: last key is primary
        order = np.lexsort((nums, keys))
    else:
        # object dtype compares as Python str; the fixed-width unicode
        # dtype ignores trailing NULs
        titles = np.array([key_of(record) for record in store], dtype=object)
        order = np.argsort(titles, kind="stable")

    return order.astype(np.int64, copy=False)

def write_index(positions: np.ndarray, path: Path) -> Path:
    """Write positions as newline-delimited decimal integers."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='ascii', newline='\n') as f:
            for position in positions:
                f.write(f"{int(position)}\n")
    except OSError as e:
        raise IndexWriteError(f"Failed to write index {path}: {e}") from e
    return path

def build_all_indexes(store: Sequence[ComicRecord], index_dir: Path,
                      fields: Optional[Sequence[str]] = None) -> Dict[str, Path]:
    """Build and persist one index per field. Returns field -> file path."""
    index_dir = Path(index_dir)
    written = {}
    for field in fields or INDEX_FIELDS:
        positions = build_index(store, field)
        written[field] = write_index(positions, index_dir / index_filename(field))
        logger.info("Wrote %s (%d positions)", written[field].name, len(positions))
    return written
