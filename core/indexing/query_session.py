# core/indexing/query_session.py
"""
Query session: the record store plus every field's index, loaded once.
"""
import json
import logging
import numpy as np
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from config import INDEX_FIELDS, ARCHIVE_FILENAME, METADATA_FILENAME, INDEX_DIRNAME
from core.archive.comic_record import ComicRecord
from core.archive.record_store import RecordStore
from core.indexing.index_format import InvalidQueryError, check_field
from core.indexing.index_loader import IndexParseError, load_index
from core.indexing.range_search import RangeQueryEngine

logger = logging.getLogger(__name__)

def read_manifest(metadata_path: Path) -> dict:
    """Read the build manifest; raises IndexParseError if it's unusable."""
    metadata_path = Path(metadata_path)
    if not metadata_path.exists():
        raise FileNotFoundError(f"Build manifest not found: {metadata_path}")
    try:
        with open(metadata_path, 'r') as f:
            manifest = json.load(f)
    except json.JSONDecodeError as e:
        raise IndexParseError(f"Corrupt manifest {metadata_path.name}: {e}") from e

    total = manifest.get('total_comics') if isinstance(manifest, dict) else None
    if isinstance(total, bool) or not isinstance(total, int) or total < 0:
        raise IndexParseError(f"Manifest has no valid total_comics: {total!r}")
    return manifest

class QuerySession:
    """Read-only view over one build's records and indexes."""

    def __init__(self, store: Sequence[ComicRecord], indexes: Dict[str, np.ndarray]):
        self.store = store
        self.indexes = indexes
        self.engine = RangeQueryEngine(store)

    @classmethod
    def open(cls, data_dir: Path, fields: Optional[Sequence[str]] = None) -> "QuerySession":
        """
        Load everything a search needs from data_dir.
        Any failure propagates; a half-loaded session is never returned.
        """
        data_dir = Path(data_dir)
        manifest = read_manifest(data_dir / METADATA_FILENAME)
        total = manifest['total_comics']

        store = RecordStore.load(data_dir / ARCHIVE_FILENAME, total)
        indexes = {
            field: load_index(field, total, data_dir / INDEX_DIRNAME)
            for field in (fields or INDEX_FIELDS)
        }
        logger.info("Session ready: %d comics, indexes on %s", total, ", ".join(indexes))
        return cls(store, indexes)

    def __len__(self) -> int:
        return len(self.store)

    def search(self, field: str, operator: str, value: str) -> List[ComicRecord]:
        """
        Comics where field <operator> value, in the field's sort order.

        Raises:
            InvalidQueryError: Unknown field/operator, or field not loaded
            ValueParseError: value doesn't parse for field
        """
        check_field(field)
        index = self.indexes.get(field)
        if index is None:
            raise InvalidQueryError(f"No index loaded for '{field}'")
        return self.engine.query(index, field, operator, value)
