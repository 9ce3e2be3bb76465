# core/indexing/build_pipeline.py
"""
Build pipeline: download -> compress -> load -> index -> manifest.
"""
import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional
from config import (
    VERSION, DEFAULT_COMIC_COUNT, INDEX_FIELDS,
    RAW_FILENAME, ARCHIVE_FILENAME, METADATA_FILENAME, INDEX_DIRNAME
)
from core.archive.comic_fetcher import ComicFetcher, FetchError
from core.archive.record_store import RecordStore
from core.indexing.index_builder import build_all_indexes
from core.utilities.archive_codec import ZstCodec

logger = logging.getLogger(__name__)

@dataclass
class BuildResult:
    total_comics: int
    archive_path: Path
    index_files: Dict[str, Path] = field(default_factory=dict)
    metadata_path: Optional[Path] = None
    elapsed: float = 0.0

def resolve_comic_count(fetcher: ComicFetcher, comic_count: Optional[int] = None) -> int:
    """Configured count, else the latest published number, else the default."""
    if comic_count is not None:
        return comic_count
    try:
        return fetcher.fetch_latest_number()
    except FetchError as e:
        logger.warning("Could not look up the latest comic (%s); using %d",
                       e, DEFAULT_COMIC_COUNT)
        return DEFAULT_COMIC_COUNT

def write_manifest(metadata_path: Path, total_comics: int) -> Path:
    metadata = {
        'total_comics': total_comics,
        'created_at': datetime.now().isoformat(timespec='seconds'),
        'version': VERSION,
        'index_fields': list(INDEX_FIELDS)
    }
    with open(metadata_path, 'w') as f:
        json.dump(metadata, f, indent=2)
    return metadata_path

def run_build(data_dir: Path, comic_count: Optional[int] = None,
              fetcher: Optional[ComicFetcher] = None,
              codec: Optional[ZstCodec] = None,
              progress: bool = True) -> BuildResult:
    """
    Create every file a search session needs under data_dir.

    The manifest is removed first and written last, so an interrupted build
    never looks complete.
    """
    start_time = time.time()
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    fetcher = fetcher or ComicFetcher()
    codec = codec or ZstCodec()

    metadata_path = data_dir / METADATA_FILENAME
    metadata_path.unlink(missing_ok=True)

    total = resolve_comic_count(fetcher, comic_count)
    logger.info("Building archive of %d comics in %s", total, data_dir)

    raw_path = data_dir / RAW_FILENAME
    written = fetcher.download(total, raw_path, progress=progress)

    archive_path = data_dir / ARCHIVE_FILENAME
    codec.compress_file(raw_path, archive_path)

    store = RecordStore.load(archive_path, written, codec=codec)
    index_files = build_all_indexes(store, data_dir / INDEX_DIRNAME)

    write_manifest(metadata_path, len(store))

    return BuildResult(
        total_comics=len(store),
        archive_path=archive_path,
        index_files=index_files,
        metadata_path=metadata_path,
        elapsed=time.time() - start_time
    )
