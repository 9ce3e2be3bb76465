# core/archive/record_store.py
"""
Immutable, position-addressable store of comic records.

The store is filled once from the compressed archive and never mutated.
Position i is the i-th line of the archive, which is also ascending comic
number order (apart from the empty placeholder for 404).
"""
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple
from core.archive.comic_record import ComicRecord, RecordDecodeError
from core.utilities.archive_codec import ZstCodec

logger = logging.getLogger(__name__)


class ArchiveTruncatedError(IOError):
    """Raised when the archive holds fewer records than the build produced."""
    pass


class RecordStore(Sequence):
    """Read-only sequence of ComicRecord, addressable by position 0..N-1."""

    def __init__(self, records: Iterable[ComicRecord]):
        self._records: Tuple[ComicRecord, ...] = tuple(records)

    @classmethod
    def load(cls, archive_path: Path, expected_count: int,
             codec: Optional[ZstCodec] = None) -> "RecordStore":
        """
        Load exactly expected_count records from a compressed archive.

        Raises:
            FileNotFoundError: Archive is missing
            ArchiveTruncatedError: Fewer than expected_count decodable lines
            RecordDecodeError: A line fails structural decoding
            CodecError: The Zstandard stream is corrupt
        """
        codec = codec or ZstCodec()
        records: List[ComicRecord] = []
        for line_no, line in enumerate(codec.read_lines(archive_path, limit=expected_count), 1):
            if not line.strip():
                break
            try:
                records.append(ComicRecord.from_json(line))
            except RecordDecodeError as e:
                raise RecordDecodeError(f"{Path(archive_path).name} line {line_no}: {e}") from e

        if len(records) < expected_count:
            raise ArchiveTruncatedError(
                f"Archive {Path(archive_path).name} holds {len(records):,} records, "
                f"expected {expected_count:,}"
            )

        logger.info("Loaded %d records from %s", len(records), archive_path)
        return cls(records)

    @staticmethod
    def write(records: Iterable[ComicRecord], archive_path: Path,
              codec: Optional[ZstCodec] = None) -> int:
        """Persist records as compressed JSON lines. Returns the record count."""
        codec = codec or ZstCodec()
        return codec.write_lines((record.to_json() for record in records), archive_path)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, position):
        return self._records[position]

    def __iter__(self) -> Iterator[ComicRecord]:
        return iter(self._records)

    def resolve(self, positions: Iterable[int]) -> List[ComicRecord]:
        """Map store positions to records, preserving order."""
        return [self._records[int(position)] for position in positions]
