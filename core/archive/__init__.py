# core/archive/__init__.py
"""
Archive Package
"""
from .comic_record import ComicRecord, RecordDecodeError
from .comic_fetcher import ComicFetcher, FetchError
from .record_store import RecordStore, ArchiveTruncatedError

__all__ = [
    'ComicRecord',
    'RecordDecodeError',
    'ComicFetcher',
    'FetchError',
    'RecordStore',
    'ArchiveTruncatedError'
]
