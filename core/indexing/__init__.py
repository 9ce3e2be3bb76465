# core/indexing/__init__.py
"""
Indexing Package
"""
from .index_format import InvalidQueryError, ValueParseError
from .index_builder import build_index, build_all_indexes, write_index, IndexWriteError
from .index_loader import load_index, IndexParseError
from .range_search import RangeQueryEngine, OPERATORS
from .query_session import QuerySession

__all__ = [
    'InvalidQueryError',
    'ValueParseError',
    'build_index',
    'build_all_indexes',
    'write_index',
    'IndexWriteError',
    'load_index',
    'IndexParseError',
    'RangeQueryEngine',
    'OPERATORS',
    'QuerySession'
]
