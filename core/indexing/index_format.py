# core/indexing/index_format.py
"""
Comic Index Format Specifications
=================================

This module documents the on-disk layout of the secondary indexes used by
the query shell, and holds the per-field sort keys that both the builder
and the range search rely on.

A build produces the following files under the data directory:
1. comics.jsonl.zst   - Zstandard-compressed record archive
2. metadata.json      - Build manifest (record count, timestamp, version)
3. indexes/<field>_index - One permutation file per indexed field


File Structure: indexes/<field>_index
-------------------------------------

Plain ASCII, exactly N lines, each terminated by "\\n":

    <position>\\n
    <position>\\n
    ...

Each position is a decimal integer in [0, N) naming a line of the record
archive. Read top to bottom, the positions visit the records in ascending
order of the field. Every position appears exactly once.

Example for three comics with years 2007, 2006, 2006:

    1
    2
    0


Ordering Rules
--------------

- month, year: the text value is parsed to an integer before comparing
  ("10" sorts after "9"). Empty values sort first. Ties go to the lower
  comic number.
- num: plain integer order. The placeholder record for 404 has num 0 and
  therefore sorts first.
- title: case-sensitive code point order. Duplicate titles keep archive
  order; there is no further tie-break.


File Structure: metadata.json
-----------------------------

    {
      "total_comics": 2428,
      "created_at": "2026-10-17T12:00:00",
      "version": "0.3.0",
      "index_fields": ["month", "num", "year", "title"]
    }

The manifest is written last, so its presence marks a finished build.
"""
from typing import Any, Callable, Dict
from core.archive.comic_record import ComicRecord, parse_numeric_string, UNKNOWN_NUMBER


class InvalidQueryError(ValueError):
    """Raised for an unknown field or operator."""
    pass


class ValueParseError(ValueError):
    """Raised when a query value doesn't parse for the target field."""
    pass


def index_filename(field: str) -> str:
    return f"{field}_index"


# Record -> comparable key, per indexed field
SORT_KEYS: Dict[str, Callable[[ComicRecord], Any]] = {
    "month": lambda record: record.month_number,
    "num": lambda record: record.num,
    "year": lambda record: record.year_number,
    "title": lambda record: record.title,
}

# Fields whose ties are broken by ascending comic number
TIE_BREAK_BY_NUM = {"month", "year"}

NUMERIC_FIELDS = {"month", "num", "year"}


def check_field(field: str) -> str:
    if field not in SORT_KEYS:
        raise InvalidQueryError(
            f"Invalid key '{field}'. Choose from: {', '.join(SORT_KEYS)}"
        )
    return field


def parse_query_value(field: str, value: str) -> Any:
    """Convert raw query text to the same key type the index is sorted by."""
    check_field(field)
    if field not in NUMERIC_FIELDS:
        return value
    try:
        parsed = parse_numeric_string(value)
    except ValueError:
        raise ValueParseError(f"'{value}' is not a valid number for {field}")
    if parsed is None:
        if field == "num":
            raise ValueParseError("A comic number is required")
        return UNKNOWN_NUMBER
    return parsed
