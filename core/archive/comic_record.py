# core/archive/comic_record.py
"""
Comic metadata record, as served by xkcd's info.0.json endpoints.
"""
import json
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

UNKNOWN_NUMBER = -1  # Sort key for an empty month/year/day
NUMBER_RANGE = (-2**63, 2**63 - 1)  # Index keys are int64


class RecordDecodeError(ValueError):
    """Raised when a stored line is not a structurally valid comic record."""
    pass


def parse_numeric_string(value: Any) -> Optional[int]:
    """
    Parse a text-encoded integer ("9", "2006", 7) to an int.

    Returns None for empty/unknown values. Raises ValueError for anything else
    that isn't an integer.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric string: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    return int(text)


def _in_range(value: int) -> bool:
    low, high = NUMBER_RANGE
    return low <= value <= high


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class ComicRecord:
    """One comic's metadata. Month, year and day keep the API's string encoding."""
    num: int = 0
    month: str = ""
    year: str = ""
    day: str = ""
    title: str = ""
    safe_title: str = ""
    alt: str = ""
    transcript: str = ""
    news: str = ""
    img: str = ""
    link: str = ""

    @classmethod
    def empty(cls) -> "ComicRecord":
        """Placeholder for a number that was never published (eg. 404)."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComicRecord":
        if not isinstance(data, dict):
            raise RecordDecodeError(f"Expected a JSON object, got {type(data).__name__}")

        num = data.get("num", 0)
        if isinstance(num, bool) or not isinstance(num, int):
            raise RecordDecodeError(f"Field 'num' must be an integer, got {num!r}")
        if not _in_range(num):
            raise RecordDecodeError(f"Field 'num' is out of range: {num}")

        values = {"num": num}
        for f in fields(cls):
            if f.name == "num":
                continue
            raw = data.get(f.name, "")
            if isinstance(raw, (dict, list)):
                raise RecordDecodeError(f"Field '{f.name}' must be text, got {raw!r}")
            values[f.name] = _as_text(raw)

        for name in ("month", "year", "day"):
            try:
                number = parse_numeric_string(values[name])
            except ValueError:
                raise RecordDecodeError(
                    f"Field '{name}' of comic {num} is not numeric: {values[name]!r}"
                )
            if number is not None and not _in_range(number):
                raise RecordDecodeError(
                    f"Field '{name}' of comic {num} is out of range: {values[name]!r}"
                )

        return cls(**values)

    @classmethod
    def from_json(cls, line: str) -> "ComicRecord":
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise RecordDecodeError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, sort_keys=True)

    @property
    def month_number(self) -> int:
        value = parse_numeric_string(self.month)
        return UNKNOWN_NUMBER if value is None else value

    @property
    def year_number(self) -> int:
        value = parse_numeric_string(self.year)
        return UNKNOWN_NUMBER if value is None else value

    @property
    def is_empty(self) -> bool:
        return self == ComicRecord.empty()

    @property
    def date_display(self) -> str:
        parts = [p for p in (self.year, self.month, self.day) if p]
        if len(parts) != 3:
            return "unknown date"
        return f"{self.year}-{int(self.month):02d}-{int(self.day):02d}"
