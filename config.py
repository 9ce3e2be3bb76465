# config.py
import tomllib
from pathlib import Path

def _get_version():
    """Read Comicdex's version from pyproject.toml"""
    try:
        pyproject_path = Path(__file__).parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"  # Fallback if pyproject.toml is missing

VERSION = _get_version()
FRAME_WIDTH = 70 # For CLI UI headings
DEFAULT_COMIC_COUNT = 2428 # Archive size when the latest number can't be looked up
MISSING_COMICS = {404} # Never published; stored as an empty record

# Fields that get a persisted index, in build order
INDEX_FIELDS = ("month", "num", "year", "title")

# File names inside the data directory
RAW_FILENAME = "comics.jsonl"
ARCHIVE_FILENAME = "comics.jsonl.zst"
METADATA_FILENAME = "metadata.json"
INDEX_DIRNAME = "indexes"

class PathConfig:
    BASE_DIR = Path(__file__).parent
    DATA = BASE_DIR / "data"

    @classmethod
    def set_data_dir(cls, path):
        """Point every data file at a different directory (eg. --data-dir)."""
        cls.DATA = Path(path).expanduser()

    @classmethod
    def get_raw_file(cls):
        """Uncompressed JSON lines straight from the fetcher"""
        return cls.DATA / RAW_FILENAME

    @classmethod
    def get_archive_file(cls):
        """Zstandard-compressed record blob"""
        return cls.DATA / ARCHIVE_FILENAME

    @classmethod
    def get_index_dir(cls):
        return cls.DATA / INDEX_DIRNAME

    @classmethod
    def get_index_file(cls, field):
        return cls.get_index_dir() / f"{field}_index"

    @classmethod
    def get_metadata_file(cls):
        return cls.DATA / METADATA_FILENAME

    @classmethod
    def get_all_required_files(cls):
        """Return all files a search session needs"""
        return [
            cls.get_archive_file(),
            cls.get_metadata_file(),
            *(cls.get_index_file(field) for field in INDEX_FIELDS)
        ]

    @classmethod
    def get_config_path(cls):
        return cls.BASE_DIR / "config.json"

class FetchConfig:
    """Where comic metadata comes from."""

    BASE_URL = "https://xkcd.com"
    URL_SUFFIX = "info.0.json"

    @classmethod
    def get_comic_url(cls, num: int) -> str:
        return f"{cls.BASE_URL}/{num}/{cls.URL_SUFFIX}"

    @classmethod
    def get_latest_url(cls) -> str:
        return f"{cls.BASE_URL}/{cls.URL_SUFFIX}"
