# core/archive/comic_fetcher.py
"""Downloads comic metadata from xkcd.com's JSON endpoints."""
import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Optional
from tqdm import tqdm
from config import VERSION, FetchConfig, MISSING_COMICS
from core.archive.comic_record import ComicRecord, RecordDecodeError

logger = logging.getLogger(__name__)

class FetchError(Exception):
    """Raised when a comic can't be downloaded or decoded."""
    pass

class ComicFetcher:
    """Sequentially queries info.0.json for every comic number."""

    def __init__(self, timeout: float = 10):
        self.timeout = timeout
        self.headers = {
            'Accept': 'application/json',
            'User-Agent': f'Comicdex-{VERSION}'
        }

    def _get_json(self, url: str) -> dict:
        req = urllib.request.Request(url, headers=self.headers)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return json.loads(response.read().decode('utf-8'))
        except urllib.error.HTTPError as e:
            raise FetchError(f"{url} returned HTTP {e.code}")
        except (urllib.error.URLError, OSError) as e:
            raise FetchError(f"Could not reach {url}: {e}")
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FetchError(f"{url} did not return valid JSON: {e}")

    def fetch(self, num: int) -> ComicRecord:
        """Fetch one comic's metadata."""
        url = FetchConfig.get_comic_url(num)
        try:
            return ComicRecord.from_dict(self._get_json(url))
        except RecordDecodeError as e:
            raise FetchError(f"{url}: {e}")

    def fetch_latest_number(self) -> int:
        """Number of the most recently published comic."""
        data = self._get_json(FetchConfig.get_latest_url())
        num = data.get('num') if isinstance(data, dict) else None
        if isinstance(num, bool) or not isinstance(num, int) or num < 1:
            raise FetchError(f"Latest comic has no usable number: {num!r}")
        return num

    def download(self, count: int, raw_path: Path, progress: bool = True) -> int:
        """
        Write comics 1..count to raw_path as JSON lines, in number order.

        Numbers in MISSING_COMICS are not requested; an empty record takes
        their place so that line i always holds comic i + 1's slot.

        Returns:
            Number of lines written
        """
        raw_path = Path(raw_path)
        raw_path.parent.mkdir(parents=True, exist_ok=True)

        written = 0
        progress_bar = tqdm(total=count, unit='comics', disable=not progress)
        try:
            with open(raw_path, 'w', encoding='utf-8') as f:
                for num in range(1, count + 1):
                    if num in MISSING_COMICS:
                        # use empty record since nothing was published
                        record = ComicRecord.empty()
                    else:
                        record = self.fetch(num)
                    f.write(record.to_json() + "\n")
                    written += 1
                    progress_bar.update(1)
        finally:
            progress_bar.close()

        logger.info("Downloaded %d comics to %s", written, raw_path)
        return written
