# ui/cli/menu_system/build_screen.py
import logging
from config import PathConfig
from core.archive.comic_fetcher import ComicFetcher
from core.indexing.build_pipeline import run_build
from core.utilities.archive_codec import ZstCodec
from core.utilities.config_manager import config_manager
from ui.cli.console_utils import print_header, format_elapsed_time, format_file_size

logger = logging.getLogger(__name__)

def screen_build(comic_count=None) -> int:
    """Download the archive and build every index. Returns an exit code."""
    print_header("Comicdex - Build Archive")

    if comic_count is None:
        comic_count = config_manager.get_comic_count()

    fetcher = ComicFetcher(timeout=config_manager.get_request_timeout())
    codec = ZstCodec(level=config_manager.get_compression_level())

    if comic_count:
        print(f"\n  Downloading {comic_count:,} comics into {PathConfig.DATA}")
    else:
        print(f"\n  Downloading the full archive into {PathConfig.DATA}")

    result = run_build(PathConfig.DATA, comic_count=comic_count, fetcher=fetcher, codec=codec)

    print(f"\n  ✅ Archive built in {format_elapsed_time(result.elapsed)}")
    print(f"     • Comics stored: {result.total_comics:,}")
    print(f"     • Archive size: {format_file_size(result.archive_path.stat().st_size)}")
    for field, path in result.index_files.items():
        print(f"     • {field} index: {path.name}")
    return 0
