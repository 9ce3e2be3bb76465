# main.py
import sys
import logging
import argparse
from config import PathConfig, VERSION
from core.archive.comic_fetcher import FetchError
from core.archive.comic_record import RecordDecodeError
from core.indexing.index_loader import IndexParseError
from core.utilities.config_manager import config_manager

logger = logging.getLogger("comicdex")

# Errors that end a build or search session
FATAL_ERRORS = (OSError, FetchError, RecordDecodeError, IndexParseError)

def build_parser():
    parser = argparse.ArgumentParser(
        prog="comicdex",
        description="Fetch the xkcd archive, index it, and query it."
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {VERSION}")
    parser.add_argument(
        '--data-dir',
        help=f'Directory for the archive and indexes (default: {PathConfig.DATA})'
    )
    parser.add_argument(
        '--log-level',
        choices=config_manager.LOG_LEVELS,
        help='Logging verbosity (default: from config.json)'
    )

    subparsers = parser.add_subparsers(dest='mode', required=True)
    build = subparsers.add_parser('build', help='Download comics and build the indexes')
    build.add_argument(
        '--count',
        type=int,
        help='Number of comics to fetch (default: latest published)'
    )
    subparsers.add_parser('search', help='Query the indexed archive interactively')
    return parser

def configure_logging(level_name):
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

def main(argv=None) -> int:
    """Entry point for both modes."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or config_manager.get_log_level())

    if args.data_dir:
        PathConfig.set_data_dir(args.data_dir)

    if args.mode == 'build' and args.count is not None and args.count < 1:
        print("  ❌ --count must be at least 1")
        return 2

    try:
        if args.mode == 'build':
            from ui.cli.menu_system.build_screen import screen_build
            return screen_build(args.count)
        else:
            from ui.cli.menu_system.search_screen import screen_search
            return screen_search()
    except FATAL_ERRORS as e:
        logger.debug("Fatal error", exc_info=True)
        print(f"\n  ❗️ {args.mode.capitalize()} failed: {e}")
        return 1

def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nGoodbye!")
        sys.exit(0)

if __name__ == "__main__":
    run()
