# ui/cli/menu_system/search_screen.py
import time
from config import PathConfig
from core.indexing.query_session import QuerySession
from core.utilities.setup_validator import is_setup_complete, validate_build
from ui.cli.console_utils import print_header, format_elapsed_time
from ui.cli.query_shell import QueryShell

def screen_search() -> int:
    """Load the session and hand over to the query prompt. Returns an exit code."""
    print_header("Comicdex - Search")

    if not is_setup_complete():
        print(f"\n  ❌ No finished build found in {PathConfig.DATA}")
        print("  Run 'comicdex build' first.")
        return 1

    is_valid, message = validate_build()
    if not is_valid:
        print(f"\n  ❌ Build in {PathConfig.DATA} is unusable: {message}")
        print("  Run 'comicdex build' to rebuild it.")
        return 1

    start_time = time.time()
    session = QuerySession.open(PathConfig.DATA)
    print(f"  ✅ {message}")
    print(f"  Loaded {len(session):,} comics in {format_elapsed_time(time.time() - start_time)}\n")

    QueryShell(session).run()
    return 0
