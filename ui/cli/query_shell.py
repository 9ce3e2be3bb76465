# ui/cli/query_shell.py
"""
Interactive query prompt for Comicdex.
Reads "<key> <operand> <value>" lines and prints the matching comics.
"""
import sys
from typing import Iterable, Optional, Tuple, TextIO
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory
from config import INDEX_FIELDS
from core.indexing.index_format import InvalidQueryError, ValueParseError
from core.indexing.query_session import QuerySession
from core.indexing.range_search import OPERATORS
from core.utilities.config_manager import config_manager
from ui.cli.console_utils import format_comic_display

EXIT_COMMANDS = {"quit", "exit", "q"}
NO_MATCH_MESSAGE = "No comics satisfy your search criteria"

def parse_query(line: str) -> Tuple[str, str, str]:
    """
    Split a query line into (field, operator, value).

    The value is every remaining word re-joined with single spaces, so
    titles don't need quoting: "title = 1/10,000th Scale World".
    """
    args = line.split()
    if len(args) < 3:
        raise InvalidQueryError(
            "Expected: [key] [operand] [value], eg. 'year = 2006'"
        )
    return args[0], args[1], " ".join(args[2:])

def print_usage(out: Optional[TextIO] = None):
    out = out if out is not None else sys.stdout
    print("Please query with the following format: [key] [operand] [value]", file=out)
    print(f"The acceptable keys are: {', '.join(INDEX_FIELDS)}", file=out)
    print(f"The acceptable operands are: {', '.join(OPERATORS)}", file=out)
    print("The value can be any string, NOT wrapped in quotation marks", file=out)
    print("Example: title = 1/10,000th Scale World", file=out)
    print("Type 'quit' to leave.", file=out)

class QueryShell:
    """Drives a QuerySession from line input."""

    def __init__(self, session: QuerySession, max_results: Optional[int] = None,
                 out: Optional[TextIO] = None):
        self.session = session
        self.max_results = max_results if max_results is not None else config_manager.get_max_results()
        self.out = out if out is not None else sys.stdout

    def handle_line(self, line: str) -> bool:
        """
        Run one query line and print its result.
        Returns False when the user asked to leave.
        """
        line = line.strip()
        if not line:
            return True
        if line.lower() in EXIT_COMMANDS:
            return False

        try:
            field, operator, value = parse_query(line)
            records = self.session.search(field, operator, value)
        except (InvalidQueryError, ValueParseError) as e:
            print(f"Error: {e}", file=self.out)
            return True

        if not records:
            print(NO_MATCH_MESSAGE, file=self.out)
            return True

        for record in records[:self.max_results]:
            print(format_comic_display(record), file=self.out)
        if len(records) > self.max_results:
            print(f"... showing {self.max_results:,} of {len(records):,} matches", file=self.out)
        else:
            print(f"{len(records):,} match{'es' if len(records) != 1 else ''}", file=self.out)
        return True

    def run_lines(self, lines: Iterable[str]):
        """Non-interactive loop, eg. queries piped through stdin."""
        for line in lines:
            if not self.handle_line(line):
                break

    def run(self):
        """Prompt until the user quits or closes input."""
        print_usage(self.out)

        if not sys.stdin.isatty():
            self.run_lines(sys.stdin)
            return

        completer = WordCompleter(list(INDEX_FIELDS) + list(OPERATORS), sentence=True)
        prompt = PromptSession(history=InMemoryHistory(), completer=completer)
        while True:
            try:
                line = prompt.prompt("> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_line(line):
                break
