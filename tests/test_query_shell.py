import io
import pytest
from core.indexing.index_format import InvalidQueryError
from core.indexing.query_session import QuerySession
from ui.cli.query_shell import QueryShell, parse_query, NO_MATCH_MESSAGE


class TestParseQuery:

    def test_simple(self):
        assert parse_query("year = 2006") == ("year", "=", "2006")

    def test_value_keeps_inner_words(self):
        assert parse_query("title = 1/10,000th  Scale   World") == (
            "title", "=", "1/10,000th Scale World"
        )

    def test_surrounding_whitespace(self):
        assert parse_query("   num >= 2  \n") == ("num", ">=", "2")

    @pytest.mark.parametrize("line", ["", "year", "year ="])
    def test_too_few_words(self, line):
        with pytest.raises(InvalidQueryError):
            parse_query(line)


@pytest.fixture
def shell(data_dir):
    out = io.StringIO()
    return QueryShell(QuerySession.open(data_dir), max_results=10, out=out), out


class TestQueryShell:

    def test_prints_matches(self, shell):
        shell, out = shell
        assert shell.handle_line("year = 2006") is True
        text = out.getvalue()
        assert "#1  Barrel - Part 1  (2006-01-01)" in text
        assert "#8  barrel" in text
        assert "3 matches" in text

    def test_no_match(self, shell):
        shell, out = shell
        shell.handle_line("year >= 2100")
        assert NO_MATCH_MESSAGE in out.getvalue()

    def test_placeholder_display(self, shell):
        shell, out = shell
        shell.handle_line("num <= 0")
        assert "no comic published" in out.getvalue()

    @pytest.mark.parametrize("line", ["author = me", "year > 2006", "year = soon", "title"])
    def test_bad_queries_are_reported_not_raised(self, shell, line):
        shell, out = shell
        assert shell.handle_line(line) is True
        assert out.getvalue().startswith("Error:")

    def test_result_cap(self, data_dir):
        out = io.StringIO()
        shell = QueryShell(QuerySession.open(data_dir), max_results=2, out=out)
        shell.handle_line("num >= 1")
        assert "showing 2 of 7 matches" in out.getvalue()
        shown = [line for line in out.getvalue().splitlines() if line.startswith("  #")]
        assert len(shown) == 2

    def test_run_lines_continues_after_errors(self, shell):
        shell, out = shell
        shell.run_lines(["bogus", "title = Irony", "quit", "year = 2006"])
        text = out.getvalue()
        assert "Error:" in text
        assert "#6  Irony" in text
        assert "#7  Irony" in text
        # nothing after quit
        assert "Barrel" not in text

    def test_blank_lines_ignored(self, shell):
        shell, out = shell
        assert shell.handle_line("   ") is True
        assert out.getvalue() == ""
