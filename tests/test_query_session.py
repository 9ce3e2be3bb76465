import json
import pytest
from core.archive.record_store import ArchiveTruncatedError, RecordStore
from core.indexing.index_builder import build_index
from core.indexing.index_format import InvalidQueryError, ValueParseError
from core.indexing.index_loader import IndexParseError
from core.indexing.query_session import QuerySession, read_manifest


class TestOpen:

    def test_loads_store_and_all_indexes(self, data_dir, sample_records):
        session = QuerySession.open(data_dir)
        assert len(session) == len(sample_records)
        assert set(session.indexes) == {"month", "num", "year", "title"}

    def test_missing_manifest(self, data_dir):
        (data_dir / "metadata.json").unlink()
        with pytest.raises(FileNotFoundError):
            QuerySession.open(data_dir)

    def test_corrupt_manifest(self, data_dir):
        (data_dir / "metadata.json").write_text("{not json")
        with pytest.raises(IndexParseError):
            QuerySession.open(data_dir)

    def test_missing_index_is_fatal(self, data_dir):
        (data_dir / "indexes" / "title_index").unlink()
        with pytest.raises(FileNotFoundError):
            QuerySession.open(data_dir)

    def test_stale_index_is_fatal(self, data_dir, sample_records):
        # Archive and manifest grow by one comic; indexes do not
        RecordStore.write(sample_records + sample_records[:1], data_dir / "comics.jsonl.zst")
        (data_dir / "metadata.json").write_text(json.dumps({"total_comics": 9}))
        with pytest.raises(IndexParseError):
            QuerySession.open(data_dir)

    def test_short_archive_is_fatal(self, data_dir, sample_records):
        RecordStore.write(sample_records[:5], data_dir / "comics.jsonl.zst")
        with pytest.raises(ArchiveTruncatedError):
            QuerySession.open(data_dir)


class TestSearch:

    def test_search_by_year(self, data_dir):
        session = QuerySession.open(data_dir)
        assert [r.num for r in session.search("year", "=", "2007")] == [3, 4, 6]

    def test_search_from_fixture_data(self, store):
        session = QuerySession(store, {"num": build_index(store, "num")})
        assert [r.num for r in session.search("num", "<=", "1")] == [0, 1]

    def test_field_without_loaded_index(self, store):
        session = QuerySession(store, {})
        with pytest.raises(InvalidQueryError):
            session.search("title", "=", "Irony")

    def test_errors_are_recoverable(self, data_dir):
        session = QuerySession.open(data_dir)
        with pytest.raises(InvalidQueryError):
            session.search("colour", "=", "blue")
        with pytest.raises(ValueParseError):
            session.search("year", ">=", "last year")
        # session still usable afterwards
        assert len(session.search("title", "=", "Irony")) == 2


class TestReadManifest:

    @pytest.mark.parametrize("payload", [{}, {"total_comics": "8"}, {"total_comics": -1}, []])
    def test_rejects_bad_totals(self, tmp_path, payload):
        path = tmp_path / "metadata.json"
        path.write_text(json.dumps(payload))
        with pytest.raises(IndexParseError):
            read_manifest(path)
