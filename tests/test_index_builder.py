import pytest
from core.archive.comic_record import ComicRecord
from core.archive.record_store import RecordStore
from core.indexing.index_builder import (
    build_index, build_all_indexes, write_index, IndexWriteError
)
from core.indexing.index_format import InvalidQueryError, SORT_KEYS
from core.indexing.index_loader import load_index
from core.indexing.range_search import RangeQueryEngine

FIELDS = ("month", "num", "year", "title")


class TestBuildIndex:

    def test_month_is_numeric_with_num_tie_break(self, store):
        # 10 must come after 9; the empty placeholder sorts first
        assert build_index(store, "month").tolist() == [4, 0, 1, 2, 5, 3, 7, 6]

    def test_year_groups_by_year_then_num(self, store):
        assert build_index(store, "year").tolist() == [4, 0, 1, 7, 2, 3, 5, 6]

    def test_num_index_only_moves_the_placeholder(self, store):
        assert build_index(store, "num").tolist() == [4, 0, 1, 2, 3, 5, 6, 7]

    def test_title_is_case_sensitive_and_stable(self, store):
        # "Irony" twice keeps store order; "barrel" sorts after every capital
        assert build_index(store, "title").tolist() == [4, 0, 5, 6, 2, 3, 1, 7]

    @pytest.mark.parametrize("field", FIELDS)
    def test_is_a_sorted_permutation(self, store, field):
        positions = build_index(store, field).tolist()
        assert sorted(positions) == list(range(len(store)))

        key_of = SORT_KEYS[field]
        keys = [key_of(store[p]) for p in positions]
        assert keys == sorted(keys)

    @pytest.mark.parametrize("field", ["month", "year"])
    def test_ties_follow_ascending_num(self, store, field):
        key_of = SORT_KEYS[field]
        resolved = [store[p] for p in build_index(store, field)]
        for a, b in zip(resolved, resolved[1:]):
            if key_of(a) == key_of(b):
                assert a.num < b.num

    def test_does_not_reorder_the_store(self, store, sample_records):
        build_index(store, "title")
        assert list(store) == sample_records

    def test_title_with_trailing_nul_sorts_as_str(self):
        store = RecordStore([ComicRecord(num=1, title="a\x00"), ComicRecord(num=2, title="a")])
        titles = [store[p].title for p in build_index(store, "title")]
        assert titles == ["a", "a\x00"]
        engine = RangeQueryEngine(store)
        assert [r.num for r in engine.query(build_index(store, "title"), "title", "=", "a")] == [2]

    def test_empty_store(self):
        assert len(build_index(RecordStore([]), "year")) == 0

    def test_unknown_field(self, store):
        with pytest.raises(InvalidQueryError):
            build_index(store, "alt")

    def test_three_record_scenario(self, comic_factory):
        store = RecordStore([
            comic_factory(1, 2006, 1, 1, "a"),
            comic_factory(2, 2006, 1, 2, "b"),
            comic_factory(3, 2007, 1, 3, "c"),
        ])
        assert build_index(store, "year").tolist() == [0, 1, 2]


class TestPersistence:

    @pytest.mark.parametrize("field", FIELDS)
    def test_round_trip(self, tmp_path, store, field):
        positions = build_index(store, field)
        write_index(positions, tmp_path / f"{field}_index")
        loaded = load_index(field, len(store), tmp_path)
        assert loaded.tolist() == positions.tolist()

    def test_file_format(self, tmp_path, store):
        path = write_index(build_index(store, "year"), tmp_path / "year_index")
        assert path.read_text() == "4\n0\n1\n7\n2\n3\n5\n6\n"

    def test_build_all_indexes(self, tmp_path, store):
        written = build_all_indexes(store, tmp_path / "indexes")
        assert set(written) == set(FIELDS)
        for field, path in written.items():
            assert path.name == f"{field}_index"
            assert len(path.read_text().splitlines()) == len(store)

    def test_rebuild_is_byte_identical(self, tmp_path, store):
        first = build_all_indexes(store, tmp_path / "a")
        second = build_all_indexes(RecordStore(list(store)), tmp_path / "b")
        for field in FIELDS:
            assert first[field].read_bytes() == second[field].read_bytes()

    def test_unwritable_destination(self, tmp_path, store):
        blocker = tmp_path / "indexes"
        blocker.write_text("a file where the directory should be")
        with pytest.raises(IndexWriteError) as exc:
            build_all_indexes(store, blocker)
        assert isinstance(exc.value, IOError)
