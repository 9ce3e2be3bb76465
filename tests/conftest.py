import pytest
from core.archive.comic_record import ComicRecord
from core.archive.record_store import RecordStore
from core.indexing.build_pipeline import write_manifest
from core.indexing.index_builder import build_all_indexes


def make_comic(num, year, month, day, title, **extra):
    return ComicRecord(
        num=num,
        year=str(year),
        month=str(month),
        day=str(day),
        title=title,
        safe_title=title,
        img=f"https://imgs.xkcd.com/comics/{num}.png",
        **extra
    )


@pytest.fixture
def sample_records():
    """
    Eight store positions covering the awkward cases: an empty placeholder
    (position 4), month 9 vs 10, duplicate titles and case-sensitive titles.
    """
    return [
        make_comic(1, 2006, 1, 1, "Barrel - Part 1", alt="Don't we all."),
        make_comic(2, 2006, 1, 1, "Petit Trees (sketch)"),
        make_comic(3, 2007, 9, 30, "Island (sketch)"),
        make_comic(4, 2007, 10, 2, "Landscape (sketch)"),
        ComicRecord.empty(),
        make_comic(6, 2007, 9, 15, "Irony"),
        make_comic(7, 2008, 12, 24, "Irony"),
        make_comic(8, 2006, 10, 5, "barrel"),
    ]


@pytest.fixture
def store(sample_records):
    return RecordStore(sample_records)


@pytest.fixture
def data_dir(tmp_path, store):
    """A finished build on disk, as run_build would leave it."""
    RecordStore.write(store, tmp_path / "comics.jsonl.zst")
    build_all_indexes(store, tmp_path / "indexes")
    write_manifest(tmp_path / "metadata.json", len(store))
    return tmp_path


@pytest.fixture
def comic_factory():
    return make_comic
