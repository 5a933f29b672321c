"""
Tests for the read-only word store.
"""
import pytest

from mushaf.errors import InvalidHandle, OutOfRange, StoreNotFound
from mushaf.store import (
    DB_FILENAME,
    WordStore,
    close_store,
    find_store,
    get_page_summary,
    get_page_words,
    open_store,
)

from conftest import EMPTY_MUSHAF_ID, MUSHAF_ID


class TestOpenStore:

    def test_explicit_path_opens(self, store_path):
        handle = open_store(store_path)
        try:
            assert not handle.closed
            assert handle.path == store_path
        finally:
            close_store(handle)

    def test_missing_explicit_path_raises_not_found(self, tmp_path):
        with pytest.raises(StoreNotFound):
            open_store(tmp_path / "absent.db")

    def test_no_candidate_raises_not_found(self, tmp_path):
        with pytest.raises(StoreNotFound):
            open_store(base_dir=tmp_path)

    def test_file_without_table_is_not_a_store(self, tmp_path):
        bogus = tmp_path / DB_FILENAME
        bogus.write_bytes(b"")
        with pytest.raises(StoreNotFound):
            open_store(bogus)

    def test_candidates_are_tried_in_order(self, tmp_path, store_path):
        (tmp_path / "data").mkdir()
        nested = tmp_path / "data" / DB_FILENAME
        nested.write_bytes(store_path.read_bytes())

        # data/quran_dev.db comes before ./quran_dev.db
        assert find_store(base_dir=tmp_path) == nested

    def test_opening_does_not_modify_the_file(self, store_path):
        before = store_path.read_bytes()
        handle = open_store(store_path)
        get_page_words(handle, MUSHAF_ID, 1)
        close_store(handle)
        assert store_path.read_bytes() == before

    def test_close_is_idempotent(self, store_path):
        handle = open_store(store_path)
        close_store(handle)
        close_store(handle)
        assert handle.closed


class TestQueries:

    @pytest.fixture
    def handle(self, store_path):
        handle = open_store(store_path)
        yield handle
        close_store(handle)

    def test_page_words_are_ordered(self, handle):
        words = get_page_words(handle, MUSHAF_ID, 1)
        keys = [(w.line_number, w.position_in_line) for w in words]
        assert len(words) == 45
        assert keys == sorted(keys)
        assert words[0].text == "w1-1-1"

    def test_unknown_edition_yields_empty_list(self, handle):
        assert get_page_words(handle, EMPTY_MUSHAF_ID, 1) == []

    def test_summary_covers_al_fatiha(self, handle):
        summary = get_page_summary(handle, MUSHAF_ID, 1)
        assert summary.first_verse_id == 1
        assert summary.last_verse_id == 7
        assert summary.verse_count == 7

    def test_summary_of_empty_page_is_none(self, handle):
        assert get_page_summary(handle, EMPTY_MUSHAF_ID, 1) is None

    @pytest.mark.parametrize("page", [0, 605, -1])
    def test_out_of_range_page_rejected(self, handle, page):
        with pytest.raises(OutOfRange):
            get_page_words(handle, MUSHAF_ID, page)

    def test_closed_handle_is_invalid(self, store_path):
        handle = open_store(store_path)
        close_store(handle)
        with pytest.raises(InvalidHandle):
            get_page_words(handle, MUSHAF_ID, 1)
        with pytest.raises(InvalidHandle):
            get_page_summary(handle, MUSHAF_ID, 1)

    def test_none_handle_is_invalid(self):
        with pytest.raises(InvalidHandle):
            get_page_words(None, MUSHAF_ID, 1)


class TestWordStore:

    def test_open_reuses_handle(self, store_path):
        store = WordStore(store_path)
        first = store.open()
        second = store.open()

        assert first is second
        assert store.handles_opened == 1
        assert store.page_words(MUSHAF_ID, 1) == get_page_words(first, MUSHAF_ID, 1)
        store.close()

    def test_candidate_discovery_reuses_handle(self, tmp_path, store_path):
        store = WordStore(base_dir=tmp_path)
        store.open()
        store.open()
        assert store.handles_opened == 1
        assert store.is_open
        store.close()
        assert not store.is_open

    def test_reopen_after_close(self, store_path):
        store = WordStore(store_path)
        store.open()
        store.close()
        store.open()
        assert store.handles_opened == 2
        store.close()

    def test_disabled_store_never_opens(self, store_path):
        store = WordStore(store_path, enabled=False)
        assert not store.available()
        with pytest.raises(StoreNotFound):
            store.open()
        assert store.handles_opened == 0

    def test_available(self, tmp_path, store_path):
        assert WordStore(store_path).available()
        assert not WordStore(tmp_path / "missing.db").available()

    def test_out_of_range_does_not_open(self, store_path):
        store = WordStore(store_path)
        with pytest.raises(OutOfRange):
            store.page_words(MUSHAF_ID, 605)
        assert store.handles_opened == 0
