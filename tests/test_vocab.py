"""Unit tests for the vocabulary store, merge table and helpers."""

import pytest

import bytepair as bp
from bytepair._progress import is_enabled
from bytepair._sanitise import render_bytes
from bytepair.errors import MergeError, VocabularyError
from bytepair.vocab import Merge, MergeTable, VocabularyStore


# Vocabulary store
# ---------------------------------------------------------------------------


def test_store_starts_with_bytes():
    """The store holds exactly the 256 single-byte tokens."""
    store = VocabularyStore()
    assert len(store) == 256
    assert store.lookup(0) == b"\x00"
    assert store.lookup(255) == b"\xff"
    assert store.lookup(256) is None


def test_store_add_next_id():
    """New entries take the next free id."""
    store = VocabularyStore()
    store.add(256, b"ab")

    assert len(store) == 257
    assert store.lookup(256) == b"ab"
    assert store[256] == b"ab"
    assert 256 in store


def test_store_rejects_out_of_order_id():
    """Ids must be assigned densely."""
    store = VocabularyStore()
    with pytest.raises(VocabularyError) as exc_info:
        store.add(300, b"ab")

    assert exc_info.value.invalid_tok == 300
    assert exc_info.value.vocab_size == 256
    assert len(store) == 256


def test_store_rejects_existing_id():
    """Existing entries cannot be overwritten."""
    store = VocabularyStore()
    with pytest.raises(VocabularyError):
        store.add(97, b"zz")
    assert store.lookup(97) == b"a"


@pytest.mark.parametrize("tok", [-1, 256, 10**9])
def test_store_lookup_absent(tok):
    """Unassigned ids are absent rather than errors."""
    store = VocabularyStore()
    assert store.lookup(tok) is None
    assert tok not in store
    with pytest.raises(KeyError):
        store[tok]


def test_store_items_in_id_order():
    """Iteration yields ids in ascending order."""
    store = VocabularyStore()
    store.add(256, b"ab")
    items = list(store.items())

    assert [tok for tok, _ in items] == list(range(257))
    assert items[-1] == (256, b"ab")


# Merge table
# ---------------------------------------------------------------------------


def test_merge_table_appends_in_order():
    """Rules keep the order they were appended in."""
    table = MergeTable()
    table.append(Merge(97, 97, 256))
    table.append(Merge(256, 98, 257))

    assert len(table) == 2
    assert list(table) == [Merge(97, 97, 256), Merge(256, 98, 257)]
    assert table[1].pair == (256, 98)


def test_merge_table_rejects_wrong_result_id():
    """A rule must produce 256 + its position."""
    table = MergeTable()
    with pytest.raises(MergeError) as exc_info:
        table.append(Merge(97, 97, 257))

    assert exc_info.value.merged_tok == 257
    assert exc_info.value.pair == (97, 97)
    assert len(table) == 0


def test_merge_table_rejects_forward_reference():
    """Operands must be created before the merged token."""
    table = MergeTable()
    with pytest.raises(MergeError):
        table.append(Merge(97, 256, 256))


# Error messages
# ---------------------------------------------------------------------------


def test_error_message_includes_context():
    """Context attributes are appended to the message."""
    err = bp.InvalidTargetError("vocab size must be greater than 256", vocab_size=100)
    assert str(err) == "vocab size must be greater than 256 (vocab size: 100)"


def test_error_message_without_context():
    """Messages without context are left as is."""
    assert str(VocabularyError("bad vocab")) == "bad vocab"


# Helpers
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"hello", "hello"),
        (b"a\nb", "a\\u000ab"),
        (b"\x00", "\\u0000"),
        (b"\xe6", "�"),
        (b"", ""),
    ],
)
def test_render_bytes(data, expected):
    """Control characters are escaped and invalid UTF-8 replaced."""
    assert render_bytes(data) == expected


def test_progress_toggle(monkeypatch):
    """Progress switch respects both the API and the environment variable."""
    monkeypatch.delenv("BYTEPAIR_DISABLE_PROGRESS", raising=False)
    try:
        bp.disable_progress()
        assert not is_enabled()
        bp.enable_progress()
        assert is_enabled()

        monkeypatch.setenv("BYTEPAIR_DISABLE_PROGRESS", "1")
        assert not is_enabled()
    finally:
        bp.enable_progress()
