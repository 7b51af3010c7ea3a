from abczed.buffer.document import LineStore, span_end


def test_insert_row_bounds() -> None:
    store = LineStore.from_lines(["a", "b"])

    assert store.insert_row(2, "c") is True
    assert store.insert_row(5, "x") is False
    assert store.insert_row(-1, "x") is False

    assert store.snapshot() == ("a", "b", "c")
    assert store.dirty == 1


def test_insert_row_shifts_following_rows() -> None:
    store = LineStore.from_lines(["a", "b"])

    store.insert_row(0, "z")

    assert store.snapshot() == ("z", "a", "b")


def test_delete_row_bounds() -> None:
    store = LineStore.from_lines(["a", "b", "c"])

    assert store.delete_row(3) is None
    assert store.delete_row(1) == "b"
    assert store.snapshot() == ("a", "c")
    assert store.dirty == 1


def test_row_length_outside_store_is_zero() -> None:
    store = LineStore.from_lines(["hello"])

    assert store.row_length(0) == 5
    assert store.row_length(1) == 0
    assert store.row_length(-1) == 0


def test_split_and_join_rows() -> None:
    store = LineStore.from_lines(["hello world"])

    assert store.split_row(0, 5) is True
    assert store.snapshot() == ("hello", " world")
    assert store.join_rows(0) == 5
    assert store.snapshot() == ("hello world",)
    assert store.join_rows(0) is None
    assert store.split_row(0, 12) is False


def test_split_row_with_explicit_suffix() -> None:
    store = LineStore.from_lines(["abcdef"])

    store.split_row(0, 3, suffix="xyz")

    assert store.snapshot() == ("abc", "xyz")


def test_character_edits_reject_invalid_columns() -> None:
    store = LineStore.from_lines(["abc"])

    assert store.insert_text(0, 4, "x") is False
    assert store.insert_text(0, 3, "d") is True
    assert store.delete_text(0, 4) is None
    assert store.delete_text(0, 0, 2) == "ab"
    assert store.snapshot() == ("cd",)
    assert store.dirty == 2


def test_mark_clean_and_reset() -> None:
    store = LineStore.from_lines(["a"])
    store.insert_text(0, 1, "b")
    assert store.modified is True

    store.mark_clean()
    assert store.modified is False

    store.insert_row(1, "c")
    store.reset(["x"])
    assert store.snapshot() == ("x",)
    assert store.dirty == 0


def test_delete_span_across_rows_returns_removed_text() -> None:
    store = LineStore.from_lines(["abc", "def", "ghi"])

    assert store.delete_span(0, 1, 2, 1) == "bc\ndef\ng"
    assert store.snapshot() == ("ahi",)
    assert store.dirty == 1


def test_delete_span_within_one_row() -> None:
    store = LineStore.from_lines(["hello world"])

    assert store.delete_span(0, 0, 0, 6) == "hello "
    assert store.snapshot() == ("world",)


def test_delete_span_rejects_bad_ranges() -> None:
    store = LineStore.from_lines(["abc", "de"])

    assert store.delete_span(0, 2, 0, 1) is None
    assert store.delete_span(1, 0, 0, 0) is None
    assert store.delete_span(0, 0, 2, 0) is None
    assert store.delete_span(0, 4, 1, 0) is None
    assert store.snapshot() == ("abc", "de")
    assert store.dirty == 0


def test_insert_span_opens_rows_at_line_breaks() -> None:
    store = LineStore.from_lines(["ahi"])

    assert store.insert_span(0, 1, "bc\ndef\ng") is True
    assert store.snapshot() == ("abc", "def", "ghi")
    assert store.insert_span(3, 0, "x") is False


def test_span_end() -> None:
    assert span_end(0, 1, "bc") == (0, 3)
    assert span_end(0, 1, "bc\ndef\ng") == (2, 1)
    assert span_end(4, 2, "\n") == (5, 0)
