import io

import pytest

from newsindex.posting import (
    InvertedIndex,
    Posting,
    format_record,
    parse_record,
    split_records,
    write_records,
)


def test_posting_string_form():
    assert str(Posting(7, 2)) == "7/2"
    assert Posting.parse(" 7/2") == Posting(7, 2)


def test_inverted_index_appends_without_dedup():
    index = InvertedIndex()
    index.add_posting("oil", 1, 2)
    index.add_posting("oil", 1, 2)
    index.add_posting("gas", 3, 1)

    assert len(index) == 2
    assert "oil" in index
    assert index.get_postings("oil") == [Posting(1, 2), Posting(1, 2)]
    assert index.get_postings("coal") == []


def test_sorted_records_order_keys_and_postings():
    index = InvertedIndex()
    index.add_posting("b", 7, 2)
    index.add_posting("b", 10, 1)
    index.add_posting("a", 3, 1)
    assert list(index.sorted_records()) == ["a/1:[3/1]", "b/2:[10/1, 7/2]"]


def test_record_parses_back():
    record = format_record("smith|reuters", [Posting(7, 2), Posting(10, 1)])
    assert record == "smith|reuters/2:[10/1, 7/2]"
    assert parse_record(record) == ("smith|reuters", 2, [Posting(10, 1), Posting(7, 2)])


def test_parse_key_containing_slash():
    assert parse_record("3/4/1:[5/1]") == ("3/4", 1, [Posting(5, 1)])


@pytest.mark.parametrize("bad", ["oil", "oil/1:[1/1", "oil:[1/1]", "oil/2:[1/1]", "oil/1:[x]"])
def test_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_record(bad)


def test_write_records_batches_and_flushes():
    class Recorder(io.StringIO):
        flushes = 0

        def flush(self):
            self.flushes += 1
            super().flush()

    out = Recorder()
    n = write_records(iter(["r1", "r2", "r3", "r4", "r5"]), out, batch_size=2)

    assert n == 5
    assert out.getvalue() == "r1#r2#\nr3#r4#\nr5#\n"
    assert out.flushes == 3


def test_write_records_exact_multiple_has_no_empty_line():
    out = io.StringIO()
    write_records(iter(["r1", "r2"]), out, batch_size=2)
    assert out.getvalue() == "r1#r2#\n"


def test_write_records_empty_index():
    out = io.StringIO()
    assert write_records(iter([]), out) == 0
    assert out.getvalue() == ""


def test_split_records():
    assert split_records("a/1:[1/1]#b/1:[2/1]#\n") == ["a/1:[1/1]", "b/1:[2/1]"]


def test_default_batch_is_a_thousand_records_per_line():
    out = io.StringIO()
    write_records(iter(f"k{i}/1:[1/1]" for i in range(1001)), out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert len(split_records(lines[0])) == 1000
    assert split_records(lines[1]) == ["k1000/1:[1/1]"]
