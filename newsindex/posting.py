"""
Posting and inverted index data structures, plus the on-disk record format.

A posting records that a key occurred `frequency` times in one field pass of
a document. On disk each key becomes one record:

    key/postingCount:[fileId/freq, fileId/freq, ...]#

with keys and postings sorted by their string form, and records grouped
BATCH_SIZE to a line.
"""

from dataclasses import dataclass
from typing import IO, Iterator

# Records per output line
BATCH_SIZE = 1000

RECORD_SEPARATOR = "#"


@dataclass(frozen=True)
class Posting:
    """A (file_id, frequency) pair. Its string form is "file_id/frequency"."""

    file_id: int
    frequency: int

    def __str__(self) -> str:
        return f"{self.file_id}/{self.frequency}"

    @classmethod
    def parse(cls, text: str) -> "Posting":
        file_id, sep, frequency = text.strip().partition("/")
        if not sep:
            raise ValueError(f"Malformed posting: {text!r}")
        return cls(file_id=int(file_id), frequency=int(frequency))


class InvertedIndex:
    """
    Inverted index: map from key -> list of postings.
    Append-only add_posting (no duplicate check); the same (key, file_id)
    pair may appear more than once.
    """

    def __init__(self) -> None:
        self._index: dict[str, list[Posting]] = {}

    def add_posting(self, key: str, file_id: int, frequency: int) -> None:
        if key not in self._index:
            self._index[key] = []
        self._index[key].append(Posting(file_id=file_id, frequency=frequency))

    def get_postings(self, key: str) -> list[Posting]:
        """Return the list of postings for a key, or empty list."""
        return list(self._index.get(key, []))

    def keys(self) -> Iterator[str]:
        return iter(self._index)

    def clear(self) -> None:
        self._index.clear()

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def sorted_records(self) -> Iterator[str]:
        """Yield formatted records in key order."""
        for key in sorted(self._index):
            yield format_record(key, self._index[key])


def format_record(key: str, postings: list[Posting]) -> str:
    """Format one record; postings are sorted lexicographically by string form."""
    body = ", ".join(sorted(str(p) for p in postings))
    return f"{key}/{len(postings)}:[{body}]"


def parse_record(record: str) -> tuple[str, int, list[Posting]]:
    """Inverse of format_record: returns (key, posting_count, postings)."""
    open_at = record.rfind(":[")
    if open_at < 0 or not record.endswith("]"):
        raise ValueError(f"Malformed record: {record!r}")
    head, body = record[:open_at], record[open_at + 2 : -1]
    key, sep, count = head.rpartition("/")
    if not sep:
        raise ValueError(f"Malformed record header: {head!r}")
    postings = [Posting.parse(p) for p in body.split(", ")] if body else []
    if int(count) != len(postings):
        raise ValueError(f"Record {key!r} declares {count} postings, found {len(postings)}")
    return key, int(count), postings


def write_records(records: Iterator[str], out: IO[str], batch_size: int = BATCH_SIZE) -> int:
    """
    Write records to `out`, batch_size records per line, each record
    terminated by RECORD_SEPARATOR. Every completed line is flushed before
    the next batch is built. Returns the number of records written.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be > 0")
    batch: list[str] = []
    count = 0
    for record in records:
        batch.append(record + RECORD_SEPARATOR)
        count += 1
        if len(batch) == batch_size:
            out.write("".join(batch) + "\n")
            out.flush()
            batch = []
    if batch:
        out.write("".join(batch) + "\n")
        out.flush()
    return count


def split_records(line: str) -> list[str]:
    """Split one output line back into its records."""
    return [r for r in line.rstrip("\n").split(RECORD_SEPARATOR) if r]
