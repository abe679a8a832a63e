"""
Reader for an index directory written by IndexBuilder.close().

Index files are small enough per type to be parsed on first use and kept
in memory; nothing is loaded until an index type is asked for.
"""

from pathlib import Path
from typing import Iterator

from .document import IndexType
from .index_builder import PROPS_FILE
from .posting import Posting, parse_record, split_records


def read_index_file(path: Path | str) -> Iterator[tuple[str, int, list[Posting]]]:
    """Yield (key, posting_count, postings) for every record in an index file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            for record in split_records(line):
                yield parse_record(record)


def read_document_count(path: Path | str) -> int:
    """Parse the N=<count> line of an idx.props file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            name, sep, value = line.strip().partition("=")
            if sep and name == "N":
                return int(value)
    raise ValueError(f"No document count in {path}")


class IndexReader:
    """
    Read-only view over the four index files and idx.props in index_dir.
    """

    def __init__(self, index_dir: Path | str) -> None:
        self.index_dir = Path(index_dir)
        if not self.index_dir.is_dir():
            raise FileNotFoundError(f"Index directory not found: {self.index_dir}")
        self._loaded: dict[IndexType, dict[str, list[Posting]]] = {}
        self._num_docs: int | None = None

    @property
    def document_count(self) -> int:
        if self._num_docs is None:
            self._num_docs = read_document_count(self.index_dir / PROPS_FILE)
        return self._num_docs

    def _load(self, index_type: IndexType) -> dict[str, list[Posting]]:
        if index_type not in self._loaded:
            path = self.index_dir / index_type.filename
            self._loaded[index_type] = {key: postings for key, _n, postings in read_index_file(path)}
        return self._loaded[index_type]

    def get_postings(self, index_type: IndexType, key: str) -> list[Posting]:
        """Return postings for key in the given index, or [] if absent."""
        return list(self._load(index_type).get(key, []))

    def keys(self, index_type: IndexType) -> list[str]:
        """Keys of one index, in the order they were written (sorted)."""
        return list(self._load(index_type))
