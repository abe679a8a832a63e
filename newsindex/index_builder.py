"""
Index builder: turns documents into four inverted indices (term, author,
category, place) and writes them to an index directory on close().

A document is fully indexed the first time its file id is seen. Later calls
with the same file id only add its category values, which is how documents
filed under several categories arrive.
"""

import json
import logging
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .analysis import AnalyzerFactory
from .document import FIELD_TO_INDEX, Document, FieldName, IndexType
from .posting import BATCH_SIZE, RECORD_SEPARATOR, InvertedIndex, write_records
from .tokenizer import TokenizationError, Tokenizer, TokenStream

logger = logging.getLogger(__name__)

PROPS_FILE = "idx.props"
INDEX_FILES: dict[IndexType, str] = {t: t.filename for t in IndexType}

# Order in which index files are written on close
WRITE_ORDER = (IndexType.AUTHOR, IndexType.PLACE, IndexType.CATEGORY, IndexType.TERM)


class IndexBuildError(Exception):
    """Raised for invalid documents and for I/O failures while writing the index."""


@dataclass(frozen=True)
class FieldError:
    """A field value that could not be tokenized; ingestion went on without it."""

    file_id: int
    field: FieldName
    error: TokenizationError


class IndexBuilder:
    """
    Single-writer, single-pass index builder.

    Tokenizer and analyzer factory are passed in (defaults: whitespace
    tokenizer, default per-field analyzers). The builder cannot be reused
    after close().
    """

    def __init__(
        self,
        index_dir: Path | str,
        *,
        tokenizer: Tokenizer | None = None,
        analyzer_factory: AnalyzerFactory | None = None,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")
        self.index_dir = Path(index_dir)
        self.tokenizer = tokenizer or Tokenizer()
        self.analyzer_factory = analyzer_factory or AnalyzerFactory()
        self.batch_size = batch_size
        self.indices: dict[IndexType, InvertedIndex] = {t: InvertedIndex() for t in IndexType}
        self.seen: set[int] = set()
        self.errors: list[FieldError] = []
        self._author_org: str | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def add_document(self, doc: Document) -> None:
        """
        Index a document. The first call for a file id indexes every field;
        repeat calls only index the CATEGORY values.
        Raises IndexBuildError if FILE_ID is missing or not an integer.
        """
        self._check_open()
        file_id = _file_id_of(doc)
        self._author_org = None

        if file_id in self.seen:
            logger.debug("Reprocessing categories of document %d", file_id)
            self._index_field(doc, FieldName.CATEGORY, file_id)
            return

        orgs = doc.get_field(FieldName.AUTHOR_ORG)
        if orgs:
            self._author_org = _clean_qualifier(orgs[0]) or None

        for field in FieldName:
            if field in (FieldName.FILE_ID, FieldName.AUTHOR_ORG):
                continue
            self._index_field(doc, field, file_id)

        self.seen.add(file_id)
        self._author_org = None
        logger.debug("Indexed document %d", file_id)

    def _index_field(self, doc: Document, field: FieldName, file_id: int) -> None:
        values = doc.get_field(field)
        if values is None:
            return
        analyzer = self.analyzer_factory.analyzer_for(field)
        for value in values:
            try:
                stream = self.tokenizer.tokenize(value)
            except TokenizationError as exc:
                logger.warning("Skipping %s value of document %d: %s", field.name, file_id, exc)
                self.errors.append(FieldError(file_id=file_id, field=field, error=exc))
                continue
            if analyzer is not None:
                stream = analyzer.process(stream)
            self.accumulate(stream, field, file_id)

    def accumulate(self, stream: TokenStream, field: FieldName, file_id: int) -> None:
        """Count key frequencies in the stream and append one posting per key."""
        index_type = FIELD_TO_INDEX.get(field)
        if index_type is None:
            return
        index = self.indices[index_type]

        counts: Counter[str] = Counter()
        stream.reset()
        while stream.has_next():
            token = stream.next()
            if token is not None:
                counts[str(token)] += 1

        qualify = field is FieldName.AUTHOR and self._author_org is not None
        for key, count in counts.items():
            if qualify:
                key = f"{key}|{self._author_org}"
            index.add_posting(key, file_id, count)

    def close(self) -> int:
        """
        Write all four indices and idx.props, then release in-memory state.
        Returns the number of documents indexed.
        Raises IndexBuildError on any I/O failure; files already written stay,
        and in-memory state is kept so close() can be called again.
        """
        self._check_open()
        try:
            self.index_dir.mkdir(parents=True, exist_ok=True)
            for index_type in WRITE_ORDER:
                self._write_index(index_type)
            num_docs = len(self.seen)
            with open(self.index_dir / PROPS_FILE, "w", encoding="utf-8") as f:
                f.write(f"N={num_docs}\n")
        except OSError as exc:
            raise IndexBuildError(f"Could not write index to {self.index_dir}: {exc}") from exc

        logger.info("Index closed: %d documents in %s", num_docs, self.index_dir)
        for index in self.indices.values():
            index.clear()
        self.seen.clear()
        self._closed = True
        return num_docs

    def _write_index(self, index_type: IndexType) -> None:
        index = self.indices[index_type]
        path = self.index_dir / INDEX_FILES[index_type]
        with open(path, "w", encoding="utf-8") as f:
            n = write_records(index.sorted_records(), f, batch_size=self.batch_size)
        logger.info("Wrote %d %s records to %s", n, index_type.value, path)

    def _check_open(self) -> None:
        if self._closed:
            raise IndexBuildError("Index builder is already closed")


def _clean_qualifier(org: str) -> str:
    """Record separators and line breaks cannot appear inside an author key."""
    return " ".join(org.replace(RECORD_SEPARATOR, " ").split())


def _file_id_of(doc: Document) -> int:
    values = doc.get_field(FieldName.FILE_ID)
    if not values:
        raise IndexBuildError("Document has no FILE_ID")
    try:
        return int(values[0])
    except ValueError as exc:
        raise IndexBuildError(f"FILE_ID is not an integer: {values[0]!r}") from exc


def _read_documents(filepath: Path) -> list[Document]:
    """
    Read documents from a file.
    - .jsonl: one JSON object per line.
    - anything else: a single JSON object, or a list of objects.
    """
    filepath = Path(filepath)
    raw = filepath.read_text(encoding="utf-8")
    if filepath.suffix.lower() == ".jsonl":
        objs = [json.loads(line) for line in raw.splitlines() if line.strip()]
    else:
        data = json.loads(raw)
        objs = data if isinstance(data, list) else [data]
    return [Document.from_mapping(o) for o in objs]


def build_index_from_files(
    paths: Iterable[Path],
    index_dir: Path | str,
    *,
    tokenizer: Tokenizer | None = None,
    analyzer_factory: AnalyzerFactory | None = None,
    batch_size: int = BATCH_SIZE,
) -> int:
    """
    Build an index from JSON / JSONL document files and write it to index_dir.
    Files that cannot be read or decoded are skipped with a warning.
    Returns the number of documents indexed.
    """
    builder = IndexBuilder(
        index_dir,
        tokenizer=tokenizer,
        analyzer_factory=analyzer_factory,
        batch_size=batch_size,
    )
    for filepath in sorted(paths, key=lambda p: str(p)):
        try:
            docs = _read_documents(filepath)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s: %s", filepath, e)
            continue
        for doc in docs:
            try:
                builder.add_document(doc)
            except IndexBuildError as e:
                logger.warning("Skipping document in %s: %s", filepath, e)
    return builder.close()
