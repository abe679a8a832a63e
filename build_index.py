"""
Build the term/author/category/place indices for a news corpus.

Usage:
    python build_index.py data/docs data/index

Each input file is a JSON object (or a list of them), or a .jsonl file with one
object per line. Object keys are field names: fileid, title, content, author,
authororg, category, place, date.

Output (in the index directory):
  - term.idx, author.idx, category.idx, place.idx
  - idx.props   (N=<number of documents>)
"""

import argparse
import logging
import sys
from pathlib import Path

from newsindex.analysis import AnalyzerFactory
from newsindex.index_builder import IndexBuildError, build_index_from_files
from newsindex.posting import BATCH_SIZE
from newsindex.tokenizer import DEFAULT_DELIMITER, Tokenizer


def find_document_files(data_dir: Path) -> list[Path]:
    files = list(data_dir.rglob("*.json")) + list(data_dir.rglob("*.jsonl"))
    return sorted(files, key=lambda p: str(p))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build inverted indices for a news corpus")
    parser.add_argument("data_dir", type=Path, help="Directory holding JSON document files")
    parser.add_argument("index_dir", type=Path, help="Directory the index files are written to")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=BATCH_SIZE,
        help=f"Records per output line (default: {BATCH_SIZE})",
    )
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_DELIMITER,
        help="Regex the tokenizer splits field values on (default: whitespace)",
    )
    parser.add_argument(
        "--no-analyzers",
        action="store_true",
        help="Index tokens verbatim, without per-field normalization",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every document")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.data_dir.is_dir():
        print(f"No data folder found at {args.data_dir}")
        return 1
    files = find_document_files(args.data_dir)
    if not files:
        print(f"No JSON document files found in {args.data_dir}")
        return 1

    try:
        num_docs = build_index_from_files(
            files,
            args.index_dir,
            tokenizer=Tokenizer(args.delimiter),
            analyzer_factory=AnalyzerFactory.verbatim() if args.no_analyzers else None,
            batch_size=args.batch_size,
        )
    except IndexBuildError as e:
        print(f"Index build failed: {e}")
        return 1

    print(f"Indexed {num_docs} documents into {args.index_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
