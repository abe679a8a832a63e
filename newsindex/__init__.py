"""News corpus inverted index package."""

from .tokenizer import Token, TokenStream, Tokenizer, TokenizationError, tokenize
from .analysis import Analyzer, AnalyzerFactory
from .document import Document, FieldName, IndexType
from .posting import Posting, InvertedIndex
from .index_builder import IndexBuilder, IndexBuildError, build_index_from_files
from .reader import IndexReader
