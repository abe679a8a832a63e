"""
Per-field analyzers and the factory that selects them.
Term fields (title, content) are accent-folded, stripped of symbols,
lowercased, stop-worded and Porter-stemmed (nltk). Metadata fields only get
light normalization so that names and places stay recognizable.
"""

import re
import unicodedata
from typing import Mapping

from nltk.stem import PorterStemmer

from .document import FieldName
from .tokenizer import Token, TokenStream

_STEMMER = PorterStemmer()

STOP_WORDS = frozenset(
    """
    a about above after again against all am an and any are as at be because
    been before being below between both but by can did do does doing down
    during each few for from further had has have having he her here hers
    herself him himself his how i if in into is it its itself just me more
    most my myself no nor not now of off on once only or other our ours
    ourselves out over own same she should so some such than that the their
    theirs them themselves then there these they this those through to too
    under until up very was we were what when where which while who whom why
    will with you your yours yourself yourselves
    """.split()
)

_NON_ALNUM = re.compile(r"[^\w]|_", re.UNICODE)
_EDGE_PUNCT = re.compile(r"^\W+|\W+$", re.UNICODE)


def strip_accents(text: str) -> str:
    """Fold accented characters to their base form (café -> cafe)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


class Analyzer:
    """
    Base analyzer. Subclasses override normalize(); a token whose normalized
    text is empty is dropped from the output stream.
    """

    def normalize(self, text: str) -> str:
        return text

    def process(self, stream: TokenStream) -> TokenStream:
        """Consume the whole stream from its start and return a new, normalized stream."""
        stream.reset()
        out: list[Token] = []
        while stream.has_next():
            token = stream.next()
            if token is None:
                continue
            text = self.normalize(token.text)
            if text:
                out.append(Token(text))
        return TokenStream(out)


class TermAnalyzer(Analyzer):
    """Full-text normalization for title and content."""

    def __init__(self, stop_words: frozenset[str] = STOP_WORDS, stem: bool = True) -> None:
        self.stop_words = stop_words
        self.stem = stem

    def normalize(self, text: str) -> str:
        text = _NON_ALNUM.sub("", strip_accents(text)).lower()
        if not text or text in self.stop_words:
            return ""
        if self.stem:
            return _STEMMER.stem(text)
        return text


class AuthorAnalyzer(Analyzer):
    def normalize(self, text: str) -> str:
        return _NON_ALNUM.sub("", strip_accents(text)).lower()


class LabelAnalyzer(Analyzer):
    """Category and place values: lowercase, trim surrounding punctuation."""

    def normalize(self, text: str) -> str:
        return _EDGE_PUNCT.sub("", text).lower()


class DateAnalyzer(Analyzer):
    """Dates keep digits and letters only, so "March 3," and "march 3" agree."""

    def normalize(self, text: str) -> str:
        return _NON_ALNUM.sub("", text).lower()


DEFAULT_ANALYZERS: dict[FieldName, type[Analyzer]] = {
    FieldName.TITLE: TermAnalyzer,
    FieldName.CONTENT: TermAnalyzer,
    FieldName.AUTHOR: AuthorAnalyzer,
    FieldName.CATEGORY: LabelAnalyzer,
    FieldName.PLACE: LabelAnalyzer,
    FieldName.DATE: DateAnalyzer,
}


class AnalyzerFactory:
    """
    Maps a field to its analyzer. Fields without an entry are indexed verbatim.
    Analyzers are stateless, so one instance per field is created and reused.
    """

    def __init__(self, analyzers: Mapping[FieldName, type[Analyzer] | Analyzer] | None = None) -> None:
        table = DEFAULT_ANALYZERS if analyzers is None else analyzers
        self._analyzers: dict[FieldName, Analyzer] = {
            field: a() if isinstance(a, type) else a for field, a in table.items()
        }

    @classmethod
    def verbatim(cls) -> "AnalyzerFactory":
        """A factory with no analyzers at all."""
        return cls({})

    def analyzer_for(self, field: FieldName) -> Analyzer | None:
        return self._analyzers.get(field)
