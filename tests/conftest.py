import pytest

from newsindex.analysis import AnalyzerFactory
from newsindex.document import Document, FieldName
from newsindex.index_builder import IndexBuilder


def make_doc(file_id, **fields) -> Document:
    """Build a document; keyword names are FieldName members in lower case."""
    doc = Document()
    doc.set_field(FieldName.FILE_ID, str(file_id))
    for name, value in fields.items():
        values = value if isinstance(value, list) else [value]
        doc.set_field(FieldName[name.upper()], *values)
    return doc


@pytest.fixture
def index_dir(tmp_path):
    return tmp_path / "index"


@pytest.fixture
def verbatim_builder(index_dir) -> IndexBuilder:
    """Builder that indexes tokens exactly as the tokenizer produces them."""
    return IndexBuilder(index_dir, analyzer_factory=AnalyzerFactory.verbatim())
