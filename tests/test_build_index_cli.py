import json

from build_index import main
from newsindex.document import IndexType
from newsindex.posting import Posting
from newsindex.reader import IndexReader


def _write_docs(data_dir):
    data_dir.mkdir()
    docs = [
        {"fileid": 1, "title": "Wheat Harvest", "category": "grain", "place": "canada"},
        {"fileid": 1, "category": "wheat"},
        {"fileid": 2, "content": "harvest delayed", "author": "Lee"},
    ]
    (data_dir / "docs.jsonl").write_text("\n".join(json.dumps(d) for d in docs), encoding="utf-8")


def test_cli_builds_index(tmp_path, capsys):
    _write_docs(tmp_path / "data")
    out_dir = tmp_path / "index"

    assert main([str(tmp_path / "data"), str(out_dir)]) == 0
    assert "Indexed 2 documents" in capsys.readouterr().out

    reader = IndexReader(out_dir)
    assert reader.document_count == 2
    assert reader.keys(IndexType.CATEGORY) == ["grain", "wheat"]
    assert reader.get_postings(IndexType.TERM, "harvest") == [Posting(1, 1), Posting(2, 1)]


def test_cli_verbatim_mode(tmp_path):
    _write_docs(tmp_path / "data")
    out_dir = tmp_path / "index"

    assert main([str(tmp_path / "data"), str(out_dir), "--no-analyzers", "--batch-size", "1"]) == 0
    assert IndexReader(out_dir).keys(IndexType.TERM) == ["Harvest", "Wheat", "delayed", "harvest"]


def test_cli_missing_data_dir(tmp_path):
    assert main([str(tmp_path / "missing"), str(tmp_path / "index")]) == 1


def test_cli_no_documents(tmp_path):
    (tmp_path / "data").mkdir()
    assert main([str(tmp_path / "data"), str(tmp_path / "index")]) == 1
