"""
Document model: the closed set of field names, the index types they feed,
and a simple multi-valued field container.
"""

from enum import Enum
from typing import Any, Mapping


class FieldName(Enum):
    FILE_ID = "fileid"
    TITLE = "title"
    CONTENT = "content"
    AUTHOR = "author"
    AUTHOR_ORG = "authororg"
    CATEGORY = "category"
    PLACE = "place"
    DATE = "date"

    @classmethod
    def parse(cls, name: str) -> "FieldName":
        """Look up a field by value or member name, ignoring case and underscores."""
        key = name.strip().lower().replace("_", "")
        for field in cls:
            if field.value == key:
                return field
        if key == "newsdate":
            return cls.DATE
        raise ValueError(f"Unknown field name: {name!r}")


class IndexType(Enum):
    TERM = "term"
    AUTHOR = "author"
    CATEGORY = "category"
    PLACE = "place"

    @property
    def filename(self) -> str:
        return f"{self.value}.idx"


# Field -> target index. Fields not listed (FILE_ID, AUTHOR_ORG) are never indexed.
FIELD_TO_INDEX: dict[FieldName, IndexType] = {
    FieldName.TITLE: IndexType.TERM,
    FieldName.CONTENT: IndexType.TERM,
    FieldName.DATE: IndexType.TERM,
    FieldName.AUTHOR: IndexType.AUTHOR,
    FieldName.CATEGORY: IndexType.CATEGORY,
    FieldName.PLACE: IndexType.PLACE,
}


class Document:
    """
    A parsed document: each field holds zero or more string values.
    Values keep the order in which they were set.
    """

    def __init__(self) -> None:
        self._fields: dict[FieldName, list[str]] = {}

    def set_field(self, name: FieldName, *values: str) -> None:
        self._fields[name] = list(values)

    def get_field(self, name: FieldName) -> list[str] | None:
        values = self._fields.get(name)
        if not values:
            return None
        return list(values)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Document":
        """
        Build a document from a plain mapping such as a decoded JSON object.
        Keys are field names; values are a string, a number or a list of those.
        Unknown keys are ignored.
        """
        doc = cls()
        for key, raw in data.items():
            try:
                name = FieldName.parse(key)
            except ValueError:
                continue
            if raw is None:
                continue
            values = raw if isinstance(raw, (list, tuple)) else [raw]
            doc.set_field(name, *(str(v) for v in values if v is not None))
        return doc

    def __repr__(self) -> str:
        fields = {f.name: v for f, v in self._fields.items()}
        return f"Document({fields!r})"
