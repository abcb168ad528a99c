"""
Positional field mapping between store representations and BookRecord
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
from pydantic import ValidationError
from schemas.book import BookRecord
from core.exceptions import ParseError

FIELD_NAMES = ("id", "name")


def decode_fields(fields: Sequence[Any], row_number: Optional[int] = None) -> BookRecord:
    """
    Map (id, name) by position onto a BookRecord.

    Raises:
        ParseError: Wrong field count, non-numeric id or missing name
    """
    if len(fields) != len(FIELD_NAMES):
        raise ParseError(
            f"Expected {len(FIELD_NAMES)} fields, got {len(fields)}",
            context={"row_number": row_number, "fields": list(fields)}
        )

    try:
        return BookRecord(**dict(zip(FIELD_NAMES, fields)))
    except ValidationError as e:
        raise ParseError(
            "Fields do not form a valid book",
            context={"row_number": row_number, "fields": list(fields)},
            original_exception=e
        )


def encode_fields(record: BookRecord) -> List[Any]:
    """Inverse of decode_fields."""
    return [record.id, record.name]


def decode_document(document: Mapping[str, Any]) -> BookRecord:
    """Map a stored document onto a BookRecord, ignoring store metadata."""
    missing = [f for f in FIELD_NAMES if f not in document]
    if missing:
        raise ParseError(
            "Document is missing book fields",
            context={"document_id": str(document.get("_id")), "missing": missing}
        )
    return decode_fields([document[f] for f in FIELD_NAMES])


def encode_document(record: BookRecord) -> Dict[str, Any]:
    return dict(zip(FIELD_NAMES, encode_fields(record)))
