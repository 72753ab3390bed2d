"""Functional core - pure record logic with no I/O."""

from .errors import (
    AmbiguousMatchError,
    JornadasError,
    LoadError,
    LookupFailure,
    NotFoundError,
    ParseError,
    SchemaError,
    SizeLimitError,
    UnknownFieldError,
    UnsupportedFileTypeError,
    ValidationError,
)
from .records import FIELD_KEYS, Record, records_from_csv, records_to_csv
from .store import SEARCH_ALL, RecordStore
from .view import Page, SortOrder, ViewState, page_records, project, sort_records

__all__ = [
    # Records
    "FIELD_KEYS",
    "Record",
    "records_from_csv",
    "records_to_csv",
    # Store
    "RecordStore",
    "SEARCH_ALL",
    # View
    "Page",
    "SortOrder",
    "ViewState",
    "page_records",
    "project",
    "sort_records",
    # Errors
    "JornadasError",
    "LoadError",
    "ParseError",
    "SchemaError",
    "SizeLimitError",
    "UnsupportedFileTypeError",
    "ValidationError",
    "UnknownFieldError",
    "LookupFailure",
    "NotFoundError",
    "AmbiguousMatchError",
]
