"""In-memory record store.

Owns the record list and the unsaved-changes flag. Every operation either
commits fully or raises before touching the records.
"""

import json
import logging
from dataclasses import replace

from .errors import AmbiguousMatchError, NotFoundError, ParseError, SchemaError, ValidationError
from .records import EDITABLE_ATTRS, Record, disk_key, missing_keys, resolve_field, validate_new

logger = logging.getLogger(__name__)

SEARCH_ALL = "all"


class RecordStore:
    """Record list plus dirty tracking."""

    def __init__(self, records: list[Record] | None = None):
        self._records: list[Record] = list(records or [])
        self._dirty = False

    @property
    def records(self) -> list[Record]:
        """Copy of the current records."""
        return list(self._records)

    @property
    def dirty(self) -> bool:
        """True when the records changed since the last load or save."""
        return self._dirty

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> Record:
        return self._records[index]

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._records):
            raise IndexError(f"No record at position {index}")
        return index

    def mark_clean(self) -> None:
        self._dirty = False

    # ============== Persistence ==============

    def load(self, raw_text: str) -> list[Record]:
        """
        Parse a JSON document and replace the records with it.

        Raises ParseError for malformed JSON and SchemaError when the root is
        not an array or the first element lacks any of the seven keys.
        """
        if not raw_text or not raw_text.strip():
            raise ParseError("The file is empty.")
        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise ParseError(f"The file does not contain valid JSON: {e}") from e
        except RecursionError as e:
            raise ParseError("The JSON document is nested too deeply.") from e

        if not isinstance(data, list):
            raise SchemaError("The JSON document must contain an array of records.")

        if data:
            missing = missing_keys(data[0])
            if missing:
                raise SchemaError(
                    f"The JSON records do not have the expected structure. Missing fields: {', '.join(missing)}",
                    missing,
                )

        # Later elements are not checked; anything that is not an object reads as all-missing.
        records = [Record.from_dict(item if isinstance(item, dict) else {}) for item in data]
        self._records = records
        self._dirty = False
        logger.info(f"Loaded {len(records)} records")
        return self.records

    def serialize(self) -> str:
        """Pretty-printed JSON array with the fixed key order."""
        return json.dumps([r.to_dict() for r in self._records], indent=2, ensure_ascii=False)

    def replace_all(self, records: list[Record], dirty: bool = True) -> None:
        """Swap in a whole new record list."""
        self._records = list(records)
        self._dirty = dirty

    # ============== Mutations ==============

    def add(self, record: Record) -> Record:
        """Append a record after checking required fields. Returns the stored copy."""
        cleaned = validate_new(record)
        self._records.append(cleaned)
        self._dirty = True
        logger.debug(f"Added record {cleaned.project!r}")
        return cleaned

    def update_at(self, index: int, partial: Record | dict) -> Record:
        """
        Update the editable fields (status, result, description) of one record.

        Identity fields are always copied from the existing record, whatever
        the caller passes for them.
        """
        existing = self._records[self._check_index(index)]
        if isinstance(partial, Record):
            changes = {attr: getattr(partial, attr) for attr in EDITABLE_ATTRS}
        else:
            changes = {
                resolve_field(name): value
                for name, value in partial.items()
                if resolve_field(name) in EDITABLE_ATTRS
            }
        changes = {attr: value.strip() if isinstance(value, str) else value for attr, value in changes.items()}

        updated = replace(existing, **changes)
        empty = [disk_key(attr) for attr in ("status", "description") if not (getattr(updated, attr) or "").strip()]
        if empty:
            raise ValidationError(f"{' and '.join(empty)} are required.", empty)
        if updated.result is None:
            updated.result = ""

        self._records[index] = updated
        self._dirty = True
        logger.debug(f"Updated record {index} ({updated.project!r})")
        return updated

    def remove_at(self, index: int) -> Record:
        """Remove the record at a position and return it."""
        removed = self._records.pop(self._check_index(index))
        self._dirty = True
        logger.debug(f"Removed record {index} ({removed.project!r})")
        return removed

    # ============== Queries ==============

    def find_by_field(self, field_name: str, value: str) -> list[int]:
        """Indices of records whose field equals value exactly."""
        attr = resolve_field(field_name)
        return [i for i, r in enumerate(self._records) if getattr(r, attr) == value]

    def find_one(self, field_name: str, value: str) -> int:
        """Index of the single record whose field equals value."""
        indices = self.find_by_field(field_name, value)
        if not indices:
            raise NotFoundError(disk_key(field_name), value)
        if len(indices) > 1:
            raise AmbiguousMatchError(disk_key(field_name), value, indices)
        return indices[0]

    def filter(self, field_name: str, substring: str) -> list[Record]:
        """
        Case-insensitive substring search.

        field_name is a single field or "all" for any field. An empty term
        returns every record.
        """
        term = (substring or "").strip().lower()
        if not term:
            return self.records

        if field_name == SEARCH_ALL:
            return [
                r for r in self._records
                if any(v is not None and term in v.lower() for v in r.values())
            ]

        attr = resolve_field(field_name)
        return [
            r for r in self._records
            if getattr(r, attr) is not None and term in getattr(r, attr).lower()
        ]

