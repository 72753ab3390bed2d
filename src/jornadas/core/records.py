"""Record type and field tables - no I/O dependencies."""

import csv
import io
from dataclasses import dataclass, fields

from .errors import ParseError, SchemaError, UnknownFieldError, ValidationError

# On-disk key -> attribute name, in the fixed serialization order.
FIELD_KEYS: dict[str, str] = {
    "proyecto": "project",
    "fecha": "date",
    "ubicacion": "location",
    "arbitro": "referee",
    "estado": "status",
    "resultado": "result",
    "descripcion": "description",
}

REQUIRED_ATTRS = ("project", "date", "location", "referee", "status", "description")
EDITABLE_ATTRS = ("status", "result", "description")

DEFAULT_STATUSES = ["Pendiente", "En curso", "Completado", "Suspendido", "Aplazado"]

_KEYS_BY_ATTR = {attr: key for key, attr in FIELD_KEYS.items()}


@dataclass
class Record:
    """One jornada entry.

    Values are ``None`` only for records read from files that omit a key.
    """

    project: str | None
    date: str | None
    location: str | None
    referee: str | None
    status: str | None
    result: str | None = ""
    description: str | None = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        """Create Record from a JSON object keyed by on-disk names."""
        return cls(**{attr: _text(data.get(key)) for key, attr in FIELD_KEYS.items()})

    def to_dict(self) -> dict[str, str | None]:
        """On-disk representation with keys in the fixed order."""
        return {key: getattr(self, attr) for key, attr in FIELD_KEYS.items()}

    def get(self, field_name: str) -> str | None:
        return getattr(self, resolve_field(field_name))

    def values(self) -> list[str | None]:
        return [getattr(self, f.name) for f in fields(self)]

    def missing_required(self) -> list[str]:
        """On-disk keys of required fields that are empty."""
        return [_KEYS_BY_ATTR[attr] for attr in REQUIRED_ATTRS if not (getattr(self, attr) or "").strip()]

    def stripped(self) -> "Record":
        """Copy with surrounding whitespace removed from every value."""
        return Record(**{f.name: _strip(getattr(self, f.name)) for f in fields(self)})


def _text(value) -> str | None:
    if value is None or isinstance(value, str):
        return value
    # JSON true/false keep their JSON spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


def resolve_field(name: str) -> str:
    """Map an on-disk key or an attribute name to the attribute name."""
    if name in FIELD_KEYS:
        return FIELD_KEYS[name]
    if name in _KEYS_BY_ATTR:
        return name
    raise UnknownFieldError(name)


def disk_key(name: str) -> str:
    """Map an on-disk key or an attribute name to the on-disk key."""
    return _KEYS_BY_ATTR[resolve_field(name)]


def validate_new(record: Record) -> Record:
    """Strip and validate a record for insertion. Returns the cleaned copy."""
    cleaned = record.stripped()
    missing = cleaned.missing_required()
    if missing:
        raise ValidationError(
            f"All fields except resultado are required. Empty: {', '.join(missing)}",
            missing,
        )
    return cleaned


def missing_keys(obj) -> list[str]:
    """On-disk keys absent from a parsed JSON element."""
    if not isinstance(obj, dict):
        return list(FIELD_KEYS)
    return [key for key in FIELD_KEYS if key not in obj]


def records_to_csv(records: list[Record]) -> str:
    """Comma-separated export: header of on-disk keys, one row per record."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(FIELD_KEYS)
    for record in records:
        writer.writerow(["" if v is None else v for v in record.to_dict().values()])
    return buf.getvalue()


def records_from_csv(text: str) -> list[Record]:
    """Parse a comma-separated export back into records."""
    reader = csv.DictReader(io.StringIO(text), strict=True)
    try:
        header = reader.fieldnames or []
        missing = [key for key in FIELD_KEYS if key not in header]
        if missing:
            raise SchemaError(f"CSV header is missing columns: {', '.join(missing)}", missing)
        rows = [Record.from_dict({k: row.get(k) or "" for k in FIELD_KEYS}) for row in reader]
    except csv.Error as e:
        raise ParseError(f"Malformed CSV: {e}") from e

    records = []
    for number, record in enumerate(rows, start=1):
        try:
            records.append(validate_new(record))
        except ValidationError as e:
            raise ValidationError(f"CSV row {number}: {e}", e.fields) from e
    return records
