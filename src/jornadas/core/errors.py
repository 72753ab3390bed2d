"""Error hierarchy for the record store.

Every error carries a message that can be shown to the user as-is.
"""


class JornadasError(Exception):
    """Base class for all recoverable record-manager errors."""


class LoadError(JornadasError):
    """A file could not be turned into a record list."""


class ParseError(LoadError):
    """The file content is not valid JSON (or CSV)."""


class SchemaError(LoadError):
    """The parsed document has the wrong shape or misses fields."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class SizeLimitError(LoadError):
    """The file is larger than the configured limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"File is too large ({size} bytes). Maximum is {limit // (1024 * 1024)} MB.")
        self.size = size
        self.limit = limit


class UnsupportedFileTypeError(LoadError):
    """The file does not have the expected extension."""


class ValidationError(JornadasError):
    """A record failed field validation."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class UnknownFieldError(ValidationError):
    """A field name is neither an on-disk key nor a record attribute."""

    def __init__(self, name: str):
        super().__init__(f"Unknown field: {name}", [name])
        self.name = name


class LookupFailure(JornadasError):
    """An exact-match lookup did not yield exactly one record."""

    def __init__(self, message: str, field: str, value: str):
        super().__init__(message)
        self.field = field
        self.value = value


class NotFoundError(LookupFailure):
    """No record matched."""

    def __init__(self, field: str, value: str):
        super().__init__(f"No record found with {field} = {value!r}.", field, value)


class AmbiguousMatchError(LookupFailure):
    """More than one record matched."""

    def __init__(self, field: str, value: str, indices: list[int]):
        super().__init__(
            f"Found {len(indices)} records with {field} = {value!r}. "
            "Use the general search to pick a specific one.",
            field,
            value,
        )
        self.indices = indices

    @property
    def count(self) -> int:
        return len(self.indices)
