"""Session-level workflows shared by the CLI.

A Session bundles the record store, the current file and the view state.
File operations return explicit outcomes; user cancellation is an outcome,
never an exception, and leaves the session untouched.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .adapters.download_folder import DownloadFolder
from .config import Config
from .core.errors import LoadError, ParseError, SizeLimitError, UnsupportedFileTypeError
from .core.records import Record, records_from_csv, records_to_csv
from .core.store import RecordStore
from .core.view import SortOrder, ViewState, clear_search
from .ports.file_picker import FilePicker

logger = logging.getLogger(__name__)

DEFAULT_FILE_STEM = "Nombre"


@dataclass
class Session:
    """Open file plus its records and the current view."""

    store: RecordStore = field(default_factory=RecordStore)
    file_name: str = ""
    path: Path | None = None
    view: ViewState = field(default_factory=ViewState)
    max_file_size: int = 10 * 1024 * 1024


# ============== Outcomes ==============


@dataclass(frozen=True)
class Loaded:
    path: Path
    count: int


@dataclass(frozen=True)
class Written:
    path: Path
    downloaded: bool = False


@dataclass(frozen=True)
class Temporary:
    """A new file that exists only in memory until saved."""

    file_name: str


@dataclass(frozen=True)
class Cancelled:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str


def new_session(config: Config) -> Session:
    """Empty session using configured view defaults."""
    view = ViewState(
        sort_field=config.sort_field,
        sort_order=SortOrder(config.sort_order),
        page_size=config.records_per_page,
    )
    return Session(view=view, max_file_size=config.max_file_size)


def json_file_name(name: str) -> str:
    """Append .json unless already present."""
    name = name.strip()
    return name if name.endswith(".json") else f"{name}.json"


def _reset_view(session: Session) -> None:
    session.view = clear_search(session.view)


def _read_text(path: Path, suffix: str, max_size: int) -> str:
    """Read a UTF-8 file after checking its extension and size."""
    if not path.name.lower().endswith(suffix):
        raise UnsupportedFileTypeError(f"Please choose a {suffix} file (got {path.name}).")
    try:
        size = path.stat().st_size
        if size > max_size:
            raise SizeLimitError(size, max_size)
        raw = path.read_bytes()
    except OSError as e:
        raise LoadError(f"Could not read {path}: {e}") from e
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"{path.name} is not valid UTF-8 text.") from e


def _save(
    content: str,
    suggested_name: str,
    picker: FilePicker | None,
    downloads: DownloadFolder | None,
) -> Written | Cancelled | Failed:
    """Write through the picker, falling back to the download folder."""
    if picker is not None:
        try:
            target = picker.pick_save(suggested_name)
            if target is None:
                return Cancelled()
            target.write_text(content, encoding="utf-8")
            logger.info(f"Saved {target}")
            return Written(target)
        except OSError as e:
            logger.warning(f"File picker failed, using download fallback: {e}")

    if downloads is None:
        return Failed("No save location available.")
    try:
        return Written(downloads.write(suggested_name, content), downloaded=True)
    except OSError as e:
        logger.error(f"Download fallback failed: {e}")
        return Failed(f"Could not write {suggested_name}: {e}")


# ============== File operations ==============


def open_file(session: Session, path: Path | None) -> Loaded | Cancelled:
    """
    Load a JSON file into the session.

    Raises UnsupportedFileTypeError, SizeLimitError, ParseError or
    SchemaError; the session is unchanged on any of them.
    """
    if path is None:
        return Cancelled()
    text = _read_text(path, ".json", session.max_file_size)
    records = session.store.load(text)
    session.file_name = path.name
    session.path = path
    _reset_view(session)
    logger.info(f"Opened {path} ({len(records)} records)")
    return Loaded(path, len(records))


def create_new_file(
    session: Session,
    name: str,
    picker: FilePicker | None = None,
) -> Written | Temporary | Cancelled:
    """
    Start an empty record file.

    With a picker the empty array is written straight away; without one, or
    when the picker fails, the file stays in memory until saved.
    """
    if not name or not name.strip():
        return Cancelled()
    file_name = json_file_name(name)

    if picker is not None:
        try:
            target = picker.pick_save(file_name)
            if target is None:
                return Cancelled()
            target.write_text("[]", encoding="utf-8")
        except OSError as e:
            logger.warning(f"File picker failed, creating temporary file: {e}")
        else:
            session.store.replace_all([], dirty=False)
            session.file_name = target.name
            session.path = target
            _reset_view(session)
            return Written(target)

    session.store.replace_all([], dirty=False)
    session.file_name = file_name
    session.path = None
    _reset_view(session)
    return Temporary(file_name)


def save_file(
    session: Session,
    picker: FilePicker | None,
    downloads: DownloadFolder | None = None,
    allow_empty: bool = False,
) -> Written | Cancelled | Failed:
    """Save under the current file name."""
    if not session.file_name:
        return Failed("No file to save. Use save-as first.")
    if not len(session.store) and not allow_empty:
        return Failed("No records to save.")
    return _finish_save(session, _save(session.store.serialize(), session.file_name, picker, downloads))


def save_as_file(
    session: Session,
    picker: FilePicker | None,
    downloads: DownloadFolder | None = None,
    name: str | None = None,
) -> Written | Cancelled | Failed:
    """Save under a new name (defaults to the current one)."""
    if not len(session.store):
        return Failed("No records to save.")
    if name and name.strip():
        suggested = json_file_name(name)
    elif session.file_name:
        suggested = session.file_name
    else:
        suggested = json_file_name(DEFAULT_FILE_STEM)
    return _finish_save(session, _save(session.store.serialize(), suggested, picker, downloads))


def _finish_save(session: Session, outcome: Written | Cancelled | Failed) -> Written | Cancelled | Failed:
    if isinstance(outcome, Written):
        session.file_name = outcome.path.name
        if not outcome.downloaded:
            session.path = outcome.path
        session.store.mark_clean()
    return outcome


def export_csv(session: Session, path: Path | None) -> Written | Cancelled | Failed:
    """Write the current records as comma-separated text."""
    if path is None:
        return Cancelled()
    if path.suffix.lower() != ".csv":
        path = path.with_name(f"{path.name}.csv")
    try:
        path.write_text(records_to_csv(session.store.records), encoding="utf-8")
    except OSError as e:
        return Failed(f"Could not write {path}: {e}")
    logger.info(f"Exported {len(session.store)} records to {path}")
    return Written(path)


def import_csv(session: Session, path: Path | None) -> Loaded | Cancelled:
    """Replace the records with the rows of a CSV export."""
    if path is None:
        return Cancelled()
    records = records_from_csv(_read_text(path, ".csv", session.max_file_size))
    session.store.replace_all(records, dirty=True)
    _reset_view(session)
    logger.info(f"Imported {len(records)} records from {path}")
    return Loaded(path, len(records))


# ============== Record operations ==============


def add_record(session: Session, record: Record) -> Record:
    return session.store.add(record)


def modify_by_status(session: Session, status: str, changes: dict) -> Record:
    """Edit the single record with this status. Raises on zero or many matches."""
    index = session.store.find_one("estado", status)
    return session.store.update_at(index, changes)


def find_for_deletion(session: Session, project: str) -> int:
    """Index of the single record for a project. Raises on zero or many matches."""
    return session.store.find_one("proyecto", project)


def delete_at(session: Session, index: int) -> Record:
    return session.store.remove_at(index)
