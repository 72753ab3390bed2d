"""jornadas CLI - local record manager."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.download_folder import DownloadFolder
from .adapters.prompt_picker import FixedPathPicker, PromptFilePicker
from .config import Config, load_config
from .core.errors import AmbiguousMatchError, JornadasError
from .core.records import FIELD_KEYS, Record
from .core.store import SEARCH_ALL
from .core.view import Page, SortOrder, apply_filter, change_page, change_sort, project
from .workflows import (
    Cancelled,
    Failed,
    Session,
    Temporary,
    Written,
    add_record,
    create_new_file,
    delete_at,
    export_csv,
    find_for_deletion,
    import_csv,
    modify_by_status,
    new_session,
    open_file,
    save_as_file,
    save_file,
)

COLUMN_WIDTHS = {
    "proyecto": 16,
    "fecha": 12,
    "ubicacion": 16,
    "arbitro": 14,
    "estado": 12,
    "resultado": 10,
    "descripcion": 30,
}


@click.group()
@click.version_option(package_name="jornadas")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--file", "-f", "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file to work on (defaults to DEFAULT_FILE in jornadas.conf)",
)
@click.pass_context
def main(ctx, debug: bool, file_path: Path | None):
    """jornadas - manage jornada records stored in a JSON file."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    config = load_config()
    if file_path is None and config.default_file:
        file_path = Path(config.default_file).expanduser()
    ctx.obj = {"config": config, "file": file_path}


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _open_session(ctx) -> Session:
    """Load the file given with --file into a fresh session."""
    config: Config = ctx.obj["config"]
    path: Path | None = ctx.obj["file"]
    if path is None:
        path = PromptFilePicker().pick_open()
    session = new_session(config)
    try:
        outcome = open_file(session, path)
    except JornadasError as e:
        _fail(str(e))
    if isinstance(outcome, Cancelled):
        click.echo("No file chosen.")
        sys.exit(0)
    return session


def _report(outcome: Written | Cancelled | Failed | Temporary) -> None:
    match outcome:
        case Written(path=path, downloaded=True):
            click.echo(f"✓ Downloaded to {path}")
        case Written(path=path):
            click.echo(f"✓ Saved to {path}")
        case Temporary(file_name=name):
            _fail(f"Could not write {name}. Nothing was saved.")
        case Cancelled():
            click.echo("Cancelled.")
        case Failed(reason=reason):
            _fail(reason)


def _save_back(ctx, session: Session) -> None:
    """Write the session's records back to the file they came from."""
    config: Config = ctx.obj["config"]
    outcome = save_file(
        session,
        FixedPathPicker(session.path) if session.path else None,
        DownloadFolder(config.downloads_dir),
        allow_empty=True,
    )
    _report(outcome)


def _format_row(values: list[str]) -> str:
    cells = []
    for key, value in zip(FIELD_KEYS, values):
        width = COLUMN_WIDTHS[key]
        text = value if len(value) <= width else value[: width - 1] + "…"
        cells.append(f"{text:<{width}}")
    return "  ".join(cells).rstrip()


def _show_records(records: list[Record]) -> None:
    click.echo(_format_row(list(FIELD_KEYS)))
    for record in records:
        click.echo(_format_row([v or "" for v in record.to_dict().values()]))


def _show_page(page: Page, session: Session, as_json: bool) -> None:
    if as_json:
        click.echo(
            json.dumps(
                {
                    "items": [r.to_dict() for r in page.items],
                    "total_records": page.total_records,
                    "total_pages": page.total_pages,
                    "page": page.page_number,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return

    if not page.total_records:
        if not len(session.store):
            click.echo("No records to show. Load a JSON file or create a new one.")
        else:
            click.echo("No records match the search.")
        return

    if not page.items:
        click.echo(f"Page {page.page_number} is empty ({page.total_pages} pages).")
        return

    _show_records(page.items)
    click.echo()
    click.echo(page.summary())
    hints = []
    if page.has_previous:
        hints.append(f"previous: --page {page.page_number - 1}")
    if page.has_next:
        hints.append(f"next: --page {page.page_number + 1}")
    if hints:
        click.echo(f"({', '.join(hints)})")


# ============== Commands ==============


@main.command()
@click.argument("name")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Where to write the new file (asks interactively if omitted)",
)
def new(name: str, output: Path | None):
    """Create a new empty record file."""
    if output is not None:
        picker = FixedPathPicker(output)
        target = picker.pick_save(name if name.endswith(".json") else f"{name}.json")
        if target.exists() and not click.confirm(
            f"{target} already exists. Current data will be lost if not saved. Continue?"
        ):
            _report(Cancelled())
            return
    else:
        picker = PromptFilePicker()
    _report(create_new_file(Session(), name, picker))


@main.command("list")
@click.option("--search", "term", default="", help="Case-insensitive text to look for")
@click.option(
    "--search-field",
    type=click.Choice([SEARCH_ALL, *FIELD_KEYS]),
    default=SEARCH_ALL,
    show_default=True,
    help="Field to search in",
)
@click.option("--sort", "sort_field", type=click.Choice(list(FIELD_KEYS)), default=None, help="Field to sort by")
@click.option("--order", type=click.Choice(["asc", "desc"]), default=None, help="Sort direction")
@click.option("--page", "page_number", type=int, default=1, show_default=True, help="Page to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_records(ctx, term: str, search_field: str, sort_field: str | None, order: str | None,
                 page_number: int, as_json: bool):
    """Show one page of records, optionally filtered and sorted."""
    session = _open_session(ctx)
    state = apply_filter(session.view, search_field, term)
    if sort_field or order:
        state = change_sort(
            state,
            sort_field or state.sort_field,
            SortOrder(order) if order else state.sort_order,
        )
    state = change_page(state, page_number)
    _show_page(project(session.store, state), session, as_json)


@main.command()
@click.option("--proyecto", default=None, help="Project / jornada name")
@click.option("--fecha", default=None, help="Date")
@click.option("--ubicacion", default=None, help="Location")
@click.option("--arbitro", default=None, help="Referee")
@click.option("--estado", default=None, help="Status (one of the configured statuses)")
@click.option("--resultado", default=None, help="Result (optional)")
@click.option("--descripcion", default=None, help="Description")
@click.pass_context
def add(ctx, proyecto: str | None, fecha: str | None, ubicacion: str | None, arbitro: str | None,
        estado: str | None, resultado: str | None, descripcion: str | None):
    """Add a record. Values not given as options are asked for once the file is open."""
    session = _open_session(ctx)
    proyecto = _ask(proyecto, "Proyecto")
    fecha = _ask(fecha, "Fecha")
    ubicacion = _ask(ubicacion, "Ubicación")
    arbitro = _ask(arbitro, "Árbitro")
    estado = _choose_status(ctx.obj["config"], estado)
    resultado = _ask(resultado, "Resultado", default="")
    descripcion = _ask(descripcion, "Descripción")
    record = Record(
        project=proyecto,
        date=fecha,
        location=ubicacion,
        referee=arbitro,
        status=estado,
        result=resultado,
        description=descripcion,
    )
    try:
        add_record(session, record)
    except JornadasError as e:
        _fail(str(e))
    click.echo("Record added.")
    _save_back(ctx, session)


def _ask(value: str | None, label: str, default: str | None = None) -> str:
    if value is not None:
        return value
    return click.prompt(label, default=default)


def _choose_status(config: Config, value: str | None, default: str | None = None) -> str:
    if value is None:
        return click.prompt("Estado", type=click.Choice(config.statuses), default=default)
    if value not in config.statuses:
        _fail(f"Unknown status {value!r}. Choose one of: {', '.join(config.statuses)}")
    return value


def _match_value(value: str, option: str) -> str:
    value = value.strip()
    if not value:
        _fail(f"{option} must not be empty.")
    return value


def _show_candidates(session: Session, error: AmbiguousMatchError) -> None:
    click.echo(str(error))
    _show_records([session.store[i] for i in error.indices])
    sys.exit(1)


@main.command()
@click.option("--estado", "match_status", required=True, help="Status of the record to modify")
@click.option("--new-estado", default=None, help="New status")
@click.option("--resultado", default=None, help="New result")
@click.option("--descripcion", default=None, help="New description")
@click.pass_context
def modify(ctx, match_status: str, new_estado: str | None, resultado: str | None, descripcion: str | None):
    """Modify status, result and description of the record with a given status."""
    match_status = _match_value(match_status, "--estado")
    session = _open_session(ctx)
    try:
        index = session.store.find_one("estado", match_status)
    except AmbiguousMatchError as e:
        _show_candidates(session, e)
    except JornadasError as e:
        _fail(str(e))

    current = session.store[index]
    click.echo(f"Modifying {current.project} ({current.date}, {current.location})")
    changes = {
        "estado": _choose_status(ctx.obj["config"], new_estado, default=current.status),
        "resultado": resultado if resultado is not None else click.prompt(
            "Resultado", default=current.result or "", show_default=True
        ),
        "descripcion": descripcion if descripcion is not None else click.prompt(
            "Descripción", default=current.description or ""
        ),
    }
    try:
        modify_by_status(session, match_status, changes)
    except JornadasError as e:
        _fail(str(e))
    click.echo("Record modified. Only estado, resultado and descripcion were updated.")
    _save_back(ctx, session)


@main.command()
@click.option("--proyecto", required=True, help="Project of the record to delete")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx, proyecto: str, yes: bool):
    """Delete the record of a given project."""
    proyecto = _match_value(proyecto, "--proyecto")
    session = _open_session(ctx)
    try:
        index = find_for_deletion(session, proyecto)
    except AmbiguousMatchError as e:
        _show_candidates(session, e)
    except JornadasError as e:
        _fail(str(e))

    if not yes and not click.confirm(f'Delete the record for "{proyecto}"?'):
        _report(Cancelled())
        return
    delete_at(session, index)
    click.echo("Record deleted.")
    _save_back(ctx, session)


@main.command("save-as")
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Target path (asks interactively if omitted)",
)
@click.pass_context
def save_as(ctx, output: Path | None):
    """Save the records under a new name."""
    session = _open_session(ctx)
    picker = FixedPathPicker(output) if output else PromptFilePicker()
    _report(save_as_file(session, picker, DownloadFolder(ctx.obj["config"].downloads_dir)))


@main.command("export-csv")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def export_csv_cmd(ctx, output: Path):
    """Export the records as CSV."""
    session = _open_session(ctx)
    _report(export_csv(session, output))


@main.command("import-csv")
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_csv_cmd(ctx, source: Path, yes: bool):
    """Replace the records with the rows of a CSV file."""
    session = _open_session(ctx)
    if len(session.store) and not yes and not click.confirm(
        f"Replace the {len(session.store)} current records?"
    ):
        _report(Cancelled())
        return
    try:
        loaded = import_csv(session, source)
    except JornadasError as e:
        _fail(str(e))
    click.echo(f"Imported {loaded.count} records from {source.name}.")
    _save_back(ctx, session)


@main.command()
@click.pass_context
def statuses(ctx):
    """List the allowed status values."""
    for status in ctx.obj["config"].statuses:
        click.echo(status)


if __name__ == "__main__":
    main()
