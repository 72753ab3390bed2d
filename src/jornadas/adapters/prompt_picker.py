"""File picker adapters for the command line."""

import logging
from pathlib import Path

import click

logger = logging.getLogger(__name__)


class PromptFilePicker:
    """
    Interactive picker backed by click prompts.

    Implements FilePicker protocol. An empty answer or Ctrl+C counts as
    cancelling the dialog.
    """

    def __init__(self, directory: Path | str | None = None):
        self.directory = Path(directory).expanduser() if directory else Path.cwd()

    def _ask(self, text: str, default: str | None = None) -> Path | None:
        try:
            answer = click.prompt(text, default=default or "", show_default=bool(default)).strip()
        except click.Abort:
            logger.debug("Picker aborted by user")
            return None
        if not answer:
            return None
        path = Path(answer).expanduser()
        return path if path.is_absolute() else self.directory / path

    def pick_open(self) -> Path | None:
        """Ask for a file to open. Returns None if the user cancelled."""
        return self._ask("File to open")

    def pick_save(self, suggested_name: str) -> Path | None:
        """Ask for a save target. Returns None if the user cancelled."""
        path = self._ask("Save as", default=suggested_name)
        if path is not None and path.is_dir():
            path = path / suggested_name
        if path is not None and path.exists():
            if not click.confirm(f"{path} already exists. Overwrite?", default=False):
                return None
        return path


class FixedPathPicker:
    """
    Picker that always answers with the same path.

    Implements FilePicker protocol. Used when the target is given on the
    command line.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def pick_open(self) -> Path | None:
        return self.path

    def pick_save(self, suggested_name: str) -> Path | None:
        if self.path.is_dir():
            return self.path / suggested_name
        return self.path
