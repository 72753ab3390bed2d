"""File picker interface."""

from pathlib import Path
from typing import Protocol


class FilePicker(Protocol):
    """Interface for the user choosing where to read or write a file."""

    def pick_open(self) -> Path | None:
        """Ask for a file to open. Returns None if the user cancelled."""
        ...

    def pick_save(self, suggested_name: str) -> Path | None:
        """
        Ask for a save target. Returns None if the user cancelled.

        Raises OSError when the picker itself is unusable.
        """
        ...
