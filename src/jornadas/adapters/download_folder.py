"""Download-folder fallback for saving without a picker."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class DownloadFolder:
    """
    Writes files into a downloads directory.

    Never overwrites: a taken name gets a " (1)", " (2)", ... suffix the way
    browsers name repeated downloads.
    """

    def __init__(self, downloads_dir: Path | str):
        self.downloads_dir = Path(downloads_dir).expanduser()

    def _free_path(self, file_name: str) -> Path:
        path = self.downloads_dir / file_name
        counter = 1
        while path.exists():
            path = self.downloads_dir / f"{Path(file_name).stem} ({counter}){Path(file_name).suffix}"
            counter += 1
        return path

    def write(self, file_name: str, content: str) -> Path:
        """Write content under a free name and return the path used."""
        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        path = self._free_path(file_name)
        path.write_text(content, encoding="utf-8")
        logger.info(f"Downloaded {file_name} to {path}")
        return path
