"""Configuration management for jornadas."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.errors import UnknownFieldError
from .core.records import DEFAULT_STATUSES, disk_key

logger = logging.getLogger(__name__)

JORNADAS_HOME = Path(os.environ.get("JORNADAS_HOME", Path.home() / "jornadas"))
CONFIG_FILE = JORNADAS_HOME / "config" / "jornadas.conf"
DOWNLOADS_DIR = Path.home() / "Downloads"

MAX_FILE_SIZE_MB = 10


@dataclass
class Config:
    """jornadas configuration."""

    records_per_page: int = 10
    sort_field: str = "proyecto"
    sort_order: str = "desc"
    statuses: list[str] = field(default_factory=lambda: list(DEFAULT_STATUSES))
    max_file_size_mb: int = MAX_FILE_SIZE_MB
    downloads_dir: str = str(DOWNLOADS_DIR)
    default_file: str = ""

    @property
    def max_file_size(self) -> int:
        """Size limit in bytes."""
        return self.max_file_size_mb * 1024 * 1024


def _parse_value(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _positive_int(key: str, value: str, default: int) -> int:
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"Ignoring {key.upper()}={value!r}: not an integer")
        return default
    if number < 1:
        logger.warning(f"Ignoring {key.upper()}={value!r}: must be positive")
        return default
    return number


def load_config(config_file: Path = CONFIG_FILE) -> Config:
    """Load configuration from jornadas.conf file."""
    config = Config()

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(value.strip())

        match key:
            case "records_per_page":
                config.records_per_page = _positive_int(key, value, config.records_per_page)
            case "sort_field":
                try:
                    config.sort_field = disk_key(value)
                except UnknownFieldError:
                    logger.warning(f"Ignoring SORT_FIELD={value!r}: unknown field")
            case "sort_order":
                if value.lower() in ("asc", "desc"):
                    config.sort_order = value.lower()
                else:
                    logger.warning(f"Ignoring SORT_ORDER={value!r}: expected asc or desc")
            case "statuses":
                statuses = [s.strip() for s in value.split(",") if s.strip()]
                if statuses:
                    config.statuses = statuses
            case "max_file_size_mb":
                config.max_file_size_mb = _positive_int(key, value, config.max_file_size_mb)
            case "downloads_dir":
                config.downloads_dir = value
            case "default_file":
                config.default_file = value
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
