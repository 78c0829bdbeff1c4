"""Configuration management for smartlists."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.filters import SortCriteria

logger = logging.getLogger(__name__)

SMARTLISTS_HOME = Path(os.environ.get("SMARTLISTS_HOME", Path.home() / "smartlists"))
CONFIG_FILE = SMARTLISTS_HOME / "config" / "smartlists.conf"
DATA_DIR = SMARTLISTS_HOME / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """smartlists configuration."""

    data_file: str = ""
    default_sort: SortCriteria = SortCriteria.DUE_DATE
    log_level: str = "WARNING"

    @property
    def data_path(self) -> Path:
        """Resolved JSON store location."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "todos.json"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def parse_config(text: str) -> Config:
    """Parse KEY=value config text. Unknown keys are ignored."""
    config = Config()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_file":
                config.data_file = value
            case "default_sort":
                try:
                    config.default_sort = SortCriteria[value.upper()]
                except KeyError:
                    logger.warning(f"Invalid DEFAULT_SORT {value!r}, using {config.default_sort.name}")
            case "log_level":
                if value.upper() in LOG_LEVELS:
                    config.log_level = value.upper()
                else:
                    logger.warning(f"Invalid LOG_LEVEL {value!r}, using {config.log_level}")

    return config


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from smartlists.conf file."""
    config_file = config_file or CONFIG_FILE
    if not config_file.exists():
        return Config()
    return parse_config(config_file.read_text())
