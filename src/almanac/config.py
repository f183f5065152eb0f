"""Configuration management for Almanac."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.events import ColorPicker, color_by_id, random_color
from .core.grid import SUNDAY, parse_week_start

logger = logging.getLogger(__name__)

ALMANAC_HOME = Path(os.environ.get("ALMANAC_HOME", Path.home() / "almanac"))
CONFIG_FILE = ALMANAC_HOME / "config" / "almanac.conf"

COLOR_POLICIES = ("random", "id")


@dataclass
class Config:
    """Almanac configuration."""

    week_start: int = SUNDAY
    color_policy: str = "random"
    date_format: str = "%A, %B %d"

    def color_picker(self) -> ColorPicker:
        if self.color_policy == "id":
            return color_by_id
        return random_color()


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from almanac.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "week_start":
                try:
                    config.week_start = parse_week_start(value)
                except ValueError as e:
                    logger.warning(f"Ignoring WEEK_START: {e}")
            case "color_policy":
                if value.lower() in COLOR_POLICIES:
                    config.color_policy = value.lower()
                else:
                    logger.warning(f"Unknown COLOR_POLICY {value!r}, using {config.color_policy!r}")
            case "date_format":
                config.date_format = value

    return config
