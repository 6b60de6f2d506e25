"""JSON file-based config adapter."""

import json
import logging
from pathlib import Path

from pickify.adapters.menu import PROGRAMS
from pickify.config import (
    DEFAULT_CALLBACK_TIMEOUT,
    DEFAULT_CLIENT_ID,
    DEFAULT_PROGRAM,
    DEFAULT_REDIRECT_URI_PORT,
    config_path,
)
from pickify.domain.errors import ConfigIOError
from pickify.domain.model import Settings
from pickify.domain.ports import ConfigPort
from pickify.storage.atomic_file import write_json_atomic

logger = logging.getLogger("pickify.config")

_DEFAULTS = {
    "device_id": None,
    "program": DEFAULT_PROGRAM,
    "redirect_uri_port": DEFAULT_REDIRECT_URI_PORT,
    "client_id": DEFAULT_CLIENT_ID,
    "callback_timeout": DEFAULT_CALLBACK_TIMEOUT,
}


class JsonConfigAdapter(ConfigPort):

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path else config_path()

    def load(self) -> dict:
        cfg = dict(_DEFAULTS)
        if not self.path.exists():
            return cfg
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigIOError(f"Config file {self.path} contains invalid JSON: {exc}") from exc
        except OSError as exc:
            raise ConfigIOError(f"Failed to read config file {self.path}: {exc}") from exc
        if not isinstance(stored, dict):
            raise ConfigIOError(f"Config file {self.path} must contain a JSON object")
        cfg.update(stored)
        return cfg

    def save(self, cfg: dict) -> None:
        try:
            write_json_atomic(self.path, cfg)
        except OSError as exc:
            raise ConfigIOError(f"Failed to write config file {self.path}: {exc}") from exc
        logger.info("Config saved to %s", self.path)


def load_settings(config: ConfigPort) -> Settings:
    """Read the config document and validate it into Settings."""
    cfg = config.load()
    try:
        settings = Settings.from_dict(cfg)
    except (TypeError, ValueError) as exc:
        raise ConfigIOError(f"Invalid config value: {exc}") from exc
    if settings.program not in PROGRAMS:
        supported = ", ".join(sorted(PROGRAMS))
        raise ConfigIOError(f"Unsupported program {settings.program!r} (expected one of: {supported})")
    return settings
