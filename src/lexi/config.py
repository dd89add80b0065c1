"""Configuration helpers for loading and persisting the profile file."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigError
from .models import Configuration, ProfileSet

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LEXI_CONFIG_PATH"


def default_config_path() -> Path:
    """Resolve the per-user config file, honouring ``LEXI_CONFIG_PATH``."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".lexi" / "config.json"


class ConfigStore:
    """Reads and writes the JSON profile file at an explicit path."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else default_config_path()

    def load(self) -> ProfileSet:
        if not self.path.exists():
            logger.debug("No config at %s, using defaults", self.path)
            return ProfileSet()

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                text = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"Cannot read config file {self.path}: {exc}") from exc
        if not text.strip():
            return ProfileSet()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.path} must contain a JSON object")
        return ProfileSet.from_dict(data)

    def save(self, profile_set: ProfileSet) -> Path:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(profile_set.to_dict(), indent=2), encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot write config file {self.path}: {exc}") from exc
        logger.debug("Saved %d profile(s) to %s", len(profile_set.profiles), self.path)
        return self.path

    def active_configuration(self) -> Configuration:
        return self.load().active()
