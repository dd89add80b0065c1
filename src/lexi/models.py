"""Domain models used throughout the compiler."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigError

DEFAULT_PROFILE = "default"
KNOWN_PROVIDERS = ("openai", "anthropic", "local", "azure")


@dataclass
class Configuration:
    """Provider settings held by a single profile."""

    provider: str = "openai"
    model: str = "gpt-4"
    api_key: str = ""
    base_url: str = ""
    temperature: float = 0.1
    max_tokens: int = 2000

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Configuration":
        """Build a configuration, filling absent fields with defaults."""
        config = cls()
        for key in cls.keys():
            if key in data and data[key] is not None:
                config.set_value(key, data[key])
        return config

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def set_value(self, key: str, value: Any) -> None:
        if key not in self.keys():
            raise ConfigError(f"Unknown config key: {key}")

        if key == "temperature":
            try:
                self.temperature = float(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"temperature must be a number, got {value!r}") from exc
        elif key == "max_tokens":
            try:
                tokens = int(value)
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"max_tokens must be an integer, got {value!r}") from exc
            if tokens <= 0:
                raise ConfigError("max_tokens must be a positive integer")
            self.max_tokens = tokens
        else:
            setattr(self, key, str(value))

    def masked_api_key(self) -> str:
        if not self.api_key:
            return "(not set)"
        return f"{self.api_key[:8]}..."


@dataclass
class ProfileSet:
    """Named configurations plus the name of the active one."""

    active_profile: str = DEFAULT_PROFILE
    profiles: Dict[str, Configuration] = field(
        default_factory=lambda: {DEFAULT_PROFILE: Configuration()}
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileSet":
        if "profiles" not in data:
            # Flat single-profile file written by older releases
            return cls(profiles={DEFAULT_PROFILE: Configuration.from_dict(data)})

        raw_profiles = data.get("profiles") or {}
        if not isinstance(raw_profiles, dict):
            raise ConfigError("'profiles' must be a JSON object")
        profiles = {
            name: Configuration.from_dict(values or {})
            for name, values in raw_profiles.items()
        }
        profiles.setdefault(DEFAULT_PROFILE, Configuration())

        active = data.get("active_profile") or DEFAULT_PROFILE
        if active not in profiles:
            active = DEFAULT_PROFILE
        return cls(active_profile=active, profiles=profiles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active_profile": self.active_profile,
            "profiles": {name: cfg.to_dict() for name, cfg in self.profiles.items()},
        }

    def active(self) -> Configuration:
        return self.profiles[self.active_profile]

    def get(self, name: str) -> Configuration:
        if name not in self.profiles:
            raise ConfigError(
                f"Profile '{name}' does not exist. Create it first with: lexi profile create {name}"
            )
        return self.profiles[name]

    def use(self, name: str) -> None:
        self.get(name)
        self.active_profile = name

    def create(self, name: str) -> bool:
        """Add a default configuration under ``name`` and activate it.

        Returns False without touching anything when the profile exists.
        """
        if name in self.profiles:
            return False
        self.profiles[name] = Configuration()
        self.active_profile = name
        return True

    def delete(self, name: str) -> bool:
        """Remove a profile. Returns True when the active profile fell back to default."""
        if name == DEFAULT_PROFILE:
            raise ConfigError("Cannot delete the default profile")
        if name not in self.profiles:
            raise ConfigError(f"Profile '{name}' does not exist")

        del self.profiles[name]
        if self.active_profile == name:
            self.active_profile = DEFAULT_PROFILE
            return True
        return False

    def set_value(self, name: str, key: str, value: Any) -> None:
        self.get(name).set_value(key, value)


@dataclass
class CompileResult:
    """Outcome of one compile invocation."""

    input_path: Path
    output_path: Path
    target: str
    code: str
    run_returncode: Optional[int] = None
