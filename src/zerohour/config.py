"""Global configuration — XDG paths, YAML config file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

# YAML keys accepted in config.yaml, mapped to their type
_FILE_KEYS = {
    "api_key": str,
    "model": str,
    "base_url": str,
    "temperature": float,
    "batch_size": int,
    "max_batches": int,
    "batch_timeout": float,
    "max_risks": int,
    "fallback_count": int,
}


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "zerohour"
    return Path.home() / ".config" / "zerohour"


@dataclass
class ZeroHourConfig:
    """Application-wide configuration, resolved once per invocation."""

    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    temperature: float = 0.1
    batch_size: int = 20
    max_batches: int = 3
    batch_timeout: float = 60.0
    max_risks: int = 10
    fallback_count: int = 5
    config_dir: Path = field(default_factory=_default_config_dir)
    debug: bool = False

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key.strip())

    @classmethod
    def load(cls, path: str | Path | None = None) -> ZeroHourConfig:
        """Load config from an optional YAML file, then environment variables."""
        config = cls()

        config_file = Path(path) if path else config.config_dir / "config.yaml"
        if config_file.is_file():
            config._apply_file(config_file)
        elif path:
            raise ValueError(f"Config file not found: {config_file}")

        env_key = os.environ.get("GROQ_API_KEY")
        if env_key:
            config.api_key = env_key

        env_model = os.environ.get("GROQ_MODEL")
        if env_model:
            config.model = env_model

        env_url = os.environ.get("GROQ_BASE_URL")
        if env_url:
            config.base_url = env_url

        env_timeout = os.environ.get("ZEROHOUR_BATCH_TIMEOUT")
        if env_timeout:
            config.batch_timeout = float(env_timeout)

        if os.environ.get("DEBUG"):
            config.debug = True

        return config

    def _apply_file(self, config_file: Path) -> None:
        try:
            data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ValueError(f"Config YAML is malformed: {config_file}: {e}") from e
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError(f"Config YAML must be a mapping: {config_file}")

        for key, value in data.items():
            kind = _FILE_KEYS.get(key)
            if kind is None:
                raise ValueError(f"Unknown config key {key!r} in {config_file}")
            if value is None:
                continue
            try:
                setattr(self, key, kind(value))
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid value for {key!r} in {config_file}: {value!r}") from e
