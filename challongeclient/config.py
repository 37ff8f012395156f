"""
Configuration loading from config.yaml.

Uses typed dataclasses so the client and CLI get attribute access and
type-checker support instead of raw dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ClientConfig:
    user: str = ""
    api_key: str = ""
    base_url: str = "https://api.challonge.com"
    api_version: str = "v1"
    timeout: float = 15.0   # seconds before a request is abandoned


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str | None = "./logs/challongeclient.log"

    @property
    def file_path(self) -> Path | None:
        return Path(self.file) if self.file else None


@dataclass
class Config:
    challonge: ClientConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    Raises:
        FileNotFoundError: config.yaml is missing.
        ValueError: required fields are absent or invalid.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {cfg_path.resolve()}\n"
            "Copy config.example.yaml to config.yaml and fill in your API key."
        )

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        client_raw = raw.get("challonge") or {}
        client_cfg = ClientConfig(
            user=str(client_raw.get("user", "")),
            api_key=str(client_raw.get("api_key", "")),
            base_url=str(client_raw.get("base_url", "https://api.challonge.com")).rstrip("/"),
            api_version=str(client_raw.get("api_version", "v1")),
            timeout=float(client_raw.get("timeout", 15)),
        )

        logging_raw = raw.get("logging") or {}
        logging_cfg = LoggingConfig(
            level=str(logging_raw.get("level", "INFO")).upper(),
            file=logging_raw.get("file", "./logs/challongeclient.log"),
        )

        config = Config(challonge=client_cfg, logging=logging_cfg)
        _validate(config)
        return config

    except (AttributeError, TypeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc


def _validate(config: Config) -> None:
    if not config.challonge.user:
        raise ValueError("challonge.user is required")
    if not config.challonge.api_key:
        raise ValueError("challonge.api_key is required")
    if config.challonge.timeout <= 0:
        raise ValueError("challonge.timeout must be > 0")
    if config.logging.level not in _LOG_LEVELS:
        raise ValueError(
            f"logging.level must be one of {_LOG_LEVELS}, got '{config.logging.level}'"
        )
