"""Application configuration."""

import os
from pathlib import Path

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from til.core.render import DEFAULT_ATTRIBUTION
from til.errors import ConfigError

DEFAULT_COMMIT_MESSAGE = "build, save, push"

CONFIG_DIR = "~/.config/til"
CONFIG_FILE = "config.yml"

DEFAULT_CONFIG = """\
commitMessage: "build, save, push"
committerEmail: test@example.com
committerName: "TIL Autobot"
editor: ""
targetDirectories:
  a: "~/Documents/tilblog"
"""


class Settings(BaseSettings):
    """Settings read from the YAML config file, with TIL_ env defaults."""

    target_directories: dict[str, str] = Field(default_factory=dict, alias="targetDirectories")
    editor: str = ""
    commit_message: str = Field(DEFAULT_COMMIT_MESSAGE, alias="commitMessage")
    committer_name: str = Field("TIL Autobot", alias="committerName")
    committer_email: str = Field("test@example.com", alias="committerEmail")
    attribution: str = DEFAULT_ATTRIBUTION

    model_config = SettingsConfigDict(
        env_prefix="TIL_",
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("target_directories", mode="before")
    @classmethod
    def _stringify_aliases(cls, value):
        # YAML reads bare aliases such as 1 as ints
        if isinstance(value, dict):
            return {str(key): "" if target is None else str(target) for key, target in value.items()}
        return value


def get_config_dir() -> Path:
    """Directory holding the config file, XDG-aware.

    A non-default $XDG_CONFIG_HOME is used as given.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", "")
    if config_home:
        return Path(config_home) / "til"
    return Path(CONFIG_DIR).expanduser()


def get_config_file_path() -> Path:
    return get_config_dir() / CONFIG_FILE


def ensure_config_file(path: Path) -> bool:
    """Create the config file with defaults when missing or empty.

    Returns True when the default config was written. A file with any
    content is left alone.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.exists() and path.stat().st_size > 0:
            return False
        path.write_text(DEFAULT_CONFIG, encoding="utf-8")
        path.chmod(0o600)
    except OSError as e:
        raise ConfigError(f"could not create the configuration file {path}: {e}") from e
    return True


def read_config_file(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"could not read the configuration file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"configuration file {path} must contain a mapping")
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Ensure the config file exists, then read it into Settings."""
    path = path or get_config_file_path()
    ensure_config_file(path)
    data = read_config_file(path)
    # Blank values fall back to the environment and defaults
    data = {key: value for key, value in data.items() if value not in (None, "")}
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {path}: {e}") from e
