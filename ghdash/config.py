"""Configuration loading from YAML and environment.

The token is taken from the config file, from environment variables, or
from a file (Docker secrets). The poll interval is stored next to it so
that the dashboard can be refreshed on the same schedule across runs.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "gh-dash"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_POLL_INTERVAL_MS = 60_000


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


# Injected by load_config so properties can read env/file
_current_env: dict[str, str] = {}


def default_config_path() -> Path:
    """Return ~/.config/gh-dash/config.yaml (honours XDG_CONFIG_HOME)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_DIR_NAME / CONFIG_FILE_NAME


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="Personal access token; prefer env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    timeout_seconds: float = Field(default=30, gt=0, description="HTTP timeout per request in seconds")


class DashboardConfig(BaseSettings):
    """Dashboard refresh settings."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_", extra="ignore")

    poll_interval_ms: int = Field(
        default=DEFAULT_POLL_INTERVAL_MS,
        ge=1000,
        description="Milliseconds between dashboard refreshes in watch mode",
    )


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    @property
    def poll_interval_seconds(self) -> float:
        return self.dashboard.poll_interval_ms / 1000


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        # Simple $VAR
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _read_raw(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Secrets: GITHUB_TOKEN or GITHUB_TOKEN_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or default_config_path()
    if not path.is_file():
        return AppConfig()

    raw = _substitute_env(_read_raw(path))

    github = GitHubConfig(**(raw.get("github") or {}))
    dashboard = DashboardConfig(**(raw.get("dashboard") or {}))
    logging = LoggingConfig(**(raw.get("logging") or {}))

    return AppConfig(github=github, dashboard=dashboard, logging=logging)


def _write_raw(path: Path, raw: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.dump(raw, default_flow_style=False, allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )


def _default_raw() -> dict[str, Any]:
    """Default file contents; the token is left out so env/secret files keep working."""
    return {
        "github": GitHubConfig.model_construct().model_dump(exclude={"token"}),
        "dashboard": DashboardConfig.model_construct().model_dump(),
        "logging": LoggingConfig.model_construct().model_dump(),
    }


def _update_section(path: Path, section: str, values: dict[str, Any]) -> None:
    """Set keys of one top-level section, leaving the rest of the file as is.

    Creates the file with defaults when it does not exist yet.
    """
    raw = _read_raw(path) if path.is_file() else _default_raw()
    raw[section] = {**(raw.get(section) or {}), **values}
    _write_raw(path, raw)


def save_config(config: AppConfig, config_path: Path | None = None) -> AppConfig:
    """Write all sections of ``config`` to the YAML file and reload it.

    The token is written only when it is set. Top-level keys the app does
    not know about are kept.
    """
    path = config_path or default_config_path()
    raw = _read_raw(path)
    raw["github"] = config.github.model_dump(exclude_none=True)
    raw["dashboard"] = config.dashboard.model_dump()
    raw["logging"] = config.logging.model_dump()
    _write_raw(path, raw)
    return load_config(path)


def save_token(token: str, config_path: Path | None = None) -> AppConfig:
    """Store the GitHub token in the config file and return the new config."""
    path = config_path or default_config_path()
    _update_section(path, "github", {"token": token.strip()})
    return load_config(path)


def save_poll_interval(interval_ms: int, config_path: Path | None = None) -> AppConfig:
    """Store the poll interval (milliseconds) and return the new config.

    Raises pydantic.ValidationError when the interval is below the minimum;
    the file is not touched in that case.
    """
    path = config_path or default_config_path()
    DashboardConfig(poll_interval_ms=interval_ms)
    _update_section(path, "dashboard", {"poll_interval_ms": interval_ms})
    return load_config(path)
