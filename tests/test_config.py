"""Tests for config loading and saving."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from ghdash.config import (
    DEFAULT_POLL_INTERVAL_MS,
    AppConfig,
    DashboardConfig,
    GitHubConfig,
    LoggingConfig,
    default_config_path,
    load_config,
    save_config,
    save_poll_interval,
    save_token,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("GITHUB_TOKEN", "GITHUB_TOKEN_FILE", "GITHUB_API_URL", "DASHBOARD_POLL_INTERVAL_MS"):
        monkeypatch.delenv(key, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "nope.yaml")
    assert isinstance(config, AppConfig)
    assert config.github.api_url == "https://api.github.com"
    assert config.dashboard.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS
    assert config.poll_interval_seconds == 60
    assert config.github_token_resolved is None


def test_load_yaml_with_env_substitution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MY_PAT", "ghp_from_env")
    path = tmp_path / "config.yaml"
    path.write_text(
        "github:\n  token: ${MY_PAT}\n  api_url: https://ghe.example/api/v3\n"
        "dashboard:\n  poll_interval_ms: 5000\nlogging:\n  level: DEBUG\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.github.token == "ghp_from_env"
    assert config.github_token_resolved == "ghp_from_env"
    assert config.github.api_url == "https://ghe.example/api/v3"
    assert config.dashboard.poll_interval_ms == 5000
    assert config.logging.level == "DEBUG"


def test_unresolved_placeholder_falls_back_to_token_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    secret = tmp_path / "token.txt"
    secret.write_text("ghp_secret\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_TOKEN_FILE", str(secret))
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${UNSET_VAR}\n", encoding="utf-8")

    config = load_config(path)

    assert config.github_token_resolved == "ghp_secret"


def test_poll_interval_minimum(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("dashboard:\n  poll_interval_ms: 10\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(path)


def test_save_token_creates_file(tmp_path: Path) -> None:
    path = tmp_path / "gh-dash" / "config.yaml"

    config = save_token("  ghp_new  ", path)

    assert config.github.token == "ghp_new"
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert raw["github"]["token"] == "ghp_new"
    assert raw["dashboard"]["poll_interval_ms"] == DEFAULT_POLL_INTERVAL_MS


def test_save_poll_interval_keeps_other_sections(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("github:\n  token: ${GITHUB_TOKEN}\n", encoding="utf-8")

    config = save_poll_interval(120_000, path)

    assert config.dashboard.poll_interval_ms == 120_000
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert raw["github"]["token"] == "${GITHUB_TOKEN}"
    assert raw["dashboard"] == {"poll_interval_ms": 120_000}


def test_save_poll_interval_rejects_too_small(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    with pytest.raises(ValidationError):
        save_poll_interval(5, path)
    assert not path.exists()


def test_default_config_path_honours_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_config_path() == tmp_path / "gh-dash" / "config.yaml"


def test_save_config_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "gh-dash" / "config.yaml"
    config = AppConfig(
        github=GitHubConfig(token="ghp_saved", api_url="https://ghe.example/api/v3", timeout_seconds=10),
        dashboard=DashboardConfig(poll_interval_ms=15_000),
        logging=LoggingConfig(level="DEBUG"),
    )

    saved = save_config(config, path)

    assert saved.github.token == "ghp_saved"
    assert saved.github.api_url == "https://ghe.example/api/v3"
    assert saved.github.timeout_seconds == 10
    assert saved.dashboard.poll_interval_ms == 15_000
    assert saved.logging.level == "DEBUG"


def test_save_config_without_token_leaves_it_out(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("extra:\n  keep: true\n", encoding="utf-8")

    save_config(AppConfig(), path)

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert "token" not in raw["github"]
    assert raw["extra"] == {"keep": True}
    assert raw["dashboard"]["poll_interval_ms"] == DEFAULT_POLL_INTERVAL_MS
