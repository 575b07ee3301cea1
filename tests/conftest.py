"""Shared fixtures for the PassGuard test suite."""

import pytest

import passguard.core.engine
import shared.config
from shared.config import GlobalConfig, GuardConfig, PolicyConfig
from passguard.core.engine import PasswordPolicyEngine


@pytest.fixture(autouse=True)
def project_config_path(tmp_path, monkeypatch):
    """Point the project config.toml at a temp path and drop cached defaults.

    The file does not exist unless a test writes it.
    """
    path = tmp_path / "project" / "config.toml"
    monkeypatch.setattr(shared.config, "_DEFAULT_CONFIG_PATH", path)
    monkeypatch.setattr(shared.config, "_cached", None)
    monkeypatch.setattr(passguard.core.engine, "_default_engine", None)
    return path


@pytest.fixture
def engine():
    """Engine with the default policy."""
    return PasswordPolicyEngine()


@pytest.fixture
def policy():
    return PolicyConfig()


@pytest.fixture
def write_config(tmp_path):
    """Write a TOML document to a temporary file and return its path."""

    def _write(text: str, name: str = "passguard.toml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def debug_config(tmp_path):
    """Config that writes DEBUG JSON logs to a temporary file."""
    log_file = tmp_path / "logs" / "passguard.log"
    config = GuardConfig(
        global_settings=GlobalConfig(
            log_file=str(log_file), log_json=True, debug=True
        )
    )
    return config, log_file
