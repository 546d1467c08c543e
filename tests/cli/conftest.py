"""Shared fixtures for CLI execution tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from tests.constants import DEVICE_ID, PASSWORD, PIN, USERNAME, VIN


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Drop any JLR_* variables and step away from a developer's .env file."""
    for key in list(os.environ):
        if key.startswith("JLR_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def cli_env(clean_env: None, monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Configure a complete account so commands reach the (mocked) API."""
    env = {
        "JLR_USERNAME": USERNAME,
        "JLR_PASSWORD": PASSWORD,
        "JLR_DEVICE_ID": DEVICE_ID,
        "JLR_VIN": VIN,
        "JLR_PIN": PIN,
        "JLR_WAKE_BEFORE_COMMANDS": "false",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env
