"""Shared fixtures for CLI tests."""

import pytest


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch, backend):
    """Point every CLI command at the in-memory server and a scratch state dir."""
    monkeypatch.setenv("BLOGBOARD_CONFIG", str(tmp_path / "config.yaml"))
    monkeypatch.setenv("BLOGBOARD_STATE_DIR", str(tmp_path / "state"))
    monkeypatch.setattr("blogboard.client.RestBackend", lambda *args, **kwargs: backend)
    return tmp_path
