"""Shared fixtures for CLI command tests."""

import json

import pytest
from click.testing import CliRunner

from specledger.cli.main import cli
from specledger.config.loader import _ENV_KEYS


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the invoking user's config files and SPECLEDGER_* variables out of the tests."""
    for name in list(_ENV_KEYS) + ["SPECLEDGER_CONFIG_FILE"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def invoke(cli_runner, sample_specs):
    """Run the CLI against the sample spec tree; returns (result, parsed-or-None)."""

    def _invoke(*args, specs_dir=None, parse=True, input=None):
        root = specs_dir or sample_specs
        result = cli_runner.invoke(
            cli,
            ["--log-level", "ERROR", "--specs-dir", str(root), *args],
            input=input,
        )
        payload = json.loads(result.output) if parse else None
        return result, payload

    return _invoke
