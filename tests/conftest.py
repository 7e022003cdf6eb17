import pytest
from click.testing import CliRunner

from code_regions.filesystem import MAX_FILE_SIZE_ENV_VAR, MAX_LINE_LENGTH_ENV_VAR


@pytest.fixture(autouse=True)
def _clear_limit_env(monkeypatch):
    """Keep limits from the developer's shell out of the tests."""
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)
    monkeypatch.delenv(MAX_LINE_LENGTH_ENV_VAR, raising=False)


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Click runner for invoking the code-regions command."""
    return CliRunner()
