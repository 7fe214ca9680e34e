"""Pytest configuration for CLI integration tests."""

import pytest
from click.testing import CliRunner

from liftlog.cli import main


def pytest_collection_modifyitems(items):
    """Mark everything under integration_tests as an integration test."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def liftlog(tmp_path):
    """Invoke the CLI with its data directory under tmp_path."""
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(
            main, ["--data-dir", str(tmp_path / "data"), *args], input=input
        )

    return invoke


@pytest.fixture
def initialized(liftlog):
    """A CLI whose database has been created and seeded."""
    result = liftlog("init")
    assert result.exit_code == 0, result.output
    return liftlog
