"""Test configuration."""

import logfire
import pytest


@pytest.fixture(autouse=True, scope="session")
def _quiet_logfire():
    """Keep telemetry local during tests."""
    logfire.configure(send_to_logfire=False, console=False)
