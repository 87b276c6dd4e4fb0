"""
Test configuration and fixtures.
"""
import os
import sys

import pytest

# Add src directory to Python path
src_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

from tests.test_utils import (  # noqa: E402,F401
    TEST_API_KEY,
    RecordingTransport,
    mock_client_config,
    mock_xml_config,
    recorder,
)
from samanage import Samanage  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "cli: mark test as a command line test")


@pytest.fixture
def client(recorder: RecordingTransport) -> Samanage:
    """A default client (json, v2.1) sending through the recording transport."""
    return Samanage(TEST_API_KEY, transport=recorder.client)


@pytest.fixture(autouse=True)
def clean_samanage_env(monkeypatch):
    """Keep the developer's SAMANAGE_* variables out of tests."""
    for name in list(os.environ):
        if name.startswith("SAMANAGE_"):
            monkeypatch.delenv(name, raising=False)


def pytest_collection_modifyitems(items):
    """Add markers based on test location and name."""
    for item in items:
        if "test_cli" in item.nodeid:
            item.add_marker(pytest.mark.cli)
        else:
            item.add_marker(pytest.mark.unit)
