"""Test utilities for the Samanage client."""

from .config import TEST_API_KEY, mock_client_config, mock_xml_config
from .mock_data import (
    FULL_CRUD_SEGMENTS,
    MOCK_HARDWARE,
    MOCK_RISKS,
    MOCK_USER,
    MOCK_USERS,
    PARTIAL_RESOURCES,
    UNIMPLEMENTED_RESOURCES,
)
from .transport import (
    TEST_BASE_URL,
    RecordingTransport,
    make_mock_transport,
    network_calls,
    recorder,
)

__all__ = [
    'TEST_API_KEY',
    'TEST_BASE_URL',
    'mock_client_config',
    'mock_xml_config',
    'RecordingTransport',
    'recorder',
    'make_mock_transport',
    'network_calls',
    'FULL_CRUD_SEGMENTS',
    'PARTIAL_RESOURCES',
    'UNIMPLEMENTED_RESOURCES',
    'MOCK_USER',
    'MOCK_USERS',
    'MOCK_HARDWARE',
    'MOCK_RISKS',
]
