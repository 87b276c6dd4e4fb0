"""Async client for the Samanage IT service management API."""
from samanage.client import Samanage
from samanage.config import ClientConfig, ContentType, Settings
from samanage.errors import CapabilityError, CapabilityKind, ConfigurationError, SamanageError
from samanage.resources import REGISTRY, RESOURCES, Operation, ResourceDescriptor

__version__ = "0.1.0"

__all__ = [
    "Samanage",
    "ClientConfig",
    "ContentType",
    "Settings",
    "SamanageError",
    "ConfigurationError",
    "CapabilityError",
    "CapabilityKind",
    "Operation",
    "ResourceDescriptor",
    "RESOURCES",
    "REGISTRY",
]
