"""Error types raised by the Samanage client."""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCodes:
    """Machine readable error codes."""
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CAPABILITY_ERROR = "CAPABILITY_ERROR"


class CapabilityKind(str, Enum):
    """Why a resource operation was rejected."""

    UNSUPPORTED_OPERATION = "unsupported_operation"
    NOT_IMPLEMENTED = "not_implemented"
    UNKNOWN_RESOURCE = "unknown_resource"


class SamanageError(Exception):
    """Base error for Samanage client failures."""

    code = "SAMANAGE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(SamanageError):
    """The client could not be constructed from the given settings."""

    code = ErrorCodes.CONFIGURATION_ERROR


class CapabilityError(SamanageError):
    """A resource was asked for an operation it does not offer.

    Raised before any request is sent. Callers can branch on ``kind``.
    """

    code = ErrorCodes.CAPABILITY_ERROR

    def __init__(
        self,
        resource: str,
        operation: Optional[str],
        kind: CapabilityKind,
        message: Optional[str] = None,
    ):
        if message is None:
            if kind is CapabilityKind.NOT_IMPLEMENTED:
                message = f"{resource} is not implemented"
            elif kind is CapabilityKind.UNKNOWN_RESOURCE:
                message = f"Unknown resource: {resource}"
            else:
                message = f"{operation} is not supported for {resource}"
        super().__init__(
            message,
            details={"resource": resource, "operation": operation, "kind": kind.value},
        )
        self.resource = resource
        self.operation = operation
        self.kind = kind

    @classmethod
    def unsupported(cls, resource: str, operation: str) -> "CapabilityError":
        return cls(resource, operation, CapabilityKind.UNSUPPORTED_OPERATION)

    @classmethod
    def not_implemented(cls, resource: str, operation: Optional[str] = None) -> "CapabilityError":
        return cls(resource, operation, CapabilityKind.NOT_IMPLEMENTED)

    @classmethod
    def unknown_resource(cls, resource: str) -> "CapabilityError":
        return cls(resource, None, CapabilityKind.UNKNOWN_RESOURCE)
