"""
Resource capability registry.

Each Samanage resource is described once in ``RESOURCES``: its URI segment,
the operations it supports, the operations it rejects outright, and any
nested collections it can read. ``build_handle`` turns a descriptor into the
object the client exposes, so changing what a resource can do is a data
edit here.
"""
import logging
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from samanage.errors import CapabilityError
from samanage.request_builder import Parameters, RequestBuilder

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """CRUD operations a resource may offer."""

    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ALL_OPERATIONS: FrozenSet[Operation] = frozenset(Operation)


class ResourceDescriptor(BaseModel):
    """Static metadata for one logical resource."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Attribute name on the client")
    segment: Optional[str] = Field(None, description="URI segment; defaults to name")
    operations: FrozenSet[Operation] = Field(default_factory=frozenset)
    rejected: FrozenSet[Operation] = Field(
        default_factory=frozenset,
        description="Operations present on the handle that fail when called",
    )
    implemented: bool = True
    nested_reads: Tuple[Tuple[str, str], ...] = Field(
        default=(),
        description="(handle attribute, parent segment) pairs for /{parent}/{id}/{segment} reads",
    )

    @model_validator(mode="after")
    def _check_capabilities(self) -> "ResourceDescriptor":
        if self.operations & self.rejected:
            raise ValueError(f"{self.name}: an operation cannot be both supported and rejected")
        if not self.implemented and (self.operations or self.nested_reads):
            raise ValueError(f"{self.name}: unimplemented resources expose no operations")
        return self

    @property
    def uri_segment(self) -> str:
        return self.segment or self.name

    def supports(self, operation: Union[Operation, str]) -> bool:
        try:
            return Operation(operation) in self.operations
        except ValueError:
            return False


def _crud(name: str, segment: Optional[str] = None, **extra: Any) -> ResourceDescriptor:
    return ResourceDescriptor(name=name, segment=segment, operations=ALL_OPERATIONS, **extra)


def _only(name: str, segment: Optional[str], *operations: Operation, **extra: Any) -> ResourceDescriptor:
    return ResourceDescriptor(name=name, segment=segment, operations=frozenset(operations), **extra)


def _unimplemented(name: str) -> ResourceDescriptor:
    return ResourceDescriptor(name=name, implemented=False)


RESOURCES: Tuple[ResourceDescriptor, ...] = (
    _only("attachments", None, Operation.CREATE),
    _only("audit", "audits", Operation.GET),
    _only("catalog_items", None, Operation.GET, Operation.CREATE, Operation.UPDATE),
    _crud("categories"),
    _crud("changes"),
    _unimplemented("comments"),
    _crud("configuration_items"),
    _only(
        "contracts", None, Operation.GET, Operation.CREATE, Operation.UPDATE,
        rejected=frozenset({Operation.DELETE}),
    ),
    _crud("departments"),
    _crud("groups"),
    _crud("hardware", "hardwares"),
    _crud("incidents"),
    _unimplemented("items"),
    _crud("memberships"),
    _crud("mobiles"),
    _crud("other_assets"),
    _only("printers", None, Operation.GET),
    _crud("problems"),
    _crud("purchase_orders"),
    _crud("releases"),
    _crud("risks", nested_reads=(("get_for_hardware", "hardwares"),)),
    _crud("roles"),
    _unimplemented("service_requests"),
    _crud("sites"),
    _only("software", "softwares", Operation.GET),
    _crud("solutions"),
    _unimplemented("tasks"),
    _unimplemented("time_tracks"),
    _crud("users"),
    _only("vendor", "vendors", Operation.GET),
    _unimplemented("warranties"),
)

REGISTRY: Dict[str, ResourceDescriptor] = {descriptor.name: descriptor for descriptor in RESOURCES}


def get_descriptor(name: str) -> ResourceDescriptor:
    """Look up a resource descriptor by name."""
    try:
        return REGISTRY[name]
    except KeyError:
        raise CapabilityError.unknown_resource(name) from None


def _rejecting(resource: str, operation: str) -> Callable[..., Any]:
    def rejected(*args: Any, **kwargs: Any) -> Any:
        logger.debug(f"Rejected {operation} on {resource}")
        raise CapabilityError.unsupported(resource, operation)

    rejected.__name__ = operation
    return rejected


def _nested_reader(builder: RequestBuilder, parent_segment: str, segment: str) -> Callable[..., Any]:
    def read(parent_id: Any, parameters: Optional[Parameters] = None):
        return builder.get(f"{parent_segment}/{parent_id}/{segment}", parameters)

    return read


class ResourceHandle:
    """Operations of one resource, bound to its URI segment.

    Only the operations the descriptor lists are set as attributes. Rejected
    operations are set too, but raise ``CapabilityError`` when called.
    """

    def __init__(self, descriptor: ResourceDescriptor, builder: RequestBuilder):
        self.descriptor = descriptor
        segment = descriptor.uri_segment
        for operation in descriptor.operations:
            setattr(self, operation.value, partial(getattr(builder, operation.value), segment))
        for operation in descriptor.rejected:
            setattr(self, operation.value, _rejecting(descriptor.name, operation.value))
        for attribute, parent_segment in descriptor.nested_reads:
            setattr(self, attribute, _nested_reader(builder, parent_segment, segment))

    def supports(self, operation: Union[Operation, str]) -> bool:
        return self.descriptor.supports(operation)

    def __repr__(self) -> str:
        operations = ", ".join(sorted(op.value for op in self.descriptor.operations))
        return f"<ResourceHandle {self.descriptor.name} /{self.descriptor.uri_segment} [{operations}]>"


class UnimplementedResource:
    """Stand-in for resources the client does not implement.

    Any operation looked up on it, or calling it, raises ``CapabilityError``.
    """

    def __init__(self, descriptor: ResourceDescriptor):
        self.descriptor = descriptor

    def supports(self, operation: Union[Operation, str]) -> bool:
        return False

    def __getattr__(self, item: str) -> Any:
        if item.startswith("_") or item == "descriptor":
            raise AttributeError(item)
        raise CapabilityError.not_implemented(self.descriptor.name, item)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise CapabilityError.not_implemented(self.descriptor.name)

    def __repr__(self) -> str:
        return f"<UnimplementedResource {self.descriptor.name}>"


Handle = Union[ResourceHandle, UnimplementedResource]


def build_handle(descriptor: ResourceDescriptor, builder: RequestBuilder) -> Handle:
    """Create the handle a client exposes for ``descriptor``."""
    if not descriptor.implemented:
        return UnimplementedResource(descriptor)
    return ResourceHandle(descriptor, builder)
