"""
Tests for the resource capability registry and handle factory.
"""
import pytest
from pydantic import ValidationError

from samanage import Samanage
from samanage.errors import CapabilityError, CapabilityKind
from samanage.resources import (
    REGISTRY,
    RESOURCES,
    Operation,
    ResourceDescriptor,
    ResourceHandle,
    UnimplementedResource,
    get_descriptor,
)
from tests.test_utils import (
    FULL_CRUD_SEGMENTS,
    PARTIAL_RESOURCES,
    TEST_API_KEY,
    TEST_BASE_URL,
    UNIMPLEMENTED_RESOURCES,
    make_mock_transport,
    network_calls,
)


@pytest.fixture
def mock_transport():
    return make_mock_transport()


@pytest.fixture
def api(mock_transport) -> Samanage:
    return Samanage(TEST_API_KEY, transport=mock_transport)


def test_registry_covers_every_resource():
    expected = set(FULL_CRUD_SEGMENTS) | set(PARTIAL_RESOURCES) | set(UNIMPLEMENTED_RESOURCES)
    assert set(REGISTRY) == expected
    assert len(RESOURCES) == len(REGISTRY)


def test_segments_differ_from_names_where_declared():
    assert get_descriptor("hardware").uri_segment == "hardwares"
    assert get_descriptor("software").uri_segment == "softwares"
    assert get_descriptor("vendor").uri_segment == "vendors"
    assert get_descriptor("audit").uri_segment == "audits"
    assert get_descriptor("users").uri_segment == "users"


def test_unknown_descriptor():
    with pytest.raises(CapabilityError) as exc_info:
        get_descriptor("purchases")
    assert exc_info.value.kind is CapabilityKind.UNKNOWN_RESOURCE


@pytest.mark.parametrize("name", sorted(FULL_CRUD_SEGMENTS))
def test_full_crud_handles_expose_every_operation(api, name):
    handle = getattr(api, name)
    assert isinstance(handle, ResourceHandle)
    for operation in Operation:
        assert callable(getattr(handle, operation.value))
        assert handle.supports(operation)


@pytest.mark.asyncio
@pytest.mark.parametrize("name,segment", sorted(FULL_CRUD_SEGMENTS.items()))
async def test_full_crud_paths(api, mock_transport, name, segment):
    handle = getattr(api, name)

    await handle.get({"per_page": 1})
    await handle.create({"item": {"name": "x"}})
    await handle.update("5", {"item": {"name": "y"}})
    await handle.delete("5")

    assert mock_transport.get.await_args.args == (f"{TEST_BASE_URL}/{segment}.json?per_page=1",)
    assert mock_transport.post.await_args.args == (f"{TEST_BASE_URL}/{segment}.json",)
    assert mock_transport.put.await_args.args == (f"{TEST_BASE_URL}/{segment}/5.json",)
    assert mock_transport.delete.await_args.args == (f"{TEST_BASE_URL}/{segment}/5.json",)


@pytest.mark.parametrize("name", sorted(PARTIAL_RESOURCES))
def test_partial_handles(api, name):
    _, supported, rejected = PARTIAL_RESOURCES[name]
    handle = getattr(api, name)
    for operation in Operation:
        if operation.value in supported:
            assert callable(getattr(handle, operation.value))
        elif operation.value in rejected:
            assert hasattr(handle, operation.value)
            assert not handle.supports(operation)
        else:
            assert not hasattr(handle, operation.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("name", sorted(PARTIAL_RESOURCES))
async def test_partial_handles_use_their_segment(api, mock_transport, name):
    segment, supported, _ = PARTIAL_RESOURCES[name]
    handle = getattr(api, name)
    if "get" in supported:
        await handle.get()
        assert mock_transport.get.await_args.args == (f"{TEST_BASE_URL}/{segment}.json",)
    if "create" in supported:
        await handle.create({"x": 1})
        assert mock_transport.post.await_args.args == (f"{TEST_BASE_URL}/{segment}.json",)


def test_absent_operations_are_not_callable(api):
    with pytest.raises(AttributeError):
        api.software.create({"software": {}})
    with pytest.raises(AttributeError):
        api.catalog_items.delete("1")
    with pytest.raises(AttributeError):
        api.attachments.get()


def test_rejected_operation_fails_before_network(api, mock_transport):
    with pytest.raises(CapabilityError) as exc_info:
        api.contracts.delete("3")

    error = exc_info.value
    assert error.kind is CapabilityKind.UNSUPPORTED_OPERATION
    assert error.resource == "contracts"
    assert error.operation == "delete"
    assert "delete" in str(error)
    assert network_calls(mock_transport) == 0


@pytest.mark.parametrize("name", UNIMPLEMENTED_RESOURCES)
def test_unimplemented_resources_reject_everything(api, mock_transport, name):
    handle = getattr(api, name)
    assert isinstance(handle, UnimplementedResource)
    assert not handle.supports("get")

    for operation in Operation:
        with pytest.raises(CapabilityError) as exc_info:
            getattr(handle, operation.value)
        assert exc_info.value.kind is CapabilityKind.NOT_IMPLEMENTED
        assert exc_info.value.resource == name

    with pytest.raises(CapabilityError):
        handle()
    assert network_calls(mock_transport) == 0


@pytest.mark.asyncio
async def test_risks_nested_hardware_read(api, mock_transport):
    await api.risks.get_for_hardware("42")
    assert mock_transport.get.await_args.args == (f"{TEST_BASE_URL}/hardwares/42/risks.json",)

    await api.risks.get_for_hardware("42", {"per_page": 5})
    assert mock_transport.get.await_args.args == (f"{TEST_BASE_URL}/hardwares/42/risks.json?per_page=5",)


def test_handles_are_bound_at_construction(api):
    descriptor = api.printers.descriptor
    assert descriptor.operations == frozenset({Operation.GET})
    assert "printers" in repr(api.printers)
    assert "comments" in repr(api.comments)


def test_descriptor_rejects_overlapping_capabilities():
    with pytest.raises(ValidationError):
        ResourceDescriptor(
            name="things",
            operations=frozenset({Operation.GET, Operation.DELETE}),
            rejected=frozenset({Operation.DELETE}),
        )


def test_descriptor_unimplemented_cannot_have_operations():
    with pytest.raises(ValidationError):
        ResourceDescriptor(name="things", implemented=False, operations=frozenset({Operation.GET}))


def test_descriptor_supports_accepts_strings():
    descriptor = get_descriptor("catalog_items")
    assert descriptor.supports("update")
    assert not descriptor.supports("delete")
    assert not descriptor.supports("archive")


def test_descriptors_are_hashable():
    risks = get_descriptor("risks")
    assert risks.nested_reads == (("get_for_hardware", "hardwares"),)
    assert hash(risks) == hash(get_descriptor("risks"))
    assert len(set(REGISTRY.values())) == len(RESOURCES)
