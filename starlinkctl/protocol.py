"""Wire schema for the dish device service.

Only the messages and fields read by the status query are declared. They are
registered in a private descriptor pool so that generated ``spacex.api``
modules, if installed, do not collide with them.
"""

from __future__ import annotations

from typing import Optional

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.internal import enum_type_wrapper

PACKAGE = "SpaceX.API.Device"
REQUEST_ONEOF = "request"
RESPONSE_ONEOF = "response"
DISH_STATUS_VARIANT = "dish_get_status"

_Field = descriptor_pb2.FieldDescriptorProto


def _add_field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    field_type: int,
    *,
    type_name: Optional[str] = None,
    oneof_index: Optional[int] = None,
) -> None:
    field = message.field.add(
        name=name, number=number, type=field_type, label=_Field.LABEL_OPTIONAL
    )
    if type_name is not None:
        field.type_name = f".{PACKAGE}.{type_name}"
    if oneof_index is not None:
        field.oneof_index = oneof_index


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="starlinkctl/device.proto", package=PACKAGE, syntax="proto3"
    )

    dish_state = file_proto.enum_type.add(name="DishState")
    for number, name in enumerate(("UNKNOWN", "CONNECTED", "SEARCHING", "BOOTING")):
        dish_state.value.add(name=name, number=number)

    device_info = file_proto.message_type.add(name="DeviceInfo")
    _add_field(device_info, "id", 1, _Field.TYPE_STRING)
    _add_field(device_info, "hardware_version", 2, _Field.TYPE_STRING)
    _add_field(device_info, "software_version", 3, _Field.TYPE_STRING)
    _add_field(device_info, "country_code", 4, _Field.TYPE_STRING)

    device_state = file_proto.message_type.add(name="DeviceState")
    _add_field(device_state, "uptime_s", 1, _Field.TYPE_UINT64)

    obstruction = file_proto.message_type.add(name="DishObstructionStats")
    _add_field(obstruction, "fraction_obstructed", 1, _Field.TYPE_FLOAT)
    _add_field(obstruction, "valid_s", 4, _Field.TYPE_FLOAT)
    _add_field(obstruction, "currently_obstructed", 5, _Field.TYPE_BOOL)

    status = file_proto.message_type.add(name="DishGetStatusResponse")
    _add_field(status, "device_info", 1, _Field.TYPE_MESSAGE, type_name="DeviceInfo")
    _add_field(status, "device_state", 2, _Field.TYPE_MESSAGE, type_name="DeviceState")
    _add_field(status, "seconds_to_first_nonempty_slot", 1002, _Field.TYPE_FLOAT)
    _add_field(status, "pop_ping_drop_rate", 1003, _Field.TYPE_FLOAT)
    _add_field(
        status,
        "obstruction_stats",
        1004,
        _Field.TYPE_MESSAGE,
        type_name="DishObstructionStats",
    )
    _add_field(status, "state", 1006, _Field.TYPE_ENUM, type_name="DishState")
    _add_field(status, "downlink_throughput_bps", 1007, _Field.TYPE_FLOAT)
    _add_field(status, "uplink_throughput_bps", 1008, _Field.TYPE_FLOAT)
    _add_field(status, "pop_ping_latency_ms", 1009, _Field.TYPE_FLOAT)

    file_proto.message_type.add(name="GetStatusRequest")

    request = file_proto.message_type.add(name="Request")
    request.oneof_decl.add(name=REQUEST_ONEOF)
    _add_field(request, "id", 1, _Field.TYPE_UINT64)
    _add_field(
        request,
        "get_status",
        1004,
        _Field.TYPE_MESSAGE,
        type_name="GetStatusRequest",
        oneof_index=0,
    )

    response = file_proto.message_type.add(name="Response")
    response.oneof_decl.add(name=RESPONSE_ONEOF)
    _add_field(response, "id", 1, _Field.TYPE_UINT64)
    _add_field(
        response,
        DISH_STATUS_VARIANT,
        2004,
        _Field.TYPE_MESSAGE,
        type_name="DishGetStatusResponse",
        oneof_index=0,
    )

    return file_proto


_POOL = descriptor_pool.DescriptorPool()
DESCRIPTOR = _POOL.AddSerializedFile(_build_file().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(
        _POOL.FindMessageTypeByName(f"{PACKAGE}.{name}")
    )


DeviceInfo = _message_class("DeviceInfo")
DeviceState = _message_class("DeviceState")
DishObstructionStats = _message_class("DishObstructionStats")
DishGetStatusResponse = _message_class("DishGetStatusResponse")
GetStatusRequest = _message_class("GetStatusRequest")
Request = _message_class("Request")
Response = _message_class("Response")

DishState = enum_type_wrapper.EnumTypeWrapper(
    _POOL.FindEnumTypeByName(f"{PACKAGE}.DishState")
)


def dish_state_name(value: int) -> str:
    """Return the enum name for ``value``, or the number when it is unknown."""
    try:
        return DishState.Name(value)
    except ValueError:
        return str(value)


def get_status_request() -> Request:
    """Build a request envelope carrying the empty ``get_status`` variant."""
    request = Request()
    request.get_status.SetInParent()
    return request
