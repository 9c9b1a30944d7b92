"""Protobuf schema helpers built on the protobuf runtime.

Message classes are assembled from descriptor definitions at import time
instead of shipping protoc output; the resulting classes behave exactly like
generated ones (``FromString``, ``SerializeToString``, json_format).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from google.protobuf import any_pb2, descriptor_pb2, descriptor_pool, json_format
from google.protobuf.message import DecodeError as ProtobufDecodeError
from google.protobuf.message import Message
from google.protobuf.message_factory import GetMessageClass

from cosmosgate.codec.wire import b64encode_str
from cosmosgate.utils.exceptions import DecodeError, ValidationError

_FDP = descriptor_pb2.FieldDescriptorProto

STRING = _FDP.TYPE_STRING
BYTES = _FDP.TYPE_BYTES
BOOL = _FDP.TYPE_BOOL
INT32 = _FDP.TYPE_INT32
INT64 = _FDP.TYPE_INT64
UINT32 = _FDP.TYPE_UINT32
UINT64 = _FDP.TYPE_UINT64
MESSAGE = _FDP.TYPE_MESSAGE

ANY_PROTO = "google/protobuf/any.proto"

POOL = descriptor_pool.DescriptorPool()
POOL.AddSerializedFile(any_pb2.DESCRIPTOR.serialized_pb)


@dataclass(frozen=True)
class Field:
    name: str
    number: int
    kind: int
    message: str | None = None  # fully qualified name for MESSAGE fields
    repeated: bool = False


def _json_name(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def register_file(
    name: str,
    package: str,
    messages: Mapping[str, Iterable[Field]],
    dependencies: Iterable[str] = (),
) -> dict[str, type[Message]]:
    """Add a proto3 file to the shared pool and return its message classes."""
    file_proto = descriptor_pb2.FileDescriptorProto(name=name, package=package, syntax="proto3")
    file_proto.dependency.extend(dependencies)
    for message_name, fields in messages.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for field in fields:
            field_proto = message_proto.field.add(
                name=field.name,
                number=field.number,
                type=field.kind,
                label=_FDP.LABEL_REPEATED if field.repeated else _FDP.LABEL_OPTIONAL,
                json_name=_json_name(field.name),
            )
            if field.message:
                field_proto.type_name = f".{field.message}"
    POOL.AddSerializedFile(file_proto.SerializeToString())
    return {
        message_name: GetMessageClass(POOL.FindMessageTypeByName(f"{package}.{message_name}"))
        for message_name in messages
    }


def type_url_of(message_type: type[Message]) -> str:
    """Cosmos style type URL: "/" + full message name."""
    return f"/{message_type.DESCRIPTOR.full_name}"


def message_to_dict(message: Message) -> dict[str, Any]:
    """JSON-compatible view; 64-bit integers come out as decimal strings."""
    return json_format.MessageToDict(message, always_print_fields_with_no_presence=True)


def parse_message(message_type: type[Message], data: bytes) -> Message:
    try:
        return message_type.FromString(bytes(data))
    except ProtobufDecodeError as exc:
        raise DecodeError(
            f"Invalid {message_type.DESCRIPTOR.full_name} payload: {exc}",
            type_url=type_url_of(message_type),
        ) from exc


def make_decoder(message_type: type[Message]):
    """bytes -> dict decoder suitable for a MessageRegistry entry."""

    def decode(data: bytes) -> dict[str, Any]:
        return message_to_dict(parse_message(message_type, data))

    decode.__name__ = f"decode_{message_type.DESCRIPTOR.name}"
    return decode


def to_proto_json(value: Any) -> Any:
    """Prepare a request value for json_format.ParseDict."""
    if hasattr(value, "to_proto_json"):
        return value.to_proto_json()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return b64encode_str(bytes(value))
    if isinstance(value, Mapping):
        return {str(k): to_proto_json(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [to_proto_json(v) for v in value]
    return value


def to_message(message_type: type[Message], request: Any) -> Message:
    """Build a request message from a message instance or a dict candidate."""
    full_name = message_type.DESCRIPTOR.full_name
    if isinstance(request, Message):
        if request.DESCRIPTOR.full_name != full_name:
            raise ValidationError(
                f"Expected {full_name}, got {request.DESCRIPTOR.full_name}",
                field="request",
            )
        return request
    if request is None:
        return message_type()
    if not isinstance(request, Mapping):
        raise ValidationError(
            f"Request for {full_name} must be an object, got {type(request).__name__}",
            field="request",
        )
    try:
        return json_format.ParseDict(to_proto_json(request), message_type())
    except json_format.ParseError as exc:
        raise ValidationError(f"Request does not match {full_name}: {exc}", field="request") from exc
