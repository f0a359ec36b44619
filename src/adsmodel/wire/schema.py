"""Protobuf descriptors for :class:`~adsmodel.wire.message.WireMessage` classes.

Each message class is described by its own proto3 file, added to a private
descriptor pool the first time the class is encoded or decoded. Nested
message fields pull in the files of their classes as dependencies and
wrapper kinds refer to the well-known types in ``google/protobuf/wrappers.proto``.

Enums are declared inside a ``<Name>Enum`` holder message, the way the Ads
API protos do it, so sibling enums may share value names like UNSPECIFIED.
"""

import itertools
import logging
import threading
from typing import Any, Dict, Set

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, wrappers_pb2

logger = logging.getLogger(__name__)

PACKAGE = "adsmodel.wire"

FieldProto = descriptor_pb2.FieldDescriptorProto

SCALAR_TYPES = {
    "string": FieldProto.TYPE_STRING,
    "bytes": FieldProto.TYPE_BYTES,
    "bool": FieldProto.TYPE_BOOL,
    "int32": FieldProto.TYPE_INT32,
    "int64": FieldProto.TYPE_INT64,
    "double": FieldProto.TYPE_DOUBLE,
}

WRAPPER_TYPES = {
    "string_value": ".google.protobuf.StringValue",
    "bytes_value": ".google.protobuf.BytesValue",
    "bool_value": ".google.protobuf.BoolValue",
    "int32_value": ".google.protobuf.Int32Value",
    "int64_value": ".google.protobuf.Int64Value",
    "double_value": ".google.protobuf.DoubleValue",
}

_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(wrappers_pb2.DESCRIPTOR.serialized_pb)

_classes: Dict[type, Any] = {}
_sequence = itertools.count(1)
_lock = threading.RLock()


def proto_class(message_cls: type) -> Any:
    """Generated protobuf class that mirrors ``message_cls``."""
    with _lock:
        generated = _classes.get(message_cls)
        if generated is None:
            generated = _build(message_cls)
            _classes[message_cls] = generated
        return generated


def _build(message_cls: type) -> Any:
    # Class names are not unique across modules, so every file gets a suffix.
    name = f"{message_cls.__name__}{next(_sequence)}"
    full_name = f"{PACKAGE}.{name}"
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f"adsmodel/{name.lower()}.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    message = file_proto.message_type.add(name=name)
    dependencies: Set[str] = set()
    oneofs: Dict[str, int] = {}

    for field_name, spec in message_cls.__wire_fields__.items():
        field = message.field.add(
            name=field_name, number=spec.tag, label=FieldProto.LABEL_OPTIONAL
        )
        if spec.kind == "map":
            entry = message.nested_type.add(name=_entry_name(field_name))
            entry.options.map_entry = True
            key = entry.field.add(name="key", number=1, label=FieldProto.LABEL_OPTIONAL)
            value = entry.field.add(name="value", number=2, label=FieldProto.LABEL_OPTIONAL)
            _set_type(key, spec.map_key, spec, message, full_name, dependencies)
            _set_type(value, spec.map_value, spec, message, full_name, dependencies)
            field.label = FieldProto.LABEL_REPEATED
            field.type = FieldProto.TYPE_MESSAGE
            field.type_name = f".{full_name}.{entry.name}"
            continue

        _set_type(field, spec.kind, spec, message, full_name, dependencies)
        if spec.repeated:
            field.label = FieldProto.LABEL_REPEATED
        if spec.oneof is not None:
            if spec.oneof not in oneofs:
                oneofs[spec.oneof] = len(message.oneof_decl)
                message.oneof_decl.add(name=spec.oneof)
            field.oneof_index = oneofs[spec.oneof]

    file_proto.dependency.extend(sorted(dependencies))
    _pool.AddSerializedFile(file_proto.SerializeToString())
    descriptor = _pool.FindMessageTypeByName(full_name)
    logger.debug(f"Built descriptor {full_name} for {message_cls.__qualname__}")
    return message_factory.GetMessageClass(descriptor)


def _entry_name(field_name: str) -> str:
    return "".join(part.capitalize() for part in field_name.split("_")) + "Entry"


def _set_type(
    field: Any,
    kind: str,
    spec: Any,
    message: Any,
    full_name: str,
    dependencies: Set[str],
) -> None:
    if kind in SCALAR_TYPES:
        field.type = SCALAR_TYPES[kind]
    elif kind in WRAPPER_TYPES:
        field.type = FieldProto.TYPE_MESSAGE
        field.type_name = WRAPPER_TYPES[kind]
        dependencies.add(wrappers_pb2.DESCRIPTOR.name)
    elif kind == "enum":
        field.type = FieldProto.TYPE_ENUM
        field.type_name = _declare_enum(message, full_name, spec.enum)
    else:
        nested = proto_class(spec.message).DESCRIPTOR
        field.type = FieldProto.TYPE_MESSAGE
        field.type_name = f".{nested.full_name}"
        dependencies.add(nested.file.name)


def _declare_enum(message: Any, full_name: str, enum_cls: type) -> str:
    holder_name = f"{enum_cls.__name__}Enum"
    if not any(nested.name == holder_name for nested in message.nested_type):
        holder = message.nested_type.add(name=holder_name)
        values = holder.enum_type.add(name=enum_cls.__name__)
        for member in enum_cls:
            values.value.add(name=member.name, number=int(member))
    return f".{full_name}.{holder_name}.{enum_cls.__name__}"
