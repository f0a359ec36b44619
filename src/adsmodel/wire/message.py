"""Pydantic base model for messages that travel in the binary wire format.

Fields are declared with :func:`wire_field`, which records the field's tag,
wire kind and lifecycle behavior next to its Pydantic definition. The tag is
the durable identity of a field: names may change, tags never do.

Kinds:
    Plain scalars (``string``, ``bytes``, ``bool``, ``int32``, ``int64``,
    ``double``, ``enum``) follow implicit presence: the zero value is never
    written. Wrapper kinds (``string_value``, ``bool_value``, ...) are
    Optional and distinguish unset (``None``) from a present zero value.
    ``message`` and ``map`` hold nested messages and key/value entries.

Serialization is delegated to the protobuf runtime. Each class is mirrored
by a generated protobuf message (see :mod:`adsmodel.wire.schema`); the
Pydantic model is converted to it for ``encode``/``to_dict`` and built
from it after ``decode``/``from_dict``.
"""

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar

from google.protobuf import json_format
from google.protobuf.unknown_fields import UnknownFieldSet
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from .codec import DecodeError, WireType, check_int32, check_int64, parse_or_raise
from .schema import proto_class

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="WireMessage")

DEFAULT_MAX_DEPTH = 100

SCALAR_KINDS = {"string", "bytes", "bool", "int32", "int64", "double", "enum"}
WRAPPER_KINDS = {
    "string_value",
    "bytes_value",
    "bool_value",
    "int32_value",
    "int64_value",
    "double_value",
}

_ZERO_VALUES = {
    "string": "",
    "bytes": b"",
    "bool": False,
    "int32": 0,
    "int64": 0,
    "double": 0.0,
}


class FieldBehavior(str, Enum):
    """Who may write a field and when."""

    MUTABLE = "mutable"
    IMMUTABLE = "immutable"  # settable at creation only
    OUTPUT_ONLY = "output_only"  # computed by the owning service


@dataclass(frozen=True)
class WireSpec:
    """Wire-level description of a single message field."""

    tag: int
    kind: str
    message: Optional[type] = None
    enum: Optional[Type[IntEnum]] = None
    repeated: bool = False
    oneof: Optional[str] = None
    behavior: FieldBehavior = FieldBehavior.MUTABLE
    required_on_create: bool = False
    filterable: bool = True
    map_key: Optional[str] = None
    map_value: Optional[str] = None

    @property
    def is_wrapper(self) -> bool:
        return self.kind in WRAPPER_KINDS

    @property
    def scalar_kind(self) -> str:
        """Underlying scalar kind, unwrapping wrapper kinds."""
        if self.is_wrapper:
            return self.kind[: -len("_value")]
        return self.kind


def wire_field(
    tag: int,
    kind: str,
    *,
    message: Optional[type] = None,
    enum: Optional[Type[IntEnum]] = None,
    repeated: bool = False,
    oneof: Optional[str] = None,
    behavior: FieldBehavior = FieldBehavior.MUTABLE,
    required_on_create: bool = False,
    filterable: bool = True,
    map_key: Optional[str] = None,
    map_value: Optional[str] = None,
    description: Optional[str] = None,
) -> Any:
    """Declare a wire-encoded field on a :class:`WireMessage`.

    Picks the default that matches the field's presence semantics: empty
    list or dict for repeated and map fields, ``None`` for wrappers,
    messages and oneof members, and the zero value for plain scalars.
    """
    if kind not in SCALAR_KINDS | WRAPPER_KINDS | {"message", "map"}:
        raise ValueError(f"Unknown wire kind: {kind}")
    if kind == "message" and message is None:
        raise ValueError(f"Field {tag} of kind 'message' needs a message class")
    if kind == "enum" and enum is None:
        raise ValueError(f"Field {tag} of kind 'enum' needs an enum class")
    if kind == "map" and (map_key is None or map_value is None):
        raise ValueError(f"Map field {tag} needs map_key and map_value kinds")

    spec = WireSpec(
        tag=tag,
        kind=kind,
        message=message,
        enum=enum,
        repeated=repeated,
        oneof=oneof,
        behavior=behavior,
        required_on_create=required_on_create,
        filterable=filterable,
        map_key=map_key,
        map_value=map_value,
    )
    extra = {"wire": spec}

    if repeated:
        return Field(default_factory=list, json_schema_extra=extra, description=description)
    if kind == "map":
        return Field(default_factory=dict, json_schema_extra=extra, description=description)
    if oneof is not None or kind in WRAPPER_KINDS or kind == "message":
        return Field(default=None, json_schema_extra=extra, description=description)
    if kind == "enum":
        return Field(default=enum(0), json_schema_extra=extra, description=description)
    return Field(default=_ZERO_VALUES[kind], json_schema_extra=extra, description=description)


class WireMessage(BaseModel):
    """Base class for all wire-encoded messages.

    Subclasses get a tag registry built at class creation, oneof groups
    with last-set-wins assignment, binary ``encode``/``decode`` and a text
    form through ``to_dict``/``from_dict``. Unknown fields seen while
    decoding are kept verbatim and written back by ``encode``.
    """

    model_config = ConfigDict(extra="forbid")

    __wire_fields__: ClassVar[Dict[str, WireSpec]] = {}
    __wire_tags__: ClassVar[Dict[int, str]] = {}
    __oneofs__: ClassVar[Dict[str, Tuple[str, ...]]] = {}

    _unknown_fields: bytes = PrivateAttr(default=b"")

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        fields: Dict[str, WireSpec] = {}
        tags: Dict[int, str] = {}
        oneofs: Dict[str, List[str]] = {}
        for name, info in cls.model_fields.items():
            extra = info.json_schema_extra
            if not isinstance(extra, dict) or "wire" not in extra:
                continue
            spec = extra["wire"]
            if spec.tag in tags:
                raise TypeError(
                    f"{cls.__name__}: tag {spec.tag} used by both "
                    f"'{tags[spec.tag]}' and '{name}'"
                )
            fields[name] = spec
            tags[spec.tag] = name
            if spec.oneof is not None:
                oneofs.setdefault(spec.oneof, []).append(name)
        cls.__wire_fields__ = fields
        cls.__wire_tags__ = tags
        cls.__oneofs__ = {group: tuple(names) for group, names in oneofs.items()}

    # Oneof handling

    def __setattr__(self, name: str, value: Any) -> None:
        spec = self.__wire_fields__.get(name)
        if spec is not None and spec.oneof is not None and value is not None:
            for sibling in self.__oneofs__[spec.oneof]:
                if sibling != name and getattr(self, sibling) is not None:
                    logger.debug(
                        f"{type(self).__name__}.{spec.oneof}: "
                        f"'{name}' replaces '{sibling}'"
                    )
                    super().__setattr__(sibling, None)
        super().__setattr__(name, value)
        if spec is not None and spec.oneof is not None:
            self._on_oneof_change(spec.oneof)

    def _on_oneof_change(self, group: str) -> None:
        """Hook for messages that derive fields from a oneof's state."""

    def set_oneof_members(self, group: str) -> List[str]:
        """Names of all members of ``group`` that currently hold a value."""
        return [n for n in self.__oneofs__[group] if getattr(self, n) is not None]

    def which_oneof(self, group: str) -> Optional[str]:
        """Name of the member of ``group`` that is set, or None."""
        members = self.set_oneof_members(group)
        return members[0] if members else None

    def has_field(self, name: str) -> bool:
        """Whether ``name`` would be written to the wire."""
        spec = self.__wire_fields__[name]
        value = getattr(self, name)
        if spec.repeated or spec.kind == "map":
            return bool(value)
        if spec.oneof is not None or spec.is_wrapper or spec.kind == "message":
            return value is not None
        if spec.kind == "enum":
            return int(value) != 0
        return value != _ZERO_VALUES[spec.kind]

    def clear_field(self, name: str) -> None:
        spec = self.__wire_fields__[name]
        if spec.repeated:
            super().__setattr__(name, [])
        elif spec.kind == "map":
            super().__setattr__(name, {})
        elif spec.oneof is not None or spec.is_wrapper or spec.kind == "message":
            super().__setattr__(name, None)
            if spec.oneof is not None:
                self._on_oneof_change(spec.oneof)
        elif spec.kind == "enum":
            super().__setattr__(name, spec.enum(0))
        else:
            super().__setattr__(name, _ZERO_VALUES[spec.kind])

    @property
    def unknown_fields(self) -> bytes:
        """Serialized fields this schema version does not know.

        Includes enum numbers the declared enum does not define.
        """
        return self._unknown_fields

    # Binary form

    def to_proto(self) -> Any:
        """Equivalent generated protobuf message, unknown fields included."""
        proto = proto_class(type(self))()
        for name, spec in self.__wire_fields__.items():
            _copy_to_proto(proto, name, spec, getattr(self, name))
        if self._unknown_fields:
            proto.MergeFromString(self._unknown_fields)
        return proto

    @classmethod
    def from_proto(
        cls: Type[M],
        proto: Any,
        *,
        preserve_unknown: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> M:
        """Build a message from its generated protobuf counterpart.

        Raises:
            DecodeError: If the values do not fit this message.
        """
        return cls._from_proto(proto, 0, preserve_unknown, max_depth)

    def encode(self) -> bytes:
        """Serialize to the binary wire format, fields in tag order."""
        return self.to_proto().SerializeToString(deterministic=True)

    @classmethod
    def decode(
        cls: Type[M],
        data: bytes,
        *,
        preserve_unknown: bool = True,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> M:
        """Parse a message from the binary wire format.

        Raises:
            DecodeError: If ``data`` is not well-formed for this message.
        """
        proto = proto_class(cls)()
        parse_or_raise(proto, data, cls.__name__)
        return cls._from_proto(proto, 0, preserve_unknown, max_depth)

    @classmethod
    def _from_proto(
        cls: Type[M],
        proto: Any,
        depth: int,
        preserve_unknown: bool,
        max_depth: int,
    ) -> M:
        if depth > max_depth:
            raise DecodeError(
                f"{cls.__name__}: message nesting exceeds depth {max_depth}"
            )
        unknown_count = _check_unknown_tags(cls, proto)

        values: Dict[str, Any] = {}
        # Holds enum numbers the declared enums do not define.
        unknown_enums = proto_class(cls)()
        nested = (depth + 1, preserve_unknown, max_depth)

        for name, spec in cls.__wire_fields__.items():
            field = getattr(proto, name)
            if spec.kind == "map":
                if spec.map_value == "message":
                    values[name] = {
                        k: spec.message._from_proto(v, *nested) for k, v in field.items()
                    }
                else:
                    values[name] = dict(field.items())
            elif spec.repeated:
                if spec.kind == "message":
                    values[name] = [spec.message._from_proto(v, *nested) for v in field]
                elif spec.is_wrapper:
                    values[name] = [v.value for v in field]
                elif spec.kind == "enum":
                    items = []
                    for number in field:
                        try:
                            items.append(spec.enum(number))
                        except ValueError:
                            getattr(unknown_enums, name).append(number)
                    values[name] = items
                else:
                    values[name] = list(field)
            elif spec.kind == "message" or spec.is_wrapper or spec.oneof is not None:
                if not proto.HasField(name):
                    continue
                if spec.kind == "message":
                    values[name] = spec.message._from_proto(field, *nested)
                elif spec.is_wrapper:
                    values[name] = field.value
                else:
                    values[name] = field
            elif spec.kind == "enum":
                try:
                    values[name] = spec.enum(field)
                except ValueError:
                    logger.debug(f"{cls.__name__}.{name}: unknown enum number {field}")
                    setattr(unknown_enums, name, field)
            else:
                values[name] = field

        try:
            message = cls(**values)
        except PydanticValidationError as e:
            raise DecodeError(f"{cls.__name__}: decoded values rejected: {e}") from e
        if preserve_unknown:
            kept = unknown_enums.SerializeToString()
            if unknown_count:
                logger.debug(f"{cls.__name__}: keeping {unknown_count} unknown field(s)")
                kept += _unknown_bytes(proto)
            message._unknown_fields = kept
        return message

    # Text form

    def to_dict(self) -> Dict[str, Any]:
        """Text form in protobuf JSON mapping with the declared field names.

        Enums appear by name, bytes as base64, 64-bit integers as strings
        and absent fields are omitted.
        """
        return json_format.MessageToDict(
            self.to_proto(), preserving_proto_field_name=True
        )

    @classmethod
    def from_dict(cls: Type[M], data: Dict[str, Any]) -> M:
        """Build a message from its text form.

        Raises:
            DecodeError: If the data does not fit the schema.
        """
        proto = proto_class(cls)()
        try:
            json_format.ParseDict(data, proto)
        except json_format.ParseError as e:
            raise DecodeError(f"Invalid {cls.__name__} document: {e}") from e
        return cls._from_proto(proto, 0, True, DEFAULT_MAX_DEPTH)


def _proto_value(kind: str, value: Any) -> Any:
    if kind == "enum":
        return int(value)
    if kind == "int64":
        return check_int64(int(value))
    if kind == "int32":
        return check_int32(int(value))
    if kind == "double":
        return float(value)
    return value


def _copy_to_proto(proto: Any, name: str, spec: WireSpec, value: Any) -> None:
    if spec.kind == "map":
        target = getattr(proto, name)
        for key, item in value.items():
            if spec.map_value == "message":
                target[key].CopyFrom(item.to_proto())
            else:
                target[key] = _proto_value(spec.map_value, item)
    elif spec.repeated:
        target = getattr(proto, name)
        for item in value:
            if spec.kind == "message":
                target.add().CopyFrom(item.to_proto())
            elif spec.is_wrapper:
                target.add(value=_proto_value(spec.scalar_kind, item))
            else:
                target.append(_proto_value(spec.kind, item))
    elif value is None:
        return
    elif spec.kind == "message":
        target = getattr(proto, name)
        target.SetInParent()
        target.MergeFrom(value.to_proto())
    elif spec.is_wrapper:
        target = getattr(proto, name)
        target.SetInParent()
        target.value = _proto_value(spec.scalar_kind, value)
    else:
        setattr(proto, name, _proto_value(spec.kind, value))


def _check_unknown_tags(cls: type, proto: Any) -> int:
    """Count unknown fields, rejecting known tags with the wrong wire type.

    The protobuf runtime files a field whose wire type does not match its
    declaration under unknown fields.
    """
    unknown = UnknownFieldSet(proto)
    for field in unknown:
        name = cls.__wire_tags__.get(field.field_number)
        if name is not None:
            raise DecodeError(
                f"{cls.__name__}.{name} (tag {field.field_number}) has "
                f"unexpected wire type {WireType(field.wire_type).name}"
            )
    return len(unknown)


def _unknown_bytes(proto: Any) -> bytes:
    rest = type(proto)()
    rest.CopyFrom(proto)
    for field in rest.DESCRIPTOR.fields:
        rest.ClearField(field.name)
    return rest.SerializeToString()
