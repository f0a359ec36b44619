"""Schema-free view of the binary wire format.

Every field on the wire is a key followed by a value. The key packs the
field number and a wire type; the wire type tells a reader how many bytes
the value occupies without knowing the schema, which is what lets unknown
fields be skipped or carried along. Parsing is done by the protobuf
runtime: bytes are read into ``google.protobuf.Empty`` so that every field
lands in its unknown field set.
"""

from enum import IntEnum
from typing import Any, Iterator, Tuple

from google.protobuf import empty_pb2
from google.protobuf.message import DecodeError as ProtoDecodeError
from google.protobuf.unknown_fields import UnknownFieldSet

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


class WireType(IntEnum):
    """Wire types understood by the binary encoding."""

    VARINT = 0
    FIXED64 = 1
    LENGTH_DELIMITED = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


class DecodeError(ValueError):
    """Raised when input is not well-formed for the declared schema."""


def check_int64(value: int) -> int:
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"Value {value} out of range for int64")
    return value


def check_int32(value: int) -> int:
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"Value {value} out of range for int32")
    return value


def parse_or_raise(message: Any, data: bytes, what: str) -> None:
    """Parse ``data`` into a protobuf ``message``, raising our DecodeError."""
    try:
        message.ParseFromString(bytes(data))
    except (ProtoDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Malformed {what}: {e}") from e


def iter_fields(data: bytes) -> Iterator[Tuple[int, WireType, Any]]:
    """Scan a serialized message field by field.

    Yields:
        Tuples of (tag, wire type, value). The value is an int for VARINT
        and the fixed-width types, bytes for LENGTH_DELIMITED and a nested
        unknown field set for groups.

    Raises:
        DecodeError: On any malformed field.
    """
    message = empty_pb2.Empty()
    parse_or_raise(message, data, "message")
    for field in UnknownFieldSet(message):
        yield field.field_number, WireType(field.wire_type), field.data
