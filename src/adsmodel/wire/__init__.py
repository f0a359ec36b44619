"""Binary wire format and the message base class."""

from .codec import DecodeError, WireType
from .message import FieldBehavior, WireMessage, WireSpec, wire_field

__all__ = [
    "DecodeError",
    "FieldBehavior",
    "WireMessage",
    "WireSpec",
    "WireType",
    "wire_field",
]
