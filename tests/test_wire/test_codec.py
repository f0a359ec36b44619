"""Tests for the schema-free wire view."""

import pytest

from adsmodel.wire.codec import (
    DecodeError,
    WireType,
    check_int32,
    check_int64,
    iter_fields,
)


class TestIterFields:
    def test_mixed_fields(self):
        data = (
            b"\x08\x96\x01"  # 1: varint 150
            + b"\x12\x02hi"  # 2: bytes
            + b"\x19" + b"\x01" + b"\x00" * 7  # 3: fixed64
            + b"\x25\x02\x00\x00\x00"  # 4: fixed32
        )
        fields = list(iter_fields(data))
        assert [(tag, wire_type) for tag, wire_type, _ in fields] == [
            (1, WireType.VARINT),
            (2, WireType.LENGTH_DELIMITED),
            (3, WireType.FIXED64),
            (4, WireType.FIXED32),
        ]
        assert fields[0][2] == 150
        assert fields[1][2] == b"hi"
        assert fields[2][2] == 1
        assert fields[3][2] == 2

    def test_empty(self):
        assert list(iter_fields(b"")) == []

    def test_group(self):
        data = b"\x0b" + b"\x10\x01" + b"\x0c"  # group 1 holding 2: varint 1
        [(tag, wire_type, value)] = list(iter_fields(data))
        assert tag == 1
        assert wire_type is WireType.START_GROUP
        assert len(value) == 1

    def test_negative_int64_is_ten_bytes(self):
        data = b"\x08" + b"\xff" * 9 + b"\x01"
        [(_, _, value)] = list(iter_fields(data))
        assert value == (1 << 64) - 1

    @pytest.mark.parametrize(
        "data",
        [
            pytest.param(b"\x08\x80", id="truncated-varint"),
            pytest.param(b"\x0a\x05ab", id="length-overruns"),
            pytest.param(b"\x19\x00\x00", id="truncated-fixed64"),
            pytest.param(b"\x00\x01", id="field-zero"),
            pytest.param(b"\x0e\x01", id="reserved-wire-type"),
            pytest.param(b"\x0b\x10\x01", id="unterminated-group"),
            pytest.param(b"\x0c", id="stray-end-group"),
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(DecodeError):
            list(iter_fields(data))


class TestDecodeError:
    def test_is_value_error(self):
        assert issubclass(DecodeError, ValueError)

    def test_message(self):
        with pytest.raises(DecodeError, match="Malformed message"):
            list(iter_fields(b"\x0a\x05ab"))


class TestRangeChecks:
    def test_int64_bounds(self):
        assert check_int64((1 << 63) - 1) == (1 << 63) - 1
        assert check_int64(-(1 << 63)) == -(1 << 63)
        with pytest.raises(ValueError, match="int64"):
            check_int64(1 << 63)

    def test_int32_bounds(self):
        assert check_int32(-1) == -1
        with pytest.raises(ValueError, match="int32"):
            check_int32(1 << 31)
