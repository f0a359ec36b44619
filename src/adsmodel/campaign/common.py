"""Common types shared by Ads resources: bidding schemes and settings."""

from typing import List, Optional

from adsmodel.wire.message import WireMessage, wire_field

from .enums import (
    FrequencyCapEventType,
    FrequencyCapLevel,
    FrequencyCapTimeUnit,
    TargetingDimension,
)


# Bidding schemes


class ManualCpc(WireMessage):
    """Manual click-based bidding where the user pays per click."""

    enhanced_cpc_enabled: Optional[bool] = wire_field(1, "bool_value")


class ManualCpm(WireMessage):
    """Manual impression-based bidding, paid per thousand impressions."""


class ManualCpv(WireMessage):
    """Pays a configurable amount per video view."""


class MaximizeConversions(WireMessage):
    """Maximizes the number of conversions within the daily budget."""


class MaximizeConversionValue(WireMessage):
    """Sets bids to maximize revenue while spending the budget."""


class TargetCpa(WireMessage):
    """Bids for as many conversions as possible at the target CPA."""

    target_cpa_micros: Optional[int] = wire_field(1, "int64_value")
    cpc_bid_ceiling_micros: Optional[int] = wire_field(2, "int64_value")
    cpc_bid_floor_micros: Optional[int] = wire_field(3, "int64_value")


class TargetRoas(WireMessage):
    """Maximizes revenue while averaging a target return on ad spend."""

    target_roas: Optional[float] = wire_field(1, "double_value")
    cpc_bid_ceiling_micros: Optional[int] = wire_field(2, "int64_value")
    cpc_bid_floor_micros: Optional[int] = wire_field(3, "int64_value")


class TargetSpend(WireMessage):
    """Bids for as many clicks as possible within the budget."""

    target_spend_micros: Optional[int] = wire_field(1, "int64_value")
    cpc_bid_ceiling_micros: Optional[int] = wire_field(2, "int64_value")


class PercentCpc(WireMessage):
    """Bids are a fraction of the advertised price of a good or service."""

    cpc_bid_ceiling_micros: Optional[int] = wire_field(1, "int64_value")
    enhanced_cpc_enabled: Optional[bool] = wire_field(2, "bool_value")


class TargetCpm(WireMessage):
    """Automatically optimizes cost per thousand impressions."""


# Settings


class CustomParameter(WireMessage):
    """Substitution for a custom parameter tag in tracking URLs."""

    key: Optional[str] = wire_field(1, "string_value")
    value: Optional[str] = wire_field(2, "string_value")


class RealTimeBiddingSetting(WireMessage):
    opt_in: Optional[bool] = wire_field(1, "bool_value")


class FrequencyCapKey(WireMessage):
    """Which events are capped, over what window, at what level."""

    level: FrequencyCapLevel = wire_field(1, "enum", enum=FrequencyCapLevel)
    time_unit: FrequencyCapTimeUnit = wire_field(2, "enum", enum=FrequencyCapTimeUnit)
    event_type: FrequencyCapEventType = wire_field(
        3, "enum", enum=FrequencyCapEventType
    )
    time_length: Optional[int] = wire_field(4, "int32_value")


class FrequencyCapEntry(WireMessage):
    key: Optional[FrequencyCapKey] = wire_field(1, "message", message=FrequencyCapKey)
    cap: Optional[int] = wire_field(2, "int32_value")


class TargetRestriction(WireMessage):
    targeting_dimension: TargetingDimension = wire_field(
        1, "enum", enum=TargetingDimension
    )
    bid_only: Optional[bool] = wire_field(2, "bool_value")


class TargetingSetting(WireMessage):
    target_restrictions: List[TargetRestriction] = wire_field(
        1, "message", message=TargetRestriction, repeated=True
    )
