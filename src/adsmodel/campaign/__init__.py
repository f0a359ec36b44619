"""Campaign resource model, bidding union and validation."""

from .bidding import BiddingStrategyKind, apply_bidding_strategy, make_strategy
from .common import (
    ManualCpc,
    ManualCpm,
    ManualCpv,
    MaximizeConversions,
    MaximizeConversionValue,
    PercentCpc,
    TargetCpa,
    TargetCpm,
    TargetRoas,
    TargetSpend,
)
from .lifecycle import check_update, prepare_for_create, remove
from .models import (
    Campaign,
    DynamicSearchAdsSetting,
    HotelSettingInfo,
    NetworkSettings,
    SelectiveOptimization,
    ShoppingSetting,
    TrackingSetting,
    VanityPharma,
    decode,
    encode,
)
from .query_builder import CampaignQueryBuilder, Condition, QueryError
from .validator import validate

__all__ = [
    "BiddingStrategyKind",
    "Campaign",
    "CampaignQueryBuilder",
    "Condition",
    "DynamicSearchAdsSetting",
    "HotelSettingInfo",
    "ManualCpc",
    "ManualCpm",
    "ManualCpv",
    "MaximizeConversionValue",
    "MaximizeConversions",
    "NetworkSettings",
    "PercentCpc",
    "QueryError",
    "SelectiveOptimization",
    "ShoppingSetting",
    "TargetCpa",
    "TargetCpm",
    "TargetRoas",
    "TargetSpend",
    "TrackingSetting",
    "VanityPharma",
    "apply_bidding_strategy",
    "check_update",
    "decode",
    "encode",
    "make_strategy",
    "prepare_for_create",
    "remove",
    "validate",
]
