"""The campaign bidding-strategy union.

A campaign bids with exactly one strategy: either a portfolio strategy
referenced by resource name, or one of ten standard strategies embedded in
the campaign. ``BiddingStrategyKind`` is the explicit discriminant over all
eleven alternatives.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional, Union

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
from .enums import BiddingStrategyType

if TYPE_CHECKING:
    from .models import Campaign

logger = logging.getLogger(__name__)

BIDDING_ONEOF = "campaign_bidding_strategy"

StandardStrategy = Union[
    ManualCpc,
    ManualCpm,
    ManualCpv,
    MaximizeConversions,
    MaximizeConversionValue,
    TargetCpa,
    TargetRoas,
    TargetSpend,
    PercentCpc,
    TargetCpm,
]
BiddingVariant = Union[str, StandardStrategy]


class BiddingStrategyKind(str, Enum):
    """Discriminant for the bidding union; values are the field names."""

    PORTFOLIO = "bidding_strategy"
    MANUAL_CPC = "manual_cpc"
    MANUAL_CPM = "manual_cpm"
    MANUAL_CPV = "manual_cpv"
    MAXIMIZE_CONVERSIONS = "maximize_conversions"
    MAXIMIZE_CONVERSION_VALUE = "maximize_conversion_value"
    TARGET_CPA = "target_cpa"
    TARGET_ROAS = "target_roas"
    TARGET_SPEND = "target_spend"
    PERCENT_CPC = "percent_cpc"
    TARGET_CPM = "target_cpm"


STRATEGY_CLASSES: Dict[BiddingStrategyKind, type] = {
    BiddingStrategyKind.MANUAL_CPC: ManualCpc,
    BiddingStrategyKind.MANUAL_CPM: ManualCpm,
    BiddingStrategyKind.MANUAL_CPV: ManualCpv,
    BiddingStrategyKind.MAXIMIZE_CONVERSIONS: MaximizeConversions,
    BiddingStrategyKind.MAXIMIZE_CONVERSION_VALUE: MaximizeConversionValue,
    BiddingStrategyKind.TARGET_CPA: TargetCpa,
    BiddingStrategyKind.TARGET_ROAS: TargetRoas,
    BiddingStrategyKind.TARGET_SPEND: TargetSpend,
    BiddingStrategyKind.PERCENT_CPC: PercentCpc,
    BiddingStrategyKind.TARGET_CPM: TargetCpm,
}

_KIND_BY_CLASS = {cls: kind for kind, cls in STRATEGY_CLASSES.items()}

BIDDING_STRATEGY_TYPES: Dict[BiddingStrategyKind, BiddingStrategyType] = {
    BiddingStrategyKind.MANUAL_CPC: BiddingStrategyType.MANUAL_CPC,
    BiddingStrategyKind.MANUAL_CPM: BiddingStrategyType.MANUAL_CPM,
    BiddingStrategyKind.MANUAL_CPV: BiddingStrategyType.MANUAL_CPV,
    BiddingStrategyKind.MAXIMIZE_CONVERSIONS: BiddingStrategyType.MAXIMIZE_CONVERSIONS,
    BiddingStrategyKind.MAXIMIZE_CONVERSION_VALUE: (
        BiddingStrategyType.MAXIMIZE_CONVERSION_VALUE
    ),
    BiddingStrategyKind.TARGET_CPA: BiddingStrategyType.TARGET_CPA,
    BiddingStrategyKind.TARGET_ROAS: BiddingStrategyType.TARGET_ROAS,
    BiddingStrategyKind.TARGET_SPEND: BiddingStrategyType.TARGET_SPEND,
    BiddingStrategyKind.PERCENT_CPC: BiddingStrategyType.PERCENT_CPC,
    BiddingStrategyKind.TARGET_CPM: BiddingStrategyType.TARGET_CPM,
}


def kind_of(variant: BiddingVariant) -> BiddingStrategyKind:
    """Discriminant for a variant value.

    Raises:
        TypeError: If ``variant`` is not a resource name or a strategy message.
    """
    if isinstance(variant, str):
        return BiddingStrategyKind.PORTFOLIO
    try:
        return _KIND_BY_CLASS[type(variant)]
    except KeyError:
        raise TypeError(
            f"Not a bidding strategy: {type(variant).__name__}"
        ) from None


def active_kind(campaign: "Campaign") -> Optional[BiddingStrategyKind]:
    """Which alternative the campaign bids with, or None if unset."""
    name = campaign.which_oneof(BIDDING_ONEOF)
    return BiddingStrategyKind(name) if name else None


def derived_strategy_type(campaign: "Campaign") -> Optional[BiddingStrategyType]:
    """Summary type implied by a single standard strategy.

    Returns None when nothing can be derived: no strategy, a portfolio
    strategy (its type lives on the portfolio), or more than one member set.
    """
    members = campaign.set_oneof_members(BIDDING_ONEOF)
    if len(members) != 1:
        return None
    return BIDDING_STRATEGY_TYPES.get(BiddingStrategyKind(members[0]))


def apply_bidding_strategy(campaign: "Campaign", variant: BiddingVariant) -> "Campaign":
    """Make ``variant`` the campaign's only bidding strategy.

    Clears every other alternative and recomputes ``bidding_strategy_type``.
    The campaign is modified in place and returned.
    """
    kind = kind_of(variant)
    previous = active_kind(campaign)
    for other in BiddingStrategyKind:
        if other is not kind:
            campaign.clear_field(other.value)
    setattr(campaign, kind.value, variant)
    campaign.bidding_strategy_type = BIDDING_STRATEGY_TYPES.get(
        kind, BiddingStrategyType.UNSPECIFIED
    )
    if previous is not None and previous is not kind:
        logger.debug(f"Bidding strategy changed from {previous.value} to {kind.value}")
    return campaign


def make_strategy(kind: BiddingStrategyKind, **params) -> StandardStrategy:
    """Build a standard strategy message of ``kind`` from field values."""
    if kind is BiddingStrategyKind.PORTFOLIO:
        raise ValueError("Portfolio strategies are referenced by resource name")
    return STRATEGY_CLASSES[kind].model_validate(params)
