"""Advertising channel types and the sub-types each one admits."""

from typing import Dict, FrozenSet

from .enums import AdvertisingChannelSubType, AdvertisingChannelType

# Sub-types that refine each primary channel type. UNSPECIFIED and UNKNOWN
# sub-types mean "no refinement" and are accepted for every channel.
VALID_SUB_TYPES: Dict[AdvertisingChannelType, FrozenSet[AdvertisingChannelSubType]] = {
    AdvertisingChannelType.SEARCH: frozenset({
        AdvertisingChannelSubType.SEARCH_MOBILE_APP,
        AdvertisingChannelSubType.SEARCH_EXPRESS,
    }),
    AdvertisingChannelType.DISPLAY: frozenset({
        AdvertisingChannelSubType.DISPLAY_MOBILE_APP,
        AdvertisingChannelSubType.DISPLAY_EXPRESS,
        AdvertisingChannelSubType.DISPLAY_GMAIL_AD,
        AdvertisingChannelSubType.DISPLAY_SMART_CAMPAIGN,
    }),
    AdvertisingChannelType.SHOPPING: frozenset({
        AdvertisingChannelSubType.SHOPPING_SMART_ADS,
    }),
    AdvertisingChannelType.HOTEL: frozenset(),
    AdvertisingChannelType.VIDEO: frozenset({
        AdvertisingChannelSubType.VIDEO_OUTSTREAM,
        AdvertisingChannelSubType.VIDEO_ACTION,
        AdvertisingChannelSubType.VIDEO_NON_SKIPPABLE,
    }),
}

_NO_REFINEMENT = frozenset({
    AdvertisingChannelSubType.UNSPECIFIED,
    AdvertisingChannelSubType.UNKNOWN,
})


def valid_sub_types(
    channel_type: AdvertisingChannelType,
) -> FrozenSet[AdvertisingChannelSubType]:
    """Return the sub-types that may refine ``channel_type``."""
    return VALID_SUB_TYPES.get(channel_type, frozenset())


def is_valid_sub_type(
    channel_type: AdvertisingChannelType,
    sub_type: AdvertisingChannelSubType,
) -> bool:
    """Check the sub-type against the channel type's admitted set.

    A channel type this table does not cover (UNSPECIFIED, UNKNOWN) admits
    only the no-refinement sub-types.
    """
    if sub_type in _NO_REFINEMENT:
        return True
    return sub_type in valid_sub_types(channel_type)
