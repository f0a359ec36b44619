"""Tests for channel type / sub-type compatibility."""

import pytest

from adsmodel.campaign.channels import is_valid_sub_type, valid_sub_types
from adsmodel.campaign.enums import AdvertisingChannelSubType as Sub
from adsmodel.campaign.enums import AdvertisingChannelType as Channel


@pytest.mark.parametrize(
    "channel,sub_type",
    [
        (Channel.SEARCH, Sub.SEARCH_EXPRESS),
        (Channel.DISPLAY, Sub.DISPLAY_GMAIL_AD),
        (Channel.SHOPPING, Sub.SHOPPING_SMART_ADS),
        (Channel.VIDEO, Sub.VIDEO_NON_SKIPPABLE),
        (Channel.HOTEL, Sub.UNSPECIFIED),
        (Channel.UNSPECIFIED, Sub.UNKNOWN),
    ],
)
def test_compatible(channel, sub_type):
    assert is_valid_sub_type(channel, sub_type)


@pytest.mark.parametrize(
    "channel,sub_type",
    [
        (Channel.SEARCH, Sub.VIDEO_OUTSTREAM),
        (Channel.VIDEO, Sub.DISPLAY_EXPRESS),
        (Channel.HOTEL, Sub.SEARCH_EXPRESS),
        (Channel.UNSPECIFIED, Sub.SEARCH_EXPRESS),
    ],
)
def test_incompatible(channel, sub_type):
    assert not is_valid_sub_type(channel, sub_type)


def test_every_refining_sub_type_has_one_channel():
    owners = {}
    for channel in Channel:
        for sub_type in valid_sub_types(channel):
            owners.setdefault(sub_type, []).append(channel)
    assert all(len(channels) == 1 for channels in owners.values())
    assert set(owners) == set(Sub) - {Sub.UNSPECIFIED, Sub.UNKNOWN}
