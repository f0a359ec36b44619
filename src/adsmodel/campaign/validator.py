"""Semantic validation of Campaign resources."""

import logging
import re
from datetime import date, datetime
from typing import Optional

from adsmodel.config.models import ValidatorConfig
from adsmodel.validation import ERROR, WARNING, ValidationResult, check_oneofs
from adsmodel.wire.message import FieldBehavior

from .bidding import derived_strategy_type
from .channels import is_valid_sub_type, valid_sub_types
from .enums import (
    AdvertisingChannelSubType,
    AdvertisingChannelType,
    BiddingStrategyType,
)
from .models import Campaign

logger = logging.getLogger(__name__)

RESOURCE_NAME_RE = re.compile(r"^customers/(\d+)/campaigns/(\d+)$")
FORBIDDEN_NAME_CHARS = {"\x00": "U+0000", "\n": "U+000A", "\r": "U+000D"}
DATE_FORMAT = "%Y-%m-%d"

_UNSET_CHANNELS = (AdvertisingChannelType.UNSPECIFIED, AdvertisingChannelType.UNKNOWN)
# Derived from the bidding strategy, so not a client-supplied value.
_DERIVED_FIELDS = {"bidding_strategy_type"}


def validate(
    campaign: Campaign,
    config: Optional[ValidatorConfig] = None,
    *,
    for_create: bool = False,
) -> ValidationResult:
    """Check a campaign against every invariant and collect all violations.

    Args:
        campaign: Campaign to check.
        config: Strictness settings; defaults to ValidatorConfig().
        for_create: Also apply the rules for a campaign about to be created.

    Returns:
        ValidationResult listing every violation found.
    """
    config = config or ValidatorConfig()
    result = ValidationResult()

    check_oneofs(
        campaign, result, severity=ERROR if config.strict_bidding else WARNING
    )
    _check_name(campaign, config, result, for_create)
    _check_sub_type(campaign, config, result)
    _check_resource_name(campaign, result)
    _check_bidding_type(campaign, result)
    _check_network_settings(campaign, result)
    _check_shopping_setting(campaign, result)
    if config.check_dates:
        _check_dates(campaign, result)
    if for_create:
        _check_create(campaign, result)

    logger.debug(
        f"Validated campaign {campaign.name!r}: "
        f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"
    )
    return result


def _check_name(
    campaign: Campaign,
    config: ValidatorConfig,
    result: ValidationResult,
    for_create: bool,
) -> None:
    name = campaign.name
    if name is None or name == "":
        if for_create:
            result.add("name", "required and must not be empty", "name_required")
        return

    found = [label for char, label in FORBIDDEN_NAME_CHARS.items() if char in name]
    if found:
        result.add(
            "name",
            f"must not contain {', '.join(found)}",
            "name_invalid_character",
        )
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        result.add("name", "is not valid UTF-8", "name_invalid_encoding")
    if config.max_name_length and len(name) > config.max_name_length:
        result.add(
            "name",
            f"longer than {config.max_name_length} characters",
            "name_too_long",
        )


def _check_sub_type(
    campaign: Campaign, config: ValidatorConfig, result: ValidationResult
) -> None:
    channel = campaign.advertising_channel_type
    sub_type = campaign.advertising_channel_sub_type
    if is_valid_sub_type(channel, sub_type):
        return
    allowed = sorted(s.name for s in valid_sub_types(channel)) or ["none"]
    result.add(
        "advertising_channel_sub_type",
        f"{sub_type.name} is not a sub-type of {channel.name} "
        f"(allowed: {', '.join(allowed)})",
        "invalid_sub_type",
        ERROR if config.strict_subtypes else WARNING,
    )


def _check_resource_name(campaign: Campaign, result: ValidationResult) -> None:
    if not campaign.resource_name:
        return
    match = RESOURCE_NAME_RE.match(campaign.resource_name)
    if match is None:
        result.add(
            "resource_name",
            "must have the form customers/{customer_id}/campaigns/{campaign_id}",
            "invalid_resource_name",
        )
        return
    if campaign.id is not None and int(match.group(2)) != campaign.id:
        result.add(
            "resource_name",
            f"refers to campaign {match.group(2)} but id is {campaign.id}",
            "resource_name_id_mismatch",
        )


def _check_bidding_type(campaign: Campaign, result: ValidationResult) -> None:
    derived = derived_strategy_type(campaign)
    actual = campaign.bidding_strategy_type
    if derived is None or actual in (BiddingStrategyType.UNSPECIFIED, derived):
        return
    result.add(
        "bidding_strategy_type",
        f"is {actual.name} but the campaign bids with {derived.name}",
        "bidding_strategy_type_mismatch",
    )


def _check_network_settings(campaign: Campaign, result: ValidationResult) -> None:
    settings = campaign.network_settings
    if settings is None:
        return
    if settings.target_search_network and not settings.target_google_search:
        result.add(
            "network_settings.target_search_network",
            "requires target_google_search to be true",
            "search_network_requires_google_search",
        )


def _check_shopping_setting(campaign: Campaign, result: ValidationResult) -> None:
    setting = campaign.shopping_setting
    if setting is None:
        return

    if campaign.advertising_channel_type != AdvertisingChannelType.SHOPPING:
        if setting.sales_country is not None and setting.sales_country != "ZZ":
            result.add(
                "shopping_setting.sales_country",
                "must be ZZ for non-Shopping campaigns",
                "invalid_sales_country",
            )
        return

    priority = setting.campaign_priority
    if priority is None:
        return
    if campaign.advertising_channel_sub_type == AdvertisingChannelSubType.SHOPPING_SMART_ADS:
        if priority != 3:
            result.add(
                "shopping_setting.campaign_priority",
                "must be 3 for Smart Shopping campaigns",
                "invalid_campaign_priority",
            )
    elif not 0 <= priority <= 2:
        result.add(
            "shopping_setting.campaign_priority",
            "must be between 0 and 2 for Shopping campaigns",
            "invalid_campaign_priority",
        )


def _parse_date(
    value: Optional[str], field_path: str, result: ValidationResult
) -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        result.add(field_path, f"'{value}' is not a YYYY-MM-DD date", "invalid_date")
        return None


def _check_dates(campaign: Campaign, result: ValidationResult) -> None:
    start = _parse_date(campaign.start_date, "start_date", result)
    end = _parse_date(campaign.end_date, "end_date", result)
    if start is not None and end is not None and start > end:
        result.add("end_date", "is before start_date", "invalid_date_range")


def _check_create(campaign: Campaign, result: ValidationResult) -> None:
    if campaign.advertising_channel_type in _UNSET_CHANNELS:
        result.add(
            "advertising_channel_type",
            "required when creating a campaign",
            "channel_type_required",
        )
    for name, spec in Campaign.__wire_fields__.items():
        if spec.behavior is not FieldBehavior.OUTPUT_ONLY or name in _DERIVED_FIELDS:
            continue
        if campaign.has_field(name):
            result.add(name, "is read-only and must not be set", "output_only_field_set")
