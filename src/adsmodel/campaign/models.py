"""The Campaign resource and its nested settings messages."""

from typing import Any, List, Optional

from pydantic import model_validator

from adsmodel.wire.message import FieldBehavior, WireMessage, wire_field

from .bidding import BIDDING_ONEOF, derived_strategy_type
from .common import (
    CustomParameter,
    FrequencyCapEntry,
    ManualCpc,
    ManualCpm,
    ManualCpv,
    MaximizeConversions,
    MaximizeConversionValue,
    PercentCpc,
    RealTimeBiddingSetting,
    TargetCpa,
    TargetCpm,
    TargetingSetting,
    TargetRoas,
    TargetSpend,
)
from .enums import (
    AdServingOptimizationStatus,
    AdvertisingChannelSubType,
    AdvertisingChannelType,
    BiddingStrategyType,
    BrandSafetySuitability,
    CampaignServingStatus,
    CampaignStatus,
    VanityPharmaDisplayUrlMode,
    VanityPharmaText,
)

IMMUTABLE = FieldBehavior.IMMUTABLE
OUTPUT_ONLY = FieldBehavior.OUTPUT_ONLY


class NetworkSettings(WireMessage):
    """Networks the campaign's ads are served on."""

    target_google_search: Optional[bool] = wire_field(1, "bool_value")
    # Requires target_google_search to also be true.
    target_search_network: Optional[bool] = wire_field(2, "bool_value")
    target_content_network: Optional[bool] = wire_field(3, "bool_value")
    target_partner_search_network: Optional[bool] = wire_field(4, "bool_value")


class HotelSettingInfo(WireMessage):
    hotel_center_id: Optional[int] = wire_field(1, "int64_value")


class DynamicSearchAdsSetting(WireMessage):
    """Dynamic Search Ads (DSA) settings."""

    domain_name: Optional[str] = wire_field(1, "string_value")
    language_code: Optional[str] = wire_field(2, "string_value")
    use_supplied_urls_only: Optional[bool] = wire_field(3, "bool_value")
    feed_ids: List[int] = wire_field(4, "int64_value", repeated=True)


class ShoppingSetting(WireMessage):
    """Product universe of a Shopping campaign and its priority.

    ``campaign_priority`` is 0..2 for Shopping campaigns and 3 for Smart
    Shopping campaigns. Non-Shopping campaigns may only set ``sales_country``
    to ``ZZ``.
    """

    merchant_id: Optional[int] = wire_field(1, "int64_value", behavior=IMMUTABLE)
    sales_country: Optional[str] = wire_field(2, "string_value", behavior=IMMUTABLE)
    campaign_priority: Optional[int] = wire_field(3, "int32_value")
    enable_local: Optional[bool] = wire_field(4, "bool_value")


class TrackingSetting(WireMessage):
    tracking_url: Optional[str] = wire_field(1, "string_value")


class VanityPharma(WireMessage):
    """How unbranded pharma ads are displayed."""

    vanity_pharma_display_url_mode: VanityPharmaDisplayUrlMode = wire_field(
        1, "enum", enum=VanityPharmaDisplayUrlMode
    )
    vanity_pharma_text: VanityPharmaText = wire_field(2, "enum", enum=VanityPharmaText)


class SelectiveOptimization(WireMessage):
    """Conversion actions the campaign optimizes towards."""

    conversion_actions: List[str] = wire_field(1, "string_value", repeated=True)


class Campaign(WireMessage):
    """A campaign.

    Wrapper-typed fields are ``None`` when unset. Nested settings are
    ``None`` when not configured, which is distinct from a present message
    holding only defaults.

    The eleven ``campaign_bidding_strategy`` members form a oneof: assigning
    one clears the others, and ``bidding_strategy_type`` follows the
    standard strategy that is set.
    """

    resource_name: str = wire_field(1, "string", behavior=IMMUTABLE)
    id: Optional[int] = wire_field(3, "int64_value", behavior=OUTPUT_ONLY)
    name: Optional[str] = wire_field(4, "string_value", required_on_create=True)
    status: CampaignStatus = wire_field(5, "enum", enum=CampaignStatus)
    campaign_budget: Optional[str] = wire_field(6, "string_value")
    ad_serving_optimization_status: AdServingOptimizationStatus = wire_field(
        8, "enum", enum=AdServingOptimizationStatus, behavior=OUTPUT_ONLY
    )
    advertising_channel_type: AdvertisingChannelType = wire_field(
        9,
        "enum",
        enum=AdvertisingChannelType,
        behavior=IMMUTABLE,
        required_on_create=True,
    )
    advertising_channel_sub_type: AdvertisingChannelSubType = wire_field(
        10, "enum", enum=AdvertisingChannelSubType, behavior=IMMUTABLE
    )
    tracking_url_template: Optional[str] = wire_field(11, "string_value")
    url_custom_parameters: List[CustomParameter] = wire_field(
        12, "message", message=CustomParameter, repeated=True
    )
    network_settings: Optional[NetworkSettings] = wire_field(
        14, "message", message=NetworkSettings
    )
    start_date: Optional[str] = wire_field(19, "string_value", filterable=False)
    end_date: Optional[str] = wire_field(20, "string_value", filterable=False)
    serving_status: CampaignServingStatus = wire_field(
        21, "enum", enum=CampaignServingStatus, behavior=OUTPUT_ONLY
    )
    bidding_strategy_type: BiddingStrategyType = wire_field(
        22, "enum", enum=BiddingStrategyType, behavior=OUTPUT_ONLY
    )
    hotel_setting: Optional[HotelSettingInfo] = wire_field(
        32, "message", message=HotelSettingInfo
    )
    dynamic_search_ads_setting: Optional[DynamicSearchAdsSetting] = wire_field(
        33, "message", message=DynamicSearchAdsSetting
    )
    shopping_setting: Optional[ShoppingSetting] = wire_field(
        36, "message", message=ShoppingSetting
    )
    final_url_suffix: Optional[str] = wire_field(38, "string_value")
    real_time_bidding_setting: Optional[RealTimeBiddingSetting] = wire_field(
        39, "message", message=RealTimeBiddingSetting
    )
    frequency_caps: List[FrequencyCapEntry] = wire_field(
        40, "message", message=FrequencyCapEntry, repeated=True
    )
    video_brand_safety_suitability: BrandSafetySuitability = wire_field(
        42, "enum", enum=BrandSafetySuitability
    )
    targeting_setting: Optional[TargetingSetting] = wire_field(
        43, "message", message=TargetingSetting
    )
    vanity_pharma: Optional[VanityPharma] = wire_field(
        44, "message", message=VanityPharma
    )
    selective_optimization: Optional[SelectiveOptimization] = wire_field(
        45, "message", message=SelectiveOptimization
    )
    tracking_setting: Optional[TrackingSetting] = wire_field(
        46, "message", message=TrackingSetting
    )

    # campaign_bidding_strategy
    bidding_strategy: Optional[str] = wire_field(23, "string_value", oneof=BIDDING_ONEOF)
    manual_cpc: Optional[ManualCpc] = wire_field(
        24, "message", message=ManualCpc, oneof=BIDDING_ONEOF
    )
    manual_cpm: Optional[ManualCpm] = wire_field(
        25, "message", message=ManualCpm, oneof=BIDDING_ONEOF
    )
    manual_cpv: Optional[ManualCpv] = wire_field(
        37, "message", message=ManualCpv, oneof=BIDDING_ONEOF
    )
    maximize_conversions: Optional[MaximizeConversions] = wire_field(
        30, "message", message=MaximizeConversions, oneof=BIDDING_ONEOF
    )
    maximize_conversion_value: Optional[MaximizeConversionValue] = wire_field(
        31, "message", message=MaximizeConversionValue, oneof=BIDDING_ONEOF
    )
    target_cpa: Optional[TargetCpa] = wire_field(
        26, "message", message=TargetCpa, oneof=BIDDING_ONEOF
    )
    target_roas: Optional[TargetRoas] = wire_field(
        29, "message", message=TargetRoas, oneof=BIDDING_ONEOF
    )
    target_spend: Optional[TargetSpend] = wire_field(
        27, "message", message=TargetSpend, oneof=BIDDING_ONEOF
    )
    percent_cpc: Optional[PercentCpc] = wire_field(
        34, "message", message=PercentCpc, oneof=BIDDING_ONEOF
    )
    target_cpm: Optional[TargetCpm] = wire_field(
        41, "message", message=TargetCpm, oneof=BIDDING_ONEOF
    )

    @model_validator(mode="after")
    def _derive_bidding_strategy_type(self) -> "Campaign":
        derived = derived_strategy_type(self)
        if derived is not None:
            self.bidding_strategy_type = derived
        return self

    def _on_oneof_change(self, group: str) -> None:
        if group != BIDDING_ONEOF:
            return
        derived = derived_strategy_type(self)
        if derived is None:
            derived = BiddingStrategyType.UNSPECIFIED
        self.bidding_strategy_type = derived

    @property
    def customer_id(self) -> Optional[str]:
        """Customer ID parsed from ``resource_name``, if it has one."""
        parts = self.resource_name.split("/")
        if len(parts) == 4 and parts[0] == "customers" and parts[2] == "campaigns":
            return parts[1]
        return None


def campaign_resource_name(customer_id: Any, campaign_id: Any) -> str:
    """Format a campaign resource name."""
    return f"customers/{customer_id}/campaigns/{campaign_id}"


def encode(campaign: Campaign) -> bytes:
    """Serialize a campaign to the binary wire format."""
    return campaign.encode()


def decode(data: bytes, **kwargs: Any) -> Campaign:
    """Parse a campaign from the binary wire format.

    Raises:
        DecodeError: If ``data`` is not a well-formed campaign.
    """
    return Campaign.decode(data, **kwargs)
