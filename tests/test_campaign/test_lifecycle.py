"""Tests for campaign lifecycle helpers."""

from adsmodel.campaign import (
    Campaign,
    ManualCpc,
    NetworkSettings,
    ShoppingSetting,
    TargetRoas,
    apply_bidding_strategy,
)
from adsmodel.campaign.enums import (
    AdvertisingChannelType,
    BiddingStrategyType,
    CampaignServingStatus,
    CampaignStatus,
)
from adsmodel.campaign.lifecycle import (
    behavior_at,
    changed_fields,
    check_update,
    fields_with_behavior,
    prepare_for_create,
    remove,
)
from adsmodel.wire.message import FieldBehavior


def _created():
    return Campaign(
        resource_name="customers/1/campaigns/2",
        id=2,
        name="Summer Sale",
        status=CampaignStatus.ENABLED,
        advertising_channel_type=AdvertisingChannelType.SEARCH,
        shopping_setting=ShoppingSetting(sales_country="ZZ", campaign_priority=1),
        manual_cpc=ManualCpc(),
    )


class TestBehaviors:
    def test_output_only_fields(self):
        fields = fields_with_behavior(Campaign, FieldBehavior.OUTPUT_ONLY)
        assert set(fields) == {
            "id",
            "ad_serving_optimization_status",
            "serving_status",
            "bidding_strategy_type",
        }

    def test_nested_behavior(self):
        assert behavior_at(Campaign, "shopping_setting.sales_country") is FieldBehavior.IMMUTABLE
        assert behavior_at(Campaign, "shopping_setting.campaign_priority") is FieldBehavior.MUTABLE
        assert behavior_at(Campaign, "name") is FieldBehavior.MUTABLE


class TestChangedFields:
    def test_nested_paths(self):
        before = Campaign(network_settings=NetworkSettings(target_google_search=True))
        after = Campaign(network_settings=NetworkSettings(target_google_search=False))
        assert changed_fields(before, after) == ["network_settings.target_google_search"]

    def test_message_added(self):
        after = Campaign(network_settings=NetworkSettings())
        assert changed_fields(Campaign(), after) == ["network_settings"]

    def test_message_added_reports_inner_fields(self):
        after = Campaign(shopping_setting=ShoppingSetting(sales_country="US", campaign_priority=1))
        assert changed_fields(Campaign(), after) == [
            "shopping_setting.sales_country",
            "shopping_setting.campaign_priority",
        ]

    def test_message_removed_reports_inner_fields(self):
        before = Campaign(network_settings=NetworkSettings(target_google_search=True))
        assert changed_fields(before, Campaign()) == ["network_settings.target_google_search"]

    def test_identical(self):
        assert changed_fields(_created(), _created()) == []


class TestPrepareForCreate:
    def test_clears_output_only_and_defaults_status(self):
        draft = Campaign(
            name="New",
            id=7,
            serving_status=CampaignServingStatus.SERVING,
            advertising_channel_type=AdvertisingChannelType.SEARCH,
            target_roas=TargetRoas(target_roas=2.0),
        )
        prepared = prepare_for_create(draft)
        assert prepared.id is None
        assert prepared.serving_status is CampaignServingStatus.UNSPECIFIED
        assert prepared.status is CampaignStatus.ENABLED
        assert prepared.bidding_strategy_type is BiddingStrategyType.TARGET_ROAS
        # the input is left alone
        assert draft.id == 7

    def test_keeps_explicit_status(self):
        prepared = prepare_for_create(Campaign(status=CampaignStatus.PAUSED))
        assert prepared.status is CampaignStatus.PAUSED


class TestCheckUpdate:
    def test_mutable_change_allowed(self):
        proposed = _created()
        proposed.name = "Winter Sale"
        proposed.status = CampaignStatus.PAUSED
        assert check_update(_created(), proposed).is_valid

    def test_immutable_change_rejected(self):
        proposed = _created()
        proposed.advertising_channel_type = AdvertisingChannelType.DISPLAY
        result = check_update(_created(), proposed)
        assert result.codes == ["immutable_field_changed"]
        assert result.errors[0].field_path == "advertising_channel_type"

    def test_nested_immutable_change_rejected(self):
        proposed = _created()
        proposed.shopping_setting.sales_country = "US"
        result = check_update(_created(), proposed)
        assert result.codes == ["immutable_field_changed"]
        assert result.errors[0].field_path == "shopping_setting.sales_country"

    def test_output_only_change_rejected(self):
        proposed = _created()
        proposed.serving_status = CampaignServingStatus.ENDED
        assert check_update(_created(), proposed).codes == ["output_only_field_changed"]

    def test_bidding_switch_allowed(self):
        proposed = _created()
        proposed.target_roas = TargetRoas(target_roas=4.0)
        assert proposed.bidding_strategy_type is BiddingStrategyType.TARGET_ROAS
        assert check_update(_created(), proposed).is_valid

    def test_portfolio_switch_allowed(self):
        proposed = apply_bidding_strategy(_created(), "customers/1/biddingStrategies/9")
        assert proposed.bidding_strategy_type is BiddingStrategyType.UNSPECIFIED
        assert check_update(_created(), proposed).is_valid

    def test_switch_back_from_portfolio_allowed(self):
        current = apply_bidding_strategy(_created(), "customers/1/biddingStrategies/9")
        current.bidding_strategy_type = BiddingStrategyType.TARGET_SPEND
        proposed = apply_bidding_strategy(current.model_copy(deep=True), ManualCpc())
        assert check_update(current, proposed).is_valid

    def test_type_change_without_switch_rejected(self):
        proposed = _created()
        proposed.bidding_strategy_type = BiddingStrategyType.TARGET_CPA
        result = check_update(_created(), proposed)
        assert result.codes == ["output_only_field_changed"]
        assert result.errors[0].field_path == "bidding_strategy_type"

    def test_adding_setting_with_immutable_fields_rejected(self):
        current = _created()
        current.shopping_setting = None
        result = check_update(current, _created())
        assert result.codes == ["immutable_field_changed"]
        assert result.errors[0].field_path == "shopping_setting.sales_country"

    def test_clearing_setting_with_immutable_fields_rejected(self):
        proposed = _created()
        proposed.shopping_setting = None
        result = check_update(_created(), proposed)
        assert result.codes == ["immutable_field_changed"]
        assert result.errors[0].field_path == "shopping_setting.sales_country"

    def test_draft_may_change_anything(self):
        draft = Campaign(advertising_channel_type=AdvertisingChannelType.SEARCH)
        proposed = Campaign(advertising_channel_type=AdvertisingChannelType.VIDEO)
        assert check_update(draft, proposed).violations == []


class TestRemove:
    def test_remove(self):
        current = _created()
        removed = remove(current)
        assert removed.status is CampaignStatus.REMOVED
        assert current.status is CampaignStatus.ENABLED

    def test_removed_is_final(self):
        removed = remove(_created())
        restored = removed.model_copy(deep=True)
        restored.status = CampaignStatus.ENABLED
        assert "campaign_removed" in check_update(removed, restored).codes
