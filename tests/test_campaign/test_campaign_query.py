"""Tests for the campaign query builder."""

import pytest

from adsmodel.campaign.query_builder import CampaignQueryBuilder, Condition, QueryError


@pytest.fixture
def builder():
    return CampaignQueryBuilder()


class TestParse:
    def test_empty(self, builder):
        assert builder.parse("") == []
        assert builder.parse("   ") == []

    def test_conditions(self, builder):
        conditions = builder.parse("status = 'ENABLED' AND id > 10")
        assert conditions == [
            Condition(field="status", operator="=", value="ENABLED"),
            Condition(field="id", operator=">", value=10),
        ]

    def test_prefixed_and_nested_fields(self, builder):
        conditions = builder.parse("campaign.network_settings.target_google_search = true")
        assert conditions == [
            Condition(field="network_settings.target_google_search", operator="=", value=True)
        ]

    def test_like(self, builder):
        (condition,) = builder.parse("name like 'Summer%'")
        assert condition.operator == "LIKE"
        assert condition.value == "Summer%"

    def test_escaped_quote(self, builder):
        (condition,) = builder.parse(r"name = 'O\'Brien'")
        assert condition.value == "O'Brien"

    def test_dates_not_filterable(self, builder):
        with pytest.raises(QueryError, match="cannot be used in a WHERE clause"):
            builder.parse("start_date > '2024-01-01'")
        with pytest.raises(QueryError, match="end_date"):
            builder.parse("status = 'ENABLED' AND campaign.end_date < '2025-01-01'")

    def test_unknown_field(self, builder):
        with pytest.raises(QueryError, match="Unknown campaign field"):
            builder.parse("budget = 5")

    def test_unparseable(self, builder):
        with pytest.raises(QueryError, match="Unparseable"):
            builder.parse("status")


class TestBuild:
    def test_select_only(self, builder):
        assert builder.build(["id", "campaign.name"]) == (
            "SELECT campaign.id, campaign.name FROM campaign"
        )

    def test_with_where(self, builder):
        query = builder.build(["name", "start_date"], "status != 'REMOVED' AND id = 3")
        assert query == (
            "SELECT campaign.name, campaign.start_date FROM campaign "
            "WHERE campaign.status != 'REMOVED' AND campaign.id = 3"
        )

    def test_dates_selectable(self, builder):
        assert "campaign.end_date" in builder.build(["end_date"])

    def test_requires_fields(self, builder):
        with pytest.raises(QueryError):
            builder.build([])

    def test_unknown_selected_field(self, builder):
        with pytest.raises(QueryError):
            builder.build(["nope"])


class TestRender:
    def test_quote_escaped(self):
        condition = Condition(field="name", operator="=", value="O'Brien")
        assert condition.render() == r"campaign.name = 'O\'Brien'"

    def test_backslash_escaped(self):
        condition = Condition(field="name", operator="LIKE", value="a\\b%")
        assert condition.render() == r"campaign.name LIKE 'a\\b%'"

    def test_round_trip_through_parse(self, builder):
        query = builder.build(["name"], r"name = 'O\'Brien'")
        assert query == r"SELECT campaign.name FROM campaign WHERE campaign.name = 'O\'Brien'"
