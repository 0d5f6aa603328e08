"""Tests for the write-driven invalidation table."""

from outbound_client.domain.invalidation import InvalidationRule, partitions_for_path


def test_campaign_writes_invalidate_campaigns() -> None:
    assert partitions_for_path("/admin/campaigns/send") == ("campaigns",)


def test_organization_writes_invalidate_organizations_and_team() -> None:
    assert partitions_for_path("/organizations/42/members") == ("organizations", "team")


def test_items_and_analytics() -> None:
    assert partitions_for_path("/items/9") == ("items",)
    assert partitions_for_path("/analytics/events") == ("analytics",)


def test_unmatched_path_invalidates_nothing() -> None:
    assert partitions_for_path("/admin/stats") == ()
    assert partitions_for_path("/team/invite") == ()


def test_first_matching_rule_wins() -> None:
    assert partitions_for_path("/campaigns/3/items") == ("campaigns",)


def test_custom_rules() -> None:
    rules = (InvalidationRule("/billing", ("billing", "plans")),)
    assert partitions_for_path("/billing/checkout", rules) == ("billing", "plans")
    assert partitions_for_path("/campaigns", rules) == ()
