"""Test insight ladders."""

import pytest

from serpstat_mcp.data.insights import (
    AD_COMPETITION,
    COMPETITION_LEVEL,
    CREDIT_TIPS,
    CREDIT_USAGE,
    GAP_OPPORTUNITY,
    KEYWORD_STRATEGY,
    MARKET_TREND,
    PROJECT_ORGANIZATION,
    RANKING_QUALITY,
    REGIONAL_PRESENCE,
    URL_DISTRIBUTION,
    Insight,
    Rule,
    classify,
)


@pytest.mark.parametrize("regions,status", [
    (0, "NO_KEYWORDS"),
    (1, "SINGLE_REGION"),
    (2, "LIMITED_REGIONS"),
    (3, "LIMITED_REGIONS"),
    (4, "MULTI_REGIONAL"),
])
def test_regional_presence(regions, status):
    insight = classify(REGIONAL_PRESENCE, {"regions_with_keywords": regions, "top_country": "Germany"})
    assert insight.status == status


def test_single_region_message_names_country():
    insight = classify(REGIONAL_PRESENCE, {"regions_with_keywords": 1, "top_country": "Germany"})
    assert insight.message == "Domain only has keywords in Germany"


@pytest.mark.parametrize("share,status", [
    (80.0, "EXCELLENT"),
    (79.99, "GOOD"),
    (60.0, "GOOD"),
    (40.0, "MODERATE"),
    (39.99, "POOR"),
])
def test_ranking_quality_boundaries(share, status):
    assert classify(RANKING_QUALITY, {"total": 10, "first_page_percentage": share}).status == status


def test_ranking_quality_without_keywords():
    insight = classify(RANKING_QUALITY, {"total": 0, "first_page_percentage": 0.0})
    assert insight.status == "NO_KEYWORDS"
    assert insight.recommendation == "Check domain spelling or expand search criteria"


def test_ranking_quality_message_has_one_decimal():
    insight = classify(RANKING_QUALITY, {"total": 2, "first_page_percentage": 50.0})
    assert insight.message == "Moderate performance with 50.0% of keywords on first page"


def test_gap_opportunity():
    base = {"domains": "a.com and b.com", "excluded_domain": "c.com", "high_volume_keywords": 0}
    empty = classify(GAP_OPPORTUNITY, {**base, "total": 0, "average_difficulty": 0.0, "first_page_percentage": 0.0})
    assert empty.status == "NO_UNIQUE_KEYWORDS"
    assert empty.message == "No unique keywords found for a.com and b.com that c.com doesn't rank for"

    high = classify(GAP_OPPORTUNITY, {**base, "total": 10, "average_difficulty": 20.0, "first_page_percentage": 80.0})
    assert high.status == "HIGH"
    # First matching rung wins even when a later one would match too
    medium = classify(GAP_OPPORTUNITY, {
        **base, "total": 10, "average_difficulty": 50.0,
        "first_page_percentage": 60.0, "high_volume_keywords": 9,
    })
    assert medium.status == "MEDIUM"
    volume = classify(GAP_OPPORTUNITY, {
        **base, "total": 10, "average_difficulty": 70.0,
        "first_page_percentage": 10.0, "high_volume_keywords": 4,
    })
    assert volume.status == "HIGH_VOLUME"


def test_url_distribution_uses_strict_thresholds():
    stats = {"total": 10, "urls_with_keywords": 8, "ranking_percentage": 80.0}
    assert classify(URL_DISTRIBUTION, stats).status == "GOOD_DISTRIBUTION"
    stats = {"total": 10, "urls_with_keywords": 0, "ranking_percentage": 0.0}
    assert classify(URL_DISTRIBUTION, stats).status == "NO_RANKING_URLS"


def test_keyword_strategy():
    stats = {"total": 10, "low_difficulty_keywords": 4, "high_volume_keywords": 0}
    assert classify(KEYWORD_STRATEGY, stats).status == "QUICK_WINS"
    stats = {"total": 10, "low_difficulty_keywords": 3, "high_volume_keywords": 1}
    assert classify(KEYWORD_STRATEGY, stats).status == "HIGH_VALUE_TARGET"
    stats = {"total": 10, "low_difficulty_keywords": 0, "high_volume_keywords": 0}
    assert classify(KEYWORD_STRATEGY, stats).status == "LONG_TAIL"


def test_competitor_ladders():
    assert classify(COMPETITION_LEVEL, {"total": 0, "average_visibility": 0.0}).status == "NO_DATA"
    level = classify(COMPETITION_LEVEL, {"total": 3, "average_visibility": 750.0})
    assert level.status == "HIGH"
    assert level.message == "Highly competitive keyword with average visibility of 750.0"
    assert classify(AD_COMPETITION, {"ads_percentage": 50.0}).status == "MEDIUM"
    assert classify(MARKET_TREND, {"growing_percentage": 60.0}).status == "STABLE"


@pytest.mark.parametrize("max_credits,usage,status", [
    (0, 0.0, "UNKNOWN"),
    (1000, 96.0, "CRITICAL"),
    (1000, 95.0, "HIGH"),
    (1000, 80.0, "MODERATE"),
    (1000, 75.0, "NORMAL"),
])
def test_credit_usage(max_credits, usage, status):
    assert classify(CREDIT_USAGE, {"max_credits": max_credits, "usage_percentage": usage}).status == status


@pytest.mark.parametrize("remaining,priority", [(0, "CRITICAL"), (99, "HIGH"), (999, "MEDIUM"), (1000, "LOW")])
def test_credit_tips(remaining, priority):
    assert classify(CREDIT_TIPS, {"remaining_credits": remaining}).status == priority


def test_project_organization():
    assert classify(PROJECT_ORGANIZATION, {"total": 0, "owner_projects": 0, "unique_groups": 0}).status == "NO_PROJECTS"
    assert classify(PROJECT_ORGANIZATION, {"total": 2, "owner_projects": 0, "unique_groups": 2}).status == "READER_ONLY"
    assert classify(PROJECT_ORGANIZATION, {"total": 2, "owner_projects": 1, "unique_groups": 1}).status == "SINGLE_GROUP"
    organized = classify(PROJECT_ORGANIZATION, {"total": 3, "owner_projects": 1, "unique_groups": 3})
    assert organized.message == "Projects well organized across 3 groups"


def test_insight_to_dict_renames_keys():
    insight = Insight("HIGH", "Very low credits remaining.")
    assert insight.to_dict("priority") == {"priority": "HIGH", "message": "Very low credits remaining."}
    insight = Insight("GOOD", "ok", "keep going")
    assert insight.to_dict("status", "note", "advice") == {"status": "GOOD", "note": "ok", "advice": "keep going"}


def test_classify_without_match_raises():
    with pytest.raises(ValueError):
        classify((Rule(lambda s: False, "NEVER", "never"),), {})
