"""Test report assembly for each endpoint."""

from datetime import datetime, timedelta

from serpstat_mcp.data.constants import Endpoint
from serpstat_mcp.data.reports import build_report
from serpstat_mcp.data.validation import validate


def report_for(endpoint, data, arguments, summary_info=None):
    result = {"data": data}
    if summary_info is not None:
        result["summary_info"] = summary_info
    return build_report(endpoint, result, validate(endpoint, arguments))


# =============================================================================
# Domain analysis
# =============================================================================

def test_domains_info_totals():
    report = report_for(
        Endpoint.DOMAINS_INFO,
        [
            {"domain": "a.com", "visible": 100.5, "traff": 1200, "keywords": 300},
            {"domain": "b.com", "visible": 50.25, "keywords": 20},
        ],
        {"domains": ["a.com", "b.com"]},
        {"left_lines": 999, "page": 1},
    )
    assert report["status"] == "success"
    assert report["method"] == "SerpstatDomainProcedure.getDomainsInfo"
    assert report["found_domains_count"] == 2
    assert report["requested_domains_count"] == 2
    assert report["analytics"]["summary"] == {
        "total_visibility": 150.75,
        "total_estimated_traffic": 1200,
        "total_keywords": 320,
        "average_visibility": 75.38,
    }
    assert report["api_info"] == {"credits_remaining": 999, "page": 1}
    assert report["estimated_credits_used"] == 10


def test_regions_count():
    report = report_for(
        Endpoint.REGIONS_COUNT,
        [
            {"country_name_en": "United States", "db_name": "g_us", "keywords_count": 1500},
            {"country_name_en": "Germany", "db_name": "g_de", "keywords_count": 800},
            {"country_name_en": "France", "db_name": "g_fr", "keywords_count": 0},
        ],
        {"domain": "a.com"},
        {"regions_db_count": 3, "total_keywords": 2300, "left_lines": 500},
    )
    analytics = report["analytics"]
    summary = analytics["summary"]
    assert report["regions_found"] == 3
    assert summary["regions_with_keywords"] == 2
    assert summary["regions_without_keywords"] == 1
    assert summary["total_keywords_across_regions"] == 2300
    assert summary["average_keywords_per_region"] == 1150.0
    assert summary["top_performing_region"] == "United States"
    assert summary["top_performing_database"] == "g_us"
    assert analytics["insights"]["status"] == "LIMITED_REGIONS"
    assert [r["percentage"] for r in analytics["top_regions"]] == [65.22, 34.78]
    assert report["api_info"] == {
        "total_databases_checked": 3,
        "api_total_keywords": 2300,
        "credits_remaining": 500,
    }


def test_regions_count_without_keywords():
    report = report_for(
        Endpoint.REGIONS_COUNT,
        [{"country_name_en": "France", "db_name": "g_fr", "keywords_count": 0}],
        {"domain": "a.com"},
    )
    assert report["analytics"]["insights"]["status"] == "NO_KEYWORDS"
    assert report["analytics"]["top_regions"] == []
    assert "api_info" not in report


def test_top_regions_ranked_by_count_under_name_sort():
    rows = [
        {"country_name_en": name, "db_name": f"g_{name[:2].lower()}", "keywords_count": count}
        for name, count in [
            ("Austria", 1), ("Belgium", 2), ("Canada", 3), ("Denmark", 4),
            ("Estonia", 5), ("France", 900), ("Greece", 5),
        ]
    ]
    report = report_for(
        Endpoint.REGIONS_COUNT,
        rows,
        {"domain": "a.com", "sort": "country_name_en", "order": "asc"},
    )
    top_regions = report["analytics"]["top_regions"]
    # Ties keep upstream order: Estonia before Greece
    assert [r["country"] for r in top_regions] == ["France", "Estonia", "Greece", "Denmark", "Canada"]
    assert report["analytics"]["summary"]["top_performing_region"] == "France"
    assert [r["region"] for r in report["analytics"]["keyword_distribution"]][:2] == ["Austria", "Belgium"]


def test_domain_keywords_positions_and_pagination():
    report = report_for(
        Endpoint.DOMAIN_KEYWORDS,
        [
            {"keyword": "seo", "position": 3, "types": ["ads", "video"], "intents": ["commercial"], "keyword_length": 1},
            {"keyword": "seo audit", "position": 15, "types": ["ads"], "keyword_length": 2},
        ],
        {"domain": "a.com"},
        {"total": 250, "page": 1, "left_lines": 900},
    )
    distribution = report["analytics"]["position_distribution"]
    assert distribution["top_3_positions"] == 1
    assert distribution["first_page_positions"] == 1
    assert distribution["second_page_positions"] == 1
    assert distribution["first_page_percentage"] == 50.0
    assert report["analytics"]["insights"]["status"] == "MODERATE"
    assert report["analytics"]["intent_distribution"] == {"commercial": 1}
    assert report["analytics"]["serp_features"] == {"ads": 2, "video": 1}
    assert report["analytics"]["keyword_length_distribution"] == {"1_words": 1, "2_words": 1}
    assert report["api_info"] == {
        "total_keywords_found": 250,
        "current_page": 1,
        "credits_remaining": 900,
        "total_pages": 3,
        "has_next_page": True,
        "credits_used_this_request": 2,
    }


def test_domain_keywords_empty_page():
    report = report_for(Endpoint.DOMAIN_KEYWORDS, [], {"domain": "a.com"})
    analytics = report["analytics"]
    assert report["keywords"] == []
    assert report["keywords_on_page"] == 0
    assert analytics["summary"]["total_traffic_estimate"] == 0
    assert analytics["summary"]["average_difficulty"] == 0.0
    assert "first_page_percentage" not in analytics["position_distribution"]
    assert "intent_distribution" not in analytics
    assert analytics["insights"]["status"] == "NO_KEYWORDS"


def test_non_array_data_is_an_empty_page():
    report = report_for(Endpoint.DOMAIN_KEYWORDS, None, {"domain": "a.com"})
    assert report["keywords"] == []
    assert report["keywords_on_page"] == 0
    assert "analytics" not in report


def test_uniq_keywords_gap_analysis():
    report = report_for(
        Endpoint.DOMAINS_UNIQ_KEYWORDS,
        [
            {"keyword": "x", "position": 2, "a.com": 2, "b.com": 12,
             "region_queries_count": 20000, "difficulty": 20, "traff": 100, "cost": 1.0},
            {"keyword": "y", "position": 5, "a.com": 5, "region_queries_count": 100, "difficulty": 30},
        ],
        {"domains": ["a.com", "b.com"], "minusDomain": "c.com"},
    )
    analytics = report["analytics"]
    comparison = analytics["domain_comparison"]
    assert comparison["a.com"]["total_keywords"] == 2
    assert comparison["a.com"]["first_page_positions"] == 2
    assert comparison["b.com"]["total_keywords"] == 1
    assert comparison["b.com"]["first_page_positions"] == 0
    assert analytics["summary"]["total_search_volume"] == 20100
    assert analytics["summary"]["average_volume_per_keyword"] == 10050
    assert analytics["insights"]["status"] == "HIGH"
    assert analytics["insights"]["opportunity_level"] == "HIGH"
    assert analytics["insights"]["strongest_performer"] == "a.com"
    assert analytics["insights"]["performance_insight"] == "a.com dominates with 2 first-page rankings"
    assert "timestamp" in report


def test_uniq_keywords_empty_result_names_domains():
    report = report_for(
        Endpoint.DOMAINS_UNIQ_KEYWORDS,
        [],
        {"domains": ["a.com", "b.com"], "minusDomain": "c.com"},
    )
    insights = report["analytics"]["insights"]
    assert insights["status"] == "NO_UNIQUE_KEYWORDS"
    assert insights["message"] == "No unique keywords found for a.com and b.com that c.com doesn't rank for"
    assert "strongest_performer" not in insights


def test_domain_urls():
    report = report_for(
        Endpoint.DOMAIN_URLS,
        [
            {"url": "https://a.com/blog/post.html", "keywords": 1500},
            {"url": "http://a.com/shop/", "keywords": 50},
            {"url": "https://a.com/", "keywords": 0},
        ],
        {"domain": "a.com"},
    )
    analytics = report["analytics"]
    assert analytics["summary"]["urls_with_keywords"] == 2
    assert analytics["summary"]["urls_without_keywords"] == 1
    assert analytics["summary"]["top_performing_url"] == "https://a.com/blog/post.html"
    assert analytics["performance_distribution"]["high_performing_urls"] == 1
    assert analytics["performance_distribution"]["low_performing_urls"] == 1
    assert analytics["protocol_distribution"] == {"https": 2, "http": 1}
    assert analytics["top_subdirectories"] == {"blog": 1, "shop": 1}
    assert analytics["file_extensions"] == {"html": 1}
    assert analytics["insights"]["status"] == "GOOD_DISTRIBUTION"
    assert analytics["insights"]["security_note"] == "1 URLs still using HTTP - consider HTTPS migration"


def test_domain_competitors():
    report = report_for(
        Endpoint.DOMAIN_COMPETITORS,
        [{"domain": "b.com", "relevance": 10.5, "intersected": 40}, {"domain": "c.com", "relevance": 4.5}],
        {"domain": "a.com"},
    )
    assert report["found_competitors_count"] == 2
    assert report["analytics"]["summary"] == {
        "total_relevance": 15.0,
        "total_intersected_keywords": 40,
        "average_relevance": 7.5,
    }
    assert report["estimated_credits_used"] == 3


# =============================================================================
# Keyword research
# =============================================================================

def test_keywords_report():
    report = report_for(
        Endpoint.KEYWORDS,
        [
            {"keyword": "seo", "region_queries_count": 60000, "difficulty": 20, "cost": 6.0,
             "lang": "en", "keyword_length": 1, "social_domains": ["reddit.com"]},
            {"keyword": "seo tools", "region_queries_count": 50000, "difficulty": 40, "cost": 1.0,
             "keyword_length": 2},
        ],
        {"keyword": "seo"},
    )
    analytics = report["analytics"]
    summary = analytics["summary"]
    assert summary["total_search_volume"] == 110000
    assert summary["average_volume_per_keyword"] == 55000
    assert summary["high_volume_keywords"] == 2
    assert summary["high_cost_keywords"] == 1
    assert summary["average_difficulty"] == 30.0
    assert analytics["language_distribution"] == {"en": 1, "unknown": 1}
    assert analytics["top_social_domains"] == {"reddit.com": 1}
    assert analytics["insights"]["volume_status"] == "HIGH_VOLUME"
    assert analytics["insights"]["difficulty_status"] == "MEDIUM_COMPETITION"
    assert analytics["insights"]["strategy"] == "QUICK_WINS"


def test_keywords_empty_result():
    report = report_for(Endpoint.KEYWORDS, [], {"keyword": "seo"})
    assert report["analytics"]["insights"]["status"] == "NO_KEYWORDS"
    assert "average_volume_per_keyword" not in report["analytics"]["summary"]


def test_related_keywords_connection_strength():
    report = report_for(
        Endpoint.RELATED_KEYWORDS,
        [
            {"keyword": "seo london", "weight": 12, "geo_names": ["london"]},
            {"keyword": "seo help", "weight": 3},
        ],
        {"keyword": "seo"},
    )
    analytics = report["analytics"]
    assert analytics["summary"]["average_connection_strength"] == 7.5
    assert analytics["summary"]["strong_connection_keywords"] == 1
    assert analytics["summary"]["keywords_with_geo"] == 1
    assert analytics["connection_strength_distribution"] == {"weight_12": 1, "weight_3": 1}
    assert analytics["insights"]["connection_status"] == "MEDIUM_RELATION"
    assert analytics["insights"]["strategy"] == "SEMANTIC_EXPANSION"


def test_keyword_competitors_keyed_by_domain():
    report = report_for(
        Endpoint.KEYWORD_COMPETITORS,
        {
            "a.com": {"domain": "a.com", "visible": 1500, "ads": 1, "visible_dynamic": 5},
            "b.com": {"domain": "b.com", "visible": 200, "ads": 0, "visible_dynamic": -1},
            "c.com": {"domain": "c.com"},
        },
        {"keyword": "seo"},
        {"left_lines": 100, "page": 1},
    )
    analytics = report["analytics"]
    assert report["found_competitors_count"] == 3
    assert analytics["summary"]["average_visibility"] == 566.67
    assert analytics["performance_distribution"]["top_performers"] == 1
    assert analytics["performance_distribution"]["medium_performers"] == 1
    assert analytics["performance_distribution"]["low_performers"] == 1
    assert analytics["insights"]["competition_level"] == "HIGH"
    assert analytics["insights"]["ad_competition"] == "MEDIUM"
    assert analytics["insights"]["market_trend"] == "DECLINING"
    assert report["api_info"] == {"credits_remaining": 100, "current_page": 1}
    assert report["estimated_credits_used"] == 3


def test_keyword_competitors_empty():
    report = report_for(Endpoint.KEYWORD_COMPETITORS, {}, {"keyword": "seo"})
    insights = report["analytics"]["insights"]
    assert insights["competition_level"] == "NO_DATA"
    assert "ad_competition" not in insights
    assert report["estimated_credits_used"] == 1


# =============================================================================
# Backlinks and account
# =============================================================================

def test_backlinks_quality_metrics():
    report = report_for(
        Endpoint.BACKLINKS_SUMMARY,
        {"backlinks": 200, "dofollow_backlinks": 150, "referring_domains": 50, "sersptat_domain_rank": 42},
        {"query": "a.com"},
    )
    quality = report["summary"]["quality_metrics"]
    assert quality["dofollow_percentage"] == 75.0
    assert quality["domain_diversity_percentage"] == 25.0
    assert quality["avg_backlinks_per_domain"] == 4.0
    assert report["summary"]["serpstat_domain_rank"] == 42


def test_backlinks_zero_denominators():
    report = report_for(Endpoint.BACKLINKS_SUMMARY, {"backlinks": 0}, {"query": "a.com"})
    quality = report["summary"]["quality_metrics"]
    assert quality["dofollow_percentage"] == 0.0
    assert quality["avg_backlinks_per_domain"] == 0.0


def test_api_stats():
    report = report_for(
        Endpoint.API_STATS,
        {"max_lines": 1000, "used_lines": 960, "left_lines": 40, "user_info": {"email": "me@example.com"}},
        {},
    )
    analytics = report["analytics"]
    assert analytics["usage"]["usage_percentage"] == 96.0
    assert analytics["usage"]["status"] == "CRITICAL"
    assert analytics["recommendations"]["estimated_domain_analyses"] == 8
    assert analytics["recommendations"]["tips"]["priority"] == "HIGH"
    assert analytics["user"] == {"user_details": {"email": "me@example.com"}}


def test_api_stats_unknown_limit():
    report = report_for(Endpoint.API_STATS, {"left_lines": 0}, {})
    assert report["analytics"]["usage"]["status"] == "UNKNOWN"
    assert report["analytics"]["recommendations"]["tips"]["priority"] == "CRITICAL"


def test_projects():
    recent = (datetime.now() - timedelta(days=5)).strftime("%Y-%m-%d %H:%M:%S")
    report = report_for(
        Endpoint.PROJECTS,
        [
            {"domain": "a.com", "type": "owner", "group": "Main", "created_at": recent},
            {"domain": "b.org", "type": "reader", "group": "Clients", "created_at": "2020-01-01 00:00:00"},
        ],
        {},
        {"page": 1, "page_total": 3, "count": 2, "total": 45},
    )
    analytics = report["analytics"]
    assert analytics["summary"]["owner_projects"] == 1
    assert analytics["summary"]["reader_projects"] == 1
    assert analytics["summary"]["recent_projects_30_days"] == 1
    assert analytics["domain_extensions"] == {"com": 1, "org": 1}
    assert analytics["insights"]["status"] == "WELL_ORGANIZED"
    assert analytics["insights"]["recent_activity"] == "1 projects created in last 30 days"
    assert report["api_info"]["has_next_page"] is True
    assert report["api_info"]["has_previous_page"] is False


def test_projects_page_flags_tolerate_malformed_metadata():
    report = report_for(Endpoint.PROJECTS, [], {}, {"page": "2", "page_total": "3"})
    assert report["api_info"]["has_next_page"] is True
    assert report["api_info"]["has_previous_page"] is True

    report = report_for(Endpoint.PROJECTS, [], {}, {"page": None, "page_total": 3, "total": 45})
    assert "has_next_page" not in report["api_info"]
    assert "has_previous_page" not in report["api_info"]
    assert report["api_info"]["total_projects"] == 45

    report = report_for(Endpoint.PROJECTS, [], {}, {"page": "first", "page_total": 3})
    assert "has_next_page" not in report["api_info"]


def test_build_report_tolerates_non_object_result():
    report = build_report(Endpoint.DOMAIN_URLS, "unexpected", {"domain": "a.com"})
    assert report["urls"] == []
    assert "api_info" not in report
