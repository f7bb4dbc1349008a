"""Report assembly - turns a raw upstream result into an enriched tool report.

Every builder takes the upstream ``result`` object (``data`` plus optional
``summary_info``) and the normalized arguments of the call, and returns a
JSON-serializable dictionary::

    {"status": "success", "method": ..., <request context>,
     <entries>, <count>, "analytics": {...}, "api_info": {...}}

``analytics`` is omitted when the upstream ``data`` is not an array, and
``api_info`` is omitted when there is no ``summary_info`` block.
"""

from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from ..utils.time import is_within_last_days, now_iso
from .aggregation import (
    as_list,
    average,
    average_int,
    bucket_counts,
    column_average,
    column_int_sum,
    column_sum,
    count_where,
    frequency,
    list_values,
    numeric,
    optional_number,
    pagination,
    percentage,
    position_tiers,
    round_half_up,
    to_frame,
    top_n,
)
from .constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROJECT_PAGE_SIZE,
    DEFAULT_SEARCH_ENGINE,
    DOMAIN_INFO_CREDITS_PER_DOMAIN,
    HIGH_COST_THRESHOLD,
    HIGH_PERFORMING_URL,
    HIGH_VOLUME_THRESHOLD,
    LOW_DIFFICULTY_THRESHOLD,
    MEDIUM_PERFORMER_VISIBILITY,
    MEDIUM_PERFORMING_URL,
    RECENT_PROJECT_DAYS,
    STRONG_CONNECTION_THRESHOLD,
    TOP_PERFORMER_VISIBILITY,
    TOP_REGIONS,
    TRACKED_FILE_EXTENSIONS,
    Endpoint,
)
from .insights import (
    AD_COMPETITION,
    COMPETITION_LEVEL,
    CREDIT_TIPS,
    CREDIT_USAGE,
    GAP_OPPORTUNITY,
    KEYWORD_DIFFICULTY,
    KEYWORD_STRATEGY,
    KEYWORD_VOLUME,
    MARKET_TREND,
    PROJECT_ORGANIZATION,
    RANKING_QUALITY,
    RECENT_ACTIVITY,
    REGIONAL_PRESENCE,
    RELATED_CONNECTION,
    RELATED_DIFFICULTY,
    RELATED_STRATEGY,
    RELATED_VOLUME,
    URL_DISTRIBUTION,
    URL_SECURITY,
    classify,
)

ReportBuilder = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]

NO_KEYWORDS_INSIGHT = {
    "status": "NO_KEYWORDS",
    "message": "No related keywords found",
    "recommendation": "Try using a broader seed keyword or different search engine",
}


# =============================================================================
# Shared pieces
# =============================================================================

def _start(endpoint: Endpoint, timestamp: bool = False) -> Dict[str, Any]:
    report = {"status": "success", "method": endpoint.value}
    if timestamp:
        report["timestamp"] = now_iso()
    return report


def _summary_info(result: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    info = result.get("summary_info")
    return info if isinstance(info, dict) else None


def _pick(source: Dict[str, Any], **fields: str) -> Dict[str, Any]:
    """Copy ``source[upstream]`` to ``output`` for each ``output=upstream`` present."""
    return {name: source[key] for name, key in fields.items() if key in source}


def _labels(frame: pd.DataFrame, column: str, default: str = "") -> pd.Series:
    """String column aligned with the frame, non-strings replaced by ``default``."""
    if column not in frame.columns:
        return pd.Series(default, index=frame.index, dtype=object)
    return frame[column].map(lambda v: v if isinstance(v, str) else default)


def _paged_api_info(
    info: Dict[str, Any],
    arguments: Dict[str, Any],
    entries: int,
    total_key: str,
) -> Dict[str, Any]:
    api_info = _pick(info, **{total_key: "total", "current_page": "page", "credits_remaining": "left_lines"})
    if "total" in info:
        api_info.update(pagination(
            info["total"],
            arguments.get("page", DEFAULT_PAGE),
            arguments.get("size", DEFAULT_PAGE_SIZE),
            entries,
        ))
    return api_info


def _position_distribution(tiers: Dict[str, int], entries: int, beyond: bool = True) -> Dict[str, Any]:
    distribution = {
        "top_3_positions": tiers["top_3"],
        "first_page_positions": tiers["first_page"],
        "second_page_positions": tiers["second_page"],
    }
    if beyond:
        distribution["beyond_second_page"] = tiers["beyond_second_page"]
    if entries:
        distribution["top_3_percentage"] = percentage(tiers["top_3"], entries)
        distribution["first_page_percentage"] = percentage(tiers["first_page"], entries)
    return distribution


def _keyword_summary(frame: pd.DataFrame, entries: int, with_traffic: bool) -> Dict[str, Any]:
    """Volume, cost, difficulty and competition totals shared by keyword reports."""
    volume = float(numeric(frame, "region_queries_count").sum())
    cost = column_sum(frame, "cost")
    traffic = float(numeric(frame, "traff").sum())

    summary: Dict[str, Any] = {
        "total_search_volume": int(volume),
        "total_cost_estimate": round_half_up(cost),
    }
    if with_traffic:
        summary["total_traffic_estimate"] = int(traffic)
    summary.update({
        "average_difficulty": column_average(frame, "difficulty"),
        "average_competition": column_average(frame, "concurrency"),
        "high_volume_keywords": count_where(frame, "region_queries_count", lambda v: v > HIGH_VOLUME_THRESHOLD),
        "low_difficulty_keywords": count_where(frame, "difficulty", lambda v: v < LOW_DIFFICULTY_THRESHOLD),
        "high_cost_keywords": count_where(frame, "cost", lambda v: v > HIGH_COST_THRESHOLD),
    })
    if entries:
        summary["average_volume_per_keyword"] = average_int(volume, entries)
        summary["average_cost_per_keyword"] = average(cost, entries)
        if with_traffic:
            summary["average_traffic_per_keyword"] = average_int(traffic, entries)
    return summary


def _empty_page(report: Dict[str, Any], entries_key: str, count_key: str, count_first: bool = False) -> None:
    if count_first:
        report[count_key] = 0
        report[entries_key] = []
    else:
        report[entries_key] = []
        report[count_key] = 0


# =============================================================================
# Domain analysis
# =============================================================================

def build_domains_info(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatDomainProcedure.getDomainsInfo."""
    requested = arguments.get("domains") or []
    report = _start(Endpoint.DOMAINS_INFO)
    report["search_engine"] = arguments.get("se", DEFAULT_SEARCH_ENGINE)
    report["requested_domains_count"] = len(requested)

    data = result.get("data")
    if isinstance(data, list):
        frame = to_frame(data)
        visibility = column_sum(frame, "visible")
        report["found_domains_count"] = len(data)
        report["domains"] = data
        report["analytics"] = {
            "summary": {
                "total_visibility": round_half_up(visibility),
                "total_estimated_traffic": column_int_sum(frame, "traff"),
                "total_keywords": column_int_sum(frame, "keywords"),
                "average_visibility": average(visibility, len(data)),
            }
        }
    else:
        _empty_page(report, "domains", "found_domains_count", count_first=True)

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _pick(info, credits_remaining="left_lines", page="page")
    report["estimated_credits_used"] = DOMAIN_INFO_CREDITS_PER_DOMAIN * len(requested)
    return report


def _regional_analytics(frame: pd.DataFrame, entries: int) -> Dict[str, Any]:
    counts = numeric(frame, "keywords_count")
    ranked = counts[counts > 0]
    countries = _labels(frame, "country_name_en")
    databases = _labels(frame, "db_name")
    total = int(counts.sum())

    summary: Dict[str, Any] = {
        "total_keywords_across_regions": total,
        "regions_with_keywords": len(ranked),
        "regions_without_keywords": entries - len(ranked),
        "average_keywords_per_region": average(total, len(ranked)),
    }
    if not ranked.empty:
        # idxmax returns the first row holding the maximum
        top = ranked.idxmax()
        summary.update({
            "max_keywords_in_region": int(ranked.max()),
            "min_keywords_in_region": int(ranked.min()),
            "top_performing_region": countries[top],
            "top_performing_database": databases[top],
        })

    top_regions = [
        {
            "country": countries[i],
            "database": databases[i],
            "keywords": int(count),
            "percentage": percentage(count, total),
        }
        for i, count in ranked.sort_values(ascending=False, kind="stable").head(TOP_REGIONS).items()
    ]
    distribution = [{"region": countries[i], "keywords": int(count)} for i, count in ranked.items()]

    insight = classify(REGIONAL_PRESENCE, {
        "regions_with_keywords": len(ranked),
        "top_country": summary.get("top_performing_region", ""),
    })
    return {
        "summary": summary,
        "top_regions": top_regions,
        "keyword_distribution": distribution,
        "insights": insight.to_dict(),
    }


def build_regions_count(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatDomainProcedure.getRegionsCount."""
    report = _start(Endpoint.REGIONS_COUNT)
    report["analyzed_domain"] = arguments.get("domain")
    report["sort_field"] = arguments.get("sort", "keywords_count")
    report["sort_order"] = arguments.get("order", "desc")

    data = result.get("data")
    if isinstance(data, list):
        report["regional_data"] = data
        report["regions_found"] = len(data)
        report["analytics"] = _regional_analytics(to_frame(data), len(data))
    else:
        _empty_page(report, "regional_data", "regions_found")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _pick(
            info,
            total_databases_checked="regions_db_count",
            api_total_keywords="total_keywords",
            credits_remaining="left_lines",
        )
    return report


def build_domain_keywords(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatDomainProcedure.getDomainKeywords."""
    report = _start(Endpoint.DOMAIN_KEYWORDS)
    report.update({
        "analyzed_domain": arguments.get("domain"),
        "search_engine": arguments.get("se", DEFAULT_SEARCH_ENGINE),
        "page": arguments.get("page", DEFAULT_PAGE),
        "page_size": arguments.get("size", DEFAULT_PAGE_SIZE),
        "with_subdomains": arguments.get("withSubdomains", False),
        "with_intents": arguments.get("withIntents", False),
    })

    data = result.get("data")
    entries = len(as_list(data))
    if isinstance(data, list):
        frame = to_frame(data)
        tiers = position_tiers(frame)
        report["keywords"] = data
        report["keywords_on_page"] = entries

        analytics: Dict[str, Any] = {
            "summary": {
                "total_traffic_estimate": column_int_sum(frame, "traff"),
                "total_cost_estimate": round_half_up(column_sum(frame, "cost")),
                "average_difficulty": column_average(frame, "difficulty"),
                "average_concurrency": column_average(frame, "concurrency"),
            },
            "position_distribution": _position_distribution(tiers, entries),
            "keyword_length_distribution": bucket_counts(frame, "keyword_length", "{}_words"),
        }
        intents = frequency(list_values(frame, "intents"))
        if intents:
            analytics["intent_distribution"] = intents
        analytics["serp_features"] = top_n(frequency(list_values(frame, "types")))
        analytics["insights"] = classify(RANKING_QUALITY, {
            "total": entries,
            "first_page_percentage": percentage(tiers["first_page"], entries),
        }).to_dict()
        report["analytics"] = analytics
    else:
        _empty_page(report, "keywords", "keywords_on_page")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _paged_api_info(info, arguments, entries, "total_keywords_found")
    return report


def _domain_comparison(frame: pd.DataFrame, domains: List[str]) -> Dict[str, Dict[str, Any]]:
    """Per-domain ranking stats; each result entry carries a position under the domain's key."""
    comparison = {}
    for domain in domains:
        total = int(frame[domain].notna().sum()) if domain in frame.columns else 0
        tiers = position_tiers(frame, domain)
        stats = {
            "total_keywords": total,
            "top_3_positions": tiers["top_3"],
            "first_page_positions": tiers["first_page"],
        }
        if total:
            stats["top_3_percentage"] = percentage(tiers["top_3"], total)
            stats["first_page_percentage"] = percentage(tiers["first_page"], total)
        comparison[domain] = stats
    return comparison


def build_domains_uniq_keywords(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatDomainProcedure.getDomainsUniqKeywords (gap analysis)."""
    domains = list(arguments.get("domains") or [])
    excluded = arguments.get("minusDomain")
    report = _start(Endpoint.DOMAINS_UNIQ_KEYWORDS, timestamp=True)
    report.update({
        "analyzed_domains": domains,
        "excluded_domain": excluded,
        "search_engine": arguments.get("se", DEFAULT_SEARCH_ENGINE),
        "page": arguments.get("page", DEFAULT_PAGE),
        "page_size": arguments.get("size", DEFAULT_PAGE_SIZE),
    })

    data = result.get("data")
    entries = len(as_list(data))
    if isinstance(data, list):
        frame = to_frame(data)
        tiers = position_tiers(frame)
        summary = _keyword_summary(frame, entries, with_traffic=True)
        comparison = _domain_comparison(frame, domains)
        report["unique_keywords"] = data
        report["keywords_on_page"] = entries

        insight = classify(GAP_OPPORTUNITY, {
            "total": entries,
            "average_difficulty": summary["average_difficulty"],
            "first_page_percentage": percentage(tiers["first_page"], entries),
            "high_volume_keywords": summary["high_volume_keywords"],
            "domains": " and ".join(domains),
            "excluded_domain": excluded,
        })
        insights = insight.to_dict()
        insights["opportunity_level"] = insight.status

        strongest, best = None, 0
        for domain, stats in comparison.items():
            if stats["first_page_positions"] > best:
                strongest, best = domain, stats["first_page_positions"]
        if entries and strongest is not None:
            insights["strongest_performer"] = strongest
            insights["performance_insight"] = f"{strongest} dominates with {best} first-page rankings"

        report["analytics"] = {
            "summary": summary,
            "position_distribution": _position_distribution(tiers, entries, beyond=False),
            "keyword_length_distribution": bucket_counts(frame, "keyword_length", "{}_words"),
            "top_serp_features": top_n(frequency(list_values(frame, "types"))),
            "domain_comparison": comparison,
            "insights": insights,
        }
    else:
        _empty_page(report, "unique_keywords", "keywords_on_page")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _paged_api_info(info, arguments, entries, "total_unique_keywords")
    return report


def _first_path_segment(url: str) -> str:
    _, _, rest = url.partition("://")
    _, slash, path = rest.partition("/")
    if not slash:
        return ""
    return path.split("/", 1)[0]


def _file_extension(url: str) -> str:
    last_part = url.rsplit("/", 1)[-1]
    if "." not in last_part:
        return ""
    extension = last_part.rsplit(".", 1)[1]
    return extension if extension in TRACKED_FILE_EXTENSIONS else ""


def _url_analytics(frame: pd.DataFrame, entries: int) -> Dict[str, Any]:
    keywords = numeric(frame, "keywords")
    ranked = keywords[keywords > 0]
    urls = _labels(frame, "url")
    total = int(keywords.sum())

    summary: Dict[str, Any] = {
        "total_keywords_across_urls": total,
        "urls_with_keywords": len(ranked),
        "urls_without_keywords": entries - len(ranked),
        "average_keywords_per_url": average(total, len(ranked)),
    }
    if not ranked.empty:
        summary.update({
            "max_keywords_per_url": int(ranked.max()),
            "min_keywords_per_url": int(ranked.min()),
            "top_performing_url": urls[ranked.idxmax()],
        })

    high = int((ranked > HIGH_PERFORMING_URL).sum())
    medium = int(((ranked >= MEDIUM_PERFORMING_URL) & (ranked <= HIGH_PERFORMING_URL)).sum())
    low = int((ranked < MEDIUM_PERFORMING_URL).sum())
    performance: Dict[str, Any] = {
        "high_performing_urls": high,
        "medium_performing_urls": medium,
        "low_performing_urls": low,
    }
    if entries:
        performance["high_performing_percentage"] = percentage(high, entries)
        performance["medium_performing_percentage"] = percentage(medium, entries)
        performance["low_performing_percentage"] = percentage(low, entries)

    present = [url for url in urls if url]
    protocols = frequency(
        "https" if url.startswith("https://") else "http"
        for url in present
        if url.startswith(("https://", "http://"))
    )
    subdirectories = frequency(s for s in map(_first_path_segment, present) if s)
    extensions = frequency(e for e in map(_file_extension, present) if e)

    insights = classify(URL_DISTRIBUTION, {
        "total": entries,
        "urls_with_keywords": len(ranked),
        "ranking_percentage": percentage(len(ranked), entries),
    }).to_dict()
    if entries:
        insights["security_note"] = classify(URL_SECURITY, {"http_urls": protocols.get("http", 0)}).message

    return {
        "summary": summary,
        "performance_distribution": performance,
        "protocol_distribution": protocols,
        "top_subdirectories": top_n(subdirectories),
        "file_extensions": extensions,
        "insights": insights,
    }


def build_domain_urls(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatDomainProcedure.getDomainUrls."""
    report = _start(Endpoint.DOMAIN_URLS, timestamp=True)
    report.update({
        "analyzed_domain": arguments.get("domain"),
        "search_engine": arguments.get("se", DEFAULT_SEARCH_ENGINE),
        "page": arguments.get("page", DEFAULT_PAGE),
        "page_size": arguments.get("size", DEFAULT_PAGE_SIZE),
    })

    data = result.get("data")
    entries = len(as_list(data))
    if isinstance(data, list):
        report["urls"] = data
        report["urls_on_page"] = entries
        report["analytics"] = _url_analytics(to_frame(data), entries)
    else:
        _empty_page(report, "urls", "urls_on_page")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _paged_api_info(info, arguments, entries, "total_urls_found")
    return report


def build_domain_competitors(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatDomainProcedure.getCompetitors."""
    report = _start(Endpoint.DOMAIN_COMPETITORS)
    report["search_engine"] = arguments.get("se", DEFAULT_SEARCH_ENGINE)

    data = result.get("data")
    entries = len(as_list(data))
    if isinstance(data, list):
        frame = to_frame(data)
        relevance = column_sum(frame, "relevance")
        report["found_competitors_count"] = entries
        report["competitors"] = data
        report["analytics"] = {
            "summary": {
                "total_relevance": round_half_up(relevance),
                "total_intersected_keywords": column_int_sum(frame, "intersected"),
                "average_relevance": average(relevance, entries),
            }
        }
    else:
        _empty_page(report, "competitors", "found_competitors_count", count_first=True)

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _pick(info, credits_remaining="left_lines", page="page")
    report["estimated_credits_used"] = 1 + entries
    return report


# =============================================================================
# Keyword research
# =============================================================================

def _keyword_insights(summary: Dict[str, Any], entries: int) -> Dict[str, Any]:
    if not entries:
        return dict(NO_KEYWORDS_INSIGHT)
    stats = {
        "total": entries,
        "average_volume": summary["average_volume_per_keyword"],
        "average_difficulty": summary["average_difficulty"],
        "low_difficulty_keywords": summary["low_difficulty_keywords"],
        "high_volume_keywords": summary["high_volume_keywords"],
    }
    insights = {}
    insights.update(classify(KEYWORD_VOLUME, stats).to_dict("volume_status", "volume_message"))
    insights.update(classify(KEYWORD_DIFFICULTY, stats).to_dict("difficulty_status", "difficulty_message"))
    insights.update(classify(KEYWORD_STRATEGY, stats).to_dict("strategy", "strategy_message"))
    return insights


def build_keywords(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatKeywordProcedure.getKeywords."""
    report = _start(Endpoint.KEYWORDS, timestamp=True)
    report.update({
        "seed_keyword": arguments.get("keyword"),
        "search_engine": arguments.get("se", DEFAULT_SEARCH_ENGINE),
        "page": arguments.get("page", DEFAULT_PAGE),
        "page_size": arguments.get("size", DEFAULT_PAGE_SIZE),
        "with_intents": arguments.get("withIntents", False),
    })

    data = result.get("data")
    entries = len(as_list(data))
    if isinstance(data, list):
        frame = to_frame(data)
        summary = _keyword_summary(frame, entries, with_traffic=False)
        report["keywords"] = data
        report["keywords_on_page"] = entries

        analytics: Dict[str, Any] = {
            "summary": summary,
            "keyword_length_distribution": bucket_counts(frame, "keyword_length", "{}_words"),
            "language_distribution": frequency(_labels(frame, "lang", "unknown")),
        }
        intents = frequency(list_values(frame, "intents"))
        if intents:
            analytics["intent_distribution"] = intents
        analytics["top_serp_features"] = top_n(frequency(list_values(frame, "types")))
        analytics["top_social_domains"] = top_n(frequency(list_values(frame, "social_domains")))
        analytics["insights"] = _keyword_insights(summary, entries)
        report["analytics"] = analytics
    else:
        _empty_page(report, "keywords", "keywords_on_page")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _paged_api_info(info, arguments, entries, "total_keywords_found")
    return report


def _related_insights(summary: Dict[str, Any], entries: int) -> Dict[str, Any]:
    if not entries:
        return dict(NO_KEYWORDS_INSIGHT)
    stats = {
        "total": entries,
        "average_volume": summary["average_volume_per_keyword"],
        "average_difficulty": summary["average_difficulty"],
        "average_connection_strength": summary["average_connection_strength"],
        "strong_connection_keywords": summary["strong_connection_keywords"],
        "low_difficulty_keywords": summary["low_difficulty_keywords"],
        "keywords_with_geo": summary["keywords_with_geo"],
    }
    insights = {}
    insights.update(classify(RELATED_VOLUME, stats).to_dict("volume_status", "volume_message"))
    insights.update(classify(RELATED_DIFFICULTY, stats).to_dict("difficulty_status", "difficulty_message"))
    insights.update(classify(RELATED_CONNECTION, stats).to_dict("connection_status", "connection_message"))
    insights.update(classify(RELATED_STRATEGY, stats).to_dict("strategy", "strategy_message"))
    return insights


def build_related_keywords(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatKeywordProcedure.getRelatedKeywords."""
    report = _start(Endpoint.RELATED_KEYWORDS, timestamp=True)
    report.update({
        "seed_keyword": arguments.get("keyword"),
        "search_engine": arguments.get("se", DEFAULT_SEARCH_ENGINE),
        "page": arguments.get("page", DEFAULT_PAGE),
        "page_size": arguments.get("size", DEFAULT_PAGE_SIZE),
        "with_intents": arguments.get("withIntents", False),
    })

    data = result.get("data")
    entries = len(as_list(data))
    if isinstance(data, list):
        frame = to_frame(data)
        summary = _keyword_summary(frame, entries, with_traffic=False)
        weights = numeric(frame, "weight")
        with_geo = list_values(frame, "geo_names").index.nunique()

        summary["average_connection_strength"] = average(float(weights.sum()), len(weights))
        summary["strong_connection_keywords"] = int((weights > STRONG_CONNECTION_THRESHOLD).sum())
        summary["keywords_with_geo"] = int(with_geo)

        report["related_keywords"] = data
        report["keywords_on_page"] = entries

        analytics: Dict[str, Any] = {
            "summary": summary,
            "connection_strength_distribution": bucket_counts(frame, "weight", "weight_{}"),
        }
        intents = frequency(list_values(frame, "intents"))
        if intents:
            analytics["intent_distribution"] = intents
        analytics["top_serp_features"] = top_n(frequency(list_values(frame, "types")))
        analytics["insights"] = _related_insights(summary, entries)
        report["analytics"] = analytics
    else:
        _empty_page(report, "related_keywords", "keywords_on_page")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _paged_api_info(info, arguments, entries, "total_keywords_found")
    return report


def _competitor_entries(data: Any) -> Optional[List[Any]]:
    """Competitors arrive keyed by domain; a plain array is accepted as well."""
    if isinstance(data, dict):
        return list(data.values())
    if isinstance(data, list):
        return data
    return None


def build_keyword_competitors(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatKeywordProcedure.getCompetitors."""
    report = _start(Endpoint.KEYWORD_COMPETITORS, timestamp=True)
    report.update({
        "analyzed_keyword": arguments.get("keyword"),
        "search_engine": arguments.get("se", DEFAULT_SEARCH_ENGINE),
        "requested_size": arguments.get("size"),
    })

    competitors = _competitor_entries(result.get("data"))
    entries = len(competitors or [])
    if competitors is not None:
        frame = to_frame(competitors)
        visibility = numeric(frame, "visible")
        total_visibility = float(visibility.sum())
        traffic = float(numeric(frame, "traff").sum())

        summary: Dict[str, Any] = {
            "total_competitors": entries,
            "total_visibility": round_half_up(total_visibility),
            "total_estimated_traffic": int(traffic),
            "total_intersected_keywords": column_int_sum(frame, "intersected"),
            "competitors_with_ads": count_where(frame, "ads", lambda v: v > 0),
            "competitors_with_positive_dynamics": count_where(frame, "visible_dynamic", lambda v: v > 0),
        }
        if entries:
            summary.update({
                "average_visibility": average(total_visibility, entries),
                "average_relevance": average(column_sum(frame, "relevance"), entries),
                "average_our_relevance": average(column_sum(frame, "our_relevance"), entries),
                "average_traffic": average_int(traffic, entries),
            })

        # Missing visibility counts as zero, i.e. a low performer
        top = int((visibility > TOP_PERFORMER_VISIBILITY).sum())
        medium = int(((visibility >= MEDIUM_PERFORMER_VISIBILITY) & (visibility <= TOP_PERFORMER_VISIBILITY)).sum())
        low = entries - top - medium
        performance: Dict[str, Any] = {"top_performers": top, "medium_performers": medium, "low_performers": low}
        if entries:
            performance["top_performers_percentage"] = percentage(top, entries)
            performance["medium_performers_percentage"] = percentage(medium, entries)
            performance["low_performers_percentage"] = percentage(low, entries)

        stats = {
            "total": entries,
            "average_visibility": summary.get("average_visibility", 0.0),
            "ads_percentage": percentage(summary["competitors_with_ads"], entries),
            "growing_percentage": percentage(summary["competitors_with_positive_dynamics"], entries),
        }
        insights = classify(COMPETITION_LEVEL, stats).to_dict("competition_level")
        if entries:
            insights.update(classify(AD_COMPETITION, stats).to_dict("ad_competition", "ad_insight"))
            insights.update(classify(MARKET_TREND, stats).to_dict("market_trend", "trend_insight"))

        report["competitors"] = competitors
        report["found_competitors_count"] = entries
        report["analytics"] = {
            "summary": summary,
            "performance_distribution": performance,
            "insights": insights,
        }
    else:
        _empty_page(report, "competitors", "found_competitors_count")

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _pick(info, credits_remaining="left_lines", current_page="page")
    report["estimated_credits_used"] = max(1, entries)
    return report


# =============================================================================
# Backlinks and account
# =============================================================================

def _count(data: Dict[str, Any], key: str) -> int:
    value = optional_number(data.get(key))
    return int(value) if value is not None else 0


def build_backlinks_summary(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatBacklinksProcedure.getSummaryV2."""
    report = _start(Endpoint.BACKLINKS_SUMMARY)
    report["query"] = arguments.get("query")
    report["search_type"] = arguments.get("searchType", "domain")

    data = result.get("data")
    if isinstance(data, dict):
        backlinks = _count(data, "backlinks")
        dofollow = _count(data, "dofollow_backlinks")
        referring = _count(data, "referring_domains")
        # Upstream spells the rank key "sersptat"
        rank = _count(data, "sersptat_domain_rank")

        report["backlinks_data"] = data
        report["summary"] = {
            "total_backlinks": backlinks,
            "referring_domains": referring,
            "dofollow_backlinks": dofollow,
            "nofollow_backlinks": _count(data, "nofollow_backlinks"),
            "serpstat_domain_rank": rank,
            "referring_ip_addresses": _count(data, "referring_ip_addresses"),
            "referring_subnets": _count(data, "referring_subnets"),
            "malicious_domains": _count(data, "referring_malicious_domains"),
            "link_types": {
                "text": _count(data, "text_backlinks"),
                "image": _count(data, "image_backlinks"),
                "redirect": _count(data, "redirect_backlinks"),
                "canonical": _count(data, "canonical_backlinks"),
                "from_mainpages": _count(data, "backlinks_from_mainpages"),
            },
            "recent_changes": {
                "backlinks_change": _count(data, "backlinks_change"),
                "referring_domains_change": _count(data, "referring_domains_change"),
                "dofollow_change": _count(data, "dofollow_backlinks_change"),
                "nofollow_change": _count(data, "nofollow_backlinks_change"),
            },
            "quality_metrics": {
                "total_backlinks": backlinks,
                "referring_domains": referring,
                "serpstat_domain_rank": rank,
                "dofollow_percentage": percentage(dofollow, backlinks),
                "domain_diversity_percentage": percentage(referring, backlinks),
                "avg_backlinks_per_domain": average(backlinks, referring),
            },
        }
    else:
        report["backlinks_data"] = {}

    info = _summary_info(result)
    if info is not None:
        report["api_info"] = _pick(info, credits_remaining="left_lines")
    return report


def build_api_stats(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for SerpstatLimitsProcedure.getStats."""
    report = _start(Endpoint.API_STATS, timestamp=True)

    data = result.get("data")
    if not isinstance(data, dict):
        report["api_stats"] = {}
        return report

    max_credits = _count(data, "max_lines")
    used_credits = _count(data, "used_lines")
    remaining = _count(data, "left_lines")
    usage_percentage = percentage(used_credits, max_credits)
    status = classify(CREDIT_USAGE, {"max_credits": max_credits, "usage_percentage": usage_percentage}).status
    tip = classify(CREDIT_TIPS, {"remaining_credits": remaining})

    analytics: Dict[str, Any] = {
        "usage": {
            "max_credits": max_credits,
            "used_credits": used_credits,
            "remaining_credits": remaining,
            "usage_percentage": usage_percentage,
            "status": status,
        },
        "recommendations": {
            "estimated_domain_analyses": max(remaining, 0) // DOMAIN_INFO_CREDITS_PER_DOMAIN,
            "estimated_keyword_researches": max(remaining, 0),
            "tips": tip.to_dict("priority"),
        },
    }
    if data.get("user_info") is not None:
        analytics["user"] = {"user_details": data["user_info"]}

    report["api_stats"] = data
    report["analytics"] = analytics
    return report


def _domain_extension(domain: str) -> str:
    if "." not in domain:
        return "unknown"
    return domain.rsplit(".", 1)[1].lower()


def build_projects(result: Dict[str, Any], arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Report for ProjectProcedure.getProjects."""
    report = _start(Endpoint.PROJECTS, timestamp=True)
    report["requested_page"] = arguments.get("page", DEFAULT_PAGE)
    report["requested_size"] = arguments.get("size", DEFAULT_PROJECT_PAGE_SIZE)

    data = result.get("data")
    if isinstance(data, list):
        entries = len(data)
        frame = to_frame(data)
        types = _labels(frame, "type")
        groups = frequency(_labels(frame, "group", "Unknown"))
        extensions = frequency(_domain_extension(d) for d in _labels(frame, "domain") if d)
        recent = sum(
            1 for created in _labels(frame, "created_at")
            if is_within_last_days(created, RECENT_PROJECT_DAYS)
        )
        owners = int((types == "owner").sum())

        summary = {
            "total_projects_on_page": entries,
            "owner_projects": owners,
            "reader_projects": int((types == "reader").sum()),
            "recent_projects_30_days": recent,
            "unique_groups": len(groups),
            "unique_domain_extensions": len(extensions),
        }
        insights = classify(PROJECT_ORGANIZATION, {
            "total": entries,
            "owner_projects": owners,
            "unique_groups": len(groups),
        }).to_dict()
        insights["recent_activity"] = classify(RECENT_ACTIVITY, {"recent_projects": recent}).message

        report["projects"] = data
        report["projects_on_page"] = entries
        report["analytics"] = {
            "summary": summary,
            "group_distribution": top_n(groups),
            "domain_extensions": top_n(extensions),
            "insights": insights,
        }
    else:
        _empty_page(report, "projects", "projects_on_page")

    info = _summary_info(result)
    if info is not None:
        api_info = _pick(
            info,
            current_page="page",
            total_pages="page_total",
            count_on_page="count",
            total_projects="total",
        )
        page = optional_number(info.get("page"))
        page_total = optional_number(info.get("page_total"))
        if page is not None and page_total is not None:
            api_info["has_next_page"] = page < page_total
            api_info["has_previous_page"] = page > 1
        report["api_info"] = api_info
    return report


REPORT_BUILDERS: Dict[Endpoint, ReportBuilder] = {
    Endpoint.DOMAINS_INFO: build_domains_info,
    Endpoint.REGIONS_COUNT: build_regions_count,
    Endpoint.DOMAIN_KEYWORDS: build_domain_keywords,
    Endpoint.DOMAINS_UNIQ_KEYWORDS: build_domains_uniq_keywords,
    Endpoint.DOMAIN_URLS: build_domain_urls,
    Endpoint.DOMAIN_COMPETITORS: build_domain_competitors,
    Endpoint.KEYWORDS: build_keywords,
    Endpoint.RELATED_KEYWORDS: build_related_keywords,
    Endpoint.KEYWORD_COMPETITORS: build_keyword_competitors,
    Endpoint.BACKLINKS_SUMMARY: build_backlinks_summary,
    Endpoint.API_STATS: build_api_stats,
    Endpoint.PROJECTS: build_projects,
}


def build_report(endpoint: Endpoint, result: Any, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Assemble the report for one endpoint.

    Args:
        endpoint: Endpoint that produced the result
        result: Upstream ``result`` object; anything but a dict is treated as empty
        arguments: Normalized arguments of the call

    Returns:
        Report dictionary
    """
    if not isinstance(result, dict):
        result = {}
    return REPORT_BUILDERS[Endpoint(endpoint)](result, arguments or {})
