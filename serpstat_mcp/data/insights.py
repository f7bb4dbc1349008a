"""Insight ladders - ordered threshold rules that classify aggregated statistics."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, NamedTuple, Optional, Sequence


class Rule(NamedTuple):
    """One rung of a ladder. Templates are ``str.format`` strings over the stats."""
    predicate: Callable[[Dict[str, Any]], bool]
    status: str
    message: str
    recommendation: Optional[str] = None


@dataclass(frozen=True)
class Insight:
    status: str
    message: str
    recommendation: Optional[str] = None

    def to_dict(
        self,
        status_key: str = "status",
        message_key: str = "message",
        recommendation_key: str = "recommendation",
    ) -> Dict[str, Any]:
        result = {status_key: self.status, message_key: self.message}
        if self.recommendation is not None:
            result[recommendation_key] = self.recommendation
        return result


def _always(stats: Dict[str, Any]) -> bool:
    return True


def classify(rules: Sequence[Rule], stats: Dict[str, Any]) -> Insight:
    """Evaluate rules top to bottom and return the first match.

    Args:
        rules: Ordered ladder; the last rung should always match
        stats: Values the predicates and templates read

    Returns:
        Insight with interpolated message

    Raises:
        ValueError: If no rule matches
    """
    for rule in rules:
        if rule.predicate(stats):
            return Insight(
                status=rule.status,
                message=rule.message.format(**stats),
                recommendation=rule.recommendation.format(**stats) if rule.recommendation else None,
            )
    raise ValueError("No insight rule matched")


# =============================================================================
# Domain analysis
# =============================================================================

# stats: regions_with_keywords, top_country
REGIONAL_PRESENCE = (
    Rule(lambda s: s["regions_with_keywords"] == 0, "NO_KEYWORDS",
         "Domain has no keywords in any regional Google databases",
         "Check domain spelling or try analyzing a different domain"),
    Rule(lambda s: s["regions_with_keywords"] == 1, "SINGLE_REGION",
         "Domain only has keywords in {top_country}",
         "Consider expanding to other regional markets"),
    Rule(lambda s: s["regions_with_keywords"] <= 3, "LIMITED_REGIONS",
         "Domain has presence in {regions_with_keywords} regions",
         "Good regional focus, consider expanding to similar markets"),
    Rule(_always, "MULTI_REGIONAL",
         "Domain has global presence across {regions_with_keywords} regions",
         "Strong international presence - optimize for top performing regions"),
)

# stats: total, first_page_percentage
RANKING_QUALITY = (
    Rule(lambda s: s["total"] == 0, "NO_KEYWORDS",
         "No keywords found for this domain",
         "Check domain spelling or expand search criteria"),
    Rule(lambda s: s["first_page_percentage"] >= 80, "EXCELLENT",
         "Excellent performance with {first_page_percentage:.1f}% of keywords on first page",
         "Focus on improving positions to top 3 for maximum traffic"),
    Rule(lambda s: s["first_page_percentage"] >= 60, "GOOD",
         "Good performance with {first_page_percentage:.1f}% of keywords on first page",
         "Optimize underperforming keywords to reach first page"),
    Rule(lambda s: s["first_page_percentage"] >= 40, "MODERATE",
         "Moderate performance with {first_page_percentage:.1f}% of keywords on first page",
         "Significant SEO improvements needed for better rankings"),
    Rule(_always, "POOR",
         "Poor performance with only {first_page_percentage:.1f}% of keywords on first page",
         "Comprehensive SEO strategy required to improve rankings"),
)

# stats: total, average_difficulty, first_page_percentage, high_volume_keywords,
# domains, excluded_domain
GAP_OPPORTUNITY = (
    Rule(lambda s: s["total"] == 0, "NO_UNIQUE_KEYWORDS",
         "No unique keywords found for {domains} that {excluded_domain} doesn't rank for",
         "Try different domain combinations or adjust filters"),
    Rule(lambda s: s["average_difficulty"] < 40 and s["first_page_percentage"] > 70, "HIGH",
         "Excellent opportunity - many low-difficulty keywords with good positions",
         "Focus on content optimization for these unique keyword opportunities"),
    Rule(lambda s: s["average_difficulty"] < 60 and s["first_page_percentage"] > 50, "MEDIUM",
         "Good opportunity - moderate difficulty with decent positions",
         "Consider targeting these keywords with focused SEO efforts"),
    Rule(lambda s: s["high_volume_keywords"] > s["total"] * 0.3, "HIGH_VOLUME",
         "High search volume keywords available - significant traffic potential",
         "Prioritize high-volume keywords for maximum impact"),
    Rule(_always, "COMPETITIVE",
         "Competitive keywords - requires strong SEO strategy",
         "Focus on long-tail variations and content depth"),
)

# stats: total, urls_with_keywords, ranking_percentage
URL_DISTRIBUTION = (
    Rule(lambda s: s["total"] == 0, "NO_URLS",
         "No URLs found for this domain",
         "Check domain spelling or try different search engine"),
    Rule(lambda s: s["urls_with_keywords"] == 0, "NO_RANKING_URLS",
         "Domain has URLs but none are ranking for keywords",
         "Improve content quality and SEO optimization"),
    Rule(lambda s: s["ranking_percentage"] > 80, "EXCELLENT_DISTRIBUTION",
         "Excellent keyword distribution: {ranking_percentage:.1f}% of URLs ranking",
         "Continue current SEO strategy and expand content"),
    Rule(lambda s: s["ranking_percentage"] > 60, "GOOD_DISTRIBUTION",
         "Good keyword distribution: {ranking_percentage:.1f}% of URLs ranking",
         "Optimize non-ranking URLs for better coverage"),
    Rule(lambda s: s["ranking_percentage"] > 40, "MODERATE_DISTRIBUTION",
         "Moderate keyword distribution: {ranking_percentage:.1f}% of URLs ranking",
         "Significant opportunity to improve URL optimization"),
    Rule(_always, "POOR_DISTRIBUTION",
         "Poor keyword distribution: only {ranking_percentage:.1f}% of URLs ranking",
         "Comprehensive SEO audit and content optimization needed"),
)

# stats: http_urls
URL_SECURITY = (
    Rule(lambda s: s["http_urls"] > 0, "HTTP_PRESENT",
         "{http_urls} URLs still using HTTP - consider HTTPS migration"),
    Rule(_always, "HTTPS_ONLY",
         "All URLs using HTTPS - excellent security posture"),
)


# =============================================================================
# Keyword research
# =============================================================================

# stats: average_volume
KEYWORD_VOLUME = (
    Rule(lambda s: s["average_volume"] > 50000, "HIGH_VOLUME",
         "High search volume keywords - great potential traffic"),
    Rule(lambda s: s["average_volume"] > 10000, "MEDIUM_VOLUME",
         "Medium search volume keywords - good balance"),
    Rule(_always, "LOW_VOLUME",
         "Low search volume keywords - consider long-tail strategy"),
)

# stats: average_difficulty
KEYWORD_DIFFICULTY = (
    Rule(lambda s: s["average_difficulty"] < 30, "LOW_COMPETITION",
         "Low competition keywords - easier to rank"),
    Rule(lambda s: s["average_difficulty"] < 60, "MEDIUM_COMPETITION",
         "Medium competition keywords - moderate effort required"),
    Rule(_always, "HIGH_COMPETITION",
         "High competition keywords - significant SEO effort needed"),
)

# stats: total, low_difficulty_keywords, high_volume_keywords
KEYWORD_STRATEGY = (
    Rule(lambda s: s["low_difficulty_keywords"] > s["total"] * 0.3, "QUICK_WINS",
         "Many low-difficulty keywords available - focus on quick wins"),
    Rule(lambda s: s["high_volume_keywords"] > 0, "HIGH_VALUE_TARGET",
         "High-volume keywords present - consider long-term content strategy"),
    Rule(_always, "LONG_TAIL",
         "Focus on long-tail keyword strategy for better conversion"),
)

RELATED_VOLUME = (
    Rule(lambda s: s["average_volume"] > 50000, "HIGH_VOLUME",
         "High search volume related keywords - excellent expansion potential"),
    Rule(lambda s: s["average_volume"] > 10000, "MEDIUM_VOLUME",
         "Medium search volume related keywords - good opportunities"),
    Rule(_always, "LOW_VOLUME",
         "Low search volume related keywords - consider niche targeting"),
)

RELATED_DIFFICULTY = (
    Rule(lambda s: s["average_difficulty"] < 30, "LOW_COMPETITION",
         "Low competition related keywords - great for content expansion"),
    Rule(lambda s: s["average_difficulty"] < 60, "MEDIUM_COMPETITION",
         "Medium competition related keywords - balanced opportunities"),
    Rule(_always, "HIGH_COMPETITION",
         "High competition related keywords - requires strong content strategy"),
)

# stats: average_connection_strength
RELATED_CONNECTION = (
    Rule(lambda s: s["average_connection_strength"] > 10, "STRONG_RELATION",
         "Strongly related keywords - excellent semantic relevance"),
    Rule(lambda s: s["average_connection_strength"] > 5, "MEDIUM_RELATION",
         "Moderately related keywords - good topical expansion"),
    Rule(_always, "WEAK_RELATION",
         "Loosely related keywords - consider for broader content themes"),
)

# stats: total, strong_connection_keywords, low_difficulty_keywords, keywords_with_geo
RELATED_STRATEGY = (
    Rule(lambda s: s["strong_connection_keywords"] > s["total"] * 0.3, "SEMANTIC_EXPANSION",
         "Many strongly connected keywords - ideal for semantic content expansion"),
    Rule(lambda s: s["low_difficulty_keywords"] > s["total"] * 0.4, "QUICK_WINS",
         "Many low-difficulty keywords - focus on quick content wins"),
    Rule(lambda s: s["keywords_with_geo"] > s["total"] * 0.3, "LOCAL_TARGETING",
         "Many geo-targeted keywords - consider local content strategy"),
    Rule(_always, "LONG_TAIL_FOCUS",
         "Focus on long-tail related keywords for better targeting"),
)

# stats: total, average_visibility
COMPETITION_LEVEL = (
    Rule(lambda s: s["total"] == 0, "NO_DATA",
         "No competitors found for this keyword",
         "Try a different keyword or check spelling"),
    Rule(lambda s: s["average_visibility"] > 2000, "VERY_HIGH",
         "Extremely competitive keyword with average visibility of {average_visibility:.1f}",
         "Consider long-tail variations or niche targeting"),
    Rule(lambda s: s["average_visibility"] > 500, "HIGH",
         "Highly competitive keyword with average visibility of {average_visibility:.1f}",
         "Strong SEO strategy and quality content required"),
    Rule(lambda s: s["average_visibility"] > 100, "MEDIUM",
         "Moderately competitive keyword with average visibility of {average_visibility:.1f}",
         "Good opportunity with focused optimization efforts"),
    Rule(_always, "LOW",
         "Low competition keyword with average visibility of {average_visibility:.1f}",
         "Excellent opportunity for quick wins"),
)

# stats: ads_percentage
AD_COMPETITION = (
    Rule(lambda s: s["ads_percentage"] > 50, "HIGH",
         "{ads_percentage:.1f}% of competitors use paid ads - high commercial intent"),
    Rule(lambda s: s["ads_percentage"] > 20, "MEDIUM",
         "{ads_percentage:.1f}% of competitors use paid ads - moderate commercial potential"),
    Rule(_always, "LOW",
         "{ads_percentage:.1f}% of competitors use paid ads - primarily organic competition"),
)

# stats: growing_percentage
MARKET_TREND = (
    Rule(lambda s: s["growing_percentage"] > 60, "GROWING",
         "Most competitors are gaining visibility - growing market"),
    Rule(lambda s: s["growing_percentage"] > 40, "STABLE",
         "Mixed competitor dynamics - stable market"),
    Rule(_always, "DECLINING",
         "Most competitors losing visibility - declining or saturated market"),
)


# =============================================================================
# Account
# =============================================================================

# stats: max_credits, usage_percentage
CREDIT_USAGE = (
    Rule(lambda s: s["max_credits"] <= 0, "UNKNOWN", "Credit limit is unknown"),
    Rule(lambda s: s["usage_percentage"] > 95, "CRITICAL", "{usage_percentage}% of credits used"),
    Rule(lambda s: s["usage_percentage"] > 90, "HIGH", "{usage_percentage}% of credits used"),
    Rule(lambda s: s["usage_percentage"] > 75, "MODERATE", "{usage_percentage}% of credits used"),
    Rule(_always, "NORMAL", "{usage_percentage}% of credits used"),
)

# stats: remaining_credits
CREDIT_TIPS = (
    Rule(lambda s: s["remaining_credits"] <= 0, "CRITICAL",
         "No credits remaining. Plan upgrade required."),
    Rule(lambda s: s["remaining_credits"] < 100, "HIGH",
         "Very low credits remaining. Consider upgrading plan or optimizing usage."),
    Rule(lambda s: s["remaining_credits"] < 1000, "MEDIUM",
         "Credits running low. Monitor usage carefully."),
    Rule(_always, "LOW",
         "Sufficient credits available for continued usage."),
)

# stats: total, owner_projects, unique_groups
PROJECT_ORGANIZATION = (
    Rule(lambda s: s["total"] == 0, "NO_PROJECTS",
         "No projects found",
         "Create your first project to start tracking domains"),
    Rule(lambda s: s["owner_projects"] == 0, "READER_ONLY",
         "You only have reader access to projects",
         "Create your own projects for full control"),
    Rule(lambda s: s["unique_groups"] == 1, "SINGLE_GROUP",
         "All projects are in one group",
         "Consider organizing projects into different groups"),
    Rule(_always, "WELL_ORGANIZED",
         "Projects well organized across {unique_groups} groups",
         "Continue maintaining good project organization"),
)

# stats: recent_projects
RECENT_ACTIVITY = (
    Rule(lambda s: s["recent_projects"] > 0, "ACTIVE",
         "{recent_projects} projects created in last 30 days"),
    Rule(_always, "INACTIVE", "No new projects in last 30 days"),
)
