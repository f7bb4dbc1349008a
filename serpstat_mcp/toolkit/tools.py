"""Tool definitions for the Serpstat MCP tool surface.

Each entry carries the tool name, a description for the model, and the JSON
schema of its arguments. The schemas describe the shape of the input; the
authoritative rules live in ``serpstat_mcp.data.validation``.
"""

from typing import Any, Dict, List, Optional

from ..data.constants import (
    DEFAULT_COMPETITORS_SIZE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROJECT_PAGE_SIZE,
    DEFAULT_SEARCH_ENGINE,
    INTENTS,
    MAX_PAGE_SIZE,
    PROJECT_PAGE_SIZES,
    SEARCH_ENGINES,
)


# =============================================================================
# Shared schema fragments
# =============================================================================

DOMAIN_PROPERTY = {
    "type": "string",
    "description": "Domain name without protocol (e.g., 'example.com')",
}

SEARCH_ENGINE_PROPERTY = {
    "type": "string",
    "enum": list(SEARCH_ENGINES),
    "default": DEFAULT_SEARCH_ENGINE,
    "description": "Search engine database code",
}

PAGE_PROPERTY = {"type": "integer", "minimum": 1, "default": 1, "description": "Page number"}

SIZE_PROPERTY = {
    "type": "integer",
    "minimum": 1,
    "maximum": MAX_PAGE_SIZE,
    "default": DEFAULT_PAGE_SIZE,
    "description": "Results per page",
}

SORT_PROPERTY = {
    "type": "object",
    "additionalProperties": {"type": "string", "enum": ["asc", "desc"]},
    "description": "Sort as {field: 'asc' | 'desc'}",
}

KEYWORD_LIST_PROPERTY = {
    "type": "array",
    "items": {"type": "string"},
    "maxItems": 50,
}

INTENT_LIST_PROPERTY = {"type": "array", "items": {"type": "string", "enum": list(INTENTS)}}


def _range(kind: str = "number", **bounds: Any) -> Dict[str, Any]:
    return {"type": kind, **bounds}


def _filters(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "object", "properties": properties, "additionalProperties": False}


# =============================================================================
# Tools
# =============================================================================

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "get_domains_info",
        "description": """Get SEO summary for up to 100 domains.

Returns visibility, estimated traffic and keyword counts per domain, plus totals
and the average visibility. Costs 5 credits per domain.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "domains": {
                    "type": "array",
                    "items": DOMAIN_PROPERTY,
                    "minItems": 1,
                    "maxItems": 100,
                    "uniqueItems": True,
                },
                "se": SEARCH_ENGINE_PROPERTY,
                "filters": _filters({
                    "visible": _range(minimum=0),
                    "traff": _range(minimum=0),
                }),
            },
            "required": ["domains"],
        },
    },
    {
        "name": "get_domain_regions_count",
        "description": """Count a domain's keywords in every regional Google database.

Returns per-region counts, the top regions and a regional presence insight.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "domain": DOMAIN_PROPERTY,
                "sort": {
                    "type": "string",
                    "enum": ["keywords_count", "country_name_en", "db_name"],
                    "default": "keywords_count",
                },
                "order": {"type": "string", "enum": ["asc", "desc"], "default": "desc"},
            },
            "required": ["domain"],
        },
    },
    {
        "name": "get_domain_keywords",
        "description": """List the keywords a domain ranks for.

Returns keyword rows with position, traffic, cost and difficulty, plus a position
distribution, SERP feature counts and a ranking-quality insight.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "domain": DOMAIN_PROPERTY,
                "se": SEARCH_ENGINE_PROPERTY,
                "page": PAGE_PROPERTY,
                "size": SIZE_PROPERTY,
                "url": {"type": "string", "description": "Only keywords of this URL"},
                "keywords": {**KEYWORD_LIST_PROPERTY, "description": "Keywords must contain one of these"},
                "minusKeywords": {**KEYWORD_LIST_PROPERTY, "description": "Exclude keywords containing these"},
                "withSubdomains": {"type": "boolean", "default": False},
                "withIntents": {"type": "boolean", "default": False},
                "sort": SORT_PROPERTY,
                "filters": _filters({
                    "position": _range("integer", minimum=1, maximum=100),
                    "position_from": _range("integer", minimum=1, maximum=100),
                    "position_to": _range("integer", minimum=1, maximum=100),
                    "cost": _range(minimum=0),
                    "cost_from": _range(minimum=0),
                    "cost_to": _range(minimum=0),
                    "difficulty": _range(minimum=0, maximum=100),
                    "difficulty_from": _range(minimum=0, maximum=100),
                    "difficulty_to": _range(minimum=0, maximum=100),
                    "concurrency": _range("integer", minimum=1, maximum=100),
                    "concurrency_from": _range("integer", minimum=1, maximum=100),
                    "concurrency_to": _range("integer", minimum=1, maximum=100),
                    "region_queries_count": _range("integer", minimum=0),
                    "region_queries_count_from": _range("integer", minimum=0),
                    "region_queries_count_to": _range("integer", minimum=0),
                    "traff": _range("integer", minimum=0),
                    "keyword_length": _range("integer", minimum=1),
                    "intents_contain": INTENT_LIST_PROPERTY,
                    "intents_not_contain": INTENT_LIST_PROPERTY,
                }),
            },
            "required": ["domain"],
        },
    },
    {
        "name": "get_domains_uniq_keywords",
        "description": """Competitive gap analysis: keywords one or two domains rank for
that another domain does not.

Returns the unique keywords, per-domain ranking comparison and an opportunity level.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "domains": {
                    "type": "array",
                    "items": DOMAIN_PROPERTY,
                    "minItems": 1,
                    "maxItems": 2,
                    "uniqueItems": True,
                },
                "minusDomain": {**DOMAIN_PROPERTY, "description": "Domain whose keywords are excluded"},
                "se": SEARCH_ENGINE_PROPERTY,
                "page": PAGE_PROPERTY,
                "size": SIZE_PROPERTY,
                "filters": {"type": "object", "description": "Volume, cost, difficulty, position and traffic ranges"},
            },
            "required": ["domains", "minusDomain"],
        },
    },
    {
        "name": "get_domain_urls",
        "description": """List a domain's URLs with the number of keywords each ranks for.

Returns URL performance tiers, protocol and subdirectory breakdowns and a
keyword distribution insight.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "domain": DOMAIN_PROPERTY,
                "se": SEARCH_ENGINE_PROPERTY,
                "page": PAGE_PROPERTY,
                "size": SIZE_PROPERTY,
                "sort": SORT_PROPERTY,
                "filters": _filters({
                    "url_prefix": {"type": "string", "maxLength": 500},
                    "url_contain": {"type": "string", "maxLength": 200},
                    "url_not_contain": {"type": "string", "maxLength": 200},
                }),
            },
            "required": ["domain"],
        },
    },
    {
        "name": "get_domain_competitors",
        "description": """Find organic competitors of a domain.

Returns competitor domains with relevance and shared keyword counts.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "domain": DOMAIN_PROPERTY,
                "se": SEARCH_ENGINE_PROPERTY,
                "filters": _filters({
                    "visible": _range(minimum=0),
                    "traff": _range(minimum=0),
                }),
            },
            "required": ["domain"],
        },
    },
    {
        "name": "get_keywords",
        "description": """Keyword research: phrases containing a seed keyword.

Returns keyword rows with volume, cost and difficulty, plus language, intent and
SERP feature distributions and a strategy insight.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "keyword": {"type": "string", "maxLength": 100},
                "se": SEARCH_ENGINE_PROPERTY,
                "minusKeywords": KEYWORD_LIST_PROPERTY,
                "withIntents": {"type": "boolean", "default": False},
                "page": PAGE_PROPERTY,
                "size": SIZE_PROPERTY,
                "sort": SORT_PROPERTY,
                "filters": {"type": "object", "description": "Cost, volume, difficulty, language and intent filters"},
            },
            "required": ["keyword"],
        },
    },
    {
        "name": "get_related_keywords",
        "description": """Semantically related keywords for a seed keyword.

Returns related keywords with connection strength, plus volume, difficulty,
connection and strategy insights.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "keyword": {"type": "string", "maxLength": 200},
                "se": SEARCH_ENGINE_PROPERTY,
                "withIntents": {"type": "boolean", "default": False},
                "page": PAGE_PROPERTY,
                "size": SIZE_PROPERTY,
                "sort": SORT_PROPERTY,
                "filters": {"type": "object", "description": "Cost, volume, difficulty, weight and geo filters"},
            },
            "required": ["keyword"],
        },
    },
    {
        "name": "get_keyword_competitors",
        "description": """Domains competing in the results for a keyword.

Returns competitors with visibility, traffic and dynamics, and insights on
competition level, paid ads and market trend.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "keyword": {"type": "string", "maxLength": 200},
                "se": SEARCH_ENGINE_PROPERTY,
                "size": {**SIZE_PROPERTY, "default": DEFAULT_COMPETITORS_SIZE},
                "sort": SORT_PROPERTY,
                "filters": {"type": "object", "description": "Domain lists and visibility, traffic and relevance ranges"},
            },
            "required": ["keyword"],
        },
    },
    {
        "name": "get_backlinks_summary",
        "description": """Backlink profile summary for a domain.

Returns backlink and referring-domain counts, link types, recent changes and
quality ratios.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "query": {**DOMAIN_PROPERTY, "maxLength": 255},
                "searchType": {
                    "type": "string",
                    "enum": ["domain", "domain_with_subdomains"],
                    "default": "domain",
                },
            },
            "required": ["query"],
        },
    },
    {
        "name": "get_api_stats",
        "description": """Serpstat account credit usage.

Returns credit limits, usage status and how many analyses the remaining credits
cover. Takes no arguments.""",
        "input_schema": {"type": "object", "properties": {}, "required": []},
    },
    {
        "name": "get_projects",
        "description": """List the account's Serpstat projects.

Returns projects with group and domain-extension breakdowns and an
organization insight.""",
        "input_schema": {
            "type": "object",
            "properties": {
                "page": PAGE_PROPERTY,
                "size": {
                    "type": "integer",
                    "enum": list(PROJECT_PAGE_SIZES),
                    "default": DEFAULT_PROJECT_PAGE_SIZE,
                },
            },
            "required": [],
        },
    },
]


def get_tool_by_name(name: str) -> Optional[Dict[str, Any]]:
    """Get a tool definition by name."""
    for tool in TOOLS:
        if tool["name"] == name:
            return tool
    return None


def get_all_tool_names() -> List[str]:
    """Get list of all tool names."""
    return [tool["name"] for tool in TOOLS]
