"""Parameter validation and normalization for Serpstat tool calls.

Each endpoint has a rule set covering required fields, types, domain
normalization, enumerations, numeric ranges, ``_from``/``_to`` ordering,
array cardinality and the allow-list of nested ``filters`` keys.

Validation is fail-fast: the first violated rule raises
:class:`~serpstat_mcp.utils.errors.ValidationError`. The caller's mapping is
never touched; :func:`validate` returns a normalized deep copy with defaults
filled in, and validating that copy again returns it unchanged.
"""

import copy
import math
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from ..utils.errors import ValidationError
from ..utils.logger import get_logger
from .constants import (
    DEFAULT_COMPETITORS_SIZE,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PROJECT_PAGE_SIZE,
    DEFAULT_SEARCH_ENGINE,
    DOMAIN_PATTERN,
    Endpoint,
    INTENTS,
    LANGUAGES,
    MAX_PAGE_SIZE,
    MIN_PAGE,
    MIN_PAGE_SIZE,
    PROJECT_PAGE_SIZES,
    SEARCH_ENGINES,
    SORT_ORDERS,
)

logger = get_logger(__name__)

FilterRule = Callable[[str, Any], Any]


# =============================================================================
# Primitive checks
# =============================================================================

def _is_int(value: Any) -> bool:
    # bool is a subclass of int, reject explicitly
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _get(args: Dict[str, Any], name: str, default: Any = None) -> Any:
    """Read an argument, treating an explicit null like an absent key."""
    value = args.get(name)
    return default if value is None else value


def _format_options(options: Sequence[Any]) -> str:
    return "[" + ", ".join(str(o) for o in options) + "]"


def _format_bound(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def normalize_domain(value: Any, name: str = "domain") -> str:
    """Trim, lowercase and pattern-check a single domain name.

    Args:
        value: Raw domain value
        name: Parameter name used in error messages

    Returns:
        The normalized domain

    Raises:
        ValidationError: If the value is missing, not a string or not a domain
    """
    if value is None:
        raise ValidationError(f"Parameter '{name}' is required")
    if not isinstance(value, str):
        raise ValidationError(f"Parameter '{name}' must be a string")
    domain = value.strip().lower()
    if not domain:
        raise ValidationError(f"Parameter '{name}' is required")
    if not DOMAIN_PATTERN.fullmatch(domain):
        raise ValidationError(f"Invalid domain format: {domain} ")
    return domain


def _string_array(
    value: Any,
    name: str,
    max_items: Optional[int] = None,
    label: str = "Parameter",
    unique: bool = False,
) -> List[str]:
    if not isinstance(value, list):
        raise ValidationError(f"{label} '{name}' must be an array")
    if max_items is not None and len(value) > max_items:
        raise ValidationError(f"{label} '{name}' cannot contain more than {max_items} items")

    items = []
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ValidationError(f"{label} '{name}' item at index {i} must be a string")
        item = item.strip()
        if not item:
            raise ValidationError(f"{label} '{name}' item at index {i} cannot be empty")
        items.append(item)

    if unique and len(set(items)) != len(items):
        raise ValidationError(f"{label} '{name}' contains duplicate values")
    return items


# =============================================================================
# Filter rules
# =============================================================================

@dataclass(frozen=True)
class NumberRange:
    """Closed numeric interval; either bound may be open."""
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    integer: bool = False

    def __call__(self, name: str, value: Any) -> Any:
        if self.integer:
            if not _is_int(value):
                raise ValidationError(f"Filter '{name}' must be an integer")
        elif not _is_number(value):
            raise ValidationError(f"Filter '{name}' must be a number")

        too_low = self.minimum is not None and value < self.minimum
        too_high = self.maximum is not None and value > self.maximum
        if too_low or too_high:
            raise ValidationError(f"Filter '{name}' {self._describe()}")
        return value

    def _describe(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"must be between {_format_bound(self.minimum)} and {_format_bound(self.maximum)}"
        if self.minimum == 0:
            return "must be non-negative"
        if self.minimum is not None:
            return f"must be greater than or equal to {_format_bound(self.minimum)}"
        return f"must be less than or equal to {_format_bound(self.maximum)}"


@dataclass(frozen=True)
class BooleanFilter:
    def __call__(self, name: str, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValidationError(f"Filter '{name}' must be a boolean")
        return value


@dataclass(frozen=True)
class StringArrayFilter:
    max_items: Optional[int] = None
    unique: bool = False

    def __call__(self, name: str, value: Any) -> List[str]:
        return _string_array(value, name, self.max_items, label="Filter", unique=self.unique)


@dataclass(frozen=True)
class IntentFilter:
    """Array of search intents."""

    def __call__(self, name: str, value: Any) -> List[str]:
        intents = [item.lower() for item in _string_array(value, name, label="Filter")]
        for intent in intents:
            if intent not in INTENTS:
                raise ValidationError(
                    f"Filter '{name}' contains invalid intent: '{intent}'. "
                    f"Valid options: {_format_options(INTENTS)}"
                )
        return intents


@dataclass(frozen=True)
class LanguageFilter:
    def __call__(self, name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(f"Filter '{name}' must be a string")
        if value not in LANGUAGES:
            raise ValidationError(
                f"Filter '{name}' has unsupported language: '{value}'. "
                f"Supported: {_format_options(LANGUAGES)}"
            )
        return value


@dataclass(frozen=True)
class ChoiceFilter:
    options: Sequence[str] = ()

    def __call__(self, name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(f"Filter '{name}' must be a string")
        if value not in self.options:
            choices = " or ".join(f"'{o}'" for o in self.options)
            raise ValidationError(f"Filter '{name}' must be either {choices}")
        return value


@dataclass(frozen=True)
class DomainArrayFilter:
    max_items: int = 100

    def __call__(self, name: str, value: Any) -> List[str]:
        if not isinstance(value, list):
            raise ValidationError(f"Filter '{name}' must be an array")
        if len(value) > self.max_items:
            raise ValidationError(f"Filter '{name}' cannot have more than {self.max_items} domains")

        domains = []
        for i, item in enumerate(value):
            if not isinstance(item, str):
                raise ValidationError(f"All items in filter '{name}' must be strings")
            try:
                domains.append(normalize_domain(item))
            except ValidationError as e:
                raise ValidationError(f"Invalid domain in filter '{name}' at index {i}: {e.message}") from e
        return domains


@dataclass(frozen=True)
class UrlPrefixFilter:
    max_length: int = 500

    def __call__(self, name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(f"Filter '{name}' must be a string")
        if len(value) > self.max_length:
            raise ValidationError(f"Filter '{name}' must not exceed {self.max_length} characters")
        if not value.startswith(("http://", "https://")):
            raise ValidationError(f"Filter '{name}' must start with http:// or https://")
        return value


@dataclass(frozen=True)
class SubstringFilter:
    max_length: int = 200

    def __call__(self, name: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(f"Filter '{name}' must be a string")
        if len(value) > self.max_length:
            raise ValidationError(f"Filter '{name}' must not exceed {self.max_length} characters")
        if not value.strip():
            raise ValidationError(f"Filter '{name}' cannot be empty")
        return value


def _family(base: str, rule: FilterRule) -> Dict[str, FilterRule]:
    """Same rule for ``base``, ``base_from`` and ``base_to``."""
    return {base: rule, f"{base}_from": rule, f"{base}_to": rule}


@dataclass
class FilterSet:
    """Allow-list of filter keys, their rules, and the ranges checked for ordering.

    Rules run in declaration order, then ``_from``/``_to`` ordering, then
    unknown-key rejection.
    """
    rules: Dict[str, FilterRule]
    ranges: Sequence[str] = field(default_factory=tuple)

    def validate(self, value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise ValidationError("Parameter 'filters' must be an object")

        filters = dict(value)
        for name, rule in self.rules.items():
            if filters.get(name) is not None:
                filters[name] = rule(name, filters[name])

        for base in self.ranges:
            low = filters.get(f"{base}_from")
            high = filters.get(f"{base}_to")
            if low is not None and high is not None and low > high:
                raise ValidationError(
                    f"Filter '{base}_from' ({float(low)}) must be less than or equal to "
                    f"'{base}_to' ({float(high)})"
                )

        for key in filters:
            if key not in self.rules:
                raise ValidationError(f"Unknown filter parameter: '{key}'")
        return filters


_KEYWORD_TEXT_ARRAYS = (
    "keyword_contain", "keyword_not_contain",
    "keyword_contain_one_of", "keyword_not_contain_one_of",
    "keyword_contain_broad_match", "keyword_not_contain_broad_match",
)

DOMAIN_METRIC_FILTERS = FilterSet({
    "visible": NumberRange(0),
    "traff": NumberRange(0),
})

DOMAIN_KEYWORDS_FILTERS = FilterSet(
    {
        **_family("position", NumberRange(1, 100, integer=True)),
        **_family("cost", NumberRange(0)),
        **_family("difficulty", NumberRange(0, 100)),
        **_family("concurrency", NumberRange(1, 100, integer=True)),
        **_family("region_queries_count", NumberRange(0, integer=True)),
        "traff": NumberRange(0, integer=True),
        "keyword_length": NumberRange(1, integer=True),
        "intents_contain": IntentFilter(),
        "intents_not_contain": IntentFilter(),
    },
    ranges=("position", "cost", "difficulty", "concurrency", "region_queries_count"),
)

UNIQ_KEYWORDS_FILTERS = FilterSet(
    {
        "right_spelling": BooleanFilter(),
        "misspelled": BooleanFilter(),
        "keywords": StringArrayFilter(max_items=100, unique=True),
        "minus_keywords": StringArrayFilter(max_items=100, unique=True),
        **_family("queries", NumberRange(0, integer=True)),
        **_family("region_queries_count", NumberRange(0, integer=True)),
        **_family("region_queries_count_wide", NumberRange(0, integer=True)),
        **_family("cost", NumberRange(0)),
        **_family("concurrency", NumberRange(1, 100, integer=True)),
        **_family("difficulty", NumberRange(0, 100, integer=True)),
        **_family("keyword_length", NumberRange(1, integer=True)),
        **_family("traff", NumberRange(0, integer=True)),
        **_family("position", NumberRange(1, 100, integer=True)),
    },
    ranges=(
        "queries", "region_queries_count", "region_queries_count_wide", "cost",
        "concurrency", "difficulty", "keyword_length", "traff", "position",
    ),
)

DOMAIN_URLS_FILTERS = FilterSet({
    "url_prefix": UrlPrefixFilter(),
    "url_contain": SubstringFilter(),
    "url_not_contain": SubstringFilter(),
})

KEYWORDS_FILTERS = FilterSet(
    {
        **_family("cost", NumberRange(0, 200)),
        **_family("region_queries_count", NumberRange(0, 100000000, integer=True)),
        **_family("keyword_length", NumberRange(1, integer=True)),
        **_family("difficulty", NumberRange(0, 100, integer=True)),
        **_family("concurrency", NumberRange(1, 100, integer=True)),
        "right_spelling": BooleanFilter(),
        **{name: StringArrayFilter() for name in _KEYWORD_TEXT_ARRAYS},
        "lang": LanguageFilter(),
        "intents_contain": IntentFilter(),
        "intents_not_contain": IntentFilter(),
    },
    ranges=("cost", "region_queries_count", "keyword_length", "difficulty", "concurrency"),
)

RELATED_KEYWORDS_FILTERS = FilterSet(
    {
        **_family("cost", NumberRange(0, 200)),
        **_family("region_queries_count", NumberRange(0, 100000000, integer=True)),
        **_family("keyword_length", NumberRange(1, integer=True)),
        **_family("difficulty", NumberRange(0, 100, integer=True)),
        **_family("concurrency", NumberRange(1, 100, integer=True)),
        "weight": NumberRange(1, integer=True),
        "weight_from": NumberRange(1),
        "weight_to": NumberRange(1),
        "right_spelling": BooleanFilter(),
        **{name: StringArrayFilter() for name in _KEYWORD_TEXT_ARRAYS},
        "keyword_contain_one_of_broad_match": StringArrayFilter(),
        "keyword_not_contain_one_of_broad_match": StringArrayFilter(),
        "types": StringArrayFilter(),
        "geo_names": ChoiceFilter(("contain", "not_contain")),
        "intents_contain": IntentFilter(),
        "intents_not_contain": IntentFilter(),
    },
    ranges=("cost", "region_queries_count", "keyword_length", "difficulty", "concurrency", "weight"),
)

KEYWORD_COMPETITORS_FILTERS = FilterSet(
    {
        "domain": DomainArrayFilter(),
        "minus_domain": DomainArrayFilter(),
        **_family("visible", NumberRange(0)),
        **_family("traff", NumberRange(0, integer=True)),
        **_family("relevance", NumberRange(0, 100)),
        **_family("our_relevance", NumberRange(0, 100)),
    },
    ranges=("visible", "traff", "relevance", "our_relevance"),
)

# Sortable fields per endpoint
REGION_SORT_FIELDS = ("keywords_count", "country_name_en", "db_name")
DOMAIN_KEYWORDS_SORT_FIELDS = (
    "position", "region_queries_count", "cost", "traff", "difficulty",
    "keyword_length", "concurrency", "types", "geo_names",
    "region_queries_count_wide", "dynamic", "found_results",
)
DOMAIN_URLS_SORT_FIELDS = ("keywords",)
KEYWORDS_SORT_FIELDS = (
    "region_queries_count", "cost", "difficulty", "concurrency",
    "found_results", "keyword_length",
)
RELATED_KEYWORDS_SORT_FIELDS = (
    "region_queries_count", "cost", "difficulty", "concurrency", "weight", "keyword",
)
KEYWORD_COMPETITORS_SORT_FIELDS = (
    "domain", "visible", "keywords", "traff", "visible_dynamic", "keywords_dynamic",
    "traff_dynamic", "ads_dynamic", "new_keywords", "out_keywords", "rised_keywords",
    "down_keywords", "ad_keywords", "ads", "intersected", "relevance", "our_relevance",
)

BACKLINK_SEARCH_TYPES = ("domain", "domain_with_subdomains")


# =============================================================================
# Shared parameter rules
# =============================================================================

def _search_engine(args: Dict[str, Any]) -> None:
    se = _get(args, "se", DEFAULT_SEARCH_ENGINE)
    if not isinstance(se, str) or se not in SEARCH_ENGINES:
        raise ValidationError(
            f"Unsupported search engine: '{se}'. Supported: {_format_options(SEARCH_ENGINES)}"
        )
    args["se"] = se


def _page(args: Dict[str, Any]) -> None:
    page = _get(args, "page", DEFAULT_PAGE)
    if not _is_int(page):
        raise ValidationError("Parameter 'page' must be an integer")
    if page < MIN_PAGE:
        raise ValidationError(f"Parameter 'page' must be greater than or equal to {MIN_PAGE}")
    args["page"] = page


def _size(
    args: Dict[str, Any],
    default: int = DEFAULT_PAGE_SIZE,
    allowed: Optional[Sequence[int]] = None,
) -> None:
    size = _get(args, "size", default)
    if not _is_int(size):
        raise ValidationError("Parameter 'size' must be an integer")
    if allowed is not None:
        if size not in allowed:
            raise ValidationError(
                f"Parameter 'size' must be one of: {', '.join(str(s) for s in allowed)}"
            )
    elif not MIN_PAGE_SIZE <= size <= MAX_PAGE_SIZE:
        raise ValidationError(
            f"Parameter 'size' must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}"
        )
    args["size"] = size


def _boolean(args: Dict[str, Any], name: str) -> None:
    value = args.get(name)
    if value is not None and not isinstance(value, bool):
        raise ValidationError(f"Parameter '{name}' must be a boolean")


def _keyword_array(args: Dict[str, Any], name: str, max_items: int) -> None:
    value = args.get(name)
    if value is not None:
        args[name] = _string_array(value, name, max_items, unique=True)


def _keyword_text(args: Dict[str, Any], max_length: int, name: str = "keyword") -> None:
    value = args.get(name)
    if value is None:
        raise ValidationError(f"Parameter '{name}' is required")
    if not isinstance(value, str):
        raise ValidationError(f"Parameter '{name}' must be a string")
    keyword = unicodedata.normalize("NFC", value.strip())
    if not keyword:
        raise ValidationError(f"Parameter '{name}' cannot be empty")
    if len(keyword) > max_length:
        raise ValidationError(f"Parameter '{name}' must not exceed {max_length} characters")
    args[name] = keyword


def _sort(args: Dict[str, Any], allowed: Sequence[str]) -> None:
    sort = args.get("sort")
    if sort is None:
        return
    if not isinstance(sort, dict):
        raise ValidationError("Parameter 'sort' must be an object")
    for sort_field, order in sort.items():
        if sort_field not in allowed:
            raise ValidationError(
                f"Invalid sort field: '{sort_field}'. Valid options: {_format_options(allowed)}"
            )
        if order not in SORT_ORDERS:
            raise ValidationError(
                f"Invalid order: '{order}'. Valid options: {_format_options(SORT_ORDERS)}"
            )


def _filters(args: Dict[str, Any], filter_set: FilterSet) -> None:
    value = args.get("filters")
    if value is not None:
        args["filters"] = filter_set.validate(value)


# =============================================================================
# Endpoint rule sets
# =============================================================================

def _validate_domains_info(args: Dict[str, Any]) -> None:
    domains = args.get("domains")
    if domains is None:
        raise ValidationError("Parameter 'domains' is required")
    if not isinstance(domains, list):
        raise ValidationError("Parameter 'domains' must be an array")
    if not domains:
        raise ValidationError("Parameter 'domains' cannot be empty")
    if len(domains) > 100:
        raise ValidationError("Maximum 100 domains allowed per request")

    normalized = []
    for i, domain in enumerate(domains):
        if domain is not None and not isinstance(domain, str):
            raise ValidationError(f"Domain at index {i} must be a string")
        if domain is None or not domain.strip():
            raise ValidationError(f"Domain at index {i} is empty")
        domain = domain.strip().lower()
        if not DOMAIN_PATTERN.fullmatch(domain):
            raise ValidationError(f"Invalid domain format: {domain} ")
        normalized.append(domain)

    if len(set(normalized)) != len(normalized):
        raise ValidationError("Duplicate domains are not allowed")
    args["domains"] = normalized

    _search_engine(args)
    _filters(args, DOMAIN_METRIC_FILTERS)


def _validate_regions_count(args: Dict[str, Any]) -> None:
    args["domain"] = normalize_domain(args.get("domain"))

    sort = _get(args, "sort", "keywords_count")
    if sort not in REGION_SORT_FIELDS:
        raise ValidationError(
            f"Invalid sort field: '{sort}'. Valid options: {_format_options(REGION_SORT_FIELDS)}"
        )
    order = _get(args, "order", "desc")
    if order not in SORT_ORDERS:
        raise ValidationError(
            f"Invalid order: '{order}'. Valid options: {_format_options(SORT_ORDERS)}"
        )
    args["sort"] = sort
    args["order"] = order


def _validate_domain_keywords(args: Dict[str, Any]) -> None:
    args["domain"] = normalize_domain(args.get("domain"))
    _search_engine(args)
    _page(args)
    _size(args)

    url = args.get("url")
    if url is not None:
        if not isinstance(url, str):
            raise ValidationError("Parameter 'url' must be a string")
        if not url.startswith(("http://", "https://")):
            raise ValidationError("Parameter 'url' must be a valid HTTP/HTTPS URL")

    _keyword_array(args, "keywords", 50)
    _keyword_array(args, "minusKeywords", 50)
    _boolean(args, "withSubdomains")
    _boolean(args, "withIntents")
    _sort(args, DOMAIN_KEYWORDS_SORT_FIELDS)
    _filters(args, DOMAIN_KEYWORDS_FILTERS)


def _validate_domains_uniq_keywords(args: Dict[str, Any]) -> None:
    domains = args.get("domains")
    if domains is None:
        raise ValidationError("Parameter 'domains' is required")
    if not isinstance(domains, list):
        raise ValidationError("Parameter 'domains' must be an array")
    if not domains:
        raise ValidationError("Parameter 'domains' cannot be empty")
    if len(domains) > 2:
        raise ValidationError("Parameter 'domains' can contain maximum 2 domains")

    normalized = []
    for i, domain in enumerate(domains):
        try:
            normalized.append(normalize_domain(domain))
        except ValidationError as e:
            raise ValidationError(f"Invalid domain at index {i}: {e.message}") from e
    if len(set(normalized)) != len(normalized):
        raise ValidationError("Duplicate domains in 'domains' array are not allowed")
    args["domains"] = normalized

    minus_domain = normalize_domain(args.get("minusDomain"), "minusDomain")
    if minus_domain in normalized:
        raise ValidationError(
            "Parameter 'minusDomain' cannot be the same as any domain in 'domains' array"
        )
    args["minusDomain"] = minus_domain

    _search_engine(args)
    _page(args)
    _size(args)
    _filters(args, UNIQ_KEYWORDS_FILTERS)


def _validate_domain_urls(args: Dict[str, Any]) -> None:
    args["domain"] = normalize_domain(args.get("domain"))
    _search_engine(args)
    _page(args)
    _size(args)
    _sort(args, DOMAIN_URLS_SORT_FIELDS)
    _filters(args, DOMAIN_URLS_FILTERS)


def _validate_domain_competitors(args: Dict[str, Any]) -> None:
    args["domain"] = normalize_domain(args.get("domain"))
    _search_engine(args)
    _filters(args, DOMAIN_METRIC_FILTERS)


def _validate_keywords(args: Dict[str, Any]) -> None:
    _keyword_text(args, 100)
    _search_engine(args)
    _keyword_array(args, "minusKeywords", 50)
    _boolean(args, "withIntents")
    _page(args)
    _size(args)
    _sort(args, KEYWORDS_SORT_FIELDS)
    _filters(args, KEYWORDS_FILTERS)


def _validate_related_keywords(args: Dict[str, Any]) -> None:
    _keyword_text(args, 200)
    _search_engine(args)
    _boolean(args, "withIntents")
    _page(args)
    _size(args)
    _sort(args, RELATED_KEYWORDS_SORT_FIELDS)
    _filters(args, RELATED_KEYWORDS_FILTERS)


def _validate_keyword_competitors(args: Dict[str, Any]) -> None:
    _keyword_text(args, 200)
    _search_engine(args)
    _size(args, default=DEFAULT_COMPETITORS_SIZE)
    _filters(args, KEYWORD_COMPETITORS_FILTERS)
    _sort(args, KEYWORD_COMPETITORS_SORT_FIELDS)


def _validate_backlinks_summary(args: Dict[str, Any]) -> None:
    _keyword_text(args, 255, name="query")

    search_type = _get(args, "searchType", "domain")
    if search_type not in BACKLINK_SEARCH_TYPES:
        raise ValidationError(
            f"Unsupported searchType: '{search_type}'. "
            f"Supported: {_format_options(BACKLINK_SEARCH_TYPES)}"
        )
    args["searchType"] = search_type

    query = args["query"].lower()
    if not DOMAIN_PATTERN.fullmatch(query):
        raise ValidationError(
            f"Invalid domain format: '{args['query']}'. Expected format: example.com"
        )
    args["query"] = query


def _validate_api_stats(args: Dict[str, Any]) -> None:
    if args:
        logger.warning("getStats received unexpected parameters: %s", sorted(args))
        args.clear()


def _validate_projects(args: Dict[str, Any]) -> None:
    _page(args)
    _size(args, default=DEFAULT_PROJECT_PAGE_SIZE, allowed=PROJECT_PAGE_SIZES)


VALIDATORS: Dict[Endpoint, Callable[[Dict[str, Any]], None]] = {
    Endpoint.DOMAINS_INFO: _validate_domains_info,
    Endpoint.REGIONS_COUNT: _validate_regions_count,
    Endpoint.DOMAIN_KEYWORDS: _validate_domain_keywords,
    Endpoint.DOMAINS_UNIQ_KEYWORDS: _validate_domains_uniq_keywords,
    Endpoint.DOMAIN_URLS: _validate_domain_urls,
    Endpoint.DOMAIN_COMPETITORS: _validate_domain_competitors,
    Endpoint.KEYWORDS: _validate_keywords,
    Endpoint.RELATED_KEYWORDS: _validate_related_keywords,
    Endpoint.KEYWORD_COMPETITORS: _validate_keyword_competitors,
    Endpoint.BACKLINKS_SUMMARY: _validate_backlinks_summary,
    Endpoint.API_STATS: _validate_api_stats,
    Endpoint.PROJECTS: _validate_projects,
}


# =============================================================================
# Public API
# =============================================================================

@dataclass(frozen=True)
class ValidationOutcome:
    """Result of :func:`check`: normalized arguments or the first violated rule."""
    ok: bool
    arguments: Optional[Dict[str, Any]] = None
    error: Optional[ValidationError] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error else None


def validate(endpoint: Endpoint, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Validate and normalize arguments for an endpoint.

    Args:
        endpoint: Endpoint (or its upstream method name)
        arguments: Raw caller arguments; None is treated as an empty object

    Returns:
        A new dictionary with normalized values and defaults filled in

    Raises:
        ValidationError: On the first violated rule
    """
    endpoint = Endpoint(endpoint)
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("Arguments must be an object")

    normalized = copy.deepcopy(dict(arguments))
    VALIDATORS[endpoint](normalized)
    logger.debug("Validated arguments for %s", endpoint.value)
    return normalized


def check(endpoint: Endpoint, arguments: Optional[Mapping[str, Any]]) -> ValidationOutcome:
    """Validate without raising; returns a tagged outcome."""
    try:
        return ValidationOutcome(ok=True, arguments=validate(endpoint, arguments))
    except ValidationError as e:
        return ValidationOutcome(ok=False, error=e)
