"""Reference values for parameter validation and report thresholds."""

import re
from enum import Enum


class Endpoint(str, Enum):
    """Upstream JSON-RPC methods served by the tool surface."""
    DOMAINS_INFO = "SerpstatDomainProcedure.getDomainsInfo"
    REGIONS_COUNT = "SerpstatDomainProcedure.getRegionsCount"
    DOMAIN_KEYWORDS = "SerpstatDomainProcedure.getDomainKeywords"
    DOMAINS_UNIQ_KEYWORDS = "SerpstatDomainProcedure.getDomainsUniqKeywords"
    DOMAIN_URLS = "SerpstatDomainProcedure.getDomainUrls"
    DOMAIN_COMPETITORS = "SerpstatDomainProcedure.getCompetitors"
    KEYWORDS = "SerpstatKeywordProcedure.getKeywords"
    RELATED_KEYWORDS = "SerpstatKeywordProcedure.getRelatedKeywords"
    KEYWORD_COMPETITORS = "SerpstatKeywordProcedure.getCompetitors"
    BACKLINKS_SUMMARY = "SerpstatBacklinksProcedure.getSummaryV2"
    API_STATS = "SerpstatLimitsProcedure.getStats"
    PROJECTS = "ProjectProcedure.getProjects"

# Domain names: one or more alphanumeric-with-hyphen labels, then a TLD of 2+ letters
DOMAIN_PATTERN = re.compile(r"^([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$")

DEFAULT_SEARCH_ENGINE = "g_us"

# Google regional databases plus the single Bing database
SEARCH_ENGINES = (
    "g_us", "g_uk", "g_ca", "g_au", "g_nz", "g_ie", "g_za", "g_in", "g_sg",
    "g_de", "g_at", "g_ch", "g_fr", "g_be", "g_nl", "g_lu", "g_es", "g_pt",
    "g_it", "g_gr", "g_pl", "g_cz", "g_sk", "g_hu", "g_ro", "g_bg", "g_rs",
    "g_hr", "g_si", "g_ua", "g_by", "g_kz", "g_ru", "g_lt", "g_lv", "g_ee",
    "g_fi", "g_se", "g_no", "g_dk", "g_tr", "g_il", "g_jp", "g_br", "g_mx",
    "g_ar", "g_cl", "g_co", "g_pe", "g_id", "g_th", "g_vn", "g_ph", "g_my",
    "bing_us",
)

INTENTS = ("informational", "navigational", "commercial", "transactional")

LANGUAGES = (
    "en", "ar", "hy", "af", "be", "bg", "hu", "vi", "el", "da", "iw", "id",
    "is", "es", "it", "ca", "zh-TW", "zh-CN", "ko", "lv", "lt", "de", "nl",
    "no", "fa", "pl", "pt", "ro", "ru", "sr", "sk", "sl", "sw", "th", "tr",
    "uk", "tl", "fi", "fr", "hi", "hr", "cs", "sv", "eo", "et", "ja", "kk",
    "tt",
)

SORT_ORDERS = ("asc", "desc")

# Pagination
MIN_PAGE = 1
DEFAULT_PAGE = 1
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 1000
DEFAULT_PAGE_SIZE = 100
PROJECT_PAGE_SIZES = (20, 50, 100, 200, 500)
DEFAULT_PROJECT_PAGE_SIZE = 20
DEFAULT_COMPETITORS_SIZE = 20

# Keyword classification
HIGH_VOLUME_THRESHOLD = 10000      # region_queries_count above this
LOW_DIFFICULTY_THRESHOLD = 30      # difficulty below this
HIGH_COST_THRESHOLD = 5.0          # cost above this
STRONG_CONNECTION_THRESHOLD = 5    # related keyword weight above this

# Position tiers
TOP_POSITIONS = (1, 3)
FIRST_PAGE = (1, 10)
SECOND_PAGE = (11, 20)

# URL analysis
HIGH_PERFORMING_URL = 1000
MEDIUM_PERFORMING_URL = 100
TRACKED_FILE_EXTENSIONS = ("html", "htm", "php", "asp", "aspx", "jsp", "xml", "pdf", "doc", "docx")

# Competitor analysis
TOP_PERFORMER_VISIBILITY = 1000
MEDIUM_PERFORMER_VISIBILITY = 100

# Credits
DOMAIN_INFO_CREDITS_PER_DOMAIN = 5
RECENT_PROJECT_DAYS = 30

TOP_N = 10
TOP_REGIONS = 5
