"""Tool executor - validate, call Serpstat, build the report.

``execute_tool`` is the tool boundary: it always returns a dictionary, either
the report or a structured error. ``run_tool`` raises instead, for callers
that map error types themselves (the HTTP routes).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import get_settings
from ..data.constants import Endpoint
from ..data.reports import REPORT_BUILDERS, ReportBuilder
from ..data.validation import validate
from ..serpstat.client import SerpstatClient
from ..utils.errors import (
    SerpstatToolError,
    UnknownToolError,
    UpstreamError,
    ValidationError,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolEndpoint:
    """Upstream method and report builder behind one tool name."""
    endpoint: Endpoint
    builder: ReportBuilder

    @property
    def method(self) -> str:
        return self.endpoint.value


_TOOL_NAMES = {
    "get_domains_info": Endpoint.DOMAINS_INFO,
    "get_domain_regions_count": Endpoint.REGIONS_COUNT,
    "get_domain_keywords": Endpoint.DOMAIN_KEYWORDS,
    "get_domains_uniq_keywords": Endpoint.DOMAINS_UNIQ_KEYWORDS,
    "get_domain_urls": Endpoint.DOMAIN_URLS,
    "get_domain_competitors": Endpoint.DOMAIN_COMPETITORS,
    "get_keywords": Endpoint.KEYWORDS,
    "get_related_keywords": Endpoint.RELATED_KEYWORDS,
    "get_keyword_competitors": Endpoint.KEYWORD_COMPETITORS,
    "get_backlinks_summary": Endpoint.BACKLINKS_SUMMARY,
    "get_api_stats": Endpoint.API_STATS,
    "get_projects": Endpoint.PROJECTS,
}

TOOL_ENDPOINTS: Dict[str, ToolEndpoint] = {
    name: ToolEndpoint(endpoint, REPORT_BUILDERS[endpoint])
    for name, endpoint in _TOOL_NAMES.items()
}


def create_client() -> SerpstatClient:
    """Build a client from application settings."""
    settings = get_settings()
    return SerpstatClient(
        base_url=settings.serpstat_api_url,
        token=settings.serpstat_api_token,
        timeout=settings.request_timeout_seconds,
    )


def resolve_tool(tool_name: str) -> ToolEndpoint:
    """Look up a tool.

    Raises:
        UnknownToolError: If no tool has this name
    """
    tool = TOOL_ENDPOINTS.get(tool_name)
    if tool is None:
        raise UnknownToolError(tool_name)
    return tool


def validate_tool_arguments(tool_name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Normalize arguments for a tool without calling the API."""
    return validate(resolve_tool(tool_name).endpoint, arguments)


def run_tool(
    tool_name: str,
    arguments: Optional[Dict[str, Any]],
    client: Optional[SerpstatClient] = None,
) -> Dict[str, Any]:
    """Validate, call the upstream method and assemble the report.

    Args:
        tool_name: Name of the tool to execute
        arguments: Raw tool arguments
        client: Serpstat client; one is created from settings when omitted

    Returns:
        Report dictionary

    Raises:
        UnknownToolError: If the tool does not exist
        ValidationError: If the arguments are invalid (no upstream call is made)
        UpstreamError: If the API call fails (no report is built)
    """
    tool = resolve_tool(tool_name)
    logger.info("Starting %s request", tool_name)

    normalized = validate(tool.endpoint, arguments)

    logger.info("Calling %s", tool.method)
    if client is None:
        with create_client() as owned_client:
            result = owned_client.call(tool.method, normalized)
    else:
        result = client.call(tool.method, normalized)

    report = tool.builder(result if isinstance(result, dict) else {}, normalized)
    logger.info("Successfully processed %s request", tool_name)
    return report


def _error_result(error: SerpstatToolError, tool_name: str) -> Dict[str, Any]:
    result = error.to_dict()
    result["tool"] = tool_name
    return result


def execute_tool(
    tool_name: str,
    arguments: Optional[Dict[str, Any]],
    client: Optional[SerpstatClient] = None,
) -> Dict[str, Any]:
    """Execute a tool call and return the report or a structured error.

    Args:
        tool_name: Name of the tool to execute
        arguments: Raw tool arguments
        client: Optional Serpstat client

    Returns:
        Report dictionary, or ``{"status": "error", "error_type", "message", "tool"}``
    """
    try:
        return run_tool(tool_name, arguments, client)
    except UnknownToolError as e:
        logger.warning(e.message)
        return _error_result(e, tool_name)
    except ValidationError as e:
        logger.warning("Validation failed for %s: %s", tool_name, e.message)
        return _error_result(e, tool_name)
    except UpstreamError as e:
        logger.error("Serpstat API call failed for %s: %s", tool_name, e.message)
        return _error_result(e, tool_name)
    except Exception as e:
        logger.exception("Unexpected error while executing %s", tool_name)
        return _error_result(SerpstatToolError(str(e)), tool_name)
