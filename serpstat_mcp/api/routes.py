"""API routes for the Serpstat tools."""

from typing import Any, Dict, Iterator, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from ..serpstat.client import SerpstatClient
from ..toolkit.executor import create_client, resolve_tool, run_tool, validate_tool_arguments
from ..toolkit.tools import TOOLS, get_tool_by_name
from ..utils.errors import ErrorType, SerpstatToolError
from ..utils.logger import get_logger
from .schemas import HealthResponse, ToolInfo, ToolsListResponse, ValidationResponse

router = APIRouter(prefix="/api", tags=["tools"])
logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    ErrorType.UNKNOWN_TOOL: 404,
    ErrorType.VALIDATION: 422,
    ErrorType.UPSTREAM: 502,
    ErrorType.INTERNAL: 500,
}


def get_client() -> Iterator[SerpstatClient]:
    """Per-request Serpstat client."""
    client = create_client()
    try:
        yield client
    finally:
        client.close()


def _http_error(error: SerpstatToolError) -> HTTPException:
    return HTTPException(status_code=ERROR_STATUS_CODES[error.error_type], detail=error.message)


def _tool_info(tool_def: Dict[str, Any]) -> ToolInfo:
    return ToolInfo(
        name=tool_def["name"],
        description=tool_def["description"],
        input_schema=tool_def["input_schema"],
        method=resolve_tool(tool_def["name"]).method,
    )


@router.get("/health", response_model=HealthResponse)
def health_check(client: SerpstatClient = Depends(get_client)):
    """Health check endpoint."""
    if not client.token:
        return HealthResponse(
            status="unhealthy",
            token_configured=False,
            serpstat_connected=False,
            error="SERPSTAT_API_TOKEN is not set",
        )

    is_connected = client.test_connection()
    return HealthResponse(
        status="healthy" if is_connected else "unhealthy",
        token_configured=True,
        serpstat_connected=is_connected,
    )


@router.get("/tools", response_model=ToolsListResponse)
def list_tools():
    """List all tools with their input schemas."""
    tools = [_tool_info(tool_def) for tool_def in TOOLS]
    return ToolsListResponse(tools=tools, count=len(tools))


@router.get("/tools/{tool_name}", response_model=ToolInfo)
def get_tool(tool_name: str):
    """Get one tool definition."""
    tool_def = get_tool_by_name(tool_name)
    if not tool_def:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")
    return _tool_info(tool_def)


@router.post("/tools/{tool_name}/validate", response_model=ValidationResponse)
def validate_tool(tool_name: str, arguments: Optional[Dict[str, Any]] = Body(None)):
    """Validate and normalize arguments without calling Serpstat."""
    try:
        normalized = validate_tool_arguments(tool_name, arguments)
    except SerpstatToolError as e:
        raise _http_error(e)

    return ValidationResponse(
        tool=tool_name,
        method=resolve_tool(tool_name).method,
        arguments=normalized,
    )


@router.post("/tools/{tool_name}")
def call_tool(
    tool_name: str,
    arguments: Optional[Dict[str, Any]] = Body(None),
    client: SerpstatClient = Depends(get_client),
):
    """Execute a tool and return its report.

    Request body: the tool arguments as a JSON object.
    """
    try:
        return run_tool(tool_name, arguments, client)
    except SerpstatToolError as e:
        logger.warning("%s failed: %s", tool_name, e.message)
        raise _http_error(e)
    except Exception as e:
        logger.exception("Unexpected error while executing %s", tool_name)
        raise HTTPException(status_code=500, detail=str(e))
