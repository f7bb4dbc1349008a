"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional


class HealthResponse(BaseModel):
    """Service and Serpstat connectivity status."""

    status: Literal["healthy", "unhealthy"]
    token_configured: bool
    serpstat_connected: bool
    error: Optional[str] = None


class ToolInfo(BaseModel):
    """A tool as published to MCP clients."""

    name: str
    description: str
    input_schema: Dict[str, Any]
    method: str = Field(..., description="Upstream Serpstat method the tool calls")


class ToolsListResponse(BaseModel):
    """All available tools."""

    tools: List[ToolInfo]
    count: int


class ValidationResponse(BaseModel):
    """Normalized arguments from a validation dry run."""

    tool: str
    method: str
    arguments: Dict[str, Any]
