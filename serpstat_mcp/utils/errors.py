"""Error types shared by validation, the upstream client and the executor."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorType(Enum):
    """Error classification types."""
    VALIDATION = "validation"
    UPSTREAM = "upstream"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


class SerpstatToolError(Exception):
    """Base exception for tool failures."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.INTERNAL,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        result = {
            "status": "error",
            "error_type": self.error_type.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(SerpstatToolError):
    """Caller-supplied arguments violate an endpoint rule."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorType.VALIDATION, details)


class UpstreamError(SerpstatToolError):
    """The Serpstat API call failed or returned an error payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, ErrorType.UPSTREAM, details)
        self.status_code = status_code


class UnknownToolError(SerpstatToolError):
    """No endpoint is registered under the requested tool name."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", ErrorType.UNKNOWN_TOOL, {"tool": tool_name})
        self.tool_name = tool_name
