"""Tool surface for the Serpstat API."""

from .tools import (
    TOOLS,
    get_tool_by_name,
    get_all_tool_names,
)
from .executor import execute_tool, run_tool, validate_tool_arguments

__all__ = [
    "TOOLS",
    "get_tool_by_name",
    "get_all_tool_names",
    "execute_tool",
    "run_tool",
    "validate_tool_arguments",
]
