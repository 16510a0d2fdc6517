"""
Custom exceptions for the Cronos MCP analytics server.

This module defines a hierarchy of exceptions that provide better error handling
and debugging capabilities across configuration, tool execution and upstream
data retrieval.
"""

from typing import Optional, Any, Dict, List


class CronosMCPError(Exception):
    """
    Base exception for all Cronos MCP errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        context: Additional context information
    """

    def __init__(self,
                 message: str,
                 error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None,
                 cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None
        }

# Configuration Related Errors

class ConfigurationError(CronosMCPError):
    """Raised when there's an issue with configuration."""
    pass

class InvalidNetworkError(ConfigurationError):
    """Raised when a network identifier is not one of the supported networks."""

    def __init__(self, network: str, supported: List[str]):
        super().__init__(
            message=f"Invalid network: {network}. Must be one of: {', '.join(supported)}",
            context={"network": network, "supported_networks": supported}
        )

class MissingApiKeyError(ConfigurationError):
    """Raised when no API key is available for the requested network."""

    def __init__(self, env_var: Optional[str] = None, network_name: Optional[str] = None):
        if env_var and network_name:
            message = f"Missing {env_var} for {network_name}"
        else:
            message = "No API keys provided! Set CRONOS_EVM_API_KEY or CRONOS_ZKEVM_API_KEY"

        super().__init__(
            message=message,
            context={"env_var": env_var, "network": network_name}
        )

# Tool Related Errors

class ToolError(CronosMCPError):
    """Base class for MCP tool errors."""
    pass

class UnknownToolError(ToolError):
    """Raised when a requested tool name is not registered."""

    def __init__(self, tool_name: str, available_tools: Optional[List[str]] = None):
        message = f"Unknown tool: {tool_name}"

        super().__init__(
            message=message,
            context={"requested_tool": tool_name, "available_tools": available_tools}
        )

class ToolValidationError(ToolError):
    """Raised when tool arguments fail input schema validation."""

    def __init__(self, tool_name: str, errors: List[str]):
        message = f"Invalid arguments for {tool_name}: {'; '.join(errors)}"

        super().__init__(
            message=message,
            context={"tool_name": tool_name, "errors": errors}
        )

class ToolExecutionError(ToolError):
    """Raised when a tool handler cannot produce a result."""
    pass

# Upstream Data Errors

class UpstreamError(CronosMCPError):
    """Raised when an upstream API answers with an unusable payload."""

    def __init__(self,
                 source: str,
                 message: str,
                 cause: Optional[Exception] = None):
        super().__init__(
            message=message,
            context={"source": source},
            cause=cause
        )


def handle_exception(
    exception: Exception,
    tool_name: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> CronosMCPError:
    """
    Convert a generic exception to the appropriate CronosMCPError.

    Args:
        exception: Original exception
        tool_name: Tool being executed when the error happened
        context: Additional context

    Returns:
        Appropriate CronosMCPError subclass
    """
    context = context or {}

    if tool_name:
        context["tool_name"] = tool_name

    # If it's already one of ours, add context and return
    if isinstance(exception, CronosMCPError):
        exception.context.update(context)
        return exception

    if isinstance(exception, ValueError):
        return ToolExecutionError(
            message=str(exception),
            context=context,
            cause=exception
        )

    return CronosMCPError(
        message=f"Unexpected error: {exception}",
        context=context,
        cause=exception
    )
