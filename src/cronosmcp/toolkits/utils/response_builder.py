"""Response Builder Utilities
===========================

Standardized envelope construction for the analytics agent, the VVS toolkit
and the MCP tool handlers. Every upstream call resolves to one of two shapes:

    {"status": "success", "data": {...}, "network": "...", "timestamp": <ms>}
    {"status": "error", "message": "...", "network": "..."}
"""

import time
from typing import Any, Dict, Optional

__all__ = ["ResponseBuilder", "is_success"]


def is_success(response: Dict[str, Any]) -> bool:
    return isinstance(response, dict) and response.get("status") == "success"


class ResponseBuilder:
    """Stateful utility class for building analytics envelopes.

    Bound to a network identifier so that callers never have to inject it
    by hand.
    """

    def __init__(self, network: Optional[str] = None):
        self.network = network

    def success_response(self, data: Any = None, **additional_fields) -> Dict[str, Any]:
        """Create a success envelope.

        Args:
            data: Response data payload
            **additional_fields: Extra top-level fields (rarely needed)

        Returns:
            dict: ``{"status": "success", "data", "network", "timestamp"}``
        """
        response = {
            "status": "success",
            "data": data,
            "network": self.network,
            "timestamp": int(time.time() * 1000),
        }

        safe_additional_fields = {
            k: v for k, v in additional_fields.items()
            if k not in ("status", "data", "network", "timestamp")
        }
        response.update(safe_additional_fields)

        return response

    def error_response(self, message: str, **additional_fields) -> Dict[str, Any]:
        """Create an error envelope.

        Example:
            >>> ResponseBuilder("cronos-mainnet").error_response("Failed to get native balance")
            {'status': 'error', 'message': 'Failed to get native balance', 'network': 'cronos-mainnet'}
        """
        response = {
            "status": "error",
            "message": message,
            "network": self.network,
        }

        safe_additional_fields = {
            k: v for k, v in additional_fields.items()
            if k not in ("status", "message", "network")
        }
        response.update(safe_additional_fields)

        return response

    @staticmethod
    def tool_response(message: str, data: Any) -> Dict[str, Any]:
        """Create the payload returned by an MCP tool handler."""
        return {
            "status": "success",
            "message": message,
            "data": data,
        }
