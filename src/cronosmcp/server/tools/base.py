"""
Shared plumbing for MCP tool definitions.

A tool couples a name, a description, a pydantic input model and an async
handler ``handler(agent, params) -> dict``. Handlers return the tool payload
``{"status": "success", "message", "data"}`` and raise on failure; ``run``
prefixes any failure with the tool's failure message.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Type

from pydantic import ValidationError

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.exceptions import CronosMCPError, ToolExecutionError, ToolValidationError
from cronosmcp.server.schemas import ToolInput
from cronosmcp.toolkits.utils import is_success

Handler = Callable[[CronosAnalyticsAgent, Any], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class McpTool:
    name: str
    description: str
    input_model: Type[ToolInput]
    handler: Handler
    failure_message: str

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=True)

    def parse_arguments(self, arguments: Optional[Mapping[str, Any]]) -> ToolInput:
        """Validate raw arguments against the input model.

        Raises:
            ToolValidationError: One entry per failing field
        """
        try:
            return self.input_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            ]
            raise ToolValidationError(self.name, errors) from e

    async def run(self, agent: CronosAnalyticsAgent, arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        params = self.parse_arguments(arguments)
        try:
            return await self.handler(agent, params)
        except CronosMCPError as e:
            failure = self.failure_message.format(**params.model_dump())
            raise ToolExecutionError(f"{failure}: {e.message}", context={"tool_name": self.name}, cause=e) from e


def resolve_target_agent(agent: CronosAnalyticsAgent, network: Optional[str]) -> CronosAnalyticsAgent:
    """Agent for the requested network, falling back to ``agent``."""
    return agent.for_network(network)


def require_data(envelope: Dict[str, Any]) -> Dict[str, Any]:
    """Data of a success envelope.

    Raises:
        ToolExecutionError: The envelope reports an error
    """
    if not is_success(envelope):
        raise ToolExecutionError(envelope.get("message") or "Unknown error occurred")
    data = envelope.get("data")
    return data if isinstance(data, dict) else {}


def block_explorer_url(agent: CronosAnalyticsAgent, path: str) -> str:
    return f"{agent.network_info.block_explorer}/{path}"
