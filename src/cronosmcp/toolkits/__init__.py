"""
Cronos MCP Toolkits

Upstream data integrations and the utilities they share.

Architecture:
- base/: BaseAPIToolkit helper shared by every integration
- utils/: HTTP transport, envelopes, validation, DEX normalization, formatting
- data/: VVS Finance toolkit, Crypto.com Exchange and Developer Platform clients

Usage:
    from cronosmcp.toolkits import VVSToolkit, DexDataNormalizer
"""

from .base import BaseAPIToolkit

from .utils import (
    DataHTTPClient,
    DataQualityReport,
    DataValidator,
    DexDataNormalizer,
    HTTPClientError,
    NormalizedBatch,
    ResponseBuilder,
    StatisticalAnalyzer,
    ValueFormatter,
    WCRO_ADDRESS,
)

from .data import (
    DefiProtocol,
    DeveloperPlatformClient,
    ExchangeClient,
    PairSortKey,
    VVSToolkit,
)

__all__ = [
    "BaseAPIToolkit",

    "DataHTTPClient",
    "DataQualityReport",
    "DataValidator",
    "DexDataNormalizer",
    "HTTPClientError",
    "NormalizedBatch",
    "ResponseBuilder",
    "StatisticalAnalyzer",
    "ValueFormatter",
    "WCRO_ADDRESS",

    "DefiProtocol",
    "DeveloperPlatformClient",
    "ExchangeClient",
    "PairSortKey",
    "VVSToolkit",
]
