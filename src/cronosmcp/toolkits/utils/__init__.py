"""
Utility modules for the Cronos MCP toolkits.

This package contains reusable utility classes that support the data integrations:
- DataHTTPClient: async HTTP client with named endpoints and rate limiting
- ResponseBuilder: success/error envelopes shared by the agent and toolkits
- DataValidator: address, transaction hash and CronosId format checks
- DexDataNormalizer: sanitizing and validating VVS DEX aggregates
- ValueFormatter: human-readable currency, price and amount strings
- StatisticalAnalyzer: distribution statistics for liquidity figures
"""

from .data_validator import DataValidator
from .dex_normalizer import DexDataNormalizer, DataQualityReport, NormalizedBatch, WCRO_ADDRESS
from .formatting import ValueFormatter
from .http_client import DataHTTPClient, HTTPClientError
from .response_builder import ResponseBuilder, is_success
from .statistics import StatisticalAnalyzer

__all__ = [
    'DataValidator',
    'DexDataNormalizer',
    'DataQualityReport',
    'NormalizedBatch',
    'WCRO_ADDRESS',
    'ValueFormatter',
    'DataHTTPClient',
    'HTTPClientError',
    'ResponseBuilder',
    'is_success',
    'StatisticalAnalyzer',
]
