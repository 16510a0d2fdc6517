"""
Configuration module for the Cronos MCP server.

Exports:
    - CronosConfig: root pydantic model, bound to one active network
    - NetworkConfig, NETWORK_CONFIGS: static network descriptions
    - ApiKeys, HTTPConfig, EndpointsConfig, LoggingConfig: sub-models
    - load_config: build the configuration from .env, YAML, env vars and CLI flags
    - determine_network: explicit override or API-key based auto-detection
    - validate_environment: log the active setup
"""
from .config import (
    CRONOS_MAINNET,
    CRONOS_ZKEVM_MAINNET,
    NETWORK_CONFIGS,
    SUPPORTED_NETWORKS,
    ApiKeys,
    CronosConfig,
    EndpointsConfig,
    HTTPConfig,
    LoggingConfig,
    NetworkConfig,
    determine_network,
    load_config,
    mask_key,
    validate_environment,
)

__all__ = [
    "CRONOS_MAINNET",
    "CRONOS_ZKEVM_MAINNET",
    "NETWORK_CONFIGS",
    "SUPPORTED_NETWORKS",
    "ApiKeys",
    "CronosConfig",
    "EndpointsConfig",
    "HTTPConfig",
    "LoggingConfig",
    "NetworkConfig",
    "determine_network",
    "load_config",
    "mask_key",
    "validate_environment",
]
