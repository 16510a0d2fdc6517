"""
Configuration system for the Cronos MCP analytics server.

Configuration is assembled once, at process entry, from:
- a ``.env`` file (python-dotenv)
- an optional YAML file (``--config path.yaml`` or ``CRONOS_MCP_CONFIG``)
- environment variables
- command line flags (``--network=``, ``--cronos_evm_api_key=``, ...)

The resulting ``CronosConfig`` is passed explicitly to the agent, the
upstream clients and the MCP server.
"""

import argparse
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cronosmcp.exceptions import InvalidNetworkError, MissingApiKeyError

CRONOS_MAINNET = "cronos-mainnet"
CRONOS_ZKEVM_MAINNET = "cronos-zkevm-mainnet"

EVM_KEY_ENV = "CRONOS_EVM_API_KEY"
ZKEVM_KEY_ENV = "CRONOS_ZKEVM_API_KEY"
CONFIG_FILE_ENV = "CRONOS_MCP_CONFIG"
LOG_LEVEL_ENV = "CRONOS_MCP_LOG_LEVEL"


class NetworkConfig(BaseModel):
    """Static description of a supported Cronos network."""

    model_config = ConfigDict(frozen=True)

    name: str
    chain_id: int
    rpc_url: str
    block_explorer: str
    native_currency: str
    api_key_required: bool = True
    api_key_env: str


NETWORK_CONFIGS: Dict[str, NetworkConfig] = {
    CRONOS_MAINNET: NetworkConfig(
        name="Cronos Mainnet",
        chain_id=25,
        rpc_url="https://evm.cronos.org",
        block_explorer="https://cronoscan.com",
        native_currency="CRO",
        api_key_env=EVM_KEY_ENV,
    ),
    CRONOS_ZKEVM_MAINNET: NetworkConfig(
        name="Cronos zkEVM Mainnet",
        chain_id=388,
        rpc_url="https://mainnet.zkevm.cronos.org",
        block_explorer="https://explorer.zkevm.cronos.org",
        native_currency="zkCRO",
        api_key_env=ZKEVM_KEY_ENV,
    ),
}

SUPPORTED_NETWORKS: List[str] = list(NETWORK_CONFIGS.keys())


def mask_key(key: Optional[str]) -> str:
    """Render an API key as ``****`` plus its last four characters."""
    if not key:
        return ""
    return f"****{key[-4:]}"


class ApiKeys(BaseModel):
    """Developer Platform API keys, one per network."""

    evm: str = ""
    zkevm: str = ""

    def for_network(self, network: str) -> str:
        if network == CRONOS_MAINNET:
            return self.evm
        if network == CRONOS_ZKEVM_MAINNET:
            return self.zkevm
        return ""

    def available_networks(self) -> List[str]:
        available = []
        if self.evm:
            available.append(CRONOS_MAINNET)
        if self.zkevm:
            available.append(CRONOS_ZKEVM_MAINNET)
        return available


class HTTPConfig(BaseModel):
    """Outbound HTTP settings shared by every upstream client."""

    timeout: float = 30.0
    max_retries: int = 0  # single attempt unless configured
    retry_delay: float = 1.0

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError('HTTP timeout must be positive')
        return v

    @field_validator('max_retries')
    @classmethod
    def validate_max_retries(cls, v):
        if v < 0:
            raise ValueError('max_retries cannot be negative')
        return v


class EndpointsConfig(BaseModel):
    """Base URLs of the upstream data APIs."""

    vvs_base_url: str = "https://api.vvs.finance/info/api"
    exchange_base_url: str = "https://api.crypto.com/exchange/v1"
    platform_base_url: str = "https://developer-platform-api.crypto.com/api/v1/cdc-developer-platform"


class LoggingConfig(BaseModel):
    """Configuration for logging (console output always goes to stderr)."""

    level: str = "INFO"
    console_style: str = "clean"  # "clean", "timestamp", or "detailed"
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    file_rotation: str = "10 MB"
    file_retention: int = 3
    module_levels: Optional[Dict[str, str]] = None  # Module-specific console levels

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ['TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('console_style')
    @classmethod
    def validate_console_style(cls, v):
        valid_styles = ['clean', 'timestamp', 'detailed']
        if v not in valid_styles:
            raise ValueError(f'Console style must be one of: {valid_styles}')
        return v

    def get_log_file_path(self) -> Path:
        if self.file_path:
            return Path(self.file_path)
        return Path("logs") / "cronos-mcp.log"


class CronosConfig(BaseModel):
    """Main configuration object, bound to one active network."""

    model_config = ConfigDict(validate_assignment=True)

    network: str = CRONOS_MAINNET
    api_keys: ApiKeys = Field(default_factory=ApiKeys)
    http: HTTPConfig = Field(default_factory=HTTPConfig)
    endpoints: EndpointsConfig = Field(default_factory=EndpointsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('network')
    @classmethod
    def validate_network(cls, v):
        if v not in NETWORK_CONFIGS:
            raise ValueError(f"Invalid network: {v}. Must be one of: {', '.join(SUPPORTED_NETWORKS)}")
        return v

    @property
    def network_info(self) -> NetworkConfig:
        return NETWORK_CONFIGS[self.network]

    @property
    def api_key(self) -> str:
        """API key of the active network (may be empty)."""
        return self.api_keys.for_network(self.network)

    def api_key_for(self, network: str) -> str:
        return self.api_keys.for_network(network)

    def can_switch_to(self, network: str) -> bool:
        return network in NETWORK_CONFIGS and bool(self.api_key_for(network))

    def available_networks(self) -> List[str]:
        return self.api_keys.available_networks()

    def for_network(self, network: str) -> "CronosConfig":
        """Copy of this configuration bound to ``network``.

        Raises:
            InvalidNetworkError: If ``network`` is not supported
            MissingApiKeyError: If no API key exists for ``network``
        """
        if network not in NETWORK_CONFIGS:
            raise InvalidNetworkError(network, SUPPORTED_NETWORKS)
        if not self.api_key_for(network):
            target = NETWORK_CONFIGS[network]
            raise MissingApiKeyError(target.api_key_env, target.name)
        return self.model_copy(update={"network": network})

    @classmethod
    def read_yaml(cls, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read a YAML configuration file into a plain dictionary.

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in configuration file {path}: {e}")
            raise

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")

        logger.info(f"Loaded configuration from {path}")
        return data


def determine_network(api_keys: ApiKeys, explicit: Optional[str] = None) -> str:
    """
    Pick the active network.

    An explicit network always wins and must be supported. Otherwise the
    network is inferred from the available API keys, preferring Cronos
    Mainnet when both are present.

    Raises:
        InvalidNetworkError: explicit network is not supported
        MissingApiKeyError: no explicit network and no API key at all
    """
    if explicit:
        if explicit in NETWORK_CONFIGS:
            return explicit
        raise InvalidNetworkError(explicit, SUPPORTED_NETWORKS)

    if api_keys.evm and api_keys.zkevm:
        logger.info("🔑 Both API keys detected, defaulting to Cronos Mainnet")
        logger.info(f"💡 Use --network={CRONOS_ZKEVM_MAINNET} to use zkEVM instead")
        return CRONOS_MAINNET
    if api_keys.evm:
        logger.info("🔑 Cronos EVM API key detected, using Cronos Mainnet")
        return CRONOS_MAINNET
    if api_keys.zkevm:
        logger.info("🔑 Cronos zkEVM API key detected, using zkEVM Mainnet")
        return CRONOS_ZKEVM_MAINNET

    raise MissingApiKeyError()


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cronos-mcp",
        description="Cronos blockchain analytics MCP server (stdio transport)",
    )
    parser.add_argument("--network", default=None,
                        help=f"Force the active network ({', '.join(SUPPORTED_NETWORKS)})")
    parser.add_argument("--cronos_evm_api_key", default=None,
                        help=f"Cronos EVM API key (overridden by {EVM_KEY_ENV})")
    parser.add_argument("--cronos_zkevm_api_key", default=None,
                        help=f"Cronos zkEVM API key (overridden by {ZKEVM_KEY_ENV})")
    parser.add_argument("--log-level", dest="log_level", default=None,
                        help="Console log level (default: INFO)")
    parser.add_argument("--config", dest="config_file", default=None,
                        help=f"Optional YAML configuration file (or {CONFIG_FILE_ENV})")
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> CronosConfig:
    """
    Build the configuration with the standard precedence:
    1. YAML file values
    2. CLI flags
    3. Environment variables (API keys from the environment win over CLI keys)

    Args:
        argv: Command line arguments (defaults to ``sys.argv[1:]``)
        env: Environment mapping; when omitted, ``.env`` is loaded into
            ``os.environ`` first
        config_file: Optional YAML file (overrides ``--config``)

    Returns:
        CronosConfig bound to the determined network

    Raises:
        InvalidNetworkError, MissingApiKeyError: see ``determine_network``
    """
    if env is None:
        load_dotenv()
        env = os.environ

    args, unknown = build_arg_parser().parse_known_args(argv)
    if unknown:
        logger.debug(f"Ignoring unknown arguments: {unknown}")

    file_path = config_file or args.config_file or env.get(CONFIG_FILE_ENV)
    data: Dict[str, Any] = CronosConfig.read_yaml(file_path) if file_path else {}

    file_keys = data.pop("api_keys", None) or {}
    api_keys = ApiKeys(
        evm=env.get(EVM_KEY_ENV) or args.cronos_evm_api_key or file_keys.get("evm") or "",
        zkevm=env.get(ZKEVM_KEY_ENV) or args.cronos_zkevm_api_key or file_keys.get("zkevm") or "",
    )

    explicit_network = args.network or data.pop("network", None)
    network = determine_network(api_keys, explicit_network)

    logging_data = dict(data.pop("logging", None) or {})
    log_level = args.log_level or env.get(LOG_LEVEL_ENV)
    if log_level:
        logging_data["level"] = log_level

    config = CronosConfig(
        network=network,
        api_keys=api_keys,
        logging=LoggingConfig(**logging_data),
        **data,
    )

    if not config.api_key:
        logger.warning(f"⚠️ No API key provided for {network}. Platform lookups will fail.")

    return config


def validate_environment(config: CronosConfig) -> None:
    """Log the active network setup and per-network key availability."""
    info = config.network_info

    logger.info("✅ Cronos MCP environment configuration valid")
    logger.info(f"📍 Active Network: {info.name}")
    logger.info(f"📍 RPC URL: {info.rpc_url}")
    logger.info(f"📍 Block Explorer: {info.block_explorer}")
    logger.info(f"📍 Native Currency: {info.native_currency}")

    if config.api_key:
        logger.info(f"📍 Active API Key ({info.api_key_env}): {mask_key(config.api_key)}")

    logger.info("🌐 Network Availability:")
    for network, network_info in NETWORK_CONFIGS.items():
        status = "✅ Available" if config.api_key_for(network) else f"❌ Missing {network_info.api_key_env}"
        logger.info(f"   • {network_info.name}: {status}")
