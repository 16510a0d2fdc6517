from .exchange_client import ExchangeClient
from .platform_client import DeveloperPlatformClient, DefiProtocol
from .vvs_toolkit import VVSToolkit, PairSortKey

__all__ = [
    "ExchangeClient",
    "DeveloperPlatformClient",
    "DefiProtocol",
    "VVSToolkit",
    "PairSortKey",
]
