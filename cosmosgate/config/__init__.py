"""Configuration module for cosmosgate."""

from cosmosgate.config.loader import load_config, get_config_path, save_config
from cosmosgate.config.schema import Config, NodeConfig, ServerConfig, QueriesConfig
from cosmosgate.config.access import get_config, get_node_config, clear_config_cache

__all__ = [
    "Config",
    "NodeConfig",
    "ServerConfig",
    "QueriesConfig",
    "load_config",
    "save_config",
    "get_config_path",
    "get_config",
    "get_node_config",
    "clear_config_cache",
]
