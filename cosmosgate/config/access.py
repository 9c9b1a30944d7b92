"""Process-wide cached config.

Entries are keyed by the resolved config file path together with the current
COSMOS_RPC_URL value, so changing the endpoint variable at runtime is picked
up on the next lookup without an explicit reload.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from cosmosgate.config.loader import RPC_URL_ENV, get_config_path, load_config
from cosmosgate.config.schema import Config, NodeConfig

_lock = threading.RLock()
_cache: dict[tuple[str, str], Config] = {}


def _resolved_path(config_path: Path | None) -> Path:
    return Path(config_path or get_config_path()).expanduser().resolve()


def get_config(*, config_path: Path | None = None, force_reload: bool = False) -> Config:
    path = _resolved_path(config_path)
    key = (str(path), os.environ.get(RPC_URL_ENV, ""))
    with _lock:
        config = _cache.get(key)
        if config is None or force_reload:
            config = _cache[key] = load_config(path)
        return config


def get_node_config(*, config_path: Path | None = None) -> NodeConfig:
    """Node section of the cached config."""
    return get_config(config_path=config_path).node


def clear_config_cache(*, config_path: Path | None = None) -> None:
    """Drop entries for one file, or everything when no path is given."""
    with _lock:
        if config_path is None:
            _cache.clear()
            return
        path = str(_resolved_path(config_path))
        for key in [k for k in _cache if k[0] == path]:
            del _cache[key]
