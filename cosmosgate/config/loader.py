"""Config file loading and saving.

The file is JSON with camelCase keys (the shape browser tooling writes);
Pydantic models use snake_case, so keys are converted on the way in and out.
"""

import json
import os
import re
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from cosmosgate.config.schema import Config

# Legacy single endpoint variable, honored by both broadcast and query paths.
RPC_URL_ENV = "COSMOS_RPC_URL"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def get_config_path() -> Path:
    return Path.home() / ".cosmosgate" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Build the effective config.

    Precedence, lowest first: defaults, the config file, COSMOSGATE_*
    environment variables, COSMOS_RPC_URL. A missing file is not an error and is
    never created here.

    Raises:
        ValueError: the file exists but is not a valid config object.
    """
    path = Path(config_path) if config_path else get_config_path()
    data: dict[str, Any] = {}
    if path.exists():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("top-level value must be a JSON object")
            data = convert_keys(raw)
            cfg = Config(**data)
        except ValueError as e:
            raise ValueError(f"Failed to load config from {path}: {e}") from e
        logger.debug("Loaded config from {}", path)
    else:
        cfg = Config()

    _apply_env_overrides(cfg)
    return cfg


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Write `config` as camelCase JSON and drop the cached copy."""
    path = Path(config_path) if config_path else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(convert_to_camel(config.model_dump()), indent=2), encoding="utf-8")

    from cosmosgate.config.access import clear_config_cache

    clear_config_cache(config_path=path)
    return path


def _apply_env_overrides(cfg: Config) -> None:
    rpc_url = (os.environ.get(RPC_URL_ENV) or "").strip()
    if rpc_url:
        logger.debug("Using node endpoint from {}: {}", RPC_URL_ENV, rpc_url)
        cfg.node.rpc_url = rpc_url


def _rename_keys(data: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(data, dict):
        return {rename(k): _rename_keys(v, rename) for k, v in data.items()}
    if isinstance(data, list):
        return [_rename_keys(item, rename) for item in data]
    return data


def convert_keys(data: Any) -> Any:
    """camelCase keys -> snake_case, recursively."""
    return _rename_keys(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    """snake_case keys -> camelCase, recursively."""
    return _rename_keys(data, snake_to_camel)


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
