"""Tests for config file loading and environment overrides."""

import json
from pathlib import Path

import pytest

from cosmosgate.config.loader import (
    RPC_URL_ENV,
    camel_to_snake,
    convert_keys,
    convert_to_camel,
    load_config,
    save_config,
    snake_to_camel,
)
from cosmosgate.config.schema import DEFAULT_RPC_URL, Config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(RPC_URL_ENV, raising=False)
    monkeypatch.delenv("COSMOSGATE_NODE__RPC_URL", raising=False)
    monkeypatch.delenv("COSMOSGATE_SERVER__PORT", raising=False)


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.json")
    assert cfg.node.rpc_url == DEFAULT_RPC_URL
    assert cfg.server.port == 3001
    assert cfg.queries.registry_id.startswith("eland1")
    assert not (tmp_path / "missing.json").exists()


def test_camel_case_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"node": {"rpcUrl": "http://file-node:26657", "broadcastTimeout": 12}, "server": {"port": 4000}}),
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.node.rpc_url == "http://file-node:26657"
    assert cfg.node.broadcast_timeout == 12
    assert cfg.server.port == 4000


def test_cosmos_rpc_url_overrides_file(tmp_path: Path, monkeypatch) -> None:
    """The legacy variable applies to broadcast and query paths alike."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"node": {"rpcUrl": "http://file-node:26657"}}), encoding="utf-8")
    monkeypatch.setenv(RPC_URL_ENV, "http://env-node:26657")
    assert load_config(path).node.rpc_url == "http://env-node:26657"


def test_blank_cosmos_rpc_url_is_ignored(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(RPC_URL_ENV, "   ")
    assert load_config(tmp_path / "none.json").node.rpc_url == DEFAULT_RPC_URL


def test_prefixed_nested_env_var(monkeypatch) -> None:
    monkeypatch.setenv("COSMOSGATE_NODE__RPC_URL", "http://nested:26657")
    assert Config().node.rpc_url == "http://nested:26657"


def test_prefixed_env_var_overrides_file(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server": {"port": 4000, "host": "10.0.0.1"}}), encoding="utf-8")
    monkeypatch.setenv("COSMOSGATE_SERVER__PORT", "5000")
    cfg = load_config(path)
    assert cfg.server.port == 5000
    assert cfg.server.host == "10.0.0.1"


def test_invalid_file_raises_value_error(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="Failed to load config"):
        load_config(path)


def test_save_config_writes_camel_case(tmp_path: Path) -> None:
    path = tmp_path / "out" / "config.json"
    cfg = Config()
    cfg.node.rpc_url = "http://saved:26657"
    save_config(cfg, path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["node"]["rpcUrl"] == "http://saved:26657"
    assert "maxBodyBytes" in data["server"]
    assert load_config(path).node.rpc_url == "http://saved:26657"


def test_key_conversion_helpers() -> None:
    assert camel_to_snake("broadcastPollInterval") == "broadcast_poll_interval"
    assert snake_to_camel("registry_id") == "registryId"
    assert convert_keys({"node": {"rpcUrl": "x"}}) == {"node": {"rpc_url": "x"}}
    assert convert_to_camel({"node": {"rpc_url": "x"}}) == {"node": {"rpcUrl": "x"}}
