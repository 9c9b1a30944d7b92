"""Configuration schema using Pydantic.

Single data model for gateway settings and their defaults; optionally persisted
to ~/.cosmosgate/config.json and overridable from the environment.
"""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RPC_URL = "http://localhost:26657"


class NodeConfig(BaseModel):
    """Remote CometBFT node used for both broadcast and queries."""
    rpc_url: str = DEFAULT_RPC_URL
    request_timeout: float = 30.0  # Per HTTP call to the node, seconds
    broadcast_timeout: float = 60.0  # Wait for block inclusion after broadcast_tx_sync
    broadcast_poll_interval: float = 3.0


class ServerConfig(BaseModel):
    """HTTP boundary settings."""
    host: str = "0.0.0.0"
    port: int = 3001
    max_body_bytes: int = 100 * 1024 * 1024
    disconnect_poll_interval: float = 0.5  # How often in-flight requests check for client disconnect


class QueriesConfig(BaseModel):
    """Fixed inputs for the built-in example query routes."""
    registry_id: str = "eland1962wfhny5xkeyknf75fx3cuh5j3aj3ha9e383s"


class Config(BaseSettings):
    """Root configuration for cosmosgate."""
    node: NodeConfig = Field(default_factory=NodeConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    queries: QueriesConfig = Field(default_factory=QueriesConfig)

    model_config = SettingsConfigDict(
        env_prefix="COSMOSGATE_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Config file values arrive as init kwargs; COSMOSGATE_* variables win over them.
        return env_settings, init_settings, dotenv_settings, file_secret_settings
