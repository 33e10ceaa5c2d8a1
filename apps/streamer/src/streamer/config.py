"""Configuration models for the streamer.

Loads streamer configuration from YAML file with Pydantic validation.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, SecretStr


class AccountConfig(BaseModel):
    """API credentials for private tables.

    Optional: BITMEX_API_KEY and BITMEX_API_SECRET are used when absent.
    """

    api_key: SecretStr = Field(..., description="BitMEX API key ID")
    api_secret: SecretStr = Field(..., description="BitMEX API secret")


class StreamerConfig(BaseModel):
    """Root configuration for the streamer."""

    public_channels: list[str] = Field(
        default_factory=list,
        description="Public tables (e.g., ['trade', 'orderBook10'])",
    )
    private_channels: list[str] = Field(
        default_factory=list,
        description="Private tables (e.g., ['order', 'execution']), need credentials",
    )
    symbols: list[str] = Field(
        default_factory=list,
        description="Symbols that scope each public channel (e.g., ['XBTUSD'])",
    )
    testnet: bool = Field(
        default=False,
        description="Use testnet endpoint (default: mainnet)",
    )
    queue_size: int = Field(
        default=1000, ge=1, description="Capacity of the shared event queue"
    )

    account: Optional[AccountConfig] = None


def load_config(config_path: Optional[str] = None) -> StreamerConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, checks:
            1. STREAMER_CONFIG_PATH environment variable
            2. conf/streamer.yaml
            3. streamer.yaml

    Returns:
        Validated StreamerConfig.

    Raises:
        FileNotFoundError: If no config file found.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.environ.get("STREAMER_CONFIG_PATH")

    if config_path is None:
        search_paths = [
            Path("conf/streamer.yaml"),
            Path("streamer.yaml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path is None:
        raise FileNotFoundError(
            "No config file found. Set STREAMER_CONFIG_PATH or create conf/streamer.yaml"
        )

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping in {config_path}")

    return StreamerConfig(**data)
