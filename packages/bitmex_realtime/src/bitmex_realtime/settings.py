"""Connection settings for realtime sessions."""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


MAINNET_ENDPOINT = "wss://www.bitmex.com/realtime"
TESTNET_ENDPOINT = "wss://testnet.bitmex.com/realtime"


class RealtimeSettings(BaseSettings):
    """Endpoint, timing and optional credentials for a session.

    Environment variables (BITMEX_ prefix):
    - BITMEX_ENDPOINT / BITMEX_TESTNET_ENDPOINT: websocket URLs
    - BITMEX_TESTNET: Use the testnet endpoint (default: false)
    - BITMEX_READ_DEADLINE: Seconds a read may block before the session fails (default: 300)
    - BITMEX_PING_INTERVAL: Seconds between keep-alive pings (default: 5)
    - BITMEX_PING_WRITE_TIMEOUT: Write timeout for a ping (default: 5)
    - BITMEX_AUTH_TTL_SECONDS: Lifetime of the auth signature (default: 86400)
    - BITMEX_CONNECT_TIMEOUT: Dial timeout (default: 10)
    - BITMEX_API_KEY / BITMEX_API_SECRET: Credentials for private tables
    """

    endpoint: str = MAINNET_ENDPOINT
    testnet_endpoint: str = TESTNET_ENDPOINT
    testnet: bool = False

    read_deadline: float = Field(default=300.0, gt=0)
    ping_interval: float = Field(default=5.0, gt=0)
    ping_write_timeout: float = Field(default=5.0, gt=0)
    auth_ttl_seconds: int = Field(default=24 * 60 * 60, gt=0)
    connect_timeout: float = Field(default=10.0, gt=0)

    api_key: Optional[SecretStr] = None
    api_secret: Optional[SecretStr] = None

    model_config = SettingsConfigDict(
        env_prefix="BITMEX_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def url(self) -> str:
        """Endpoint selected by the testnet flag."""
        return self.testnet_endpoint if self.testnet else self.endpoint

    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_secret)
