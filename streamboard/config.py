"""Application configuration."""

import os
from dataclasses import dataclass
from typing import Optional

from streamboard.errors import ConfigError

# Somnia testnet ("Dream") public RPC
DEFAULT_RPC_URL = "https://dream-rpc.somnia.network"

PLAYER_SCHEMA = "address player, uint256 score, uint256 playTime"

BACKENDS = ("somnia", "memory")


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # API settings
    host: str = "0.0.0.0"
    port: int = 3000

    # Chain access
    rpc_url: str = DEFAULT_RPC_URL
    streams_contract: Optional[str] = None
    private_key: Optional[str] = None
    streams_backend: str = "somnia"

    # Whose records the subscriber and /api/data read
    publisher_wallet: Optional[str] = None

    # Schema
    schema: str = PLAYER_SCHEMA
    schema_name: str = "player_score"

    # Loop timing (seconds)
    publish_interval: float = 5.0
    poll_interval: float = 3.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        try:
            return cls(
                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
                rpc_url=os.getenv("RPC_URL", DEFAULT_RPC_URL),
                streams_contract=os.getenv("STREAMS_CONTRACT") or None,
                private_key=os.getenv("PRIVATE_KEY") or None,
                streams_backend=os.getenv("STREAMS_BACKEND", "somnia").lower(),
                publisher_wallet=os.getenv("PUBLISHER_WALLET") or None,
                schema_name=os.getenv("SCHEMA_NAME", "player_score"),
                publish_interval=float(os.getenv("PUBLISH_INTERVAL", "5")),
                poll_interval=float(os.getenv("POLL_INTERVAL", "3")),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

    def validate(self, require_signer: bool = False) -> None:
        """
        Check that the settings needed by an entry point are present.

        Args:
            require_signer: True when the caller will send transactions

        Raises:
            ConfigError: describing the first problem found
        """
        if self.streams_backend not in BACKENDS:
            raise ConfigError(
                f"Unknown STREAMS_BACKEND {self.streams_backend!r}, "
                f"expected one of {', '.join(BACKENDS)}"
            )
        if self.streams_backend == "somnia" and not self.streams_contract:
            raise ConfigError("STREAMS_CONTRACT is required for the somnia backend")
        if require_signer and self.streams_backend == "somnia" and not self.private_key:
            raise ConfigError("PRIVATE_KEY is required to publish")
        if self.publish_interval <= 0 or self.poll_interval <= 0:
            raise ConfigError("PUBLISH_INTERVAL and POLL_INTERVAL must be positive")
