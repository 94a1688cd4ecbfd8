"""Abstract base class for stream data sources."""

from abc import ABC, abstractmethod
from typing import Optional

from streamboard.models import DataStream


class StreamDataSource(ABC):
    """
    Abstract interface for a schema-keyed data streams network.

    This abstraction allows swapping the on-chain Somnia streams backend
    for an in-process store with no other changes.
    """

    @property
    def account_address(self) -> Optional[str]:
        """Address that signs writes, None for read-only sources."""
        return None

    @abstractmethod
    async def compute_schema_id(self, schema: str) -> str:
        """
        Compute the identifier of a schema string.

        Args:
            schema: Schema string, e.g. ``"address player, uint256 score"``

        Returns:
            bytes32 schema id as 0x-prefixed hex
        """
        pass

    @abstractmethod
    async def register_data_schema(
        self,
        schema_name: str,
        schema: str,
        parent_schema_id: str,
    ) -> Optional[str]:
        """
        Register a schema under a human-readable id.

        Args:
            schema_name: Registration id (e.g. ``player_score``)
            schema: Schema string
            parent_schema_id: bytes32 id of the parent schema, zero for none

        Returns:
            Transaction hash, or None if nothing had to be sent

        Raises:
            SchemaAlreadyRegisteredError: If the schema already exists
        """
        pass

    @abstractmethod
    async def get_all_publisher_data_for_schema(
        self,
        schema_id: str,
        publisher: str,
    ) -> list[bytes]:
        """
        Retrieve every payload a publisher wrote under a schema.

        Args:
            schema_id: bytes32 schema id
            publisher: Publisher address (0x...)

        Returns:
            Encoded payloads in write order
        """
        pass

    @abstractmethod
    async def set_streams(self, streams: list[DataStream]) -> str:
        """
        Write encoded records to their streams.

        Args:
            streams: Records to write

        Returns:
            Transaction hash
        """
        pass

    async def wait_for_receipt(self, tx_hash: str) -> dict:
        """
        Wait until a transaction is mined.

        Sources without transactions return an empty receipt.
        """
        return {}

    async def close(self) -> None:
        """
        Clean up resources (e.g., close HTTP sessions).

        Override this if the data source holds resources that need cleanup.
        """
        pass
