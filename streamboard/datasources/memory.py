"""In-process data source for offline runs and tests."""

import logging
from collections import defaultdict
from typing import Optional

from eth_utils import keccak, to_checksum_address

from streamboard.errors import SchemaAlreadyRegisteredError, StreamsError
from streamboard.models import DataStream
from .base import StreamDataSource

logger = logging.getLogger(__name__)

# Hardhat's first well-known dev account
DEFAULT_ACCOUNT = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class InMemoryStreamsDataSource(StreamDataSource):
    """
    Data source that keeps streams in a dict.

    Every write is attributed to ``account``. Writing the same stream id
    twice overwrites the earlier payload, as an on-chain set does.
    """

    def __init__(self, account: str = DEFAULT_ACCOUNT):
        self.account = to_checksum_address(account)
        self._schemas: dict[str, str] = {}
        # (schema id, publisher) -> stream id -> payload
        self._streams: dict[tuple[str, str], dict[str, bytes]] = defaultdict(dict)
        self._tx_count = 0

    @property
    def account_address(self) -> Optional[str]:
        return self.account

    async def compute_schema_id(self, schema: str) -> str:
        return "0x" + keccak(text=schema).hex()

    async def register_data_schema(
        self,
        schema_name: str,
        schema: str,
        parent_schema_id: str,
    ) -> Optional[str]:
        schema_id = await self.compute_schema_id(schema)
        if schema_id in self._schemas:
            raise SchemaAlreadyRegisteredError(
                f"SchemaAlreadyRegistered: {self._schemas[schema_id]}"
            )
        self._schemas[schema_id] = schema_name
        return self._next_tx_hash()

    async def get_all_publisher_data_for_schema(
        self,
        schema_id: str,
        publisher: str,
    ) -> list[bytes]:
        key = (schema_id.lower(), publisher.lower())
        return list(self._streams.get(key, {}).values())

    async def set_streams(self, streams: list[DataStream]) -> str:
        for stream in streams:
            if stream.schemaId.lower() not in self._schemas:
                raise StreamsError(f"Unknown schema {stream.schemaId}")
        for stream in streams:
            key = (stream.schemaId.lower(), self.account.lower())
            self._streams[key][stream.id.lower()] = stream.data
        tx_hash = self._next_tx_hash()
        logger.debug(f"Stored {len(streams)} stream(s) in tx {tx_hash}")
        return tx_hash

    def _next_tx_hash(self) -> str:
        self._tx_count += 1
        return "0x" + keccak(text=f"memory-tx-{self._tx_count}").hex()
