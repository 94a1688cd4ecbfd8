"""Application context shared by the API and the publisher/subscriber loops."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from streamboard.config import Config
from streamboard.datasources import (
    InMemoryStreamsDataSource,
    SchemaEncoder,
    SomniaStreamsDataSource,
    StreamDataSource,
    ZERO_BYTES32,
)
from streamboard.errors import SchemaAlreadyRegisteredError

logger = logging.getLogger(__name__)


def create_datasource(config: Config) -> StreamDataSource:
    """Build the data source selected by ``STREAMS_BACKEND``."""
    if config.streams_backend == "memory":
        return InMemoryStreamsDataSource()
    return SomniaStreamsDataSource(
        contract_address=config.streams_contract,
        rpc_url=config.rpc_url,
        private_key=config.private_key,
    )


@dataclass
class AppContext:
    """
    Everything a request handler or poll loop needs to reach the stream.

    Built once per process and passed explicitly. ``schema_id`` is filled
    in by ``bootstrap``.
    """
    config: Config
    datasource: StreamDataSource
    encoder: SchemaEncoder = field(init=False)
    schema_id: Optional[str] = None

    def __post_init__(self):
        self.encoder = SchemaEncoder(self.config.schema)

    @classmethod
    def create(cls, config: Config, datasource: Optional[StreamDataSource] = None) -> "AppContext":
        return cls(config=config, datasource=datasource or create_datasource(config))

    async def bootstrap(self, register: bool = True) -> str:
        """
        Compute the schema id and make sure the schema is registered.

        Args:
            register: Send the registration when a signer is available

        Returns:
            The schema id
        """
        self.schema_id = await self.datasource.compute_schema_id(self.config.schema)
        logger.info(f"Schema ID: {self.schema_id}")

        if register and self.datasource.account_address:
            await self.register_schema()
        return self.schema_id

    async def register_schema(self) -> None:
        """Register the schema, treating an existing registration as success."""
        try:
            tx_hash = await self.datasource.register_data_schema(
                self.config.schema_name,
                self.config.schema,
                ZERO_BYTES32,
            )
        except SchemaAlreadyRegisteredError:
            logger.warning("Schema already registered. Continuing...")
            return

        if tx_hash:
            await self.datasource.wait_for_receipt(tx_hash)
            logger.info(f"Schema registered: {tx_hash}")
        else:
            logger.info("Schema already registered - no action required.")

    async def close(self) -> None:
        await self.datasource.close()
