"""Record service for reading and writing player score records."""

import logging
import time
from typing import TYPE_CHECKING, Optional, Union

from eth_utils import is_address

from streamboard.datasources.schema import stream_id
from streamboard.errors import ConfigError, InvalidAddressError
from streamboard.models import DataStream, Record
from .normalization import normalize_many

if TYPE_CHECKING:
    from streamboard.context import AppContext

logger = logging.getLogger(__name__)


class RecordService:
    """Service for moving Records between the app and the stream."""

    def __init__(self, context: "AppContext"):
        self.context = context

    async def fetch_records(self, publisher: Optional[str] = None) -> list[Record]:
        """
        Read and decode every record a publisher wrote under the schema.

        Args:
            publisher: Publisher address, defaults to the configured wallet

        Returns:
            Records in stream order

        Raises:
            InvalidAddressError: If the given publisher is not an address
            ConfigError: If no valid publisher is given or configured
            MalformedRecordError: If a payload does not decode to a record
        """
        if publisher:
            if not is_address(publisher):
                raise InvalidAddressError(f"publisher is not a valid address: {publisher!r}")
        else:
            publisher = self.context.config.publisher_wallet
            if not publisher:
                raise ConfigError("No publisher address given and PUBLISHER_WALLET is unset")
            if not is_address(publisher):
                raise ConfigError(f"PUBLISHER_WALLET is not a valid address: {publisher!r}")

        payloads = await self.context.datasource.get_all_publisher_data_for_schema(
            self.context.schema_id, publisher
        )
        encoder = self.context.encoder
        return normalize_many(encoder.decode_data(payload) for payload in payloads)

    async def publish(
        self,
        player: str,
        score: Union[int, str],
        play_time: Union[int, str],
        stream_key: Optional[str] = None,
    ) -> str:
        """
        Encode one record and write it to its own stream.

        Args:
            player: Player address
            score: Score, int or decimal string
            play_time: Play time in seconds, int or decimal string
            stream_key: Text used for the stream id, defaults to
                ``player-<epoch ns>``

        Returns:
            Transaction hash
        """
        data = self.context.encoder.encode_data([
            {"name": "player", "value": player, "type": "address"},
            {"name": "score", "value": score, "type": "uint256"},
            {"name": "playTime", "value": play_time, "type": "uint256"},
        ])

        if stream_key is None:
            stream_key = f"player-{time.time_ns()}"

        streams = [
            DataStream(
                id=stream_id(stream_key),
                schemaId=self.context.schema_id,
                data=data,
            )
        ]

        tx_hash = await self.context.datasource.set_streams(streams)
        logger.info(
            f"Published: {player} | Score {score} | PlayTime {play_time}s | Tx {tx_hash}"
        )
        return tx_hash
