"""Somnia data streams data source over JSON-RPC."""

import logging
import asyncio
import itertools
from typing import Optional

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import function_signature_to_4byte_selector, to_checksum_address, to_hex

from streamboard.config import DEFAULT_RPC_URL
from streamboard.errors import (
    SchemaAlreadyRegisteredError,
    StreamsError,
    StreamsRpcError,
)
from streamboard.models import DataStream
from .base import StreamDataSource

logger = logging.getLogger(__name__)

# RPC constants
REQUEST_TIMEOUT = 30.0
MAX_RETRIES = 10
RETRY_DELAY = 2.0
RECEIPT_POLL_INTERVAL = 1.0
RECEIPT_TIMEOUT = 120.0
GAS_MARGIN_PCT = 20

# Streams contract ABI
COMPUTE_SCHEMA_ID = "computeSchemaId(string)"
REGISTER_DATA_SCHEMAS = "registerDataSchemas((string,string,bytes32)[])"
SET_STREAMS = "esstores((bytes32,bytes32,bytes)[])"
GET_ALL_PUBLISHER_DATA = "getAllPublisherDataForSchema(bytes32,address)"
SCHEMA_ALREADY_REGISTERED = "SchemaAlreadyRegistered()"


def _selector(signature: str) -> bytes:
    return function_signature_to_4byte_selector(signature)


def _bytes32(value: str) -> bytes:
    raw = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    if len(raw) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(raw)}: {value}")
    return raw


def _is_already_registered(error: StreamsRpcError) -> bool:
    """Match the revert by error name in the message or by its selector in the data."""
    if "SchemaAlreadyRegistered" in str(error):
        return True
    selector = to_hex(_selector(SCHEMA_ALREADY_REGISTERED))
    return isinstance(error.data, str) and error.data.lower().startswith(selector)


class SomniaStreamsDataSource(StreamDataSource):
    """
    Data source implementation using the Somnia streams contract.

    Reads are ``eth_call``s; writes are legacy transactions signed locally
    with the configured private key.

    Limitations:
    - Without a private key the source is read-only
    - Reads return the complete publisher history in one call
    """

    def __init__(
        self,
        contract_address: str,
        rpc_url: str = DEFAULT_RPC_URL,
        private_key: Optional[str] = None,
    ):
        """
        Initialize Somnia data source.

        Args:
            contract_address: Streams contract address
            rpc_url: JSON-RPC endpoint of the chain
            private_key: Hex private key used to sign writes
        """
        self.rpc_url = rpc_url
        self.contract_address = to_checksum_address(contract_address)
        self._account: Optional[LocalAccount] = (
            Account.from_key(private_key) if private_key else None
        )
        self._client: Optional[httpx.AsyncClient] = None
        self._chain_id: Optional[int] = None
        self._ids = itertools.count(1)

    @property
    def account_address(self) -> Optional[str]:
        return self._account.address if self._account else None

    async def _make_request(self, payload: dict, retry_count: int = 0) -> dict:
        """
        Make HTTP request with timeout handling and retries.

        Args:
            payload: JSON-RPC request body
            retry_count: Current retry attempt

        Returns:
            Response JSON data
        """
        client = await self._get_client()
        method = payload.get("method")

        try:
            response = await client.post(self.rpc_url, json=payload, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            if retry_count < MAX_RETRIES:
                logger.warning(
                    f"RPC {method} timed out (attempt {retry_count + 1}/{MAX_RETRIES}). "
                    f"Retrying in {RETRY_DELAY}s..."
                )
                await asyncio.sleep(RETRY_DELAY)
                return await self._make_request(payload, retry_count + 1)
            logger.error(f"RPC {method} failed after {MAX_RETRIES} retries: {e}")
            raise

        except httpx.HTTPStatusError as e:
            # Handle rate limiting (429 Too Many Requests)
            if e.response.status_code == 429 and retry_count < MAX_RETRIES:
                retry_delay = 0.5
                logger.warning(
                    f"Rate limited (429) on {method} (attempt {retry_count + 1}/{MAX_RETRIES}). "
                    f"Retrying in {retry_delay}s..."
                )
                await asyncio.sleep(retry_delay)
                return await self._make_request(payload, retry_count + 1)

            logger.error(f"HTTP error {e.response.status_code} for {method}: {e}")
            raise

    async def _rpc(self, method: str, params: list):
        """Call a JSON-RPC method and return its result."""
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        data = await self._make_request(payload)

        error = data.get("error")
        if error:
            raise StreamsRpcError(
                error.get("message", "RPC error"),
                code=error.get("code"),
                data=error.get("data"),
            )
        return data.get("result")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Content-Type": "application/json"},
                timeout=REQUEST_TIMEOUT,
            )
        return self._client

    async def _call(self, calldata: bytes) -> bytes:
        """Run a read-only contract call at the latest block."""
        result = await self._rpc(
            "eth_call",
            [{"to": self.contract_address, "data": to_hex(calldata)}, "latest"],
        )
        return bytes.fromhex((result or "0x")[2:])

    async def _get_chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(await self._rpc("eth_chainId", []), 16)
        return self._chain_id

    async def _send_transaction(self, calldata: bytes) -> str:
        """Sign and broadcast a contract call, returning its hash."""
        if self._account is None:
            raise StreamsError("No private key configured; this data source is read-only")

        sender = self._account.address
        call = {"from": sender, "to": self.contract_address, "data": to_hex(calldata)}

        chain_id = await self._get_chain_id()
        nonce = int(await self._rpc("eth_getTransactionCount", [sender, "pending"]), 16)
        gas_price = int(await self._rpc("eth_gasPrice", []), 16)
        gas = int(await self._rpc("eth_estimateGas", [call]), 16)

        signed = self._account.sign_transaction({
            "chainId": chain_id,
            "nonce": nonce,
            "to": self.contract_address,
            "value": 0,
            "gas": gas + gas * GAS_MARGIN_PCT // 100,
            "gasPrice": gas_price,
            "data": calldata,
        })
        return await self._rpc("eth_sendRawTransaction", [to_hex(signed.raw_transaction)])

    async def compute_schema_id(self, schema: str) -> str:
        """Ask the contract for the id of a schema string."""
        calldata = _selector(COMPUTE_SCHEMA_ID) + encode(["string"], [schema])
        raw = await self._call(calldata)
        try:
            (schema_id,) = decode(["bytes32"], raw)
        except DecodingError as e:
            raise StreamsError(f"Unexpected computeSchemaId result: {to_hex(raw)}") from e
        return to_hex(schema_id)

    async def register_data_schema(
        self,
        schema_name: str,
        schema: str,
        parent_schema_id: str,
    ) -> Optional[str]:
        """
        Register a schema.

        Gas estimation reverts with SchemaAlreadyRegistered for a known
        schema; that revert is surfaced as SchemaAlreadyRegisteredError.
        """
        registration = (schema_name, schema, _bytes32(parent_schema_id))
        calldata = _selector(REGISTER_DATA_SCHEMAS) + encode(
            ["(string,string,bytes32)[]"], [[registration]]
        )
        try:
            return await self._send_transaction(calldata)
        except StreamsRpcError as e:
            if _is_already_registered(e):
                raise SchemaAlreadyRegisteredError(str(e)) from e
            raise

    async def get_all_publisher_data_for_schema(
        self,
        schema_id: str,
        publisher: str,
    ) -> list[bytes]:
        """Retrieve every payload a publisher wrote under a schema."""
        calldata = _selector(GET_ALL_PUBLISHER_DATA) + encode(
            ["bytes32", "address"],
            [_bytes32(schema_id), to_checksum_address(publisher)],
        )
        raw = await self._call(calldata)
        if not raw:
            return []
        try:
            (payloads,) = decode(["bytes[]"], raw)
        except DecodingError as e:
            raise StreamsError(f"Unexpected publisher data result: {e}") from e

        logger.debug(f"Fetched {len(payloads)} payloads for publisher {publisher}")
        return list(payloads)

    async def set_streams(self, streams: list[DataStream]) -> str:
        """Write encoded records in one transaction."""
        rows = [(_bytes32(s.id), _bytes32(s.schemaId), s.data) for s in streams]
        calldata = _selector(SET_STREAMS) + encode(["(bytes32,bytes32,bytes)[]"], [rows])
        return await self._send_transaction(calldata)

    async def wait_for_receipt(self, tx_hash: str) -> dict:
        """Poll for the receipt of a transaction until it is mined."""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + RECEIPT_TIMEOUT

        while True:
            receipt = await self._rpc("eth_getTransactionReceipt", [tx_hash])
            if receipt:
                if receipt.get("status") == "0x0":
                    raise StreamsError(f"Transaction {tx_hash} reverted")
                return receipt
            if loop.time() >= deadline:
                raise StreamsError(
                    f"Transaction {tx_hash} not mined after {RECEIPT_TIMEOUT}s"
                )
            await asyncio.sleep(RECEIPT_POLL_INTERVAL)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
