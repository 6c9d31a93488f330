"""
Chain Query Gateway: the read-only slice of JSON-RPC the resolver needs.

``Web3Gateway`` is the production adapter built on web3.py's async client.
Anything that implements the three coroutines of ``ChainQueryGateway`` can be
handed to the resolver instead (the tests use an in-memory fake).
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

import aiohttp
from eth_utils import to_checksum_address
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from .errors import ChainQueryError

logger = logging.getLogger(__name__)

# Exceptions web3.py and its transport raise for a failed or garbled read
TRANSPORT_ERRORS = (
    Web3Exception,
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ValueError,
)


@dataclass(frozen=True)
class LogEntry:
    """One emitted event record"""
    block_number: int
    address: str
    data: bytes
    topics: List[bytes] = field(default_factory=list)
    transaction_hash: Optional[bytes] = None


class ChainQueryGateway(Protocol):
    async def call_contract_method(self, contract_address: str, abi: List[Dict[str, Any]],
                                   method_name: str, args: List[Any]) -> Any:
        ...

    async def get_bytecode(self, address: str) -> bytes:
        ...

    async def get_logs(self, from_block: int, to_block: int, contract_address: str,
                       topics: List[str]) -> List[LogEntry]:
        ...


class Web3Gateway:
    """ChainQueryGateway over an AsyncWeb3 HTTP connection.

    Every failure of the underlying client is re-raised as ChainQueryError.
    There are no retries; timeouts are left to the HTTP transport.
    """

    def __init__(self, rpc_url: str, timeout: float = 30, w3=None):
        self.rpc_url = rpc_url
        if w3 is None:
            provider = AsyncHTTPProvider(
                rpc_url,
                request_kwargs={"timeout": aiohttp.ClientTimeout(total=timeout)},
            )
            w3 = AsyncWeb3(provider)
        self.w3 = w3

    @classmethod
    def from_config(cls, config):
        return cls(config["rpc_url"], timeout=config.get("rpc_timeout", 30))

    async def call_contract_method(self, contract_address, abi, method_name, args):
        operation = f"{method_name}() on {contract_address}"
        logger.debug("eth_call %s args=%r", operation, args)
        address = to_checksum_address(contract_address)
        try:
            contract = self.w3.eth.contract(address=address, abi=abi)
            result = await contract.functions[method_name](*args).call()
        except TRANSPORT_ERRORS as e:
            raise ChainQueryError(operation, str(e)) from e
        logger.debug("eth_call %s -> %r", operation, result)
        return result

    async def get_bytecode(self, address):
        checksummed = to_checksum_address(address)
        logger.debug("eth_getCode %s", checksummed)
        try:
            code = await self.w3.eth.get_code(checksummed)
        except TRANSPORT_ERRORS as e:
            raise ChainQueryError(f"getCode({address})", str(e)) from e
        return bytes(code)

    async def get_logs(self, from_block, to_block, contract_address, topics):
        params = {
            "fromBlock": from_block,
            "toBlock": to_block,
            "address": to_checksum_address(contract_address),
            "topics": topics,
        }
        logger.debug("eth_getLogs %r", params)
        try:
            raw_logs = await self.w3.eth.get_logs(params)
        except TRANSPORT_ERRORS as e:
            raise ChainQueryError(f"getLogs({from_block}-{to_block})", str(e)) from e
        logger.debug("eth_getLogs returned %d entries", len(raw_logs))
        return [self._to_log_entry(log) for log in raw_logs]

    @staticmethod
    def _to_log_entry(log):
        tx_hash = log.get("transactionHash")
        return LogEntry(
            block_number=int(log["blockNumber"]),
            address=log["address"],
            data=bytes(HexBytes(log["data"])),
            topics=[bytes(HexBytes(topic)) for topic in log.get("topics", [])],
            transaction_hash=bytes(HexBytes(tx_hash)) if tx_hash is not None else None,
        )
