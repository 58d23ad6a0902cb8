# File: src/blockscope/explorer/provider.py
import time
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Mapping, Optional

from web3 import AsyncWeb3, Web3

from .models import BlockSummary, Transaction
from ..exceptions import ProviderError

logger = logging.getLogger(__name__)

class ChainDataProvider(ABC):
    """Read-only access to chain data used by the explorer"""

    @abstractmethod
    async def get_current_height(self) -> int:
        """Latest block number known to the provider."""

    @abstractmethod
    async def get_block_summary(self, number: int) -> BlockSummary:
        """Block by number with transaction hashes only."""

    @abstractmethod
    async def get_block_with_transactions(self, number: int) -> BlockSummary:
        """Block by number with full transaction objects."""

def _hex(value: Any) -> str:
    if isinstance(value, str):
        return value
    return Web3.to_hex(value)

def transaction_from_web3(raw: Mapping[str, Any]) -> Transaction:
    """Convert a web3 transaction AttributeDict into a Transaction."""
    data = raw.get("input")
    return Transaction(
        hash=_hex(raw["hash"]),
        from_address=raw["from"],
        to_address=raw.get("to") or None,
        value=int(raw.get("value") or 0),
        gas_limit=int(raw["gas"]),
        gas_price=raw.get("gasPrice"),
        nonce=int(raw["nonce"]),
        block_number=int(raw["blockNumber"]),
        transaction_index=int(raw["transactionIndex"]),
        data=_hex(data) if data else "0x",
    )

def block_from_web3(raw: Mapping[str, Any], full_transactions: bool) -> BlockSummary:
    """Convert a web3 block AttributeDict into a BlockSummary."""
    if full_transactions:
        transactions = [transaction_from_web3(tx) for tx in raw.get("transactions", [])]
    else:
        transactions = [_hex(tx_hash) for tx_hash in raw.get("transactions", [])]

    return BlockSummary(
        number=int(raw["number"]),
        hash=_hex(raw["hash"]),
        parent_hash=_hex(raw["parentHash"]),
        timestamp=int(raw["timestamp"]),
        gas_limit=int(raw["gasLimit"]),
        gas_used=raw.get("gasUsed"),
        miner=raw.get("miner", ""),
        transactions=transactions,
        full_transactions=full_transactions,
    )

class Web3ChainDataProvider(ChainDataProvider):
    def __init__(self, w3: AsyncWeb3, metrics=None):
        self.w3 = w3
        self.metrics = metrics

    @classmethod
    def from_url(cls, rpc_url: str, metrics=None) -> 'Web3ChainDataProvider':
        """Build a provider talking JSON-RPC over HTTP to rpc_url"""
        return cls(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url)), metrics=metrics)

    async def get_current_height(self) -> int:
        async def fetch():
            return await self.w3.eth.block_number
        return int(await self._request("get_current_height", fetch))

    async def get_block_summary(self, number: int) -> BlockSummary:
        async def fetch():
            raw = await self.w3.eth.get_block(number, full_transactions=False)
            return self._to_block(raw, number, full_transactions=False)
        return await self._request("get_block_summary", fetch)

    async def get_block_with_transactions(self, number: int) -> BlockSummary:
        async def fetch():
            raw = await self.w3.eth.get_block(number, full_transactions=True)
            return self._to_block(raw, number, full_transactions=True)
        return await self._request("get_block_with_transactions", fetch)

    def _to_block(self, raw: Optional[Mapping[str, Any]], number: int, full_transactions: bool) -> BlockSummary:
        if raw is None:
            raise ProviderError(f"Block {number} not found")
        return block_from_web3(raw, full_transactions)

    async def _request(self, operation: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        """Run one provider call, recording metrics and normalizing failures"""
        started = time.monotonic()
        try:
            result = await fetch()
        except ProviderError:
            self._record_failure(operation)
            raise
        except Exception as e:
            self._record_failure(operation)
            raise ProviderError(str(e) or e.__class__.__name__) from e
        finally:
            if self.metrics:
                self.metrics.observe_request(operation, time.monotonic() - started)

        logger.debug(f"{operation} completed in {time.monotonic() - started:.3f}s")
        return result

    def _record_failure(self, operation: str):
        logger.debug(f"{operation} failed")
        if self.metrics:
            self.metrics.record_failure(operation)
