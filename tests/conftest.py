# tests/conftest.py
import asyncio
from typing import Dict, List, Tuple

import pytest

from blockscope.exceptions import ProviderError
from blockscope.explorer.models import BlockSummary, Transaction
from blockscope.explorer.provider import ChainDataProvider

def make_transaction(block_number: int, index: int, **overrides) -> Transaction:
    fields = dict(
        hash=f"0x{block_number:08x}{index:056x}",
        from_address=f"0x{'a' * 39}{index % 10}",
        to_address=f"0x{'b' * 39}{index % 10}",
        value=10 ** 18 + index,
        gas_limit=21000,
        gas_price=30 * 10 ** 9,
        nonce=index,
        block_number=block_number,
        transaction_index=index,
        data="0x",
    )
    fields.update(overrides)
    return Transaction(**fields)

def make_block(number: int, full: bool = False, tx_count: int = 3, transactions=None) -> BlockSummary:
    if transactions is None:
        transactions = [make_transaction(number, i) for i in range(tx_count)]
    if not full:
        transactions = [tx.hash if isinstance(tx, Transaction) else tx for tx in transactions]
    return BlockSummary(
        number=number,
        hash=f"0x{number:064x}",
        parent_hash=f"0x{number - 1:064x}",
        timestamp=1_700_000_000 + number * 12,
        gas_limit=30_000_000,
        gas_used=12_345_678,
        miner="0x" + "c" * 40,
        transactions=transactions,
        full_transactions=full,
    )

class FakeChainProvider(ChainDataProvider):
    """In-memory provider recording every call it receives"""

    def __init__(self, height: int = 1000):
        self.height = height
        self.calls: List[Tuple[str, object]] = []
        self.failing_summaries: Dict[int, str] = {}
        self.failing_details: Dict[int, str] = {}
        self.height_error = None
        self.detail_transactions: Dict[int, list] = {}
        self.gates: Dict[int, asyncio.Event] = {}

    def calls_for(self, operation: str) -> list:
        return [arg for op, arg in self.calls if op == operation]

    async def get_current_height(self) -> int:
        self.calls.append(("get_current_height", None))
        if self.height_error:
            raise ProviderError(self.height_error)
        return self.height

    async def get_block_summary(self, number: int) -> BlockSummary:
        self.calls.append(("get_block_summary", number))
        await asyncio.sleep(0)
        if number in self.failing_summaries:
            raise ProviderError(self.failing_summaries[number])
        return make_block(number)

    async def get_block_with_transactions(self, number: int) -> BlockSummary:
        self.calls.append(("get_block_with_transactions", number))
        if number in self.gates:
            await self.gates[number].wait()
        if number in self.failing_details:
            raise ProviderError(self.failing_details[number])
        return make_block(number, full=True, transactions=self.detail_transactions.get(number))

@pytest.fixture
def provider():
    return FakeChainProvider()
