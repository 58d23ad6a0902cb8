# tests/test_provider.py
from types import SimpleNamespace

import pytest
from hexbytes import HexBytes
from web3.datastructures import AttributeDict
from web3.exceptions import BlockNotFound

from blockscope.exceptions import ProviderError
from blockscope.explorer.models import Transaction
from blockscope.explorer.provider import (
    Web3ChainDataProvider,
    block_from_web3,
    transaction_from_web3,
)
from blockscope.monitoring.metrics import MetricsCollector

TX_HASH = HexBytes("0x" + "ab" * 32)

def raw_transaction(drop=(), **overrides):
    fields = {
        "hash": TX_HASH,
        "from": "0x" + "1" * 40,
        "to": "0x" + "2" * 40,
        "value": 5 * 10 ** 17,
        "gas": 21000,
        "gasPrice": 25 * 10 ** 9,
        "nonce": 7,
        "blockNumber": 500,
        "transactionIndex": 0,
        "input": HexBytes("0x"),
    }
    fields.update(overrides)
    for name in drop:
        del fields[name]
    return AttributeDict(fields)

def raw_block(number=500, transactions=None):
    return AttributeDict({
        "number": number,
        "hash": HexBytes(number.to_bytes(32, "big")),
        "parentHash": HexBytes((number - 1).to_bytes(32, "big")),
        "timestamp": 1_700_000_000,
        "gasLimit": 30_000_000,
        "gasUsed": 15_000_000,
        "miner": "0x" + "3" * 40,
        "transactions": transactions if transactions is not None else [TX_HASH],
    })

class FakeEth:
    """Stands in for AsyncWeb3.eth"""

    def __init__(self, height=500, blocks=None, error=None):
        self.height = height
        self.blocks = blocks or {}
        self.error = error
        self.requests = []

    @property
    def block_number(self):
        return self._block_number()

    async def _block_number(self):
        if self.error:
            raise self.error
        return self.height

    async def get_block(self, number, full_transactions=False):
        self.requests.append((number, full_transactions))
        if self.error:
            raise self.error
        return self.blocks.get((number, full_transactions))

class TestWeb3Mapping:
    def test_transaction_from_web3(self):
        tx = transaction_from_web3(raw_transaction(input=HexBytes("0xa9059cbb")))
        assert tx.hash == "0x" + "ab" * 32
        assert tx.from_address == "0x" + "1" * 40
        assert tx.to_address == "0x" + "2" * 40
        assert tx.value == 5 * 10 ** 17
        assert tx.gas_limit == 21000
        assert tx.gas_price == 25 * 10 ** 9
        assert tx.data == "0xa9059cbb"

    def test_contract_creation_and_missing_fields(self):
        tx = transaction_from_web3(raw_transaction(drop=("gasPrice",), to=None, input=HexBytes(b"")))
        assert tx.to_address is None
        assert tx.is_contract_creation
        assert tx.gas_price is None
        assert tx.data == "0x"

    def test_summary_block_keeps_hashes(self):
        block = block_from_web3(raw_block(), full_transactions=False)
        assert block.number == 500
        assert block.hash == "0x" + "00" * 30 + "01f4"
        assert block.transactions == ["0x" + "ab" * 32]
        assert block.full_transactions is False
        assert block.transaction_count == 1

    def test_full_block_embeds_transactions(self):
        block = block_from_web3(raw_block(transactions=[raw_transaction()]), full_transactions=True)
        assert block.full_transactions is True
        assert isinstance(block.transactions[0], Transaction)
        assert block.find_transaction("0x" + "AB" * 32) is block.transactions[0]

class TestWeb3ChainDataProvider:
    @pytest.fixture
    def metrics(self):
        return MetricsCollector()

    def make_provider(self, eth, metrics=None):
        return Web3ChainDataProvider(SimpleNamespace(eth=eth), metrics=metrics)

    @pytest.mark.asyncio
    async def test_current_height(self, metrics):
        provider = self.make_provider(FakeEth(height=19_000_000), metrics)
        assert await provider.get_current_height() == 19_000_000
        assert metrics.registry.get_sample_value(
            "provider_requests_total", {"operation": "get_current_height"}) == 1

    @pytest.mark.asyncio
    async def test_block_requests(self):
        eth = FakeEth(blocks={
            (500, False): raw_block(),
            (500, True): raw_block(transactions=[raw_transaction()]),
        })
        provider = self.make_provider(eth)

        summary = await provider.get_block_summary(500)
        detailed = await provider.get_block_with_transactions(500)
        assert summary.full_transactions is False
        assert detailed.full_transactions is True
        assert eth.requests == [(500, False), (500, True)]

    @pytest.mark.asyncio
    async def test_missing_block_is_provider_error(self, metrics):
        provider = self.make_provider(FakeEth(), metrics)
        with pytest.raises(ProviderError, match="Block 123 not found"):
            await provider.get_block_summary(123)
        assert metrics.registry.get_sample_value(
            "provider_failures_total", {"operation": "get_block_summary"}) == 1

    @pytest.mark.asyncio
    async def test_library_errors_are_wrapped(self):
        provider = self.make_provider(FakeEth(error=BlockNotFound("Block with id: '0x1f4' not found.")))
        with pytest.raises(ProviderError) as excinfo:
            await provider.get_block_with_transactions(500)
        assert "not found" in excinfo.value.message
        assert isinstance(excinfo.value.__cause__, BlockNotFound)

    @pytest.mark.asyncio
    async def test_network_errors_are_wrapped(self):
        provider = self.make_provider(FakeEth(error=ConnectionError("connection refused")))
        with pytest.raises(ProviderError, match="connection refused"):
            await provider.get_current_height()
