# File: src/blockscope/explorer/models.py
from pydantic import BaseModel, ConfigDict
from typing import List, Optional, Union

class Transaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    from_address: str
    to_address: Optional[str] = None  # None for contract creation
    value: int = 0  # wei
    gas_limit: int
    gas_price: Optional[int] = None
    nonce: int
    block_number: int
    transaction_index: int
    data: str = "0x"

    @property
    def is_contract_creation(self) -> bool:
        return self.to_address is None

# Summary blocks only carry the hashes of their transactions
TransactionRef = str

class BlockSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    hash: str
    parent_hash: str
    timestamp: int
    gas_limit: int
    gas_used: Optional[int] = None
    miner: str
    transactions: List[Union[Transaction, TransactionRef]] = []
    full_transactions: bool = False

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def find_transaction(self, tx_hash: str) -> Optional[Transaction]:
        """Return the embedded transaction with the given hash, if loaded."""
        for tx in self.transactions:
            if isinstance(tx, Transaction) and tx.hash.lower() == tx_hash.lower():
                return tx
        return None
