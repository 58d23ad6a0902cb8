# File: src/blockscope/explorer/navigation.py
import logging
from dataclasses import dataclass
from typing import Callable, List

from .models import BlockSummary, Transaction
from .state import (
    BlockDetailScreen,
    BlockListScreen,
    TransactionDetailScreen,
    ViewState,
    ViewStateStore,
)
from ..exceptions import InvariantViolation

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class BlockSelected:
    """Emitted whenever the user opens a block"""
    number: int

BlockSelectedHandler = Callable[[BlockSelected], None]

class NavigationController:
    def __init__(self, store: ViewStateStore):
        self.store = store
        self._handlers: List[BlockSelectedHandler] = []

    def on_block_selected(self, handler: BlockSelectedHandler):
        self._handlers.append(handler)

    def select_block(self, block: BlockSummary) -> ViewState:
        """Open the detail screen for block and request its transactions."""
        state = self.store.get()
        current = state.selected_block
        known = any(b.number == block.number for b in state.blocks)
        if not known and (current is None or current.number != block.number):
            raise InvariantViolation(
                f"Block {block.number} is neither in the block window nor selected"
            )

        def transform(s: ViewState) -> ViewState:
            selected = s.selected_block
            # Reopening the block on display keeps its loaded transactions
            if selected is not None and selected.number == block.number and selected.full_transactions:
                return s.with_screen(BlockDetailScreen(selected))
            return s.with_screen(BlockDetailScreen(block))

        new_state = self.store.set(transform)
        logger.debug(f"Selected block {block.number}")

        event = BlockSelected(block.number)
        for handler in self._handlers:
            handler(event)
        return new_state

    def select_transaction(self, tx: Transaction) -> ViewState:
        state = self.store.get()
        block = state.selected_block
        if block is None:
            raise InvariantViolation("Cannot select a transaction without a selected block")
        if block.find_transaction(tx.hash) is None:
            raise InvariantViolation(
                f"Transaction {tx.hash} does not belong to block {block.number}"
            )

        logger.debug(f"Selected transaction {tx.hash}")
        return self.store.set(
            lambda s: s.with_screen(TransactionDetailScreen(s.selected_block, tx))
        )

    def back_to_blocks(self) -> ViewState:
        return self.store.set(lambda s: s.with_screen(BlockListScreen()))

    def back_to_transactions(self) -> ViewState:
        if self.store.get().selected_transaction is None:
            raise InvariantViolation("No transaction is selected")
        return self.store.set(lambda s: s.with_screen(BlockDetailScreen(s.selected_block)))

