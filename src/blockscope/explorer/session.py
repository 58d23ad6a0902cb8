# File: src/blockscope/explorer/session.py
import asyncio
import logging
from typing import Optional

from .loader import DataLoader
from .models import BlockSummary, Transaction
from .navigation import NavigationController
from .provider import ChainDataProvider
from .renderer import ViewNode, render
from .state import ViewState, ViewStateStore
from ..utils.config import Config

logger = logging.getLogger(__name__)

class ExplorerSession:
    """One application session: a provider plus the state it feeds"""

    def __init__(
        self,
        provider: ChainDataProvider,
        window_size: int = Config.WINDOW_SIZE,
        metrics=None
    ):
        self.provider = provider
        self.store = ViewStateStore()
        self.navigation = NavigationController(self.store)
        self.loader = DataLoader(self.store, provider, window_size=window_size, metrics=metrics)
        self.navigation.on_block_selected(self.loader.on_block_selected)
        self._initial_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> ViewState:
        return self.store.get()

    def start(self) -> asyncio.Task:
        """Kick off the initial block window load in the background."""
        if self._initial_task is None:
            logger.info("Starting explorer session")
            self._initial_task = asyncio.get_running_loop().create_task(
                self.loader.load_recent_blocks()
            )
        return self._initial_task

    async def drain(self) -> None:
        """Wait until no load started by this session is still running."""
        if self._initial_task is not None:
            await self._initial_task
        await self.loader.drain()

    def find_block(self, number: int) -> Optional[BlockSummary]:
        """Resolve a block number against the selection and the block window."""
        state = self.state
        selected = state.selected_block
        if selected is not None and selected.number == number:
            return selected
        return next((b for b in state.blocks if b.number == number), None)

    def find_transaction(self, tx_hash: str) -> Optional[Transaction]:
        block = self.state.selected_block
        if block is None:
            return None
        return block.find_transaction(tx_hash)

    def render(self) -> ViewNode:
        return render(self.state)
