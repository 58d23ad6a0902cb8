# File: src/blockscope/explorer/loader.py
import asyncio
import logging
from typing import List, Optional, Set

from .models import BlockSummary
from .navigation import BlockSelected
from .provider import ChainDataProvider
from .state import ViewState, ViewStateStore
from ..exceptions import ProviderError
from ..utils.config import Config

logger = logging.getLogger(__name__)

class DataLoader:
    """Fetches chain data in response to session start and block selection.

    All writes go through the ViewStateStore. The initial load runs at most
    once per session. Detail loads are tagged with a generation number so a
    slow response for a block the user has already left is dropped instead
    of overwriting the newer selection.
    """

    def __init__(
        self,
        store: ViewStateStore,
        provider: ChainDataProvider,
        window_size: int = Config.WINDOW_SIZE,
        metrics=None
    ):
        self.store = store
        self.provider = provider
        self.window_size = window_size
        self.metrics = metrics

        self._initial_load_started = False
        self._generation = 0
        self._in_flight: Optional[int] = None
        self._last_loaded: Optional[BlockSummary] = None
        self.background_tasks: Set[asyncio.Task] = set()

    # Initial load

    async def load_recent_blocks(self) -> None:
        """Fetch the window of most recent blocks, all or nothing."""
        if self._initial_load_started:
            logger.debug("Initial load already started, skipping")
            return
        self._initial_load_started = True

        self.store.set(lambda s: s.update(loading=True, error=None))
        try:
            height = await self.provider.get_current_height()
            numbers = self.window_numbers(height)
            logger.info(f"Loading blocks {numbers[0]}..{numbers[-1]}" if numbers else "No blocks to load")

            results = await asyncio.gather(
                *(self.provider.get_block_summary(number) for number in numbers),
                return_exceptions=True
            )
            failure = next((r for r in results if isinstance(r, BaseException)), None)
            if failure is not None:
                raise failure
        except ProviderError as e:
            logger.error(f"Error fetching blocks: {e.message}")
            self.store.set(lambda s: s.update(loading=False, error=e.message))
            return

        blocks = tuple(results)
        self.store.set(lambda s: s.update(blocks=blocks, loading=False))
        if self.metrics:
            self.metrics.set_window_size(len(blocks))
        logger.info(f"Loaded {len(blocks)} recent blocks")

    def window_numbers(self, height: int) -> List[int]:
        """Block numbers of the window ending at height, newest first."""
        lowest = max(height - self.window_size + 1, 0)
        return list(range(height, lowest - 1, -1))

    # Detail load

    def on_block_selected(self, event: BlockSelected) -> Optional[asyncio.Task]:
        """Schedule a detail load for the selected block when one is needed."""
        if not self._needs_detail(event.number):
            return None

        generation = self._begin_detail(event.number)
        task = asyncio.get_running_loop().create_task(self._fetch_detail(event.number, generation))
        self.background_tasks.add(task)
        task.add_done_callback(self.background_tasks.discard)
        return task

    def _needs_detail(self, number: int) -> bool:
        selected = self.store.get().selected_block
        if selected is None or selected.number != number:
            return False
        if selected.full_transactions:
            return False
        if self._in_flight == number:
            logger.debug(f"Detail load for block {number} already in flight")
            return False

        last = self._last_loaded
        if last is not None and last.number == number:
            # Already fetched this session; show it again without a provider call
            self._generation += 1
            self._in_flight = None
            self.store.set(lambda s: self._commit_detail(s, last))
            return False
        return True

    async def load_block_detail(self, number: int) -> None:
        """Fetch block number with full transactions into the current selection."""
        await self._fetch_detail(number, self._begin_detail(number))

    def _begin_detail(self, number: int) -> int:
        self._generation += 1
        self._in_flight = number
        self.store.set(lambda s: s.update(loading_detail=True, error=None))
        return self._generation

    async def _fetch_detail(self, number: int, generation: int) -> None:
        try:
            block = await self.provider.get_block_with_transactions(number)
        except ProviderError as e:
            logger.error(f"Error fetching block details for {number}: {e.message}")
            self._finish_detail(generation, number, error=e.message)
            return

        self._finish_detail(generation, number, block=block)

    def _finish_detail(
        self,
        generation: int,
        number: int,
        block: Optional[BlockSummary] = None,
        error: Optional[str] = None
    ):
        if generation != self._generation:
            logger.debug(f"Discarding superseded detail load for block {number}")
            if self.metrics:
                self.metrics.record_discarded_detail()
            return
        self._in_flight = None
        if block is not None:
            self._last_loaded = block

        def transform(s: ViewState) -> ViewState:
            selected = s.selected_block
            if selected is None or selected.number != number:
                # User navigated away; only the spinner belongs to us
                return s.update(loading_detail=False)
            if error is not None:
                return s.update(loading_detail=False, error=error)
            return self._commit_detail(s, block)

        self.store.set(transform)

    @staticmethod
    def _commit_detail(s: ViewState, block: BlockSummary) -> ViewState:
        selected = s.selected_block
        if selected is None or selected.number != block.number:
            return s
        return s.with_selected_block(block).update(loading_detail=False, error=None)

    async def drain(self) -> None:
        """Wait for every scheduled detail load to settle."""
        while self.background_tasks:
            await asyncio.gather(*list(self.background_tasks))
