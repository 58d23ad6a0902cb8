# File: src/blockscope/explorer/state.py
import threading
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from .models import BlockSummary, Transaction

class ScreenKind(Enum):
    BLOCK_LIST = "block_list"
    BLOCK_DETAIL = "block_detail"
    TRANSACTION_DETAIL = "transaction_detail"

@dataclass(frozen=True)
class BlockListScreen:
    kind = ScreenKind.BLOCK_LIST

@dataclass(frozen=True)
class BlockDetailScreen:
    block: BlockSummary
    kind = ScreenKind.BLOCK_DETAIL

@dataclass(frozen=True)
class TransactionDetailScreen:
    """A transaction always travels with the block it was selected from"""
    block: BlockSummary
    transaction: Transaction
    kind = ScreenKind.TRANSACTION_DETAIL

Screen = Union[BlockListScreen, BlockDetailScreen, TransactionDetailScreen]

@dataclass(frozen=True)
class ViewState:
    screen: Screen = field(default_factory=BlockListScreen)
    blocks: Tuple[BlockSummary, ...] = ()
    loading: bool = True
    loading_detail: bool = False
    error: Optional[str] = None

    @property
    def kind(self) -> ScreenKind:
        return self.screen.kind

    @property
    def selected_block(self) -> Optional[BlockSummary]:
        return getattr(self.screen, "block", None)

    @property
    def selected_transaction(self) -> Optional[Transaction]:
        return getattr(self.screen, "transaction", None)

    def with_screen(self, screen: Screen) -> 'ViewState':
        return replace(self, screen=screen)

    def with_selected_block(self, block: BlockSummary) -> 'ViewState':
        """Swap the selected block, keeping the screen variant."""
        if isinstance(self.screen, TransactionDetailScreen):
            return self.with_screen(replace(self.screen, block=block))
        return self.with_screen(BlockDetailScreen(block))

    def update(self, **changes) -> 'ViewState':
        return replace(self, **changes)

StateListener = Callable[[ViewState], None]

class ViewStateStore:
    """Holds exactly one ViewState; every change goes through set()"""

    def __init__(self, initial: Optional[ViewState] = None):
        self._state = initial if initial is not None else ViewState()
        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []

    def get(self) -> ViewState:
        return self._state

    def set(self, transform: Callable[[ViewState], ViewState]) -> ViewState:
        """Apply transform to the current state atomically and notify listeners."""
        with self._lock:
            new_state = transform(self._state)
            if not isinstance(new_state, ViewState):
                raise TypeError(f"State transform returned {type(new_state).__name__}")
            self._state = new_state
            listeners = list(self._listeners)

        for listener in listeners:
            listener(new_state)
        return new_state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe
