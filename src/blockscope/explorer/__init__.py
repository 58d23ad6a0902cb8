# src/blockscope/explorer/__init__.py
from .models import BlockSummary, Transaction
from .provider import ChainDataProvider, Web3ChainDataProvider
from .state import ScreenKind, ViewState, ViewStateStore
from .navigation import BlockSelected, NavigationController
from .loader import DataLoader
from .session import ExplorerSession

__all__ = [
    'BlockSummary', 'Transaction',
    'ChainDataProvider', 'Web3ChainDataProvider',
    'ScreenKind', 'ViewState', 'ViewStateStore',
    'BlockSelected', 'NavigationController',
    'DataLoader', 'ExplorerSession',
]
