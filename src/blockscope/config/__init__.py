# src/blockscope/config/__init__.py
from .settings import ExplorerConfig

__all__ = ['ExplorerConfig']
