# src/blockscope/utils/__init__.py
from .logger import get_logger
from .config import Config

__all__ = ['get_logger', 'Config']
