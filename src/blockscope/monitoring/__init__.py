# src/blockscope/monitoring/__init__.py
from .metrics import MetricsCollector
from .logging_config import LogConfig

__all__ = ['MetricsCollector', 'LogConfig']
