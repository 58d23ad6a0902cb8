# src/blockscope/api/routes/__init__.py
from .explorer import router as explorer_router
from .metrics import router as metrics_router
from .ui import router as ui_router

__all__ = ['explorer_router', 'metrics_router', 'ui_router']
