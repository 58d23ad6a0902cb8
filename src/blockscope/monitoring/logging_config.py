# File: src/blockscope/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime
from typing import Iterable, List

# RPC client libraries log every request at DEBUG
NOISY_LOGGERS = ("web3", "urllib3", "aiohttp", "websockets", "asyncio")

class LogConfig:
    """Root logging for a running explorer: a dated rotating file plus the console."""

    def __init__(
        self,
        log_dir: str = "logs",
        level: str = "INFO",
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        app_name: str = "blockscope",
        quiet_loggers: Iterable[str] = NOISY_LOGGERS,
        library_level: str = "WARNING",
    ):
        self.log_dir = log_dir
        self.level = self._level(level)
        self.max_size = max_size
        self.backup_count = backup_count
        self.app_name = app_name
        self.quiet_loggers = tuple(quiet_loggers)
        self.library_level = self._level(library_level)
        self._handlers: List[logging.Handler] = []

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    @staticmethod
    def _level(level):
        return logging.getLevelName(level.upper()) if isinstance(level, str) else level

    @property
    def log_file(self) -> str:
        return os.path.join(self.log_dir, f'{self.app_name}_{datetime.now().strftime("%Y%m%d")}.log')

    def setup_logging(self):
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Calling twice must not double every line
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        if self.log_dir:
            file_handler = logging.handlers.RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_size,
                backupCount=self.backup_count
            )
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            file_handler.setLevel(logging.DEBUG)
            self._handlers.append(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s', '%H:%M:%S'
        ))
        console_handler.setLevel(self.level)
        self._handlers.append(console_handler)

        for handler in self._handlers:
            root_logger.addHandler(handler)

        for name in self.quiet_loggers:
            logging.getLogger(name).setLevel(self.library_level)
