# src/blockscope/exceptions.py

class ExplorerError(Exception):
    """Base exception class for explorer-related errors"""
    pass

class ProviderError(ExplorerError):
    """Raised when the chain data provider fails (network, auth, rate limit, missing block)"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

class ConfigError(ExplorerError):
    """Raised when the configuration file cannot be parsed"""
    pass

class InvariantViolation(ExplorerError, AssertionError):
    """Raised when a navigation action is called outside its precondition"""
    pass
