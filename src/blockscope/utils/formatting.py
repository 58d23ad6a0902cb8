# src/blockscope/utils/formatting.py
from datetime import datetime
from typing import Optional

from .config import Config

def format_timestamp(timestamp: int) -> str:
    """Render a unix timestamp (seconds) in local time."""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")

def preview(value: Optional[str], length: int) -> str:
    """First `length` characters followed by an ellipsis."""
    return f"{(value or '')[:length]}..."

def format_wei(value: Optional[int]) -> str:
    if not value:
        return "0 wei"
    return f"{value} wei"

def format_gas_price(gas_price: Optional[int]) -> str:
    if gas_price is None:
        return "N/A"
    return f"{gas_price} wei"

def format_optional(value: Optional[int]) -> str:
    return "N/A" if value is None else str(value)

def format_recipient(to_address: Optional[str], length: Optional[int] = None) -> str:
    """Recipient address, or the contract creation label when absent."""
    if not to_address:
        return Config.CONTRACT_CREATION_LABEL
    if length is None:
        return to_address
    return preview(to_address, length)

def has_payload(data: Optional[str]) -> bool:
    return bool(data) and data != Config.EMPTY_DATA
