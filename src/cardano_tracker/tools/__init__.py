"""Query handlers rendering API results for display."""

from .ada_price import get_ada_price, get_supported_currencies
from .base import ToolResult, error_result
from .wallet_balance import build_wallet_summary, get_wallet_balance

__all__ = [
    "ToolResult",
    "build_wallet_summary",
    "error_result",
    "get_ada_price",
    "get_supported_currencies",
    "get_wallet_balance",
]
