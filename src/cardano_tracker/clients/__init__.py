"""API clients."""

from .api_client import ApiClient
from .errors import VesprApiError, get_error_message_for_status, is_retryable
from .transport import (
    AiohttpTransport,
    HttpStatusFailure,
    NetworkFailure,
    RequestDescriptor,
    Success,
    TimedOut,
    Transport,
    TransportOutcome,
)
from .vespr_client import VesprClient
from .vespr_types import AdaSpotPriceResponse, TokenInfo, WalletDetailedResponse

__all__ = [
    "AdaSpotPriceResponse",
    "AiohttpTransport",
    "ApiClient",
    "HttpStatusFailure",
    "NetworkFailure",
    "RequestDescriptor",
    "Success",
    "TimedOut",
    "TokenInfo",
    "Transport",
    "TransportOutcome",
    "VesprApiError",
    "VesprClient",
    "WalletDetailedResponse",
    "get_error_message_for_status",
    "is_retryable",
]
