"""Errors raised by the VESPR API client."""


class VesprApiError(Exception):
    """Error raised when a VESPR API request fails.

    Carries a user-facing message, the HTTP status code when the failure came
    from a response, and the underlying exception when there was one. This is
    the only exception type that crosses the client boundary.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self._message = message
        self._status_code = status_code
        self._cause = cause
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def __repr__(self) -> str:
        return f"VesprApiError(message={self._message!r}, status_code={self._status_code!r})"


def get_error_message_for_status(status_code: int) -> str:
    """Get user-friendly error message for an HTTP status code."""
    if status_code == 400:
        return "Invalid wallet address format."
    elif status_code == 404:
        return "Wallet not found. Verify the address is correct."
    elif status_code == 429:
        return "Rate limited by VESPR API. Please wait before retrying."
    elif status_code in (500, 502, 503, 504):
        return "VESPR API is temporarily unavailable. Try again later."
    else:
        return f"VESPR API returned an error (status {status_code})."


def is_retryable(error: BaseException) -> bool:
    """Only rate limits (429) and server errors (5xx) are worth retrying."""
    if isinstance(error, VesprApiError) and error.status_code:
        return error.status_code >= 500 or error.status_code == 429
    return False
