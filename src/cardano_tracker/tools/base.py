"""Result type shared by the query handlers."""

import json
from dataclasses import dataclass
from typing import Any

from ..clients.errors import VesprApiError


@dataclass(frozen=True)
class ToolResult:
    """Text for display plus the structured payload it was rendered from."""

    text: str
    structured: dict[str, Any] | None = None
    is_error: bool = False

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)

    def to_json(self) -> str:
        return json.dumps(self.structured if self.structured is not None else {"error": self.text}, indent=2)


def error_result(error: BaseException) -> ToolResult:
    """Render a failure as an ``Error: ...`` result."""
    if isinstance(error, VesprApiError):
        return ToolResult.error(error.message)
    return ToolResult.error(f"An unexpected error occurred. {str(error) or type(error).__name__}")
