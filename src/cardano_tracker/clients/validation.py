"""Parse and validate untrusted API response bodies."""

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .errors import VesprApiError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_json(body: bytes | str) -> Any:
    """Parse a response body as JSON."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise VesprApiError("Failed to parse API response.", cause=e) from e


def format_validation_issues(error: ValidationError) -> str:
    """Render every violation as ``<path>: <reason>``, comma separated."""
    issues = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"]) or "<root>"
        issues.append(f"{path}: {issue['msg']}")
    return ", ".join(issues)


def validate_response(data: Any, model: type[ModelT]) -> ModelT:
    """Check parsed JSON against ``model``'s field contracts.

    Required fields must be present with the exact type, defaulted fields are
    filled in when absent, nullable fields pass ``None`` through, and unknown
    fields are dropped.
    """
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise VesprApiError(f"Invalid API response: {format_validation_issues(e)}", cause=e) from e


def decode_response(body: bytes | str, model: type[ModelT]) -> ModelT:
    """Parse then validate a raw body."""
    return validate_response(parse_json(body), model)
