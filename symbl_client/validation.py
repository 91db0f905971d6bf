from __future__ import annotations

from dataclasses import fields, is_dataclass
import logging
from typing import Any

from symbl_client.errors import InvalidInputError, ValidationError

logger = logging.getLogger(__name__)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple, set, frozenset)):
        return not value
    return False


def require_values(**values: Any) -> None:
    """Fail fast on empty call parameters such as path identifiers."""
    missing = [name for name, value in values.items() if _is_empty(value)]
    if missing:
        logger.debug("Rejected call with empty parameters: %s", ", ".join(missing))
        raise InvalidInputError("Required parameters are empty: " + ", ".join(missing))


def validate_payload(payload: Any) -> None:
    """Check every dataclass field declared with ``metadata={"required": True}``.

    All violations are collected before raising, so the resulting
    ``ValidationError.fields`` lists each offending field once.
    """
    if not is_dataclass(payload):
        raise TypeError(f"Expected a dataclass instance, got {type(payload).__name__}")

    violated = [
        item.name
        for item in fields(payload)
        if item.metadata.get("required") and _is_empty(getattr(payload, item.name))
    ]
    if violated:
        for name in violated:
            logger.debug("%s validation failed on field %s", type(payload).__name__, name)
        raise ValidationError(violated)
