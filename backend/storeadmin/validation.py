from __future__ import annotations

from typing import Any, Iterable, Mapping

from flask import current_app


POLICY_IGNORE = "ignore"
POLICY_WARN = "warn"
POLICY_REJECT = "reject"
POLICIES = (POLICY_IGNORE, POLICY_WARN, POLICY_REJECT)


class ValidationError(ValueError):
    """400-level input problem. Raised before anything is written."""


class NotFoundError(LookupError):
    """404-level problem: the referenced id does not resolve."""


class PersistenceError(Exception):
    """The database write failed. The message is deliberately generic."""


def clean_text(value: Any) -> str | None:
    """Strip strings; empty and whitespace-only values become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_text(value: Any, field: str) -> str:
    text = clean_text(value)
    if text is None:
        raise ValidationError(f"{field} is required")
    return text


def clean_password(value: Any) -> str | None:
    """Passwords are kept verbatim; None and "" mean "not supplied"."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError("password must be a string")
    return value


def clean_id_list(values: Iterable[Any] | None, field: str) -> list[str]:
    """
    Normalize a list of ids into a de-duplicated list of strings.

    Order of first occurrence is kept; blank entries are dropped.
    """
    if values is None:
        return []
    if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
        raise ValidationError(f"{field} must be a list of ids")

    result: list[str] = []
    for value in values:
        item = clean_text(value)
        if item is not None and item not in result:
            result.append(item)
    return result


def apply_policy(config_key: str, message: str) -> None:
    """
    Apply a configurable write-time policy.

    The policy named by config_key is one of:
    - "ignore": accept silently
    - "warn": log a warning and accept
    - "reject": raise ValidationError
    """
    policy = str(current_app.config.get(config_key, POLICY_REJECT)).strip().lower()
    if policy not in POLICIES:
        raise ValueError(f"{config_key} must be one of {', '.join(POLICIES)}, got {policy!r}")

    if policy == POLICY_REJECT:
        raise ValidationError(message)
    if policy == POLICY_WARN:
        current_app.logger.warning("%s: %s", config_key, message)
