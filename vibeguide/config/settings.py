"""Configuration utilities for vibeguide."""

import os
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .constants import (
    DEFAULT_API_URL,
    ENV_VAR_DEFINITIONS,
    MAX_QUERY_LIMIT,
    MIN_QUERY_LIMIT,
)


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None  # Unknown vars are always valid

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")

    if value is None or valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all vibeguide environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Args:
        name: The environment variable name.
        validate: Whether to validate the value against known definitions.

    Returns:
        The environment variable value, or its default if not set.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_api_url() -> str:
    """Backend base URL without a trailing slash."""
    url = get_env_var("VIBEGUIDE_API_URL") or DEFAULT_API_URL
    return url.rstrip("/")


def get_limit(name: str) -> int:
    """Read a numeric limit variable, clamped to the API's accepted range.

    Raises:
        ConfigurationError: If the value is not an integer.
    """
    raw = get_env_var(name)
    try:
        limit = int(raw) if raw is not None else MIN_QUERY_LIMIT
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer", setting=name, value=raw) from e
    return max(MIN_QUERY_LIMIT, min(MAX_QUERY_LIMIT, limit))


def is_auto_scroll_enabled() -> bool:
    return (get_env_var("VIBEGUIDE_AUTO_SCROLL") or "true").lower() == "true"


def get_env_info() -> Dict[str, Dict]:
    """Get information about all vibeguide environment variables.

    Returns:
        Dictionary mapping env var names to description, value, validity
        and default.
    """
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)
        info[name] = {
            "description": definition.get("description", ""),
            "value": value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
        }
    return info
