"""Shared configuration utilities."""

from typing import Any, Dict


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override dictionary into base dictionary.

    Creates a new dictionary with values from ``base`` updated by ``override``.
    Nested dictionaries are merged recursively rather than replaced wholesale.

    Args:
        base: Base dictionary providing default values.
        override: Override dictionary whose values take precedence.

    Returns:
        New merged dictionary (neither input is mutated).
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def format_validation_issues(errors: list) -> list[str]:
    """Flatten pydantic ``ValidationError.errors()`` into readable lines.

    Args:
        errors: Error dictionaries as returned by ``ValidationError.errors()``.

    Returns:
        One ``"location: message"`` string per error.
    """
    issues = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        issues.append(f"{location}: {message}" if location else message)
    return issues
