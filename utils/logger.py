"""
Logging helpers shared by routers and services.
"""

import logging
from typing import Any, Dict


SENSITIVE_FIELDS = {
    'password', 'token', 'secret', 'api_key', 'authorization',
    'session_id', 'card', 'cvv'
}


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Usage:
        from utils.logger import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)


def sanitize_log_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact secrets before a dict is attached to a log record.

    Tokens and session ids keep their first 8 characters so a request can
    still be correlated with the payment provider dashboard; anything else
    that looks sensitive is replaced entirely. Nested dicts are walked.

    Args:
        data: Dictionary that may contain sensitive fields

    Returns:
        A sanitized copy; the input is not modified
    """
    sanitized = dict(data)

    for key, value in sanitized.items():
        lowered = key.lower()
        if any(sensitive in lowered for sensitive in SENSITIVE_FIELDS):
            if isinstance(value, str):
                partial = 'token' in lowered or 'session_id' in lowered
                if partial and len(value) > 8:
                    sanitized[key] = f"{value[:8]}..."
                else:
                    sanitized[key] = "***REDACTED***"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)

    return sanitized
