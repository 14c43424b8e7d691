"""
Structured logging helpers.

Renders pipeline values (questions, chat histories, embedding vectors,
exceptions) as short strings so they can be attached to log records via
``extra=`` without dumping whole documents or vectors into the log.

Dependencies: logging (stdlib), langchain_core.messages, numpy
System role: Logging helper functions
"""

import logging
from typing import Any

import numpy as np
from langchain_core.messages import BaseMessage

DEFAULT_MAX_LENGTH = 500


def _describe(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, BaseMessage):
        return f"{value.type}({len(str(value.content))} chars)"
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={value.shape})"
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    return str(value)


def safe_log_value(value: Any, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Convert a value to a bounded string for a log record.

    Collections, messages and vectors are summarized; long strings are cut.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    try:
        rendered = _describe(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(rendered) > max_length:
        return f"{rendered[:max_length]}... (truncated, {len(rendered)} total)"
    return rendered


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {key: safe_log_value(val) for key, val in context.items()}


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log a message with context fields attached as record attributes.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Fields such as session_id or stage
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """
    Log a failure at ERROR with its traceback and context fields.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported (may be outside an except block)
        **context: Additional fields
    """
    fields = _safe_context(context)
    fields["error_type"] = type(exc).__name__
    fields["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=fields)
