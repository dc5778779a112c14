"""Structured logging helpers.

Fields bound with ``LogContext`` are attached to every record emitted on the
same thread while the context is active, so a total or an exchange can be
traced through the records of every function it calls.
"""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, List, Optional

_local = threading.local()


def _stack() -> List[Dict[str, Any]]:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_log_context() -> Dict[str, Any]:
    """
    Get the structured fields bound on the current thread.

    Inner contexts override fields of the same name bound by outer ones.

    Returns:
        A new dict (empty outside any LogContext)
    """
    merged: Dict[str, Any] = {}
    for fields in _stack():
        merged.update(fields)
    return merged


def generate_correlation_id() -> str:
    """
    Generate an ID tying together the records of one operation.

    Returns:
        A random UUID string
    """
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """
    Get the correlation ID bound on the current thread.

    Returns:
        The innermost bound ``correlation_id``, or None if there is none
    """
    return get_log_context().get("correlation_id")


class LogContext:
    """
    Bind structured fields to log records for the duration of a block.

    Contexts nest; leaving one unbinds exactly the fields it bound, even when
    the block raises.

    Example:
        with LogContext(correlation_id=generate_correlation_id()):
            with LogContext(hourly_rate="20.00 USD"):
                logger.debug("Totaling timesheets")
                # Record carries both correlation_id and hourly_rate
    """

    def __init__(self, **fields: Any):
        self.fields = fields

    def __enter__(self) -> "LogContext":
        _stack().append(self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _stack().pop()


class _ContextFilter(logging.Filter):
    """Copy the bound LogContext fields onto each record passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.__dict__.update(get_log_context())
        return True


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Log entry to and exit from the decorated function.

    Exceptions are logged with their traceback and re-raised unchanged.

    Args:
        func: Function to decorate (when used without arguments)
        include_args: Whether to render the call's arguments in the entry record
        level: Level of the entry and exit records

    Example:
        @log_function_call
        def exchange_all(items, currency, rates):
            ...

        @log_function_call(include_args=True, level="INFO")
        def convert(entity, rates, currency=None):
            ...
    """
    levelno = logging.getLevelName(level.upper())

    def decorator(f: Callable) -> Callable:
        logger = logging.getLogger(f.__module__)

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if include_args:
                rendered = [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
                logger.log(levelno, f"Entering {f.__name__} with args: {', '.join(rendered)}")
            else:
                logger.log(levelno, f"Entering {f.__name__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(f"Exception in {f.__name__}: {type(e).__name__}: {e}", exc_info=True)
                raise

            logger.log(levelno, f"Exiting {f.__name__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)
