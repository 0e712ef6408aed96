"""Request-scoped log fields and call logging."""

import contextvars
import functools
import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional

# Follows a request across the event loop and the threadpool running sync routes
_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "log_context", default={}
)

REDACTED = "***REDACTED***"

# Substrings of key names whose values never reach the logs
SENSITIVE_FIELDS = (
    "password",
    "token",
    "secret",
    "otp",
    "authorization",
    "api_key",
    "credentials",
)


def generate_correlation_id() -> str:
    """New id for a request that arrived without an X-Correlation-ID header."""
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    return _log_context.get().get("correlation_id")


def get_log_context() -> Dict[str, Any]:
    """Copy of the fields currently bound to the log context."""
    return dict(_log_context.get())


class LogContext:
    """
    Bind fields to every log record emitted inside the block.

    Nested contexts add to the outer fields; leaving a block restores what
    was bound before it, also when the block raises.

    Example:
        with LogContext(correlation_id=cid, user_id=user.id):
            logger.info("Creating project")
    """

    def __init__(self, **fields):
        self.fields = fields
        self._token: Optional[contextvars.Token] = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


class _ContextFilter(logging.Filter):
    """Copies the bound context fields onto each record; never drops one."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_log_context().items():
            setattr(record, key, value)
        return True


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_FIELDS)


def sanitize_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Redact credential-like values before a payload is logged.

    Keys are matched case-insensitively on substrings, so ``newPassword``
    and ``resetToken`` are redacted as well. Nested dictionaries are
    walked; anything that is not a dictionary is returned unchanged.

    Args:
        data: Payload to sanitize

    Returns:
        A copy with sensitive values replaced by ``***REDACTED***``
    """
    if not isinstance(data, dict):
        return data

    sanitized: Dict[str, Any] = {}
    for key, value in data.items():
        if _is_sensitive(key):
            sanitized[key] = REDACTED if value is not None else None
        elif isinstance(value, dict):
            sanitized[key] = sanitize_sensitive_data(value)
        else:
            sanitized[key] = value
    return sanitized


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """
    Log entry to and exit from a function.

    Usable bare (``@log_function_call``) or with options. Keyword
    arguments are sanitized before they are logged; the exit record
    carries the elapsed time as ``duration_ms``. Exceptions are logged at
    ERROR and re-raised.

    Example:
        @log_function_call(include_args=True, level="INFO")
        def export_expenses(user_id, expense_type, year=None):
            ...
    """

    def decorator(f: Callable) -> Callable:
        logger = logging.getLogger(f.__module__)
        log_level = getattr(logging, level.upper())

        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            if include_args:
                shown = [repr(a) for a in args] + [
                    f"{k}={v!r}" for k, v in sanitize_sensitive_data(kwargs).items()
                ]
                logger.log(log_level, f"Entering {f.__name__} with args: {', '.join(shown)}")
            else:
                logger.log(log_level, f"Entering {f.__name__}")

            started = time.perf_counter()
            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__name__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            elapsed = round((time.perf_counter() - started) * 1000, 2)
            logger.log(log_level, f"Exiting {f.__name__}", extra={"duration_ms": elapsed})
            return result

        return wrapper

    return decorator if func is None else decorator(func)
