import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the current invocation id across the call chain
_INVOCATION_ID: contextvars.ContextVar[str] = contextvars.ContextVar("invocation_id", default="-")


class _InvocationFilter(logging.Filter):
    """Logging filter that injects the invocation_id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.invocation_id = _INVOCATION_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | invocation=%(invocation_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _find_handler() -> Optional[logging.Handler]:
    for h in logging.getLogger().handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _InvocationFilter) for f in h.filters):
            return h
    return None


def configure_root_logger(level: str = "INFO") -> None:
    """
    Configure the root logger and the funcbridge-specific logger.

    The function host captures the handler's stdout, so records go there.
    Only the funcbridge namespace is set to the requested level; other
    libraries (httpx, etc.) stay at INFO.

    Args:
        level: Log level for funcbridge logs (DEBUG, INFO, WARNING, ERROR).

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    funcbridge_logger = logging.getLogger("funcbridge")

    if _find_handler() is not None:
        # Already configured; just update funcbridge logger level
        funcbridge_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        return

    root = logging.getLogger()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_InvocationFilter())
    root.addHandler(handler)
    root.setLevel(logging.INFO)

    funcbridge_logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def get_logger(name: str = "funcbridge") -> logging.Logger:
    """
    Get a module-specific logger that writes to stdout with the invocation id.

    Configures logging on first use only, so a level chosen earlier through
    :func:`configure_root_logger` is kept.
    """
    if _find_handler() is None:
        configure_root_logger()
    return logging.getLogger(name)


def push_invocation_id(invocation_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current invocation id in context and return a token for later reset."""
    if not invocation_id:
        return None
    return _INVOCATION_ID.set(invocation_id)


def reset_invocation_id(token: Optional[contextvars.Token]) -> None:
    """Reset the invocation id context using the provided token (if any)."""
    if token is None:
        return
    _INVOCATION_ID.reset(token)


def current_invocation_id() -> str:
    return _INVOCATION_ID.get()
