from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the scanner's logging subsystem.
Records from the analysis workers are pushed through a Queue and written by a
single listener thread, so per-file diagnostics from parallel scans reach the
console and the log file whole and in arrival order.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from component_inventory.infra.logging.config import _LEVEL_MAP, LoggingConfig
from component_inventory.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_component_inventory_configured"
_QUEUE_LISTENER_ATTR: str = "_component_inventory_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger for a scan run.

    The console handler writes to stderr so that '--json' output on stdout
    stays machine-readable. At DEBUG level the console format also names the
    emitting worker thread, since per-file records interleave when
    'max_workers' is above one.

    Args:
        cfg: Structural configuration for the logging system.
        force: Re-initialize even if a previous call already configured it.

    Returns:
        logging.Logger: The initialized root logger instance.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)

        _remove_our_handlers(root)
        _stop_existing_listener(root)

        handlers = _build_output_handlers(cfg, level_int)
        if handlers:
            _attach_queue(root, handlers)
        return root

    except Exception:
        return _emergency_console(root)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger instance compliant with the global configuration.

    Args:
        name: Hierarchical name for the logger (usually __name__).

    Returns:
        logging.Logger: The requested logger instance.
    """
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Stop the queue listener so every pending record reaches its handler."""
    _stop_existing_listener(logging.getLogger())


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _build_output_handlers(cfg: LoggingConfig, level_int: int) -> List[logging.Handler]:
    """Create the console and file handlers fed by the listener thread."""
    handlers: List[logging.Handler] = []

    if cfg.console:
        fmt = cfg.debug_console_fmt if level_int <= logging.DEBUG else cfg.console_fmt
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(fmt))
        _tag_handler(sh)
        handlers.append(sh)

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    return handlers


def _attach_queue(root: logging.Logger, handlers: List[logging.Handler]) -> None:
    """Route the root logger through a queue drained by a listener thread."""
    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

    queue_handler = QueueHandler(log_queue)
    _tag_handler(queue_handler)

    listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    listener.start()

    root.addHandler(queue_handler)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter shutdown
    atexit.register(_safe_stop_listener, listener)


def _emergency_console(root: logging.Logger) -> logging.Logger:
    """Fall back to a direct stderr handler when the queue setup fails."""
    root.setLevel(logging.INFO)
    _remove_our_handlers(root)

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter("component-inventory (fallback) | %(levelname)s | %(message)s"))
    _tag_handler(sh)
    root.addHandler(sh)

    root.warning("Logging setup failed; writing diagnostics directly to stderr.")
    return root


def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    """Identify and detach all internally-managed handlers from the root."""
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    """Terminate and release the existing QueueListener to reset state."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were already stopped.

    QueueListener.stop() fails when its thread has already been joined,
    which happens when atexit runs after an explicit shutdown.
    """
    if not listener:
        return

    if getattr(listener, "_thread", None) is not None:
        listener.stop()
