"""Logging configuration for botbus.

Provides subsystem-level log file routing, secret sanitization,
and structlog + stdlib integration.

Subsystem hierarchy (stdlib dotted names, structlog wraps them):
    root                 → ConsoleHandler (terminal)
      └─ botbus          → RotatingFileHandler → botbus.log (combined)
           ├─ botbus.commands → RFH → commands.log
           └─ botbus.config   → RFH → config.log
"""

import logging
import logging.handlers
import re
import sys
from pathlib import Path
from typing import Any, Dict

import structlog

SUBSYSTEMS = ("commands", "config")

LOGGER_PREFIX = "botbus"

# ---------------------------------------------------------------------------
# Secret sanitization
# ---------------------------------------------------------------------------

_SECRET_PATTERNS = [
    # Bot API tokens (123456789:AA...)
    re.compile(r"(?<!\d)\d{6,12}:[A-Za-z0-9_-]{30,}"),
    # Bearer token values in headers
    re.compile(r"Bearer\s+[a-zA-Z0-9_./-]{20,}"),
]

_REDACTED = "***REDACTED***"


def _scrub_value(value: str) -> str:
    for pattern in _SECRET_PATTERNS:
        value = pattern.sub(_REDACTED, value)
    return value


def sanitize_secrets(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """structlog processor that scrubs bot tokens from log events.

    Walks string values in the event dict, including one level of
    lists, tuples and dicts, and replaces matches with a placeholder.
    """
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _scrub_value(value)
        elif isinstance(value, (list, tuple)):
            event_dict[key] = type(value)(
                _scrub_value(v) if isinstance(v, str) else v
                for v in value
            )
        elif isinstance(value, dict):
            event_dict[key] = {
                k: _scrub_value(v) if isinstance(v, str) else v
                for k, v in value.items()
            }
    return event_dict


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def subsystem_level(levels: Dict[str, str], subsystem: str, default: int) -> int:
    """Resolve a per-subsystem level name, falling back to ``default``."""
    name = str(levels.get(subsystem, "")).upper()
    if not name:
        return default
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else default


def setup_logging(config=None) -> None:
    """Configure structured logging with subsystem file handlers.

    Sets up:
    1. Root logger: ConsoleHandler
    2. "botbus" logger: RotatingFileHandler → logs/botbus.log
    3. "botbus.<subsystem>" loggers: individual RotatingFileHandlers

    Subsystem loggers propagate, so every event lands in its
    subsystem file, the combined botbus.log and the console.

    Args:
        config: Optional Config instance. Without one, defaults are
            used and structlog loggers are not cached, so a second
            call with the real config takes effect.
    """
    if config is not None:
        log_dir = config.log_dir
        root_level_name = config.logging_level.upper()
        subsystem_levels = config.logging_subsystem_levels
        max_bytes = config.logging_max_file_size_mb * 1024 * 1024
        backup_count = config.logging_backup_count
        cache_loggers = True
    else:
        log_dir = Path(__file__).parent.parent / "logs"
        root_level_name = "INFO"
        subsystem_levels = {}
        max_bytes = 10 * 1024 * 1024
        backup_count = 5
        cache_loggers = False

    root_level = getattr(logging, root_level_name, logging.INFO)

    file_handlers_ok = False
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handlers_ok = True
    except OSError as exc:
        print(
            f"WARNING: Cannot create log directory {log_dir}: {exc}. "
            "Falling back to console-only logging.",
            file=sys.stderr,
        )

    file_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
    )

    # 1. Root logger: console only
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(root_level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    )
    root_logger.addHandler(console_handler)

    # 2. "botbus" parent logger: combined log file
    bus_logger = logging.getLogger(LOGGER_PREFIX)
    bus_logger.setLevel(logging.DEBUG)
    bus_logger.handlers.clear()
    bus_logger.propagate = True

    def file_handler(filename: str, level: int) -> logging.Handler:
        handler = logging.handlers.RotatingFileHandler(
            log_dir / filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(file_formatter)
        return handler

    if file_handlers_ok:
        bus_logger.addHandler(file_handler(f"{LOGGER_PREFIX}.log", root_level))

    # 3. Per-subsystem loggers
    for subsystem in SUBSYSTEMS:
        sub_logger = logging.getLogger(f"{LOGGER_PREFIX}.{subsystem}")
        sub_level = subsystem_level(subsystem_levels, subsystem, root_level)
        sub_logger.setLevel(sub_level)
        sub_logger.handlers.clear()
        sub_logger.propagate = True

        if file_handlers_ok:
            sub_logger.addHandler(file_handler(f"{subsystem}.log", sub_level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            sanitize_secrets,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_loggers,
    )
