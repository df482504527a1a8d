import logging
import os
from collections import OrderedDict
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog

from clipnest.core.settings import ClipnestSettings, get_clipnest_config

ROOT_LOGGER_NAME = "clipnest"

_configured_for: Optional[ClipnestSettings] = None


def default_formatter(fmt: Optional[str] = None) -> logging.Formatter:
    """Returns a logging formatter with a default format if none is specified."""
    default_fmt = "[%(asctime)s] %(levelname)s: %(name)s: %(message)s"
    return logging.Formatter(fmt or default_fmt)


def _enforce_key_order_processor(key_order: list[str]):
    def _processor(_logger, _method_name, event_dict):
        ordered = OrderedDict()
        for key in key_order:
            if key in event_dict:
                ordered[key] = event_dict.pop(key)
        for k in sorted(event_dict.keys()):
            ordered[k] = event_dict[k]
        return ordered

    return _processor


def setup_logger(
    settings: Optional[ClipnestSettings] = None,
    *,
    name: str = ROOT_LOGGER_NAME,
    stream_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    max_bytes: int = 10 * 1024 * 1024,  # 10 MB
    backup_count: int = 5,
) -> logging.Logger:
    """Configure the clipnest root logger and structlog.

    A stream handler is always attached. A rotating file handler is added when
    ``settings.LOG_DIR`` is set; the file is ``{LOG_DIR}/{name}.log``.

    Args:
        settings: Settings to configure from. Defaults to the cached config.
        name: Logger name, defaults to "clipnest".
        stream_level: StreamHandler level.
        file_level: FileHandler level.
        max_bytes: Maximum size in bytes before rotating the log file.
        backup_count: Number of backup files to retain.

    Returns:
        logging.Logger: The configured stdlib logger that structlog writes through.
    """
    global _configured_for
    settings = settings or get_clipnest_config()

    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper())
    logger.propagate = False

    if settings.USE_STRUCTLOG:
        formatter = logging.Formatter("%(message)s")
        renderer = structlog.processors.JSONRenderer()
    else:
        formatter = default_formatter()
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(stream_level)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.LOG_DIR:
        log_file_path = os.path.join(settings.LOG_DIR, f"{name}.log")
        os.makedirs(Path(log_file_path).parent, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=log_file_path, maxBytes=max_bytes, backupCount=backup_count, mode="a"
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _enforce_key_order_processor(
                ["timestamp", "event", "service", "request_id", "duration_ms", "level", "logger"]
            ),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    _configured_for = settings
    return logger


def get_logger(name: Optional[str] = None, **bind) -> structlog.stdlib.BoundLogger:
    """Create or retrieve a structured logger under the ``clipnest`` namespace.

    The root logger is configured from the cached settings the first time any
    logger is requested; :func:`setup_logger` may be called again (e.g. by the app
    factory) to reconfigure it.

    Example:
        .. code-block:: python

            from clipnest.core.logging import get_logger

            logger = get_logger("services.tokens")
            logger.info("refresh token rotated", user_id="64f...")
    """
    if _configured_for is None:
        setup_logger()

    if not name:
        full_name = ROOT_LOGGER_NAME
    elif name.startswith(ROOT_LOGGER_NAME):
        full_name = name
    else:
        full_name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = structlog.get_logger(full_name)
    if bind:
        logger = logger.bind(**bind)
    return logger
