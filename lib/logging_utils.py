"""
Logging utilities for Bing Maps client applications.

The library itself only creates loggers; applications call ``initLogging``
with the ``[logging]`` config section to attach handlers.
"""

import logging
import re
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# `key` query parameter, either first (?key=) or later (&key=) in the query string
_API_KEY_RE = re.compile(r"([?&]key=)[^&#\s]*")


def maskApiKey(text: str) -> str:
    """Replace value of every ``key`` query parameter in ``text`` with ***."""
    return _API_KEY_RE.sub(r"\1***", text)


class ApiKeyMaskingFilter(logging.Filter):
    """Masks API keys in request URLs before the record is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = maskApiKey(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string."""
    level = logging.getLevelName(levelStr.upper())
    if isinstance(level, int):
        return level
    logger.error(f"Invalid log level '{levelStr}'")
    return default


def _makeHandler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(ApiKeyMaskingFilter())
    return handler


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings.

    Recognised keys: ``level``, ``propagate``, ``format``, ``console``,
    ``console-level``, ``file``, ``file-level`` and ``rotate``.
    """

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))

    # Clear existing handlers to avoid duplicates
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel) or logLevel
        localLogger.addHandler(_makeHandler(logging.StreamHandler(), consoleLogLevel, formatter))
        logger.info(f"Logging {localLogger.name} to console, logLevel: {consoleLogLevel}")

    if "file" in config:
        logFile = config["file"]
        Path(logFile).parent.mkdir(parents=True, exist_ok=True)

        fileLogLevel = logLevel
        if "file-level" in config:
            fileLogLevel = getLogLevelByStr(config["file-level"], logLevel) or logLevel

        fileHandler: logging.Handler
        if config.get("rotate", False):
            fileHandler = TimedRotatingFileHandler(
                filename=logFile,
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
        else:
            fileHandler = logging.FileHandler(logFile, encoding="utf-8")

        localLogger.addHandler(_makeHandler(fileHandler, fileLogLevel, formatter))
        logger.info(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileLogLevel}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure logging from the ``[logging]`` config section.

    Per-logger settings go to ``[logging.logger.<name>]`` tables, e.g.
    ``[logging.logger."lib.bing_maps"]`` with ``level = "DEBUG"``.
    """
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config)
    logLevel = rootLogger.getEffectiveLevel()

    # httpx logs every request URL at INFO, including the api key
    if logLevel < logging.WARNING:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.info(f"Logging configured: root level={logLevel}")
