"""
Logging setup for the CLI and MCP server entry points.

Logs go to stderr so that stdout stays free for MCP traffic and CLI output.
Library modules only create loggers; handlers are attached here.
"""

import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def setup_logging(name: Optional[str] = None) -> logging.Logger:
    """
    Configure a logger for an entry point

    PROMPT_PIPELINE_LOGGING=false silences everything below CRITICAL;
    PROMPT_PIPELINE_DEBUG=true lowers the level to DEBUG.

    Args:
        name: Logger name (default: root logger)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not _env_flag("PROMPT_PIPELINE_LOGGING", "true"):
        logger.setLevel(logging.CRITICAL)
        return logger

    level = logging.DEBUG if _env_flag("PROMPT_PIPELINE_DEBUG", "false") else logging.INFO
    logger.setLevel(level)

    # Repeated calls reuse the existing handler
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    return logger
