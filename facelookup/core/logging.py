"""Logging configuration for the face lookup handlers."""
import logging
import sys
from typing import Any, List

import structlog
from structlog.stdlib import ProcessorFormatter

from facelookup.core.config import settings


def setup_logging() -> None:
    """Configure structured logging for the handlers.

    - Uses ConsoleRenderer with colors for development.
    - Uses JSONRenderer for other environments, which is what CloudWatch ingests.
    - Integrates with standard Python logging handlers.
    """
    shared_processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    if settings.ENVIRONMENT == "development":
        final_processor = structlog.dev.ConsoleRenderer(colors=True)
    else:
        final_processor = structlog.processors.JSONRenderer()
        shared_processors.insert(-1, structlog.processors.format_exc_info)

    structlog.configure(
        processors=shared_processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = ProcessorFormatter(processor=final_processor)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    # The Lambda runtime installs its own handler on the root logger
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.addHandler(handler)
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    logging.getLogger("uvicorn.access").disabled = True
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("aiobotocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    root_logger.info(
        f"Logging setup complete. Environment: {settings.ENVIRONMENT}, Level: {settings.LOG_LEVEL}"
    )


def bind_invocation(handler_name: str, context: Any = None) -> None:
    """Bind per-invocation fields into the structlog context.

    Args:
        handler_name: Name of the entry point being invoked
        context: Lambda context object, if any
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        handler=handler_name,
        aws_request_id=getattr(context, "aws_request_id", None),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance compatible with standard logging.

    Args:
        name: Name for the logger, typically __name__

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance
    """
    return structlog.get_logger(name)
