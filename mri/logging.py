"""
Structured Logging
==================

JSON-structured logging with assessment context and a per-module
logger factory.

Uses structlog for structured, machine-readable log output.

Author: MRI Team
Version: 1.0.0
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

import structlog

# Context variables for the assessment being scored
_assessment_id: ContextVar[str] = ContextVar("assessment_id", default="")
_organization_id: ContextVar[str] = ContextVar("organization_id", default="")


def set_assessment_context(
    assessment_id: str,
    organization_id: Optional[str] = None,
) -> None:
    """Bind the assessment being processed to the current context."""
    _assessment_id.set(assessment_id)
    _organization_id.set(organization_id or "")


def clear_assessment_context() -> None:
    _assessment_id.set("")
    _organization_id.set("")


def get_assessment_id() -> str:
    """Get current assessment ID."""
    return _assessment_id.get()


def _add_assessment_context(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """Structlog processor to inject the current assessment."""
    aid = _assessment_id.get()
    if aid:
        event_dict["assessment_id"] = aid
    org = _organization_id.get()
    if org:
        event_dict["organization_id"] = org
    return event_dict


def _add_service_info(logger: Any, method_name: str, event_dict: Dict) -> Dict:
    """Structlog processor to inject service metadata."""
    event_dict["service"] = "mri"
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the MRI engine.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON; otherwise human-readable
        log_file: Optional path to write logs to a file
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _add_assessment_context,
        _add_service_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> Any:
    """
    Get a structured logger for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)
