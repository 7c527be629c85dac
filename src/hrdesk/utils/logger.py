"""
Logging infrastructure for HR Desk.

Uses Loguru with a console sink, an optional rotating file sink, and a
separate audit sink that only receives records bound with ``audit_type``.
Audit details are scrubbed of candidate contact data before they are
written.
"""

import sys
from typing import Any

from loguru import logger

from hrdesk.utils.config import LoggingSettings, get_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)
AUDIT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[audit_type]} | {message}"

# Applicant data that may appear in audit details
MASKED_AUDIT_KEYS = frozenset({"candidate_email"})
DROPPED_AUDIT_KEYS = frozenset({"resume"})


def is_audit_record(record: dict[str, Any]) -> bool:
    return "audit_type" in record["extra"]


def setup_logging() -> None:
    """
    Configure application-wide logging from ``LoggingSettings``.

    Console output and the two file sinks are switched independently
    with ``LOG_CONSOLE_OUTPUT`` and ``LOG_FILE_OUTPUT``.
    """
    settings = get_settings()
    log_settings = settings.logging

    logger.remove()

    # diagnose=False outside development to keep values out of stack traces
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format=CONSOLE_FORMAT,
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    if log_settings.file_output:
        _add_file_sinks(log_settings, enable_diagnose)

    logger.info(f"Logging initialized - Level: {log_settings.level}")


def _add_file_sinks(log_settings: LoggingSettings, enable_diagnose: bool) -> None:
    log_settings.file_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_settings.file_path,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=enable_diagnose,
        enqueue=True,
    )

    log_settings.audit_file_path.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_settings.audit_file_path,
        format=AUDIT_FORMAT,
        level="INFO",
        filter=is_audit_record,
        rotation=log_settings.audit_rotation,
        retention=log_settings.audit_retention,
        compression="zip",
        enqueue=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name for the logger (typically __name__)

    Returns:
        A configured logger instance
    """
    return logger.bind(name=name)


def mask_email(email: str) -> str:
    """Keep the first character and the domain: ``chris@example.com`` -> ``c***@example.com``."""
    local, _, domain = email.partition("@")
    if not local or not domain:
        return "***"
    return f"{local[0]}***@{domain}"


def scrub_audit_details(details: dict[str, Any]) -> dict[str, Any]:
    """Mask candidate emails and drop resume links from audit details."""
    scrubbed = {}
    for key, value in details.items():
        if key in DROPPED_AUDIT_KEYS:
            continue
        if key in MASKED_AUDIT_KEYS and isinstance(value, str):
            value = mask_email(value)
        scrubbed[key] = value
    return scrubbed


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "LIFECYCLE",
) -> None:
    """
    Log an audit entry.

    Args:
        action: The action being audited (e.g., "application_status_changed")
        details: Dictionary of relevant details
        audit_type: LIFECYCLE for application changes, ACCESS for denials
    """
    logger.bind(audit_type=audit_type).info(f"{action} | {scrub_audit_details(details)}")


class LoggerMixin:
    """Gives a class a ``logger`` bound to its class name."""

    @property
    def logger(self) -> Any:
        if not hasattr(self, "_logger"):
            self._logger = get_logger(self.__class__.__name__)
        return self._logger
