"""
Utility modules for HR Desk.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from hrdesk.utils.config import (
    AppSettings,
    get_settings,
    reload_settings,
    ROOT_DIR,
    LOGS_DIR,
)
from hrdesk.utils.constants import (
    MAX_INTERVIEW_ROUNDS,
    MIN_INTERVIEW_ROUNDS,
    ApplicationStatus,
    AuditAction,
    Role,
    SortOrder,
)
from hrdesk.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    LoggerMixin,
)

__all__ = [
    # Config
    "AppSettings",
    "get_settings",
    "reload_settings",
    "ROOT_DIR",
    "LOGS_DIR",
    # Constants
    "MAX_INTERVIEW_ROUNDS",
    "MIN_INTERVIEW_ROUNDS",
    "ApplicationStatus",
    "AuditAction",
    "Role",
    "SortOrder",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "LoggerMixin",
]
