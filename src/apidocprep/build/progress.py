"""Progress and warning reporting for build steps."""

import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger(__name__)


class ProgressReporter(ABC):
    """Abstract base class for build progress reporting.

    Reporting is fire-and-forget: nothing a reporter returns is consumed by the build
    steps. Messages use ``str.format`` style positional placeholders, which are only
    expanded when arguments are supplied.
    """

    @abstractmethod
    def report_progress(self, message: str, *args: Any) -> None:
        """Report an informational progress message."""
        pass

    @abstractmethod
    def report_warning(self, warning_code: str, message: str, *args: Any) -> None:
        """Report a warning identified by a stable warning code."""
        pass


def format_message(message: str, *args: Any) -> str:
    """Expand positional placeholders in ``message`` if any arguments are given."""
    return message.format(*args) if args else message


class LoggingProgressReporter(ProgressReporter):
    """Progress reporter that writes to the standard logging system.

    Progress messages are logged at INFO level and warnings at WARNING level, prefixed
    with their warning code.

    Example:
        >>> reporter = LoggingProgressReporter()
        >>> reporter.report_progress("Removing namespace '{0}'", "N:MyCompany.Internal")
    """

    def __init__(self, log: logging.Logger = logger) -> None:
        self._log = log

    def report_progress(self, message: str, *args: Any) -> None:
        self._log.info(format_message(message, *args))

    def report_warning(self, warning_code: str, message: str, *args: Any) -> None:
        self._log.warning("%s: %s", warning_code, format_message(message, *args))
