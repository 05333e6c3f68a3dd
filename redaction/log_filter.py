"""
RedactingLogFilter - logging hook for bound parameters and messages.

Loggers that report queries pass their bound parameters as the ``binds``
extra; the filter replaces them with redacted ``(name, value)`` pairs
before any handler formats the record.

Example:
    logger = logging.getLogger("app.sql")
    install(logger)
    logger.debug(
        "User Load %s",
        "SELECT * FROM users WHERE name = $1",
        extra={"binds": [BindParameter("password_digest", digest)]},
    )
    # record.binds == [("password_digest", "[FILTERED]")]
"""

import logging
from typing import Optional

from .engine import SensitiveValueRedactor, get_default_redactor

logger = logging.getLogger(__name__)


class RedactingLogFilter(logging.Filter):
    """
    Redacts ``record.binds`` and, optionally, the rendered message.

    Args:
        redactor: Redactor to apply. Defaults to the shared instance.
        scrub_messages: Also run the formatted message through redactor.scrub().
    """

    def __init__(self, redactor: Optional[SensitiveValueRedactor] = None, scrub_messages: bool = True):
        super().__init__()
        self.redactor = redactor or get_default_redactor()
        self.scrub_messages = scrub_messages

    def filter(self, record: logging.LogRecord) -> bool:
        binds = getattr(record, "binds", None)
        if binds is not None:
            record.binds = self.redactor.render_binds(binds)

        if self.scrub_messages:
            try:
                text = record.getMessage()
            except (TypeError, ValueError) as e:
                # Left for the handler, which reports bad format arguments itself.
                logger.warning(f"Could not format log message for scrubbing: {e}")
                return True
            message, was_redacted = self.redactor.scrub(text)
            if was_redacted:
                record.msg = message
                record.args = ()

        return True


def install(logger: logging.Logger, redactor: Optional[SensitiveValueRedactor] = None) -> RedactingLogFilter:
    """Attach a RedactingLogFilter to ``logger`` and return it."""
    log_filter = RedactingLogFilter(redactor)
    logger.addFilter(log_filter)
    return log_filter
