"""Logging integration for the sanitizer.

Attach ``SanitizingFilter`` to loggers/handlers so every record is
sanitized before it reaches a sink.
"""
import logging
from collections.abc import Mapping
from typing import Optional, Union

from .sanitizer import sanitize_text, sanitize_value

logger = logging.getLogger("navigator.redaction")

_formatter = logging.Formatter()


class SanitizingFilter(logging.Filter):
    """Filter that redacts secrets from log records.

    The message is rendered with its arguments first, so values split
    between the format string and the args ("token=%s") are still caught.
    Records are never dropped.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, Mapping):
            record.args = sanitize_value(record.args)
        elif record.args:
            # args are printed verbatim by Handler.handleError when
            # formatting fails, so they are cleaned on their own too
            record.args = tuple(
                sanitize_text(arg) if isinstance(arg, str) else sanitize_value(arg)
                for arg in record.args
            )

        if isinstance(record.msg, str):
            try:
                message = record.getMessage()
            except (TypeError, ValueError):
                # broken format string; the handler reports it on emit
                record.msg = sanitize_text(record.msg)
            else:
                record.msg = sanitize_text(message)
                record.args = None
        else:
            record.msg = sanitize_value(record.msg)

        if record.exc_info and not record.exc_text:
            record.exc_text = sanitize_text(
                _formatter.formatException(record.exc_info)
            )
        if record.stack_info:
            record.stack_info = sanitize_text(record.stack_info)
        return True


def install_log_sanitizer(
    target: Optional[Union[logging.Logger, str]] = None,
) -> SanitizingFilter:
    """Attach a SanitizingFilter to a logger and all of its handlers.

    Calling it again on the same logger reuses the installed filter.

    Only handlers attached at call time receive the filter. Records
    propagated from child loggers bypass the logger's own filters, so
    handlers added later (for example by ``logging.config.dictConfig``)
    are unprotected until this function is called again.

    Args:
        target: Logger or logger name; the root logger when omitted.

    Returns:
        The filter instance in use.
    """
    if target is None or isinstance(target, str):
        target = logging.getLogger(target)
    flt = next(
        (f for f in target.filters if isinstance(f, SanitizingFilter)), None,
    )
    if flt is None:
        flt = SanitizingFilter()
        target.addFilter(flt)
    # logger filters do not see records propagated from child loggers
    for handler in target.handlers:
        if flt not in handler.filters:
            handler.addFilter(flt)
    logger.debug(
        "Log sanitizer active on %r (%d handler(s))",
        target.name, len(target.handlers),
    )
    return flt
