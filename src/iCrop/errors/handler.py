"""Route crop session failures to logging, the event bus and the front-end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..events.bus import Event, EventBus
from . import ConfigurationError, DegenerateCropError, LayoutNotReadyError, RotationError


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        return logging.getLevelName(self.name)


# Rotation has a fallback and layout resolves itself once the view is measured;
# a degenerate window or a bad configuration leaves nothing to export.
_DEFAULT_SEVERITIES: dict[type, ErrorSeverity] = {
    RotationError: ErrorSeverity.WARNING,
    LayoutNotReadyError: ErrorSeverity.INFO,
    DegenerateCropError: ErrorSeverity.ERROR,
    ConfigurationError: ErrorSeverity.ERROR,
}


def severity_for(error: BaseException) -> ErrorSeverity:
    """Return the default severity for *error*, walking its class hierarchy."""

    for klass in type(error).__mro__:
        if klass in _DEFAULT_SEVERITIES:
            return _DEFAULT_SEVERITIES[klass]
    return ErrorSeverity.CRITICAL


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


UiCallback = Callable[[str, ErrorSeverity], None]


class ErrorHandler:
    """Report crop failures to the log, the event bus and an optional UI hook.

    The handler never retries. The UI hook only sees failures at or above its
    threshold, :attr:`ErrorSeverity.ERROR` unless registered otherwise.
    """

    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[UiCallback] = None
        self._ui_threshold = ErrorSeverity.ERROR

    def register_ui_callback(
        self, callback: UiCallback, min_severity: ErrorSeverity = ErrorSeverity.ERROR
    ) -> None:
        self._ui_callback = callback
        self._ui_threshold = min_severity

    def handle(
        self,
        error: Exception,
        severity: Optional[ErrorSeverity] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> ErrorSeverity:
        """Report *error* and return the severity it was reported at."""

        severity = severity or severity_for(error)
        details = dict(context or {})
        self._logger.log(
            severity.level,
            "%s: %s",
            type(error).__name__,
            error,
            exc_info=severity is ErrorSeverity.CRITICAL,
            extra={"crop_context": details},
        )
        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=details))

        if self._ui_callback is not None and severity.level >= self._ui_threshold.level:
            self._ui_callback(str(error), severity)
        return severity
