"""
Error events raised by file list operations

Operations never let exceptions escape to their callers. They wrap failures
in an ErrorEvent and hand it to ErrorEventHandler, which forwards it to the
registered listeners (for example a dialog in the UI layer) or, when nobody
listens, to the error log.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional

from filepane.utils.error_log import ErrorLog


@dataclass
class ErrorEvent:
    description: str
    throwable: Optional[BaseException] = None
    is_expected: bool = False

    @classmethod
    def from_throwable(cls, throwable: BaseException) -> 'ErrorEvent':
        description = str(throwable) or type(throwable).__name__
        return cls(description, throwable=throwable)

    @classmethod
    def from_message(cls, message: str) -> 'ErrorEvent':
        return cls(message)

    def expected(self) -> 'ErrorEvent':
        """Mark as an anticipated, user-facing condition"""
        self.is_expected = True
        return self

    def handle(self):
        ErrorEventHandler.handle(self)


class ErrorEventHandler:
    """Class-level registry of error event listeners"""

    _listeners: List[Callable[[ErrorEvent], None]] = []

    @classmethod
    def add_listener(cls, listener: Callable[[ErrorEvent], None]):
        if listener not in cls._listeners:
            cls._listeners.append(listener)

    @classmethod
    def remove_listener(cls, listener: Callable[[ErrorEvent], None]):
        if listener in cls._listeners:
            cls._listeners.remove(listener)

    @classmethod
    def handle(cls, event: ErrorEvent):
        listeners = list(cls._listeners)
        if not listeners:
            ErrorLog.log_event(event)
            return
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                # A broken listener must not hide the original event
                ErrorLog.log_event(event)
                ErrorLog.log_event(ErrorEvent.from_throwable(e))
