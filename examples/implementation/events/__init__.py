"""Events reference implementation package.

This package provides observers for webauthn-app lifecycle notifications.
"""

from .observer import LoggingObserver, RecordingObserver

__all__ = [
    "LoggingObserver",
    "RecordingObserver",
]
