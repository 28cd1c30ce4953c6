"""
Notifier - transient user-visible messages (toasts).
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional


@dataclass(frozen=True)
class Toast:
    message: str
    expires_at: float


class Notifier:
    """
    Append-only queue of toasts that dismiss themselves after a fixed interval
    """

    def __init__(self, duration: float = 3.0,
                 sink: Optional[Callable[[str], None]] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize notifier

        Args:
            duration: Seconds a toast stays visible
            sink: Optional callable that displays each message
            clock: Time source (monotonic seconds)
        """
        self.logger = logging.getLogger(__name__)
        self.duration = duration
        self.sink = sink
        self.clock = clock
        self._toasts: List[Toast] = []

    def notify(self, message: str) -> None:
        """Show a message; never raises"""
        self._prune()
        self._toasts.append(Toast(message, self.clock() + self.duration))
        self.logger.warning(f"Notify: {message}")

        if self.sink is None:
            return
        try:
            self.sink(message)
        except Exception as e:
            self.logger.error(f"Failed to display notification: {e}")

    def active(self) -> List[Toast]:
        """Toasts that have not been dismissed yet"""
        self._prune()
        return list(self._toasts)

    def _prune(self):
        now = self.clock()
        self._toasts = [toast for toast in self._toasts if toast.expires_at > now]
