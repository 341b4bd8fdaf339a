import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from research_navigator.config import settings

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    level: str  # success | error
    message: str
    duration: float
    created_at: float = field(default_factory=time.monotonic)

    @property
    def expired(self) -> bool:
        return time.monotonic() - self.created_at >= self.duration


class Notifier:
    """Transient user-facing messages (toasts)."""

    def __init__(self, duration: Optional[float] = None):
        self.duration = settings.notification_duration if duration is None else duration
        self.history: List[Notification] = []

    def _push(self, level: str, message: str) -> Notification:
        notification = Notification(level=level, message=message, duration=self.duration)
        self.history.append(notification)
        log = logger.error if level == "error" else logger.info
        log(f"[{level}] {message}")
        return notification

    def success(self, message: str) -> Notification:
        return self._push("success", message)

    def error(self, message: str) -> Notification:
        return self._push("error", message)

    @property
    def active(self) -> List[Notification]:
        return [n for n in self.history if not n.expired]

    @property
    def last(self) -> Optional[Notification]:
        return self.history[-1] if self.history else None
