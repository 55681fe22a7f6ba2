import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Union

from inventory_console.models.base import utcnow
from inventory_console.models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationQueue:
    """Transient user-facing messages that expire after a fixed duration."""

    def __init__(self, duration_seconds: float = 5.0, clock: Callable[[], datetime] = utcnow):
        self.duration = timedelta(seconds=duration_seconds)
        self.clock = clock
        self._items: List[Notification] = []
        self._unsent: List[Notification] = []

    def push(self, message: str, type: Union[NotificationType, str] = NotificationType.INFO) -> Notification:
        now = self.clock()
        self._prune(now)
        notification = Notification(
            id=uuid.uuid4().hex,
            message=message,
            type=NotificationType(type),
            created_at=now,
            expires_at=now + self.duration,
        )
        self._items.append(notification)
        self._unsent.append(notification)
        logger.info("Notification [%s] %s", notification.type.value, message)
        return notification

    def success(self, message: str) -> Notification:
        return self.push(message, NotificationType.SUCCESS)

    def info(self, message: str) -> Notification:
        return self.push(message, NotificationType.INFO)

    def warning(self, message: str) -> Notification:
        return self.push(message, NotificationType.WARNING)

    def error(self, message: str) -> Notification:
        return self.push(message, NotificationType.ERROR)

    def active(self, now: Optional[datetime] = None) -> List[Notification]:
        """Drop expired notifications and return the rest, oldest first."""
        self._prune(now or self.clock())
        return list(self._items)

    def _prune(self, now: datetime) -> None:
        self._items = [n for n in self._items if n.expires_at > now]

    def dismiss(self, notification_id: str) -> bool:
        before = len(self._items)
        self._items = [n for n in self._items if n.id != notification_id]
        return len(self._items) != before

    def take_unsent(self) -> List[Notification]:
        """Notifications not yet handed to a push channel."""
        unsent, self._unsent = self._unsent, []
        return unsent
