from datetime import datetime
from enum import Enum

from inventory_console.models.base import CamelModel


class NotificationType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    INFO = "info"
    ERROR = "error"


class Notification(CamelModel):
    id: str
    message: str
    type: NotificationType
    created_at: datetime
    expires_at: datetime
