from rental.db.models.user import User
from rental.db.models.contract import Contract
from rental.db.models.notification_settings import NotificationSettings

__all__ = ["User", "Contract", "NotificationSettings"]
