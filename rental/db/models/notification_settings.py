from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from rental.db.base import Base

# The table holds exactly one row under this id.
SINGLETON_ID = 1


class NotificationSettings(Base):
    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, default=SINGLETON_ID)
    email_enabled = Column(Boolean, nullable=False, default=False)
    telegram_enabled = Column(Boolean, nullable=False, default=False)
    whatsapp_enabled = Column(Boolean, nullable=False, default=False)
    telegram_chat_id = Column(String, nullable=True)
    whatsapp_number = Column(String, nullable=True)
    email_from = Column(String(320), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
