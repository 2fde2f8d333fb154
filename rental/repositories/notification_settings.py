from datetime import datetime, timezone

from sqlalchemy.orm import Session

from rental.db.models.notification_settings import (
    SINGLETON_ID,
    NotificationSettings as NotificationSettingsModel,
)


def get_notification_settings(db: Session) -> NotificationSettingsModel | None:
    """Get the singleton settings row, if it has been created."""
    return db.get(NotificationSettingsModel, SINGLETON_ID)


def upsert_notification_settings(db: Session, **fields) -> NotificationSettingsModel:
    """
    Insert the singleton row or update it in place.

    `updated_at` is always refreshed; `created_at` is set only on insert.
    """
    now = datetime.now(timezone.utc)
    row = db.get(NotificationSettingsModel, SINGLETON_ID)
    if row is None:
        row = NotificationSettingsModel(id=SINGLETON_ID, created_at=now)
        db.add(row)

    for key, value in fields.items():
        setattr(row, key, value)
    row.updated_at = now

    db.commit()
    db.refresh(row)
    return row
