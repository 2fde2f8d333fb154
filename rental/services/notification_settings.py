from sqlalchemy.orm import Session

import rental.repositories.notification_settings as settings_repo
from rental.schemas.notification import NotificationSettings, NotificationSettingsUpdate


def get_settings(db: Session) -> NotificationSettings:
    """The stored settings, or every channel disabled when nothing is stored yet."""
    row = settings_repo.get_notification_settings(db)
    if row is None:
        return NotificationSettings()
    return NotificationSettings.model_validate(row)


def update_settings(db: Session, data: NotificationSettingsUpdate) -> NotificationSettings:
    """Replace the stored settings; blank destinations are stored as null."""
    row = settings_repo.upsert_notification_settings(
        db,
        email_enabled=data.email_enabled,
        telegram_enabled=data.telegram_enabled,
        whatsapp_enabled=data.whatsapp_enabled,
        telegram_chat_id=data.telegram_chat_id or None,
        whatsapp_number=data.whatsapp_number or None,
        email_from=data.email_from or None,
    )
    return NotificationSettings.model_validate(row)
