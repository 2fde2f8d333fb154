from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Channel = Literal["email", "telegram", "whatsapp"]


class NotificationSettings(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email_enabled: bool = False
    telegram_enabled: bool = False
    whatsapp_enabled: bool = False
    telegram_chat_id: str | None = None
    whatsapp_number: str | None = None
    email_from: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NotificationSettingsUpdate(BaseModel):
    email_enabled: bool = False
    telegram_enabled: bool = False
    whatsapp_enabled: bool = False
    telegram_chat_id: str | None = None
    whatsapp_number: str | None = None
    email_from: str | None = None


class NotificationTest(BaseModel):
    """The channel may be named `type` or `service`; older clients send the latter."""

    channel: str = Field(..., validation_alias=AliasChoices("type", "service", "channel"))
    recipient: str | None = None
