from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # JWT Configuration
    jwt_secret: str | None = Field(default=None, alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")

    # Password of the "admin" user seeded by the users migration
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")

    # Email: SMTP when EMAIL_HOST is set, otherwise the Resend API keyed by EMAIL_PASS
    email_user: str | None = Field(default=None, alias="EMAIL_USER")
    email_pass: str | None = Field(default=None, alias="EMAIL_PASS")
    email_host: str | None = Field(default=None, alias="EMAIL_HOST")
    email_port: int | None = Field(default=None, alias="EMAIL_PORT")
    email_use_tls: bool = Field(default=True, alias="EMAIL_USE_TLS")

    # Telegram Bot API
    telegram_bot_token: str | None = Field(default=None, alias="TELEGRAM_BOT_TOKEN")
    telegram_chat_id: str | None = Field(default=None, alias="TELEGRAM_CHAT_ID")

    # WhatsApp through Twilio
    whatsapp_account_sid: str | None = Field(default=None, alias="WHATSAPP_ACCOUNT_SID")
    whatsapp_auth_token: str | None = Field(default=None, alias="WHATSAPP_AUTH_TOKEN")
    whatsapp_from_number: str = Field(default="+14155238886", alias="WHATSAPP_FROM_NUMBER")
    whatsapp_to_number: str | None = Field(default=None, alias="WHATSAPP_TO_NUMBER")

    # Restricts CORS to this origin when set
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    @field_validator(
        "jwt_secret",
        "admin_password",
        "email_user",
        "email_pass",
        "email_host",
        "telegram_bot_token",
        "telegram_chat_id",
        "whatsapp_account_sid",
        "whatsapp_auth_token",
        "whatsapp_to_number",
        "frontend_url",
        mode="before",
    )
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("email_port", mode="before")
    @classmethod
    def empty_str_to_none_int(cls, v: str | int | None) -> int | None:
        """Convert empty strings to None for optional integer fields."""
        if v == "":
            return None
        if isinstance(v, str):
            try:
                return int(v)
            except ValueError:
                return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
