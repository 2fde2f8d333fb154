"""Telegram Bot API and Twilio WhatsApp senders."""

import logging
import re

import httpx

from rental.errors import (
    NotificationDeliveryError,
    NotificationInvalidRecipientError,
    NotificationNotConfiguredError,
)

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"
TWILIO_API_URL = "https://api.twilio.com/2010-04-01"
HTTP_TIMEOUT = 10.0


def format_phone_number(phone: str | None) -> str | None:
    """
    Normalize a phone number to E.164, assuming Iran (+98) for local formats.

    Returns None when the number cannot be interpreted.
    """
    if not phone:
        return None

    digits = re.sub(r"\D", "", phone)
    if digits.startswith("98"):
        return f"+{digits}"
    if digits.startswith("0"):
        return f"+98{digits[1:]}"
    if len(digits) == 10:
        return f"+98{digits}"
    if digits.startswith("9") and len(digits) == 9:
        return f"+98{digits}"

    # Longer numbers are taken as already carrying a country code
    if len(digits) > 10:
        return f"+{digits}"
    return None


class TelegramSender:
    def __init__(
        self,
        bot_token: str | None,
        chat_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token)

    async def send(self, message: str, chat_id: str | None = None) -> None:
        """
        Post a message to a chat; `chat_id` overrides the configured chat.

        Raises:
            NotificationNotConfiguredError: No bot token or no chat to post to.
            NotificationDeliveryError: The Bot API rejected the message.
        """
        target = chat_id or self.chat_id
        if not self.is_configured or not target:
            raise NotificationNotConfiguredError("Telegram bot token or chat id is not configured")

        url = f"{TELEGRAM_API_URL}/bot{self.bot_token}/sendMessage"
        payload = {"chat_id": target, "text": message, "parse_mode": "HTML"}
        async with httpx.AsyncClient(transport=self.transport, timeout=HTTP_TIMEOUT) as client:
            try:
                response = await client.post(url, json=payload)
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                # The bot token is part of the URL, so only the status is reported
                status_code = getattr(getattr(e, "response", None), "status_code", None)
                raise NotificationDeliveryError(
                    f"Telegram API error (status {status_code})"
                ) from e

        if not data.get("ok"):
            raise NotificationDeliveryError(
                f"Telegram API error: {data.get('description', 'unknown error')}"
            )
        logger.info("Telegram notification sent to chat %s", target)


class WhatsAppSender:
    def __init__(
        self,
        account_sid: str | None,
        auth_token: str | None,
        from_number: str,
        to_number: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.to_number = to_number
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token)

    async def send(self, message: str, to_number: str | None = None) -> None:
        """
        Send a WhatsApp message through Twilio; `to_number` overrides the configured number.

        Raises:
            NotificationNotConfiguredError: Credentials or destination missing.
            NotificationInvalidRecipientError: The destination is not a phone number.
            NotificationDeliveryError: Twilio rejected the message.
        """
        destination = to_number or self.to_number
        if not self.is_configured or not destination:
            raise NotificationNotConfiguredError(
                "WhatsApp credentials or destination number are not configured"
            )

        formatted = format_phone_number(destination)
        if not formatted:
            raise NotificationInvalidRecipientError(f"Invalid phone number: {destination}")

        url = f"{TWILIO_API_URL}/Accounts/{self.account_sid}/Messages.json"
        form = {
            "From": f"whatsapp:{self.from_number}",
            "To": f"whatsapp:{formatted}",
            "Body": message,
        }
        async with httpx.AsyncClient(transport=self.transport, timeout=HTTP_TIMEOUT) as client:
            try:
                response = await client.post(
                    url, data=form, auth=(self.account_sid, self.auth_token)
                )
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise NotificationDeliveryError(f"WhatsApp API error: {e}") from e
        logger.info("WhatsApp notification sent to %s", formatted)
