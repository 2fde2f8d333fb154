"""
Notification dispatch for the contract workflow and the admin test action.

`NotificationDispatcher.send` propagates every failure and is only used by the
interactive test action. Contract creation and signing go through
`best_effort_send`, which logs failures and never raises, so a provider outage
cannot fail a request whose database write has already committed.

Workflow notifications only go out on channels switched on in the stored
notification settings. The test action ignores those switches.
"""

import html
import logging
from typing import Any

import httpx

from rental.core import messages
from rental.core.config import Settings
from rental.db.models.contract import Contract as ContractModel
from rental.db.models.notification_settings import (
    NotificationSettings as NotificationSettingsModel,
)
from rental.errors import (
    DomainValidationError,
    NotificationError,
    NotificationNotConfiguredError,
)
from rental.schemas.notification import Channel
from rental.services.email import EmailSender
from rental.services.messaging import TelegramSender, WhatsAppSender

logger = logging.getLogger(__name__)

CHANNELS: tuple[Channel, ...] = ("email", "telegram", "whatsapp")


class NotificationDispatcher:
    def __init__(
        self,
        email: EmailSender,
        telegram: TelegramSender,
        whatsapp: WhatsAppSender,
    ):
        self.email = email
        self.telegram = telegram
        self.whatsapp = whatsapp

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "NotificationDispatcher":
        """Build all three senders from configuration."""
        return cls(
            email=EmailSender(
                sender=config.email_user,
                password=config.email_pass,
                host=config.email_host,
                port=config.email_port,
                use_tls=config.email_use_tls,
                transport=transport,
            ),
            telegram=TelegramSender(
                bot_token=config.telegram_bot_token,
                chat_id=config.telegram_chat_id,
                transport=transport,
            ),
            whatsapp=WhatsAppSender(
                account_sid=config.whatsapp_account_sid,
                auth_token=config.whatsapp_auth_token,
                from_number=config.whatsapp_from_number,
                to_number=config.whatsapp_to_number,
                transport=transport,
            ),
        )

    async def send(self, channel: Channel, **kwargs: Any) -> None:
        """
        Send through one channel, propagating every failure.

        Raises:
            DomainValidationError: Unknown channel.
            NotificationError: Channel not configured, bad recipient, or provider failure.
        """
        if channel == "email":
            await self.email.send(**kwargs)
        elif channel == "telegram":
            await self.telegram.send(**kwargs)
        elif channel == "whatsapp":
            await self.whatsapp.send(**kwargs)
        else:
            raise DomainValidationError(messages.UNKNOWN_CHANNEL)

    async def best_effort_send(self, channel: Channel, **kwargs: Any) -> bool:
        """Send through one channel; log instead of raising. Returns whether it was delivered."""
        try:
            await self.send(channel, **kwargs)
        except NotificationNotConfiguredError:
            logger.warning("%s not configured - skipping notification", channel)
            return False
        except NotificationError as e:
            logger.error("Failed to send %s notification: %s", channel, e)
            return False
        return True


def channel_enabled(stored: NotificationSettingsModel | None, channel: Channel) -> bool:
    """Whether the stored settings switch `channel` on. No stored row means every channel is off."""
    return stored is not None and bool(getattr(stored, f"{channel}_enabled"))


async def notify_access_code(
    notifier: NotificationDispatcher,
    contract: ContractModel,
    stored: NotificationSettingsModel | None = None,
) -> bool:
    """Email the tenant their contract number and access code, when email is enabled."""
    if not channel_enabled(stored, "email"):
        logger.info("Email disabled - access code for %s not sent", contract.contract_number)
        return False

    return await notifier.best_effort_send(
        "email",
        to=contract.tenant_email,
        subject=messages.ACCESS_CODE_SUBJECT,
        body=messages.ACCESS_CODE_BODY.format(
            access_code=contract.access_code,
            contract_number=contract.contract_number,
        ),
        sender=stored.email_from,
    )


async def notify_contract_signed(
    notifier: NotificationDispatcher,
    contract: ContractModel,
    stored: NotificationSettingsModel | None = None,
) -> dict[str, bool]:
    """
    Tell the landlord a contract was signed, on every channel the stored settings enable.

    Returns the delivery result per channel attempted.
    """
    results: dict[str, bool] = {}

    if channel_enabled(stored, "email"):
        results["email"] = await notifier.best_effort_send(
            "email",
            to=contract.landlord_email,
            subject=messages.SIGNED_EMAIL_SUBJECT,
            body=messages.SIGNED_EMAIL_BODY.format(
                contract_number=contract.contract_number,
                tenant_name=contract.tenant_name,
            ),
            sender=stored.email_from,
        )

    if channel_enabled(stored, "telegram"):
        results["telegram"] = await notifier.best_effort_send(
            "telegram",
            message=messages.SIGNED_TELEGRAM.format(
                contract_number=html.escape(contract.contract_number),
                landlord_name=html.escape(contract.landlord_name),
                tenant_name=html.escape(contract.tenant_name),
            ),
            chat_id=stored.telegram_chat_id,
        )

    if channel_enabled(stored, "whatsapp"):
        results["whatsapp"] = await notifier.best_effort_send(
            "whatsapp",
            message=messages.SIGNED_WHATSAPP.format(
                contract_number=contract.contract_number,
                landlord_name=contract.landlord_name,
                tenant_name=contract.tenant_name,
            ),
            to_number=stored.whatsapp_number,
        )

    delivered = sum(results.values())
    logger.info(
        "Contract %s signed: %d/%d notifications delivered",
        contract.contract_number,
        delivered,
        len(results),
    )
    return results


async def send_test_notification(
    notifier: NotificationDispatcher,
    channel: str,
    recipient: str | None = None,
    stored: NotificationSettingsModel | None = None,
) -> None:
    """
    Send a test message through one channel, surfacing any failure to the caller.

    Email goes to `recipient`, falling back to the sender address itself.
    """
    if channel not in CHANNELS:
        raise DomainValidationError(messages.UNKNOWN_CHANNEL)

    if channel == "email":
        sender = (stored.email_from if stored else None) or notifier.email.sender
        to = recipient or sender
        if not to:
            raise DomainValidationError(messages.RECIPIENT_REQUIRED)
        await notifier.send(
            "email",
            to=to,
            subject=messages.TEST_SUBJECT,
            body=messages.TEST_BODY,
            sender=sender,
        )
    elif channel == "telegram":
        await notifier.send(
            "telegram",
            message=messages.TEST_BODY,
            chat_id=stored.telegram_chat_id if stored else None,
        )
    else:
        await notifier.send(
            "whatsapp",
            message=messages.TEST_BODY,
            to_number=recipient or (stored.whatsapp_number if stored else None),
        )
