import logging
from email.mime.text import MIMEText

import aiosmtplib
import httpx

from rental.errors import NotificationDeliveryError, NotificationNotConfiguredError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
HTTP_TIMEOUT = 10.0


class EmailSender:
    """
    Sends plain-text email.

    With `host` set the message goes out over SMTP; otherwise `password` is used
    as the API key of the Resend transactional-email API.
    """

    def __init__(
        self,
        sender: str | None,
        password: str | None,
        host: str | None = None,
        port: int | None = None,
        use_tls: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.sender = sender
        self.password = password
        self.host = host
        self.port = port
        self.use_tls = use_tls
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.sender and self.password)

    async def send(self, to: str, subject: str, body: str, sender: str | None = None) -> None:
        """
        Send one email.

        Raises:
            NotificationNotConfiguredError: Sender credentials are missing.
            NotificationDeliveryError: The SMTP server or API rejected the message.
        """
        if not self.is_configured:
            raise NotificationNotConfiguredError("Email sender credentials are not configured")

        from_address = sender or self.sender
        if self.host:
            await self._send_smtp(from_address, to, subject, body)
        else:
            await self._send_api(from_address, to, subject, body)
        logger.info("Email sent to %s: %s", to, subject)

    async def _send_smtp(self, from_address: str, to: str, subject: str, body: str) -> None:
        message = MIMEText(body, "plain", "utf-8")
        message["Subject"] = subject
        message["From"] = from_address
        message["To"] = to

        port = self.port or 587
        send_kwargs = {
            "hostname": self.host,
            "port": port,
            "username": self.sender,
            "password": self.password,
        }

        # Port 465 uses direct TLS, every other port STARTTLS
        if self.use_tls:
            if port == 465:
                send_kwargs["use_tls"] = True
            else:
                send_kwargs["start_tls"] = True

        try:
            await aiosmtplib.send(message, **send_kwargs)
        except (aiosmtplib.SMTPException, OSError) as e:
            raise NotificationDeliveryError(f"SMTP error: {e}") from e

    async def _send_api(self, from_address: str, to: str, subject: str, body: str) -> None:
        payload = {
            "from": from_address,
            "to": [to],
            "subject": subject,
            "text": body,
        }
        headers = {"Authorization": f"Bearer {self.password}"}
        async with httpx.AsyncClient(transport=self.transport, timeout=HTTP_TIMEOUT) as client:
            try:
                response = await client.post(RESEND_API_URL, json=payload, headers=headers)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise NotificationDeliveryError(f"Email API error: {e}") from e
