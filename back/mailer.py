
import asyncio
import logging
import smtplib
from email.message import EmailMessage

from config import Settings

logger = logging.getLogger(__name__)


class MailerDisabledError(RuntimeError):
    pass


class Mailer:
    """SMTP transport. Enabled only when every connection setting is present."""

    def __init__(self,
                 host: str | None,
                 port: int | None,
                 user: str | None,
                 password: str | None,
                 sender: str | None,
                 secure: bool = False,
                 timeout: float = 30.0) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.secure = secure
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "Mailer":
        mailer = cls(host=settings.smtp_host,
                     port=settings.smtp_port,
                     user=settings.smtp_user,
                     password=settings.smtp_password,
                     sender=settings.smtp_from,
                     secure=settings.smtp_secure)
        if not mailer.is_enabled():
            logger.info("SMTP credentials missing, email reminders are disabled")
        return mailer

    def is_enabled(self) -> bool:
        return all([self.host, self.port, self.user, self.password, self.sender])

    async def send(self, to: str, subject: str, text: str) -> None:
        if not self.is_enabled():
            raise MailerDisabledError("Email transport not configured")
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(text)
        await asyncio.to_thread(self._deliver, message)

    def _deliver(self, message: EmailMessage) -> None:
        if self.secure:
            client = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        else:
            client = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with client:
            if not self.secure:
                client.ehlo()
                if client.has_extn("starttls"):
                    client.starttls()
                    client.ehlo()
            client.login(self.user, self.password)
            client.send_message(message)
