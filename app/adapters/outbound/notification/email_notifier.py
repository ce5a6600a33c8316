# app/adapters/outbound/notification/email_notifier.py

"""
Envio de emails via fastapi-mail.

Quando MAIL_ENABLED é falso (desenvolvimento e testes) a mensagem é apenas
registrada no log.
"""

import logging
from typing import Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType

from app.adapters.configuration.config import settings
from app.adapters.outbound.notification.dispatcher import NotificationDispatcher
from app.application.ports.outbound import INotificationSender

logger = logging.getLogger(__name__)


def build_mail_config() -> ConnectionConfig:
    return ConnectionConfig(
        MAIL_USERNAME=settings.MAIL_USERNAME,
        MAIL_PASSWORD=settings.MAIL_PASSWORD,
        MAIL_FROM=settings.MAIL_FROM,
        MAIL_FROM_NAME=settings.MAIL_FROM_NAME,
        MAIL_SERVER=settings.MAIL_SERVER,
        MAIL_PORT=settings.MAIL_PORT,
        MAIL_STARTTLS=settings.MAIL_STARTTLS,
        MAIL_SSL_TLS=settings.MAIL_SSL_TLS,
        USE_CREDENTIALS=bool(settings.MAIL_USERNAME),
    )


class EmailNotificationSender(INotificationSender):
    """
    Transporte de notificações por email.

    Args:
        enabled: Quando falso, apenas registra a mensagem no log
        mailer: Instância de FastMail (criada a partir das configurações se omitida)
    """

    def __init__(self, enabled: Optional[bool] = None, mailer: Optional[FastMail] = None):
        self.enabled = settings.MAIL_ENABLED if enabled is None else enabled
        self._mailer = mailer

    @property
    def mailer(self) -> FastMail:
        if self._mailer is None:
            self._mailer = FastMail(build_mail_config())
        return self._mailer

    async def send(self, to: str, subject: str, body: str) -> None:
        if not self.enabled:
            logger.info(f"Email (desativado) para {to}: {subject}")
            return

        message = MessageSchema(
            subject=subject,
            recipients=[to],
            body=body,
            subtype=MessageType.plain,
        )
        await self.mailer.send_message(message)
        logger.info(f"Email enviado para {to}: {subject}")


# Instância usada pela aplicação; esvaziada no desligamento
notification_dispatcher = NotificationDispatcher(EmailNotificationSender())
