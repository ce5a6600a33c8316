"""
Testes do envio de notificações em segundo plano.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.adapters.outbound.notification.dispatcher import NotificationDispatcher
from app.adapters.outbound.notification.email_notifier import EmailNotificationSender


class TestNotificationDispatcher:

    @pytest.mark.asyncio
    async def test_dispatch_returns_before_delivery(self):
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_send(to, subject, body):
            started.set()
            await release.wait()

        sender = AsyncMock()
        sender.send.side_effect = slow_send
        dispatcher = NotificationDispatcher(sender)

        dispatcher.dispatch("maria@recicla.org.br", "Assunto", "Corpo")
        assert dispatcher.pending == 1

        await started.wait()
        release.set()
        await dispatcher.drain()

        assert dispatcher.pending == 0
        sender.send.assert_awaited_once_with("maria@recicla.org.br", "Assunto", "Corpo")

    @pytest.mark.asyncio
    async def test_failures_are_logged_not_raised(self, caplog):
        sender = AsyncMock()
        sender.send.side_effect = ConnectionError("smtp down")
        dispatcher = NotificationDispatcher(sender)

        task = dispatcher.dispatch("maria@recicla.org.br", "Assunto", "Corpo")
        await dispatcher.drain()

        assert task.exception() is None
        assert "Failed to deliver notification" in caplog.text
        # No retry
        sender.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_drain_without_pending_tasks(self):
        dispatcher = NotificationDispatcher(AsyncMock())
        await dispatcher.drain()
        assert dispatcher.pending == 0


class TestEmailNotificationSender:

    @pytest.mark.asyncio
    async def test_disabled_sender_only_logs(self, caplog):
        mailer = AsyncMock()
        sender = EmailNotificationSender(enabled=False, mailer=mailer)

        with caplog.at_level("INFO"):
            await sender.send("maria@recicla.org.br", "Conta criada com sucesso", "Sua senha")

        mailer.send_message.assert_not_awaited()
        assert "Conta criada com sucesso" in caplog.text

    @pytest.mark.asyncio
    async def test_enabled_sender_uses_fastapi_mail(self):
        mailer = AsyncMock()
        sender = EmailNotificationSender(enabled=True, mailer=mailer)

        await sender.send("maria@recicla.org.br", "Conta criada com sucesso", "Sua senha")

        mailer.send_message.assert_awaited_once()
        message = mailer.send_message.await_args.args[0]
        assert message.subject == "Conta criada com sucesso"
        assert "maria@recicla.org.br" in str(message.recipients[0])
