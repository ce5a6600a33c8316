"""
Fixtures compartilhadas dos testes.

Este módulo fornece:
- Banco SQLite em memória (aiosqlite) com o esquema completo
- Sessão assíncrona por teste
- Transporte de notificações que apenas registra as mensagens
- Gerador de senha determinístico
- Fábricas de payloads de associação e catador
"""

import os

# Antes de importar a aplicação: nenhum teste toca o Postgres nem envia email
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["MAIL_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "testing"

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.adapters.outbound.notification.dispatcher import NotificationDispatcher
from app.adapters.outbound.persistence.database import build_engine
from app.adapters.outbound.persistence.models import Base, Etnia, Genero
from app.application.dtos.associacao_dto import AssociacaoCreate
from app.application.dtos.catador_dto import CatadorCreate
from app.application.ports.outbound import INotificationSender, IPasswordGenerator


# ============================================================
# DATABASE
# ============================================================


@pytest_asyncio.fixture
async def engine():
    """Engine SQLite em memória com chaves estrangeiras ativas."""
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def lookups(db) -> Tuple[Etnia, Genero]:
    """Uma etnia e um gênero cadastrados."""
    etnia = Etnia(nomenclatura="Parda")
    genero = Genero(nomenclatura="Feminino")
    db.add_all([etnia, genero])
    await db.commit()
    return etnia, genero


async def count_rows(db, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


# ============================================================
# COLLABORATORS
# ============================================================


@dataclass
class RecordingSender(INotificationSender):
    """Transporte que guarda as mensagens em memória."""

    messages: List[Tuple[str, str, str]] = field(default_factory=list)
    fail_with: Optional[Exception] = None

    async def send(self, to: str, subject: str, body: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.messages.append((to, subject, body))


class FixedPasswordGenerator(IPasswordGenerator):
    """Gera sempre a mesma senha, no tamanho pedido."""

    def __init__(self):
        self.calls: List[int] = []

    def generate(self, length: int) -> str:
        self.calls.append(length)
        return ("Senha1" * length)[:length]


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def dispatcher(sender) -> NotificationDispatcher:
    return NotificationDispatcher(sender)


@pytest.fixture
def fixed_password_generator() -> FixedPasswordGenerator:
    return FixedPasswordGenerator()


# ============================================================
# PAYLOAD FACTORIES
# ============================================================


def associacao_payload(
        cnpj: str = "11.111.111/0001-11",
        email: str = "contato@recicla-uniao.org.br",
        password: Optional[str] = None,
        **extra: Any,
) -> Dict[str, Any]:
    user: Dict[str, Any] = {"email": email, "name": "Recicla União"}
    if password is not None:
        user["password"] = password
    payload = {
        "cnpj": cnpj,
        "endereco": "Rua das Flores, 100",
        "bairro": "Centro",
        "user": user,
    }
    payload.update(extra)
    return payload


def catador_payload(
        associacao_id: int,
        cpf: str = "123.456.789-09",
        email: str = "maria.silva@recicla-uniao.org.br",
        password: Optional[str] = None,
        **extra: Any,
) -> Dict[str, Any]:
    user: Dict[str, Any] = {"email": email, "name": "Maria Silva"}
    if password is not None:
        user["password"] = password
    payload = {
        "cpf": cpf,
        "endereco": "Travessa Um, 12",
        "bairro": "Vila Nova",
        "associacao_id": associacao_id,
        "user": user,
    }
    payload.update(extra)
    return payload


def make_associacao(**kwargs: Any) -> AssociacaoCreate:
    return AssociacaoCreate(**associacao_payload(**kwargs))


def make_catador(associacao_id: int, **kwargs: Any) -> CatadorCreate:
    return CatadorCreate(**catador_payload(associacao_id, **kwargs))
