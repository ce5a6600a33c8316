"""
Testes de integração do serviço de catadores (SQLite em memória).
"""

import pytest
import pytest_asyncio

from app.adapters.outbound.persistence.models import Catador, Role, User
from app.adapters.outbound.persistence.repositories.catador_repository import AsyncCatadorCRUD
from app.application.dtos.catador_dto import CatadorSemAssociacaoOutput, CatadorUpdate
from app.application.use_cases.associacao_use_cases import AsyncAssociacaoService
from app.application.use_cases.catador_use_cases import WELCOME_SUBJECT, AsyncCatadorService
from app.domain.exceptions import (
    DatabaseOperationException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from conftest import count_rows, make_associacao, make_catador


@pytest.fixture
def service(db, dispatcher, fixed_password_generator):
    return AsyncCatadorService(db, notifier=dispatcher, password_generator=fixed_password_generator)


@pytest_asyncio.fixture
async def associacao_id(db, fixed_password_generator) -> int:
    created = await AsyncAssociacaoService(db, password_generator=fixed_password_generator).create_associacao(
        make_associacao()
    )
    return created.id


class TestCreateCatador:

    @pytest.mark.asyncio
    async def test_creates_record_account_and_sends_password(self, db, service, sender, dispatcher, associacao_id):
        created = await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        assert created.cpf == "123.456.789-09"
        assert created.associacao_id == associacao_id
        assert created.associacao.cnpj == "11.111.111/0001-11"
        assert [role.name for role in created.user.roles] == ["catador"]
        assert created.user.password == "Senha1Se"

        assert len(sender.messages) == 1
        to, subject, body = sender.messages[0]
        assert to == "maria.silva@recicla-uniao.org.br"
        assert subject == WELCOME_SUBJECT
        assert "Sua senha para login é Senha1Se." in body

    @pytest.mark.asyncio
    async def test_with_etnia_and_genero(self, service, dispatcher, associacao_id, lookups):
        etnia, genero = lookups

        created = await service.create_catador(
            make_catador(associacao_id, etnia_id=etnia.id, genero_id=genero.id)
        )
        await dispatcher.drain()

        assert created.etnia.nomenclatura == "Parda"
        assert created.genero.nomenclatura == "Feminino"

    @pytest.mark.asyncio
    async def test_missing_associacao_creates_nothing(self, db, service, sender, dispatcher):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await service.create_catador(make_catador(999))
        await dispatcher.drain()

        assert "Associação não encontrada." in exc_info.value.detail
        assert await count_rows(db, User) == 0
        assert await count_rows(db, Catador) == 0
        assert await count_rows(db, Role) == 0
        assert sender.messages == []

    @pytest.mark.asyncio
    async def test_duplicate_cpf(self, db, service, dispatcher, associacao_id):
        await service.create_catador(make_catador(associacao_id))

        with pytest.raises(ResourceAlreadyExistsException) as exc_info:
            await service.create_catador(make_catador(associacao_id, email="outra@recicla-uniao.org.br"))
        await dispatcher.drain()

        assert exc_info.value.detail == "Já existe um catador com o CPF cadastrado."
        assert await count_rows(db, Catador) == 1

    @pytest.mark.asyncio
    async def test_missing_etnia(self, db, service, associacao_id):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await service.create_catador(make_catador(associacao_id, etnia_id=42))

        assert "Etnia não encontrada." in exc_info.value.detail
        assert await count_rows(db, Catador) == 0

    @pytest.mark.asyncio
    async def test_failed_email_does_not_undo_creation(self, db, service, sender, dispatcher, associacao_id):
        sender.fail_with = ConnectionError("smtp down")

        created = await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        assert created.id is not None
        assert sender.messages == []
        assert await count_rows(db, Catador) == 1


    @pytest.mark.asyncio
    async def test_failure_after_account_creation_rolls_everything_back(
            self, db, sender, dispatcher, associacao_id, fixed_password_generator
    ):
        class FailingRecordRepository(AsyncCatadorCRUD):
            async def create_for_user(self, db, *, data, user_id):
                raise DatabaseOperationException(detail="Error creating Catador")

        service = AsyncCatadorService(
            db,
            notifier=dispatcher,
            catadores=FailingRecordRepository(Catador),
            password_generator=fixed_password_generator,
        )

        with pytest.raises(DatabaseOperationException):
            await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        # Only the associação fixture remains: its account and role
        assert await count_rows(db, Catador) == 0
        assert await count_rows(db, User) == 1
        assert await count_rows(db, Role) == 1
        assert sender.messages == []


class TestReadCatador:

    @pytest.mark.asyncio
    async def test_get_and_list(self, service, dispatcher, associacao_id):
        first = await service.create_catador(make_catador(associacao_id))
        second = await service.create_catador(
            make_catador(associacao_id, cpf="111.222.333-44", email="ana@recicla-uniao.org.br")
        )
        await dispatcher.drain()

        found = await service.get_catador(second.id)
        assert found.user.email == "ana@recicla-uniao.org.br"

        assert [c.id for c in await service.list_catadores()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await service.get_catador(999)

        assert "Catador não encontrado." in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_projection_without_associacao(self, db, service, dispatcher, associacao_id, fixed_password_generator):
        created = await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        owner = await AsyncAssociacaoService(db, password_generator=fixed_password_generator).get_associacao(
            associacao_id
        )
        catadores = await AsyncAssociacaoService(db).get_associated_catadores_by_user(owner.user_id)
        projected = [CatadorSemAssociacaoOutput.model_validate(c).model_dump() for c in catadores]

        assert [p["id"] for p in projected] == [created.id]
        assert "associacao" not in projected[0]
        assert projected[0]["user"]["email"] == "maria.silva@recicla-uniao.org.br"


class TestUpdateCatador:

    @pytest.mark.asyncio
    async def test_partial_update(self, service, dispatcher, associacao_id):
        created = await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        updated = await service.update_catador(
            created.id,
            CatadorUpdate(cpf=created.cpf, bairro="Jardim Europa", user={"name": "Maria S. Silva"}),
        )

        assert updated.bairro == "Jardim Europa"
        assert updated.endereco == "Travessa Um, 12"
        assert updated.user.name == "Maria S. Silva"

    @pytest.mark.asyncio
    async def test_explicit_null_clears_etnia(self, service, dispatcher, associacao_id, lookups):
        etnia, genero = lookups
        created = await service.create_catador(
            make_catador(associacao_id, etnia_id=etnia.id, genero_id=genero.id)
        )
        await dispatcher.drain()

        updated = await service.update_catador(created.id, CatadorUpdate(etnia_id=None))

        assert updated.etnia is None
        assert updated.etnia_id is None
        assert updated.genero.nomenclatura == "Feminino"

    @pytest.mark.asyncio
    async def test_conflicting_email(self, service, dispatcher, associacao_id):
        first = await service.create_catador(make_catador(associacao_id))
        await service.create_catador(
            make_catador(associacao_id, cpf="111.222.333-44", email="ana@recicla-uniao.org.br")
        )
        await dispatcher.drain()

        with pytest.raises(ResourceAlreadyExistsException):
            await service.update_catador(first.id, CatadorUpdate(user={"email": "ana@recicla-uniao.org.br"}))

    @pytest.mark.asyncio
    async def test_move_to_missing_associacao(self, service, dispatcher, associacao_id):
        created = await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        with pytest.raises(ResourceNotFoundException):
            await service.update_catador(created.id, CatadorUpdate(associacao_id=999))

        unchanged = await service.get_catador(created.id)
        assert unchanged.associacao_id == associacao_id


class TestDeleteCatador:

    @pytest.mark.asyncio
    async def test_delete_removes_record_and_account(self, db, service, dispatcher, associacao_id):
        created = await service.create_catador(make_catador(associacao_id))
        await dispatcher.drain()

        await service.delete_catador(created.id)

        assert await count_rows(db, Catador) == 0
        # Only the associação account is left
        assert await count_rows(db, User) == 1

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(ResourceNotFoundException):
            await service.delete_catador(999)
