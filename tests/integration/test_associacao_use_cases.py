"""
Testes de integração do serviço de associações (SQLite em memória).
"""

import uuid

import pytest

from app.adapters.outbound.persistence.models import Associacao, Catador, Role, User
from app.adapters.outbound.persistence.repositories.associacao_repository import AsyncAssociacaoCRUD
from app.adapters.outbound.persistence.repositories.user_repository import AsyncUserCRUD
from app.adapters.outbound.security.auth_user_manager import UserAuthManager
from app.application.dtos.associacao_dto import AssociacaoUpdate
from app.application.use_cases.associacao_use_cases import AsyncAssociacaoService
from app.application.use_cases.catador_use_cases import AsyncCatadorService
from app.domain.exceptions import (
    CascadeDeleteException,
    DatabaseOperationException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from conftest import count_rows, make_associacao, make_catador


@pytest.fixture
def service(db, fixed_password_generator):
    return AsyncAssociacaoService(db, password_generator=fixed_password_generator)


class TestCreateAssociacao:

    @pytest.mark.asyncio
    async def test_generates_password_when_omitted(self, db, service, fixed_password_generator):
        created = await service.create_associacao(make_associacao())

        assert fixed_password_generator.calls == [8]
        assert created.user.password == "Senha1Se"
        assert len(created.user.password) == 8
        assert created.user.password.isalnum()

        account = await db.get(User, created.user_id)
        assert account.password != created.user.password
        assert await UserAuthManager.verify_password(created.user.password, account.password)

    @pytest.mark.asyncio
    async def test_generated_password_from_real_generator(self, db):
        created = await AsyncAssociacaoService(db).create_associacao(make_associacao())

        assert len(created.user.password) == 8
        assert created.user.password.isalnum()

    @pytest.mark.asyncio
    async def test_keeps_supplied_password(self, service, fixed_password_generator):
        created = await service.create_associacao(make_associacao(password="minhaSenha123"))

        assert created.user.password == "minhaSenha123"
        assert fixed_password_generator.calls == []

    @pytest.mark.asyncio
    async def test_response_carries_account_and_role(self, service):
        created = await service.create_associacao(make_associacao())

        assert created.cnpj == "11.111.111/0001-11"
        assert created.bairro == "Centro"
        assert created.user.email == "contato@recicla-uniao.org.br"
        assert created.user.is_active is True
        assert [role.name for role in created.user.roles] == ["associacao"]
        assert created.user.roles[0].description == "Usuário associacao"

    @pytest.mark.asyncio
    async def test_caller_roles_are_ignored(self, db, service):
        data = make_associacao()
        data.user.role_names = ["admin", "catador"]

        created = await service.create_associacao(data)

        assert [role.name for role in created.user.roles] == ["associacao"]
        assert await count_rows(db, Role) == 1

    @pytest.mark.asyncio
    async def test_role_is_created_once_and_reused(self, db, service):
        first = await service.create_associacao(make_associacao())
        second = await service.create_associacao(
            make_associacao(cnpj="22.222.222/0001-22", email="contato@recicla-norte.org.br")
        )

        assert await count_rows(db, Role) == 1
        assert first.user.roles[0].id == second.user.roles[0].id

    @pytest.mark.asyncio
    async def test_duplicate_cnpj_leaves_nothing_behind(self, db, service):
        await service.create_associacao(make_associacao())

        with pytest.raises(ResourceAlreadyExistsException) as exc_info:
            await service.create_associacao(make_associacao(email="outro@recicla-uniao.org.br"))

        assert exc_info.value.detail == "Já existe uma associacão com o CNPJ cadastrado."
        assert await count_rows(db, User) == 1
        assert await count_rows(db, Associacao) == 1

    @pytest.mark.asyncio
    async def test_duplicate_email_leaves_nothing_behind(self, db, service):
        await service.create_associacao(make_associacao())

        with pytest.raises(ResourceAlreadyExistsException) as exc_info:
            await service.create_associacao(make_associacao(cnpj="22.222.222/0001-22"))

        assert exc_info.value.detail == "Já existe um usuário com o email cadastrado."
        assert await count_rows(db, User) == 1
        assert await count_rows(db, Associacao) == 1

    @pytest.mark.asyncio
    async def test_missing_read_back_is_a_database_error(self, db, fixed_password_generator):
        class VanishingRepository(AsyncAssociacaoCRUD):
            async def get_with_user(self, db, id):
                return None

        service = AsyncAssociacaoService(
            db,
            associacoes=VanishingRepository(Associacao),
            password_generator=fixed_password_generator,
        )

        with pytest.raises(DatabaseOperationException):
            await service.create_associacao(make_associacao())

    @pytest.mark.asyncio
    async def test_failure_after_account_creation_rolls_everything_back(self, db, fixed_password_generator):
        class FailingRecordRepository(AsyncAssociacaoCRUD):
            async def create_for_user(self, db, *, data, user_id):
                raise DatabaseOperationException(detail="Error creating Associacao")

        service = AsyncAssociacaoService(
            db,
            associacoes=FailingRecordRepository(Associacao),
            password_generator=fixed_password_generator,
        )

        with pytest.raises(DatabaseOperationException):
            await service.create_associacao(make_associacao())

        # Account, role attachment and the new role are undone together
        assert await count_rows(db, User) == 0
        assert await count_rows(db, Role) == 0
        assert await count_rows(db, Associacao) == 0


class TestReadAssociacao:

    @pytest.mark.asyncio
    async def test_get_and_list(self, service):
        first = await service.create_associacao(make_associacao())
        second = await service.create_associacao(
            make_associacao(cnpj="22.222.222/0001-22", email="contato@recicla-norte.org.br")
        )

        found = await service.get_associacao(first.id)
        assert found.user.email == "contato@recicla-uniao.org.br"

        listed = await service.list_associacoes()
        assert [a.id for a in listed] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(ResourceNotFoundException) as exc_info:
            await service.get_associacao(999)

        assert "Associação não encontrada." in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_get_by_user_id(self, service):
        created = await service.create_associacao(make_associacao())

        found = await service.get_associacao_by_user_id(created.user_id)
        assert found.id == created.id

        with pytest.raises(ResourceNotFoundException):
            await service.get_associacao_by_user_id(uuid.uuid4())


class TestUpdateAssociacao:

    @pytest.mark.asyncio
    async def test_unchanged_unique_keys_do_not_conflict(self, service):
        created = await service.create_associacao(make_associacao())

        updated = await service.update_associacao(
            created.id,
            AssociacaoUpdate(
                cnpj=created.cnpj,
                bairro="Jardim América",
                user={"email": "contato@recicla-uniao.org.br", "name": "Recicla União Leste"},
            ),
        )

        assert updated.bairro == "Jardim América"
        assert updated.endereco == "Rua das Flores, 100"
        assert updated.user.name == "Recicla União Leste"

    @pytest.mark.asyncio
    async def test_conflicting_cnpj_is_rejected(self, service):
        first = await service.create_associacao(make_associacao())
        await service.create_associacao(
            make_associacao(cnpj="22.222.222/0001-22", email="contato@recicla-norte.org.br")
        )

        with pytest.raises(ResourceAlreadyExistsException):
            await service.update_associacao(first.id, AssociacaoUpdate(cnpj="22.222.222/0001-22"))

        unchanged = await service.get_associacao(first.id)
        assert unchanged.cnpj == "11.111.111/0001-11"

    @pytest.mark.asyncio
    async def test_password_change_is_hashed(self, db, service):
        created = await service.create_associacao(make_associacao())

        await service.update_associacao(created.id, AssociacaoUpdate(user={"password": "novaSenha9"}))

        account = await db.get(User, created.user_id, populate_existing=True)
        assert await UserAuthManager.verify_password("novaSenha9", account.password)

    @pytest.mark.asyncio
    async def test_explicit_null_clears_bairro(self, service):
        created = await service.create_associacao(make_associacao())

        updated = await service.update_associacao(created.id, AssociacaoUpdate(bairro=None, cnpj=None))

        assert updated.bairro is None
        assert updated.cnpj == "11.111.111/0001-11"
        assert updated.endereco == "Rua das Flores, 100"

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        with pytest.raises(ResourceNotFoundException):
            await service.update_associacao(999, AssociacaoUpdate(bairro="Centro"))


class TestDisableAndDelete:

    @pytest.mark.asyncio
    async def test_disable_deactivates_account_only(self, db, service):
        created = await service.create_associacao(make_associacao())

        disabled = await service.disable_associacao(created.id)

        assert disabled.user.is_active is False
        assert await count_rows(db, Associacao) == 1

    @pytest.mark.asyncio
    async def test_delete_removes_record_and_account(self, db, service):
        created = await service.create_associacao(make_associacao())

        await service.delete_associacao(created.id)

        assert await count_rows(db, Associacao) == 0
        assert await count_rows(db, User) == 0
        # The role is shared and stays
        assert await count_rows(db, Role) == 1

    @pytest.mark.asyncio
    async def test_failed_account_delete_keeps_the_record(self, db, service, fixed_password_generator):
        class FailingAccountRepository(AsyncUserCRUD):
            async def delete_account(self, db, *, user_id):
                raise DatabaseOperationException(detail="Error removing User")

        created = await service.create_associacao(make_associacao())
        failing = AsyncAssociacaoService(
            db,
            accounts=FailingAccountRepository(User),
            password_generator=fixed_password_generator,
        )

        with pytest.raises(CascadeDeleteException):
            await failing.delete_associacao(created.id)

        assert await count_rows(db, Associacao) == 1
        assert await count_rows(db, User) == 1
        still_there = await service.get_associacao(created.id)
        assert still_there.user.email == "contato@recicla-uniao.org.br"

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(ResourceNotFoundException):
            await service.delete_associacao(999)

    @pytest.mark.asyncio
    async def test_delete_with_catadores_keeps_everything(self, db, service, dispatcher, fixed_password_generator):
        created = await service.create_associacao(make_associacao())
        catadores = AsyncCatadorService(db, notifier=dispatcher, password_generator=fixed_password_generator)
        await catadores.create_catador(make_catador(created.id))
        await dispatcher.drain()

        with pytest.raises(CascadeDeleteException) as exc_info:
            await service.delete_associacao(created.id)

        assert exc_info.value.detail == "Erro ao apagar associação."
        assert await count_rows(db, Associacao) == 1
        assert await count_rows(db, Catador) == 1
        assert await count_rows(db, User) == 2


class TestAssociatedCatadores:

    @pytest.mark.asyncio
    async def test_lists_catadores_of_owned_associacao(self, db, service, dispatcher, fixed_password_generator):
        mine = await service.create_associacao(make_associacao())
        other = await service.create_associacao(
            make_associacao(cnpj="22.222.222/0001-22", email="contato@recicla-norte.org.br")
        )
        catadores = AsyncCatadorService(db, notifier=dispatcher, password_generator=fixed_password_generator)
        first = await catadores.create_catador(make_catador(mine.id))
        await catadores.create_catador(
            make_catador(other.id, cpf="987.654.321-00", email="joao@recicla-norte.org.br")
        )
        second = await catadores.create_catador(
            make_catador(mine.id, cpf="111.222.333-44", email="ana@recicla-uniao.org.br")
        )
        await dispatcher.drain()

        listed = await service.get_associated_catadores_by_user(mine.user_id)

        assert [c.id for c in listed] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_empty_when_associacao_has_no_catadores(self, service):
        created = await service.create_associacao(make_associacao())

        assert await service.get_associated_catadores_by_user(created.user_id) == []

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with pytest.raises(ResourceNotFoundException):
            await service.get_associated_catadores_by_user(uuid.uuid4())
