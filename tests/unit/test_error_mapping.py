"""
Tradução das exceções do domínio para status HTTP.
"""

import pytest

from app.domain.exceptions import (
    CascadeDeleteException,
    DatabaseOperationException,
    DependencyProvisioningException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from app.shared.middleware.exception_middleware import domain_status_code, extract_constraint_name


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ResourceNotFoundException("Associação não encontrada.", resource_id=1), 404),
        (ResourceAlreadyExistsException("Já existe um catador com o CPF cadastrado."), 409),
        (DependencyProvisioningException("Erro ao consultar perfis."), 503),
        (DatabaseOperationException("Erro"), 500),
        (CascadeDeleteException("Erro ao apagar associação."), 400),
    ],
)
def test_domain_status_code(exc, expected):
    assert domain_status_code(exc) == expected


def test_not_found_detail_carries_the_id():
    assert str(ResourceNotFoundException("Catador não encontrado.", resource_id=7)) == "Catador não encontrado. (ID: 7)"


def test_extract_constraint_name():
    assert extract_constraint_name('duplicate key value violates unique constraint "users_email_key"') == "users_email_key"
    assert extract_constraint_name("UNIQUE constraint failed: associacoes.cnpj") == "associacoes.cnpj"
    assert extract_constraint_name("something else") is None
