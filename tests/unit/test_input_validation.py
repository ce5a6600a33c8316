"""
Testes das validações de entrada e dos dtos.
"""

import pytest
from pydantic import ValidationError

from app.adapters.outbound.security.password_generator import AlphanumericPasswordGenerator
from app.application.dtos.associacao_dto import AssociacaoCreate, AssociacaoUpdate
from app.application.dtos.catador_dto import CatadorCreate, CatadorUpdate
from app.shared.utils.input_validation import InputValidator


class TestDocuments:

    @pytest.mark.parametrize("cnpj", ["11.111.111/0001-11", "11111111000111", " 11.111.111/0001-11 "])
    def test_valid_cnpj(self, cnpj):
        assert InputValidator.validate_cnpj(cnpj) == (True, None)

    @pytest.mark.parametrize("cnpj", ["", "11.111.111/0001", "11.111.111/0001-1a"])
    def test_invalid_cnpj(self, cnpj):
        is_valid, message = InputValidator.validate_cnpj(cnpj)
        assert not is_valid
        assert "CNPJ" in message

    def test_cpf_requires_eleven_digits(self):
        assert InputValidator.validate_cpf("123.456.789-09") == (True, None)
        assert not InputValidator.validate_cpf("123.456.789")[0]


class TestDtos:

    def test_cnpj_is_stored_as_given(self):
        data = AssociacaoCreate(cnpj=" 11.111.111/0001-11", user={"email": "a@recicla.org.br"})
        assert data.cnpj == "11.111.111/0001-11"

    def test_password_is_optional(self):
        data = AssociacaoCreate(cnpj="11111111000111", user={"email": "a@recicla.org.br"})
        assert data.user.password is None

    def test_blank_password_counts_as_missing(self):
        data = AssociacaoCreate(cnpj="11111111000111", user={"email": "a@recicla.org.br", "password": ""})
        assert data.user.password is None

    def test_invalid_cnpj_is_rejected(self):
        with pytest.raises(ValidationError):
            AssociacaoCreate(cnpj="123", user={"email": "a@recicla.org.br"})

    def test_invalid_email_is_rejected(self):
        with pytest.raises(ValidationError):
            CatadorCreate(cpf="12345678909", associacao_id=1, user={"email": "sem-arroba"})

    def test_partial_update_drops_missing_fields(self):
        data = AssociacaoUpdate(bairro="Centro")
        assert data.changes(exclude={"user"}) == {"bairro": "Centro"}

    def test_explicit_null_clears_only_optional_fields(self):
        data = AssociacaoUpdate(cnpj=None, bairro=None)
        assert data.changes(exclude={"user"}) == {"bairro": None}

    def test_catador_lookups_can_be_cleared(self):
        data = CatadorUpdate(etnia_id=None, associacao_id=None, user={"email": None, "name": None})
        assert data.changes(exclude={"user"}) == {"etnia_id": None}
        assert data.user.changes() == {"name": None}


class TestPasswordGenerator:

    def test_generates_alphanumeric_of_requested_length(self):
        password = AlphanumericPasswordGenerator().generate(8)
        assert len(password) == 8
        assert password.isalnum()

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            AlphanumericPasswordGenerator().generate(0)
