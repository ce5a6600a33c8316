# app/application/dtos/associacao_dto.py

"""
Schemas para dados de associação.
"""

from typing import ClassVar, FrozenSet, Optional
from uuid import UUID
from pydantic import Field, field_validator

from app.application.dtos.base_dto import CustomBaseModel
from app.application.dtos.user_dto import UserCreate, UserUpdate, UserOutput, UserCreatedOutput
from app.shared.utils.input_validation import InputValidator


def _check_cnpj(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    is_valid, error_msg = InputValidator.validate_cnpj(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


def _clean_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    return InputValidator.sanitize_string(v)


class AssociacaoBase(CustomBaseModel):
    """
    Campos próprios da associação.
    """
    cnpj: str = Field(..., description="CNPJ da associação, com ou sem máscara.")
    endereco: Optional[str] = Field(None, description="Endereço da associação.")
    bairro: Optional[str] = Field(None, description="Bairro da associação.")

    @field_validator('cnpj')
    def validate_cnpj(cls, v):
        """
        Confere se o CNPJ possui 14 dígitos.

        Raises:
            ValueError: Se o CNPJ for inválido
        """
        return _check_cnpj(v)

    @field_validator('endereco', 'bairro')
    def clean_text(cls, v):
        return _clean_text(v)


class AssociacaoCreate(AssociacaoBase):
    """
    Schema para cadastro de uma associação com a sua conta.
    """
    user: UserCreate = Field(..., description="Conta dona da associação.")


class AssociacaoUpdate(CustomBaseModel):
    """
    Schema para atualização parcial de uma associação e da sua conta.

    Campos omitidos não mudam; null apaga apenas endereço e bairro.
    """
    CLEARABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"endereco", "bairro"})

    cnpj: Optional[str] = Field(None, description="Novo CNPJ.")
    endereco: Optional[str] = Field(None, description="Novo endereço; null apaga.")
    bairro: Optional[str] = Field(None, description="Novo bairro; null apaga.")
    user: Optional[UserUpdate] = Field(None, description="Alterações da conta.")

    @field_validator('cnpj')
    def validate_cnpj(cls, v):
        return _check_cnpj(v)

    @field_validator('endereco', 'bairro')
    def clean_text(cls, v):
        return _clean_text(v)


class AssociacaoOutput(AssociacaoBase):
    """
    Schema de retorno de uma associação com a sua conta.
    """
    id: int = Field(..., description="Identificador da associação.")
    user_id: UUID = Field(..., description="Conta dona da associação.")
    user: UserOutput

    class Config:
        from_attributes = True


class AssociacaoCreatedOutput(AssociacaoOutput):
    """
    Retorno do cadastro: inclui a senha atribuída à conta.
    """
    user: UserCreatedOutput

    @classmethod
    def from_record(cls, associacao, password: str) -> "AssociacaoCreatedOutput":
        data = AssociacaoOutput.model_validate(associacao).model_dump(exclude={"user"})
        return cls(**data, user=UserCreatedOutput.from_account(associacao.user, password))
