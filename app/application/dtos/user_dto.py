# app/application/dtos/user_dto.py

"""
Schemas para dados de conta de usuário.

Este módulo define os dtos Pydantic para validação e serialização
dos dados da conta que acompanha cada associação e cada catador.
"""

from uuid import UUID
from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional
from app.application.dtos.base_dto import CustomBaseModel
from app.shared.utils.input_validation import InputValidator
from pydantic import (
    field_validator,
    EmailStr,
    Field,
)


def _check_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    is_valid, error_msg = InputValidator.validate_email(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


def _check_password(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    is_valid, error_msg = InputValidator.validate_password(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


def _check_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = InputValidator.sanitize_name(v)
    is_valid, error_msg = InputValidator.validate_name(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


class UserBase(CustomBaseModel):
    """
    Schema base para dados de conta.

    Contém os atributos comuns a todos os dtos de conta.
    """
    email: EmailStr = Field(
        ...,
        description="Email da conta. Deve ser um email válido e único.",
    )

    @field_validator('email')
    def validate_email_security(cls, v):
        """
        Valida a segurança do email para evitar injeções.

        Raises:
            ValueError: Se o email for inválido
        """
        return _check_email(v)


class UserCreate(UserBase):
    """
    Schema da conta enviada junto com o cadastro de uma entidade.

    A senha é opcional: quando ausente, uma senha alfanumérica é gerada.
    Os perfis informados são ignorados; cada entidade recebe o seu perfil fixo.
    """
    password: Optional[str] = Field(
        None, description="Senha inicial. Gerada automaticamente se omitida."
    )
    name: Optional[str] = Field(None, description="Nome de exibição.")
    role_names: Optional[List[str]] = Field(
        None, description="Ignorado: o perfil é definido pelo tipo de entidade."
    )

    @field_validator('password')
    def validate_password_security(cls, v):
        return _check_password(v)

    @field_validator('name')
    def validate_name_security(cls, v):
        return _check_name(v)


class UserUpdate(CustomBaseModel):
    """
    Schema para atualização parcial da conta.

    Campos omitidos permanecem inalterados. Null em email ou senha é ignorado.
    """
    CLEARABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"name"})

    email: Optional[EmailStr] = Field(
        None,
        description="Novo email da conta. Deve ser um email válido e único.",
    )
    password: Optional[str] = Field(
        None, description="Nova senha da conta."
    )
    name: Optional[str] = Field(None, description="Novo nome de exibição; null apaga.")

    @field_validator('email')
    def validate_email_security(cls, v):
        return _check_email(v)

    @field_validator('password')
    def validate_password_security(cls, v):
        return _check_password(v)

    @field_validator('name')
    def validate_name_security(cls, v):
        return _check_name(v)


class RoleOutput(CustomBaseModel):
    """Perfil atribuído a uma conta."""
    id: int
    name: str
    description: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class UserOutput(CustomBaseModel):
    """
    Schema para retorno de dados da conta.

    Não expõe o hash da senha.
    """
    id: UUID = Field(..., description="Identificador único da conta.")
    email: str = Field(..., description="Email da conta.")
    name: Optional[str] = Field(None, description="Nome de exibição.")
    is_active: bool = Field(..., description="Indica se a conta está ativa.")
    created_at: datetime = Field(..., description="Data e hora de criação da conta.")
    updated_at: Optional[datetime] = Field(None, description="Data e hora da última atualização.")
    roles: List[RoleOutput] = Field(default_factory=list, description="Perfis atribuídos.")

    class Config:
        from_attributes = True


class UserCreatedOutput(UserOutput):
    """
    Conta recém-criada, com a senha em texto claro atribuída no cadastro.

    Retornada apenas na resposta do cadastro, para que a senha gerada
    possa ser repassada ao titular.
    """
    password: str = Field(..., description="Senha atribuída no cadastro.")

    @classmethod
    def from_account(cls, account, password: str) -> "UserCreatedOutput":
        data = UserOutput.model_validate(account).model_dump()
        return cls(**data, password=password)
