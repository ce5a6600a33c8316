# app/application/dtos/catador_dto.py

"""
Schemas para dados de catador.

A projeção `CatadorSemAssociacaoOutput` omite a associação e é usada
quando os catadores já são listados a partir da própria associação.
"""

from typing import ClassVar, FrozenSet, Optional
from uuid import UUID
from pydantic import Field, field_validator

from app.application.dtos.base_dto import CustomBaseModel
from app.application.dtos.associacao_dto import AssociacaoOutput
from app.application.dtos.user_dto import UserCreate, UserUpdate, UserOutput, UserCreatedOutput
from app.shared.utils.input_validation import InputValidator


def _check_cpf(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    is_valid, error_msg = InputValidator.validate_cpf(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


def _clean_text(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    return InputValidator.sanitize_string(v)


class LookupOutput(CustomBaseModel):
    """Item de tabela de apoio (etnia ou gênero)."""
    id: int
    nomenclatura: str

    class Config:
        from_attributes = True


class CatadorCreate(CustomBaseModel):
    """
    Schema para cadastro de um catador com a sua conta.
    """
    cpf: str = Field(..., description="CPF do catador, com ou sem máscara.")
    endereco: Optional[str] = Field(None, description="Endereço do catador.")
    bairro: Optional[str] = Field(None, description="Bairro do catador.")
    associacao_id: int = Field(..., description="Associação à qual o catador pertence.")
    etnia_id: Optional[int] = Field(None, description="Etnia declarada.")
    genero_id: Optional[int] = Field(None, description="Gênero declarado.")
    user: UserCreate = Field(..., description="Conta do catador.")

    @field_validator('cpf')
    def validate_cpf(cls, v):
        """
        Confere se o CPF possui 11 dígitos.

        Raises:
            ValueError: Se o CPF for inválido
        """
        return _check_cpf(v)

    @field_validator('endereco', 'bairro')
    def clean_text(cls, v):
        return _clean_text(v)


class CatadorUpdate(CustomBaseModel):
    """
    Schema para atualização parcial de um catador e da sua conta.

    Campos omitidos não mudam. Um null explícito apaga endereço, bairro,
    etnia e gênero; nos demais campos é ignorado.
    """
    CLEARABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"endereco", "bairro", "etnia_id", "genero_id"})

    cpf: Optional[str] = None
    endereco: Optional[str] = None
    bairro: Optional[str] = None
    associacao_id: Optional[int] = None
    etnia_id: Optional[int] = None
    genero_id: Optional[int] = None
    user: Optional[UserUpdate] = None

    @field_validator('cpf')
    def validate_cpf(cls, v):
        return _check_cpf(v)

    @field_validator('endereco', 'bairro')
    def clean_text(cls, v):
        return _clean_text(v)


class CatadorSemAssociacaoOutput(CustomBaseModel):
    """
    Catador com conta, etnia e gênero, sem a associação.
    """
    id: int
    cpf: str
    endereco: Optional[str] = None
    bairro: Optional[str] = None
    user: UserOutput
    etnia: Optional[LookupOutput] = None
    genero: Optional[LookupOutput] = None

    class Config:
        from_attributes = True


class CatadorOutput(CatadorSemAssociacaoOutput):
    """
    Catador com conta, associação, etnia e gênero.
    """
    user_id: UUID
    associacao_id: int
    associacao: AssociacaoOutput


class CatadorCreatedOutput(CatadorOutput):
    """
    Retorno do cadastro: inclui a senha atribuída à conta.
    """
    user: UserCreatedOutput

    @classmethod
    def from_record(cls, catador, password: str) -> "CatadorCreatedOutput":
        data = CatadorOutput.model_validate(catador).model_dump(exclude={"user"})
        return cls(**data, user=UserCreatedOutput.from_account(catador.user, password))
