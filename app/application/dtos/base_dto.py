# app/application/dtos/base_dto.py

"""
Classe base para dtos personalizados.

Este módulo define a classe base CustomBaseModel que estende
o BaseModel do Pydantic com funcionalidades adicionais comuns
a todos os dtos da aplicação.
"""

from pydantic import BaseModel
from typing import Any, ClassVar, Dict, FrozenSet


class CustomBaseModel(BaseModel):
    """
    Modelo base personalizado para todos os dtos da aplicação.

    Estende o BaseModel do Pydantic com a exclusão automática de valores
    None no método dict() e com o cálculo das alterações de uma
    atualização parcial em changes().
    """

    # Campos que aceitam null explícito para apagar o valor armazenado
    CLEARABLE_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    def dict(self, *args, **kwargs) -> Dict[str, Any]:
        """
        Retorna os atributos do modelo omitindo campos com valor None.

        Args:
            *args: Argumentos posicionais passados para model_dump
            **kwargs: Argumentos nomeados passados para model_dump

        Returns:
            Dict[str, Any]: Dicionário com os atributos do modelo, excluindo valores None
        """
        d = self.model_dump(*args, **kwargs)
        return {k: v for k, v in d.items() if v is not None}

    def changes(self, **kwargs) -> Dict[str, Any]:
        """
        Alterações pedidas em uma atualização parcial.

        Campos omitidos ficam de fora. Um null explícito só é mantido
        (e apaga o valor) nos campos listados em CLEARABLE_FIELDS; nos
        demais é ignorado.
        """
        d = self.model_dump(exclude_unset=True, **kwargs)
        return {k: v for k, v in d.items() if v is not None or k in self.CLEARABLE_FIELDS}
