# app/domain/exceptions.py

"""
Exceções personalizadas para o aplicativo.

Este módulo define exceções puras do domínio. Cada exceção carrega uma
mensagem significativa e um código interno (`internal_code`) que a camada
HTTP traduz para o status apropriado.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """
    Exceção base pura do domínio.

    Não depende do FastAPI; o middleware de exceções faz o mapeamento
    de `internal_code` para o código HTTP.
    """

    internal_code: str = "DOMAIN_ERROR"

    def __init__(
            self,
            detail: Any = None,
            internal_code: Optional[str] = None,
            details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail)
        self.detail = detail
        if internal_code is not None:
            self.internal_code = internal_code
        self.details = details or {}

    def __str__(self) -> str:
        return str(self.detail)


class ResourceNotFoundException(DomainException):
    """Recurso não encontrado."""

    internal_code = "RESOURCE_NOT_FOUND"

    def __init__(self, detail: str = "Recurso não encontrado", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")
        self.resource_id = resource_id


class ResourceAlreadyExistsException(DomainException):
    """Recurso já existe."""

    internal_code = "RESOURCE_ALREADY_EXISTS"

    def __init__(self, detail: str = "Recurso já existe", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(detail=f"{detail}{resource_info}")


class DatabaseOperationException(DomainException):
    """Erro na operação de banco de dados."""

    internal_code = "DATABASE_OPERATION_ERROR"

    def __init__(self, detail: str = "Erro ao executar operação no banco de dados",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(detail=f"{detail}{error_info}")
        self.original_error = original_error


class DependencyProvisioningException(DomainException):
    """
    Falha em uma dependência do provisionamento (ex: consulta ou criação de perfil).

    Diferente de "não encontrado": indica que o colaborador falhou por outro motivo.
    """

    internal_code = "DEPENDENCY_ERROR"

    def __init__(self, detail: str = "Erro ao provisionar dependência",
                 original_error: Optional[Exception] = None):
        super().__init__(detail=detail)
        self.original_error = original_error


class CascadeDeleteException(DomainException):
    """Falha ao remover um registro e sua conta vinculada."""

    internal_code = "CASCADE_DELETE_FAILED"

    def __init__(self, detail: str = "Erro ao remover registro",
                 original_error: Optional[Exception] = None):
        super().__init__(detail=detail)
        self.original_error = original_error

