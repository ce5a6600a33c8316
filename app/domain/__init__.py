# app/domain/__init__.py

"""
Módulo principal para componentes do domínio da aplicação.

Este módulo exporta as exceções e os modelos de domínio do provisionamento.
"""

# Exportar todas as exceções para facilitar a importação
from app.domain.exceptions import (
    DomainException,               # Exceção base pura do domínio
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException,
    DependencyProvisioningException,
    CascadeDeleteException,
)
from app.domain.models.role_domain_model import (
    EntityRole,
    RoleLookupResult,
    RoleLookupStatus,
)
