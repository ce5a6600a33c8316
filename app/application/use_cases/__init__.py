# app/application/use_cases/__init__.py (async version)

"""
Application service module.

This package contains the application services that implement the business logic
of the application, organized according to functional domains.
"""

# Export service classes for easier imports
from app.application.use_cases.role_provisioning import RoleProvisioningService
from app.application.use_cases.associacao_use_cases import AsyncAssociacaoService
from app.application.use_cases.catador_use_cases import AsyncCatadorService

# Export all services
__all__ = [
    "RoleProvisioningService",
    "AsyncAssociacaoService",
    "AsyncCatadorService",
]
