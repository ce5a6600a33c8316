# app/adapters/inbound/api/v1/endpoints/associacao_endpoint.py (async version)

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.associacao_use_cases import AsyncAssociacaoService
from app.adapters.inbound.api.deps import get_session
from app.application.dtos.associacao_dto import (
    AssociacaoCreate,
    AssociacaoUpdate,
    AssociacaoOutput,
    AssociacaoCreatedOutput,
)
from app.application.dtos.catador_dto import CatadorSemAssociacaoOutput

router = APIRouter()


@router.post(
    "",
    response_model=AssociacaoCreatedOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Create Associação - Register an associação and its account",
    description=(
        "Creates the account with the 'associacao' role and the associação record. "
        "When no password is sent, one is generated and returned in the response."
    ),
    responses={
        409: {
            "description": "CNPJ or email already registered",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Já existe uma associacão com o CNPJ cadastrado.",
                        "code": "RESOURCE_ALREADY_EXISTS"
                    }
                }
            }
        }
    }
)
async def create_associacao(
        data: AssociacaoCreate,
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    return await service.create_associacao(data)


@router.get(
    "",
    response_model=List[AssociacaoOutput],
    summary="List Associações - List every associação",
    description="Returns every associação with its account.",
)
async def list_associacoes(db: AsyncSession = Depends(get_session)):
    service = AsyncAssociacaoService(db)
    return await service.list_associacoes()


@router.get(
    "/usuario/{user_id}",
    response_model=AssociacaoOutput,
    summary="Get Associação By Account - Associação owned by an account",
)
async def get_associacao_by_user(
        user_id: UUID = Path(..., description="ID of the owning account"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    return await service.get_associacao_by_user_id(user_id)


@router.get(
    "/usuario/{user_id}/catadores",
    response_model=List[CatadorSemAssociacaoOutput],
    summary="List Catadores By Account - Catadores of the associação owned by an account",
    description="Catadores are returned with account, etnia and gênero, without the associação.",
)
async def list_catadores_by_user(
        user_id: UUID = Path(..., description="ID of the account that owns the associação"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    return await service.get_associated_catadores_by_user(user_id)


@router.get(
    "/{associacao_id}",
    response_model=AssociacaoOutput,
    summary="Get Associação - Associação by ID",
)
async def get_associacao(
        associacao_id: int = Path(..., description="ID of the associação"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    return await service.get_associacao(associacao_id)


@router.put(
    "/{associacao_id}",
    response_model=AssociacaoOutput,
    summary="Update Associação - Partial update of an associação and its account",
    description="Only the fields sent are changed. CNPJ and email are re-validated when they change.",
)
async def update_associacao(
        associacao_id: int = Path(..., description="ID of the associação to update"),
        update_data: AssociacaoUpdate = ...,
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    return await service.update_associacao(associacao_id, update_data)


@router.patch(
    "/{associacao_id}/disable",
    response_model=AssociacaoOutput,
    summary="Disable Associação - Deactivate the owning account",
)
async def disable_associacao(
        associacao_id: int = Path(..., description="ID of the associação"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    return await service.disable_associacao(associacao_id)


@router.delete(
    "/{associacao_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Associação - Delete an associação and its account",
    description="Fails while catadores still reference the associação.",
)
async def delete_associacao(
        associacao_id: int = Path(..., description="ID of the associação to delete"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAssociacaoService(db)
    await service.delete_associacao(associacao_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
