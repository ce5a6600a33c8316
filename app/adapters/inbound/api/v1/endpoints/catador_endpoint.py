# app/adapters/inbound/api/v1/endpoints/catador_endpoint.py (async version)

from typing import List
from fastapi import APIRouter, Depends, status, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.catador_use_cases import AsyncCatadorService
from app.adapters.inbound.api.deps import get_session, get_notifier
from app.adapters.outbound.notification.dispatcher import NotificationDispatcher
from app.application.dtos.catador_dto import (
    CatadorCreate,
    CatadorUpdate,
    CatadorOutput,
    CatadorCreatedOutput,
)

router = APIRouter()


@router.post(
    "",
    response_model=CatadorCreatedOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Create Catador - Register a catador and its account",
    description=(
        "Creates the account with the 'catador' role and the catador record linked to an "
        "existing associação. The login password is sent to the catador by email."
    ),
    responses={
        404: {"description": "Associação, etnia or gênero not found"},
        409: {"description": "CPF or email already registered"},
    }
)
async def create_catador(
        data: CatadorCreate,
        db: AsyncSession = Depends(get_session),
        notifier: NotificationDispatcher = Depends(get_notifier),
):
    service = AsyncCatadorService(db, notifier=notifier)
    return await service.create_catador(data)


@router.get(
    "",
    response_model=List[CatadorOutput],
    summary="List Catadores - List every catador",
)
async def list_catadores(
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCatadorService(db)
    return await service.list_catadores()


@router.get(
    "/{catador_id}",
    response_model=CatadorOutput,
    summary="Get Catador - Catador by ID",
)
async def get_catador(
        catador_id: int = Path(..., description="ID of the catador"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCatadorService(db)
    return await service.get_catador(catador_id)


@router.put(
    "/{catador_id}",
    response_model=CatadorOutput,
    summary="Update Catador - Partial update of a catador and its account",
)
async def update_catador(
        catador_id: int = Path(..., description="ID of the catador to update"),
        update_data: CatadorUpdate = ...,
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCatadorService(db)
    return await service.update_catador(catador_id, update_data)


@router.delete(
    "/{catador_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Catador - Delete a catador and its account",
)
async def delete_catador(
        catador_id: int = Path(..., description="ID of the catador to delete"),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncCatadorService(db)
    await service.delete_catador(catador_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
