# app/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from app.adapters.inbound.api.v1.endpoints import associacao_endpoint, catador_endpoint

api_router = APIRouter()

# Incluir os routers dos endpoints
api_router.include_router(associacao_endpoint.router, prefix="/associacoes", tags=["Associações"])
api_router.include_router(catador_endpoint.router, prefix="/catadores", tags=["Catadores"])
