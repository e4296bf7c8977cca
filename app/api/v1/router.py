from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth,
    usuarios,
    pedidos,
    mesas,
    estatisticas,
    quadro,
    relatorios,
    cep,
)

api_router_v1 = APIRouter()

api_router_v1.include_router(auth.router, prefix="/auth", tags=["Autenticação"])
api_router_v1.include_router(usuarios.router, prefix="/usuarios", tags=["Usuários"])
api_router_v1.include_router(quadro.router, prefix="/quadro", tags=["Quadro"])
api_router_v1.include_router(pedidos.router, prefix="/pedidos", tags=["Pedidos"])
api_router_v1.include_router(mesas.router, prefix="/mesas", tags=["Mesas"])
api_router_v1.include_router(estatisticas.router, prefix="/estatisticas", tags=["Estatísticas"])
api_router_v1.include_router(relatorios.router, prefix="/relatorios", tags=["Relatórios"])
api_router_v1.include_router(cep.router, prefix="/cep", tags=["CEP"])

@api_router_v1.get("/", tags=["Root V1"])
async def read_root_v1():
    return {"message": "API V1 Operacional"}
