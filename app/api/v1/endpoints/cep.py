from fastapi import APIRouter, Depends, HTTPException, status

from app.api import deps
from app.db.models.usuario import Usuario
from app.schemas.cep import CepSchemas
from app.services.cep_service import buscar_cep

router = APIRouter()


@router.get("/{cep}", response_model=CepSchemas)
async def read_cep(
    cep: str,
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> CepSchemas:
    """
    Busca o endereço no ViaCEP. Sem resultado o endereço é preenchido manualmente.
    """
    endereco = await buscar_cep(cep)
    if not endereco:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="CEP não encontrado")
    return endereco
