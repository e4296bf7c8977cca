from typing import Any

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api import deps
from app.db.models.usuario import Usuario
from app.schemas.relatorio import RelatorioDiarioSchemas
from app.services import relatorio_service

router = APIRouter()


@router.get("/diario", response_model=RelatorioDiarioSchemas)
def read_relatorio_diario(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
) -> Any:
    """
    Métricas do dia: receita, ticket médio, caixa e tempo médio de preparo.
    """
    return relatorio_service.relatorio_diario(db, usuario=current_user)


@router.get("/diario.pdf")
def download_relatorio_diario(
    db: Session = Depends(deps.get_db),
    current_user: Usuario = Depends(deps.get_current_active_user)
):
    relatorio = relatorio_service.relatorio_diario(db, usuario=current_user)
    return Response(
        content=relatorio_service.gerar_pdf_relatorio(relatorio),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="relatorio-{relatorio.data.isoformat()}.pdf"'},
    )
