import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app import crud
from app.api import deps
from app.core.exceptions import RecursoNaoEncontradoError, SincronizacaoError
from app.core.logging import logger
from app.core.relogio import data_local, janela_do_dia
from app.db.models.pedido import ColunaKanban
from app.db.models.usuario import Usuario as DBUsuario
from app.schemas.pedido import (
    NotificacaoSchemas,
    PedidoCreateSchemas,
    PedidoMoverSchemas,
    PedidoMovidoSchemas,
    PedidoSchemas,
    PedidoUpdateSchemas,
)
from app.schemas.relatorio import NotaPedidoSchemas
from app.services import relatorio_service
from app.services.estatistica_service import inicio_da_janela
from app.services.pedido_service import pedido_service

router = APIRouter()


def _get_pedido_or_404(db: Session, usuario: DBUsuario, pedido_id: uuid.UUID):
    pedido = crud.pedido.get(db, usuario_id=usuario.id, id=pedido_id)
    if not pedido:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pedido não encontrado")
    return pedido


@router.post("/", response_model=PedidoSchemas, status_code=status.HTTP_201_CREATED)
async def create_pedido(
    pedido_in: PedidoCreateSchemas,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> PedidoSchemas:
    """
    Cria um novo pedido na coluna "Pedidos".
    Se houver mesa, ela passa a ficar ocupada.
    """
    try:
        return await pedido_service.criar_pedido(db, usuario=current_user, pedido_in=pedido_in)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SincronizacaoError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.mensagem)


@router.get("/", response_model=List[PedidoSchemas])
def list_pedidos(
    coluna: Optional[ColunaKanban] = None,
    apenas_ativos: bool = False,
    skip: int = 0,
    limit: int = 500,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> List[PedidoSchemas]:
    """
    Lista os pedidos do usuário, mais recentes primeiro.
    """
    return crud.pedido.get_multi_by_usuario(
        db, usuario_id=current_user.id, coluna=coluna, apenas_ativos=apenas_ativos, skip=skip, limit=limit
    )


@router.get("/finalizados/hoje", response_model=List[PedidoSchemas])
def list_finalizados_hoje(
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> List[PedidoSchemas]:
    dia = data_local()
    stats = crud.estatistica.get_do_dia(db, usuario_id=current_user.id, dia=dia)
    _, fim = janela_do_dia(dia)
    return crud.pedido.get_finalizados_no_periodo(
        db, usuario_id=current_user.id, inicio=inicio_da_janela(stats, dia), fim=fim
    )


@router.delete("/hoje", status_code=status.HTTP_200_OK)
def delete_pedidos_de_hoje(
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
):
    """
    Manutenção: remove todos os pedidos criados hoje.
    """
    removidos = crud.pedido.remove_do_dia(db, usuario_id=current_user.id, dia=data_local())
    db.commit()
    logger.info(f"{removidos} pedido(s) de hoje removidos por {current_user.email}")
    return {"removidos": removidos}


@router.get("/{pedido_id}", response_model=PedidoSchemas)
def read_pedido(
    pedido_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> PedidoSchemas:
    return _get_pedido_or_404(db, current_user, pedido_id)


@router.put("/{pedido_id}", response_model=PedidoSchemas)
async def update_pedido(
    pedido_id: uuid.UUID,
    pedido_in: PedidoUpdateSchemas,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> PedidoSchemas:
    """
    Edita os dados do cartão. A coluna só muda pelo endpoint /mover.
    """
    try:
        return await pedido_service.atualizar_pedido(
            db, usuario=current_user, pedido_id=pedido_id, pedido_in=pedido_in
        )
    except RecursoNaoEncontradoError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.mensagem)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SincronizacaoError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.mensagem)


@router.put("/{pedido_id}/mover", response_model=PedidoMovidoSchemas)
async def mover_pedido(
    pedido_id: uuid.UUID,
    mover_in: PedidoMoverSchemas,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> PedidoMovidoSchemas:
    """
    Move o pedido para outra coluna do quadro.
    Ao chegar em "finalizados" o pedido é concluído, a mesa é liberada,
    as estatísticas do dia são sincronizadas e o cliente é notificado.
    """
    try:
        return await pedido_service.mover_pedido(
            db, usuario=current_user, pedido_id=pedido_id, coluna=mover_in.coluna
        )
    except RecursoNaoEncontradoError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.mensagem)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SincronizacaoError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.mensagem)


@router.post("/{pedido_id}/notificar", response_model=NotificacaoSchemas)
async def notificar_pedido(
    pedido_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> NotificacaoSchemas:
    """
    Gera a mensagem de WhatsApp conforme a coluna atual do pedido.
    """
    try:
        return await pedido_service.notificar_status(db, usuario=current_user, pedido_id=pedido_id)
    except RecursoNaoEncontradoError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.mensagem)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{pedido_id}/nota", response_model=NotaPedidoSchemas)
def read_nota_pedido(
    pedido_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
) -> NotaPedidoSchemas:
    pedido = _get_pedido_or_404(db, current_user, pedido_id)
    return NotaPedidoSchemas(numero_pedido=pedido.numero_pedido, linhas=relatorio_service.linhas_da_nota(pedido))


@router.get("/{pedido_id}/nota.pdf")
def download_nota_pedido(
    pedido_id: uuid.UUID,
    db: Session = Depends(deps.get_db),
    current_user: DBUsuario = Depends(deps.get_current_active_user)
):
    """
    Nota de pedido em PDF.
    """
    pedido = _get_pedido_or_404(db, current_user, pedido_id)
    conteudo = relatorio_service.gerar_pdf_nota(pedido)
    return Response(
        content=conteudo,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="nota-pedido-{pedido.numero_pedido}.pdf"'},
    )
