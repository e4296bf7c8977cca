# Importa todos os modelos para que o metadata (create_all / Alembic) os conheça
from app.db.models.usuario import Usuario
from app.db.models.mesa import Mesa, StatusMesa
from app.db.models.pedido import Pedido, ColunaKanban, MetodoPagamento, COLUNAS_ATIVAS, TITULOS_COLUNAS
from app.db.models.estatistica import EstatisticaDiaria
