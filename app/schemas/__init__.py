# app/schemas/__init__.py
from .usuario import UsuarioSchemas, UsuarioCreateSchemas, PerfilUpdateSchemas
from .token import TokenSchemas, TokenDataSchemas, RefreshTokenRequestSchemas
from .mesa import MesaSchemas, MesaConfigurarSchemas, MesaStatusUpdateSchemas, MesasResumoSchemas
from .pedido import (
    EnderecoSchemas,
    PedidoSchemas,
    PedidoCreateSchemas,
    PedidoUpdateSchemas,
    PedidoMoverSchemas,
    PedidoMovidoSchemas,
    NotificacaoSchemas,
)
from .estatistica import (
    EstatisticaDiariaSchemas,
    AberturaCaixaSchemas,
    ColunaSchemas,
    QuadroSchemas,
    ResetResultadoSchemas,
)
from .relatorio import RelatorioDiarioSchemas, NotaPedidoSchemas
from .cep import CepSchemas
