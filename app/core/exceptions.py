# app/core/exceptions.py
from typing import Optional


class BalcaoError(Exception):
    """Erro base da aplicação."""

    def __init__(self, mensagem: str):
        super().__init__(mensagem)
        self.mensagem = mensagem


class RecursoNaoEncontradoError(BalcaoError):
    pass


class RegraDeNegocioError(BalcaoError, ValueError):
    """Violação de regra do fluxo de pedidos, mesas ou caixa (HTTP 400)."""


class SincronizacaoError(BalcaoError):
    """Falha ao gravar no banco durante uma mutação; nada foi aplicado."""


class AutenticacaoError(BalcaoError):
    pass


# Frases conhecidas dos erros de autenticação -> mensagem para o usuário
MENSAGENS_AUTENTICACAO = {
    "Invalid login credentials": "Email ou senha incorretos",
    "User already registered": "Este email já está cadastrado",
    "Email not confirmed": "Verifique seu email para confirmar a conta",
}


def traduzir_erro_autenticacao(mensagem: Optional[str]) -> str:
    if not mensagem:
        return "Erro ao processar solicitação"
    for frase, traducao in MENSAGENS_AUTENTICACAO.items():
        if frase in mensagem:
            return traducao
    return mensagem
