# app/services/auth_service.py
import logging

from jose import JWTError
from sqlalchemy.orm import Session

from app import crud
from app.core import security
from app.core.exceptions import AutenticacaoError, traduzir_erro_autenticacao
from app.db.models.usuario import Usuario
from app.schemas.token import TokenSchemas
from app.schemas.usuario import UsuarioCreateSchemas

logger = logging.getLogger(__name__)

TAMANHO_MINIMO_SENHA = 6


def _erro(mensagem: str) -> AutenticacaoError:
    return AutenticacaoError(traduzir_erro_autenticacao(mensagem))


class AuthService:
    @staticmethod
    def gerar_tokens(usuario: Usuario) -> TokenSchemas:
        return TokenSchemas(
            access_token=security.create_access_token(usuario.email),
            refresh_token=security.create_refresh_token(usuario.email),
        )

    @staticmethod
    def cadastrar(db: Session, *, usuario_in: UsuarioCreateSchemas) -> Usuario:
        """Cria a conta e o perfil (nome e sobrenome) do dono do restaurante."""
        if len(usuario_in.password) < TAMANHO_MINIMO_SENHA:
            raise AutenticacaoError(f"A senha deve ter pelo menos {TAMANHO_MINIMO_SENHA} caracteres")
        if not usuario_in.nome.strip() or not usuario_in.sobrenome.strip():
            raise AutenticacaoError("Por favor, preencha os campos obrigatórios")
        if crud.usuario.get_by_email(db, email=usuario_in.email):
            raise _erro("User already registered")
        usuario = crud.usuario.create(db, obj_in=usuario_in)
        logger.info("Usuário %s cadastrado", usuario.email)
        return usuario

    @staticmethod
    def autenticar(db: Session, *, email: str, password: str) -> TokenSchemas:
        usuario = crud.usuario.authenticate(db, email=email, password=password)
        if not usuario:
            logger.warning("Tentativa de login inválida para %s", email)
            raise _erro("Invalid login credentials")
        if not crud.usuario.is_active(usuario):
            raise AutenticacaoError("Usuário inativo")
        return AuthService.gerar_tokens(usuario)

    @staticmethod
    def renovar(db: Session, *, refresh_token: str) -> TokenSchemas:
        try:
            payload = security.decode_token(refresh_token)
        except JWTError as e:
            logger.warning("Refresh token inválido: %s", e)
            raise AutenticacaoError("Sessão expirada. Faça login novamente.") from e
        if payload.get("type") != "refresh" or not payload.get("sub"):
            raise AutenticacaoError("Sessão expirada. Faça login novamente.")
        usuario = crud.usuario.get_by_email(db, email=payload["sub"])
        if not usuario or not crud.usuario.is_active(usuario):
            raise AutenticacaoError("Sessão expirada. Faça login novamente.")
        return AuthService.gerar_tokens(usuario)
