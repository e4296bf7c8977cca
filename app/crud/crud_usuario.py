# app/crud/crud_usuario.py
from typing import Any, Dict, List, Optional, Union
import uuid

from sqlalchemy.orm import Session

from app.core.security import get_password_hash, verify_password
from app.db.models.usuario import Usuario
from app.schemas.usuario import UsuarioCreateSchemas, PerfilUpdateSchemas


class CRUDUsuario:
    def get(self, db: Session, id: uuid.UUID) -> Optional[Usuario]:
        return db.query(Usuario).filter(Usuario.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[Usuario]:
        return db.query(Usuario).filter(Usuario.email == email.lower()).first()

    def get_multi_ativos(self, db: Session) -> List[Usuario]:
        return db.query(Usuario).filter(Usuario.is_active.is_(True)).all()

    def create(self, db: Session, *, obj_in: UsuarioCreateSchemas) -> Usuario:
        db_obj = Usuario(
            email=obj_in.email.lower(),
            hashed_password=get_password_hash(obj_in.password),
            nome=obj_in.nome.strip(),
            sobrenome=obj_in.sobrenome.strip(),
            is_active=True,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_perfil(
        self, db: Session, *, db_obj: Usuario, obj_in: Union[PerfilUpdateSchemas, Dict[str, Any]]
    ) -> Usuario:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field in ("nome", "sobrenome"):
            if update_data.get(field) is not None:
                setattr(db_obj, field, update_data[field].strip())

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[Usuario]:
        user = self.get_by_email(db, email=email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def is_active(self, user: Usuario) -> bool:
        return user.is_active

    def proximo_numero_pedido(self, db: Session, *, usuario: Usuario) -> int:
        """Reserva o próximo número de pedido. O commit fica a cargo de quem chama."""
        usuario.ultimo_numero_pedido = (usuario.ultimo_numero_pedido or 0) + 1
        db.add(usuario)
        return usuario.ultimo_numero_pedido


usuario = CRUDUsuario()
