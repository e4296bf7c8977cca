# app/schemas/usuario.py
from typing import Optional
import uuid
from pydantic import BaseModel, EmailStr


# Propriedades compartilhadas que todos os schemas de usuário terão
class UsuarioBaseSchemas(BaseModel):
    email: Optional[EmailStr] = None
    nome: Optional[str] = None
    sobrenome: Optional[str] = None


# Propriedades para receber no cadastro via API
class UsuarioCreateSchemas(UsuarioBaseSchemas):
    email: EmailStr
    password: str
    nome: str
    sobrenome: str


# Atualização do perfil (nome e sobrenome)
class PerfilUpdateSchemas(BaseModel):
    nome: Optional[str] = None
    sobrenome: Optional[str] = None


# Propriedades armazenadas no DB que podem ser retornadas pela API
class UsuarioInDBBaseSchemas(UsuarioBaseSchemas):
    id: uuid.UUID
    is_active: bool = True

    class Config:
        from_attributes = True # Antigo orm_mode = True


class UsuarioSchemas(UsuarioInDBBaseSchemas):
    pass
