import os

# Ambiente de teste definido antes de importar a aplicação
os.environ.setdefault("SECRET_KEY", "chave-de-teste")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["REDIS_ENABLED"] = "false"
os.environ["BACKGROUND_TASKS_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import get_db
from app.db.base_class import Base
from app.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

API = "/api/v1"


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def cadastrar_e_logar(client, email="dono@restaurante.com.br", password="segredo123"):
    resposta = client.post(
        f"{API}/auth/cadastro",
        json={"email": email, "password": password, "nome": "Maria", "sobrenome": "Souza"},
    )
    assert resposta.status_code == 201, resposta.text
    resposta = client.post(
        f"{API}/auth/login/access-token",
        data={"username": email, "password": password},
    )
    assert resposta.status_code == 200, resposta.text
    return {"Authorization": f"Bearer {resposta.json()['access_token']}"}


@pytest.fixture()
def auth_headers(client):
    return cadastrar_e_logar(client)


@pytest.fixture()
def usuario(db):
    from app import crud
    from app.schemas.usuario import UsuarioCreateSchemas

    return crud.usuario.create(
        db,
        obj_in=UsuarioCreateSchemas(
            email="caixa@restaurante.com.br", password="segredo123", nome="João", sobrenome="Lima"
        ),
    )
