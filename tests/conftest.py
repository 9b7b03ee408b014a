# tests/conftest.py
"""
Fixtures do cadastro de médicos.

Cada teste recebe um banco SQLite em memória novo, injetado na aplicação
via dependency_overrides[get_db]. O PYTHONPATH e as variáveis de ambiente
de teste ficam no conftest.py da raiz.
"""

import copy

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


VALID_PAYLOAD = {
    "name": "John Doe",
    "email": "test@example.com",
    "phone_number": "(96) 98765-4321",  # DDD + 9XXXX-XXXX
    "crm": "123456",
    "crm_uf": "SP",
    "password": "password",
    "password_confirmation": "password",
    "addresses": [
        {
            "location_name": "Clínica X",
            "full_address": "Rua A, 123, Bairro B, Cidade C, Estado D",
            "complement": "Sala 1",
            "cep": "12345-678",
        },
    ],
    "terms_accepted": True,
}


@pytest.fixture
def payload():
    """Payload de cadastro válido (cópia independente por teste)."""
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def engine():
    """SQLite em memória compartilhado entre as threads do TestClient."""
    from database.connection import Base, enable_sqlite_foreign_keys
    import auth.models  # noqa: F401  (registra as tabelas)

    engine = enable_sqlite_foreign_keys(create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """Sessão para preparar dados e conferir o que foi gravado."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """
    Cliente de teste da aplicação apontando para o banco em memória.

    Não usa o lifespan (init_database) para não tocar no DATABASE_URL real.
    """
    from main import app
    from database.connection import get_db

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app, raise_server_exceptions=False)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(db):
    """Factory de médicos já cadastrados."""
    from auth.models import Address, User
    from auth.security import get_password_hash

    counter = {"n": 0}

    def _create(**overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "name": f"Médico {n}",
            "email": f"medico{n}@example.com",
            "phone_number": "67999990000",
            "crm": f"{900000 + n}",
            "crm_uf": "MS",
            "password": get_password_hash("secret"),
            "terms_accepted": True,
        }
        data.update(overrides)
        user = User(**data)
        user.addresses.append(
            Address(location_name="Consultório", full_address="Rua Z, 1", cep="79000000")
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _create


@pytest.fixture
def count_rows(db):
    """count_rows("users") -> número de linhas gravadas na tabela."""
    from sqlalchemy import text

    def _count(table: str) -> int:
        db.expire_all()
        return db.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()

    return _count
