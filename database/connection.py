# database/connection.py
"""
Configuração da conexão com o banco de dados usando SQLAlchemy 2.0

SQLite (desenvolvimento e testes) só respeita FOREIGN KEY / ON DELETE CASCADE
com o pragma ligado em cada conexão: use enable_sqlite_foreign_keys(engine).
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from typing import Generator

from config import DATABASE_URL


def enable_sqlite_foreign_keys(bind: Engine) -> Engine:
    """Liga PRAGMA foreign_keys em toda nova conexão do engine SQLite."""

    @event.listens_for(bind, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return bind


# Configuração do engine
if DATABASE_URL.startswith("sqlite"):
    engine = enable_sqlite_foreign_keys(create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},  # Necessário para SQLite
        echo=False
    ))
else:
    # PostgreSQL - configuração otimizada para produção
    engine = create_engine(
        DATABASE_URL,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recicla conexões a cada 30 min
        pool_pre_ping=True  # Verifica conexão antes de usar
    )


# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base para os models
Base = declarative_base()


def get_db() -> Generator:
    """
    Dependency que fornece uma sessão do banco de dados.
    Uso: db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
