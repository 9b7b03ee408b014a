# database/init_db.py
"""
Inicialização do banco de dados
"""

import time
from sqlalchemy.exc import OperationalError
from sqlalchemy import text
from database.connection import engine, Base

# Importa modelos para criar tabelas
from auth.models import User, Address  # noqa: F401
from utils.logging_config import get_logger

logger = get_logger(__name__)


def wait_for_db(max_retries=10, delay=3, bind=None):
    """Aguarda o banco de dados ficar disponível"""
    bind = bind or engine
    for attempt in range(max_retries):
        try:
            # Tenta conectar
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Conexão com banco de dados estabelecida")
            return True
        except OperationalError:
            if attempt < max_retries - 1:
                logger.warning(
                    "Aguardando banco de dados",
                    tentativa=attempt + 1,
                    max_tentativas=max_retries,
                )
                time.sleep(delay)
            else:
                logger.error("Não foi possível conectar ao banco", tentativas=max_retries)
                raise
    return False


def create_tables(bind=None):
    """Cria as tabelas users e addresses (se ainda não existirem)"""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Tabelas criadas com sucesso", tabelas=sorted(Base.metadata.tables))


def init_database(bind=None):
    """Chamada no startup da aplicação (lifespan do main.py)"""
    wait_for_db(bind=bind)
    create_tables(bind=bind)
