# tests/test_init_db.py
"""
Testes da inicialização do banco (database/init_db.py)
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError

from database.init_db import create_tables, init_database, wait_for_db


@pytest.fixture
def sqlite_engine():
    engine = create_engine("sqlite://")
    yield engine
    engine.dispose()


def _operational_error():
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestWaitForDb:

    def test_banco_disponivel(self, sqlite_engine):
        assert wait_for_db(bind=sqlite_engine) is True

    def test_tenta_novamente(self):
        bind = MagicMock()
        bind.connect.side_effect = [_operational_error(), MagicMock()]

        with patch("database.init_db.time.sleep") as sleep:
            assert wait_for_db(max_retries=3, delay=1, bind=bind) is True

        assert bind.connect.call_count == 2
        sleep.assert_called_once_with(1)

    def test_desiste_apos_max_tentativas(self):
        bind = MagicMock()
        bind.connect.side_effect = _operational_error()

        with patch("database.init_db.time.sleep"):
            with pytest.raises(OperationalError):
                wait_for_db(max_retries=2, delay=0, bind=bind)

        assert bind.connect.call_count == 2


def test_create_tables(sqlite_engine):
    create_tables(bind=sqlite_engine)

    inspector = inspect(sqlite_engine)
    assert {"users", "addresses"} <= set(inspector.get_table_names())

    user_columns = {c["name"] for c in inspector.get_columns("users")}
    assert {"phone_number", "crm", "crm_uf", "terms_accepted", "terms_accepted_at"} <= user_columns

    address_fks = inspector.get_foreign_keys("addresses")
    assert address_fks[0]["referred_table"] == "users"


def test_init_database_idempotente(sqlite_engine):
    init_database(bind=sqlite_engine)
    init_database(bind=sqlite_engine)

    assert "users" in inspect(sqlite_engine).get_table_names()
