import os
import uuid

import pytest

from crudforge.adapters import ConnectionConfig
from crudforge.adapters.postgres import PostgresAdapter
from crudforge.core import IntegerField, Model, StringField
from crudforge.persistence import Session


def _require_postgres_session():
    try:
        import psycopg  # noqa: F401
    except ImportError:
        pytest.skip("psycopg driver not installed")
    dsn = os.getenv("CRUDFORGE_POSTGRES_DSN")
    if not dsn:
        pytest.skip("CRUDFORGE_POSTGRES_DSN not set; skipping Postgres integration test")
    try:
        return Session(PostgresAdapter(), connection_config=ConnectionConfig.from_dsn(dsn))
    except Exception as exc:  # pragma: no cover - environment dependent
        pytest.skip(f"Cannot connect to Postgres for integration test: {exc}")


def test_postgres_crud_roundtrip():
    session = _require_postgres_session()
    table = f"crudforge_pg_{uuid.uuid4().hex[:8]}"

    class Member(Model):
        id = IntegerField(primary_key=True)
        name = StringField()
        age = IntegerField()

    Member._meta.table_name = table

    try:
        with session.transaction():
            session.execute(f'CREATE TABLE "{table}" (id SERIAL PRIMARY KEY, name TEXT, age INTEGER)')
        key = session.insert(Member(name="pg-ok", age=3))
        assert session.get(Member, key).name == "pg-ok"
        assert session.update(Member(id=key, name="pg-ok", age=4)) == 1
        assert session.record_count(Member, {"age": 4}) == 1
        assert [m.id for m in session.get_list_paged(Member, 1, 5)] == [key]
        assert session.delete_by_id(Member, key) == 1
    finally:
        with session.transaction():
            session.execute(f'DROP TABLE IF EXISTS "{table}"')
        session.close()
