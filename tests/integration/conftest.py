import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from datamint.config.settings import Settings
from datamint.database import connection
from datamint.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(connection.__file__).with_name("schema.sql")


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "datamint_test")
    return Settings(_env_file=None)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        schema = SCHEMA_PATH.read_text()
        with get_connection() as conn:
            conn.execute(schema)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    cleanup: list[int] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for row_id in cleanup:
                cur.execute("DELETE FROM dataset_mints WHERE id = %s", (row_id,))
        conn.commit()
