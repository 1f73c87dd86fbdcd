from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from datamint.database.connection import get_connection
from datamint.database.models import MintRecord

_COLUMNS = """
    id, token_id, serial_number, transaction_id, file_name, content_hash,
    explorer_url, metadata, minted_at, audit_sequence_number, created_at
"""


class MintRecordRepository:
    """Database operations for the dataset_mints table."""

    def insert(self, record: MintRecord) -> int:
        """Persist a minted dataset and return its row id."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO dataset_mints (
                        token_id, serial_number, transaction_id, file_name,
                        content_hash, explorer_url, metadata, minted_at,
                        audit_sequence_number
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        record.token_id,
                        record.serial_number,
                        record.transaction_id,
                        record.file_name,
                        record.content_hash,
                        record.explorer_url,
                        Jsonb(record.metadata),
                        record.minted_at,
                        record.audit_sequence_number,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError("INSERT into dataset_mints returned no id")
        return int(row[0])

    def list_recent(self, limit: int = 50) -> list[MintRecord]:
        """Newest mints first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM dataset_mints ORDER BY id DESC LIMIT %s",
                    (limit,),
                )
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    def find_by_hash(self, content_hash: str) -> list[MintRecord]:
        """All mints of a given file fingerprint, oldest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM dataset_mints WHERE content_hash = %s ORDER BY id",
                    (content_hash,),
                )
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> MintRecord:
        return MintRecord(
            id=row["id"],
            token_id=row["token_id"],
            serial_number=row["serial_number"],
            transaction_id=row["transaction_id"],
            file_name=row["file_name"],
            content_hash=row["content_hash"],
            explorer_url=row["explorer_url"],
            metadata=row["metadata"],
            minted_at=row["minted_at"],
            audit_sequence_number=row["audit_sequence_number"],
            created_at=row["created_at"],
        )
