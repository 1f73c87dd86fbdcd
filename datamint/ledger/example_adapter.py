"""In-memory ledger adapter.

No network calls. Useful for local development, tests, and as a reference
when wiring a real ledger provider: implement the base contracts and
register the provider in LedgerFactory.
"""

import threading
from datetime import datetime, timezone

from datamint.ledger.base import BaseAuditLog, BaseNftReader, BaseTokenService
from datamint.ledger.exceptions import LedgerError
from datamint.ledger.models import AuditReceipt, MintReceipt, NftInfo
from datamint.ledger.payload import decode_metadata


class ExampleLedgerAdapter(BaseTokenService, BaseAuditLog, BaseNftReader):
    """Token service, audit log and NFT reader backed by dictionaries."""

    MAX_METADATA_BYTES = 100

    def __init__(self, account_id: str = "0.0.1001", first_entity_num: int = 5000) -> None:
        self._account_id = account_id
        self._lock = threading.Lock()
        self._next_entity = first_entity_num
        self._next_tx = 1
        self._collections: dict[str, list[bytes]] = {}
        self._topics: dict[str, list[str]] = {}

    def create_collection(self) -> str:
        with self._lock:
            token_id = f"0.0.{self._next_entity}"
            self._next_entity += 1
            self._collections[token_id] = []
        return token_id

    def mint(self, collection_id: str, payload: bytes) -> MintReceipt:
        if len(payload) > self.MAX_METADATA_BYTES:
            raise LedgerError(f"METADATA_TOO_LONG: {len(payload)} bytes")
        with self._lock:
            serials = self._collections.get(collection_id)
            if serials is None:
                raise LedgerError(f"INVALID_TOKEN_ID: {collection_id}")
            serials.append(payload)
            return MintReceipt(serial_number=len(serials), transaction_id=self._transaction_id())

    def submit(self, topic_id: str, message: str) -> AuditReceipt:
        with self._lock:
            messages = self._topics.setdefault(topic_id, [])
            messages.append(message)
            return AuditReceipt(
                consensus_timestamp=datetime.now(timezone.utc).isoformat(),
                sequence_number=len(messages),
                transaction_id=self._transaction_id(),
            )

    def get_nft(self, token_id: str, serial_number: int) -> NftInfo:
        with self._lock:
            serials = self._collections.get(token_id, [])
            if not 1 <= serial_number <= len(serials):
                raise LedgerError(f"NFT {token_id}/{serial_number} not found")
            metadata = serials[serial_number - 1]
        return NftInfo(
            token_id=token_id,
            serial_number=serial_number,
            account_id=self._account_id,
            metadata=metadata,
            decoded_metadata=decode_metadata(metadata),
        )

    def topic_messages(self, topic_id: str) -> list[str]:
        with self._lock:
            return list(self._topics.get(topic_id, []))

    def _transaction_id(self) -> str:
        tx = f"{self._account_id}@{self._next_tx}.000000000"
        self._next_tx += 1
        return tx
