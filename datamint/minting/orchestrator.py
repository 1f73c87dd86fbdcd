"""Coordinates the optional audit-log write and the mandatory NFT mint."""

import json
from datetime import datetime, timezone

from datamint.ledger.base import BaseAuditLog, BaseTokenService
from datamint.ledger.exceptions import LedgerError, LedgerSubmissionUnknownError
from datamint.ledger.models import MintReceipt, explorer_url
from datamint.logging.logger import Log
from datamint.minting.collection_cache import CollectionCache
from datamint.minting.compactor import MetadataCompactor
from datamint.minting.exceptions import (
    CollectionCreationError,
    MintError,
    MintingError,
    MintUnconfirmedError,
)
from datamint.minting.models import (
    AuditOutcome,
    AuditStatus,
    MintAttempt,
    MintResult,
    MintState,
)
from datamint.profiling.models import DatasetMetadata

AUDIT_MESSAGE_TYPE = "dataset-verification"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_audit_message(metadata: DatasetMetadata, timestamp: str | None = None) -> str:
    return json.dumps(
        {
            "type": AUDIT_MESSAGE_TYPE,
            "hash": metadata.hash,
            "fileName": metadata.file_name,
            "rowCount": metadata.row_count,
            "columnCount": metadata.column_count,
            "uploadDate": metadata.upload_date,
            "timestamp": timestamp or _now(),
        },
        separators=(",", ":"),
    )


class MintOrchestrator:
    """Runs collection setup, compaction, audit and mint for one dataset.

    Flow: ensure collection -> compact -> audit (optional) -> mint -> result.
    Only the audit step may fail without failing the request. Nothing is
    retried.
    """

    def __init__(
        self,
        *,
        token_service: BaseTokenService,
        audit_log: BaseAuditLog,
        collection_cache: CollectionCache,
        network: str,
        audit_topic_id: str | None = None,
        compactor: MetadataCompactor | None = None,
    ) -> None:
        self._token_service = token_service
        self._audit_log = audit_log
        self._collection_cache = collection_cache
        self._network = network
        self._audit_topic_id = audit_topic_id or None
        self._compactor = compactor or MetadataCompactor()
        self.last_attempt: MintAttempt | None = None

    def mint(self, metadata: DatasetMetadata) -> MintResult:
        """Anchor one dataset on the ledger.

        Raises:
            CollectionCreationError: if the collection cannot be created.
            MetadataSizeError: if the payload does not fit even at the smallest level.
            MintUnconfirmedError: if the mint was sent but its outcome is unknown.
            MintError: if the mint transaction fails.
        """
        attempt = MintAttempt(file_name=metadata.file_name)
        self.last_attempt = attempt
        Log.info(f"Minting dataset {metadata.file_name}", rows=metadata.row_count)

        try:
            collection_id = self._ensure_collection(attempt)
            payload = self._compactor.compact(metadata)
            Log.info(f"Metadata payload is {payload.size} bytes (level {payload.level})")

            audit = self._submit_audit(metadata)
            if audit.status is AuditStatus.SUBMITTED:
                attempt.advance(MintState.AUDIT_SUBMITTED)

            receipt = self._mint(attempt, collection_id, payload.data)
        except MintingError as exc:
            if attempt.state is not MintState.UNCONFIRMED:
                attempt.advance(MintState.ERROR)
            attempt.error = str(exc)
            Log.error(f"Minting {metadata.file_name} failed: {exc}", state=attempt.state)
            raise

        result = MintResult(
            token_id=collection_id,
            serial_number=receipt.serial_number,
            transaction_id=receipt.transaction_id,
            timestamp=_now(),
            explorer_url=explorer_url(self._network, "token", collection_id),
            audit=audit,
        )
        attempt.advance(MintState.DONE)
        Log.info(
            f"Minted {metadata.file_name} as {collection_id} #{receipt.serial_number}",
            transaction=receipt.transaction_id,
        )
        return result

    def _ensure_collection(self, attempt: MintAttempt) -> str:
        try:
            collection_id = self._collection_cache.get_or_create(
                self._token_service.create_collection
            )
        except LedgerError as exc:
            raise CollectionCreationError(f"Token collection creation failed: {exc}") from exc
        attempt.collection_id = collection_id
        attempt.advance(MintState.COLLECTION_READY)
        return collection_id

    def _submit_audit(self, metadata: DatasetMetadata) -> AuditOutcome:
        if self._audit_topic_id is None:
            Log.info("Audit topic not configured, skipping audit log submission")
            return AuditOutcome(status=AuditStatus.SKIPPED)
        try:
            receipt = self._audit_log.submit(self._audit_topic_id, build_audit_message(metadata))
        except Exception as exc:
            Log.warning(f"Audit log submission failed (non-critical): {exc}")
            return AuditOutcome(status=AuditStatus.FAILED, error=str(exc))
        Log.info(
            f"Submitted hash to audit topic {self._audit_topic_id}",
            sequence=receipt.sequence_number,
        )
        return AuditOutcome(status=AuditStatus.SUBMITTED, receipt=receipt)

    def _mint(self, attempt: MintAttempt, collection_id: str, payload: bytes) -> MintReceipt:
        try:
            receipt = self._token_service.mint(collection_id, payload)
        except LedgerSubmissionUnknownError as exc:
            attempt.advance(MintState.UNCONFIRMED)
            raise MintUnconfirmedError(
                f"NFT mint submitted to {collection_id} but not confirmed: {exc}"
            ) from exc
        except LedgerError as exc:
            raise MintError(f"NFT minting failed: {exc}") from exc
        attempt.advance(MintState.MINTED)
        return receipt
