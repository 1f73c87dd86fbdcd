from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from datamint.ledger.models import AuditReceipt


class MintState(StrEnum):
    IDLE = "idle"
    COLLECTION_READY = "collection_ready"
    AUDIT_SUBMITTED = "audit_submitted"
    MINTED = "minted"
    DONE = "done"
    ERROR = "error"
    UNCONFIRMED = "unconfirmed"


class AuditStatus(StrEnum):
    SKIPPED = "skipped"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class CompactPayload:
    """On-chain NFT metadata. ``level`` 1 carries counts, level 2 only the hash prefix."""

    level: int
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class AuditOutcome:
    """Result of the optional audit-log submission; never fails the mint."""

    status: AuditStatus
    receipt: AuditReceipt | None = None
    error: str | None = None

    @property
    def warning(self) -> str | None:
        if self.status is AuditStatus.FAILED:
            return f"Audit log submission failed: {self.error}"
        return None


@dataclass(frozen=True)
class MintResult:
    token_id: str
    serial_number: int
    transaction_id: str
    timestamp: str
    explorer_url: str
    audit: AuditOutcome = field(default_factory=lambda: AuditOutcome(AuditStatus.SKIPPED))

    @property
    def audit_timestamp(self) -> str | None:
        if self.audit.status is AuditStatus.SUBMITTED and self.audit.receipt:
            return self.audit.receipt.consensus_timestamp
        return None

    @property
    def audit_sequence_number(self) -> int | None:
        if self.audit.status is AuditStatus.SUBMITTED and self.audit.receipt:
            return self.audit.receipt.sequence_number
        return None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "tokenId": self.token_id,
            "serialNumber": self.serial_number,
            "transactionId": self.transaction_id,
            "timestamp": self.timestamp,
            "explorerUrl": self.explorer_url,
            "auditStatus": str(self.audit.status),
        }
        if self.audit_timestamp is not None:
            data["auditTimestamp"] = self.audit_timestamp
            data["auditSequenceNumber"] = self.audit_sequence_number
        if self.audit.warning:
            data["warnings"] = [self.audit.warning]
        return data


@dataclass
class MintAttempt:
    """State history of one mint request."""

    file_name: str
    states: list[MintState] = field(default_factory=lambda: [MintState.IDLE])
    collection_id: str | None = None
    error: str | None = None

    @property
    def state(self) -> MintState:
        return self.states[-1]

    def advance(self, state: MintState) -> None:
        self.states.append(state)


@dataclass(frozen=True)
class VerificationResult:
    token_id: str
    serial_number: int
    content_hash: str
    onchain_hash_prefix: str
    matches: bool
    owner_account_id: str = ""
    onchain_metadata: dict[str, Any] | str = ""
