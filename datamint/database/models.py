from dataclasses import dataclass
from datetime import datetime
from typing import Any

from datamint.minting.models import MintResult
from datamint.profiling.models import DatasetMetadata


@dataclass
class MintRecord:
    """Represents a row from the dataset_mints table."""

    token_id: str
    serial_number: int
    transaction_id: str
    file_name: str
    content_hash: str
    explorer_url: str
    metadata: dict[str, Any]
    minted_at: str
    audit_sequence_number: int | None = None
    id: int | None = None
    created_at: datetime | None = None

    @classmethod
    def from_result(cls, result: MintResult, metadata: DatasetMetadata) -> "MintRecord":
        return cls(
            token_id=result.token_id,
            serial_number=result.serial_number,
            transaction_id=result.transaction_id,
            file_name=metadata.file_name,
            content_hash=metadata.hash,
            explorer_url=result.explorer_url,
            metadata=metadata.to_dict(),
            minted_at=result.timestamp,
            audit_sequence_number=result.audit_sequence_number,
        )

    def to_gallery_record(self) -> dict[str, Any]:
        return {
            "tokenId": self.token_id,
            "serialNumber": self.serial_number,
            "metadata": self.metadata,
            "timestamp": self.minted_at,
            "explorerUrl": self.explorer_url,
        }
