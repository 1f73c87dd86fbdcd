"""Shrinks DatasetMetadata into the ledger's 100-byte NFT metadata field.

The reduction is lossy: schema, summary and the full hash are not
recoverable from the payload.
"""

import json
from typing import Any

from datamint.logging.logger import Log
from datamint.minting.exceptions import MetadataSizeError
from datamint.minting.models import CompactPayload
from datamint.profiling.models import DatasetMetadata

MAX_PAYLOAD_BYTES = 100
FULL_PREFIX_LENGTH = 12
MIN_PREFIX_LENGTH = 8


def _encode(data: dict[str, Any]) -> bytes:
    return json.dumps(data, separators=(",", ":")).encode("utf-8")


def decode_payload(data: bytes) -> dict[str, Any]:
    """Read a compact payload back into its ``{"h", "r"?, "c"?}`` mapping.

    Raises:
        ValueError: if the bytes are not a JSON object with a string ``h``.
    """
    parsed = json.loads(data.decode("utf-8"))
    if not isinstance(parsed, dict) or not isinstance(parsed.get("h"), str):
        raise ValueError("payload is not a dataset hash record")
    return parsed


class MetadataCompactor:
    """Tries each degradation level in order and returns the first that fits."""

    def compact(self, metadata: DatasetMetadata) -> CompactPayload:
        if len(metadata.hash) < MIN_PREFIX_LENGTH:
            raise MetadataSizeError(
                f"Content hash '{metadata.hash}' is shorter than {MIN_PREFIX_LENGTH} characters"
            )

        levels = (
            {
                "h": metadata.hash[:FULL_PREFIX_LENGTH],
                "r": metadata.row_count,
                "c": metadata.column_count,
            },
            {"h": metadata.hash[:MIN_PREFIX_LENGTH]},
        )
        size = 0
        for level, candidate in enumerate(levels, start=1):
            encoded = _encode(candidate)
            size = len(encoded)
            if size <= MAX_PAYLOAD_BYTES:
                Log.debug(f"Compacted metadata for {metadata.file_name}", level=level, bytes=size)
                return CompactPayload(level=level, data=encoded)
            Log.warning(
                f"Level {level} metadata is {size} bytes, over the {MAX_PAYLOAD_BYTES} byte limit"
            )

        raise MetadataSizeError(
            f"Metadata too large: {size} bytes exceeds {MAX_PAYLOAD_BYTES} byte limit"
        )
