from typing import Any

import httpx

from datamint.ledger.base import BaseNftReader
from datamint.ledger.exceptions import LedgerError, LedgerNetworkError
from datamint.ledger.models import MIRROR_NODE_URLS, NftInfo
from datamint.ledger.payload import decode_base64_metadata, decode_metadata


class MirrorNodeClient(BaseNftReader):
    """Read-only client for the public mirror-node REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout_seconds)

    @classmethod
    def for_network(cls, network: str, timeout_seconds: int) -> "MirrorNodeClient":
        base_url = MIRROR_NODE_URLS.get(network)
        if base_url is None:
            raise ValueError(f"Unknown network '{network}'. Choose from: {list(MIRROR_NODE_URLS)}")
        return cls(base_url=base_url, timeout_seconds=timeout_seconds)

    def get_nft(self, token_id: str, serial_number: int) -> NftInfo:
        data = self._get(
            f"/api/v1/tokens/{token_id}/nfts/{serial_number}",
            what=f"NFT {token_id}/{serial_number}",
        )
        try:
            metadata = decode_base64_metadata(str(data.get("metadata") or ""))
        except ValueError as exc:
            raise LedgerError(
                f"NFT {token_id}/{serial_number} has malformed metadata: {exc}"
            ) from exc
        return NftInfo(
            token_id=str(data.get("token_id") or token_id),
            serial_number=serial_number,
            account_id=str(data.get("account_id") or ""),
            metadata=metadata,
            decoded_metadata=decode_metadata(metadata),
        )

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str, *, what: str) -> dict[str, Any]:
        try:
            response = self._client.get(path)
        except httpx.HTTPError as exc:
            raise LedgerNetworkError(f"Failed to fetch {what}: {exc}") from exc
        if response.is_error:
            raise LedgerError(
                f"Failed to fetch {what}: mirror node returned {response.status_code}"
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise LedgerError(f"Failed to fetch {what}: invalid JSON response") from exc
        if not isinstance(data, dict):
            raise LedgerError(f"Failed to fetch {what}: response must be an object")
        return data
