"""Ledger adapter built on an operator-run transaction gateway.

The gateway holds the operator key, signs and submits transactions, and
waits for the receipt before answering, so a response here means consensus.
"""

import base64
from typing import Any

import httpx

from datamint.ledger.base import BaseAuditLog, BaseTokenService
from datamint.ledger.exceptions import (
    LedgerError,
    LedgerNetworkError,
    LedgerSubmissionUnknownError,
)
from datamint.ledger.models import AuditReceipt, CollectionSpec, MintReceipt

MINT_MAX_FEE_HBAR = 20
AUDIT_MAX_FEE_HBAR = 2


class GatewayLedgerAdapter(BaseTokenService, BaseAuditLog):
    """Token service and audit log over the gateway's JSON API."""

    def __init__(
        self,
        *,
        base_url: str,
        account_id: str,
        private_key: str,
        timeout_seconds: int,
        collection_spec: CollectionSpec | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._account_id = account_id
        self._collection_spec = collection_spec or CollectionSpec()
        self._client = http_client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self._headers = {
            "Authorization": f"Bearer {private_key}",
            "X-Operator-Account": account_id,
        }

    def create_collection(self) -> str:
        spec = self._collection_spec
        body = {
            "name": spec.name,
            "symbol": spec.symbol,
            "tokenType": spec.token_type,
            "supplyType": spec.supply_type,
            "decimals": spec.decimals,
            "initialSupply": spec.initial_supply,
            "maxTransactionFeeHbar": spec.max_transaction_fee_hbar,
            "treasuryAccountId": self._account_id,
            "supplyKey": "operator",
            "adminKey": "operator",
        }
        data = self._post("/collections", body, action="Token collection creation")
        return str(self._require(data, "tokenId", action="Token collection creation"))

    def mint(self, collection_id: str, payload: bytes) -> MintReceipt:
        body = {
            "metadata": base64.b64encode(payload).decode("ascii"),
            "maxTransactionFeeHbar": MINT_MAX_FEE_HBAR,
        }
        data = self._post(f"/collections/{collection_id}/mint", body, action="NFT minting")
        return MintReceipt(
            serial_number=self._require_int(data, "serialNumber", action="NFT minting"),
            transaction_id=str(self._require(data, "transactionId", action="NFT minting")),
        )

    def submit(self, topic_id: str, message: str) -> AuditReceipt:
        body = {"message": message, "maxTransactionFeeHbar": AUDIT_MAX_FEE_HBAR}
        data = self._post(f"/topics/{topic_id}/messages", body, action="Audit submission")
        return AuditReceipt(
            consensus_timestamp=str(
                self._require(data, "consensusTimestamp", action="Audit submission")
            ),
            sequence_number=self._require_int(data, "sequenceNumber", action="Audit submission"),
            transaction_id=str(data.get("transactionId") or ""),
        )

    def close(self) -> None:
        self._client.close()

    def _post(self, path: str, body: dict[str, Any], *, action: str) -> dict[str, Any]:
        try:
            response = self._client.post(path, json=body, headers=self._headers)
        except (httpx.ReadTimeout, httpx.RemoteProtocolError) as exc:
            raise LedgerSubmissionUnknownError(
                f"{action} sent but no response received: {exc}"
            ) from exc
        except httpx.HTTPError as exc:
            raise LedgerNetworkError(f"{action} failed: {exc}") from exc

        if response.is_error:
            raise LedgerError(f"{action} failed: {self._error_message(response)}")
        try:
            data = response.json()
        except ValueError as exc:
            raise LedgerError(f"{action} failed: invalid JSON response") from exc
        if not isinstance(data, dict):
            raise LedgerError(f"{action} failed: response must be an object")
        return data

    @staticmethod
    def _require(data: dict[str, Any], key: str, *, action: str) -> Any:
        value = data.get(key)
        if value is None:
            raise LedgerError(f"{action} failed: response missing '{key}'")
        return value

    @classmethod
    def _require_int(cls, data: dict[str, Any], key: str, *, action: str) -> int:
        value = cls._require(data, key, action=action)
        message = f"{action} failed: '{key}' is not an integer: {value!r}"
        if isinstance(value, bool):
            raise LedgerError(message)
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise LedgerError(message) from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        if isinstance(data, dict) and data.get("error"):
            return f"HTTP {response.status_code}: {data['error']}"
        return f"HTTP {response.status_code}"
