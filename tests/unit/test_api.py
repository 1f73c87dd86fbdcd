from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from datamint.api.app import create_app
from datamint.api.services import LedgerServices
from datamint.config.settings import Settings
from datamint.database.models import MintRecord
from datamint.database.repositories.mint_record_repository import MintRecordRepository
from datamint.ledger.base import BaseAuditLog, BaseNftReader, BaseTokenService
from datamint.ledger.example_adapter import ExampleLedgerAdapter
from datamint.ledger.exceptions import LedgerError, LedgerSubmissionUnknownError
from datamint.ledger.factory import LedgerClients
from datamint.profiling.models import DatasetMetadata


def _client(
    settings: Settings,
    clients: LedgerClients | None = None,
    registry: MintRecordRepository | None = None,
) -> TestClient:
    ledger = LedgerServices(settings, clients=clients)
    return TestClient(create_app(settings, ledger=ledger, registry=registry))


def _upload(content: bytes, name: str = "sales.csv") -> dict:
    return {"file": (name, content, "text/csv")}


class TestHealth:
    def test_reports_env(self, ledger_settings: Settings) -> None:
        response = _client(ledger_settings).get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "env": "dev"}


class TestValidate:
    def test_valid_file(self, ledger_settings: Settings, sales_csv: bytes) -> None:
        response = _client(ledger_settings).post(
            "/api/datasets/validate", files=_upload(sales_csv)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["validation"]["isValid"] is True
        assert body["metadata"]["rowCount"] == 3
        assert body["preview"]["fileSize"] == "0.11 KB"

    def test_works_without_ledger_credentials(self, sales_csv: bytes) -> None:
        response = _client(Settings(_env_file=None)).post(
            "/api/datasets/validate", files=_upload(sales_csv)
        )

        assert response.status_code == 200

    def test_invalid_file_reports_errors(self, ledger_settings: Settings) -> None:
        response = _client(ledger_settings).post(
            "/api/datasets/validate", files=_upload(b"a,b\n")
        )

        body = response.json()
        assert body["validation"]["isValid"] is False
        assert "CSV file contains no data rows" in body["validation"]["errors"]
        assert "metadata" not in body


class TestTokenize:
    def test_mints_without_audit_topic(self, ledger_settings: Settings, sales_csv: bytes) -> None:
        response = _client(ledger_settings).post(
            "/api/datasets/tokenize", files=_upload(sales_csv)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["tokenId"] == "0.0.5000"
        assert body["serialNumber"] == 1
        assert body["explorerUrl"] == "https://hashscan.io/testnet/token/0.0.5000"
        assert body["auditStatus"] == "skipped"
        assert "auditTimestamp" not in body
        assert "auditSequenceNumber" not in body
        assert body["metadata"]["fileName"] == "sales.csv"
        assert body["metadata"]["rowCount"] == 3
        assert len(body["metadata"]["hash"]) == 64
        assert body["dataset"]["validation"]["isValid"] is True

    def test_audit_failure_still_mints(self, ledger_settings: Settings, sales_csv: bytes) -> None:
        settings = ledger_settings.model_copy(update={"audit_topic_id": "0.0.777"})
        adapter = ExampleLedgerAdapter()
        audit_log = MagicMock(spec=BaseAuditLog)
        audit_log.submit.side_effect = LedgerError("INVALID_TOPIC_ID")
        clients = LedgerClients(token_service=adapter, audit_log=audit_log, nft_reader=adapter)

        response = _client(settings, clients).post(
            "/api/datasets/tokenize", files=_upload(sales_csv)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["auditStatus"] == "failed"
        assert body["warnings"] == ["Audit log submission failed: INVALID_TOPIC_ID"]
        assert "auditTimestamp" not in body

    def test_audit_submitted_includes_sequence(
        self, ledger_settings: Settings, sales_csv: bytes
    ) -> None:
        settings = ledger_settings.model_copy(update={"audit_topic_id": "0.0.777"})

        body = _client(settings).post("/api/datasets/tokenize", files=_upload(sales_csv)).json()

        assert body["auditStatus"] == "submitted"
        assert body["auditSequenceNumber"] == 1
        assert body["auditTimestamp"]

    def test_missing_credentials(self, sales_csv: bytes) -> None:
        response = _client(Settings(_env_file=None)).post(
            "/api/datasets/tokenize", files=_upload(sales_csv)
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Ledger credentials not configured"
        assert "LEDGER_ACCOUNT_ID" in body["details"]

    def test_invalid_file_is_unprocessable(self, ledger_settings: Settings) -> None:
        response = _client(ledger_settings).post(
            "/api/datasets/tokenize", files=_upload(b"")
        )

        assert response.status_code == 422
        assert "File is empty" in response.json()["validation"]["errors"]

    def test_records_mint_in_registry(self, ledger_settings: Settings, sales_csv: bytes) -> None:
        registry = MagicMock(spec=MintRecordRepository)

        _client(ledger_settings, registry=registry).post(
            "/api/datasets/tokenize", files=_upload(sales_csv)
        )

        record = registry.insert.call_args.args[0]
        assert isinstance(record, MintRecord)
        assert record.file_name == "sales.csv"

    def test_registry_failure_does_not_fail_mint(
        self, ledger_settings: Settings, sales_csv: bytes
    ) -> None:
        registry = MagicMock(spec=MintRecordRepository)
        registry.insert.side_effect = RuntimeError("db down")

        response = _client(ledger_settings, registry=registry).post(
            "/api/datasets/tokenize", files=_upload(sales_csv)
        )

        assert response.status_code == 200
        body = response.json()
        assert body["serialNumber"] == 1
        assert body["dataset"]["mint"]["tokenId"] == body["tokenId"]


    def test_unconfirmed_mint_through_pipeline(
        self, ledger_settings: Settings, sales_csv: bytes
    ) -> None:
        token_service = MagicMock(spec=BaseTokenService)
        token_service.create_collection.return_value = "0.0.5000"
        token_service.mint.side_effect = LedgerSubmissionUnknownError("read timeout")
        clients = LedgerClients(
            token_service=token_service,
            audit_log=MagicMock(spec=BaseAuditLog),
            nft_reader=MagicMock(spec=BaseNftReader),
        )

        response = _client(ledger_settings, clients).post(
            "/api/datasets/tokenize", files=_upload(sales_csv)
        )

        assert response.status_code == 502

class TestMintDataset:
    def test_mints_posted_metadata(
        self, ledger_settings: Settings, sample_metadata: DatasetMetadata
    ) -> None:
        response = _client(ledger_settings).post(
            "/api/mint-dataset", json={"metadata": sample_metadata.to_dict()}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tokenId"] == "0.0.5000"
        assert body["metadata"]["hash"] == "ab" * 32

    @pytest.mark.parametrize("payload", [{}, {"metadata": None}, {"metadata": {}}])
    def test_missing_metadata(self, ledger_settings: Settings, payload: dict) -> None:
        response = _client(ledger_settings).post("/api/mint-dataset", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing metadata in request body"}

    def test_malformed_metadata(self, ledger_settings: Settings) -> None:
        response = _client(ledger_settings).post(
            "/api/mint-dataset", json={"metadata": {"fileName": "x.csv"}}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid metadata in request body"

    def test_mint_failure(
        self, ledger_settings: Settings, sample_metadata: DatasetMetadata
    ) -> None:
        token_service = MagicMock(spec=BaseTokenService)
        token_service.create_collection.return_value = "0.0.5000"
        token_service.mint.side_effect = LedgerError("TOKEN_MAX_SUPPLY_REACHED")
        clients = LedgerClients(
            token_service=token_service,
            audit_log=MagicMock(spec=BaseAuditLog),
            nft_reader=MagicMock(spec=BaseNftReader),
        )

        response = _client(ledger_settings, clients).post(
            "/api/mint-dataset", json={"metadata": sample_metadata.to_dict()}
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "NFT minting failed: TOKEN_MAX_SUPPLY_REACHED"
        assert body["details"] == "MintError"

    def test_unconfirmed_mint(
        self, ledger_settings: Settings, sample_metadata: DatasetMetadata
    ) -> None:
        token_service = MagicMock(spec=BaseTokenService)
        token_service.create_collection.return_value = "0.0.5000"
        token_service.mint.side_effect = LedgerSubmissionUnknownError("read timeout")
        clients = LedgerClients(
            token_service=token_service,
            audit_log=MagicMock(spec=BaseAuditLog),
            nft_reader=MagicMock(spec=BaseNftReader),
        )

        response = _client(ledger_settings, clients).post(
            "/api/mint-dataset", json={"metadata": sample_metadata.to_dict()}
        )

        assert response.status_code == 502


class TestVerify:
    def test_round_trip_through_example_ledger(
        self, ledger_settings: Settings, sales_csv: bytes
    ) -> None:
        client = _client(ledger_settings)
        minted = client.post("/api/datasets/tokenize", files=_upload(sales_csv)).json()

        response = client.post(
            "/api/datasets/verify",
            files=_upload(sales_csv),
            data={"token_id": minted["tokenId"], "serial": str(minted["serialNumber"])},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["matches"] is True
        assert body["hash"] == minted["metadata"]["hash"]
        assert body["onchainHashPrefix"] == minted["metadata"]["hash"][:12]
        assert body["accountId"] == "0.0.1001"
        assert body["onchainMetadata"]["r"] == 3

    def test_unknown_nft(self, ledger_settings: Settings, sales_csv: bytes) -> None:
        response = _client(ledger_settings).post(
            "/api/datasets/verify",
            files=_upload(sales_csv),
            data={"token_id": "0.0.5000", "serial": "1"},
        )

        assert response.status_code == 404


class TestListMints:
    def test_empty_without_registry(self, ledger_settings: Settings) -> None:
        assert _client(ledger_settings).get("/api/mints").json() == {"mints": []}

    def test_lists_registry_records(self, ledger_settings: Settings) -> None:
        registry = MagicMock(spec=MintRecordRepository)
        registry.list_recent.return_value = [
            MintRecord(
                token_id="0.0.5000",
                serial_number=1,
                transaction_id="tx",
                file_name="sales.csv",
                content_hash="ab" * 32,
                explorer_url="https://hashscan.io/testnet/token/0.0.5000",
                metadata={"fileName": "sales.csv"},
                minted_at="2024-01-05T10:00:00.000Z",
            )
        ]

        body = _client(ledger_settings, registry=registry).get("/api/mints?limit=5").json()

        registry.list_recent.assert_called_once_with(5)
        assert body["mints"][0]["tokenId"] == "0.0.5000"
        assert body["mints"][0]["timestamp"] == "2024-01-05T10:00:00.000Z"
