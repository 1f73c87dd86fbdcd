"""HTTP surface: validate, tokenize, mint, verify and list minted datasets."""

from typing import Any

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from datamint.api.schemas import MintRequest
from datamint.api.services import LedgerServices
from datamint.config.settings import Settings
from datamint.database.models import MintRecord
from datamint.database.repositories.mint_record_repository import MintRecordRepository
from datamint.ingestion.models import RawDocument
from datamint.ledger.exceptions import LedgerConfigurationError
from datamint.logging.logger import Log
from datamint.minting.exceptions import MintUnconfirmedError, VerificationError
from datamint.minting.models import MintResult
from datamint.processor.processor import build_processor
from datamint.profiling.models import DatasetMetadata

CREDENTIALS_HINT = "Set LEDGER_ACCOUNT_ID and LEDGER_PRIVATE_KEY in the environment or .env"


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body: dict[str, Any] = {"error": error}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def _read_upload(file: UploadFile) -> RawDocument:
    content = await file.read()
    return RawDocument(name=file.filename or "upload.csv", content=content)


def _mint_failure(exc: Exception) -> JSONResponse:
    if isinstance(exc, LedgerConfigurationError):
        return _error(500, "Ledger credentials not configured", f"{exc}. {CREDENTIALS_HINT}")
    if isinstance(exc, MintUnconfirmedError):
        return _error(
            502,
            str(exc),
            "The transaction may still reach consensus; check the explorer before retrying.",
        )
    Log.error(f"Minting API error: {exc}")
    return _error(500, str(exc) or "Failed to mint dataset NFT", type(exc).__name__)


def _mint_success(
    result: MintResult,
    metadata: DatasetMetadata,
    dataset: dict[str, Any] | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {
        "success": True,
        **result.to_dict(),
        "metadata": {
            "fileName": metadata.file_name,
            "rowCount": metadata.row_count,
            "hash": metadata.hash,
        },
    }
    if dataset:
        body["dataset"] = dataset
    return JSONResponse(content=body)


def create_app(
    settings: Settings,
    ledger: LedgerServices | None = None,
    registry: MintRecordRepository | None = None,
) -> FastAPI:
    app = FastAPI(title="datamint")
    ledger = ledger or LedgerServices(settings)
    profiler = build_processor()

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.app_env}

    @app.post("/api/datasets/validate")
    async def validate_dataset(file: UploadFile = File(...)) -> dict[str, Any]:
        document = await _read_upload(file)
        processed = await run_in_threadpool(profiler.process, document)
        return processed.to_dict()

    @app.post("/api/datasets/tokenize")
    async def tokenize_dataset(file: UploadFile = File(...)) -> JSONResponse:
        document = await _read_upload(file)
        try:
            minting = build_processor(ledger.orchestrator(), registry)
            processed = await run_in_threadpool(minting.process, document)
        except Exception as exc:
            return _mint_failure(exc)
        if processed.metadata is None or processed.mint_result is None:
            return JSONResponse(status_code=422, content=processed.to_dict())
        return _mint_success(processed.mint_result, processed.metadata, processed.to_dict())

    @app.post("/api/mint-dataset")
    def mint_dataset(request: MintRequest) -> JSONResponse:
        if not request.metadata:
            return _error(400, "Missing metadata in request body")
        try:
            metadata = DatasetMetadata.from_dict(request.metadata)
        except (KeyError, TypeError, ValueError) as exc:
            return _error(400, "Invalid metadata in request body", str(exc))

        Log.info(
            f"Tokenizing {metadata.file_name}",
            rows=metadata.row_count,
            hash=metadata.hash[:16],
        )
        try:
            result = ledger.orchestrator().mint(metadata)
        except Exception as exc:
            return _mint_failure(exc)

        if registry is not None:
            record = MintRecord.from_result(result, metadata)
            try:
                registry.insert(record)
            except Exception as exc:
                Log.warning(f"Could not record mint {record.token_id}: {exc}")
        return _mint_success(result, metadata)

    @app.post("/api/datasets/verify")
    async def verify_dataset(
        file: UploadFile = File(...),
        token_id: str = Form(...),
        serial: int = Form(...),
    ) -> JSONResponse:
        document = await _read_upload(file)
        try:
            verifier = ledger.verifier()
            result = await run_in_threadpool(verifier.verify, document.content, token_id, serial)
        except LedgerConfigurationError as exc:
            return _error(500, "Ledger credentials not configured", f"{exc}. {CREDENTIALS_HINT}")
        except VerificationError as exc:
            return _error(404, str(exc))
        return JSONResponse(
            content={
                "tokenId": result.token_id,
                "serialNumber": result.serial_number,
                "hash": result.content_hash,
                "onchainHashPrefix": result.onchain_hash_prefix,
                "matches": result.matches,
                "accountId": result.owner_account_id,
                "onchainMetadata": result.onchain_metadata,
            }
        )

    @app.get("/api/mints")
    def list_mints(limit: int = 50) -> dict[str, Any]:
        if registry is None:
            return {"mints": []}
        return {"mints": [r.to_gallery_record() for r in registry.list_recent(limit)]}

    return app
