import pytest

from datamint.config.settings import Settings
from datamint.ingestion.models import RawDocument
from datamint.profiling.models import ColumnType, DatasetMetadata, DatasetSummary

SALES_CSV = (
    b"date,product,quantity,price\n"
    b"2024-01-01,Widget A,10,29.99\n"
    b"2024-01-02,Widget B,5,49.99\n"
    b"2024-01-03,Widget C,8,79.99\n"
)


@pytest.fixture()
def sales_csv() -> bytes:
    """Three-row sales file used across the end-to-end scenarios."""
    return SALES_CSV


@pytest.fixture()
def sales_document() -> RawDocument:
    return RawDocument(name="sales.csv", content=SALES_CSV)


@pytest.fixture()
def sample_metadata() -> DatasetMetadata:
    return DatasetMetadata(
        file_name="sales.csv",
        upload_date="2024-01-05T10:00:00.000Z",
        hash="ab" * 32,
        row_count=3,
        columns=("date", "product", "quantity", "price"),
        schema={
            "date": ColumnType.DATE,
            "product": ColumnType.STRING,
            "quantity": ColumnType.NUMBER,
            "price": ColumnType.NUMBER,
        },
        summary=DatasetSummary(total_rows=3, valid_rows=3, invalid_rows=0),
    )


@pytest.fixture()
def ledger_settings() -> Settings:
    return Settings(
        _env_file=None,
        ledger_provider="example",
        ledger_network="testnet",
        ledger_account_id="0.0.1001",
        ledger_private_key="302e020100300506032b657004220420" + "11" * 32,
        audit_topic_id="",
    )
