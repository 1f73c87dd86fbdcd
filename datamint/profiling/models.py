from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from datamint.ingestion.models import Row


class ColumnType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


ColumnSchema = dict[str, ColumnType]


@dataclass(frozen=True)
class ColumnStats:
    """Numeric summary for one column."""

    count: int
    min: float
    max: float
    avg: float
    sum: float
    median: float


@dataclass(frozen=True)
class DatasetStats:
    row_count: int
    column_count: int
    columns: dict[str, ColumnStats] = field(default_factory=dict)


@dataclass(frozen=True)
class DatasetSummary:
    total_rows: int
    valid_rows: int
    invalid_rows: int


@dataclass(frozen=True)
class DatasetMetadata:
    """Full description of a validated dataset.

    Only a compacted form of this goes on-chain; the caller keeps the full
    record if it needs the schema or the complete hash later.
    """

    file_name: str
    upload_date: str
    hash: str
    row_count: int
    columns: tuple[str, ...]
    schema: ColumnSchema
    summary: DatasetSummary

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileName": self.file_name,
            "uploadDate": self.upload_date,
            "hash": self.hash,
            "rowCount": self.row_count,
            "columns": list(self.columns),
            "schema": {name: str(kind) for name, kind in self.schema.items()},
            "summary": {
                "totalRows": self.summary.total_rows,
                "validRows": self.summary.valid_rows,
                "invalidRows": self.summary.invalid_rows,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DatasetMetadata":
        """Build from the camelCase wire form.

        Raises:
            KeyError: if a required field is missing.
            ValueError: if a schema entry is not a known column type.
        """
        summary = data.get("summary") or {}
        row_count = int(data["rowCount"])
        return cls(
            file_name=str(data["fileName"]),
            upload_date=str(data["uploadDate"]),
            hash=str(data["hash"]),
            row_count=row_count,
            columns=tuple(data.get("columns") or ()),
            schema={
                name: ColumnType(kind) for name, kind in (data.get("schema") or {}).items()
            },
            summary=DatasetSummary(
                total_rows=int(summary.get("totalRows", row_count)),
                valid_rows=int(summary.get("validRows", row_count)),
                invalid_rows=int(summary.get("invalidRows", 0)),
            ),
        )


@dataclass(frozen=True)
class TokenizationAssessment:
    """Advisory check of whether a dataset is worth anchoring."""

    can_tokenize: bool
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DatasetPreview:
    file_name: str
    file_size: str
    row_count: int
    column_count: int
    columns: tuple[str, ...]
    sample_rows: tuple[Row, ...]
