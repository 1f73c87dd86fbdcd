from dataclasses import asdict, dataclass
from typing import Any

from datamint.ingestion.models import ValidationResult
from datamint.minting.models import MintResult
from datamint.profiling.models import (
    DatasetMetadata,
    DatasetPreview,
    DatasetStats,
    TokenizationAssessment,
)


@dataclass(frozen=True)
class ProcessedDataset:
    """Everything the pipeline learned about one upload."""

    validation: ValidationResult
    preview: DatasetPreview | None = None
    metadata: DatasetMetadata | None = None
    stats: DatasetStats | None = None
    assessment: TokenizationAssessment | None = None
    mint_result: MintResult | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"validation": self.validation.to_dict()}
        if self.preview is not None:
            data["preview"] = {
                "fileName": self.preview.file_name,
                "fileSize": self.preview.file_size,
                "rowCount": self.preview.row_count,
                "columnCount": self.preview.column_count,
                "columns": list(self.preview.columns),
                "sampleRows": [dict(row) for row in self.preview.sample_rows],
            }
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        if self.stats is not None:
            data["stats"] = {
                "rowCount": self.stats.row_count,
                "columnCount": self.stats.column_count,
                **{name: asdict(column) for name, column in self.stats.columns.items()},
            }
        if self.assessment is not None:
            data["assessment"] = {
                "canTokenize": self.assessment.can_tokenize,
                "recommendations": list(self.assessment.recommendations),
            }
        if self.mint_result is not None:
            data["mint"] = self.mint_result.to_dict()
        return data
