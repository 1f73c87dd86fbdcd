"""Builds the DatasetMetadata record and advisory reports for a validated upload."""

import json
from datetime import datetime, timezone

from datamint.ingestion.models import ParsedTable, RawDocument, ValidationResult
from datamint.profiling.exceptions import ProfilingError
from datamint.profiling.models import DatasetMetadata, DatasetPreview, TokenizationAssessment
from datamint.profiling.schema import infer_schema
from datamint.profiling.stats import summarize

MAX_METADATA_BYTES = 100 * 1024
LOW_QUALITY_RATIO = 0.5
MIN_TOKENIZABLE_RATIO = 0.3
MIN_COLUMNS = 2
MIN_ROWS = 10


def _utc_timestamp(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def build_metadata(
    document: RawDocument,
    validation: ValidationResult,
    table: ParsedTable,
    now: datetime | None = None,
) -> DatasetMetadata:
    """Assemble metadata for a dataset that passed validation.

    The hash is taken from the validation result so the fingerprint is
    computed once per upload.

    Raises:
        ProfilingError: if the validation result carries errors.
    """
    if not validation.is_valid:
        raise ProfilingError(
            f"Cannot build metadata for invalid dataset {document.name}: "
            f"{'; '.join(validation.errors)}"
        )
    return DatasetMetadata(
        file_name=document.name,
        upload_date=_utc_timestamp(now),
        hash=validation.content_hash,
        row_count=validation.row_count,
        columns=validation.columns,
        schema=infer_schema(table),
        summary=summarize(table),
    )


def assess_tokenization(metadata: DatasetMetadata) -> TokenizationAssessment:
    recommendations: list[str] = []

    total = metadata.summary.total_rows
    quality_ratio = metadata.summary.valid_rows / total if total else 0.0
    if quality_ratio < LOW_QUALITY_RATIO:
        recommendations.append(
            f"Data quality is low ({quality_ratio * 100:.0f}% valid rows). "
            "Consider cleaning data before tokenization."
        )

    metadata_size = len(json.dumps(metadata.to_dict(), separators=(",", ":")).encode("utf-8"))
    if metadata_size > MAX_METADATA_BYTES:
        recommendations.append(
            f"Metadata size ({metadata_size / 1024:.2f}KB) is large. "
            "Consider reducing columns or row count."
        )

    if metadata.column_count < MIN_COLUMNS:
        recommendations.append(
            "Dataset has very few columns. Consider if this data is suitable for tokenization."
        )
    if metadata.row_count < MIN_ROWS:
        recommendations.append(
            "Dataset has very few rows. Consider combining with more data before tokenization."
        )

    return TokenizationAssessment(
        can_tokenize=quality_ratio >= MIN_TOKENIZABLE_RATIO and metadata_size <= MAX_METADATA_BYTES,
        recommendations=recommendations,
    )


def build_preview(document: RawDocument, validation: ValidationResult) -> DatasetPreview:
    return DatasetPreview(
        file_name=document.name,
        file_size=f"{document.size / 1024:.2f} KB",
        row_count=validation.row_count,
        column_count=validation.column_count,
        columns=validation.columns,
        sample_rows=validation.sample_data,
    )
