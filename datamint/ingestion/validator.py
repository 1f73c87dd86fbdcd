"""Structural and data-quality checks for an uploaded CSV (errors vs. warnings)."""

from collections import Counter

from datamint.ingestion.models import ParsedTable, ParseOutcome, RawDocument, ValidationResult

MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
MAX_ROWS = 10_000
MAX_COLUMNS = 50
SAMPLE_SIZE = 5
MISSING_RATIO_THRESHOLD = 0.5


def duplicate_columns(columns: tuple[str, ...]) -> list[str]:
    """Names that occur more than once, each listed once in first-seen order."""
    counts = Counter(columns)
    return [name for name in counts if counts[name] > 1]


def count_empty_rows(table: ParsedTable) -> int:
    return sum(1 for row in table.rows if all(value is None for value in row.values()))


def sparse_columns(table: ParsedTable) -> list[str]:
    """Columns where more than half of the rows have no value."""
    if not table.rows:
        return []
    limit = table.row_count * MISSING_RATIO_THRESHOLD
    result: list[str] = []
    for column in dict.fromkeys(table.columns):
        missing = sum(1 for row in table.rows if row.get(column) is None)
        if missing > limit:
            result.append(column)
    return result


class DatasetValidator:
    """Runs every rule and collects all problems; nothing short-circuits."""

    def validate(
        self,
        document: RawDocument,
        parse_outcome: ParseOutcome,
        content_hash: str,
    ) -> ValidationResult:
        table = parse_outcome.table
        errors: list[str] = list(parse_outcome.errors)
        warnings: list[str] = []

        if document.size > MAX_FILE_SIZE_BYTES:
            errors.append(
                f"File size {document.size / 1024 / 1024:.2f}MB exceeds limit of "
                f"{MAX_FILE_SIZE_BYTES // (1024 * 1024)}MB"
            )
        if document.size == 0:
            errors.append("File is empty")

        if table.row_count == 0:
            errors.append("CSV file contains no data rows")
        elif table.row_count > MAX_ROWS:
            warnings.append(
                f"File has {table.row_count} rows. Only first {MAX_ROWS} will be "
                "processed to keep ledger transaction costs reasonable."
            )

        if table.column_count == 0:
            errors.append("No columns detected in CSV header")
        elif table.column_count > MAX_COLUMNS:
            warnings.append(
                f"File has {table.column_count} columns. This may impact metadata size "
                "and token creation costs."
            )

        duplicates = duplicate_columns(table.columns)
        if duplicates:
            errors.append(f"Duplicate column names detected: {', '.join(duplicates)}")

        empty_rows = count_empty_rows(table)
        if empty_rows:
            warnings.append(f"Found {empty_rows} empty rows")

        sparse = sparse_columns(table)
        if sparse:
            warnings.append(f"Columns with >50% missing values: {', '.join(sparse)}")

        return ValidationResult(
            errors=tuple(errors),
            warnings=tuple(warnings),
            row_count=table.row_count,
            column_count=table.column_count,
            columns=table.columns,
            sample_data=table.rows[:SAMPLE_SIZE],
            content_hash=content_hash,
            byte_size=document.size,
        )
