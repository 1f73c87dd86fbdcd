import math

from datamint.ingestion.models import CellValue, ParsedTable
from datamint.ingestion.parser import is_numeric_literal
from datamint.ingestion.validator import MAX_ROWS
from datamint.profiling.models import ColumnStats, DatasetStats, DatasetSummary


def _as_number(value: CellValue) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)) and not is_numeric_literal(value):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def median(numbers: list[float]) -> float:
    ordered = sorted(numbers)
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def column_stats(numbers: list[float]) -> ColumnStats:
    total = sum(numbers)
    return ColumnStats(
        count=len(numbers),
        min=min(numbers),
        max=max(numbers),
        avg=total / len(numbers),
        sum=total,
        median=median(numbers),
    )


def calculate_stats(table: ParsedTable) -> DatasetStats:
    """Numeric summaries per column over the first MAX_ROWS rows.

    Columns without a single numeric value are left out rather than zeroed.
    """
    rows = table.rows[:MAX_ROWS]
    columns: dict[str, ColumnStats] = {}
    for column in dict.fromkeys(table.columns):
        numbers = [n for n in (_as_number(row.get(column)) for row in rows) if n is not None]
        if numbers:
            columns[column] = column_stats(numbers)
    return DatasetStats(
        row_count=table.row_count,
        column_count=table.column_count,
        columns=columns,
    )


def summarize(table: ParsedTable) -> DatasetSummary:
    valid = sum(
        1 for row in table.rows if any(value is not None for value in row.values())
    )
    return DatasetSummary(
        total_rows=table.row_count,
        valid_rows=valid,
        invalid_rows=table.row_count - valid,
    )
