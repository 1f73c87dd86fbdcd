from dateutil import parser as dateparser

from datamint.ingestion.models import CellValue, ParsedTable
from datamint.ingestion.parser import is_numeric_literal
from datamint.profiling.models import ColumnSchema, ColumnType


def _looks_like_date(text: str) -> bool:
    if "-" not in text and "/" not in text:
        return False
    try:
        dateparser.parse(text)
    except (ValueError, OverflowError):
        return False
    return True


def infer_type(value: CellValue) -> ColumnType:
    """Classify one cell: number, then boolean, then date, else string."""
    if value is None:
        return ColumnType.STRING
    if isinstance(value, bool):
        return ColumnType.BOOLEAN
    if isinstance(value, (int, float)):
        return ColumnType.NUMBER

    text = str(value)
    if not text.strip():
        return ColumnType.STRING
    if is_numeric_literal(text):
        return ColumnType.NUMBER
    if text.strip().lower() in ("true", "false"):
        return ColumnType.BOOLEAN
    if _looks_like_date(text):
        return ColumnType.DATE
    return ColumnType.STRING


def infer_schema(table: ParsedTable) -> ColumnSchema:
    """Infer a type per column from the first row only.

    A column whose first value is blank is reported as string even if later
    rows hold numbers.
    """
    if not table.rows:
        return {}
    first_row = table.rows[0]
    return {column: infer_type(first_row.get(column)) for column in table.columns}
