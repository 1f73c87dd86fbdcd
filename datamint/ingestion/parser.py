"""CSV tokenizer with per-cell dynamic typing."""

import csv
import io
import math
import re

from datamint.ingestion.models import CellValue, ParsedTable, ParseOutcome, RawDocument, Row
from datamint.logging.logger import Log

_NUMERIC_LITERAL = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$")
_INTEGER_LITERAL = re.compile(r"^\s*[-+]?\d+\s*$")
_BOOLEAN_LITERALS = {"true": True, "false": False}


def is_numeric_literal(text: str) -> bool:
    return bool(_NUMERIC_LITERAL.match(text))


def coerce_cell(raw: str) -> CellValue:
    """Type a single CSV field: empty -> None, numbers, booleans, else the raw string.

    Numeric literals that cannot be held as a finite number stay strings.
    """
    if raw == "":
        return None
    if _INTEGER_LITERAL.match(raw):
        try:
            return int(raw)
        except ValueError:
            # Past the interpreter's int digit limit; keep the literal.
            return raw
    if _NUMERIC_LITERAL.match(raw):
        number = float(raw)
        return number if math.isfinite(number) else raw
    boolean = _BOOLEAN_LITERALS.get(raw.strip().lower())
    if boolean is not None:
        return boolean
    return raw


def _is_blank_record(record: list[str]) -> bool:
    return not record or (len(record) == 1 and not record[0].strip())


class CsvParser:
    """Parses CSV bytes into a ParsedTable using the first record as the header."""

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def parse(self, document: RawDocument) -> ParseOutcome:
        try:
            text = document.content.decode(self._encoding)
        except UnicodeDecodeError as exc:
            Log.warning(f"Could not decode {document.name}: {exc}")
            return ParseOutcome(table=ParsedTable(), errors=(f"Parse error: {exc}",))

        try:
            records = [r for r in csv.reader(io.StringIO(text, newline="")) if not _is_blank_record(r)]
        except csv.Error as exc:
            Log.warning(f"Could not tokenize {document.name}: {exc}")
            return ParseOutcome(table=ParsedTable(), errors=(f"Parse error: {exc}",))

        if not records:
            return ParseOutcome(table=ParsedTable())

        header = tuple(records[0])
        errors = [
            f"Parse error: header column {index + 1} has no name"
            for index, name in enumerate(header)
            if not name.strip()
        ]
        rows = tuple(self._build_row(header, record) for record in records[1:])
        Log.debug(f"Parsed {len(rows)} rows x {len(header)} columns from {document.name}")
        return ParseOutcome(table=ParsedTable(columns=header, rows=rows), errors=tuple(errors))

    @staticmethod
    def _build_row(header: tuple[str, ...], record: list[str]) -> Row:
        row: Row = {}
        for index, name in enumerate(header):
            row[name] = coerce_cell(record[index]) if index < len(record) else None
        return row
