from dataclasses import dataclass, field

CellValue = str | int | float | bool | None
Row = dict[str, CellValue]


@dataclass(frozen=True)
class RawDocument:
    """An uploaded file: raw bytes plus the name and size the client declared."""

    name: str
    content: bytes
    size: int = -1

    def __post_init__(self) -> None:
        if self.size < 0:
            object.__setattr__(self, "size", len(self.content))


@dataclass(frozen=True)
class ParsedTable:
    """Header plus typed rows. Every row carries exactly the header's keys."""

    columns: tuple[str, ...] = ()
    rows: tuple[Row, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def head(self, n: int) -> "ParsedTable":
        return ParsedTable(columns=self.columns, rows=self.rows[:n])


@dataclass(frozen=True)
class ParseOutcome:
    """Parser output. Parse problems are carried as messages, never raised."""

    table: ParsedTable
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one upload. ``is_valid`` follows ``errors``."""

    errors: tuple[str, ...]
    warnings: tuple[str, ...]
    row_count: int
    column_count: int
    columns: tuple[str, ...]
    sample_data: tuple[Row, ...]
    content_hash: str
    byte_size: int
    is_valid: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "is_valid", len(self.errors) == 0)

    def to_dict(self) -> dict[str, object]:
        return {
            "isValid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "rowCount": self.row_count,
            "columnCount": self.column_count,
            "columns": list(self.columns),
            "sampleData": [dict(row) for row in self.sample_data],
            "hash": self.content_hash,
            "estimatedSize": self.byte_size,
        }
