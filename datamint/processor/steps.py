from datamint.database.models import MintRecord
from datamint.database.repositories.mint_record_repository import MintRecordRepository
from datamint.ingestion.fingerprint import fingerprint
from datamint.ingestion.parser import CsvParser
from datamint.ingestion.validator import DatasetValidator
from datamint.logging.logger import Log
from datamint.minting.orchestrator import MintOrchestrator
from datamint.processor.exceptions import StepOrderError
from datamint.processor.pipeline import PipelineContext, PipelineStep
from datamint.profiling.metadata import assess_tokenization, build_metadata, build_preview
from datamint.profiling.stats import calculate_stats


class FingerprintStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.content_hash = fingerprint(context.document.content)
        Log.info(
            f"Fingerprinted {context.document.name}",
            hash=context.content_hash[:16],
            bytes=context.document.size,
        )
        return context


class ParseStep(PipelineStep):
    def __init__(self, parser: CsvParser) -> None:
        self._parser = parser

    def run(self, context: PipelineContext) -> PipelineContext:
        context.parse_outcome = self._parser.parse(context.document)
        table = context.parse_outcome.table
        Log.info(
            f"Parsed {context.document.name}: {table.row_count} rows, "
            f"{table.column_count} columns"
        )
        return context


class ValidateStep(PipelineStep):
    def __init__(self, validator: DatasetValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.parse_outcome is None or not context.content_hash:
            raise StepOrderError("ParseStep and FingerprintStep must run before validation")
        validation = self._validator.validate(
            context.document,
            context.parse_outcome,
            context.content_hash,
        )
        context.validation = validation
        context.preview = build_preview(context.document, validation)
        for warning in validation.warnings:
            Log.warning(f"{context.document.name}: {warning}")
        if not validation.is_valid:
            context.halted = True
            Log.info(
                f"Validation failed for {context.document.name}: {'; '.join(validation.errors)}"
            )
        return context


class ProfileStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.parse_outcome is None or context.validation is None:
            raise StepOrderError("ValidateStep must run before profiling")
        table = context.parse_outcome.table
        context.metadata = build_metadata(context.document, context.validation, table)
        context.stats = calculate_stats(table)
        context.assessment = assess_tokenization(context.metadata)
        Log.info(
            f"Profiled {context.document.name}: {len(context.stats.columns)} numeric columns, "
            f"can_tokenize={context.assessment.can_tokenize}"
        )
        return context


class MintStep(PipelineStep):
    def __init__(self, orchestrator: MintOrchestrator) -> None:
        self._orchestrator = orchestrator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.metadata is None:
            raise StepOrderError("ProfileStep must run before minting")
        context.mint_result = self._orchestrator.mint(context.metadata)
        return context


class RecordMintStep(PipelineStep):
    def __init__(self, registry: MintRecordRepository) -> None:
        self._registry = registry

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.mint_result is None or context.metadata is None:
            raise StepOrderError("MintStep must run before recording the mint")
        record = MintRecord.from_result(context.mint_result, context.metadata)
        try:
            self._registry.insert(record)
        except Exception as exc:
            # Registry writes never fail a completed mint.
            Log.warning(f"Could not record mint {record.token_id} #{record.serial_number}: {exc}")
        return context


class ReportFailureStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(f"Processing {context.document.name} failed: {context.error_message}")
        return context
