from datamint.database.repositories.mint_record_repository import MintRecordRepository
from datamint.ingestion.models import RawDocument
from datamint.ingestion.parser import CsvParser
from datamint.ingestion.validator import DatasetValidator
from datamint.logging.logger import Log
from datamint.minting.orchestrator import MintOrchestrator
from datamint.processor.exceptions import StepOrderError
from datamint.processor.models import ProcessedDataset
from datamint.processor.pipeline import PipelineContext, PipelineStep
from datamint.processor.steps import (
    FingerprintStep,
    MintStep,
    ParseStep,
    ProfileStep,
    RecordMintStep,
    ReportFailureStep,
    ValidateStep,
)


class Processor:
    """Runs an upload through the pipeline steps in order.

    Pipeline: fingerprint -> parse -> validate -> profile [-> mint -> record].
    An invalid upload halts after validation; nothing downstream runs.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, document: RawDocument) -> ProcessedDataset:
        Log.info(f"Processing {document.name} ({document.size} bytes)")
        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                context = step.run(context)
                if context.halted:
                    break
        except Exception as exc:
            context.error_message = str(exc)
            self._failed_step.run(context)
            raise

        if context.validation is None:
            raise StepOrderError("Pipeline finished without a validation result")
        return ProcessedDataset(
            validation=context.validation,
            preview=context.preview,
            metadata=context.metadata,
            stats=context.stats,
            assessment=context.assessment,
            mint_result=context.mint_result,
        )


def build_processor(
    orchestrator: MintOrchestrator | None = None,
    registry: MintRecordRepository | None = None,
) -> Processor:
    """Build a profiling pipeline; pass an orchestrator to also mint valid uploads."""
    steps: list[PipelineStep] = [
        FingerprintStep(),
        ParseStep(CsvParser()),
        ValidateStep(DatasetValidator()),
        ProfileStep(),
    ]
    if orchestrator is not None:
        steps.append(MintStep(orchestrator))
        if registry is not None:
            steps.append(RecordMintStep(registry))
    return Processor(steps=steps, failed_step=ReportFailureStep())
