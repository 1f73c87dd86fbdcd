from abc import ABC, abstractmethod
from dataclasses import dataclass

from datamint.ingestion.models import ParseOutcome, RawDocument, ValidationResult
from datamint.minting.models import MintResult
from datamint.profiling.models import (
    DatasetMetadata,
    DatasetPreview,
    DatasetStats,
    TokenizationAssessment,
)


@dataclass(slots=True)
class PipelineContext:
    document: RawDocument
    content_hash: str = ""
    parse_outcome: ParseOutcome | None = None
    validation: ValidationResult | None = None
    preview: DatasetPreview | None = None
    metadata: DatasetMetadata | None = None
    stats: DatasetStats | None = None
    assessment: TokenizationAssessment | None = None
    mint_result: MintResult | None = None
    halted: bool = False
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
