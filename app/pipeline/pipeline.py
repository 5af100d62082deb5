from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from app.pipeline.models import PipelineResult
from app.records.models import ContactRef, OrderRef
from app.rendering.models import RenderedDocument
from app.storage.models import StorageReference
from app.submission.models import RawSubmission, SubmissionRecord


@dataclass(slots=True)
class PipelineContext:
    raw: RawSubmission
    record: SubmissionRecord | None = None
    document: RenderedDocument | None = None
    storage: StorageReference | None = None
    contact: ContactRef | None = None
    order: OrderRef | None = None
    result: PipelineResult = field(default_factory=PipelineResult)


class PipelineStep(ABC):
    """One unit of work in the submission pipeline.

    Steps without a ``stage`` run before any I/O and let errors reach the
    caller. Staged steps report a StageOutcome; a failing fatal stage stops
    the pipeline, a failing non-fatal stage is recorded and skipped over.
    """

    stage: ClassVar[str | None] = None
    fatal: ClassVar[bool] = True

    def skip_reason(self, context: PipelineContext) -> str | None:
        """Return why the step should not run, or None to run it."""
        return None

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
