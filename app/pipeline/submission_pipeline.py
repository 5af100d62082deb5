from app.config.settings import Settings
from app.logging.logger import Log
from app.pipeline.models import PipelineResult, ServiceStatus, StageOutcome
from app.pipeline.pipeline import PipelineContext, PipelineStep
from app.pipeline.steps import (
    CreateOrderStep,
    NormalizeStep,
    RenderStep,
    UploadStep,
    UpsertContactStep,
    ValidateStep,
)
from app.records.factory import RecordKeeperFactory
from app.records.keeper import RecordKeeper
from app.rendering.base import BaseDocumentRenderer
from app.rendering.reportlab_renderer import ReportLabRenderer
from app.storage.factory import ObjectStoreFactory
from app.storage.uploader import ObjectStoreUploader
from app.submission.exceptions import SubmissionError
from app.submission.models import RawSubmission
from app.submission.normalizer import FieldNormalizer
from app.submission.validator import SubmissionValidator


class SubmissionPipeline:
    """Runs one form submission through its steps.

    Pipeline: normalize -> validate -> render -> upload -> contact -> order.
    Rendering is the only fatal stage; storage and record keeping degrade to
    failed or skipped outcomes in the result.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        services: ServiceStatus | None = None,
    ) -> None:
        self._steps = steps
        self.services = services or ServiceStatus()

    def run(self, raw: RawSubmission) -> PipelineResult:
        """Process one submission.

        Raises:
            SubmissionValidationError: before any side effect, when a required
                field is missing.
        """
        context = PipelineContext(raw=raw)
        try:
            for step in self._steps:
                if not self._run_step(step, context):
                    break
        finally:
            if context.document is not None:
                context.document.release()

        result = context.result
        if result.success:
            degraded = result.degraded_stages()
            suffix = f" (degraded: {', '.join(degraded)})" if degraded else ""
            Log.info(f"Submission {result.order_number} completed{suffix}")
        return result

    def _run_step(self, step: PipelineStep, context: PipelineContext) -> bool:
        """Run one step; return False when the pipeline must stop."""
        if step.stage is None:
            step.run(context)
            return True

        reason = step.skip_reason(context)
        if reason is not None:
            Log.warning(f"Skipping {step.stage} for {context.result.order_number}: {reason}")
            context.result.stages[step.stage] = StageOutcome.skipped(reason)
            return True

        try:
            step.run(context)
        except Exception as exc:
            context.result.stages[step.stage] = StageOutcome.failed(exc)
            if not step.fatal:
                Log.error(f"{step.stage} failed for {context.result.order_number}: {exc}")
                return True
            Log.exception(f"{step.stage} failed for {context.result.order_number}: {exc}")
            context.result.failed_stage = step.stage
            context.result.message = (
                exc.user_message if isinstance(exc, SubmissionError) else SubmissionError.user_message
            )
            return False
        return True


def build_pipeline(
    settings: Settings,
    renderer: BaseDocumentRenderer | None = None,
    uploader: ObjectStoreUploader | None = None,
    keeper: RecordKeeper | None = None,
) -> SubmissionPipeline:
    """Build a SubmissionPipeline with the collaborators the settings enable."""
    uploader = uploader or ObjectStoreFactory.create(settings)
    keeper = keeper or RecordKeeperFactory.create(settings)
    steps: list[PipelineStep] = [
        NormalizeStep(FieldNormalizer()),
        ValidateStep(SubmissionValidator()),
        RenderStep(renderer or ReportLabRenderer()),
        UploadStep(uploader),
        UpsertContactStep(keeper),
        CreateOrderStep(keeper),
    ]
    services = ServiceStatus(notion=keeper is not None, google_drive=uploader is not None)
    return SubmissionPipeline(steps, services=services)
