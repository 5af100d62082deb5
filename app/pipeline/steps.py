from app.logging.logger import Log
from app.pipeline.models import StageOutcome
from app.pipeline.pipeline import PipelineContext, PipelineStep
from app.records.keeper import RecordKeeper
from app.rendering.base import BaseDocumentRenderer
from app.storage.uploader import ObjectStoreUploader
from app.submission.models import SubmissionRecord
from app.submission.normalizer import FieldNormalizer
from app.submission.validator import SubmissionValidator


def _require_record(context: PipelineContext, step: str) -> SubmissionRecord:
    if context.record is None:
        raise ValueError(f"PipelineContext.record must be set before {step}")
    return context.record


class NormalizeStep(PipelineStep):
    def __init__(self, normalizer: FieldNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.record = self._normalizer.normalize(context.raw)
        context.result.order_number = context.record.order_number
        Log.info(
            f"Normalized submission {context.record.order_number}: "
            f"{len(context.record.fields)} fields"
        )
        return context


class ValidateStep(PipelineStep):
    def __init__(self, validator: SubmissionValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        self._validator.validate(_require_record(context, "validation"))
        return context


class RenderStep(PipelineStep):
    stage = "document"

    def __init__(self, renderer: BaseDocumentRenderer) -> None:
        self._renderer = renderer

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._renderer.render(_require_record(context, "rendering"))
        context.document = document
        context.result.stages[self.stage] = StageOutcome.succeeded(
            {"file_name": document.file_name, "size": document.size}
        )
        return context


class UploadStep(PipelineStep):
    stage = "storage"
    fatal = False

    def __init__(self, uploader: ObjectStoreUploader | None) -> None:
        self._uploader = uploader

    def skip_reason(self, context: PipelineContext) -> str | None:
        if self._uploader is None:
            return "Google Drive client not initialized"
        if context.document is None:
            return "no rendered document"
        return None

    def run(self, context: PipelineContext) -> PipelineContext:
        record = _require_record(context, "upload")
        if context.document is None or self._uploader is None:
            raise ValueError("UploadStep requires a rendered document and an uploader")
        with context.document as document:
            context.storage = self._uploader.upload(
                record.plate,
                document.file_name,
                document.content,
                document.mime_type,
            )
        context.result.stages[self.stage] = StageOutcome.succeeded(context.storage.to_dict())
        return context


class UpsertContactStep(PipelineStep):
    stage = "contact"
    fatal = False

    def __init__(self, keeper: RecordKeeper | None) -> None:
        self._keeper = keeper

    def skip_reason(self, context: PipelineContext) -> str | None:
        if self._keeper is None:
            return "Notion client not initialized"
        if not self._keeper.contacts_enabled:
            return "contacts collection not configured"
        return None

    def run(self, context: PipelineContext) -> PipelineContext:
        if self._keeper is None:
            raise ValueError("UpsertContactStep requires a record keeper")
        context.contact = self._keeper.upsert_contact(_require_record(context, "contact upsert"))
        context.result.stages[self.stage] = StageOutcome.succeeded(context.contact.to_dict())
        return context


class CreateOrderStep(PipelineStep):
    stage = "order"
    fatal = False

    def __init__(self, keeper: RecordKeeper | None) -> None:
        self._keeper = keeper

    def skip_reason(self, context: PipelineContext) -> str | None:
        if self._keeper is None:
            return "Notion client not initialized"
        if not self._keeper.orders_enabled:
            return "orders collection not configured"
        return None

    def run(self, context: PipelineContext) -> PipelineContext:
        if self._keeper is None:
            raise ValueError("CreateOrderStep requires a record keeper")
        context.order = self._keeper.create_order(
            _require_record(context, "order creation"),
            contact=context.contact,
            storage=context.storage,
        )
        context.result.stages[self.stage] = StageOutcome.succeeded(context.order.to_dict())
        return context
