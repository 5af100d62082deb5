from unittest.mock import MagicMock

import pytest

from app.config.settings import Settings
from app.pipeline.models import StageStatus
from app.pipeline.pipeline import PipelineContext, PipelineStep
from app.pipeline.steps import (
    CreateOrderStep,
    NormalizeStep,
    RenderStep,
    UploadStep,
    UpsertContactStep,
    ValidateStep,
)
from app.pipeline.submission_pipeline import SubmissionPipeline, build_pipeline
from app.records.in_memory_adapter import InMemoryRecordClient
from app.records.keeper import RecordKeeper
from app.rendering.base import BaseDocumentRenderer
from app.rendering.exceptions import RenderError
from app.rendering.models import RenderedDocument
from app.storage.exceptions import UploadError
from app.storage.uploader import ObjectStoreUploader
from app.submission.exceptions import SubmissionValidationError
from app.submission.normalizer import FieldNormalizer
from app.submission.validator import SubmissionValidator


def _renderer(document: RenderedDocument | None = None) -> MagicMock:
    renderer = MagicMock(spec=BaseDocumentRenderer)
    renderer.render.return_value = document or RenderedDocument.for_order("X", b"%PDF-1.4")
    return renderer


def _pipeline(
    renderer: BaseDocumentRenderer,
    uploader: ObjectStoreUploader | None,
    keeper: RecordKeeper | None,
) -> SubmissionPipeline:
    return SubmissionPipeline(
        [
            NormalizeStep(FieldNormalizer()),
            ValidateStep(SubmissionValidator()),
            RenderStep(renderer),
            UploadStep(uploader),
            UpsertContactStep(keeper),
            CreateOrderStep(keeper),
        ]
    )


class TestHappyPath:
    def test_all_stages_succeed(
        self,
        raw_submission: dict[str, object],
        uploader: ObjectStoreUploader,
        keeper: RecordKeeper,
    ) -> None:
        result = _pipeline(_renderer(), uploader, keeper).run(raw_submission)

        assert result.success
        assert result.order_number.startswith("DS-")
        assert {name: o.status for name, o in result.stages.items()} == {
            "document": StageStatus.SUCCEEDED,
            "storage": StageStatus.SUCCEEDED,
            "contact": StageStatus.SUCCEEDED,
            "order": StageStatus.SUCCEEDED,
        }
        assert result.degraded_stages() == []

    def test_order_links_upload_and_contact(
        self,
        raw_submission: dict[str, object],
        uploader: ObjectStoreUploader,
        keeper: RecordKeeper,
        record_client: InMemoryRecordClient,
    ) -> None:
        result = _pipeline(_renderer(), uploader, keeper).run(raw_submission)

        order_id = result.stages["order"].payload["id"]  # type: ignore[index]
        draft = record_client.orders["orders"][order_id]
        assert draft.link == result.stages["storage"].payload["link"]  # type: ignore[index]
        assert draft.contact_id == result.stages["contact"].payload["id"]  # type: ignore[index]

    def test_document_is_released(
        self,
        raw_submission: dict[str, object],
        uploader: ObjectStoreUploader,
        keeper: RecordKeeper,
    ) -> None:
        document = RenderedDocument.for_order("X", b"%PDF-1.4")

        _pipeline(_renderer(document), uploader, keeper).run(raw_submission)

        assert document.released


class TestValidation:
    def test_missing_field_raises_before_any_io(self, raw_submission: dict[str, object]) -> None:
        del raw_submission["unfall_ort"]
        renderer = _renderer()
        uploader = MagicMock(spec=ObjectStoreUploader)
        keeper = MagicMock(spec=RecordKeeper)

        with pytest.raises(SubmissionValidationError, match="unfall_ort"):
            _pipeline(renderer, uploader, keeper).run(raw_submission)

        renderer.render.assert_not_called()
        uploader.upload.assert_not_called()
        keeper.upsert_contact.assert_not_called()
        keeper.create_order.assert_not_called()


class TestRenderFailure:
    def test_render_failure_stops_pipeline(self, raw_submission: dict[str, object]) -> None:
        renderer = MagicMock(spec=BaseDocumentRenderer)
        renderer.render.side_effect = RenderError("font missing")
        uploader = MagicMock(spec=ObjectStoreUploader)
        keeper = MagicMock(spec=RecordKeeper)

        result = _pipeline(renderer, uploader, keeper).run(raw_submission)

        assert not result.success
        assert result.failed_stage == "document"
        assert result.message == "PDF-Generierung fehlgeschlagen"
        assert result.stages["document"].status is StageStatus.FAILED
        assert "font missing" in (result.stages["document"].error or "")
        assert set(result.stages) == {"document"}
        uploader.upload.assert_not_called()
        keeper.upsert_contact.assert_not_called()
        keeper.create_order.assert_not_called()

    def test_unexpected_error_gets_generic_message(self, raw_submission: dict[str, object]) -> None:
        renderer = MagicMock(spec=BaseDocumentRenderer)
        renderer.render.side_effect = RuntimeError("boom")

        result = _pipeline(renderer, None, None).run(raw_submission)

        assert result.failed_stage == "document"
        assert result.message == "Ein Fehler ist aufgetreten"


class TestDegradation:
    def test_upload_failure_is_not_fatal(
        self, raw_submission: dict[str, object], keeper: RecordKeeper, record_client: InMemoryRecordClient
    ) -> None:
        uploader = MagicMock(spec=ObjectStoreUploader)
        uploader.upload.side_effect = UploadError("upload_file", "quota exceeded")
        document = RenderedDocument.for_order("X", b"%PDF-1.4")

        result = _pipeline(_renderer(document), uploader, keeper).run(raw_submission)

        assert result.success
        assert result.stages["storage"].status is StageStatus.FAILED
        assert "upload_file" in (result.stages["storage"].error or "")
        assert result.stages["contact"].status is StageStatus.SUCCEEDED
        assert result.stages["order"].status is StageStatus.SUCCEEDED
        assert result.degraded_stages() == ["storage"]
        assert document.released
        order_id = result.stages["order"].payload["id"]  # type: ignore[index]
        assert record_client.orders["orders"][order_id].link is None

    def test_unconfigured_collaborators_are_skipped(self, raw_submission: dict[str, object]) -> None:
        result = _pipeline(_renderer(), None, None).run(raw_submission)

        assert result.success
        assert result.stages["document"].status is StageStatus.SUCCEEDED
        for stage in ("storage", "contact", "order"):
            assert result.stages[stage].status is StageStatus.SKIPPED
        assert result.stages["storage"].reason == "Google Drive client not initialized"
        assert result.stages["contact"].reason == "Notion client not initialized"

    def test_contact_failure_still_creates_order(
        self, raw_submission: dict[str, object], uploader: ObjectStoreUploader
    ) -> None:
        keeper = MagicMock(spec=RecordKeeper)
        keeper.contacts_enabled = True
        keeper.orders_enabled = True
        keeper.upsert_contact.side_effect = RuntimeError("notion down")

        result = _pipeline(_renderer(), uploader, keeper).run(raw_submission)

        assert result.success
        assert result.stages["contact"].status is StageStatus.FAILED
        _, kwargs = keeper.create_order.call_args
        assert kwargs["contact"] is None
        assert kwargs["storage"] is not None


class TestCustomSteps:
    def test_unstaged_step_errors_propagate(self) -> None:
        class Boom(PipelineStep):
            def run(self, context: PipelineContext) -> PipelineContext:
                raise KeyError("x")

        with pytest.raises(KeyError):
            SubmissionPipeline([Boom()]).run({})


class TestBuildPipeline:
    def test_service_status_reflects_configuration(self) -> None:
        settings = Settings(storage_provider="memory", records_provider="none")

        pipeline = build_pipeline(settings, renderer=_renderer())

        assert pipeline.services.google_drive is True
        assert pipeline.services.notion is False

    def test_memory_providers_end_to_end(self, raw_submission: dict[str, object]) -> None:
        settings = Settings(storage_provider="memory", records_provider="memory")

        result = build_pipeline(settings, renderer=_renderer()).run(raw_submission)

        assert result.success
        assert result.degraded_stages() == []
