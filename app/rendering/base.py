from abc import ABC, abstractmethod

from app.rendering.models import RenderedDocument
from app.submission.models import SubmissionRecord


class BaseDocumentRenderer(ABC):
    """Contract for all document rendering adapters."""

    @abstractmethod
    def render(self, record: SubmissionRecord) -> RenderedDocument:
        """Render a validated submission into a PDF document.

        Args:
            record: Canonical, validated submission record.

        Returns:
            RenderedDocument holding the PDF bytes and a suggested file name.

        Raises:
            RenderError: if the document cannot be produced.
        """
