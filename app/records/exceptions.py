from app.submission.exceptions import SubmissionError


class RecordClientError(Exception):
    """Raised by record client adapters when the provider call fails."""


class RecordKeeperError(SubmissionError):
    """Raised when a contact lookup, contact creation or order creation fails."""

    user_message = "Notion-Integration fehlgeschlagen"

    def __init__(self, stage: str, cause: Exception | str) -> None:
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause
