from app.submission.exceptions import SubmissionError


class StorageClientError(Exception):
    """Raised by storage client adapters when the provider call fails."""


class UploadError(SubmissionError):
    """Raised when one step of the folder/upload/share sequence fails."""

    user_message = "Google Drive Upload fehlgeschlagen"

    def __init__(self, step: str, cause: Exception | str) -> None:
        super().__init__(f"{step} failed: {cause}")
        self.step = step
        self.cause = cause
