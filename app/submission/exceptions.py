class SubmissionError(Exception):
    """Base exception for all submission-related errors.

    ``user_message`` is the German text shown to the form user; ``str(exc)``
    carries the internal cause for the logs.
    """

    user_message = "Ein Fehler ist aufgetreten"

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        if user_message is not None:
            self.user_message = user_message


class SubmissionValidationError(SubmissionError):
    """Raised when a required field is missing or blank."""

    def __init__(self, field_name: str) -> None:
        message = f"Erforderliches Feld fehlt: {field_name}"
        super().__init__(message, user_message=message)
        self.field_name = field_name
