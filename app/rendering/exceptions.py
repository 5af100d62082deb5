from app.submission.exceptions import SubmissionError


class RenderError(SubmissionError):
    """Raised when the order document cannot be produced."""

    user_message = "PDF-Generierung fehlgeschlagen"
