"""Presence checks on the canonical submission record."""

import re

from app.logging.logger import Log
from app.submission.exceptions import SubmissionValidationError
from app.submission.models import REQUIRED_FIELDS, SubmissionRecord

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SubmissionValidator:
    """Fails fast on the first missing required field.

    Contact strings are not validated: a loosely formatted
    "email / phone" value is logged, never rejected.
    """

    def __init__(self, required_fields: tuple[str, ...] = REQUIRED_FIELDS) -> None:
        self._required_fields = required_fields

    def validate(self, record: SubmissionRecord) -> None:
        """Raise SubmissionValidationError naming the first missing field."""
        for field_name in self._required_fields:
            if not _is_present(record.get(field_name)):
                raise SubmissionValidationError(field_name)

        email = record.contact.email
        if not _EMAIL_PATTERN.match(email):
            Log.warning(
                f"Submission {record.order_number}: contact email '{email}' looks malformed"
            )


def _is_present(value: object) -> bool:
    if value is None:
        return False
    return str(value).strip() != ""
