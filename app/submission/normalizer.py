"""Maps client payloads onto the canonical flat submission record."""

from collections.abc import Mapping
from typing import ClassVar

from app.logging.logger import Log
from app.submission.models import ORDER_NUMBER, RawSubmission, SubmissionRecord
from app.submission.order_number import OrderNumberGenerator, default_generator


class FieldNormalizer:
    """Flattens dotted keys and nested objects into underscore keys.

    ``{"auftraggeber.name": x}`` and ``{"auftraggeber": {"name": x}}`` both
    become ``{"auftraggeber_name": x}``. Plain keys found in ``ALIASES`` are
    renamed; everything else passes through unchanged.
    """

    DELIMITER: ClassVar[str] = "."
    JOINER: ClassVar[str] = "_"
    ALIASES: ClassVar[dict[str, str]] = {
        "gutachtenNr": ORDER_NUMBER,
        "signature": "unterschrift",
    }

    def __init__(self, order_numbers: OrderNumberGenerator | None = None) -> None:
        self._order_numbers = order_numbers or default_generator

    def normalize(self, raw: RawSubmission) -> SubmissionRecord:
        fields: dict[str, object] = {}
        for key, value in raw.items():
            if isinstance(value, Mapping):
                self._flatten(self._join_dotted(key), value, fields)
            elif self.DELIMITER in key:
                fields[self._join_dotted(key)] = value
            else:
                fields[self.ALIASES.get(key, key)] = value

        if not _has_value(fields.get(ORDER_NUMBER)):
            fields[ORDER_NUMBER] = self._order_numbers.next()
            Log.info(f"Generated order number {fields[ORDER_NUMBER]}")

        return SubmissionRecord(fields)

    def _flatten(
        self,
        prefix: str,
        nested: Mapping[str, object],
        out: dict[str, object],
    ) -> None:
        for key, value in nested.items():
            name = f"{prefix}{self.JOINER}{self._join_dotted(key)}"
            if isinstance(value, Mapping):
                self._flatten(name, value, out)
            else:
                out[name] = value

    @classmethod
    def _join_dotted(cls, key: str) -> str:
        return key.replace(cls.DELIMITER, cls.JOINER)


def _has_value(value: object) -> bool:
    return value is not None and str(value).strip() != ""
