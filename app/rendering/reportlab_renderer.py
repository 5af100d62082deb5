"""Order document rendering with the reportlab canvas API.

Layout is tracked with a top-down cursor in points, measured from the top edge
of the page, and converted to reportlab's bottom-left origin when drawing.
"""

import base64
import io
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from app.logging.logger import Log
from app.rendering.base import BaseDocumentRenderer
from app.rendering.exceptions import RenderError
from app.rendering.models import RenderedDocument
from app.submission import models as form
from app.submission.models import SubmissionRecord

REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"

_DATA_URI_PREFIX = re.compile(r"^data:image/[\w.+-]+;base64,")
_EMPTY_DATA_URI = "data:,"


@dataclass(frozen=True)
class Letterhead:
    """Static office details printed at the top of every order."""

    name: str = "DS SACHVERSTÄNDIGENBÜRO"
    address: str = "Mühlenstr. 49 - 33609 Bielefeld"
    phone: str = "0151-11738834"
    email: str = "info@unfallschaden-bielefeld.de"


class _Cursor:
    """Canvas wrapper that owns the vertical position and page breaks."""

    def __init__(self, pdf: canvas.Canvas, page_height: float, top: float, break_at: float) -> None:
        self.pdf = pdf
        self.y = top
        self.pages = 1
        self._page_height = page_height
        self._top = top
        self._break_at = break_at

    def text(self, value: str, x: float, size: int = 12, font: str = REGULAR) -> None:
        self.pdf.setFont(font, size)
        self.pdf.drawString(x, self._page_height - self.y - size, value)

    def break_if_needed(self) -> None:
        if self.y > self._break_at:
            self.pdf.showPage()
            self.pages += 1
            self.y = self._top

    def image(self, reader: ImageReader, x: float, top: float, width: float, height: float) -> None:
        self.pdf.drawImage(
            reader,
            x,
            self._page_height - top - height,
            width=width,
            height=height,
            mask="auto",
        )


class ReportLabRenderer(BaseDocumentRenderer):
    """Renders the "Auftrag zur Gutachtenerstellung" order document."""

    PAGE_SIZE = A4
    MARGIN = 50
    VALUE_X = 150
    CONTENT_WIDTH = 500
    PAGE_BREAK_Y = 700
    LINE = 15
    SIGNATURE_X = 300
    SIGNATURE_WIDTH = 200
    SIGNATURE_HEIGHT = 60

    def __init__(
        self,
        letterhead: Letterhead | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._letterhead = letterhead or Letterhead()
        self._now = now

    def render(self, record: SubmissionRecord) -> RenderedDocument:
        buffer = io.BytesIO()
        try:
            pdf = canvas.Canvas(buffer, pagesize=self.PAGE_SIZE)
            pdf.setTitle(f"Gutachten {record.order_number}")
            cursor = _Cursor(pdf, self.PAGE_SIZE[1], self.MARGIN, self.PAGE_BREAK_Y)

            self._draw_letterhead(cursor)
            self._draw_order(cursor, record)
            self._draw_client(cursor, record)
            self._draw_vehicle(cursor, record)
            self._draw_incident(cursor, record)
            self._draw_opponent(cursor, record)
            self._draw_insurer(cursor, record)
            self._draw_notes(cursor, record)
            self._draw_closing(cursor, record)
            self._draw_footer(cursor)

            pdf.save()
        except Exception as exc:
            raise RenderError(f"reportlab rendering failed: {exc}") from exc

        document = RenderedDocument.for_order(record.order_number, buffer.getvalue())
        Log.info(
            f"Rendered {document.file_name}: {cursor.pages} page(s), {document.size} bytes"
        )
        return document

    def _draw_letterhead(self, cursor: _Cursor) -> None:
        head = self._letterhead
        cursor.text(head.name, self.MARGIN, size=20, font=BOLD)
        cursor.y = 80
        cursor.text(head.address, self.MARGIN)
        cursor.y = 95
        cursor.text(f"Tel.: {head.phone}", self.MARGIN)
        cursor.y = 110
        cursor.text(f"E-Mail: {head.email}", self.MARGIN)
        cursor.y = 150
        cursor.text("Auftrag zur Gutachtenerstellung", self.MARGIN, size=16, font=BOLD)
        cursor.y = 190

    def _draw_order(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        cursor.text("Gutachten Nr.:", self.MARGIN, font=BOLD)
        cursor.text(record.order_number, self.VALUE_X)
        cursor.y += 20
        if record.flag(form.CESSION):
            cursor.text("[X] Abtretung", self.MARGIN)
            cursor.y += 20
        cursor.y += 10

    def _draw_client(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        contact = record.contact
        self._heading(cursor, "Auftraggeber (Geschädigter)", gap=25)
        self._lines(
            cursor,
            [
                f"Name: {record.client_name}",
                f"Adresse: {record.text(form.CLIENT_ADDRESS)}",
                f"E-Mail: {contact.email}",
                f"Telefon: {contact.phone}",
                f"Kennzeichen: {record.plate}",
            ],
        )
        cursor.y += 10

    def _draw_vehicle(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        labels = [
            (form.ODOMETER, "Kilometerstand"),
            (form.TIRES, "Reifen/Profiltiefe"),
            (form.VIN, "Fahrzeugstellnummer"),
        ]
        lines = [f"{label}: {record.text(name)}" for name, label in labels if record.text(name)]
        if not lines:
            return
        self._heading(cursor, "Fahrzeugdaten")
        self._lines(cursor, lines)
        cursor.y += 10

    def _draw_incident(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        self._heading(cursor, "Unfalldaten")
        lines = [f"Unfalltag: {record.text(form.INCIDENT_DATE)}"]
        if record.text(form.INCIDENT_TIME):
            lines.append(f"Uhrzeit: {record.text(form.INCIDENT_TIME)}")
        lines.append(f"Unfallort: {record.text(form.INCIDENT_PLACE)}")
        self._lines(cursor, lines)

        description = record.text(form.INCIDENT_DESCRIPTION)
        if description:
            self._lines(cursor, ["Schadenbeschreibung:"])
            self._wrapped(cursor, description)
            cursor.y += self.LINE

    def _draw_opponent(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        name = record.text(form.OPPONENT_NAME)
        if not name:
            return
        cursor.y += 10
        self._heading(cursor, "Gegnerisches Fahrzeug")
        self._lines(
            cursor,
            [
                f"Name: {name}",
                f"Adresse: {record.text(form.OPPONENT_ADDRESS)}",
                f"Kennzeichen: {record.text(form.OPPONENT_PLATE)}",
            ],
        )

    def _draw_insurer(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        name = record.text(form.INSURER_NAME)
        if not name:
            return
        cursor.y += 10
        self._heading(cursor, "Versicherung des Verursachers")
        self._lines(
            cursor,
            [
                f"Versicherung: {name}",
                f"Schadennummer: {record.text(form.INSURER_CLAIM_NUMBER)}",
            ],
        )

    def _draw_notes(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        notes = record.text(form.NOTES)
        if not notes:
            return
        cursor.y += 10
        self._heading(cursor, "Notizen")
        self._wrapped(cursor, notes)

    def _draw_closing(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        cursor.break_if_needed()
        cursor.y += 20
        cursor.text("Ort/Datum und Unterschrift:", self.MARGIN, font=BOLD)
        cursor.y += 20

        today = self._now().strftime("%d.%m.%Y")
        place = record.text(form.SIGNING_PLACE)
        cursor.text(f"{place}, {today}" if place else today, self.MARGIN)
        self._draw_signature(cursor, record)

    def _draw_signature(self, cursor: _Cursor, record: SubmissionRecord) -> None:
        data_uri = record.text(form.SIGNATURE)
        if not data_uri or data_uri == _EMPTY_DATA_URI:
            return
        try:
            raw = base64.b64decode(_DATA_URI_PREFIX.sub("", data_uri), validate=True)
            cursor.image(
                ImageReader(io.BytesIO(raw)),
                self.SIGNATURE_X,
                cursor.y - 10,
                self.SIGNATURE_WIDTH,
                self.SIGNATURE_HEIGHT,
            )
        except Exception as exc:
            Log.warning(f"Skipping signature for {record.order_number}: {exc}")

    def _draw_footer(self, cursor: _Cursor) -> None:
        created = self._now().strftime("%d.%m.%Y %H:%M")
        saved_y = cursor.y
        cursor.y = self.PAGE_SIZE[1] - 40
        cursor.text(f"Erstellt am: {created}", self.MARGIN, size=8)
        cursor.y = saved_y

    def _heading(self, cursor: _Cursor, title: str, gap: int = 20) -> None:
        cursor.break_if_needed()
        cursor.text(title, self.MARGIN, size=14, font=BOLD)
        cursor.y += gap

    def _lines(self, cursor: _Cursor, lines: list[str]) -> None:
        for line in lines:
            cursor.break_if_needed()
            cursor.text(line, self.MARGIN)
            cursor.y += self.LINE

    def _wrapped(self, cursor: _Cursor, text: str) -> None:
        lines: list[str] = []
        for paragraph in text.splitlines() or [text]:
            lines.extend(simpleSplit(paragraph, REGULAR, 12, self.CONTENT_WIDTH) or [""])
        self._lines(cursor, lines)
