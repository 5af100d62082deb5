from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType

# Raw client payload: flat underscore keys, dotted keys or nested objects.
RawSubmission = Mapping[str, object]

FieldValue = str | bool | date | None

ORDER_NUMBER = "gutachten_nr"
CLIENT_NAME = "auftraggeber_name"
CLIENT_ADDRESS = "auftraggeber_adresse"
CLIENT_CONTACT = "auftraggeber_kontakt"
CLIENT_PLATE = "auftraggeber_kennzeichen"
INCIDENT_DATE = "unfall_tag"
INCIDENT_PLACE = "unfall_ort"

INCIDENT_TIME = "uhrzeit"
INCIDENT_DESCRIPTION = "schadenbeschreibung"
ODOMETER = "kilometerstand"
TIRES = "reifen"
VIN = "fahrzeugstellnummer"
SIGNATURE = "unterschrift"
NOTES = "notizen"
CESSION = "abtretung"
SIGNING_PLACE = "ort"

OPPONENT_NAME = "gegner_name"
OPPONENT_ADDRESS = "gegner_adresse"
OPPONENT_PLATE = "gegner_kennzeichen"
INSURER_NAME = "versicherung_name"
INSURER_CLAIM_NUMBER = "versicherung_schadennummer"

REQUIRED_FIELDS: tuple[str, ...] = (
    ORDER_NUMBER,
    CLIENT_NAME,
    CLIENT_ADDRESS,
    CLIENT_CONTACT,
    CLIENT_PLATE,
    INCIDENT_DATE,
    INCIDENT_PLACE,
)

_TRUE_FLAGS = frozenset({"1", "true", "on", "yes", "ja"})


@dataclass(frozen=True)
class ContactDetails:
    """Email and phone split out of the combined "email / phone" field."""

    email: str = ""
    phone: str = ""

    @classmethod
    def parse(cls, raw: str) -> "ContactDetails":
        email, _, phone = raw.partition("/")
        return cls(email=email.strip(), phone=phone.strip())


@dataclass(frozen=True)
class SubmissionRecord:
    """Canonical flat submission, read-only once built."""

    fields: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str) -> object:
        return self.fields.get(name)

    def text(self, name: str) -> str:
        value = self.fields.get(name)
        if value is None:
            return ""
        if isinstance(value, date):
            return value.strftime("%d.%m.%Y")
        return str(value).strip()

    def flag(self, name: str) -> bool:
        value = self.fields.get(name)
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().lower() in _TRUE_FLAGS

    @property
    def order_number(self) -> str:
        return self.text(ORDER_NUMBER)

    @property
    def client_name(self) -> str:
        return self.text(CLIENT_NAME)

    @property
    def plate(self) -> str:
        return self.text(CLIENT_PLATE)

    @property
    def contact(self) -> ContactDetails:
        return ContactDetails.parse(self.text(CLIENT_CONTACT))
