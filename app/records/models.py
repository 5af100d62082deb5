from dataclasses import dataclass
from enum import Enum


class ContactAction(str, Enum):
    CREATED = "created"
    FOUND = "found"


@dataclass(frozen=True)
class ContactRef:
    id: str
    action: ContactAction

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "action": self.action.value}


@dataclass(frozen=True)
class OrderRef:
    id: str
    title: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "title": self.title}


@dataclass(frozen=True)
class ContactDraft:
    """Fields written when a contact is created for a new plate."""

    name: str
    plate: str
    email: str
    phone: str
    address: str
    priority: str


@dataclass(frozen=True)
class OrderDraft:
    """Fields written for every submitted order."""

    title: str
    order_type: str
    link: str | None = None
    contact_id: str | None = None
