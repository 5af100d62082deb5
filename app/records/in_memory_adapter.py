"""In-memory record client adapter.

No network calls. Used for local development (``RECORDS_PROVIDER=memory``)
and tests.
"""

import itertools
import threading

from app.records.client_base import BaseRecordClient
from app.records.models import ContactDraft, OrderDraft


class InMemoryRecordClient(BaseRecordClient):
    """Stores drafts per collection id."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.contacts: dict[str, dict[str, ContactDraft]] = {}
        self.orders: dict[str, dict[str, OrderDraft]] = {}

    def find_contact(self, collection_id: str, plate: str) -> str | None:
        with self._lock:
            for contact_id, draft in self.contacts.get(collection_id, {}).items():
                if draft.plate == plate:
                    return contact_id
        return None

    def create_contact(self, collection_id: str, draft: ContactDraft) -> str:
        with self._lock:
            contact_id = f"contact-{next(self._ids)}"
            self.contacts.setdefault(collection_id, {})[contact_id] = draft
        return contact_id

    def create_order(self, collection_id: str, draft: OrderDraft) -> str:
        with self._lock:
            order_id = f"order-{next(self._ids)}"
            self.orders.setdefault(collection_id, {})[order_id] = draft
        return order_id
