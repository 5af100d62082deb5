from collections.abc import Callable
from typing import TypeVar

from app.logging.logger import Log
from app.records.client_base import BaseRecordClient
from app.records.exceptions import RecordClientError, RecordKeeperError
from app.records.models import ContactAction, ContactDraft, ContactRef, OrderDraft, OrderRef
from app.storage.models import StorageReference
from app.submission import models as form
from app.submission.models import SubmissionRecord

T = TypeVar("T")


class RecordKeeper:
    """Keeps one contact per plate and one order entry per submission.

    Contacts are matched by exact plate before a new one is created. The
    lookup and the create are separate calls, so concurrent submissions for a
    new plate may both create a contact.
    """

    ORDER_TYPE = "Auftrag Gutachten"

    def __init__(
        self,
        client: BaseRecordClient,
        *,
        contacts_collection_id: str = "",
        orders_collection_id: str = "",
        default_priority: str = "Medium",
    ) -> None:
        self._client = client
        self._contacts_collection_id = contacts_collection_id
        self._orders_collection_id = orders_collection_id
        self._default_priority = default_priority

    @property
    def contacts_enabled(self) -> bool:
        return bool(self._contacts_collection_id)

    @property
    def orders_enabled(self) -> bool:
        return bool(self._orders_collection_id)

    def upsert_contact(self, record: SubmissionRecord) -> ContactRef:
        """Return the contact for the record's plate, creating it if needed.

        Raises:
            RecordKeeperError: with stage ``lookup_contact`` or ``create_contact``.
        """
        if not self.contacts_enabled:
            raise RecordKeeperError("lookup_contact", "contacts collection is not configured")

        existing = self._call(
            "lookup_contact", self._client.find_contact, self._contacts_collection_id, record.plate
        )
        if existing is not None:
            Log.info(f"Contact for plate {record.plate} already exists ({existing})")
            return ContactRef(id=existing, action=ContactAction.FOUND)

        contact = record.contact
        draft = ContactDraft(
            name=record.client_name,
            plate=record.plate,
            email=contact.email,
            phone=contact.phone,
            address=record.text(form.CLIENT_ADDRESS),
            priority=self._default_priority,
        )
        contact_id = self._call(
            "create_contact", self._client.create_contact, self._contacts_collection_id, draft
        )
        Log.info(f"Created contact for plate {record.plate} ({contact_id})")
        return ContactRef(id=contact_id, action=ContactAction.CREATED)

    def create_order(
        self,
        record: SubmissionRecord,
        contact: ContactRef | None = None,
        storage: StorageReference | None = None,
    ) -> OrderRef:
        """Create the order entry; storage link and contact relation are optional.

        Raises:
            RecordKeeperError: with stage ``create_order``.
        """
        if not self.orders_enabled:
            raise RecordKeeperError("create_order", "orders collection is not configured")

        draft = OrderDraft(
            title=f"Gutachten {record.plate} - {record.client_name} ({record.order_number})",
            order_type=self.ORDER_TYPE,
            link=storage.link if storage else None,
            contact_id=contact.id if contact else None,
        )
        order_id = self._call(
            "create_order", self._client.create_order, self._orders_collection_id, draft
        )
        Log.info(f"Created order entry '{draft.title}' ({order_id})")
        return OrderRef(id=order_id, title=draft.title)

    @staticmethod
    def _call(stage: str, call: Callable[..., T], *args: object) -> T:
        try:
            return call(*args)
        except RecordClientError as exc:
            raise RecordKeeperError(stage, exc) from exc
