from abc import ABC, abstractmethod

from app.records.models import ContactDraft, OrderDraft


class BaseRecordClient(ABC):
    """Contract for provider-specific record-keeping clients.

    Every method raises RecordClientError when the provider call fails.
    """

    @abstractmethod
    def find_contact(self, collection_id: str, plate: str) -> str | None:
        """Return the id of the contact whose plate equals ``plate``, if any."""

    @abstractmethod
    def create_contact(self, collection_id: str, draft: ContactDraft) -> str:
        """Create a contact entry and return its id."""

    @abstractmethod
    def create_order(self, collection_id: str, draft: OrderDraft) -> str:
        """Create an order entry and return its id."""
