from typing import Any, ClassVar

import httpx
from notion_client import Client
from notion_client.errors import HTTPResponseError, RequestTimeoutError

from app.records.client_base import BaseRecordClient
from app.records.exceptions import RecordClientError
from app.records.models import ContactDraft, OrderDraft


class NotionClientAdapter(BaseRecordClient):
    """Record client adapter for Notion databases.

    Property names follow the office's workspace; change ``CONTACT_PROPERTIES``
    and ``ORDER_PROPERTIES`` for another schema.
    """

    NOTION_VERSION = "2022-06-28"

    CONTACT_PROPERTIES: ClassVar[dict[str, str]] = {
        "name": "Name",
        "plate": "Kennzeichen",
        "email": "Email",
        "phone": "Phone",
        "address": "Address",
        "area": "Bereich ",
        "priority": "Priority",
        "archive": "Archive",
    }
    ORDER_PROPERTIES: ClassVar[dict[str, str]] = {
        "title": "Name",
        "type": "Type",
        "link": "Link",
        "contact": "Kontakte",
        "archive": "Archive",
        "favourite": "Favourite",
    }

    def __init__(
        self,
        *,
        token: str,
        timeout_seconds: int,
        area_id: str = "",
        http_client: httpx.Client | None = None,
    ) -> None:
        # one request per call; a 429 fails the stage instead of backing off
        self._client = Client(
            client=http_client,
            auth=token,
            timeout_ms=timeout_seconds * 1000,
            notion_version=self.NOTION_VERSION,
            retry=False,
        )
        self._area_id = area_id

    def find_contact(self, collection_id: str, plate: str) -> str | None:
        response = self._call(
            "query contacts",
            self._client.request,
            path=f"databases/{collection_id}/query",
            method="POST",
            body={
                "filter": {
                    "property": self.CONTACT_PROPERTIES["plate"],
                    "rich_text": {"equals": plate},
                },
                "page_size": 1,
            },
        )
        results = response.get("results", [])
        return results[0]["id"] if results else None

    def create_contact(self, collection_id: str, draft: ContactDraft) -> str:
        names = self.CONTACT_PROPERTIES
        properties: dict[str, Any] = {
            names["name"]: _title(draft.name),
            names["plate"]: _rich_text(draft.plate),
            names["email"]: {"email": draft.email or None},
            names["phone"]: {"phone_number": draft.phone or None},
            names["address"]: _rich_text(draft.address),
            names["priority"]: {"select": {"name": draft.priority}},
            names["archive"]: {"checkbox": False},
        }
        if self._area_id:
            properties[names["area"]] = {"relation": [{"id": self._area_id}]}
        return self._create_page("create contact", collection_id, properties)

    def create_order(self, collection_id: str, draft: OrderDraft) -> str:
        names = self.ORDER_PROPERTIES
        properties: dict[str, Any] = {
            names["title"]: _title(draft.title),
            names["type"]: {"select": {"name": draft.order_type}},
            names["archive"]: {"checkbox": False},
            names["favourite"]: {"checkbox": False},
        }
        if draft.link:
            properties[names["link"]] = {"url": draft.link}
        if draft.contact_id:
            properties[names["contact"]] = {"relation": [{"id": draft.contact_id}]}
        return self._create_page("create order", collection_id, properties)

    def _create_page(self, action: str, collection_id: str, properties: dict[str, Any]) -> str:
        page = self._call(
            action,
            self._client.pages.create,
            parent={"database_id": collection_id},
            properties=properties,
        )
        return page["id"]

    @staticmethod
    def _call(action: str, method: Any, /, **kwargs: Any) -> dict[str, Any]:
        try:
            return method(**kwargs)
        except RequestTimeoutError as exc:
            raise RecordClientError(f"Notion timeout in {action}: {exc}") from exc
        except HTTPResponseError as exc:
            raise RecordClientError(f"Notion API error in {action}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise RecordClientError(f"Notion network error in {action}: {exc}") from exc


def _title(content: str) -> dict[str, Any]:
    return {"title": [{"text": {"content": content}}]}


def _rich_text(content: str) -> dict[str, Any]:
    return {"rich_text": [{"text": {"content": content}}]}
