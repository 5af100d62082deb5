from app.config.settings import Settings
from app.logging.logger import Log
from app.records.in_memory_adapter import InMemoryRecordClient
from app.records.keeper import RecordKeeper
from app.records.notion_client_adapter import NotionClientAdapter


class RecordKeeperFactory:
    """Creates the configured record keeper, or None when record keeping is disabled."""

    PROVIDERS = ("notion", "memory", "none")

    @classmethod
    def create(cls, settings: Settings) -> RecordKeeper | None:
        provider = settings.records_provider.lower()
        if provider == "none":
            return None
        if provider == "memory":
            return RecordKeeper(
                InMemoryRecordClient(),
                contacts_collection_id="contacts",
                orders_collection_id="orders",
            )
        if provider == "notion":
            return cls._create_notion(settings)
        raise ValueError(
            f"Unknown records provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _create_notion(cls, settings: Settings) -> RecordKeeper | None:
        if not settings.notion_token:
            Log.warning("NOTION_TOKEN not provided - Notion integration disabled")
            return None
        client = NotionClientAdapter(
            token=settings.notion_token,
            timeout_seconds=settings.notion_timeout_seconds,
            area_id=settings.notion_contact_area_id,
        )
        Log.info("Notion client initialized")
        return RecordKeeper(
            client,
            contacts_collection_id=settings.notion_contacts_database_id,
            orders_collection_id=settings.notion_orders_database_id,
        )
