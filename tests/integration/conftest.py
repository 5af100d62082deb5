import pytest

from app.config.settings import Settings
from app.records.factory import RecordKeeperFactory
from app.records.keeper import RecordKeeper
from app.storage.factory import ObjectStoreFactory
from app.storage.uploader import ObjectStoreUploader


@pytest.fixture(scope="session")
def live_settings() -> Settings:
    return Settings()


@pytest.fixture(scope="session")
def drive_uploader(live_settings: Settings) -> ObjectStoreUploader:
    if not (live_settings.google_credentials or live_settings.google_credentials_json):
        pytest.skip("Google Drive credentials not set. Set GOOGLE_CREDENTIALS or GOOGLE_CREDENTIALS_JSON")
    if not live_settings.google_drive_root_folder:
        pytest.skip("GOOGLE_DRIVE_ROOT_FOLDER not set")
    uploader = ObjectStoreFactory.create(
        live_settings.model_copy(update={"storage_provider": "google_drive"})
    )
    if uploader is None:
        pytest.skip("Google Drive client could not be initialized")
    return uploader


@pytest.fixture(scope="session")
def notion_keeper(live_settings: Settings) -> RecordKeeper:
    if not live_settings.notion_token:
        pytest.skip("NOTION_TOKEN not set")
    if not (live_settings.notion_contacts_database_id and live_settings.notion_orders_database_id):
        pytest.skip("NOTION_CONTACTS_DATABASE_ID / NOTION_ORDERS_DATABASE_ID not set")
    keeper = RecordKeeperFactory.create(
        live_settings.model_copy(update={"records_provider": "notion"})
    )
    if keeper is None:
        pytest.skip("Notion client could not be initialized")
    return keeper
