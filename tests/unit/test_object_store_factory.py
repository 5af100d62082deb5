from unittest.mock import patch

import pytest
from google.auth.exceptions import DefaultCredentialsError

from app.config.settings import Settings
from app.storage.factory import ObjectStoreFactory
from app.storage.uploader import ObjectStoreUploader


def _settings(**overrides: object) -> Settings:
    base: dict[str, object] = {
        "storage_provider": "google_drive",
        "google_credentials": "",
        "google_credentials_json": "",
        "google_drive_root_folder": "root-1",
    }
    base.update(overrides)
    return Settings(**base)


def test_none_provider_disables_storage() -> None:
    assert ObjectStoreFactory.create(_settings(storage_provider="none")) is None


def test_memory_provider() -> None:
    uploader = ObjectStoreFactory.create(_settings(storage_provider="memory"))
    assert isinstance(uploader, ObjectStoreUploader)


def test_missing_credentials_disables_storage() -> None:
    assert ObjectStoreFactory.create(_settings()) is None


def test_google_drive_with_credentials() -> None:
    with patch("app.storage.factory.GoogleDriveClientAdapter") as adapter_cls:
        uploader = ObjectStoreFactory.create(_settings(google_credentials="/keys/sa.json"))

    assert isinstance(uploader, ObjectStoreUploader)
    adapter_cls.from_service_account.assert_called_once_with(
        credentials_file="/keys/sa.json",
        credentials_json="",
        timeout_seconds=30,
    )


def test_unreadable_credentials_disable_storage() -> None:
    with patch("app.storage.factory.GoogleDriveClientAdapter") as adapter_cls:
        adapter_cls.from_service_account.side_effect = FileNotFoundError("/keys/sa.json")
        assert ObjectStoreFactory.create(_settings(google_credentials="/keys/sa.json")) is None


def test_invalid_credentials_disable_storage() -> None:
    with patch("app.storage.factory.GoogleDriveClientAdapter") as adapter_cls:
        adapter_cls.from_service_account.side_effect = DefaultCredentialsError("bad key")
        assert ObjectStoreFactory.create(_settings(google_credentials_json="{}")) is None


def test_unknown_provider_raises() -> None:
    with pytest.raises(ValueError, match="Unknown storage provider"):
        ObjectStoreFactory.create(_settings(storage_provider="dropbox"))
