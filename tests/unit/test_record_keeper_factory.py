from unittest.mock import patch

import pytest

from app.config.settings import Settings
from app.records.factory import RecordKeeperFactory
from app.records.keeper import RecordKeeper


def _settings(**overrides: object) -> Settings:
    base: dict[str, object] = {
        "records_provider": "notion",
        "notion_token": "",
        "notion_contacts_database_id": "db-c",
        "notion_orders_database_id": "db-o",
    }
    base.update(overrides)
    return Settings(**base)


def test_none_provider_disables_records() -> None:
    assert RecordKeeperFactory.create(_settings(records_provider="none")) is None


def test_memory_provider() -> None:
    keeper = RecordKeeperFactory.create(_settings(records_provider="memory"))

    assert isinstance(keeper, RecordKeeper)
    assert keeper.contacts_enabled
    assert keeper.orders_enabled


def test_missing_token_disables_records() -> None:
    assert RecordKeeperFactory.create(_settings()) is None


def test_notion_with_token() -> None:
    with patch("app.records.factory.NotionClientAdapter") as adapter_cls:
        keeper = RecordKeeperFactory.create(
            _settings(notion_token="secret", notion_contact_area_id="area-1")
        )

    assert isinstance(keeper, RecordKeeper)
    adapter_cls.assert_called_once_with(token="secret", timeout_seconds=30, area_id="area-1")


def test_notion_without_contacts_database() -> None:
    with patch("app.records.factory.NotionClientAdapter"):
        keeper = RecordKeeperFactory.create(
            _settings(notion_token="secret", notion_contacts_database_id="")
        )

    assert keeper is not None
    assert not keeper.contacts_enabled
    assert keeper.orders_enabled


def test_unknown_provider_raises() -> None:
    with pytest.raises(ValueError, match="Unknown records provider"):
        RecordKeeperFactory.create(_settings(records_provider="airtable"))
