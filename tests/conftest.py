import base64
import io

import pytest
from PIL import Image

from app.records.in_memory_adapter import InMemoryRecordClient
from app.records.keeper import RecordKeeper
from app.storage.in_memory_adapter import InMemoryStorageClient
from app.storage.uploader import ObjectStoreUploader
from app.submission.models import SubmissionRecord


@pytest.fixture()
def raw_submission() -> dict[str, object]:
    """Dotted-key payload as posted by the form front end."""
    return {
        "auftraggeber.name": "Max Mustermann",
        "auftraggeber.kennzeichen": "BI-XX 123",
        "auftraggeber.adresse": "Teststr 1",
        "auftraggeber.kontakt": "max@test.de / 0151123456",
        "unfall_tag": "2025-01-01",
        "unfall_ort": "Bielefeld",
    }


@pytest.fixture()
def record() -> SubmissionRecord:
    """A complete canonical record that passes validation."""
    return SubmissionRecord(
        {
            "gutachten_nr": "DS-2025-123456",
            "auftraggeber_name": "Max Mustermann",
            "auftraggeber_adresse": "Teststr 1, 33609 Bielefeld",
            "auftraggeber_kontakt": "max@test.de / 0151123456",
            "auftraggeber_kennzeichen": "BI-XX 123",
            "unfall_tag": "2025-01-01",
            "unfall_ort": "Bielefeld",
        }
    )


@pytest.fixture()
def signature_data_uri() -> str:
    """A small PNG encoded the way the signature canvas posts it."""
    buf = io.BytesIO()
    Image.new("RGBA", (40, 12), (0, 0, 0, 255)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture()
def storage_client() -> InMemoryStorageClient:
    return InMemoryStorageClient()


@pytest.fixture()
def uploader(storage_client: InMemoryStorageClient) -> ObjectStoreUploader:
    return ObjectStoreUploader(storage_client, InMemoryStorageClient.ROOT_ID)


@pytest.fixture()
def record_client() -> InMemoryRecordClient:
    return InMemoryRecordClient()


@pytest.fixture()
def keeper(record_client: InMemoryRecordClient) -> RecordKeeper:
    return RecordKeeper(
        record_client,
        contacts_collection_id="contacts",
        orders_collection_id="orders",
    )
