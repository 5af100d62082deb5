"""In-memory storage client adapter.

No network calls. Used for local development (``STORAGE_PROVIDER=memory``)
and tests; it behaves like a single-root Drive without permissions.
"""

import itertools
import threading
from dataclasses import dataclass

from app.storage.client_base import BaseStorageClient
from app.storage.exceptions import StorageClientError
from app.storage.models import RootLocation


@dataclass
class StoredFile:
    name: str
    folder_id: str
    content: bytes
    mime_type: str
    public: bool = False


class InMemoryStorageClient(BaseStorageClient):
    """Keeps folders and files in dictionaries."""

    ROOT_ID = "memory-root"

    def __init__(self, root_id: str = ROOT_ID, drive_id: str | None = None) -> None:
        self._root = RootLocation(id=root_id, name="Gutachten", drive_id=drive_id)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.folders: dict[str, tuple[str, str]] = {}
        self.files: dict[str, StoredFile] = {}

    def describe_root(self, root_id: str) -> RootLocation:
        if root_id != self._root.id:
            raise StorageClientError(f"Root folder not found: {root_id}")
        return self._root

    def find_folder(self, name: str, root: RootLocation) -> str | None:
        with self._lock:
            for folder_id, (folder_name, parent_id) in self.folders.items():
                if folder_name == name and parent_id == root.id:
                    return folder_id
        return None

    def create_folder(self, name: str, root: RootLocation) -> str:
        with self._lock:
            folder_id = f"folder-{next(self._ids)}"
            self.folders[folder_id] = (name, root.id)
        return folder_id

    def upload_file(self, name: str, folder_id: str, content: bytes, mime_type: str) -> str:
        with self._lock:
            if folder_id not in self.folders:
                raise StorageClientError(f"Folder not found: {folder_id}")
            file_id = f"file-{next(self._ids)}"
            self.files[file_id] = StoredFile(name, folder_id, content, mime_type)
        return file_id

    def grant_public_read(self, file_id: str) -> None:
        with self._lock:
            stored = self.files.get(file_id)
            if stored is None:
                raise StorageClientError(f"File not found: {file_id}")
            stored.public = True

    def share_link(self, file_id: str) -> str:
        return f"memory://files/{file_id}"

    def files_in(self, folder_id: str) -> list[StoredFile]:
        return [stored for stored in self.files.values() if stored.folder_id == folder_id]
