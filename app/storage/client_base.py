from abc import ABC, abstractmethod

from app.storage.models import RootLocation


class BaseStorageClient(ABC):
    """Contract for provider-specific file store clients.

    Every method raises StorageClientError when the provider call fails.
    """

    @abstractmethod
    def describe_root(self, root_id: str) -> RootLocation:
        """Look up the configured root folder."""

    @abstractmethod
    def find_folder(self, name: str, root: RootLocation) -> str | None:
        """Return the id of the child folder named exactly ``name``, if any."""

    @abstractmethod
    def create_folder(self, name: str, root: RootLocation) -> str:
        """Create a child folder under ``root`` and return its id."""

    @abstractmethod
    def upload_file(self, name: str, folder_id: str, content: bytes, mime_type: str) -> str:
        """Store ``content`` as a new file in ``folder_id`` and return its id."""

    @abstractmethod
    def grant_public_read(self, file_id: str) -> None:
        """Allow anyone with the link to read the file."""

    @abstractmethod
    def share_link(self, file_id: str) -> str:
        """Return the link under which a shared file can be opened."""
