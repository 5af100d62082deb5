from collections.abc import Callable
from typing import TypeVar

from app.logging.logger import Log
from app.storage.client_base import BaseStorageClient
from app.storage.exceptions import StorageClientError, UploadError
from app.storage.models import RootLocation, StorageReference

T = TypeVar("T")


class ObjectStoreUploader:
    """Files documents into one folder per customer key below a root folder.

    Sequence: resolve root -> find or create folder -> upload -> share.
    Folder reuse is lookup-before-create; two concurrent first uploads for
    the same key can still produce two folders.
    """

    def __init__(self, client: BaseStorageClient, root_folder_id: str) -> None:
        self._client = client
        self._root_folder_id = root_folder_id

    def upload(
        self,
        customer_key: str,
        file_name: str,
        content: bytes,
        mime_type: str = "application/pdf",
    ) -> StorageReference:
        """Upload ``content`` into the customer's folder and share it.

        Raises:
            UploadError: naming the step that failed.
        """
        root = self._resolve_root()
        folder_id, created = self.find_or_create_folder(customer_key, root)
        file_id = self._step(
            "upload_file", self._client.upload_file, file_name, folder_id, content, mime_type
        )
        self._step("share_file", self._client.grant_public_read, file_id)

        reference = StorageReference(
            folder_id=folder_id,
            folder_name=customer_key,
            file_id=file_id,
            file_name=file_name,
            link=self._client.share_link(file_id),
            folder_created=created,
        )
        Log.info(f"Uploaded {file_name} to folder '{customer_key}': {reference.link}")
        return reference

    def find_or_create_folder(
        self,
        customer_key: str,
        root: RootLocation | None = None,
    ) -> tuple[str, bool]:
        """Return ``(folder_id, was_created)`` for the customer's folder."""
        if not customer_key.strip():
            raise UploadError("find_folder", "customer key is empty")
        root = root or self._resolve_root()

        folder_id = self._step("find_folder", self._client.find_folder, customer_key, root)
        if folder_id is not None:
            Log.info(f"Using existing folder '{customer_key}' ({folder_id})")
            return folder_id, False

        folder_id = self._step("create_folder", self._client.create_folder, customer_key, root)
        Log.info(f"Created folder '{customer_key}' ({folder_id})")
        return folder_id, True

    def _resolve_root(self) -> RootLocation:
        if not self._root_folder_id:
            raise UploadError("resolve_root", "root folder is not configured")
        root = self._step("resolve_root", self._client.describe_root, self._root_folder_id)
        Log.debug(f"Root folder '{root.name}' (shared drive: {root.is_shared_drive})")
        return root

    @staticmethod
    def _step(step: str, call: Callable[..., T], *args: object) -> T:
        try:
            return call(*args)
        except StorageClientError as exc:
            raise UploadError(step, exc) from exc
