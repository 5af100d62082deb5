import io
import json
from typing import Any

import google.auth.exceptions
import google_auth_httplib2
import httplib2
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import HttpRequest, MediaIoBaseUpload

from app.storage.client_base import BaseStorageClient
from app.storage.exceptions import StorageClientError
from app.storage.models import RootLocation


class GoogleDriveClientAdapter(BaseStorageClient):
    """Storage client adapter built on the Google Drive v3 API.

    Works for roots in "My Drive" as well as in shared drives; shared-drive
    roots narrow folder searches to that drive.
    """

    SCOPES = ["https://www.googleapis.com/auth/drive"]
    FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
    LINK_TEMPLATE = "https://drive.google.com/file/d/{file_id}/view"

    def __init__(self, *, credentials: Any, timeout_seconds: int) -> None:
        http = google_auth_httplib2.AuthorizedHttp(
            credentials,
            http=httplib2.Http(timeout=timeout_seconds),
        )
        self._service = build("drive", "v3", http=http, cache_discovery=False)

    @classmethod
    def from_service_account(
        cls,
        *,
        credentials_file: str = "",
        credentials_json: str = "",
        timeout_seconds: int = 30,
    ) -> "GoogleDriveClientAdapter":
        """Build an adapter from a key file path or the key file's JSON content."""
        if credentials_json:
            credentials = service_account.Credentials.from_service_account_info(
                json.loads(credentials_json), scopes=cls.SCOPES
            )
        else:
            credentials = service_account.Credentials.from_service_account_file(
                credentials_file, scopes=cls.SCOPES
            )
        return cls(credentials=credentials, timeout_seconds=timeout_seconds)

    def describe_root(self, root_id: str) -> RootLocation:
        data = self._execute(
            self._service.files().get(
                fileId=root_id,
                fields="id, name, driveId",
                supportsAllDrives=True,
            ),
            "describe_root",
        )
        return RootLocation(id=data["id"], name=data.get("name", ""), drive_id=data.get("driveId"))

    def find_folder(self, name: str, root: RootLocation) -> str | None:
        params: dict[str, Any] = {
            "q": (
                f"name = '{_quote(name)}' and mimeType = '{self.FOLDER_MIME_TYPE}' "
                f"and '{_quote(root.id)}' in parents and trashed = false"
            ),
            "fields": "files(id, name)",
            "supportsAllDrives": True,
            "includeItemsFromAllDrives": True,
        }
        if root.is_shared_drive:
            params["corpora"] = "drive"
            params["driveId"] = root.drive_id
        data = self._execute(self._service.files().list(**params), "find_folder")
        files = data.get("files", [])
        return files[0]["id"] if files else None

    def create_folder(self, name: str, root: RootLocation) -> str:
        data = self._execute(
            self._service.files().create(
                body={"name": name, "parents": [root.id], "mimeType": self.FOLDER_MIME_TYPE},
                fields="id",
                supportsAllDrives=True,
            ),
            "create_folder",
        )
        return data["id"]

    def upload_file(self, name: str, folder_id: str, content: bytes, mime_type: str) -> str:
        media = MediaIoBaseUpload(io.BytesIO(content), mimetype=mime_type, resumable=False)
        data = self._execute(
            self._service.files().create(
                body={"name": name, "parents": [folder_id], "mimeType": mime_type},
                media_body=media,
                fields="id",
                supportsAllDrives=True,
            ),
            "upload_file",
        )
        return data["id"]

    def grant_public_read(self, file_id: str) -> None:
        self._execute(
            self._service.permissions().create(
                fileId=file_id,
                body={"role": "reader", "type": "anyone"},
                supportsAllDrives=True,
            ),
            "grant_public_read",
        )

    def share_link(self, file_id: str) -> str:
        return self.LINK_TEMPLATE.format(file_id=file_id)

    @staticmethod
    def _execute(request: HttpRequest, action: str) -> dict[str, Any]:
        try:
            return request.execute()
        except HttpError as exc:
            raise StorageClientError(f"Google Drive API error in {action}: {exc}") from exc
        except google.auth.exceptions.GoogleAuthError as exc:
            raise StorageClientError(f"Google Drive auth error in {action}: {exc}") from exc
        # socket timeouts are OSError subclasses
        except (OSError, httplib2.HttpLib2Error) as exc:
            raise StorageClientError(f"Google Drive network error in {action}: {exc}") from exc


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")
