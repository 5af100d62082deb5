import google.auth.exceptions

from app.config.settings import Settings
from app.logging.logger import Log
from app.storage.google_drive_adapter import GoogleDriveClientAdapter
from app.storage.in_memory_adapter import InMemoryStorageClient
from app.storage.uploader import ObjectStoreUploader


class ObjectStoreFactory:
    """Creates the configured uploader, or None when storage is disabled."""

    PROVIDERS = ("google_drive", "memory", "none")

    @classmethod
    def create(cls, settings: Settings) -> ObjectStoreUploader | None:
        provider = settings.storage_provider.lower()
        if provider == "none":
            return None
        if provider == "memory":
            return ObjectStoreUploader(InMemoryStorageClient(), InMemoryStorageClient.ROOT_ID)
        if provider == "google_drive":
            return cls._create_google_drive(settings)
        raise ValueError(
            f"Unknown storage provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _create_google_drive(cls, settings: Settings) -> ObjectStoreUploader | None:
        if not (settings.google_credentials or settings.google_credentials_json):
            Log.warning("GOOGLE_CREDENTIALS not provided - Google Drive integration disabled")
            return None
        try:
            client = GoogleDriveClientAdapter.from_service_account(
                credentials_file=settings.google_credentials,
                credentials_json=settings.google_credentials_json,
                timeout_seconds=settings.google_drive_timeout_seconds,
            )
        except (OSError, ValueError, google.auth.exceptions.GoogleAuthError) as exc:
            Log.error(f"Failed to initialize Google Drive client: {exc}")
            return None
        Log.info("Google Drive client initialized with service account")
        return ObjectStoreUploader(client, settings.google_drive_root_folder)
