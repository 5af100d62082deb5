from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RootLocation:
    """Configured root folder; ``drive_id`` is set when it lives in a shared drive."""

    id: str
    name: str = ""
    drive_id: str | None = None

    @property
    def is_shared_drive(self) -> bool:
        return bool(self.drive_id)


@dataclass(frozen=True)
class StorageReference:
    """Where an uploaded document ended up and how to open it."""

    folder_id: str
    folder_name: str
    file_id: str
    file_name: str
    link: str
    folder_created: bool = False

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
