import io
from dataclasses import dataclass, field
from types import TracebackType


@dataclass
class RenderedDocument:
    """PDF bytes held in memory for the lifetime of one submission."""

    file_name: str
    buffer: io.BytesIO = field(default_factory=io.BytesIO)
    mime_type: str = "application/pdf"

    @classmethod
    def for_order(cls, order_number: str, content: bytes) -> "RenderedDocument":
        return cls(file_name=f"Gutachten_{order_number}.pdf", buffer=io.BytesIO(content))

    @property
    def content(self) -> bytes:
        return self.buffer.getvalue()

    @property
    def size(self) -> int:
        return self.buffer.getbuffer().nbytes

    @property
    def released(self) -> bool:
        return self.buffer.closed

    def release(self) -> None:
        self.buffer.close()

    def __enter__(self) -> "RenderedDocument":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
