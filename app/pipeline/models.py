from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class StageStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StageOutcome:
    """What happened in one pipeline stage."""

    status: StageStatus
    payload: dict[str, object] | None = None
    reason: str | None = None
    error: str | None = None

    @classmethod
    def succeeded(cls, payload: dict[str, object]) -> "StageOutcome":
        return cls(status=StageStatus.SUCCEEDED, payload=payload)

    @classmethod
    def skipped(cls, reason: str) -> "StageOutcome":
        return cls(status=StageStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, error: Exception) -> "StageOutcome":
        return cls(status=StageStatus.FAILED, error=str(error))

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"status": self.status.value}
        if self.payload is not None:
            data["payload"] = self.payload
        if self.reason is not None:
            data["reason"] = self.reason
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass
class PipelineResult:
    """Externally visible summary of one submission."""

    order_number: str = ""
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    stages: dict[str, StageOutcome] = field(default_factory=dict)
    failed_stage: str | None = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.failed_stage is None

    def degraded_stages(self) -> list[str]:
        """Stages that were skipped or failed without failing the submission."""
        return [
            name
            for name, outcome in self.stages.items()
            if outcome.status is not StageStatus.SUCCEEDED and name != self.failed_stage
        ]

    def to_dict(self) -> dict[str, object]:
        return {
            "timestamp": self.timestamp,
            "order_number": self.order_number,
            "success": self.success,
            "stages": {name: outcome.to_dict() for name, outcome in self.stages.items()},
        }


@dataclass(frozen=True)
class ServiceStatus:
    """Which external collaborators are configured."""

    notion: bool = False
    google_drive: bool = False
