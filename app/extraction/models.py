from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.documents.models import UploadedDocument
from app.extraction.exceptions import ExtractionError, JobStateError


class StrategyKind(str, Enum):
    """Selects one of the interchangeable extraction strategies."""

    SYNC = "sync"
    ASYNC = "async"
    LOCAL = "local"


class JobStatus(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    FINISHED = "finished"
    FAILED = "failed"

    @classmethod
    def parse(cls, raw: object) -> "JobStatus":
        """Map a wire status to a JobStatus; unknown values count as running."""
        try:
            return cls(str(raw).lower())
        except ValueError:
            return cls.RUNNING

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.FINISHED, JobStatus.FAILED)


@dataclass(frozen=True)
class ExtractionRequest:
    """One upload event routed to one strategy."""

    document: UploadedDocument
    strategy: StrategyKind
    provider: str | None = None


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of an extraction: structured fields, plain text, or an error.

    Exactly one of ``fields``, ``text`` and ``error`` is set.
    """

    fields: dict[str, Any] | None = None
    text: str | None = None
    error: ExtractionError | None = None
    strategy: StrategyKind | None = None
    provider: str | None = None

    def __post_init__(self) -> None:
        populated = sum(v is not None for v in (self.fields, self.text, self.error))
        if populated != 1:
            raise ValueError(
                "ExtractionResult needs exactly one of fields, text or error, "
                f"got {populated}"
            )

    @classmethod
    def from_fields(
        cls,
        fields: dict[str, Any],
        *,
        strategy: StrategyKind | None = None,
        provider: str | None = None,
    ) -> "ExtractionResult":
        return cls(fields=fields, strategy=strategy, provider=provider)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        strategy: StrategyKind | None = None,
        provider: str | None = None,
    ) -> "ExtractionResult":
        return cls(text=text, strategy=strategy, provider=provider)

    @classmethod
    def from_error(
        cls,
        error: ExtractionError,
        *,
        strategy: StrategyKind | None = None,
        provider: str | None = None,
    ) -> "ExtractionResult":
        return cls(error=error, strategy=strategy, provider=provider)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class AsyncJobHandle:
    """Tracks a remote async job between launch and its terminal status."""

    job_id: str
    status: JobStatus = JobStatus.QUEUED
    payload: dict[str, Any] = field(default_factory=dict)
    polls: int = 0

    def advance(self, status: JobStatus, payload: dict[str, Any]) -> None:
        """Record one poll read.

        Raises:
            JobStateError: if the handle already reached a terminal status.
        """
        if self.status.is_terminal:
            raise JobStateError(
                f"Job {self.job_id} is already {self.status.value}, cannot move to {status.value}"
            )
        self.status = status
        self.payload = payload
        self.polls += 1
