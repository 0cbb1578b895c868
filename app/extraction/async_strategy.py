"""Launch-then-poll extraction against the Eden AI async OCR endpoint.

Flow: launch (POST) -> poll by public_id (GET) every interval until the job
is finished or failed, or until the attempt budget runs out.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar

from app.documents.models import UploadedDocument
from app.extraction.base import BaseExtractionStrategy
from app.extraction.edenai_client import EdenAIClient, EdenAISession
from app.extraction.exceptions import (
    JobFailedError,
    LaunchError,
    MalformedResultError,
    PollTimeoutError,
    UpstreamError,
)
from app.extraction.models import (
    AsyncJobHandle,
    ExtractionRequest,
    ExtractionResult,
    JobStatus,
    StrategyKind,
)
from app.logging.logger import Log

Sleep = Callable[[float], Awaitable[None]]


class OcrAsyncStrategy(BaseExtractionStrategy):
    """Submits an OCR job and polls it to a terminal status."""

    kind: ClassVar[StrategyKind] = StrategyKind.ASYNC
    LAUNCH_PATH: ClassVar[str] = "/ocr/ocr_async"

    def __init__(
        self,
        client: EdenAIClient,
        provider: str,
        *,
        language: str = "en",
        poll_interval_seconds: float = 2.0,
        max_poll_attempts: int = 30,
        sleep: Sleep | None = None,
    ) -> None:
        if max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be at least 1")
        self._client = client
        self._provider = provider
        self._language = language
        self._poll_interval_seconds = poll_interval_seconds
        self._max_poll_attempts = max_poll_attempts
        self._sleep: Sleep = sleep if sleep is not None else asyncio.sleep

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        provider = request.provider or self._provider
        async with self._client.session() as session:
            handle = await self._launch(session, request.document, provider)
            try:
                raw_text = await self._poll(session, handle, provider)
            except asyncio.CancelledError:
                Log.info(f"Polling for job {handle.job_id} cancelled after {handle.polls} polls")
                raise
        return ExtractionResult.from_text(raw_text, strategy=self.kind, provider=provider)

    async def _launch(
        self,
        session: EdenAISession,
        document: UploadedDocument,
        provider: str,
    ) -> AsyncJobHandle:
        form = {"providers": provider, "language": self._language}
        try:
            data = await session.post_document(self.LAUNCH_PATH, document, form)
        except UpstreamError as exc:
            raise LaunchError(f"Could not launch OCR job: {exc}") from exc

        job_id = data.get("public_id")
        if not job_id:
            raise LaunchError("No job ID returned from Eden AI")
        Log.info(f"Launched OCR job {job_id} for {document.file_name} ({provider})")
        return AsyncJobHandle(job_id=str(job_id))

    async def _poll(
        self,
        session: EdenAISession,
        handle: AsyncJobHandle,
        provider: str,
    ) -> str:
        path = f"{self.LAUNCH_PATH}/{handle.job_id}"
        for attempt in range(1, self._max_poll_attempts + 1):
            data = await session.get_json(path)
            handle.advance(JobStatus.parse(data.get("status")), data)
            Log.debug(
                f"Job {handle.job_id} poll {attempt}/{self._max_poll_attempts}: "
                f"{handle.status.value}"
            )

            if handle.status is JobStatus.FINISHED:
                return self._raw_text(handle, provider)
            if handle.status is JobStatus.FAILED:
                Log.error(f"Job {handle.job_id} failed on poll {attempt}")
                raise JobFailedError(f"Job {handle.job_id} processing failed")

            if attempt < self._max_poll_attempts:
                await self._sleep(self._poll_interval_seconds)

        raise PollTimeoutError(
            f"Job {handle.job_id} not finished after {self._max_poll_attempts} polls"
        )

    @staticmethod
    def _raw_text(handle: AsyncJobHandle, provider: str) -> str:
        results: Any = handle.payload.get("results")
        entry = results.get(provider) if isinstance(results, dict) else None
        raw_text = entry.get("raw_text") if isinstance(entry, dict) else None
        if not isinstance(raw_text, str) or not raw_text:
            raise MalformedResultError(
                f"No text content found in the response for job {handle.job_id}"
            )
        Log.info(f"Job {handle.job_id} finished: {len(raw_text)} chars")
        return raw_text
