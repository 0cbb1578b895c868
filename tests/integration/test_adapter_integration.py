"""Adapter wired from settings, with the Eden AI API replaced by a mock transport."""

import asyncio
from typing import Any

import httpx
import pytest

from app.config.settings import Settings
from app.documents.models import DocumentFormat, UploadedDocument
from app.extraction.adapter import build_adapter
from app.extraction.exceptions import PollTimeoutError, UnsupportedFormatError
from app.extraction.models import StrategyKind
from app.forms.prefill import FormPrefiller


class EdenAIStub:
    """Answers resume_parser and ocr_async calls like the real API."""

    def __init__(self, ocr_statuses: list[str]) -> None:
        self.ocr_statuses = ocr_statuses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        assert request.headers["Authorization"] == "Bearer test-token"
        path = request.url.path
        if path == "/v2/ocr/resume_parser":
            return httpx.Response(200, json=self._resume())
        if path == "/v2/ocr/ocr_async" and request.method == "POST":
            return httpx.Response(200, json={"public_id": "abc-123"})
        if path == "/v2/ocr/ocr_async/abc-123":
            polls = sum(1 for r in self.requests if r.method == "GET")
            status = self.ocr_statuses[min(polls, len(self.ocr_statuses)) - 1]
            body: dict[str, Any] = {"public_id": "abc-123", "status": status}
            if status == "finished":
                body["results"] = {"amazon": {"raw_text": "Staff Engineer\nRemote"}}
            return httpx.Response(200, json=body)
        return httpx.Response(404, json={"detail": "Not found."})

    @staticmethod
    def _resume() -> dict[str, Any]:
        return {
            "openai/gpt-4o-mini": {
                "status": "success",
                "extracted_data": {
                    "personal_infos": {
                        "name": {"first_name": "Ana", "last_name": "Silva"},
                        "mails": ["ana@example.com"],
                        "self_summary": "Data engineer.",
                    }
                },
            }
        }


def _pdf(content: bytes, file_name: str) -> UploadedDocument:
    return UploadedDocument(content=content, media_type=DocumentFormat.PDF.value, file_name=file_name)


class TestAdapterEndToEnd:
    def test_candidate_and_job_description_forms(self, settings: Settings, fake_sleep: Any) -> None:
        stub = EdenAIStub(["queued", "running", "finished"])
        adapter = build_adapter(settings, transport=httpx.MockTransport(stub), sleep=fake_sleep)
        prefiller = FormPrefiller(adapter)

        candidate = asyncio.run(prefiller.prefill_candidate(_pdf(b"%PDF cv", "ana.pdf")))
        job = asyncio.run(prefiller.prefill_job_description(_pdf(b"%PDF jd", "jd.pdf")))

        assert (candidate.first_name, candidate.last_name) == ("Ana", "Silva")
        assert candidate.email == "ana@example.com"
        assert job.description == "Staff Engineer\nRemote"
        assert job.error is None
        assert fake_sleep.calls == [2.0, 2.0]

    def test_job_description_timeout_falls_back(self, settings: Settings, fake_sleep: Any) -> None:
        stub = EdenAIStub(["running"])
        tuned = settings.model_copy(update={"ocr_max_poll_attempts": 5})
        adapter = build_adapter(tuned, transport=httpx.MockTransport(stub), sleep=fake_sleep)

        with pytest.raises(PollTimeoutError):
            asyncio.run(adapter.extract(_pdf(b"%PDF jd", "jd.pdf"), StrategyKind.ASYNC))

        job = asyncio.run(FormPrefiller(adapter).prefill_job_description(_pdf(b"%PDF", "jd.pdf")))
        assert job.description == ""
        assert job.error is not None

    def test_local_strategy_needs_no_network(
        self, settings: Settings, sample_pdf_bytes: bytes
    ) -> None:
        stub = EdenAIStub(["finished"])
        adapter = build_adapter(settings, transport=httpx.MockTransport(stub))

        result = asyncio.run(adapter.extract(_pdf(sample_pdf_bytes, "cv.pdf"), StrategyKind.LOCAL))

        assert result.text is not None
        assert "Jane Doe" in result.text
        assert stub.requests == []

    def test_unsupported_upload_makes_no_request(self, settings: Settings) -> None:
        stub = EdenAIStub(["finished"])
        adapter = build_adapter(settings, transport=httpx.MockTransport(stub))
        document = UploadedDocument(content=b"GIF89a", media_type="image/gif", file_name="me.gif")

        for kind in StrategyKind:
            with pytest.raises(UnsupportedFormatError):
                asyncio.run(adapter.extract(document, kind))
        assert stub.requests == []
