"""Merges extraction results into form state.

Extraction failure is never fatal here: the form comes back empty with an
error message so the recruiter can fall back to manual entry.
"""

from datetime import datetime
from typing import Any

from app.documents.models import UploadedDocument
from app.extraction.adapter import DocumentExtractionAdapter
from app.extraction.models import ExtractionResult, StrategyKind
from app.forms.models import CandidateForm, JobDescriptionForm
from app.logging.logger import Log


def default_job_description_name(now: datetime | None = None) -> str:
    moment = now if now is not None else datetime.now()
    return f"JobDescription_{moment.strftime('%d%m%y_%H%M')}"


def _lookup(data: Any, *path: str | int) -> Any:
    for key in path:
        if isinstance(key, int):
            if not isinstance(data, list) or len(data) <= key:
                return None
            data = data[key]
        else:
            if not isinstance(data, dict):
                return None
            data = data.get(key)
    return data


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def candidate_form_from_fields(fields: dict[str, Any]) -> CandidateForm:
    """Map resume-parser fields onto the candidate form."""
    infos = _lookup(fields, "personal_infos")
    return CandidateForm(
        first_name=_text(_lookup(infos, "name", "first_name")),
        last_name=_text(_lookup(infos, "name", "last_name")),
        email=_text(_lookup(infos, "mails", 0)),
        profile=_text(_lookup(infos, "self_summary")),
        parsed_cv=fields,
    )


class FormPrefiller:
    """Runs CV and job-description uploads through the extraction adapter."""

    def __init__(
        self,
        adapter: DocumentExtractionAdapter,
        *,
        cv_strategy: StrategyKind = StrategyKind.SYNC,
        jd_strategy: StrategyKind = StrategyKind.ASYNC,
    ) -> None:
        self._adapter = adapter
        self._cv_strategy = cv_strategy
        self._jd_strategy = jd_strategy

    async def prefill_candidate(self, document: UploadedDocument) -> CandidateForm:
        result = await self._adapter.try_extract(document, self._cv_strategy)
        if not result.ok:
            return self._failed_candidate(document, result)
        if result.fields is None:
            # Text-only strategies cannot fill individual fields.
            Log.warning(f"{document.file_name}: no structured fields, profile filled from text")
            return CandidateForm(profile=result.text or "")
        form = candidate_form_from_fields(result.fields)
        Log.info(f"Prefilled candidate form from {document.file_name}")
        return form

    async def prefill_job_description(
        self,
        document: UploadedDocument,
        now: datetime | None = None,
    ) -> JobDescriptionForm:
        name = default_job_description_name(now)
        result = await self._adapter.try_extract(document, self._jd_strategy)
        if not result.ok:
            Log.warning(
                f"Failed to parse job description {document.file_name}: {result.error}"
            )
            return JobDescriptionForm(name=name, error=str(result.error))
        if result.text is not None:
            description = result.text
        else:
            description = _text(_lookup(result.fields, "description"))
        Log.info(f"Prefilled job description form from {document.file_name}")
        return JobDescriptionForm(name=name, description=description)

    @staticmethod
    def _failed_candidate(document: UploadedDocument, result: ExtractionResult) -> CandidateForm:
        Log.warning(
            f"Failed to parse CV {document.file_name}, falling back to manual entry: "
            f"{result.error}"
        )
        return CandidateForm(error=str(result.error))
