"""Shared HTTP plumbing for the Eden AI v2 REST API."""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from app.documents.models import UploadedDocument
from app.extraction.exceptions import UpstreamError


class EdenAISession:
    """One open connection pool; every call returns the decoded JSON object."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    async def post_document(
        self,
        path: str,
        document: UploadedDocument,
        form: dict[str, str],
    ) -> dict[str, Any]:
        """POST a multipart body with the form fields and the file."""
        files = {"file": (document.file_name, document.content, document.media_type)}
        try:
            response = await self._http.post(path, data=form, files=files)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Eden AI network error: {exc}") from exc
        return self._decode(response)

    async def get_json(self, path: str) -> dict[str, Any]:
        try:
            response = await self._http.get(path)
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Eden AI network error: {exc}") from exc
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        if not response.is_success:
            try:
                body: object = response.json()
            except ValueError:
                body = response.text
            raise UpstreamError(
                f"Eden AI API error ({response.status_code}): {json.dumps(body)}",
                status_code=response.status_code,
                body=body,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Eden AI returned invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise UpstreamError("Eden AI response must be a JSON object")
        return data


class EdenAIClient:
    """Builds authenticated sessions against the Eden AI API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @asynccontextmanager
    async def session(self) -> AsyncIterator[EdenAISession]:
        """Open a client for the duration of one extraction request."""
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout_seconds,
            transport=self._transport,
        ) as http:
            yield EdenAISession(http)
