"""Single entry point for turning an uploaded file into form-ready data."""

from collections.abc import Mapping

import httpx

from app.config.settings import Settings
from app.documents.models import UploadedDocument
from app.documents.validator import validate_media_type
from app.extraction.async_strategy import Sleep
from app.extraction.base import BaseExtractionStrategy
from app.extraction.exceptions import ExtractionError, ExtractionFailedError
from app.extraction.factory import ExtractionStrategyFactory
from app.extraction.models import ExtractionRequest, ExtractionResult, StrategyKind
from app.logging.logger import Log


class DocumentExtractionAdapter:
    """Dispatches extraction requests to pluggable strategies.

    Every failure leaves ``extract`` as an ExtractionError subclass; callers
    never see raw transport or decoder exceptions.
    """

    def __init__(
        self,
        strategies: Mapping[StrategyKind, BaseExtractionStrategy],
        default_strategy: StrategyKind = StrategyKind.SYNC,
    ) -> None:
        if default_strategy not in strategies:
            raise ValueError(f"No strategy registered for default '{default_strategy.value}'")
        self._strategies = dict(strategies)
        self._default_strategy = default_strategy

    async def extract(
        self,
        document: UploadedDocument,
        strategy: StrategyKind | str | None = None,
        provider: str | None = None,
    ) -> ExtractionResult:
        """Extract structured fields or plain text from an uploaded document.

        Raises:
            UnsupportedFormatError: before any I/O, for non-allow-listed types.
            ExtractionError: one of its subclasses for every other failure.
            ValueError: for an unknown or unregistered strategy name.
        """
        validate_media_type(document.media_type)
        kind = self._resolve(strategy)
        request = ExtractionRequest(document=document, strategy=kind, provider=provider)
        Log.debug(f"Extracting {document!r} via {kind.value}")

        try:
            return await self._strategies[kind].extract(request)
        except ExtractionError as exc:
            Log.error(f"{kind.value} extraction of {document.file_name} failed: {exc}")
            raise
        except Exception as exc:
            Log.error(f"{kind.value} extraction of {document.file_name} crashed: {exc}")
            raise ExtractionFailedError(
                f"{kind.value} extraction of {document.file_name} failed: {exc}"
            ) from exc

    async def try_extract(
        self,
        document: UploadedDocument,
        strategy: StrategyKind | str | None = None,
        provider: str | None = None,
    ) -> ExtractionResult:
        """Like extract, but returns the error variant instead of raising."""
        kind = self._resolve(strategy)
        try:
            return await self.extract(document, kind, provider)
        except ExtractionError as exc:
            return ExtractionResult.from_error(exc, strategy=kind, provider=provider)

    def _resolve(self, strategy: StrategyKind | str | None) -> StrategyKind:
        if strategy is None:
            return self._default_strategy
        kind = ExtractionStrategyFactory.parse_kind(strategy)
        if kind not in self._strategies:
            raise ValueError(f"Extraction strategy '{kind.value}' is not configured")
        return kind


def build_adapter(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: Sleep | None = None,
) -> DocumentExtractionAdapter:
    """Build an adapter with every strategy wired from settings."""
    strategies = ExtractionStrategyFactory.create_all(
        settings, transport=transport, sleep=sleep
    )
    default = ExtractionStrategyFactory.parse_kind(settings.extraction_strategy)
    return DocumentExtractionAdapter(strategies, default_strategy=default)
