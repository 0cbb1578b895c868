import httpx

from app.config.settings import Settings
from app.decoders.factory import DecoderFactory
from app.extraction.async_strategy import OcrAsyncStrategy, Sleep
from app.extraction.base import BaseExtractionStrategy
from app.extraction.edenai_client import EdenAIClient
from app.extraction.local_strategy import LocalTextStrategy
from app.extraction.models import StrategyKind
from app.extraction.sync_strategy import ResumeParserStrategy


class ExtractionStrategyFactory:
    """Creates the configured extraction strategies."""

    @classmethod
    def parse_kind(cls, value: str | StrategyKind) -> StrategyKind:
        if isinstance(value, StrategyKind):
            return value
        try:
            return StrategyKind(value.lower())
        except ValueError as exc:
            raise ValueError(
                f"Unknown extraction strategy '{value}'. "
                f"Choose from: {[k.value for k in StrategyKind]}"
            ) from exc

    @classmethod
    def create_client(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> EdenAIClient:
        return EdenAIClient(
            api_key=settings.edenai_api_key,
            base_url=settings.edenai_base_url,
            timeout_seconds=settings.edenai_timeout_seconds,
            transport=transport,
        )

    @classmethod
    def create(
        cls,
        kind: str | StrategyKind,
        settings: Settings,
        *,
        client: EdenAIClient | None = None,
        sleep: Sleep | None = None,
    ) -> BaseExtractionStrategy:
        kind = cls.parse_kind(kind)
        if kind is StrategyKind.LOCAL:
            return LocalTextStrategy(DecoderFactory.create(settings))

        client = client if client is not None else cls.create_client(settings)
        if kind is StrategyKind.SYNC:
            return ResumeParserStrategy(client, settings.resume_parser_provider)
        return OcrAsyncStrategy(
            client,
            settings.ocr_provider,
            language=settings.ocr_language,
            poll_interval_seconds=settings.ocr_poll_interval_seconds,
            max_poll_attempts=settings.ocr_max_poll_attempts,
            sleep=sleep,
        )

    @classmethod
    def create_all(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep | None = None,
    ) -> dict[StrategyKind, BaseExtractionStrategy]:
        """Create one strategy per kind, sharing a single Eden AI client."""
        client = cls.create_client(settings, transport)
        return {
            kind: cls.create(kind, settings, client=client, sleep=sleep)
            for kind in StrategyKind
        }
