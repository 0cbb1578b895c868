from typing import ClassVar

from app.extraction.base import BaseExtractionStrategy
from app.extraction.edenai_client import EdenAIClient
from app.extraction.exceptions import ExtractionFailedError
from app.extraction.models import ExtractionRequest, ExtractionResult, StrategyKind
from app.logging.logger import Log


class ResumeParserStrategy(BaseExtractionStrategy):
    """Single round trip to the Eden AI resume parser."""

    kind: ClassVar[StrategyKind] = StrategyKind.SYNC
    PATH: ClassVar[str] = "/ocr/resume_parser"

    def __init__(self, client: EdenAIClient, provider: str) -> None:
        self._client = client
        self._provider = provider

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        provider = request.provider or self._provider
        document = request.document
        Log.info(f"Parsing {document.file_name} with provider {provider}")

        async with self._client.session() as session:
            data = await session.post_document(
                self.PATH, document, {"providers": provider}
            )

        entry = data.get(provider)
        if not isinstance(entry, dict) or entry.get("status") != "success":
            raise ExtractionFailedError(
                f"No data returned from Eden AI for provider {provider}"
            )
        extracted = entry.get("extracted_data")
        if not isinstance(extracted, dict):
            raise ExtractionFailedError(
                f"Provider {provider} returned no extracted_data object"
            )

        Log.info(f"Parsed {document.file_name}: {len(extracted)} top-level fields")
        return ExtractionResult.from_fields(extracted, strategy=self.kind, provider=provider)
