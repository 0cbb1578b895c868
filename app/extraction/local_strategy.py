import asyncio
from collections.abc import Mapping
from typing import ClassVar

from app.decoders.base import BaseTextDecoder
from app.decoders.exceptions import DecodeError
from app.documents.models import DocumentFormat
from app.documents.validator import validate_media_type
from app.extraction.base import BaseExtractionStrategy
from app.extraction.exceptions import ExtractionFailedError, UnsupportedFormatError
from app.extraction.models import ExtractionRequest, ExtractionResult, StrategyKind
from app.logging.logger import Log


class LocalTextStrategy(BaseExtractionStrategy):
    """Decodes the document in-process. Returns plain text, never fields."""

    kind: ClassVar[StrategyKind] = StrategyKind.LOCAL

    def __init__(self, decoders: Mapping[DocumentFormat, BaseTextDecoder]) -> None:
        self._decoders = dict(decoders)

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        document = request.document
        fmt = validate_media_type(document.media_type)
        decoder = self._decoders.get(fmt)
        if decoder is None:
            raise UnsupportedFormatError(
                f"Local extraction cannot read {fmt.name} files ({document.file_name})"
            )

        try:
            text = await asyncio.to_thread(decoder.decode, document.content)
        except DecodeError as exc:
            raise ExtractionFailedError(f"Could not decode {document.file_name}: {exc}") from exc

        Log.info(f"Decoded {len(text)} chars from {document.file_name} locally")
        return ExtractionResult.from_text(text, strategy=self.kind)
