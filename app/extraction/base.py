from abc import ABC, abstractmethod
from typing import ClassVar

from app.extraction.models import ExtractionRequest, ExtractionResult, StrategyKind


class BaseExtractionStrategy(ABC):
    """Contract for all document extraction strategies."""

    kind: ClassVar[StrategyKind]

    @abstractmethod
    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """Extract fields or text from the request's document.

        Args:
            request: The uploaded document plus an optional provider override.

        Returns:
            ExtractionResult carrying either structured fields or plain text.

        Raises:
            ExtractionError: one of its subclasses, on any failure.
        """
