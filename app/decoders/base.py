from abc import ABC, abstractmethod


class BaseTextDecoder(ABC):
    """Contract for all local document-to-text decoders."""

    @abstractmethod
    def decode(self, content: bytes) -> str:
        """Extract plain text from raw document bytes.

        Args:
            content: Raw file content.

        Returns:
            Extracted text as a single stripped string.

        Raises:
            DecodeError: if decoding fails for any reason.
        """
