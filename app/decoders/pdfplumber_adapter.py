import io

import pdfplumber

from app.decoders.base import BaseTextDecoder
from app.decoders.exceptions import DecodeError


class PdfPlumberDecoder(BaseTextDecoder):
    """Extracts text from PDF bytes using pdfplumber."""

    def decode(self, content: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise DecodeError(f"pdfplumber could not read PDF: {exc}") from exc
