import pymupdf

from app.decoders.base import BaseTextDecoder
from app.decoders.exceptions import DecodeError


class PyMuPdfDecoder(BaseTextDecoder):
    """Extracts text from PDF bytes using PyMuPDF."""

    def decode(self, content: bytes) -> str:
        try:
            with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise DecodeError(f"pymupdf could not read PDF: {exc}") from exc
