from app.config.settings import Settings
from app.decoders.base import BaseTextDecoder
from app.decoders.docx_adapter import DocxDecoder
from app.decoders.pdfplumber_adapter import PdfPlumberDecoder
from app.decoders.pymupdf_adapter import PyMuPdfDecoder
from app.documents.models import DocumentFormat


class DecoderFactory:
    """Builds the per-format decoder table from settings."""

    PDF_ENGINES: dict[str, type[BaseTextDecoder]] = {
        "pdfplumber": PdfPlumberDecoder,
        "pymupdf": PyMuPdfDecoder,
    }

    @classmethod
    def create_pdf_decoder(cls, settings: Settings) -> BaseTextDecoder:
        engine = settings.pdf_engine.lower()
        decoder_cls = cls.PDF_ENGINES.get(engine)
        if decoder_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return decoder_cls()

    @classmethod
    def create(cls, settings: Settings) -> dict[DocumentFormat, BaseTextDecoder]:
        """Return decoders for every locally readable format (PDF and DOCX)."""
        return {
            DocumentFormat.PDF: cls.create_pdf_decoder(settings),
            DocumentFormat.DOCX: DocxDecoder(),
        }
