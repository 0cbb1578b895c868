import io

from docx import Document

from app.decoders.base import BaseTextDecoder
from app.decoders.exceptions import DecodeError


class DocxDecoder(BaseTextDecoder):
    """Extracts paragraph and table text from Word XML (.docx) bytes."""

    def decode(self, content: bytes) -> str:
        try:
            document = Document(io.BytesIO(content))
            lines = [p.text for p in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    cells = [cell.text.strip() for cell in row.cells]
                    lines.append("\t".join(c for c in cells if c))
        except Exception as exc:
            raise DecodeError(f"python-docx could not read document: {exc}") from exc
        return "\n".join(line for line in lines if line.strip()).strip()
