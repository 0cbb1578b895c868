from dataclasses import dataclass
from enum import Enum


class DocumentFormat(str, Enum):
    """Allow-listed upload formats, keyed by media type."""

    PDF = "application/pdf"
    DOC = "application/msword"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass(frozen=True)
class UploadedDocument:
    """A file received from the upload form."""

    content: bytes
    media_type: str
    file_name: str

    def __repr__(self) -> str:
        return (
            f"UploadedDocument(file_name={self.file_name!r}, "
            f"media_type={self.media_type!r}, size={len(self.content)})"
        )
