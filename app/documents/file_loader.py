from pathlib import Path

from app.documents.models import UploadedDocument
from app.documents.validator import media_type_for_file_name


class FileLoader:
    """Reads a document from disk into an UploadedDocument."""

    def load(self, path: Path, media_type: str | None = None) -> UploadedDocument:
        """Read file bytes, inferring the media type from the extension if not given.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedFormatError: if no media type is given and the extension is unknown.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        resolved_type = media_type or media_type_for_file_name(path.name)
        return UploadedDocument(
            content=path.read_bytes(),
            media_type=resolved_type,
            file_name=path.name,
        )
