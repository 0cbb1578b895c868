"""Upload format checks, run before any network or decoding work."""

from datetime import datetime, timezone
from pathlib import PurePath

from app.documents.models import DocumentFormat
from app.extraction.exceptions import UnsupportedFormatError

_EXTENSIONS: dict[str, DocumentFormat] = {
    ".pdf": DocumentFormat.PDF,
    ".doc": DocumentFormat.DOC,
    ".docx": DocumentFormat.DOCX,
}


def validate_media_type(media_type: str) -> DocumentFormat:
    """Return the DocumentFormat for an allow-listed media type.

    Media type parameters (``; charset=...``) and letter case are ignored.

    Raises:
        UnsupportedFormatError: for anything outside PDF, DOC and DOCX.
    """
    essence = (media_type or "").split(";", 1)[0].strip().lower()
    try:
        return DocumentFormat(essence)
    except ValueError as exc:
        raise UnsupportedFormatError(
            f"File must be PDF or DOCX format, got {media_type!r}"
        ) from exc


def media_type_for_file_name(file_name: str) -> str:
    """Infer the media type from a file name extension."""
    suffix = PurePath(file_name).suffix.lower()
    fmt = _EXTENSIONS.get(suffix)
    if fmt is None:
        raise UnsupportedFormatError(
            f"Only PDF and DOCX files are supported, got {file_name!r}"
        )
    return fmt.value


def timestamped_file_name(file_name: str, now: datetime | None = None) -> str:
    """Insert a UTC timestamp before the extension: cv.pdf -> cv_2024-05-01T10-00-00-000Z.pdf

    Aware datetimes are converted to UTC; naive ones are taken as UTC already.
    """
    moment = now if now is not None else datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    timestamp = moment.strftime("%Y-%m-%dT%H-%M-%S-") + f"{moment.microsecond // 1000:03d}Z"
    stem, dot, extension = file_name.rpartition(".")
    if not dot:
        return f"{file_name}_{timestamp}"
    return f"{stem}_{timestamp}.{extension}"
