import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from app.classification.classifier import build_classifier
from app.classification.exceptions import ClassificationError
from app.config.settings import Settings
from app.documents.file_loader import FileLoader
from app.documents.models import UploadedDocument
from app.documents.validator import timestamped_file_name, validate_media_type
from app.extraction.adapter import build_adapter
from app.extraction.exceptions import UnsupportedFormatError
from app.extraction.factory import ExtractionStrategyFactory
from app.forms.prefill import FormPrefiller
from app.logging.logger import Log


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recruit-extract",
        description="Pre-fill a candidate or job-description form from an uploaded file.",
    )
    parser.add_argument("file", type=Path, help="PDF, DOC or DOCX file")
    parser.add_argument("--kind", choices=["cv", "jd"], default="cv")
    parser.add_argument(
        "--strategy",
        choices=["sync", "async", "local"],
        help="Override the configured extraction strategy for this kind",
    )
    parser.add_argument("--media-type", help="Declared media type (default: from extension)")
    parser.add_argument(
        "--classify",
        action="store_true",
        help="Also ask the chat model what the file name suggests",
    )
    return parser.parse_args(argv)


async def _run(
    args: argparse.Namespace,
    settings: Settings,
    document: UploadedDocument,
) -> dict[str, Any]:
    prefiller = FormPrefiller(
        build_adapter(settings),
        cv_strategy=ExtractionStrategyFactory.parse_kind(
            args.strategy or settings.cv_extraction_strategy
        ),
        jd_strategy=ExtractionStrategyFactory.parse_kind(
            args.strategy or settings.jd_extraction_strategy
        ),
    )
    if args.kind == "cv":
        form: Any = await prefiller.prefill_candidate(document)
    else:
        form = await prefiller.prefill_job_description(document)
    output: dict[str, Any] = {
        "file_name": document.file_name,
        "stored_file_name": timestamped_file_name(document.file_name),
        "kind": args.kind,
        "form": asdict(form),
    }

    if args.classify:
        try:
            classification = await build_classifier(settings).classify(document.file_name)
            output["classification"] = classification.summary
        except (ClassificationError, ValueError) as exc:
            Log.warning(f"Classification skipped: {exc}")
            output["classification_error"] = str(exc)
    return output


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> read file -> extract -> print form as JSON."""
    args = _parse_args(argv)
    settings = Settings()
    # stdout carries the JSON result
    Log.configure(settings.log_level, stream=sys.stderr)

    try:
        document = FileLoader().load(args.file, args.media_type)
        validate_media_type(document.media_type)
    except (OSError, UnsupportedFormatError) as exc:
        Log.error(f"Cannot read {args.file}: {exc}")
        return 2

    output = asyncio.run(_run(args, settings, document))
    json.dump(output, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
