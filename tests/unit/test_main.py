import json
import re
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.classification.classifier import DocumentClassification
from app.classification.exceptions import ClassificationNetworkError
from app.extraction.exceptions import UpstreamError
from app.extraction.models import ExtractionResult, StrategyKind
from app.main import main


@pytest.fixture(autouse=True)
def _no_log_handlers() -> Iterator[None]:
    with patch("app.main.Log.configure"):
        yield


@pytest.fixture()
def cv_file(tmp_path: Path) -> Path:
    path = tmp_path / "jane.pdf"
    path.write_bytes(b"%PDF-1.4 cv")
    return path


def _patched_adapter(result: ExtractionResult) -> MagicMock:
    adapter = MagicMock()
    adapter.try_extract = AsyncMock(return_value=result)
    return adapter


class TestMain:
    def test_prints_candidate_form(
        self, cv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fields = {"personal_infos": {"name": {"first_name": "Jane", "last_name": "Doe"}}}
        adapter = _patched_adapter(ExtractionResult.from_fields(fields))
        with patch("app.main.build_adapter", return_value=adapter):
            code = main([str(cv_file)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["kind"] == "cv"
        assert output["file_name"] == "jane.pdf"
        assert output["form"]["first_name"] == "Jane"
        assert output["form"]["last_name"] == "Doe"

    def test_reports_timestamped_storage_name(
        self, cv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        adapter = _patched_adapter(ExtractionResult.from_text("text"))
        with patch("app.main.build_adapter", return_value=adapter):
            main([str(cv_file)])

        stored = json.loads(capsys.readouterr().out)["stored_file_name"]
        assert re.fullmatch(r"jane_\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}-\d{3}Z\.pdf", stored)

    def test_strategy_override(self, cv_file: Path) -> None:
        adapter = _patched_adapter(ExtractionResult.from_text("text"))
        with patch("app.main.build_adapter", return_value=adapter):
            main([str(cv_file), "--kind", "jd", "--strategy", "local"])
        assert adapter.try_extract.await_args.args[1] is StrategyKind.LOCAL

    def test_extraction_failure_still_exits_zero(
        self, cv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        adapter = _patched_adapter(ExtractionResult.from_error(UpstreamError("down")))
        with patch("app.main.build_adapter", return_value=adapter):
            code = main([str(cv_file)])

        assert code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["form"]["error"] == "down"

    def test_missing_file_exits_two(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "missing.pdf")]) == 2

    def test_unsupported_extension_exits_two(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        assert main([str(path)]) == 2

    def test_unsupported_declared_type_exits_two(self, cv_file: Path) -> None:
        assert main([str(cv_file), "--media-type", "image/png"]) == 2

    def test_classify_adds_summary(
        self, cv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        adapter = _patched_adapter(ExtractionResult.from_fields({}))
        classifier = MagicMock()
        classifier.classify = AsyncMock(
            return_value=DocumentClassification(file_name="jane.pdf", summary="A CV")
        )
        with (
            patch("app.main.build_adapter", return_value=adapter),
            patch("app.main.build_classifier", return_value=classifier),
        ):
            main([str(cv_file), "--classify"])

        output = json.loads(capsys.readouterr().out)
        assert output["classification"] == "A CV"

    def test_classification_failure_is_reported(
        self, cv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        adapter = _patched_adapter(ExtractionResult.from_fields({}))
        classifier = MagicMock()
        classifier.classify = AsyncMock(side_effect=ClassificationNetworkError("offline"))
        with (
            patch("app.main.build_adapter", return_value=adapter),
            patch("app.main.build_classifier", return_value=classifier),
        ):
            code = main([str(cv_file), "--classify"])

        assert code == 0
        assert json.loads(capsys.readouterr().out)["classification_error"] == "offline"
