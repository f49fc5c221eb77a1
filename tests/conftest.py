from pathlib import Path
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import config  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def cnis_text() -> str:
    """Return the sample extract as produced by the PDF text step."""

    return (FIXTURES / "cnis" / "extrato_cnis.txt").read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin configuration values that tests rely on regardless of the environment."""

    monkeypatch.setattr(config, "CNIS_HEADER_CHAR_LIMIT", 500, raising=False)
    monkeypatch.setattr(config, "CNIS_DEFAULT_GENDER", "M", raising=False)
    monkeypatch.setattr(config, "CNIS_MAX_FILE_MB", 20, raising=False)
    monkeypatch.setattr(config, "CNIS_OCR_ENABLED", False, raising=False)
    yield
