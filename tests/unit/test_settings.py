import pytest
from pydantic import ValidationError

from filemorph.config.settings import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("API_KEY", "PDF_ENGINE", "MAX_RENDERED_PAGES", "EXTRACTION_PROVIDER"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings(_env_file=None)
        assert s.app_env == "dev"

    def test_default_api_key_is_empty(self) -> None:
        s = Settings(_env_file=None)
        assert s.api_key == ""

    def test_default_pdf_engine(self) -> None:
        s = Settings(_env_file=None)
        assert s.pdf_engine == "pymupdf"

    def test_default_page_cap(self) -> None:
        s = Settings(_env_file=None)
        assert s.max_rendered_pages == 20

    def test_default_extraction_provider(self) -> None:
        s = Settings(_env_file=None)
        assert s.extraction_provider == "gemini"


class TestSettingsFromEnv:
    def test_loads_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_KEY", "secret")
        s = Settings(_env_file=None)
        assert s.api_key == "secret"

    def test_loads_pdf_engine(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PDF_ENGINE", "pdfplumber")
        s = Settings(_env_file=None)
        assert s.pdf_engine == "pdfplumber"

    def test_loads_page_cap(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_RENDERED_PAGES", "5")
        s = Settings(_env_file=None)
        assert s.max_rendered_pages == 5


class TestSettingsValidation:
    def test_non_numeric_page_cap_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_RENDERED_PAGES", "abc")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_zero_concurrency_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RENDER_CONCURRENCY", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
