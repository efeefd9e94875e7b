import pytest

from filemorph.config.settings import Settings


@pytest.fixture()
def test_settings() -> Settings:
    """Settings isolated from the developer's .env, with a small page cap."""
    return Settings(
        _env_file=None,
        api_key="test-key",
        extraction_provider="gemini",
        fast_model_name="fast-model",
        accurate_model_name="accurate-model",
        pdf_engine="pymupdf",
        max_rendered_pages=3,
        job_timeout_seconds=60,
    )
