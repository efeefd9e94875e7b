from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_key: str = ""
    extraction_provider: str = "gemini"
    extraction_base_url: str = ""
    fast_model_name: str = "gemini-3-flash-preview"
    accurate_model_name: str = "gemini-3-pro-preview"
    extraction_timeout_seconds: int = Field(default=120, gt=0)

    pdf_engine: str = "pymupdf"
    max_rendered_pages: int = Field(default=20, gt=0)
    render_concurrency: int = Field(default=4, gt=0)
    load_concurrency: int = Field(default=8, gt=0)

    job_timeout_seconds: int = Field(default=600, gt=0)
