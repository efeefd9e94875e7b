from typing import ClassVar

from filemorph.config.settings import Settings
from filemorph.extraction.example_client_adapter import ExampleClientAdapter
from filemorph.extraction.extractor import Extractor
from filemorph.extraction.openai_client_adapter import OpenAIClientAdapter


class ExtractorFactory:
    """Creates the configured extractor."""

    BASE_URLS: ClassVar[dict[str, str | None]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openai": None,
    }

    @classmethod
    def create(cls, settings: Settings) -> Extractor:
        """Create an extractor from application settings.

        A missing API key is not an error here; it is reported when an
        extraction is first requested.
        """
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return Extractor(
                client=ExampleClientAdapter(),
                api_key="",
                fast_model="example",
                accurate_model="example",
            )
        client = OpenAIClientAdapter(
            api_key=settings.api_key,
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return Extractor(
            client=client,
            api_key=settings.api_key,
            fast_model=settings.fast_model_name,
            accurate_model=settings.accurate_model_name,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.extraction_base_url.strip()
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "extraction_base_url is required for extraction_provider=openai_compatible"
                )
            return override
        if provider not in cls.BASE_URLS:
            supported = ["example", "openai_compatible", *sorted(cls.BASE_URLS)]
            raise ValueError(
                f"Unknown extraction provider '{provider}'. Choose from: {supported}"
            )
        return override or cls.BASE_URLS[provider]
