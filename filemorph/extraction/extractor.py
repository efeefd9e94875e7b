"""AI-powered table extraction and OCR over page images."""

from collections.abc import Callable, Sequence

from filemorph.extraction.client_base import BaseExtractionClient
from filemorph.extraction.exceptions import MissingCredentialError
from filemorph.extraction.models import ExtractedTable, OcrBlock
from filemorph.extraction.parsing import parse_response
from filemorph.extraction.prompts import OCR_PROMPT, SYSTEM_PROMPT, TABLE_PROMPT
from filemorph.extraction.schemas import (
    OCR_SCHEMA,
    OCR_SCHEMA_NAME,
    TABLE_SCHEMA,
    TABLE_SCHEMA_NAME,
)
from filemorph.extraction.validator import build_ocr_payload, build_table_payload
from filemorph.logging.logger import Log
from filemorph.pdf.models import RenderedPage


class Extractor:
    """Extracts tables and positioned text from images through an AI provider.

    Request policy differs per operation: table extraction sends all images of
    a document in one request, while OCR sends one request per image, in page
    order, to keep each payload small.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        api_key: str,
        fast_model: str,
        accurate_model: str,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._fast_model = fast_model
        self._accurate_model = accurate_model

    def ensure_credential(self) -> None:
        """Raise MissingCredentialError if the provider needs a key and none is configured."""
        if self._client.requires_credential and not self._api_key.strip():
            raise MissingCredentialError(
                "AI extraction requires a valid API_KEY. Set the API_KEY environment variable."
            )

    async def extract_tables(
        self,
        images: Sequence[RenderedPage],
        *,
        accurate: bool = False,
    ) -> list[ExtractedTable]:
        """Extract every table visible in `images` with a single batched request."""
        self.ensure_credential()
        model = self._accurate_model if accurate else self._fast_model
        Log.info(f"Extracting tables from {len(images)} image(s) with {model}")
        raw = await self._client.create_completion(
            model=model,
            system_prompt=SYSTEM_PROMPT,
            user_prompt=TABLE_PROMPT,
            image_urls=[image.as_data_url() for image in images],
            json_schema=TABLE_SCHEMA,
            schema_name=TABLE_SCHEMA_NAME,
        )
        Log.debug(f"AI raw table response:\n{raw}")
        payload = build_table_payload(parse_response(raw))
        Log.info(f"Extracted {len(payload.tables)} table(s)")
        return payload.tables

    async def ocr(
        self,
        images: Sequence[RenderedPage],
        on_image: Callable[[int, int], None] | None = None,
    ) -> list[list[OcrBlock]]:
        """Recognize positioned text blocks, one request per image, in order.

        `on_image(done, total)` is called after each image.
        """
        self.ensure_credential()
        results: list[list[OcrBlock]] = []
        for position, image in enumerate(images, start=1):
            raw = await self._client.create_completion(
                model=self._fast_model,
                system_prompt=SYSTEM_PROMPT,
                user_prompt=OCR_PROMPT,
                image_urls=[image.as_data_url()],
                json_schema=OCR_SCHEMA,
                schema_name=OCR_SCHEMA_NAME,
            )
            Log.debug(f"AI raw OCR response for image {position}:\n{raw}")
            payload = build_ocr_payload(parse_response(raw))
            Log.info(f"OCR image {position}/{len(images)}: {len(payload.blocks)} block(s)")
            results.append(payload.blocks)
            if on_image is not None:
                on_image(position, len(images))
        return results
