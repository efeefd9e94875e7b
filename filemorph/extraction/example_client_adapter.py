"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from collections.abc import Sequence
from typing import ClassVar

from filemorph.extraction.client_base import BaseExtractionClient
from filemorph.extraction.schemas import OCR_SCHEMA_NAME, TABLE_SCHEMA_NAME


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that returns fixed, empty but valid responses.

    No network calls and no credential. Useful for local development and tests.
    """

    requires_credential = False

    RESPONSES: ClassVar[dict[str, object]] = {
        TABLE_SCHEMA_NAME: {"tables": []},
        OCR_SCHEMA_NAME: {"blocks": []},
    }

    async def create_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_urls: Sequence[str],
        json_schema: dict[str, object],
        schema_name: str,
    ) -> str:
        _ = model, system_prompt, user_prompt, image_urls, json_schema
        return json.dumps(self.RESPONSES.get(schema_name, {}))
