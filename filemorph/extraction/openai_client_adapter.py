from collections.abc import Sequence

import httpx
import openai

from filemorph.extraction.client_base import BaseExtractionClient
from filemorph.extraction.exceptions import MalformedResponseError, NetworkOrAIError


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client built on the OpenAI-compatible chat API.

    Works against OpenAI itself and any compatible endpoint, including
    Gemini's OpenAI compatibility layer. Requests are never retried.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

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
        content: list[dict[str, object]] = [
            {"type": "image_url", "image_url": {"url": url}} for url in image_urls
        ]
        content.append({"type": "text", "text": user_prompt})
        try:
            response = await self._client.chat.completions.create(
                model=model,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": content},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise NetworkOrAIError(f"Analysis failed: network error: {exc}") from exc
        except openai.APIError as exc:
            raise NetworkOrAIError(f"Analysis failed: {exc}") from exc

        if not response.choices:
            raise MalformedResponseError("AI returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise MalformedResponseError("AI returned empty response")
        return text
