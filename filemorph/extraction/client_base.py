from abc import ABC, abstractmethod
from collections.abc import Sequence


class BaseExtractionClient(ABC):
    """Contract for provider-specific extraction AI clients."""

    requires_credential: bool = True

    @abstractmethod
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
        """Send images plus instructions and return the provider response as plain text.

        Raises:
            NetworkOrAIError: on transport or provider API failures.
            MalformedResponseError: if the provider returns no content.
        """
