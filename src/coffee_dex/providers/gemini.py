"""Gemini refiner implementation."""

import os

from google import genai
from google.genai import types

from coffee_dex.config import DEFAULT_REFINER_TIMEOUT_SEC
from coffee_dex.exceptions import AuthenticationError, ExternalServiceError, RateLimitError
from coffee_dex.providers.base import BaseRefiner
from coffee_dex.schema import RefinerResponse


class GeminiRefiner(BaseRefiner):
    """Gemini API refiner using structured JSON output."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.0-flash",
        timeout_sec: float = DEFAULT_REFINER_TIMEOUT_SEC,
        client=None,
    ):
        """Initialize Gemini refiner.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name to use.
            timeout_sec: Upper bound for one refinement call.
            client: Pre-built genai client, mainly for tests.

        Raises:
            AuthenticationError: If no API key is provided or found.
        """
        super().__init__(timeout_sec=timeout_sec)
        self.model = model
        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        self.client = genai.Client(
            api_key=self.api_key,
            http_options=types.HttpOptions(timeout=int(timeout_sec * 1000)),
        )

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=RefinerResponse,
                ),
            )
        except genai.errors.ClientError as e:
            if "rate" in str(e).lower() or "quota" in str(e).lower():
                raise RateLimitError(f"API rate limit exceeded: {e}") from e
            if "auth" in str(e).lower() or "key" in str(e).lower():
                raise AuthenticationError(f"Invalid API key: {e}") from e
            raise ExternalServiceError(f"Gemini request rejected: {e}") from e
        except Exception as e:
            raise ExternalServiceError(f"Gemini request failed: {e}") from e

        if not response.text:
            raise ExternalServiceError("Gemini returned an empty response")
        return response.text
