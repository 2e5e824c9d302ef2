"""Ollama refiner implementation."""

from __future__ import annotations

import json
from urllib import error, request

from coffee_dex.config import DEFAULT_REFINER_TIMEOUT_SEC
from coffee_dex.exceptions import ExternalServiceError
from coffee_dex.providers.base import BaseRefiner


class OllamaRefiner(BaseRefiner):
    """Refiner backed by an Ollama ``/api/generate`` endpoint."""

    name = "ollama"

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "qwen3:4b",
        timeout_sec: float = DEFAULT_REFINER_TIMEOUT_SEC,
    ):
        super().__init__(timeout_sec=timeout_sec)
        self.base_url = base_url.rstrip("/")
        self.model = model

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
        }
        req = request.Request(
            f"{self.base_url}/api/generate",
            data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.timeout_sec) as resp:
                status = getattr(resp, "status", 200)
                body = resp.read()
        except error.HTTPError as e:
            raise ExternalServiceError(f"Ollama returned status {e.code}") from e
        except (error.URLError, TimeoutError, OSError, ValueError) as e:
            raise ExternalServiceError(f"failed to call Ollama: {e}") from e

        if status != 200:
            raise ExternalServiceError(f"Ollama returned status {status}")

        try:
            envelope = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ExternalServiceError(f"failed to decode Ollama envelope: {e}") from e

        text = envelope.get("response") if isinstance(envelope, dict) else None
        if not isinstance(text, str):
            raise ExternalServiceError("Ollama envelope has no string 'response' field")
        return text

    def check_connection(self) -> bool:
        """Return True when ``/api/tags`` answers with 200."""
        req = request.Request(f"{self.base_url}/api/tags", method="GET")
        try:
            with request.urlopen(req, timeout=min(self.timeout_sec, 5.0)) as resp:
                return getattr(resp, "status", 200) == 200
        except (error.URLError, TimeoutError, OSError, ValueError):
            return False
