"""
LegalEase File - OpenAI Chat Completions Service
Used for document classification, emergency-factor judgment and drafting.
"""

import json
import logging
from typing import Any, Optional

import httpx

from app.core.config import Settings, get_settings
from app.core.errors import AIProviderError

logger = logging.getLogger(__name__)

PROVIDER = "OpenAI"


class OpenAIService:
    """
    Thin httpx client for the chat-completions endpoint.

    Any transport problem, non-200 status or undecodable body is raised
    as AIProviderError; callers decide whether that is fatal.
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = settings or get_settings()
        self.api_key = settings.openai_api_key
        self.model = settings.openai_model
        self.base_url = settings.openai_base_url.rstrip("/")
        self.timeout = settings.classifier_timeout_seconds
        self._transport = transport

    @property
    def is_available(self) -> bool:
        """Check if an API key is configured."""
        return bool(self.api_key)

    async def complete_json(self, system: str, user: str, temperature: float = 0.1) -> dict[str, Any]:
        """Run a JSON-mode completion and return the decoded object."""
        content = await self._complete(
            system,
            user,
            temperature=temperature,
            response_format={"type": "json_object"},
        )
        try:
            data = json.loads(content or "{}")
        except json.JSONDecodeError as e:
            raise AIProviderError(PROVIDER, f"Malformed JSON response: {e}") from e
        if not isinstance(data, dict):
            raise AIProviderError(PROVIDER, "Expected a JSON object")
        return data

    async def complete_text(self, system: str, user: str, temperature: float = 0.3) -> str:
        """Run a plain-text completion."""
        return await self._complete(system, user, temperature=temperature)

    async def _complete(
        self,
        system: str,
        user: str,
        temperature: float,
        response_format: Optional[dict] = None,
    ) -> str:
        if not self.is_available:
            raise AIProviderError(PROVIDER, "API key not configured. Set OPENAI_API_KEY in .env")

        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
        }
        if response_format:
            payload["response_format"] = response_format

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise AIProviderError(PROVIDER, f"Request failed: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "OpenAI API error %s",
                response.status_code,
                extra={"status_code": response.status_code},
            )
            raise AIProviderError(PROVIDER, f"API error: {response.status_code}")

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise AIProviderError(PROVIDER, f"Unexpected response shape: {e}") from e


# Singleton instance
_openai_service: Optional[OpenAIService] = None


def get_openai_service() -> OpenAIService:
    """Get or create the OpenAI service singleton."""
    global _openai_service
    if _openai_service is None:
        _openai_service = OpenAIService()
    return _openai_service
