"""Base agent class for Gemini-backed agents."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from google.genai import types

from core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Base class for all AI agents using the Google GenAI client."""

    def __init__(
        self,
        name: str,
        instructions: str,
        model: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize the agent.

        Args:
            name: Agent name
            instructions: System instructions for the agent
            model: Gemini model to use (defaults to settings)
            client: Pre-built ``genai.Client``; created lazily when omitted
        """
        from core.config import settings

        self.name = name
        self.instructions = instructions
        self.model = model or settings.gemini_model
        self._client = client

    def _get_client(self):
        """Get or create the GenAI client."""
        if self._client is None:
            from google import genai
            from core.config import settings

            if not settings.google_api_key:
                raise UpstreamError(f"{self.name}: GOOGLE_API_KEY is not configured")
            self._client = genai.Client(api_key=settings.google_api_key)
        return self._client

    @abstractmethod
    async def process(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        """Process input data and return results."""
        pass

    async def run(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        json_mode: bool = False,
        instructions: Optional[str] = None,
    ) -> str:
        """Run the agent with a prompt and return the raw reply text.

        ``instructions`` overrides the agent's system instructions for this
        call only.

        Raises:
            UpstreamError: The model call failed or returned nothing
        """
        client = self._get_client()
        config = types.GenerateContentConfig(
            system_instruction=instructions or self.instructions,
            temperature=temperature,
            response_mime_type="application/json" if json_mode else None,
        )

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as exc:
            logger.error(f"{self.name} model call failed: {exc}")
            raise UpstreamError(f"{self.name} model call failed") from exc

        text = getattr(response, "text", None)
        if not text:
            raise UpstreamError(f"{self.name} returned an empty response")
        return text

    async def run_json(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        instructions: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Run the agent in JSON mode and decode the reply into an object.

        Raises:
            UpstreamError: The call failed or the reply is not a JSON object
        """
        text = await self.run(
            prompt, temperature=temperature, json_mode=True, instructions=instructions
        )
        try:
            data = json.loads(_strip_code_fence(text))
        except json.JSONDecodeError as exc:
            logger.error(f"{self.name} returned non-JSON content")
            raise UpstreamError(f"{self.name} returned unparseable content") from exc

        if not isinstance(data, dict):
            raise UpstreamError(f"{self.name} returned a non-object JSON payload")
        return data


def _strip_code_fence(text: str) -> str:
    """Models sometimes wrap JSON in a markdown fence even in JSON mode."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()
