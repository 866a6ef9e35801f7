"""
OpenAI chat provider shared by the companion, report and insight features.

Example:
    provider = get_ai_provider()
    if provider:
        reply = await provider.chat("I feel tired", system_prompt="You are Elmora...")
        report = await provider.chat_json(prompt, max_tokens=3000)
"""

import json
import logging
import re
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from openai import AsyncOpenAI

from app.config import settings

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json(text: str) -> Dict[str, Any]:
    """Pull the first JSON object out of a model reply, tolerating markdown fences and chatter."""
    cleaned = _CODE_FENCE.sub("", text or "").strip()
    match = _JSON_OBJECT.search(cleaned)
    if not match:
        raise ValueError("No JSON object found in AI response")
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse AI JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise ValueError("AI response JSON is not an object")
    return parsed


class OpenAIProvider:
    """
    Thin wrapper over the async OpenAI client.

    Only chat completions are used; Whisper lives in app/modules/speech/whisper.py.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_retries: int = 2,
        timeout: float = 60.0,
    ):
        self.client = AsyncOpenAI(
            api_key=api_key,
            max_retries=max_retries,
            timeout=timeout,
        )
        self.model = model

    async def chat(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        conversation_history: Optional[List[Dict[str, str]]] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
        **kwargs: Any,
    ) -> str:
        """Send message and get response from OpenAI."""
        messages: List[Dict[str, str]] = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        if conversation_history:
            messages.extend(conversation_history)

        messages.append({"role": "user", "content": message})

        params: Dict[str, Any] = {
            "model": kwargs.get("model", self.model),
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        for key in ["presence_penalty", "frequency_penalty", "response_format"]:
            if key in kwargs:
                params[key] = kwargs[key]

        response = await self.client.chat.completions.create(**params)
        return (response.choices[0].message.content or "").strip()

    async def chat_json(
        self,
        message: str,
        system_prompt: Optional[str] = None,
        max_tokens: int = 800,
        temperature: float = 0.7,
    ) -> Dict[str, Any]:
        """Ask for a JSON object reply and parse it."""
        text = await self.chat(
            message,
            system_prompt=system_prompt,
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
        )
        return extract_json(text)


@lru_cache(maxsize=1)
def _build_provider(api_key: str, model: str, timeout: float) -> OpenAIProvider:
    return OpenAIProvider(api_key=api_key, model=model, timeout=timeout)


def get_ai_provider() -> Optional[OpenAIProvider]:
    """FastAPI dependency: the configured provider, or None when OPENAI_API_KEY is unset."""
    if not settings.ai_enabled:
        return None
    return _build_provider(settings.openai_api_key, settings.openai_model, settings.openai_timeout)


def require_ai(provider: Optional[OpenAIProvider]) -> OpenAIProvider:
    if provider is None:
        raise HTTPException(status_code=503, detail="AI service is not configured")
    return provider
