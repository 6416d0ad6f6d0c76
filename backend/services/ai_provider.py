"""
AI provider — one completion call against Anthropic or OpenAI.

settings.AI_PROVIDER picks the upstream. Calls are single shot: the SDK
clients are built with max_retries=0 and nothing is cached, so a failure
surfaces to the caller immediately as the SDK's APIError.
"""

import logging
import time
from typing import Any

import anthropic
import openai

from backend.config import settings

logger = logging.getLogger(__name__)

# Anything the upstream SDKs raise for a failed call
PROVIDER_ERRORS = (anthropic.APIError, openai.APIError)


class AIProvider:
    """Unified interface for AI providers (Anthropic, OpenAI)."""

    def __init__(self) -> None:
        self.anthropic_client = anthropic.AsyncAnthropic(api_key=settings.ANTHROPIC_API_KEY, max_retries=0)
        self.openai_client = openai.AsyncOpenAI(api_key=settings.OPENAI_API_KEY, max_retries=0)

    async def complete(
        self,
        system: str,
        prompt: str,
        model: str,
        max_tokens: int,
        json_mode: bool = False,
    ) -> str:
        """
        Single-turn completion on the configured provider.

        Args:
            system: System prompt
            prompt: The user turn
            model: Provider model name
            max_tokens: Output cap
            json_mode: Ask for a bare JSON object (OpenAI response_format; Claude follows the prompt)

        Returns:
            The generated text

        Raises:
            anthropic.APIError / openai.APIError on upstream failure
        """
        messages = [{"role": "user", "content": prompt}]
        if settings.AI_PROVIDER == "openai":
            result = await self.call_gpt(model, system, messages, max_tokens=max_tokens, json_mode=json_mode)
        else:
            result = await self.call_claude(model, system, messages, max_tokens=max_tokens)
        return result["content"]

    async def call_claude(
        self,
        model: str,
        system: str,
        messages: list[dict[str, Any]],
        max_tokens: int = 1024,
        temperature: float = 1.0,
    ) -> dict[str, Any]:
        """
        Stream a Claude response and collect it.

        Returns:
            {"content": str, "usage": {input_tokens, output_tokens}, "timing": {ttft_ms, total_ms}}
        """
        started = time.perf_counter()
        first_token_at: float | None = None
        chunks: list[str] = []
        usage = {"input_tokens": 0, "output_tokens": 0}

        async with self.anthropic_client.messages.stream(
            model=model,
            system=system,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        ) as stream:
            async for event in stream:
                if event.type == "message_start":
                    usage["input_tokens"] = event.message.usage.input_tokens
                elif event.type == "content_block_delta" and hasattr(event.delta, "text"):
                    if first_token_at is None:
                        first_token_at = time.perf_counter()
                    chunks.append(event.delta.text)
                elif event.type == "message_delta":
                    usage["output_tokens"] = event.usage.output_tokens

        total_ms = int((time.perf_counter() - started) * 1000)
        ttft_ms = int((first_token_at - started) * 1000) if first_token_at else total_ms
        logger.info(
            "claude %s: in=%d out=%d ttft=%dms total=%dms",
            model,
            usage["input_tokens"],
            usage["output_tokens"],
            ttft_ms,
            total_ms,
        )
        return {"content": "".join(chunks), "usage": usage, "timing": {"ttft_ms": ttft_ms, "total_ms": total_ms}}

    async def call_gpt(
        self,
        model: str,
        system: str,
        messages: list[dict[str, Any]],
        max_tokens: int = 1024,
        temperature: float = 1.0,
        json_mode: bool = False,
    ) -> dict[str, Any]:
        """Chat completion. Returns {"content": str, "usage": {input_tokens, output_tokens}}."""
        extra: dict[str, Any] = {"response_format": {"type": "json_object"}} if json_mode else {}
        response = await self.openai_client.chat.completions.create(
            model=model,
            messages=[{"role": "system", "content": system}, *messages],
            max_tokens=max_tokens,
            temperature=temperature,
            **extra,
        )
        usage = {
            "input_tokens": response.usage.prompt_tokens,
            "output_tokens": response.usage.completion_tokens,
        }
        logger.info("gpt %s: in=%d out=%d", model, usage["input_tokens"], usage["output_tokens"])
        return {"content": response.choices[0].message.content or "", "usage": usage}


# Singleton instance
ai_provider = AIProvider()
