"""
Anthropic Provider - Claude models through the Messages API.

Structured output is obtained by forcing a single tool call whose input
schema is the requested schema.
"""

import logging
from typing import Any, Dict, List

from rectospec.interfaces.llm import GenerationRequest, GenerationResponse, Usage
from rectospec.llm.base import BaseGenerationProvider, inline_schema
from rectospec.llm.registry import register_provider

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


@register_provider("anthropic")
class AnthropicProvider(BaseGenerationProvider):
    """
    Anthropic Claude provider.

    Example:
        >>> async with AnthropicProvider(api_key="sk-ant-...") as provider:
        ...     response = await provider.generate_text(GenerationRequest(prompt="Hello!"))
    """

    DEFAULT_BASE_URL = "https://api.anthropic.com"
    DEFAULT_MODEL = "claude-3-5-sonnet-latest"

    # The Messages API requires max_tokens on every request
    FALLBACK_MAX_TOKENS = 4096

    @property
    def name(self) -> str:
        return "anthropic"

    def _auth_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    async def generate_text(self, request: GenerationRequest) -> GenerationResponse:
        """Generate a completion."""
        return await self._generate(request, self._build_body(request))

    async def generate_structured(self, request: GenerationRequest) -> GenerationResponse:
        """Generate a JSON object through a forced tool call."""
        body = self._build_body(request)
        body["tools"] = [
            {
                "name": request.schema_name,
                "description": "Return the requested result as structured data.",
                "input_schema": inline_schema(request.schema or {"type": "object"}),
            }
        ]
        body["tool_choice"] = {"type": "tool", "name": request.schema_name}

        response = await self._generate(request, body)

        blocks: List[Dict[str, Any]] = response.raw_response.get("content") or []
        tool_inputs = [b.get("input") for b in blocks if b.get("type") == "tool_use"]
        if not tool_inputs:
            raise ValueError("Anthropic response contained no tool_use block")
        response.data = tool_inputs[0]
        return response

    def _build_body(self, request: GenerationRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": request.model or self.model,
            "max_tokens": request.max_tokens or self.FALLBACK_MAX_TOKENS,
            "temperature": request.temperature,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system:
            body["system"] = request.system
        return body

    async def _generate(self, request: GenerationRequest, body: Dict[str, Any]) -> GenerationResponse:
        logger.debug(f"Calling Anthropic API: {body['model']} ({len(request.prompt)} prompt chars)")

        data = await self._post("/v1/messages", body)

        blocks: List[Dict[str, Any]] = data.get("content") or []
        text = "".join(b.get("text", "") for b in blocks if b.get("type") == "text")

        usage_data = data.get("usage", {})
        prompt_tokens = usage_data.get("input_tokens", 0)
        completion_tokens = usage_data.get("output_tokens", 0)

        return GenerationResponse(
            text=text,
            model=data.get("model", body["model"]),
            usage=Usage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
            finish_reason=data.get("stop_reason"),
            raw_response=data,
        )
