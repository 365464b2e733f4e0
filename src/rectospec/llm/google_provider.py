"""
Google Gemini Provider.

Talks to the Gemini REST API (``generateContent``). The API key travels in
the ``x-goog-api-key`` header, never in the URL.
"""

import logging
from typing import Any, Dict, List

from rectospec.interfaces.llm import GenerationRequest, GenerationResponse, Usage
from rectospec.llm.base import BaseGenerationProvider, inline_schema
from rectospec.llm.extractor import parse_json_payload
from rectospec.llm.registry import register_provider

logger = logging.getLogger(__name__)


@register_provider("google")
class GoogleProvider(BaseGenerationProvider):
    """
    Google Gemini provider.

    Example:
        >>> async with GoogleProvider(api_key="...") as provider:
        ...     response = await provider.generate_text(
        ...         GenerationRequest(prompt="Hello!", system="Be brief.")
        ...     )
    """

    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
    DEFAULT_MODEL = "gemini-2.0-flash-lite"

    @property
    def name(self) -> str:
        return "google"

    def _auth_headers(self, api_key: str) -> Dict[str, str]:
        return {"x-goog-api-key": api_key, "Content-Type": "application/json"}

    async def generate_text(self, request: GenerationRequest) -> GenerationResponse:
        """Generate a completion."""
        return await self._generate(request, self._build_body(request))

    async def generate_structured(self, request: GenerationRequest) -> GenerationResponse:
        """Generate a JSON object using Gemini's response schema support."""
        body = self._build_body(request)
        body["generationConfig"]["responseMimeType"] = "application/json"
        if request.schema:
            body["generationConfig"]["responseSchema"] = to_gemini_schema(request.schema)

        response = await self._generate(request, body)
        response.data = parse_json_payload(response.text)
        return response

    def _build_body(self, request: GenerationRequest) -> Dict[str, Any]:
        generation_config: Dict[str, Any] = {"temperature": request.temperature}
        if request.max_tokens:
            generation_config["maxOutputTokens"] = request.max_tokens

        body: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
            "generationConfig": generation_config,
        }
        if request.system:
            body["systemInstruction"] = {"parts": [{"text": request.system}]}
        return body

    async def _generate(self, request: GenerationRequest, body: Dict[str, Any]) -> GenerationResponse:
        model = request.model or self.model
        logger.debug(f"Calling Gemini API: {model} ({len(request.prompt)} prompt chars)")

        data = await self._post(f"/v1beta/models/{model}:generateContent", body)

        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason", "no candidates returned")
            raise ValueError(f"Gemini returned no content: {reason}")

        candidate = candidates[0]
        parts: List[Dict[str, Any]] = (candidate.get("content") or {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)

        usage_data = data.get("usageMetadata", {})
        usage = Usage(
            prompt_tokens=usage_data.get("promptTokenCount", 0),
            completion_tokens=usage_data.get("candidatesTokenCount", 0),
            total_tokens=usage_data.get("totalTokenCount", 0),
        )

        return GenerationResponse(
            text=text,
            model=data.get("modelVersion", model),
            usage=usage,
            finish_reason=candidate.get("finishReason"),
            raw_response=data,
        )


def to_gemini_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a JSON schema to Gemini's OpenAPI-style schema.

    Inlines references, keeps the keywords Gemini understands and
    upper-cases type names.
    """
    def convert(node: Dict[str, Any]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if "type" in node:
            result["type"] = str(node["type"]).upper()
        if "description" in node:
            result["description"] = node["description"]
        if "enum" in node:
            result["enum"] = list(node["enum"])
        if "properties" in node:
            result["properties"] = {name: convert(sub) for name, sub in node["properties"].items()}
            result["propertyOrdering"] = list(node["properties"])
        if "required" in node:
            result["required"] = list(node["required"])
        if "items" in node:
            result["items"] = convert(node["items"])
        return result

    return convert(inline_schema(schema))
