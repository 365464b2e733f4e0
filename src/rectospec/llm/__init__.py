"""
LLM module - Generation providers, gateway and response handling.

Available providers:
- GoogleProvider: Gemini REST API (default)
- AnthropicProvider: Claude Messages API
"""

from rectospec.llm.registry import register_provider, get_provider_class, list_providers
from rectospec.llm.base import BaseGenerationProvider
from rectospec.llm.google_provider import GoogleProvider
from rectospec.llm.anthropic_provider import AnthropicProvider
from rectospec.llm.gateway import GenerationGateway
from rectospec.llm.extractor import extract_fenced_block, parse_json_payload
from rectospec.llm.schemas import GeneratedCode, GeneratedFile

__all__ = [
    "register_provider",
    "get_provider_class",
    "list_providers",
    "BaseGenerationProvider",
    "GoogleProvider",
    "AnthropicProvider",
    "GenerationGateway",
    "extract_fenced_block",
    "parse_json_payload",
    "GeneratedCode",
    "GeneratedFile",
]
