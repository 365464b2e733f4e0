"""
Pipeline - The generation stages wired end to end.

    recording ──normalize──> NormalizedRecording ──generate_gherkin──> .feature
    .feature  ──generate_playwright──> page object + spec + fixture data
    .feature  ──generate_suggestion──> improved .feature

Each stage builds its prompt, calls the gateway once and extracts the
payload. Nothing here retries or writes files.
"""

import logging
from typing import Optional

from rectospec.llm.extractor import extract_fenced_block
from rectospec.llm.gateway import GenerationGateway
from rectospec.llm.schemas import GeneratedCode
from rectospec.prompts import (
    GHERKIN_SYSTEM_PROMPT,
    PLAYWRIGHT_SYSTEM_PROMPT,
    GherkinGenerationOptions,
    PlaywrightGenerationOptions,
    SuggestionOptions,
    build_gherkin_prompt,
    build_playwright_prompt,
    build_suggestion_prompt,
)
from rectospec.recording.normalizer import NormalizedRecording

logger = logging.getLogger(__name__)

GHERKIN_TEMPERATURE = 0.3
GHERKIN_MAX_TOKENS = 4000
PLAYWRIGHT_TEMPERATURE = 0.3
# Three complete source files encoded as JSON
PLAYWRIGHT_MAX_TOKENS = 8192


async def generate_gherkin(
    recording: NormalizedRecording,
    options: GherkinGenerationOptions,
    gateway: GenerationGateway,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> str:
    """
    Generate a Gherkin feature from a normalized recording.

    Returns:
        Gherkin text without surrounding code fences
    """
    prompt = build_gherkin_prompt(recording, options)
    text = await gateway.generate_text(
        prompt,
        GHERKIN_SYSTEM_PROMPT,
        provider=provider,
        model=model,
        temperature=GHERKIN_TEMPERATURE,
        max_tokens=GHERKIN_MAX_TOKENS,
    )
    return extract_fenced_block(text, "gherkin")


async def generate_playwright(
    gherkin_content: str,
    options: PlaywrightGenerationOptions,
    gateway: GenerationGateway,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> GeneratedCode:
    """
    Generate Playwright test code from a Gherkin feature.

    Returns:
        The three generated files
    """
    prompt = build_playwright_prompt(gherkin_content, options)
    return await gateway.generate_structured(
        prompt,
        GeneratedCode,
        system=PLAYWRIGHT_SYSTEM_PROMPT,
        provider=provider,
        model=model,
        temperature=PLAYWRIGHT_TEMPERATURE,
        max_tokens=PLAYWRIGHT_MAX_TOKENS,
    )


async def generate_suggestion(
    options: SuggestionOptions,
    gateway: GenerationGateway,
    *,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> str:
    """
    Ask for an improved version of a Gherkin feature.

    Returns:
        Improved Gherkin text without surrounding code fences
    """
    prompt = build_suggestion_prompt(options)
    logger.info(f"Generating suggestion (language: {options.language}, focus: {options.focus_area})")
    text = await gateway.generate_text(
        prompt,
        GHERKIN_SYSTEM_PROMPT,
        provider=provider,
        model=model,
        temperature=GHERKIN_TEMPERATURE,
        max_tokens=GHERKIN_MAX_TOKENS,
    )
    return extract_fenced_block(text, "gherkin")
