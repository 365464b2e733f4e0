"""
Prompts module - Prompt builders for each generation stage.

All builders are pure functions: same input, same prompt, no I/O.
"""

from rectospec.prompts.gherkin_prompt import (
    GHERKIN_SYSTEM_PROMPT,
    GherkinGenerationOptions,
    build_gherkin_prompt,
)
from rectospec.prompts.playwright_prompt import (
    PLAYWRIGHT_SYSTEM_PROMPT,
    PlaywrightGenerationOptions,
    build_playwright_prompt,
)
from rectospec.prompts.suggestion_prompt import (
    FOCUS_AREAS,
    FOCUS_INSTRUCTIONS,
    FocusArea,
    SuggestionOptions,
    build_suggestion_prompt,
)

__all__ = [
    "GHERKIN_SYSTEM_PROMPT",
    "GherkinGenerationOptions",
    "build_gherkin_prompt",
    "PLAYWRIGHT_SYSTEM_PROMPT",
    "PlaywrightGenerationOptions",
    "build_playwright_prompt",
    "FOCUS_AREAS",
    "FOCUS_INSTRUCTIONS",
    "FocusArea",
    "SuggestionOptions",
    "build_suggestion_prompt",
]
