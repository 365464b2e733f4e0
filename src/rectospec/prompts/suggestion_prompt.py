"""
Suggestion Prompt - Ask for an improved version of an existing Gherkin file.
"""

from dataclasses import dataclass
from typing import Dict, Literal, get_args

from rectospec.config.settings import Language
from rectospec.exceptions import ValidationError

FocusArea = Literal["clarity", "completeness", "best-practices", "all"]

FOCUS_AREAS = get_args(FocusArea)

FOCUS_INSTRUCTIONS: Dict[str, str] = {
    "clarity": """Focus on clarity improvements:
- Make scenario names more clear and specific
- Clarify step descriptions
- Eliminate ambiguous expressions
- Use consistent terminology""",
    "completeness": """Focus on completeness improvements:
- Add missing preconditions
- Describe Then (expected results) specifically
- Add edge case scenarios if appropriate
- Use data tables to improve coverage""",
    "best-practices": """Focus on best practice improvements:
- Use Background/Scenario Outline/Examples appropriately
- Follow the one scenario one purpose principle
- Properly distinguish Given/When/Then roles
- Focus on behavior rather than implementation details""",
    "all": """Comprehensive improvements:
- Clarity: Make scenario names and steps understandable
- Completeness: Add missing preconditions and expected results
- Best Practices: Follow Gherkin principles in structure
- Maintainability: Use consistent terminology and structure""",
}

_LANGUAGE_INSTRUCTIONS = {
    "ja": "Write all scenario names and steps in Japanese",
    "en": "Write all scenario names and steps in English",
}


@dataclass(frozen=True)
class SuggestionOptions:
    """
    Attributes:
        current_content: The Gherkin text to improve
        language: Output language ('ja' or 'en')
        focus_area: Which aspect to improve
    """
    current_content: str
    language: Language = "ja"
    focus_area: FocusArea = "all"


def validate_suggestion_options(options: SuggestionOptions) -> None:
    """
    Check suggestion options, collecting every problem.

    Raises:
        ValidationError: If content is empty, or language or focus area
            is unknown
    """
    errors = []
    if not options.current_content or not options.current_content.strip():
        errors.append("current_content: Gherkin content is required")
    if options.language not in _LANGUAGE_INSTRUCTIONS:
        errors.append('language: must be either "ja" or "en"')
    if options.focus_area not in FOCUS_INSTRUCTIONS:
        errors.append(f"focus_area: must be one of {', '.join(FOCUS_AREAS)}")
    if errors:
        raise ValidationError(
            "Invalid suggestion request:\n" + "\n".join(f"  - {e}" for e in errors),
            errors=errors,
        )


def build_suggestion_prompt(options: SuggestionOptions) -> str:
    """
    Build the prompt for Gherkin improvement suggestions.

    Raises:
        ValidationError: If the options are invalid
    """
    validate_suggestion_options(options)

    language = options.language
    return f"""You are an experienced QA engineer and an expert in BDD (Behavior-Driven Development) and Gherkin.

## Task
Analyze the following Gherkin file content and provide improvement suggestions.

## Current Gherkin
```gherkin
{options.current_content}
```

## Focus Area
{FOCUS_INSTRUCTIONS[options.focus_area]}

## Output Requirements
- Output the improved Gherkin code only
- Use `# Language: {language}` at the beginning
- {_LANGUAGE_INSTRUCTIONS[language]}
- No explanation text is needed

## Output Format
```gherkin
# Language: {language}
[Improved Gherkin]
```

Output the complete Gherkin file in a markdown code block."""
