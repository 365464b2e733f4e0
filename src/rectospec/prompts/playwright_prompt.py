"""
Playwright Prompt - Turn a Gherkin feature into a test code generation prompt.

The model is asked for a JSON object with three files: a page object, a
test spec and a test data fixture.
"""

from dataclasses import dataclass
from typing import Literal

PLAYWRIGHT_SYSTEM_PROMPT = (
    "You are an expert test automation engineer specializing in Playwright "
    "and the Page Object Model pattern."
)


@dataclass(frozen=True)
class PlaywrightGenerationOptions:
    """
    Attributes:
        typescript: Generate TypeScript (True) or JavaScript (False)
        framework: Target test framework
    """
    typescript: bool = True
    framework: Literal["playwright"] = "playwright"

    @property
    def language_name(self) -> str:
        return "TypeScript" if self.typescript else "JavaScript"

    @property
    def extension(self) -> str:
        return "ts" if self.typescript else "js"


def build_playwright_prompt(gherkin_content: str, options: PlaywrightGenerationOptions) -> str:
    """
    Build the prompt for Playwright code generation.

    Args:
        gherkin_content: The Gherkin feature text
        options: Output language options

    Returns:
        Prompt text
    """
    language = options.language_name
    ext = options.extension
    type_note = " (TypeScript)" if options.typescript else ""

    return f"""You are an expert test automation engineer specializing in Playwright and the Page Object Model pattern.

## Task
Generate {options.framework} test code from the following Gherkin specification.

## Gherkin Specification
```gherkin
{gherkin_content}
```

## Requirements
- Use the Page Object Model (POM) pattern
- Generate {language} code
- Follow Playwright best practices
- Use modern async/await syntax
- Include proper type annotations{type_note}
- Use data-testid selectors when possible, fallback to CSS selectors
- Include proper error handling
- Add helpful comments in English

## Output Structure
Generate THREE separate files:

### 1. Page Object Class (pages/[PageName].{ext})
- Export a class representing the page
- Include locators as class properties
- Include action methods (e.g., login, fillForm)
- Include assertion methods (e.g., expectErrorMessage)

### 2. Test Spec File (specs/[feature-name].spec.{ext})
- Import the Page Object class
- Implement test scenarios from the Gherkin
- Use describe/test blocks
- Follow the Given/When/Then structure in comments
- Include proper setup and teardown

### 3. Test Data Fixtures (fixtures/[feature-name]-data.{ext})
- Export test data objects
- Include valid and invalid test data
- Make it easy to reuse across tests

## Output Format
Output ONLY a JSON object with the following structure (no explanation text):

```json
{{
  "pageObject": {{
    "filename": "pages/LoginPage.{ext}",
    "code": "..."
  }},
  "testSpec": {{
    "filename": "specs/login.spec.{ext}",
    "code": "..."
  }},
  "testData": {{
    "filename": "fixtures/login-data.{ext}",
    "code": "..."
  }}
}}
```

Important: Output only the JSON object above. Do not include any markdown code blocks or explanations."""
