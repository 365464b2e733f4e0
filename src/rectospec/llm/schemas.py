"""
Schemas - Structured output definitions for LLM responses.

Uses Pydantic for validation and JSON schema generation.
"""

from typing import Iterator, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GeneratedFile(BaseModel):
    """One generated source file."""
    filename: str
    code: str


class GeneratedCode(BaseModel):
    """
    Playwright test code generated from a Gherkin feature.

    Attributes:
        page_object: Page object class (pages/...)
        test_spec: Test spec implementing the scenarios (specs/...)
        test_data: Test data fixtures (fixtures/...)
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page_object: GeneratedFile
    test_spec: GeneratedFile
    test_data: GeneratedFile

    def files(self) -> Iterator[Tuple[str, GeneratedFile]]:
        """Yield (label, file) in page object, spec, data order."""
        yield "Page Object", self.page_object
        yield "Test Spec", self.test_spec
        yield "Test Data", self.test_data
