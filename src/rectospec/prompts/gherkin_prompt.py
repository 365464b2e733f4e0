"""
Gherkin Prompt - Turn a normalized recording into a Gherkin generation prompt.

The prompt is written in the target language (Japanese or English). The
edge-case instructions are only present when edge cases are requested.
"""

from dataclasses import dataclass

from rectospec.config.settings import Language
from rectospec.exceptions import ValidationError
from rectospec.recording.normalizer import NormalizedRecording

GHERKIN_SYSTEM_PROMPT = "You are a QA engineer expert in BDD and Gherkin."


@dataclass(frozen=True)
class GherkinGenerationOptions:
    """
    Attributes:
        language: Output language ('ja' or 'en')
        include_edge_cases: Ask for 2-3 extra edge-case scenarios
    """
    language: Language = "ja"
    include_edge_cases: bool = True


# =============================================================================
# JAPANESE
# =============================================================================

_JA_TEMPLATE = """あなたは経験豊富なQAエンジニアで、BDD（振る舞い駆動開発）とGherkinのエキスパートです。

## タスク
以下のブラウザ操作記録から、Gherkin形式のテストケースを生成してください。

## 操作記録
タイトル: {title}
開始URL: {url}

操作ステップ:
{steps}

## 要件
- Feature, Scenario, Given/When/Then の構造で出力してください
- 操作の意図を推測して、自然な日本語で記述してください
- Background を使って共通の前提条件をまとめてください
- Then（期待結果）は具体的に記述してください。ただし、操作記録からは明確にわからない場合は [TODO: 期待結果を追加] としてプレースホルダーを配置してください
- 複数のシナリオに分割できる場合は、適切に分割してください
{edge_case_requirement}
## 出力形式
以下の形式でGherkinを出力してください:

```gherkin
# Language: ja
Feature: [機能の説明]

  Background:
    Given [共通の前提条件]

  Scenario: [正常系シナリオの名前]
    Given [前提条件]
    When [操作]
    And [追加の操作]
    Then [期待結果]
{edge_case_example}```

出力はGherkinコードのみを含めてください。説明文は不要です。"""

_JA_EDGE_CASE_REQUIREMENT = "- 正常系のシナリオに加えて、エッジケース（異常系）のシナリオも2-3個提案してください\n"

_JA_EDGE_CASE_EXAMPLE = """
  Scenario: [エッジケースシナリオの名前]
    Given [前提条件]
    When [操作]
    Then [期待結果]
"""


# =============================================================================
# ENGLISH
# =============================================================================

_EN_TEMPLATE = """You are an experienced QA engineer and an expert in BDD (Behavior-Driven Development) and Gherkin.

## Task
Generate a Gherkin test case from the following browser operation recording.

## Operation Recording
Title: {title}
Start URL: {url}

Operation Steps:
{steps}

## Requirements
- Output in Feature, Scenario, Given/When/Then structure
- Infer the intent of operations and describe in natural English
- Use Background to group common preconditions
- Describe Then (expected results) specifically. If unclear from the recording, use [TODO: Add expected result] as a placeholder
- Split into multiple scenarios if appropriate
{edge_case_requirement}
## Output Format
Output Gherkin in the following format:

```gherkin
# Language: en
Feature: [Feature description]

  Background:
    Given [Common preconditions]

  Scenario: [Happy path scenario name]
    Given [Precondition]
    When [Action]
    And [Additional action]
    Then [Expected result]
{edge_case_example}```

Output only the Gherkin code. No explanation text is needed."""

_EN_EDGE_CASE_REQUIREMENT = "- In addition to happy path scenarios, suggest 2-3 edge case scenarios\n"

_EN_EDGE_CASE_EXAMPLE = """
  Scenario: [Edge case scenario name]
    Given [Precondition]
    When [Action]
    Then [Expected result]
"""

_TEMPLATES = {
    "ja": (_JA_TEMPLATE, _JA_EDGE_CASE_REQUIREMENT, _JA_EDGE_CASE_EXAMPLE),
    "en": (_EN_TEMPLATE, _EN_EDGE_CASE_REQUIREMENT, _EN_EDGE_CASE_EXAMPLE),
}


def format_steps(recording: NormalizedRecording) -> str:
    """Numbered list of step descriptions, one per line."""
    return "\n".join(
        f"{index}. {step.description}"
        for index, step in enumerate(recording.steps, start=1)
    )


def build_gherkin_prompt(
    recording: NormalizedRecording,
    options: GherkinGenerationOptions,
) -> str:
    """
    Build the prompt for Gherkin generation.

    Args:
        recording: Normalized recording
        options: Language and edge-case options

    Returns:
        Prompt text

    Raises:
        ValidationError: If the language is not supported
    """
    if options.language not in _TEMPLATES:
        raise ValidationError(
            f"Unsupported language: '{options.language}'. Use 'ja' or 'en'",
            errors=[f"language: must be one of {', '.join(_TEMPLATES)}"],
        )

    template, requirement, example = _TEMPLATES[options.language]
    return template.format(
        title=recording.title,
        url=recording.metadata.url,
        steps=format_steps(recording),
        edge_case_requirement=requirement if options.include_edge_cases else "",
        edge_case_example=example if options.include_edge_cases else "",
    )
