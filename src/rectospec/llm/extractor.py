"""
Response Extractor - Pull the payload out of raw model output.

Models sometimes wrap their answer in a fenced code block and sometimes
do not. Extraction is lenient: without a matching fence the whole trimmed
response is used.
"""

import json
import re
from typing import Any, Optional

_FENCE = "```"


def extract_fenced_block(text: Optional[str], tag: str) -> str:
    """
    Extract the first fenced block tagged ``tag``.

    Args:
        text: Raw model output
        tag: Code fence language tag (e.g. 'gherkin')

    Returns:
        The trimmed block interior, or the trimmed whole text when no such
        block exists. Never raises.

    Example:
        >>> extract_fenced_block("Here:\\n```gherkin\\nFeature: X\\n```", "gherkin")
        'Feature: X'
    """
    if not text:
        return ""
    pattern = re.compile(
        re.escape(_FENCE) + re.escape(tag) + r"[ \t]*\r?\n(.*?)" + re.escape(_FENCE),
        re.DOTALL,
    )
    match = pattern.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def parse_json_payload(text: str) -> Any:
    """
    Decode a JSON value from model output.

    Tries, in order: the whole text, a ```json fence, any fence, and the
    outermost ``{...}`` span.

    Raises:
        ValueError: If no JSON value can be decoded
    """
    stripped = (text or "").strip()
    candidates = [stripped, extract_fenced_block(stripped, "json")]

    untagged = re.search(re.escape(_FENCE) + r"[^\n]*\n(.*?)" + re.escape(_FENCE), stripped, re.DOTALL)
    if untagged:
        candidates.append(untagged.group(1).strip())

    start, end = stripped.find("{"), stripped.rfind("}")
    if 0 <= start < end:
        candidates.append(stripped[start:end + 1])

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise ValueError(f"Response is not valid JSON (first 200 chars: {stripped[:200]!r})")
