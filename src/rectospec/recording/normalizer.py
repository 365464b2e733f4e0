"""
Recording Normalizer - Raw recorder export to generation-ready actions.

The normalizer validates a raw recording and projects every step that carries
behavioral intent into a NormalizedAction. Viewport changes, hovers, double
clicks and key releases are dropped. It is a pure function: no I/O, no
logging side effects on the result, same output for the same input.

Example:
    >>> recording = normalize({
    ...     "title": "T",
    ...     "steps": [
    ...         {"type": "navigate", "url": "https://a.test"},
    ...         {"type": "click", "selectors": [["#btn"]]},
    ...     ],
    ... })
    >>> [s.description for s in recording.steps]
    ['Navigate to page https://a.test', 'Click element #btn']
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError as PydanticValidationError

from rectospec.exceptions import ValidationError
from rectospec.recording.schema import RawRecording, RawStep
from rectospec.utils.file_system import read_json_file

logger = logging.getLogger(__name__)

UNKNOWN_URL = "unknown"


class ActionKind(str, Enum):
    """Kinds of normalized actions."""
    NAVIGATE = "navigate"
    CLICK = "click"
    TYPE = "type"
    CHANGE = "change"
    KEY_DOWN = "keyDown"
    SCROLL = "scroll"
    WAIT = "wait"


@dataclass(frozen=True)
class NormalizedAction:
    """
    One intent-bearing step of a recording.

    Attributes:
        kind: What the user did
        description: Human-readable sentence derived from the other fields
        selector: Most specific selector of the first recorded chain
        value: Entered text, or key name for keyDown
        url: Target URL for navigate
    """
    kind: ActionKind
    description: str
    selector: Optional[str] = None
    value: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary, leaving out unset fields."""
        data: Dict[str, Any] = {"kind": self.kind.value}
        if self.selector is not None:
            data["selector"] = self.selector
        if self.value is not None:
            data["value"] = self.value
        if self.url is not None:
            data["url"] = self.url
        data["description"] = self.description
        return data


@dataclass(frozen=True)
class RecordingMetadata:
    """
    Summary of a normalized recording.

    Attributes:
        url: URL of the first navigate step, or "unknown"
        step_count: Number of normalized actions
    """
    url: str
    step_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "stepCount": self.step_count}


@dataclass(frozen=True)
class NormalizedRecording:
    """A validated recording reduced to its meaningful actions."""
    title: str
    steps: Tuple[NormalizedAction, ...] = field(default_factory=tuple)
    metadata: RecordingMetadata = field(
        default_factory=lambda: RecordingMetadata(url=UNKNOWN_URL, step_count=0)
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "steps": [step.to_dict() for step in self.steps],
            "metadata": self.metadata.to_dict(),
        }


def normalize(raw: Any) -> NormalizedRecording:
    """
    Validate a raw recording and reduce it to normalized actions.

    Args:
        raw: Decoded recording JSON (usually a dict)

    Returns:
        The normalized recording

    Raises:
        ValidationError: If the document does not match the recording
            schema. The message lists every violated field path.
    """
    recording = validate_recording(raw)

    steps = tuple(
        action
        for action in (project_step(step) for step in recording.steps)
        if action is not None
    )

    first_navigate = next(
        (step for step in recording.steps if step.kind == "navigate"), None
    )
    start_url = (first_navigate.url if first_navigate else None) or UNKNOWN_URL

    logger.debug(
        f"Normalized '{recording.title}': {len(recording.steps)} raw steps -> {len(steps)} actions"
    )

    return NormalizedRecording(
        title=recording.title,
        steps=steps,
        metadata=RecordingMetadata(url=start_url, step_count=len(steps)),
    )


def normalize_file(path: Union[str, Path]) -> NormalizedRecording:
    """
    Read a recording JSON file and normalize it.

    Raises:
        FilesystemError: If the file cannot be read or is not JSON
        ValidationError: If the document is not a valid recording
    """
    return normalize(read_json_file(path))


def validate_recording(raw: Any) -> RawRecording:
    """
    Validate a raw recording document.

    Raises:
        ValidationError: With one entry per violated field
    """
    try:
        return RawRecording.model_validate(raw)
    except PydanticValidationError as e:
        errors = format_validation_errors(e)
        raise ValidationError(
            "Invalid Chrome Recorder JSON:\n" + "\n".join(f"  - {err}" for err in errors),
            errors=errors,
        ) from e


def format_validation_errors(error: PydanticValidationError) -> List[str]:
    """Render every pydantic error as "dotted.path: message"."""
    rendered = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail["loc"]) or "<root>"
        rendered.append(f"{path}: {detail['msg']}")
    return rendered


def extract_selector(selectors: Optional[List[List[str]]]) -> Optional[str]:
    """
    Pick the selector used for a step.

    Takes the last (most specific) entry of the first selector chain.
    Other chains are ignored.
    """
    if not selectors:
        return None
    chain = selectors[0]
    if not chain:
        return None
    return chain[-1]


def project_step(step: RawStep) -> Optional[NormalizedAction]:
    """
    Project one raw step into a normalized action.

    Returns:
        The action, or None for steps without behavioral intent
    """
    selector = extract_selector(step.selectors)

    if step.kind == "navigate":
        return NormalizedAction(
            kind=ActionKind.NAVIGATE,
            url=step.url,
            description=f"Navigate to page {step.url}",
        )

    if step.kind == "click":
        return NormalizedAction(
            kind=ActionKind.CLICK,
            selector=selector,
            description=f"Click element {selector}" if selector else "Click",
        )

    if step.kind == "change":
        return NormalizedAction(
            kind=ActionKind.CHANGE,
            selector=selector,
            value=step.value,
            description=(
                f'Enter "{step.value}" into element {selector}'
                if selector
                else f'Enter "{step.value}"'
            ),
        )

    if step.kind == "keyDown":
        return NormalizedAction(
            kind=ActionKind.KEY_DOWN,
            value=step.key,
            description=f'Press key "{step.key}"',
        )

    if step.kind == "scroll":
        return NormalizedAction(
            kind=ActionKind.SCROLL,
            description="Scroll the page",
        )

    if step.kind in ("waitForElement", "waitForExpression"):
        return NormalizedAction(
            kind=ActionKind.WAIT,
            selector=selector,
            description=f"Wait for element {selector}" if selector else "Wait",
        )

    # setViewport, hover, doubleClick, keyUp and anything else
    return None
