"""
Recording Schema - Shape of a Chrome DevTools Recorder export.

Pure data: these models only describe and validate what a raw recording
looks like. Projection into generation-ready actions lives in
``rectospec.recording.normalizer``.

Example:
    >>> recording = RawRecording.model_validate({
    ...     "title": "Login",
    ...     "steps": [{"type": "navigate", "url": "https://example.com"}],
    ... })
    >>> recording.steps[0].kind
    'navigate'
"""

from typing import List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat
from pydantic.alias_generators import to_camel


StepType = Literal[
    "navigate",
    "click",
    "change",
    "keyDown",
    "keyUp",
    "scroll",
    "doubleClick",
    "hover",
    "setViewport",
    "waitForElement",
    "waitForExpression",
]

STEP_TYPES = get_args(StepType)


class _RecorderModel(BaseModel):
    # Numbers and flags are strict ("1" is not a number). Unknown keys are dropped.
    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class AssertedEvent(_RecorderModel):
    """An event the recorder expects a step to trigger."""
    type: str
    title: Optional[str] = None
    url: Optional[str] = None


class RawStep(_RecorderModel):
    """
    One recorded browser event.

    Attributes:
        kind: Step type (JSON key ``type``; ``kind`` is accepted too)
        url: Target URL for navigate steps
        selectors: Selector chains, each ordered most-specific last
        value: Entered value for change steps
        key: Key name for keyDown/keyUp steps
    """
    kind: StepType = Field(alias="type")
    url: Optional[str] = None
    selectors: Optional[List[List[str]]] = None
    value: Optional[str] = None
    key: Optional[str] = None
    target: Optional[str] = None
    frame: Optional[List[StrictFloat]] = None
    asserted_events: Optional[List[AssertedEvent]] = None
    operator: Optional[str] = None
    count: Optional[StrictFloat] = None
    expression: Optional[str] = None

    # Geometry
    offset_x: Optional[StrictFloat] = None
    offset_y: Optional[StrictFloat] = None
    x: Optional[StrictFloat] = None
    y: Optional[StrictFloat] = None
    width: Optional[StrictFloat] = None
    height: Optional[StrictFloat] = None
    device_scale_factor: Optional[StrictFloat] = None

    # Viewport flags
    is_mobile: Optional[StrictBool] = None
    has_touch: Optional[StrictBool] = None
    is_landscape: Optional[StrictBool] = None


class RawRecording(_RecorderModel):
    """A full recording: title plus steps in the order they were recorded."""
    title: str
    steps: List[RawStep]
    timeout: Optional[StrictFloat] = None
