"""
Recording module - Chrome Recorder schema and normalization.

Usage:
    from rectospec.recording import normalize

    recording = normalize(json.loads(text))
    print(recording.metadata.url, recording.metadata.step_count)
"""

from rectospec.recording.schema import (
    RawRecording,
    RawStep,
    StepType,
    STEP_TYPES,
)
from rectospec.recording.normalizer import (
    ActionKind,
    NormalizedAction,
    NormalizedRecording,
    RecordingMetadata,
    UNKNOWN_URL,
    normalize,
    normalize_file,
    extract_selector,
)

__all__ = [
    "RawRecording",
    "RawStep",
    "StepType",
    "STEP_TYPES",
    "ActionKind",
    "NormalizedAction",
    "NormalizedRecording",
    "RecordingMetadata",
    "UNKNOWN_URL",
    "normalize",
    "normalize_file",
    "extract_selector",
]
