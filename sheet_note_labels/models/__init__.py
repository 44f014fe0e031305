"""Domain models for the sheet-note-labels package.

This module provides a centralized location for all data models used
throughout the note labelling pipeline. It includes:

- Core domain models (Pitch, StaffInfo, DetectedNote and their enums)
- The pipeline result (OMRResult)
- Configuration parameters for each processing stage

All models are built using Pydantic for data validation and are frozen,
so values produced by one stage cannot be mutated by the next.
"""

# Re-export core models
from sheet_note_labels.models.core_models import (
    Accidental,
    BoundingBox,
    Clef,
    DetectedNote,
    NoteLetter,
    Pitch,
    Point,
    StaffInfo,
)

# Re-export pipeline models
from sheet_note_labels.models.pipeline_models import OMRResult

# Re-export setting models
from sheet_note_labels.models.settings_models import (
    PreprocessingParams,
    StaffDetectionParams,
    NoteheadParams,
    RenderParams,
    OMRParameters,
)
