"""Models for representing the output of a pipeline run.

The OMRResult model is produced exactly once per run and handed to the
renderer and any reporting code. It holds plain values plus a reference
to the untouched original image.
"""

import numpy as np
from pydantic import BaseModel, Field

from sheet_note_labels.models.core_models import DetectedNote, StaffInfo


class OMRResult(BaseModel):
    """Result of one optical music recognition run.

    Attributes:
        detected_notes: Notes found on the first staff (or fallback notes).
        staffs: Staffs returned by the staff detector.
        processing_time: Wall-clock duration of the run in seconds.
        original_image: The image the run was started with.
    """

    detected_notes: tuple[DetectedNote, ...] = Field(
        default_factory=tuple, description="Detected notes with pitches"
    )
    staffs: tuple[StaffInfo, ...] = Field(
        default_factory=tuple, description="Detected staffs"
    )
    processing_time: float = Field(0.0, ge=0.0, description="Elapsed seconds")
    original_image: np.ndarray | None = Field(
        None, description="Original input image"
    )

    class Config:
        arbitrary_types_allowed = True
        frozen = True

    @property
    def note_count(self) -> int:
        return len(self.detected_notes)

    @property
    def used_fallback(self) -> bool:
        """Whether the notes are synthesized placeholders, not detections."""
        return any(note.is_fallback for note in self.detected_notes)
