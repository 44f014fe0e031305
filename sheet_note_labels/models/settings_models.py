"""Parameter models for pipeline configuration.

This module defines Pydantic models that encapsulate all configurable
parameters for each stage of the note labelling pipeline. Defaults
reproduce the reference heuristics; every stage can be tuned by passing
a customised model.
"""

from pydantic import BaseModel, Field


class PreprocessingParams(BaseModel):
    """Configuration parameters for grayscale conversion and contrast.

    Attributes:
        contrast: Contrast multiplier applied around mid-grey (default 1.5).
        threshold: Grayscale threshold used when binarizing for contour
            extraction (0-255), or None for Otsu's method.
    """

    contrast: float = Field(1.5, gt=0.0, le=10.0, description="Contrast multiplier")
    threshold: int | None = Field(
        128, ge=0, le=255, description="Binarization threshold, None for Otsu"
    )


class StaffDetectionParams(BaseModel):
    """Configuration parameters for staff detection.

    The proportional detector places a single staff at a fixed fraction of
    the image height. The projection detector looks for rows of ink.

    Attributes:
        top_fraction: Top line position as a fraction of image height.
        spacing_fraction: Line spacing as a fraction of image height.
        min_line_coverage: Fraction of the image width a row of ink must
            cover to count as a staff line (projection detector).
        spacing_tolerance: Allowed relative deviation between the four gaps
            of one staff (projection detector).
    """

    top_fraction: float = Field(
        0.35, ge=0.0, lt=1.0, description="Top line as fraction of height"
    )
    spacing_fraction: float = Field(
        0.06, gt=0.0, le=0.25, description="Line spacing as fraction of height"
    )
    min_line_coverage: float = Field(
        0.5, gt=0.0, le=1.0, description="Ink coverage of a staff line row"
    )
    spacing_tolerance: float = Field(
        0.2, ge=0.0, le=1.0, description="Relative gap tolerance within a staff"
    )


class NoteheadParams(BaseModel):
    """Configuration parameters for notehead filtering and fallback notes.

    Size bounds are expressed relative to ``expected = spacing * size_factor``.

    Attributes:
        size_factor: Expected notehead size as a fraction of line spacing.
        min_width_ratio: Smallest accepted width relative to expected size.
        max_width_ratio: Largest accepted width relative to expected size.
        min_height_ratio: Smallest accepted height relative to expected size.
        max_height_ratio: Largest accepted height relative to expected size.
        detection_confidence: Confidence assigned to filtered candidates.
        fallback_confidence: Confidence assigned to synthesized notes.
        fallback_x: x-coordinates of the synthesized notes.
    """

    size_factor: float = Field(0.8, gt=0.0, description="Expected size / spacing")
    min_width_ratio: float = Field(0.5, ge=0.0, description="Minimum width ratio")
    max_width_ratio: float = Field(2.0, gt=0.0, description="Maximum width ratio")
    min_height_ratio: float = Field(0.3, ge=0.0, description="Minimum height ratio")
    max_height_ratio: float = Field(1.5, gt=0.0, description="Maximum height ratio")
    detection_confidence: float = Field(
        0.7, ge=0.0, le=1.0, description="Confidence of filtered candidates"
    )
    fallback_confidence: float = Field(
        0.8, ge=0.0, le=1.0, description="Confidence of synthesized notes"
    )
    fallback_x: list[float] = Field(
        default_factory=lambda: [100.0, 150.0, 200.0, 250.0, 300.0],
        min_length=5,
        max_length=5,
        description="x-coordinates of synthesized notes",
    )


class RenderParams(BaseModel):
    """Configuration parameters for the label overlay.

    Attributes:
        font_size: Label text height in points (default 16).
        label_spacing: Horizontal distance between labels in pixels.
        label_band: Vertical position of the label strip as a fraction of
            image height.
    """

    font_size: float = Field(16.0, gt=0.0, le=200.0, description="Label font size")
    label_spacing: int = Field(60, ge=1, description="Horizontal label pitch")
    label_band: float = Field(
        0.75, ge=0.0, le=1.0, description="Label strip as fraction of height"
    )


class OMRParameters(BaseModel):
    """Complete configuration for the whole pipeline.

    Attributes:
        preprocessing: Parameters for grayscale and contrast.
        staff: Parameters for staff detection.
        notehead: Parameters for notehead detection.
        render: Parameters for the overlay renderer.
    """

    preprocessing: PreprocessingParams = Field(
        default_factory=PreprocessingParams, description="Preprocessing parameters"
    )
    staff: StaffDetectionParams = Field(
        default_factory=StaffDetectionParams, description="Staff detection parameters"
    )
    notehead: NoteheadParams = Field(
        default_factory=NoteheadParams, description="Notehead detection parameters"
    )
    render: RenderParams = Field(
        default_factory=RenderParams, description="Overlay rendering parameters"
    )
