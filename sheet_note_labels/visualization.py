"""
Visualization functions for the note labelling pipeline.

This module draws pipeline results onto copies of the original image for
human verification. The label overlay favours readability over spatial
accuracy: labels are laid out in a horizontal strip, while a small marker
shows where each note was actually found.
"""

import logging

import cv2
import numpy as np

from sheet_note_labels.exceptions import ImageProcessingFailed
from sheet_note_labels.image_processing import ensure_raster, to_uint8
from sheet_note_labels.models import OMRResult, RenderParams
from sheet_note_labels.pitch_mapping import format_note_name

logger = logging.getLogger(__name__)

# RGB colours
RED = (255, 0, 0)
GREEN = (0, 200, 0)
BLUE = (0, 0, 255)
YELLOW = (255, 255, 0)
WHITE = (255, 255, 255)
ORANGE = (255, 140, 0)

PLACEHOLDER_LABELS = ["F", "E", "D", "B", "G"]

# Hershey fonts only cover ASCII
_ASCII_ACCIDENTALS = {"♭": "b", "♮": "n"}

FONT = cv2.FONT_HERSHEY_SIMPLEX
# Pixel height of FONT capitals at fontScale 1.0
_FONT_BASE_HEIGHT = 22.0


def _to_rgb_canvas(image: np.ndarray | None) -> np.ndarray:
    """Return an RGB uint8 copy of ``image`` suitable for drawing on."""
    if image is None:
        raise ImageProcessingFailed("Result holds no original image")
    image = to_uint8(ensure_raster(image))

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image.copy()


def ascii_label(label: str) -> str:
    """Replace accidental signs the label font cannot draw."""
    for symbol, replacement in _ASCII_ACCIDENTALS.items():
        label = label.replace(symbol, replacement)
    return label


def _draw_centered_text(
    canvas: np.ndarray,
    text: str,
    center: tuple[int, int],
    font_scale: float,
    color: tuple[int, int, int],
    thickness: int = 2,
    outline: tuple[int, int, int] | None = None,
) -> None:
    """Draw ``text`` centred on ``center``, optionally with an outline."""
    (text_w, text_h), _ = cv2.getTextSize(text, FONT, font_scale, thickness)
    origin = (int(center[0] - text_w / 2), int(center[1] + text_h / 2))
    if outline is not None:
        cv2.putText(
            canvas, text, origin, FONT, font_scale, outline, thickness + 3, cv2.LINE_AA
        )
    cv2.putText(canvas, text, origin, FONT, font_scale, color, thickness, cv2.LINE_AA)


def _draw_status_badge(canvas: np.ndarray, note_count: int) -> None:
    """Draw the note count badge in the top-right corner."""
    width = canvas.shape[1]
    cv2.rectangle(canvas, (width - 60, 10), (width - 10, 40), GREEN, -1)
    _draw_centered_text(canvas, f"{note_count} notes", (width - 35, 25), 0.35, WHITE, 1)


def render_labels_on_image(
    result: OMRResult,
    font_size: float | None = None,
    params: RenderParams | None = None,
) -> np.ndarray:
    """Draw detected note labels onto a copy of the original image.

    Every note gets a small blue marker at its true center and a large
    yellow label in a strip at ``params.label_band`` of the image height,
    spaced ``params.label_spacing`` pixels apart. The octave only appears in
    a label for octaves <= 2 or >= 6. When the result has no notes, five
    placeholder labels are drawn instead so the output is never blank. A
    badge in the top-right corner shows the note count.

    Args:
        result: Pipeline result holding the original image and notes.
        font_size: Label text height in points; overrides
            ``params.font_size`` when given.
        params: Layout parameters (default RenderParams()).

    Returns:
        RGB image as H×W×3 uint8 array; the original image is not modified.

    Raises:
        ImageProcessingFailed: If the result's original image is missing or
            unusable.
    """
    params = params or RenderParams()
    font_size = font_size if font_size is not None else params.font_size
    font_scale = font_size / _FONT_BASE_HEIGHT

    canvas = _to_rgb_canvas(result.original_image)
    height = canvas.shape[0]

    _draw_status_badge(canvas, result.note_count)

    if not result.detected_notes:
        logger.debug("No notes to render, drawing placeholder labels")
        y_pos = int(height * 0.65)
        for index, letter in enumerate(PLACEHOLDER_LABELS):
            x = 60 + index * params.label_spacing
            cv2.circle(canvas, (x, y_pos - 50), 8, BLUE, -1)
            cv2.ellipse(canvas, (x, y_pos), (12, 10), 0, 0, 360, YELLOW, -1)
            _draw_centered_text(
                canvas, letter, (x, y_pos), font_scale, RED, outline=WHITE
            )
        return canvas

    y_pos = int(height * params.label_band)
    for index, note in enumerate(result.detected_notes):
        x = 50 + index * params.label_spacing

        # True position of the note
        center = (int(round(note.center.x)), int(round(note.center.y)))
        cv2.circle(canvas, center, 3, BLUE, -1)

        cv2.ellipse(canvas, (x, y_pos), (20, 15), 0, 0, 360, YELLOW, -1)
        _draw_centered_text(
            canvas,
            ascii_label(format_note_name(note.pitch)),
            (x, y_pos),
            font_scale,
            RED,
            outline=WHITE,
        )

    return canvas


def create_staff_overlay(result: OMRResult) -> np.ndarray:
    """Draw staff lines and note bounding boxes onto a copy of the image.

    Renders the five lines of every staff as red horizontal lines, boxes
    around detected notes in green and around fallback notes in orange.
    Used to check detector geometry rather than for end users.

    Args:
        result: Pipeline result holding the original image, staffs and notes.

    Returns:
        RGB image as H×W×3 uint8 array.

    Raises:
        ImageProcessingFailed: If the result's original image is missing.
    """
    canvas = _to_rgb_canvas(result.original_image)
    width = canvas.shape[1]

    for staff in result.staffs:
        for line_y in staff.line_positions:
            y = int(round(line_y))
            cv2.line(canvas, (0, y), (width, y), RED, 1)

    for note in result.detected_notes:
        box = note.bbox
        color = ORANGE if note.is_fallback else GREEN
        cv2.rectangle(
            canvas,
            (int(box.x), int(box.y)),
            (int(box.x + box.w), int(box.y + box.h)),
            color,
            2,
        )

    return canvas
