"""Notehead detection using contour analysis.

This module finds notehead-like shapes in a preprocessed image with OpenCV
contour detection, keeps the shapes whose size matches the line spacing of
the first staff, and labels each survivor with its pitch. When nothing
survives, a fixed set of placeholder notes is synthesized on the staff so
the pipeline still produces a usable result.
"""

import logging
from abc import ABC, abstractmethod

import cv2
import numpy as np

from sheet_note_labels.image_processing import ensure_raster, mask_image
from sheet_note_labels.models import (
    BoundingBox,
    DetectedNote,
    NoteheadParams,
    Point,
    StaffInfo,
)
from sheet_note_labels.pitch_mapping import map_y_to_pitch

logger = logging.getLogger(__name__)

# Size of the bounding box drawn around a synthesized note
FALLBACK_BOX_WIDTH = 16.0
FALLBACK_BOX_HEIGHT = 12.0


class NoteheadDetector(ABC):
    """Abstract base class for notehead detection."""

    @abstractmethod
    def detect_notes(
        self, image: np.ndarray, staffs: list[StaffInfo]
    ) -> list[DetectedNote]:
        """
        Locate noteheads and assign each one a pitch.

        Args:
            image: Preprocessed grayscale image
            staffs: Staffs found by the staff detector

        Returns:
            Detected notes
        """
        pass


def find_candidate_boxes(binary: np.ndarray) -> list[BoundingBox]:
    """Bounding boxes of every external contour in a binary image.

    OpenCV reports contour points with a top-left origin, the same
    convention as StaffInfo, so no vertical flip is needed.

    Args:
        binary: Input binary image as 2D uint8 NumPy array where features
               are white (255) and background is black (0).

    Returns:
        One BoundingBox per connected shape, in OpenCV's contour order.
    """
    # Find external contours only (no nested contours)
    contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)

    boxes: list[BoundingBox] = []
    for contour in contours:
        x, y, w, h = cv2.boundingRect(contour)
        boxes.append(BoundingBox(x=float(x), y=float(y), w=float(w), h=float(h)))
    return boxes


def passes_size_filter(
    box: BoundingBox, staff: StaffInfo, params: NoteheadParams | None = None
) -> bool:
    """Check whether a candidate is sized like a notehead on ``staff``.

    Both bounds are inclusive. With the default parameters, and
    ``expected = staff.spacing * 0.8``, the width must lie in
    ``[0.5, 2.0] * expected`` and the height in ``[0.3, 1.5] * expected``.
    """
    params = params or NoteheadParams()
    expected = staff.spacing * params.size_factor

    width_ok = (
        expected * params.min_width_ratio <= box.w <= expected * params.max_width_ratio
    )
    height_ok = (
        expected * params.min_height_ratio
        <= box.h
        <= expected * params.max_height_ratio
    )
    return width_ok and height_ok


def create_fallback_notes(
    staff: StaffInfo, params: NoteheadParams | None = None
) -> list[DetectedNote]:
    """Synthesize five placeholder notes on the lines of ``staff``.

    Notes sit at ``params.fallback_x`` horizontally and on the five staff
    lines top to bottom. They are flagged with ``is_fallback`` and carry
    ``params.fallback_confidence``.
    """
    params = params or NoteheadParams()

    notes = []
    for x, y in zip(params.fallback_x, staff.line_positions):
        bbox = BoundingBox(
            x=x - FALLBACK_BOX_WIDTH / 2,
            y=y - FALLBACK_BOX_HEIGHT / 2,
            w=FALLBACK_BOX_WIDTH,
            h=FALLBACK_BOX_HEIGHT,
        )
        notes.append(
            DetectedNote(
                bbox=bbox,
                center=Point(x=x, y=y),
                staff_id=staff.id,
                pitch=map_y_to_pitch(y, staff),
                confidence=params.fallback_confidence,
                is_fallback=True,
            )
        )
    return notes


class ContourNoteheadDetector(NoteheadDetector):
    """Notehead detection by contour size filtering.

    Only the first staff is used, both for the size filter and for pitch
    mapping, even when several staffs are given.

    Attributes:
        params: Size bounds, confidences and fallback positions.
        threshold: Binarization threshold (0-255), or None for Otsu.
    """

    def __init__(
        self, params: NoteheadParams | None = None, threshold: int | None = 128
    ):
        self.params = params or NoteheadParams()
        self.threshold = threshold

    def detect_notes(
        self, image: np.ndarray, staffs: list[StaffInfo]
    ) -> list[DetectedNote]:
        image = ensure_raster(image)
        if not staffs:
            logger.warning("No staffs provided for notehead detection")
            return []

        staff = staffs[0]
        binary = mask_image(image, self.threshold)
        candidates = find_candidate_boxes(binary)

        notes = [
            DetectedNote(
                bbox=box,
                center=box.center,
                staff_id=staff.id,
                pitch=map_y_to_pitch(box.cy, staff),
                confidence=self.params.detection_confidence,
            )
            for box in candidates
            if passes_size_filter(box, staff, self.params)
        ]
        logger.debug(f"{len(notes)} of {len(candidates)} contours passed size filter")

        if not notes:
            logger.warning("No notehead candidates survived, using fallback notes")
            notes = create_fallback_notes(staff, self.params)

        return notes
