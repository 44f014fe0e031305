"""Staff detection for the note labelling pipeline.

Two detectors share the StaffDetector interface so the pipeline does not
depend on how staffs are found:

- ProportionalStaffDetector places a single staff at a fixed proportion of
  the image height. This is the default and reproduces the reference
  heuristic: it never inspects the pixels beyond checking they exist.
- ProjectionStaffDetector finds real staff lines from the horizontal
  projection profile of the binarized image.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from sheet_note_labels.image_processing import ensure_raster, mask_image
from sheet_note_labels.models import Clef, StaffDetectionParams, StaffInfo

logger = logging.getLogger(__name__)

LINES_PER_STAFF = 5


class StaffDetector(ABC):
    """Abstract base class for staff detection."""

    @abstractmethod
    def detect_staffs(self, image: np.ndarray, clef: Clef) -> list[StaffInfo]:
        """
        Find the staffs in a preprocessed image.

        Args:
            image: Preprocessed grayscale image
            clef: Clef assigned to every detected staff

        Returns:
            Staffs ordered top to bottom, empty if none were found
        """
        pass


class ProportionalStaffDetector(StaffDetector):
    """Single staff placed at a fixed fraction of the image height."""

    def __init__(self, params: StaffDetectionParams | None = None):
        self.params = params or StaffDetectionParams()

    def detect_staffs(self, image: np.ndarray, clef: Clef) -> list[StaffInfo]:
        image = ensure_raster(image)
        height = float(image.shape[0])

        staff = StaffInfo.from_top(
            id=0,
            top_y=height * self.params.top_fraction,
            spacing=height * self.params.spacing_fraction,
            clef=clef,
        )
        logger.debug(
            f"Placed staff at top_y={staff.top_y:.1f}, spacing={staff.spacing:.1f}"
        )
        return [staff]


def horizontal_projection(binary: np.ndarray) -> np.ndarray:
    """Count foreground pixels in each row of a binary image.

    Staff lines span most of the page width, so their rows have high counts.
    Noteheads, text and whitespace produce much lower counts.
    """
    return np.count_nonzero(binary, axis=1)


def find_line_rows(projection: np.ndarray, width: int, coverage: float) -> list[float]:
    """Collapse runs of high-coverage rows into single line positions.

    Args:
        projection: 1D array of foreground pixel counts per row.
        width: Image width in pixels.
        coverage: Fraction of ``width`` a row must cover to be a line.

    Returns:
        Center y of every run of consecutive line rows, top to bottom.
    """
    rows = np.flatnonzero(projection >= coverage * width)
    if rows.size == 0:
        return []

    # Thick lines span several consecutive rows
    breaks = np.flatnonzero(np.diff(rows) > 1) + 1
    return [float(np.mean(run)) for run in np.split(rows, breaks)]


def group_lines_into_staffs(
    lines: list[float], clef: Clef, tolerance: float
) -> list[StaffInfo]:
    """Group line positions into five-line staffs with regular spacing.

    Walks the lines top to bottom. Five consecutive lines whose four gaps all
    lie within ``tolerance`` of their mean form a staff; otherwise the
    window slides down by one line.

    Args:
        lines: Line y-positions sorted top to bottom.
        clef: Clef assigned to every staff.
        tolerance: Allowed relative deviation of a gap from the mean gap.

    Returns:
        Staffs with ids 0, 1, ... in top-to-bottom order.
    """
    staffs: list[StaffInfo] = []
    i = 0
    while i + LINES_PER_STAFF <= len(lines):
        window = np.asarray(lines[i : i + LINES_PER_STAFF])
        gaps = np.diff(window)
        spacing = float(np.mean(gaps))
        if spacing > 0 and np.all(np.abs(gaps - spacing) <= tolerance * spacing):
            staffs.append(
                StaffInfo.from_top(
                    id=len(staffs), top_y=float(window[0]), spacing=spacing, clef=clef
                )
            )
            i += LINES_PER_STAFF
        else:
            i += 1
    return staffs


class ProjectionStaffDetector(StaffDetector):
    """Staff detection from the horizontal projection of dark pixels."""

    def __init__(
        self,
        params: StaffDetectionParams | None = None,
        threshold: int | None = 128,
    ):
        self.params = params or StaffDetectionParams()
        self.threshold = threshold

    def detect_staffs(self, image: np.ndarray, clef: Clef) -> list[StaffInfo]:
        image = ensure_raster(image)
        binary = mask_image(image, self.threshold)

        lines = find_line_rows(
            horizontal_projection(binary),
            binary.shape[1],
            self.params.min_line_coverage,
        )
        staffs = group_lines_into_staffs(lines, clef, self.params.spacing_tolerance)
        logger.debug(f"Found {len(lines)} line rows forming {len(staffs)} staffs")
        return staffs
