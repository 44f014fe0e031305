"""
Pipeline orchestration for sheet music note labelling.

This module sequences the processing stages (preprocessing, staff detection
and notehead detection) and packages their output into an OMRResult,
separating orchestration from the detectors and the renderer.
"""

import logging
import time

import numpy as np

from sheet_note_labels.exceptions import NoStaffDetected
from sheet_note_labels.image_processing import preprocess_image
from sheet_note_labels.models import Clef, OMRParameters, OMRResult
from sheet_note_labels.note_detection import ContourNoteheadDetector, NoteheadDetector
from sheet_note_labels.staff import ProportionalStaffDetector, StaffDetector


logger = logging.getLogger(__name__)


class OMRPipeline:
    """Runs preprocessing, staff detection and notehead detection in order.

    Each stage either succeeds or raises; there are no partial results and
    no retries. Detectors can be swapped for other implementations of
    StaffDetector and NoteheadDetector without touching the pipeline.

    Attributes:
        params: Configuration for every stage.
        staff_detector: Detector producing the staff list.
        notehead_detector: Detector producing the note list.
    """

    def __init__(
        self,
        staff_detector: StaffDetector | None = None,
        notehead_detector: NoteheadDetector | None = None,
        params: OMRParameters | None = None,
    ):
        self.params = params or OMRParameters()
        self.staff_detector = staff_detector or ProportionalStaffDetector(
            self.params.staff
        )
        self.notehead_detector = notehead_detector or ContourNoteheadDetector(
            self.params.notehead, threshold=self.params.preprocessing.threshold
        )

    def run(self, image: np.ndarray, clef: Clef | str) -> OMRResult:
        """Detect and label the notes of one image.

        Args:
            image: RGB, RGBA or grayscale image as a NumPy array.
            clef: Clef of the staff, as a Clef or its value ("treble", "bass").

        Returns:
            OMRResult holding the notes, staffs, elapsed time and the
            original image.

        Raises:
            ImageProcessingFailed: If the image has no usable raster data.
            NoStaffDetected: If the staff detector finds no staff; notehead
                detection is skipped.
            ValueError: If ``clef`` is not a known clef.
        """
        clef = Clef(clef)
        start = time.perf_counter()

        # Step 1: Image preprocessing
        processed = preprocess_image(image, self.params.preprocessing.contrast)

        # Step 2: Staff detection
        staffs = self.staff_detector.detect_staffs(processed, clef)
        if not staffs:
            raise NoStaffDetected()

        # Step 3: Notehead detection
        notes = self.notehead_detector.detect_notes(processed, staffs)

        elapsed = time.perf_counter() - start
        logger.info(
            f"Detected {len(notes)} notes on {len(staffs)} staffs in {elapsed:.3f}s"
        )

        return OMRResult(
            detected_notes=notes,
            staffs=staffs,
            processing_time=elapsed,
            original_image=image,
        )


def process_sheet(
    image: np.ndarray, clef: Clef | str, params: OMRParameters | None = None
) -> OMRResult:
    """Run the default pipeline on one image.

    Args:
        image: Input image as a NumPy array.
        clef: Clef of the staff.
        params: Optional configuration; defaults reproduce the reference
            heuristics.

    Returns:
        OMRResult for the image.
    """
    return OMRPipeline(params=params).run(image, clef)
