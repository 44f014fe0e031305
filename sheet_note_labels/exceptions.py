"""Exceptions raised by the note labelling pipeline.

Every failure a caller is expected to handle derives from OMRError and
carries a short human-readable ``message`` suitable for display.
"""


class OMRError(Exception):
    """Base exception for pipeline processing errors."""

    message = "Optical music recognition failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail
        super().__init__(detail or self.message)


class ImageProcessingFailed(OMRError):
    """Exception raised when the image has no usable raster data."""

    message = "Failed to process the image"


class NoStaffDetected(OMRError):
    """Exception raised when staff detection returns no staff."""

    message = "No musical staff detected in the image"


class InsufficientContrast(OMRError):
    """Exception reserved for images too flat to analyse.

    Not raised by the current heuristics.
    """

    message = "Image contrast is too low for reliable detection"
