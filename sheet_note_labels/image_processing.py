"""Image preprocessing functions for the note labelling pipeline.

This module converts input photographs of sheet music into a high-contrast
grayscale image, and binarizes that image so dark printed shapes (staff
lines, noteheads, stems) become foreground pixels for contour analysis.
"""

import logging

import cv2
import numpy as np

from sheet_note_labels.exceptions import ImageProcessingFailed

logger = logging.getLogger(__name__)


def ensure_raster(image) -> np.ndarray:
    """Check that ``image`` holds usable raster data.

    Args:
        image: Candidate image, expected to be a 2-D grayscale or a 3-D
            RGB/RGBA NumPy array.

    Returns:
        The same array, unchanged.

    Raises:
        ImageProcessingFailed: If the image is missing, empty or has a shape
            that cannot be interpreted as an image.
    """
    if image is None:
        raise ImageProcessingFailed("No image provided")
    if not isinstance(image, np.ndarray):
        raise ImageProcessingFailed(
            f"Expected a NumPy array, got {type(image).__name__}"
        )
    if image.size == 0 or image.ndim not in (2, 3):
        raise ImageProcessingFailed(f"Unsupported image shape {image.shape}")
    if image.ndim == 3 and image.shape[2] not in (1, 3, 4):
        raise ImageProcessingFailed(f"Unsupported channel count {image.shape[2]}")
    return image


def to_uint8(image: np.ndarray) -> np.ndarray:
    """Bring an image of any supported dtype into the 0-255 uint8 range.

    Floating-point images with values in [0, 1] and bool masks are scaled
    up, uint16 images are scaled down, and other integer or float images
    are clipped. uint8 input is returned as is.

    Raises:
        ImageProcessingFailed: If the dtype is not numeric.
    """
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.bool_:
        return image.astype(np.uint8) * 255
    if image.dtype == np.uint16:
        return (image // 257).astype(np.uint8)
    if np.issubdtype(image.dtype, np.floating):
        if np.nanmin(image) >= 0.0 and np.nanmax(image) <= 1.0:
            image = image * 255.0
        return np.clip(np.nan_to_num(image), 0, 255).round().astype(np.uint8)
    if np.issubdtype(image.dtype, np.integer):
        return np.clip(image, 0, 255).astype(np.uint8)
    raise ImageProcessingFailed(f"Unsupported image dtype {image.dtype}")


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Fully desaturate an RGB, RGBA or grayscale image to a uint8 2-D array."""
    image = to_uint8(ensure_raster(image))

    if image.ndim == 2:
        return image.copy()
    channels = image.shape[2]
    if channels == 1:
        return image[:, :, 0].copy()
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)


def preprocess_image(image: np.ndarray, contrast: float = 1.5) -> np.ndarray:
    """Convert an image to grayscale and stretch its contrast.

    Contrast is scaled around mid-grey so that paper gets lighter and ink
    gets darker: ``out = (gray - 127.5) * contrast + 127.5``, saturated to
    the 0-255 range.

    Args:
        image: Input RGB, RGBA or grayscale image as a NumPy array.
        contrast: Contrast multiplier (default 1.5).

    Returns:
        New 2-D uint8 NumPy array; the input is left untouched.

    Raises:
        ImageProcessingFailed: If the input has no usable raster data.
    """
    gray = to_grayscale(image)

    # addWeighted saturates to uint8 instead of wrapping
    enhanced = cv2.addWeighted(
        gray, contrast, np.zeros_like(gray), 0.0, 127.5 * (1.0 - contrast)
    )

    logger.debug(f"Preprocessed image {gray.shape} with contrast {contrast}")
    return enhanced


def mask_image(gray: np.ndarray, threshold_value: int | None = 128) -> np.ndarray:
    """Convert a grayscale image to a binary mask using inverted thresholding.

    Dark regions (printed notation) become white pixels and light regions
    (paper) become black pixels, which prepares the image for contour-based
    notehead detection and line projection.

    Args:
        gray: Grayscale image as a 2-D uint8 NumPy array.
        threshold_value: Grayscale threshold value (0-255). Pixels at or
            below it become white in the output. None selects Otsu's method.

    Returns:
        Binary image as a 2-D uint8 NumPy array where detected features
        are white (255) and background is black (0).
    """
    gray = to_grayscale(gray)

    if threshold_value is None:
        _, binary = cv2.threshold(
            gray, 0, 255, cv2.THRESH_BINARY_INV + cv2.THRESH_OTSU
        )
    else:
        _, binary = cv2.threshold(gray, threshold_value, 255, cv2.THRESH_BINARY_INV)

    return binary
