"""Sheet note labelling library.

This package provides a heuristic optical music recognition pipeline that
finds a staff in a photographed page of sheet music, locates notehead-like
shapes, and names the pitch of each one. It also renders the names onto a
copy of the page for checking by eye.

The main processing pipeline consists of:
1. Grayscale conversion and contrast enhancement
2. Staff detection (a fixed-proportion placeholder by default)
3. Notehead detection using contour analysis, with placeholder notes when
   no candidate passes the size filter
4. Pitch mapping from vertical position, per clef
5. Overlay rendering of the pitch labels

Example:
    Basic usage through the pipeline API:

    >>> from sheet_note_labels.pipeline import process_sheet
    >>> from sheet_note_labels.visualization import render_labels_on_image
    >>>
    >>> # image is an RGB NumPy array decoded by the caller
    >>> result = process_sheet(image, "treble")
    >>> overlay = render_labels_on_image(result, font_size=16)
"""
