import numpy as np
import cv2
import pytest

from sheet_note_labels.models import Clef, StaffInfo


@pytest.fixture
def small_rgb_image():
    # 2×2 RGB image: red, green, blue, black
    img = np.array(
        [[[255, 0, 0], [0, 255, 0]], [[0, 0, 255], [0, 0, 0]]], dtype=np.uint8
    )
    return img


@pytest.fixture
def white_page():
    # 400×500 blank RGB page; the default staff sits at top_y=140, spacing=24
    return np.full((400, 500, 3), 255, dtype=np.uint8)


@pytest.fixture
def notehead_page(white_page):
    # One filled notehead 21×15 px centred at (200, 188): position 4 on the
    # default staff
    page = white_page.copy()
    cv2.ellipse(page, (200, 188), (10, 7), 0, 0, 360, (0, 0, 0), -1)
    return page


@pytest.fixture
def ruled_page(white_page):
    # Two staffs of one-pixel lines: tops at 100 and 300, spacing 20
    page = white_page.copy()
    for top in (100, 300):
        for i in range(5):
            y = top + 20 * i
            cv2.line(page, (0, y), (499, y), (0, 0, 0), 1)
    return page


@pytest.fixture
def simple_binary_blob():
    # 100×100 binary mask with one square blob at (10,10)-(30,30)
    mask = np.zeros((100, 100), dtype=np.uint8)
    cv2.rectangle(mask, (10, 10), (30, 30), 255, -1)
    return mask


@pytest.fixture
def treble_staff():
    return StaffInfo.from_top(id=0, top_y=100.0, spacing=20.0, clef=Clef.TREBLE)


@pytest.fixture
def bass_staff():
    return StaffInfo.from_top(id=0, top_y=100.0, spacing=20.0, clef=Clef.BASS)
