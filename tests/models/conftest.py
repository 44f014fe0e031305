import pytest
from sheet_note_labels.models import BoundingBox, NoteLetter, Pitch


@pytest.fixture
def valid_box():
    return BoundingBox(x=1.0, y=2.0, w=3.0, h=4.0)


@pytest.fixture
def valid_pitch():
    return Pitch(letter=NoteLetter.C, octave=4)
