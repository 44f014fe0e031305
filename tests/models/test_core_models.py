import pytest
from pydantic import ValidationError
from sheet_note_labels.models import (
    Accidental,
    BoundingBox,
    Clef,
    DetectedNote,
    NoteLetter,
    Pitch,
    Point,
    StaffInfo,
)


def test_semitone_offsets():
    offsets = {letter.value: letter.semitone_offset for letter in NoteLetter}
    assert offsets == {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


def test_clef_reference_pitches():
    assert Clef.TREBLE.reference_pitch == Pitch(letter=NoteLetter.G, octave=4)
    assert Clef.BASS.reference_pitch == Pitch(letter=NoteLetter.F, octave=3)


def test_pitch_name_and_midi(valid_pitch):
    assert valid_pitch.name == "C4"
    assert valid_pitch.midi_number == 60
    sharp = Pitch(letter=NoteLetter.F, octave=4, accidental=Accidental.SHARP)
    assert sharp.name == "F#4"
    assert sharp.midi_number == 66
    flat = Pitch(letter=NoteLetter.B, octave=3, accidental=Accidental.FLAT)
    assert flat.midi_number == 58


def test_pitch_is_immutable(valid_pitch):
    with pytest.raises(ValidationError):
        valid_pitch.octave = 5


def test_box_properties(valid_box):
    assert valid_box.cx == pytest.approx(1 + 3 / 2)
    assert valid_box.cy == pytest.approx(2.0 + 4.0 / 2)
    assert valid_box.center == Point(x=2.5, y=4.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"x": 0.0, "y": 0.0, "w": -1.0, "h": 1.0},
        {"x": 0.0, "y": 0.0, "w": 1.0, "h": -0.1},
    ],
)
def test_box_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        BoundingBox(**kwargs)


def test_staff_from_top():
    staff = StaffInfo.from_top(id=0, top_y=100.0, spacing=20.0, clef="treble")
    assert staff.bottom_y == pytest.approx(180.0)
    assert staff.clef is Clef.TREBLE
    assert staff.line_positions == [100.0, 120.0, 140.0, 160.0, 180.0]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"id": 0, "top_y": 100.0, "bottom_y": 100.0, "spacing": 0.0, "clef": "treble"},
        {"id": 0, "top_y": 100.0, "bottom_y": 20.0, "spacing": -20.0, "clef": "bass"},
        {"id": 0, "top_y": 100.0, "bottom_y": 170.0, "spacing": 20.0, "clef": "bass"},
        {"id": -1, "top_y": 100.0, "bottom_y": 180.0, "spacing": 20.0, "clef": "bass"},
        {"id": 0, "top_y": 100.0, "bottom_y": 180.0, "spacing": 20.0, "clef": "alto"},
    ],
)
def test_staff_validation_raises(kwargs):
    with pytest.raises(ValidationError):
        StaffInfo(**kwargs)


@pytest.mark.parametrize("confidence", [-0.1, 1.1])
def test_detected_note_confidence_bounds(valid_box, valid_pitch, confidence):
    with pytest.raises(ValidationError):
        DetectedNote(
            bbox=valid_box,
            center=valid_box.center,
            staff_id=0,
            pitch=valid_pitch,
            confidence=confidence,
        )


def test_detected_note_defaults(valid_box, valid_pitch):
    note = DetectedNote(
        bbox=valid_box,
        center=valid_box.center,
        staff_id=0,
        pitch=valid_pitch,
        confidence=0.7,
    )
    assert not note.is_fallback
