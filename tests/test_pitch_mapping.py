import pytest

from sheet_note_labels.models import Accidental, Clef, NoteLetter, Pitch
from sheet_note_labels.pitch_mapping import (
    format_note_name,
    map_y_to_pitch,
    pitch_for_position,
    round_half_away_from_zero,
    staff_position,
)


@pytest.mark.parametrize(
    "y, letter, octave",
    [
        (100, NoteLetter.F, 5),  # top line
        (110, NoteLetter.E, 5),  # first space
        (120, NoteLetter.D, 5),  # second line
        (130, NoteLetter.C, 5),  # second space
        (140, NoteLetter.B, 5),  # middle line, octave only drops at position 7
        (180, NoteLetter.E, 4),  # bottom line
    ],
)
def test_treble_lines_and_spaces(treble_staff, y, letter, octave):
    pitch = map_y_to_pitch(y, treble_staff)
    assert (pitch.letter, pitch.octave) == (letter, octave)
    assert pitch.accidental is None


@pytest.mark.parametrize(
    "y, letter, octave",
    [
        (100, NoteLetter.A, 3),  # top line
        (120, NoteLetter.F, 3),  # second line
        (180, NoteLetter.G, 2),  # bottom line
    ],
)
def test_bass_lines(bass_staff, y, letter, octave):
    pitch = map_y_to_pitch(y, bass_staff)
    assert (pitch.letter, pitch.octave) == (letter, octave)


def test_octave_holds_until_position_seven(treble_staff, bass_staff):
    # y=160 is three full spacings below the top line: position 6
    assert staff_position(160, treble_staff) == 6
    assert map_y_to_pitch(160, treble_staff) == Pitch(letter=NoteLetter.G, octave=5)
    assert map_y_to_pitch(160, bass_staff) == Pitch(letter=NoteLetter.B, octave=3)


def test_octave_wraps_after_seven_positions():
    assert pitch_for_position(7, Clef.TREBLE) == Pitch(letter=NoteLetter.F, octave=4)
    assert pitch_for_position(7, Clef.BASS) == Pitch(letter=NoteLetter.A, octave=2)
    assert pitch_for_position(14, Clef.TREBLE) == Pitch(letter=NoteLetter.F, octave=3)


def test_negative_positions_use_truncation(treble_staff):
    # Above the staff the letter reuses |position| % 7 and the octave only
    # changes once |position| >= 7
    assert map_y_to_pitch(90, treble_staff) == Pitch(letter=NoteLetter.E, octave=5)
    assert pitch_for_position(-6, Clef.TREBLE) == Pitch(letter=NoteLetter.G, octave=5)
    assert pitch_for_position(-7, Clef.TREBLE) == Pitch(letter=NoteLetter.F, octave=6)
    assert pitch_for_position(-8, Clef.TREBLE) == Pitch(letter=NoteLetter.E, octave=6)
    assert pitch_for_position(-1, Clef.BASS) == Pitch(letter=NoteLetter.G, octave=3)


def test_half_steps_round_away_from_zero(treble_staff):
    # 105 is exactly half way between position 0 and 1
    assert staff_position(105, treble_staff) == 1
    assert staff_position(95, treble_staff) == -1
    assert staff_position(104.9, treble_staff) == 0


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, 0),
        (0.5, 1),
        (1.5, 2),
        (2.5, 3),
        (-0.5, -1),
        (-2.5, -3),
        (2.4, 2),
        (-2.6, -3),
    ],
)
def test_round_half_away_from_zero(value, expected):
    assert round_half_away_from_zero(value) == expected


def test_mapping_is_idempotent(treble_staff):
    first = map_y_to_pitch(133.3, treble_staff)
    second = map_y_to_pitch(133.3, treble_staff)
    assert first == second


@pytest.mark.parametrize(
    "pitch, label",
    [
        (Pitch(letter=NoteLetter.F, octave=5), "F"),
        (Pitch(letter=NoteLetter.B, octave=3), "B"),
        (Pitch(letter=NoteLetter.A, octave=2), "A2"),
        (Pitch(letter=NoteLetter.C, octave=6), "C6"),
        (Pitch(letter=NoteLetter.C, octave=4, accidental=Accidental.SHARP), "C#"),
        (Pitch(letter=NoteLetter.E, octave=1, accidental=Accidental.FLAT), "E♭1"),
    ],
)
def test_format_note_name(pitch, label):
    assert format_note_name(pitch) == label
