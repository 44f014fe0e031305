"""Mapping from vertical staff position to written pitch.

Positions are counted in half-line-spacing steps downward from the top staff
line: even positions fall on lines, odd positions in spaces. Each clef
defines a cyclic seven-letter table starting at the pitch of its top line.
"""

import math

from sheet_note_labels.models import Clef, NoteLetter, Pitch, StaffInfo

# Letters descending from the top staff line, and the octave of that line
_CLEF_TABLES: dict[Clef, tuple[list[NoteLetter], int]] = {
    Clef.TREBLE: (
        [
            NoteLetter.F,
            NoteLetter.E,
            NoteLetter.D,
            NoteLetter.C,
            NoteLetter.B,
            NoteLetter.A,
            NoteLetter.G,
        ],
        5,
    ),
    Clef.BASS: (
        [
            NoteLetter.A,
            NoteLetter.G,
            NoteLetter.F,
            NoteLetter.E,
            NoteLetter.D,
            NoteLetter.C,
            NoteLetter.B,
        ],
        3,
    ),
}


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, with ties moving away from zero.

    Python's built-in ``round`` uses banker's rounding, which would send
    2.5 to 2; here 2.5 -> 3 and -2.5 -> -3.
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def staff_position(y: float, staff: StaffInfo) -> int:
    """Quantize a y-coordinate to a half-spacing step from the top line.

    Args:
        y: Vertical image coordinate (top-left origin).
        staff: Staff providing the top line and spacing.

    Returns:
        0 for the top line, 1 for the space below it, and so on; negative
        above the staff.
    """
    relative_y = y - staff.top_y
    return round_half_away_from_zero(relative_y / (staff.spacing / 2))


def pitch_for_position(position: int, clef: Clef) -> Pitch:
    """Pitch of a staff position under the given clef.

    Uses truncating division and the absolute value of the truncated
    remainder, so negative positions reuse ``|position| % 7`` for the letter
    and only change octave once ``|position| >= 7``. Below the top line the
    octave also stays at the base octave until position 7, so the treble
    middle line (position 4) is B5 rather than the conventional B4.

    Args:
        position: Half-spacing steps below the top line.
        clef: Clef of the staff.

    Returns:
        The Pitch for that position. No accidental is ever produced.
    """
    letters, base_octave = _CLEF_TABLES[clef]
    letter_index = abs(int(math.fmod(position, 7)))
    octave_offset = int(position / 7)
    return Pitch(letter=letters[letter_index], octave=base_octave - octave_offset)


def map_y_to_pitch(y: float, staff: StaffInfo) -> Pitch:
    """Map a vertical pixel coordinate to a pitch on ``staff``."""
    return pitch_for_position(staff_position(y, staff), staff.clef)


def format_note_name(pitch: Pitch) -> str:
    """Short label for a pitch.

    The octave is only shown for very low (<= 2) or very high (>= 6)
    octaves to keep labels compact.

    Args:
        pitch: Pitch to format.

    Returns:
        Label such as ``"F"``, ``"C#"`` or ``"A2"``.
    """
    label = pitch.letter.value
    if pitch.accidental is not None:
        label += pitch.accidental.value
    if pitch.octave <= 2 or pitch.octave >= 6:
        label += str(pitch.octave)
    return label
