"""Core domain models for sheet music note labelling."""

import math
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class NoteLetter(str, Enum):
    """Natural note letter names in ascending order from C."""

    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    A = "A"
    B = "B"

    @property
    def semitone_offset(self) -> int:
        """Semitones above C within the same octave."""
        return _SEMITONE_OFFSETS[self]


_SEMITONE_OFFSETS = {
    NoteLetter.C: 0,
    NoteLetter.D: 2,
    NoteLetter.E: 4,
    NoteLetter.F: 5,
    NoteLetter.G: 7,
    NoteLetter.A: 9,
    NoteLetter.B: 11,
}


class Accidental(str, Enum):
    """Accidental symbols as they appear in rendered labels."""

    SHARP = "#"
    FLAT = "♭"
    NATURAL = "♮"


class Pitch(BaseModel):
    """A written pitch: letter, octave and an optional accidental.

    Attributes:
        letter: Note letter name.
        octave: Scientific pitch notation octave (middle C is C4).
        accidental: Accidental sign, or None for a plain letter.
    """

    letter: NoteLetter = Field(..., description="Note letter name")
    octave: int = Field(..., description="Octave number, middle C is C4")
    accidental: Accidental | None = Field(None, description="Optional accidental")

    class Config:
        frozen = True

    @property
    def name(self) -> str:
        """Full name with accidental and octave, e.g. ``"F5"`` or ``"C#4"``."""
        accidental = self.accidental.value if self.accidental else ""
        return f"{self.letter.value}{accidental}{self.octave}"

    @property
    def midi_number(self) -> int:
        """MIDI note number of the pitch (C4 == 60)."""
        number = (self.octave + 1) * 12 + self.letter.semitone_offset
        if self.accidental is Accidental.SHARP:
            number += 1
        elif self.accidental is Accidental.FLAT:
            number -= 1
        return number


class Clef(str, Enum):
    """Clefs supported by the pitch mapper."""

    TREBLE = "treble"
    BASS = "bass"

    @property
    def reference_pitch(self) -> Pitch:
        """Pitch the clef symbol anchors to its line.

        Informational only: the pitch mapper works from the top staff line.
        """
        if self is Clef.TREBLE:
            # G4 on the second line from the bottom
            return Pitch(letter=NoteLetter.G, octave=4)
        # F3 on the fourth line
        return Pitch(letter=NoteLetter.F, octave=3)


class Point(BaseModel):
    """A point in image coordinates (origin top-left, y grows downward)."""

    x: float
    y: float

    class Config:
        frozen = True


class BoundingBox(BaseModel):
    """Axis-aligned bounding box around one notehead candidate.

    The coordinates follow standard computer vision conventions with (0,0)
    at the top-left of the image.

    Attributes:
        x: Left edge position in pixels.
        y: Top edge position in pixels.
        w: Width in pixels (non-negative).
        h: Height in pixels (non-negative).
    """

    x: float = Field(..., description="Left edge position in pixels")
    y: float = Field(..., description="Top edge position in pixels")
    w: float = Field(..., ge=0, description="Width in pixels")
    h: float = Field(..., ge=0, description="Height in pixels")

    class Config:
        frozen = True

    @property
    def cx(self) -> float:
        """Horizontal center of the box."""
        return self.x + self.w / 2

    @property
    def cy(self) -> float:
        """Vertical center of the box."""
        return self.y + self.h / 2

    @property
    def center(self) -> Point:
        return Point(x=self.cx, y=self.cy)


class StaffInfo(BaseModel):
    """Geometry of one five-line staff.

    ``bottom_y`` always equals ``top_y + 4 * spacing``: five lines enclose
    four spaces.

    Attributes:
        id: Index of the staff on the page, top to bottom.
        top_y: y-coordinate of the top staff line.
        bottom_y: y-coordinate of the bottom staff line.
        spacing: Distance between two adjacent staff lines (positive).
        clef: Clef governing the pitch of each line and space.
    """

    id: int = Field(..., ge=0, description="Staff index on the page")
    top_y: float = Field(..., description="y of the top staff line")
    bottom_y: float = Field(..., description="y of the bottom staff line")
    spacing: float = Field(..., gt=0, description="Distance between staff lines")
    clef: Clef = Field(..., description="Clef of the staff")

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_geometry(self) -> "StaffInfo":
        expected = self.top_y + self.spacing * 4
        if not math.isclose(self.bottom_y, expected, rel_tol=1e-6, abs_tol=1e-6):
            raise ValueError(
                f"bottom_y must equal top_y + 4 * spacing ({expected}), "
                f"got {self.bottom_y}"
            )
        return self

    @classmethod
    def from_top(
        cls, id: int, top_y: float, spacing: float, clef: Clef
    ) -> "StaffInfo":
        """Build a staff from its top line and line spacing."""
        return cls(
            id=id, top_y=top_y, bottom_y=top_y + spacing * 4, spacing=spacing, clef=clef
        )

    @property
    def line_positions(self) -> list[float]:
        """y-coordinates of the five staff lines, top first."""
        return [self.top_y + self.spacing * i for i in range(5)]


class DetectedNote(BaseModel):
    """A notehead located on a staff and labelled with its pitch.

    Attributes:
        bbox: Bounding box of the notehead in image coordinates.
        center: Center of the notehead; the point used for pitch mapping.
        staff_id: Id of the StaffInfo the note was mapped against.
        pitch: Pitch derived from the vertical position.
        confidence: Heuristic certainty in [0, 1], not a probability.
        is_fallback: True for synthesized placeholder notes.
    """

    bbox: BoundingBox
    center: Point
    staff_id: int = Field(..., ge=0)
    pitch: Pitch
    confidence: float = Field(..., ge=0.0, le=1.0)
    is_fallback: bool = Field(False, description="Synthesized placeholder note")

    class Config:
        frozen = True
