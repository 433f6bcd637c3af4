from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from config import MAX_KEY_NUMBER, MIN_KEY_NUMBER, REFERENCE_SEMITONE, SEMITONES_PER_OCTAVE


class Letter(Enum):
    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11

    @property
    def offset(self) -> int:
        return self.value

    @property
    def step(self) -> int:
        """Diatonic index inside an octave (C=0 .. B=6)."""
        return LETTER_STEPS.index(self)


LETTER_STEPS = (Letter.C, Letter.D, Letter.E, Letter.F, Letter.G, Letter.A, Letter.B)


class Accidental(Enum):
    SHARP = 1
    FLAT = -1
    NATURAL = 0

    @property
    def offset(self) -> int:
        return self.value

    @property
    def symbol(self) -> str:
        return ACCIDENTAL_SYMBOLS[self]


ACCIDENTAL_SYMBOLS = {
    Accidental.SHARP: "#",
    Accidental.FLAT: "b",
    Accidental.NATURAL: "n",
}


class Clef(Enum):
    TREBLE = "treble"
    BASS = "bass"


class KeySignatureKind(Enum):
    SHARP = "sharp"
    FLAT = "flat"


ORDER_SIGNATURE_SHARP = (Letter.F, Letter.C, Letter.G, Letter.D, Letter.A, Letter.E, Letter.B)
ORDER_SIGNATURE_FLAT = (Letter.B, Letter.E, Letter.A, Letter.D, Letter.G, Letter.C, Letter.F)

# Spellings for each remainder of (key - 24) mod 12; intermediate keys use sharps only.
KEY_SPELLINGS: Tuple[Tuple[Letter, Optional[Accidental]], ...] = (
    (Letter.C, None),
    (Letter.C, Accidental.SHARP),
    (Letter.D, None),
    (Letter.D, Accidental.SHARP),
    (Letter.E, None),
    (Letter.F, None),
    (Letter.F, Accidental.SHARP),
    (Letter.G, None),
    (Letter.G, Accidental.SHARP),
    (Letter.A, None),
    (Letter.A, Accidental.SHARP),
    (Letter.B, None),
)


@dataclass(frozen=True)
class KeySignature:
    """A set of implied accidentals: the first `count` letters of the circle-of-fifths order."""

    kind: KeySignatureKind
    count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "count", max(0, min(7, int(self.count))))

    @property
    def order(self) -> Tuple[Letter, ...]:
        if self.kind is KeySignatureKind.SHARP:
            return ORDER_SIGNATURE_SHARP
        return ORDER_SIGNATURE_FLAT

    @property
    def governed_letters(self) -> Tuple[Letter, ...]:
        return self.order[: self.count]

    @property
    def default_accidental(self) -> Accidental:
        if self.kind is KeySignatureKind.SHARP:
            return Accidental.SHARP
        return Accidental.FLAT

    def is_governed(self, letter: Letter) -> bool:
        return letter in self.governed_letters

    def matches(self, accidental: Optional[Accidental]) -> bool:
        """True if `accidental` is the kind this signature implies (Natural never matches)."""
        return accidental is not None and accidental is self.default_accidental


def to_semitone(letter: Letter, accidental: Optional[Accidental], octave: int) -> int:
    """Absolute pitch number of a spelled note; C at octave 0 is 24."""
    value = REFERENCE_SEMITONE + octave * SEMITONES_PER_OCTAVE + letter.offset
    if accidental is not None:
        value += accidental.offset
    if not (MIN_KEY_NUMBER <= value <= MAX_KEY_NUMBER):
        raise ValueError(f"Note out of key range: {note_name(letter, accidental, octave)} -> {value}")
    return value


def from_key_number(n: int) -> Tuple[Letter, Optional[Accidental], int]:
    """Canonical (letter, accidental, octave) spelling of a key number, sharps only."""
    octave, remainder = divmod(n - REFERENCE_SEMITONE, SEMITONES_PER_OCTAVE)
    if not (0 <= remainder < len(KEY_SPELLINGS)):
        raise RuntimeError(f"Unexpected semitone remainder {remainder} for key {n}")
    letter, accidental = KEY_SPELLINGS[remainder]
    return letter, accidental, octave


def note_name(letter: Letter, accidental: Optional[Accidental], octave: int) -> str:
    acc = accidental.symbol if accidental is not None else ""
    return f"{letter.name}{acc}{octave}"


def key_name(n: int) -> str:
    return note_name(*from_key_number(n))


def parse_note(raw: str) -> Tuple[Letter, Optional[Accidental], int]:
    """Parse a note-name string like C#4 / Db3 / En2 into (letter, accidental, octave)."""
    s = raw.strip()
    if not s:
        raise ValueError("Empty note string")
    m = re.match(r"^([A-Ga-g])([#bn]?)(-?\d+)$", s)
    if not m:
        raise ValueError(f"Could not parse note: {s}")
    letter_str, accidental_str, octave_str = m.groups()
    accidental = None
    for acc, symbol in ACCIDENTAL_SYMBOLS.items():
        if accidental_str == symbol:
            accidental = acc
    return Letter[letter_str.upper()], accidental, int(octave_str)
