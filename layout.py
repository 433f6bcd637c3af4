"""Staff geometry shared by the renderer.

Positions are counted in diatonic steps above the bottom staff line: lines sit
on even offsets 0..8, spaces on odd ones.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from music import Clef, KeySignature, KeySignatureKind, Letter

# Bottom line of each clef: E (octave 3) for treble, G (octave 1) for bass.
BOTTOM_LINE: Dict[Clef, Tuple[Letter, int]] = {
    Clef.TREBLE: (Letter.E, 3),
    Clef.BASS: (Letter.G, 1),
}

# Line the clef symbol curls around.
CLEF_LINE: Dict[Clef, int] = {
    Clef.TREBLE: 2,
    Clef.BASS: 6,
}

SIGNATURE_OFFSETS_TREBLE: Dict[KeySignatureKind, Tuple[int, ...]] = {
    KeySignatureKind.SHARP: (8, 5, 9, 6, 3, 7, 4),
    KeySignatureKind.FLAT: (4, 7, 3, 6, 2, 5, 1),
}
BASS_SIGNATURE_SHIFT = -2

TOP_LINE = 8


def staff_offset(clef: Clef, letter: Letter, octave: int) -> int:
    bottom_letter, bottom_octave = BOTTOM_LINE[clef]
    return (octave * 7 + letter.step) - (bottom_octave * 7 + bottom_letter.step)


def ledger_offsets(offset: int) -> List[int]:
    """Offsets of the ledger lines a note at `offset` needs."""
    if offset <= -2:
        return list(range(-2, offset - 1, -2))
    if offset >= TOP_LINE + 2:
        return list(range(TOP_LINE + 2, offset + 1, 2))
    return []


def signature_offsets(clef: Clef, key_signature: KeySignature) -> List[int]:
    offsets = SIGNATURE_OFFSETS_TREBLE[key_signature.kind][: key_signature.count]
    if clef is Clef.BASS:
        return [o + BASS_SIGNATURE_SHIFT for o in offsets]
    return list(offsets)
