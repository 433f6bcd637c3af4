from __future__ import annotations

import random
from typing import Optional, Tuple

from config import (
    ACCIDENTAL_PROBABILITY,
    ACCIDENTAL_WEIGHTS,
    BASS_OCTAVE_SHIFT,
    KEY_SIGNATURE_COUNT_RANGE,
    KEY_SIGNATURE_PROBABILITY,
    MEASURES_PER_STAVE,
    NOTES_PER_MEASURE,
    TREBLE_OCTAVES,
)
from music import LETTER_STEPS, Accidental, Clef, KeySignature, KeySignatureKind
from notation import Measure, Note, Stave


def octave_window(clef: Clef) -> Tuple[int, int]:
    lo, hi = TREBLE_OCTAVES
    if clef is Clef.BASS:
        return lo - BASS_OCTAVE_SHIFT, hi - BASS_OCTAVE_SHIFT
    return lo, hi


class ContentGenerator:
    """Random staves of single notes, each in a clef's practical register."""

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self._accidentals = [Accidental[name.upper()] for name in ACCIDENTAL_WEIGHTS]
        self._accidental_weights = list(ACCIDENTAL_WEIGHTS.values())

    def random_accidental(self) -> Optional[Accidental]:
        if self.rng.random() >= ACCIDENTAL_PROBABILITY:
            return None
        return self.rng.choices(self._accidentals, weights=self._accidental_weights)[0]

    def random_note(self, clef: Clef) -> Note:
        lo, hi = octave_window(clef)
        return Note(
            letter=self.rng.choice(LETTER_STEPS),
            accidental=self.random_accidental(),
            octave=self.rng.randint(lo, hi),
        )

    def random_clef(self) -> Clef:
        return self.rng.choice((Clef.TREBLE, Clef.BASS))

    def random_key_signature(self) -> KeySignature:
        kind = self.rng.choice((KeySignatureKind.SHARP, KeySignatureKind.FLAT))
        if self.rng.random() < KEY_SIGNATURE_PROBABILITY:
            return KeySignature(kind, self.rng.randint(*KEY_SIGNATURE_COUNT_RANGE))
        return KeySignature(kind, 0)

    def random_measure(self, clef: Clef, key_signature: KeySignature) -> Measure:
        notes = [self.random_note(clef) for _ in range(NOTES_PER_MEASURE)]
        return Measure(notes, key_signature)

    def random_stave(
        self,
        clef: Optional[Clef] = None,
        key_signature: Optional[KeySignature] = None,
    ) -> Stave:
        clef = clef if clef is not None else self.random_clef()
        key_signature = key_signature if key_signature is not None else self.random_key_signature()
        stave = Stave(clef=clef, key_signature=key_signature)
        for _ in range(MEASURES_PER_STAVE):
            stave.add_measure(self.random_measure(clef, key_signature))
        return stave
