from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from music import Accidental, Clef, KeySignature, Letter, note_name, parse_note, to_semitone


class NoteState(Enum):
    DEFAULT = "default"
    CURRENT = "current"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass(eq=False)
class Note:
    letter: Letter
    accidental: Optional[Accidental]
    octave: int
    display_accidental: bool = True
    state: NoteState = NoteState.DEFAULT

    @classmethod
    def parse(cls, raw: str) -> "Note":
        letter, accidental, octave = parse_note(raw)
        return cls(letter, accidental, octave)

    @property
    def semitone(self) -> int:
        return to_semitone(self.letter, self.accidental, self.octave)

    @property
    def name(self) -> str:
        return note_name(self.letter, self.accidental, self.octave)

    # Enharmonic spellings are the same note; state is presentation only.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Note):
            return NotImplemented
        return self.semitone == other.semitone

    def __hash__(self) -> int:
        return hash(self.semitone)


def normalize_measure(notes: List[Note], key_signature: KeySignature) -> List[Note]:
    """Resolve each note's sounding accidental and whether it must be drawn.

    Notes are processed left to right. An accidental written on a letter holds
    for the rest of the measure; accidentals already implied by the key
    signature or by an earlier note of the same letter are not drawn again.
    The notes are updated in place and the same list is returned.
    """
    previous: Dict[Letter, Accidental] = {}
    for note in notes:
        explicit = note.accidental
        stored = previous.get(note.letter)
        if stored is not None:
            if explicit is None:
                note.accidental = stored
                note.display_accidental = False
            elif explicit is stored:
                note.display_accidental = False
            else:
                previous[note.letter] = explicit
                note.display_accidental = True
        elif explicit is not None:
            if key_signature.is_governed(note.letter) and key_signature.matches(explicit):
                note.display_accidental = False
            else:
                previous[note.letter] = explicit
                # A lone natural on an unaltered letter needs no sign.
                note.display_accidental = key_signature.is_governed(note.letter) or explicit is not Accidental.NATURAL
        elif key_signature.is_governed(note.letter):
            note.accidental = key_signature.default_accidental
            note.display_accidental = False
        else:
            note.display_accidental = False
    return notes


class Measure:
    def __init__(self, notes: List[Note], key_signature: KeySignature) -> None:
        self.notes = normalize_measure(notes, key_signature)

    def __len__(self) -> int:
        return len(self.notes)

    def __iter__(self):
        return iter(self.notes)

    def __getitem__(self, idx: int) -> Note:
        return self.notes[idx]


@dataclass
class Stave:
    clef: Clef
    key_signature: KeySignature
    measures: List[Measure] = field(default_factory=list)

    def add_measure(self, measure: Measure) -> None:
        self.measures.append(measure)

    def notes(self) -> List[Note]:
        return [n for m in self.measures for n in m]
