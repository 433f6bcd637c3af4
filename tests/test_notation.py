"""Unit tests for the per-measure accidental normalizer."""

import random
from typing import List, Optional, Tuple

from generator import ContentGenerator
from music import Accidental, Clef, KeySignature, KeySignatureKind, Letter
from notation import Measure, Note, NoteState, Stave, normalize_measure

NO_SIGNATURE = KeySignature(KeySignatureKind.SHARP, 0)


def _notes(*names: str) -> List[Note]:
    return [Note.parse(n) for n in names]


def _resolved(notes: List[Note]) -> List[Tuple[Optional[Accidental], bool]]:
    return [(n.accidental, n.display_accidental) for n in notes]


def test_accidental_persists_until_respelled() -> None:
    notes = normalize_measure(_notes("C#4", "C4", "Cb4"), NO_SIGNATURE)
    assert _resolved(notes) == [
        (Accidental.SHARP, True),
        (Accidental.SHARP, False),
        (Accidental.FLAT, True),
    ]


def test_signature_implies_accidental() -> None:
    sig = KeySignature(KeySignatureKind.SHARP, 3)
    notes = normalize_measure(_notes("F4", "F#4"), sig)
    assert _resolved(notes) == [
        (Accidental.SHARP, False),
        (Accidental.SHARP, False),
    ]


def test_repeated_explicit_accidental_is_not_redrawn() -> None:
    notes = normalize_measure(_notes("Eb3", "Eb4"), NO_SIGNATURE)
    assert _resolved(notes) == [(Accidental.FLAT, True), (Accidental.FLAT, False)]


def test_lone_natural_is_not_drawn() -> None:
    notes = normalize_measure(_notes("An3"), NO_SIGNATURE)
    assert _resolved(notes) == [(Accidental.NATURAL, False)]


def test_natural_after_sharp_is_drawn() -> None:
    notes = normalize_measure(_notes("G#3", "Gn3", "G3"), NO_SIGNATURE)
    assert _resolved(notes) == [
        (Accidental.SHARP, True),
        (Accidental.NATURAL, True),
        (Accidental.NATURAL, False),
    ]


def test_natural_cancelling_signature_is_drawn_and_carried() -> None:
    sig = KeySignature(KeySignatureKind.FLAT, 1)
    notes = normalize_measure(_notes("Bn3", "B3"), sig)
    assert _resolved(notes) == [(Accidental.NATURAL, True), (Accidental.NATURAL, False)]


def test_contradicting_signature_is_drawn() -> None:
    sig = KeySignature(KeySignatureKind.FLAT, 2)
    notes = normalize_measure(_notes("E#4", "E4"), sig)
    assert _resolved(notes) == [(Accidental.SHARP, True), (Accidental.SHARP, False)]


def test_plain_note_outside_signature_stays_plain() -> None:
    sig = KeySignature(KeySignatureKind.SHARP, 1)
    notes = normalize_measure(_notes("D4", "D3"), sig)
    assert _resolved(notes) == [(None, False), (None, False)]


def test_signature_note_then_explicit_natural() -> None:
    sig = KeySignature(KeySignatureKind.SHARP, 1)
    notes = normalize_measure(_notes("F4", "Fn4", "F4"), sig)
    assert _resolved(notes) == [
        (Accidental.SHARP, False),
        (Accidental.NATURAL, True),
        (Accidental.NATURAL, False),
    ]


def test_letter_memory_is_shared_across_octaves() -> None:
    notes = normalize_measure(_notes("C#3", "C4"), NO_SIGNATURE)
    assert notes[1].accidental is Accidental.SHARP


def test_measures_do_not_share_context() -> None:
    first = Measure(_notes("C#4", "D4"), NO_SIGNATURE)
    second = Measure(_notes("C4", "D4"), NO_SIGNATURE)
    assert first[0].accidental is Accidental.SHARP
    assert second[0].accidental is None


def test_normalizer_returns_same_list() -> None:
    notes = _notes("C4", "D4")
    assert normalize_measure(notes, NO_SIGNATURE) is notes


def test_renormalizing_keeps_effective_pitches() -> None:
    gen = ContentGenerator(seed=7)
    rng = random.Random(11)
    for _ in range(300):
        sig = KeySignature(rng.choice(list(KeySignatureKind)), rng.randint(0, 7))
        clef = gen.random_clef()
        measure = Measure([gen.random_note(clef) for _ in range(6)], sig)
        first = [n.accidental for n in measure]
        again = normalize_measure([Note(n.letter, n.accidental, n.octave) for n in measure], sig)
        assert [n.accidental for n in again] == first


def test_note_equality_is_enharmonic() -> None:
    assert Note.parse("F#4") == Note.parse("Gb4")
    assert Note.parse("B#2") == Note.parse("C3")
    assert Note.parse("E4") != Note.parse("F4")
    assert len({Note.parse("F#4"), Note.parse("Gb4")}) == 1


def test_note_state_does_not_affect_equality() -> None:
    a = Note(Letter.C, None, 3, state=NoteState.CORRECT)
    b = Note(Letter.C, None, 3, state=NoteState.INCORRECT)
    assert a == b


def test_stave_notes_flatten_in_order() -> None:
    stave = Stave(Clef.TREBLE, NO_SIGNATURE)
    stave.add_measure(Measure(_notes("C4", "D4"), NO_SIGNATURE))
    stave.add_measure(Measure(_notes("E4"), NO_SIGNATURE))
    assert [n.name for n in stave.notes()] == ["C4", "D4", "E4"]
