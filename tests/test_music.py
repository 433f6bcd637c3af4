"""Unit tests for pitch algebra and key signatures."""

import dataclasses

import pytest

from music import (
    Accidental,
    KeySignature,
    KeySignatureKind,
    Letter,
    from_key_number,
    key_name,
    note_name,
    parse_note,
    to_semitone,
)


def test_c0_is_reference_semitone() -> None:
    assert to_semitone(Letter.C, None, 0) == 24


def test_lowest_piano_key_is_a_minus_one() -> None:
    assert to_semitone(Letter.A, None, -1) == 21


def test_accidental_offsets() -> None:
    assert to_semitone(Letter.D, Accidental.SHARP, 3) == to_semitone(Letter.D, None, 3) + 1
    assert to_semitone(Letter.D, Accidental.FLAT, 3) == to_semitone(Letter.D, None, 3) - 1
    assert to_semitone(Letter.D, Accidental.NATURAL, 3) == to_semitone(Letter.D, None, 3)


@pytest.mark.parametrize("octave", range(-1, 8))
def test_enharmonic_f_sharp_equals_g_flat(octave: int) -> None:
    assert to_semitone(Letter.F, Accidental.SHARP, octave) == to_semitone(Letter.G, Accidental.FLAT, octave)


def test_b_sharp_crosses_into_next_octave() -> None:
    assert to_semitone(Letter.B, Accidental.SHARP, 2) == to_semitone(Letter.C, None, 3)


@pytest.mark.parametrize("octave", range(-1, 8))
def test_round_trip_through_key_number(octave: int) -> None:
    for letter in Letter:
        semitone = to_semitone(letter, None, octave)
        assert to_semitone(*from_key_number(semitone)) == semitone


def test_from_key_number_uses_sharps_for_black_keys() -> None:
    assert from_key_number(25) == (Letter.C, Accidental.SHARP, 0)
    assert from_key_number(27) == (Letter.D, Accidental.SHARP, 0)
    assert from_key_number(66) == (Letter.F, Accidental.SHARP, 3)


def test_from_key_number_floors_below_reference() -> None:
    assert from_key_number(23) == (Letter.B, None, -1)
    assert from_key_number(21) == (Letter.A, None, -1)
    assert from_key_number(0) == (Letter.C, None, -2)


def test_to_semitone_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        to_semitone(Letter.C, Accidental.FLAT, -2)
    with pytest.raises(ValueError):
        to_semitone(Letter.B, None, 9)


def test_names() -> None:
    assert note_name(Letter.F, Accidental.SHARP, 4) == "F#4"
    assert note_name(Letter.E, None, -1) == "E-1"
    assert key_name(70) == "A#3"


def test_parse_note() -> None:
    assert parse_note("C#4") == (Letter.C, Accidental.SHARP, 4)
    assert parse_note(" db3 ") == (Letter.D, Accidental.FLAT, 3)
    assert parse_note("En2") == (Letter.E, Accidental.NATURAL, 2)
    assert parse_note("A-1") == (Letter.A, None, -1)


@pytest.mark.parametrize("raw", ["", "H4", "C#", "C##4"])
def test_parse_note_rejects_garbage(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_note(raw)


def test_sharp_signature_governs_in_circle_of_fifths_order() -> None:
    sig = KeySignature(KeySignatureKind.SHARP, 3)
    assert sig.governed_letters == (Letter.F, Letter.C, Letter.G)
    assert sig.is_governed(Letter.G)
    assert not sig.is_governed(Letter.D)


def test_flat_signature_governs_in_circle_of_fourths_order() -> None:
    sig = KeySignature(KeySignatureKind.FLAT, 2)
    assert sig.governed_letters == (Letter.B, Letter.E)
    assert not sig.is_governed(Letter.A)
    assert sig.default_accidental is Accidental.FLAT


def test_signature_matches_only_its_own_kind() -> None:
    sig = KeySignature(KeySignatureKind.SHARP, 1)
    assert sig.matches(Accidental.SHARP)
    assert not sig.matches(Accidental.FLAT)
    assert not sig.matches(Accidental.NATURAL)
    assert not sig.matches(None)


def test_signature_count_is_clamped() -> None:
    assert KeySignature(KeySignatureKind.FLAT, 12).count == 7
    assert KeySignature(KeySignatureKind.FLAT, -3).count == 0
    assert KeySignature(KeySignatureKind.SHARP, 0).governed_letters == ()


def test_full_signatures_cover_every_letter() -> None:
    for kind in KeySignatureKind:
        assert set(KeySignature(kind, 7).governed_letters) == set(Letter)


def test_key_signature_is_immutable() -> None:
    sig = KeySignature(KeySignatureKind.SHARP, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        sig.count = 5
    with pytest.raises(dataclasses.FrozenInstanceError):
        sig.kind = KeySignatureKind.FLAT
    assert sig == KeySignature(KeySignatureKind.SHARP, 2)
    assert hash(sig) == hash(KeySignature(KeySignatureKind.SHARP, 2))
