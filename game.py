from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from config import STAVE_COUNT
from generator import ContentGenerator
from music import Accidental, Clef, KeySignature, Letter, key_name
from notation import Note, NoteState, Stave

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeyEvent:
    key_number: int
    pressed: bool


@dataclass(frozen=True)
class Score:
    correct: int = 0
    total: int = 0

    @property
    def accuracy(self) -> Optional[float]:
        if self.total == 0:
            return None
        return self.correct / self.total

    def __str__(self) -> str:
        return f"{self.correct}/{self.total}"


@dataclass(frozen=True)
class Cursor:
    measure: int = 0
    note: int = 0


@dataclass(frozen=True)
class NoteView:
    letter: Letter
    accidental: Optional[Accidental]
    octave: int
    display_accidental: bool
    state: NoteState


@dataclass(frozen=True)
class StaveView:
    clef: Clef
    key_signature: KeySignature
    measures: Tuple[Tuple[NoteView, ...], ...]


@dataclass(frozen=True)
class Snapshot:
    staves: Tuple[StaveView, ...]
    score: Score
    cursor: Cursor


def _view_note(note: Note) -> NoteView:
    return NoteView(
        letter=note.letter,
        accidental=note.accidental,
        octave=note.octave,
        display_accidental=note.display_accidental,
        state=note.state,
    )


def _view_stave(stave: Stave) -> StaveView:
    return StaveView(
        clef=stave.clef,
        key_signature=stave.key_signature,
        measures=tuple(tuple(_view_note(n) for n in m) for m in stave.measures),
    )


class Game:
    """Cursor, score and active staves, shared between the MIDI thread and the renderer.

    Every public method takes the lock for its whole duration, so readers only
    ever see a state between two complete events.
    """

    def __init__(self, generator: Optional[ContentGenerator] = None, stave_count: int = STAVE_COUNT) -> None:
        if stave_count < 1:
            raise ValueError(f"stave_count must be at least 1, got {stave_count}")
        self.generator = generator if generator is not None else ContentGenerator()
        self.stave_count = stave_count
        self._lock = threading.Lock()
        self.staves: List[Stave] = []
        self._cursor = Cursor()
        self._score = Score()
        self._held_key: Optional[int] = None
        self._fill()

    def _fill(self) -> None:
        self.staves = [self.generator.random_stave() for _ in range(self.stave_count)]
        self._cursor = Cursor()
        self._current_note().state = NoteState.CURRENT

    def _current_note(self) -> Note:
        if not self.staves:
            raise RuntimeError("No active stave")
        measures = self.staves[0].measures
        if not (0 <= self._cursor.measure < len(measures)):
            raise RuntimeError(f"Cursor measure out of range: {self._cursor}")
        notes = measures[self._cursor.measure].notes
        if not (0 <= self._cursor.note < len(notes)):
            raise RuntimeError(f"Cursor note out of range: {self._cursor}")
        return notes[self._cursor.note]

    def _advance(self) -> None:
        measure, note = self._cursor.measure, self._cursor.note + 1
        front = self.staves[0]
        if note == len(front.measures[measure]):
            measure, note = measure + 1, 0
            if measure == len(front.measures):
                self.staves.pop(0)
                self.staves.append(self.generator.random_stave())
                measure = 0
                logger.debug("Stave finished; appended %s stave in %r", self.staves[-1].clef.value, self.staves[-1].key_signature)
        self._cursor = Cursor(measure, note)

    def _press(self, key_number: int) -> None:
        self._held_key = key_number
        target = self._current_note()
        hit = target.semitone == key_number
        logger.debug("Pressed %s, expected %s (%s)", key_name(key_number), target.name, "hit" if hit else "miss")
        if hit:
            self._score = Score(self._score.correct + 1, self._score.total + 1)
            target.state = NoteState.CORRECT
            self._advance()
            self._current_note().state = NoteState.CURRENT
        else:
            self._score = Score(self._score.correct, self._score.total + 1)
            target.state = NoteState.INCORRECT

    def _release(self, key_number: int) -> None:
        if key_number != self._held_key:
            return
        logger.debug("Released %s", key_name(key_number))
        self._held_key = None
        self._current_note().state = NoteState.CURRENT

    def handle_event(self, event: KeyEvent) -> None:
        with self._lock:
            if event.pressed:
                self._press(event.key_number)
            else:
                self._release(event.key_number)

    def reset(self) -> None:
        with self._lock:
            self._score = Score()
            self._held_key = None
            self._fill()
        logger.info("Game reset")

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(
                staves=tuple(_view_stave(s) for s in self.staves),
                score=self._score,
                cursor=self._cursor,
            )

    @property
    def score(self) -> Score:
        with self._lock:
            return self._score

    @property
    def cursor(self) -> Cursor:
        with self._lock:
            return self._cursor

    @property
    def held_key(self) -> Optional[int]:
        with self._lock:
            return self._held_key
