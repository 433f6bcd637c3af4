# Shared configuration and constants.

REFERENCE_SEMITONE = 24  # C at octave 0; A at octave -1 lands on key 21
SEMITONES_PER_OCTAVE = 12
MIN_KEY_NUMBER = 0
MAX_KEY_NUMBER = 127

STAVE_COUNT = 4
MEASURES_PER_STAVE = 3
NOTES_PER_MEASURE = 4

# Octave windows (inclusive) for randomly drawn notes.
TREBLE_OCTAVES = (3, 4)
BASS_OCTAVE_SHIFT = 2

ACCIDENTAL_PROBABILITY = 0.5  # chance a drawn note carries an explicit accidental
ACCIDENTAL_WEIGHTS = {
    "flat": 2,
    "natural": 2,
    "sharp": 1,
}

KEY_SIGNATURE_PROBABILITY = 0.2
KEY_SIGNATURE_COUNT_RANGE = (1, 5)

POLL_INTERVAL_MS = 16
