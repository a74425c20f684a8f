"""Global constants for TrackDraft."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_PITCH_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# Musical defaults
DEFAULT_TEMPO = 120.0
DEFAULT_TIME_SIGNATURE = (4, 4)
BEATS_PER_BAR = 4

# Tempo value many segment-list datasets write when no tempo was annotated
PLACEHOLDER_TEMPO = 120.0

# Import defaults
DEFAULT_SEGMENT_CONFIDENCE = 0.8
HIGH_SEGMENT_CONFIDENCE = 1.0
DISTRIBUTED_CHORD_CONFIDENCE = 0.9
DEFAULT_SOURCE = "McGill Billboard + SALAMI"
PROJECT_VERSION = "1.0.0"
JAMS_VERSION = "0.3.4"

# Chord symbols meaning "no chord" / "unknown chord"
NO_CHORD_SYMBOLS = {"N", "X", ""}
