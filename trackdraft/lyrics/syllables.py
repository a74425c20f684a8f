"""Syllable counting and line rhythm heuristics.

Syllables are estimated from spelling alone (no pronunciation dictionary):
each run of vowels (a, e, i, o, u, y) counts once, a silent trailing "e" is
dropped, and a consonant + "le" ending keeps its syllable ("ta-ble").
Everything here is pure and deterministic.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List


_NON_LETTERS = re.compile(r"[^a-z]")
_VOWEL_GROUP = re.compile(r"[aeiouy]+")
_CONSONANT_LE = re.compile(r"[^aeiouy]le$")

# Rough sung duration per syllable, in beats
BEATS_PER_SYLLABLE = 0.5

# Weights for compare_rhythm
SYLLABLE_WEIGHT = 0.7
STRESS_WEIGHT = 0.3

GOOD_MATCH = 80
CLOSE_MATCH = 60


def clean_word(word: str) -> str:
    """Lowercase a word and strip everything that isn't a letter."""
    return _NON_LETTERS.sub("", word.lower())


def count_syllables(word: str) -> int:
    """
    Estimate the number of syllables in a word.

    Args:
        word: A single word; punctuation is ignored

    Returns:
        0 for a word with no letters, otherwise at least 1
    """
    clean = clean_word(word)
    if not clean:
        return 0
    if len(clean) <= 3:
        return 1

    count = len(_VOWEL_GROUP.findall(clean))

    # Silent trailing "e" ("cake"), but not "-le" after a consonant ("table")
    if clean.endswith("e") and count > 1 and not _CONSONANT_LE.search(clean):
        count -= 1

    return max(1, count)


def break_into_syllables(word: str) -> List[str]:
    """
    Split a word into approximate syllables.

    A single consonant between vowel groups starts the next syllable
    ("pu-ter"), a cluster is split after its first consonant ("hel-lo"),
    and a final consonant + "le" stays together ("ta-ble"). When the vowel
    groups don't line up with count_syllables the whole word is returned.

    Args:
        word: A single word; punctuation is ignored

    Returns:
        Syllables that concatenate back to the cleaned word
    """
    clean = clean_word(word)
    if not clean:
        return []

    count = count_syllables(clean)
    groups = list(_VOWEL_GROUP.finditer(clean))

    # Silent "e" is a vowel group that isn't a syllable
    if len(groups) == count + 1 and clean.endswith("e") and groups[-1].end() == len(clean):
        groups = groups[:-1]

    if count <= 1 or len(groups) != count:
        return [clean]

    ends_consonant_le = bool(_CONSONANT_LE.search(clean))
    cuts = []
    for i in range(len(groups) - 1):
        left, right = groups[i], groups[i + 1]
        run = clean[left.end():right.start()]
        is_last_gap = i == len(groups) - 2
        if is_last_gap and ends_consonant_le and right.start() == len(clean) - 1:
            cuts.append(right.start() - 2)
        elif len(run) <= 1:
            cuts.append(left.end())
        else:
            cuts.append(left.end() + 1)

    parts = []
    start = 0
    for cut in cuts:
        parts.append(clean[start:cut])
        start = cut
    parts.append(clean[start:])
    return parts


@dataclass
class WordAnalysis:
    """Syllable information for one word of a line."""

    word: str
    syllables: int
    breakdown: List[str] = field(default_factory=list)


@dataclass
class LineAnalysis:
    """Syllables, stress and estimated duration of a lyric line."""

    syllable_count: int = 0
    stress_pattern: str = ""  # One digit per word, e.g. "1010"
    words: List[WordAnalysis] = field(default_factory=list)
    estimated_duration: float = 0.0  # Beats


def analyze_line(line: str) -> LineAnalysis:
    """
    Analyze a lyric line.

    Stress is a plain alternating pattern starting stressed, one digit per
    word; there is no real stress detection.

    Args:
        line: Line of lyrics

    Returns:
        LineAnalysis for the line
    """
    words = [
        WordAnalysis(word=w, syllables=count_syllables(w), breakdown=break_into_syllables(w))
        for w in line.split()
    ]
    total = sum(w.syllables for w in words)
    return LineAnalysis(
        syllable_count=total,
        stress_pattern="".join("1" if i % 2 == 0 else "0" for i in range(len(words))),
        words=words,
        estimated_duration=total * BEATS_PER_SYLLABLE,
    )


def compare_rhythm(line1: str, line2: str) -> int:
    """
    Score how closely two lines match rhythmically.

    Args:
        line1: First line
        line2: Second line

    Returns:
        0-100: 70% syllable-count similarity, 30% stress-pattern agreement
    """
    a = analyze_line(line1)
    b = analyze_line(line2)

    most = max(a.syllable_count, b.syllable_count)
    if most > 0:
        diff = abs(a.syllable_count - b.syllable_count)
        syllable_score = max(0.0, 100.0 - diff / most * 100.0)
    else:
        syllable_score = 100.0

    length = min(len(a.stress_pattern), len(b.stress_pattern))
    if length > 0:
        same = sum(1 for x, y in zip(a.stress_pattern, b.stress_pattern) if x == y)
        stress_score = same / length * 100.0
    else:
        stress_score = 100.0

    return int(math.floor(syllable_score * SYLLABLE_WEIGHT + stress_score * STRESS_WEIGHT + 0.5))


def rhythm_match_quality(score: float) -> str:
    """Bucket a compare_rhythm score: "good" (>= 80), "close" (>= 60) or "different"."""
    if score >= GOOD_MATCH:
        return "good"
    if score >= CLOSE_MATCH:
        return "close"
    return "different"
