"""Rhyme detection and rhyme-scheme analysis.

Word pairs are compared in priority order, first match wins:

1. perfect     same last-syllable region (final vowel group + consonants)
2. slant       last three letters agree from the end by more than 60%
3. assonance   same vowels
4. consonance  same consonants

Rhyme schemes are built per stanza (stanzas are separated by blank lines)
from the last word of each line.
"""

import re
import string
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .syllables import clean_word


class RhymeType(Enum):
    """Kinds of rhyme, strongest first."""
    PERFECT = "perfect"
    SLANT = "slant"
    ASSONANCE = "assonance"
    CONSONANCE = "consonance"
    NONE = "none"


PERFECT_SCORE = 1.0
ASSONANCE_SCORE = 0.5
CONSONANCE_SCORE = 0.4
SLANT_THRESHOLD = 0.6
# Pairs must score above this to share a scheme letter
GROUP_THRESHOLD = 0.5
SLANT_TAIL_LENGTH = 3

_VOWELS = "aeiouy"
_LAST_SYLLABLE = re.compile(r"[aeiouy]+[^aeiouy]*$")
_NOT_VOWEL = re.compile(r"[^aeiou]")
_VOWEL = re.compile(r"[aeiou]")


@dataclass
class RhymeMatch:
    """Result of comparing two words."""

    word1: str
    word2: str
    type: RhymeType
    score: float  # 0-1

    @property
    def rhymes(self) -> bool:
        return self.type != RhymeType.NONE


@dataclass
class RhymeWord:
    """A line-ending word and where it sits in the lyrics."""

    word: str
    line_index: int  # Index among non-blank lines
    word_index: int


@dataclass
class RhymeGroup:
    """Line-ending words of one stanza that rhyme with each other."""

    id: str
    letter: str
    words: List[RhymeWord] = field(default_factory=list)
    rhyme_type: RhymeType = RhymeType.NONE


@dataclass
class RhymeScheme:
    """Rhyme analysis of a full lyric."""

    scheme: str = ""  # e.g. "AABB ABAB", one block per stanza
    groups: List[RhymeGroup] = field(default_factory=list)
    distribution: Dict[str, int] = field(default_factory=dict)  # Letter -> grouped word count


def rhyme_part(word: str) -> str:
    """
    The last-syllable region of a word: its final vowel group plus any
    trailing consonants, ignoring a silent final "e" ("light" -> "ight",
    "time" -> "im"). Words without vowels are returned whole.
    """
    clean = clean_word(word)
    if (
        len(clean) > 2
        and clean.endswith("e")
        and clean[-2] not in _VOWELS
        and any(c in _VOWELS for c in clean[:-2])
    ):
        clean = clean[:-1]

    match = _LAST_SYLLABLE.search(clean)
    return match.group(0) if match else clean


def tail_similarity(a: str, b: str) -> float:
    """Fraction of the longer string matched by a common suffix."""
    longer = max(len(a), len(b))
    if longer == 0:
        return 1.0
    matches = 0
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            break
        matches += 1
    return matches / longer


def detect_rhyme_type(word1: str, word2: str) -> RhymeMatch:
    """
    Classify how two words rhyme.

    Args:
        word1: First word (punctuation and case are ignored)
        word2: Second word

    Returns:
        RhymeMatch; identical words do not count as a rhyme
    """
    w1 = clean_word(word1)
    w2 = clean_word(word2)

    if not w1 or not w2 or w1 == w2:
        return RhymeMatch(word1, word2, RhymeType.NONE, 0.0)

    if rhyme_part(w1) == rhyme_part(w2):
        return RhymeMatch(word1, word2, RhymeType.PERFECT, PERFECT_SCORE)

    similarity = tail_similarity(w1[-SLANT_TAIL_LENGTH:], w2[-SLANT_TAIL_LENGTH:])
    if similarity > SLANT_THRESHOLD:
        return RhymeMatch(word1, word2, RhymeType.SLANT, similarity)

    vowels1 = _NOT_VOWEL.sub("", w1)
    vowels2 = _NOT_VOWEL.sub("", w2)
    if vowels1 and vowels1 == vowels2:
        return RhymeMatch(word1, word2, RhymeType.ASSONANCE, ASSONANCE_SCORE)

    consonants1 = _VOWEL.sub("", w1)
    consonants2 = _VOWEL.sub("", w2)
    if consonants1 and consonants1 == consonants2:
        return RhymeMatch(word1, word2, RhymeType.CONSONANCE, CONSONANCE_SCORE)

    return RhymeMatch(word1, word2, RhymeType.NONE, 0.0)


def scheme_letter(index: int) -> str:
    """A, B, ... Z, then A1, B1, ..."""
    letter = string.ascii_uppercase[index % 26]
    return letter if index < 26 else f"{letter}{index // 26}"


def split_stanzas(lyrics: str) -> List[List[str]]:
    """Split lyrics into stanzas of non-blank lines."""
    stanzas = []
    current: List[str] = []
    for line in lyrics.splitlines():
        if line.strip():
            current.append(line)
        elif current:
            stanzas.append(current)
            current = []
    if current:
        stanzas.append(current)
    return stanzas


def analyze_rhyme_scheme(lyrics: str) -> RhymeScheme:
    """
    Infer the rhyme scheme of a lyric.

    Within each stanza, line-ending words that rhyme (score above 0.5) share
    a letter. Letters are given in order of first appearance and restart at
    "A" for every stanza; a line that rhymes with nothing gets its own letter.

    Args:
        lyrics: Lyrics text, stanzas separated by blank lines

    Returns:
        RhymeScheme with the scheme string, groups and letter distribution
    """
    result = RhymeScheme()
    stanza_schemes = []
    line_index = 0

    for stanza in split_stanzas(lyrics):
        endings = []
        for line in stanza:
            words = line.split()
            if words and clean_word(words[-1]):
                endings.append(RhymeWord(clean_word(words[-1]), line_index, len(words) - 1))
            line_index += 1

        letters = [""] * len(endings)
        next_letter = 0
        for i, ending in enumerate(endings):
            if letters[i]:
                continue
            letter = scheme_letter(next_letter)
            next_letter += 1
            letters[i] = letter

            group = RhymeGroup(id=f"group-{len(result.groups)}", letter=letter, words=[ending])
            for j in range(i + 1, len(endings)):
                if letters[j]:
                    continue
                match = detect_rhyme_type(ending.word, endings[j].word)
                if match.rhymes and match.score > GROUP_THRESHOLD:
                    letters[j] = letter
                    group.words.append(endings[j])
                    group.rhyme_type = match.type

            if len(group.words) > 1:
                result.groups.append(group)

        stanza_schemes.append("".join(letters))

    result.scheme = " ".join(stanza_schemes)
    distribution = Counter()
    for group in result.groups:
        distribution[group.letter] += len(group.words)
    result.distribution = dict(distribution)
    return result
