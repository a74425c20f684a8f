"""Analysis layer - Chord symbol notation.

This layer reads and writes the textual chord notations found in
annotation files:
- Harte notation (root:quality) used by MIR datasets
- Compact lead-sheet names for display
"""

from .harte import (
    parse_chord_symbol,
    parse_quality,
    parse_root,
    format_chord_symbol,
    format_chord_name,
    normalize_chord_symbol,
    is_no_chord,
)

__all__ = [
    "parse_chord_symbol",
    "parse_quality",
    "parse_root",
    "format_chord_symbol",
    "format_chord_name",
    "normalize_chord_symbol",
    "is_no_chord",
]
