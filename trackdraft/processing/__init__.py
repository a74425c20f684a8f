"""Processing layer - Annotation bundle to project conversion.

This layer turns format-agnostic annotations into an editable project:
- Chord alignment onto section beat grids
- Section building with bar estimates
- Key, harmony and progression inference (non-fatal)
"""

from .align import AlignmentPolicy, chords_in_range, seconds_to_beats
from .converter import ProjectConverter, ConverterConfig, ConversionStats, convert_bundle

__all__ = [
    "AlignmentPolicy",
    "chords_in_range",
    "seconds_to_beats",
    "ProjectConverter",
    "ConverterConfig",
    "ConversionStats",
    "convert_bundle",
]
