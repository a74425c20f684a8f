"""Tests for annotation format detection.

Detection must be total: any JSON value gets a tag, nothing raises.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from trackdraft.input import (
    FormatTag,
    JamsDocument,
    JcrdDocument,
    SegmentListDocument,
    UnrecognizedDocument,
    classify,
    detect_format,
)


def make_segment_list(source=None, tags=None):
    """Minimal McGill-style segment list."""
    section = {"sectionType": "Verse", "start_ms": 0, "duration_ms": 8000}
    if tags is not None:
        section["tags"] = tags
    doc = {"title": "Song", "sections": [section]}
    if source is not None:
        doc["source"] = source
    return doc


class TestFormatDetection:
    """Test each recognized format."""

    def test_jams(self):
        """file_metadata plus annotations is JAMS."""
        doc = {"file_metadata": {}, "annotations": []}
        assert detect_format(doc) == FormatTag.JAMS
        assert isinstance(classify(doc), JamsDocument)

    def test_jcrd(self):
        """chord_progression with timed sections is JCRD."""
        doc = {"chord_progression": [], "sections": [{"start_time": 0.0}]}
        assert detect_format(doc) == FormatTag.JCRD
        assert isinstance(classify(doc), JcrdDocument)

    def test_mcgill(self):
        """A plain segment list is McGill-Billboard."""
        detected = classify(make_segment_list())
        assert isinstance(detected, SegmentListDocument)
        assert detected.tag == FormatTag.MCGILL_BILLBOARD

    def test_salami_by_source(self):
        """A SALAMI source marks a SALAMI list."""
        assert detect_format(make_segment_list(source="SALAMI v2")) == FormatTag.SALAMI

    def test_salami_by_tag(self):
        """A salami_annotated tag marks a SALAMI list."""
        assert detect_format(make_segment_list(tags=["salami_annotated"])) == FormatTag.SALAMI

    def test_jams_wins_over_segment_list(self):
        """Predicates are ordered: JAMS is checked first."""
        doc = make_segment_list()
        doc["file_metadata"] = {}
        doc["annotations"] = []
        assert detect_format(doc) == FormatTag.JAMS

    def test_jcrd_needs_start_time(self):
        """chord_progression alone is not JCRD."""
        doc = {"chord_progression": [], "sections": [{"start": 0.0}]}
        assert detect_format(doc) == FormatTag.UNKNOWN


class TestDetectorTotality:
    """Detection never raises."""

    @pytest.mark.parametrize("value", [
        {},
        None,
        0,
        3.5,
        True,
        "file_metadata",
        [],
        [{"file_metadata": {}, "annotations": []}],
        {"sections": []},
        {"sections": "verse"},
        {"sections": [None, {"start_ms": 0}]},
        {"sections": [[{"start_ms": 0, "sectionType": "x"}]]},
        {"chord_progression": None, "sections": [1, 2, 3]},
        {"a": {"b": {"c": {"d": [1, {"e": None}]}}}},
        {"file_metadata": {}},
    ])
    def test_unrecognized_values(self, value):
        """Any JSON value classifies without raising."""
        detected = classify(value)
        assert isinstance(detected, UnrecognizedDocument)
        assert detect_format(value) == FormatTag.UNKNOWN

    def test_reason_mentions_type(self):
        """Non-objects report their type."""
        assert "list" in classify([]).reason
