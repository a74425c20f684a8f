"""High-level import pipeline: parsed JSON -> bundle -> project.

Every call builds its own importer and converter; nothing is shared
between imports.
"""

from typing import Any, Optional

from .core import AnnotationBundle, Project
from .core.errors import UnknownFormatError
from .input import FormatTag, UnrecognizedDocument, classify, importer_for, load_annotation_file
from .processing import ConverterConfig, ProjectConverter


def detect_format(document: Any) -> FormatTag:
    """Detect the annotation format of a parsed JSON value. Never raises."""
    return classify(document).tag


def import_bundle(document: Any, trust_placeholder_tempo: bool = False) -> AnnotationBundle:
    """
    Import a parsed annotation document into a bundle.

    Args:
        document: Parsed JSON value
        trust_placeholder_tempo: Keep a 120 BPM value from segment lists

    Returns:
        AnnotationBundle

    Raises:
        UnknownFormatError: If the document matches no known format
        UnsupportedFormatError: If the format is recognized but not importable
        MalformedDataError: If required fields are missing or mistyped
    """
    detected = classify(document)
    if isinstance(detected, UnrecognizedDocument):
        raise UnknownFormatError(f"Unknown annotation format: {detected.reason}")
    return importer_for(detected, trust_placeholder_tempo).import_document(detected.document)


def import_and_convert(
    document: Any,
    config: Optional[ConverterConfig] = None,
    trust_placeholder_tempo: bool = False,
) -> Project:
    """
    Import a parsed annotation document and convert it to a project.

    Args:
        document: Parsed JSON value
        config: Converter settings (defaults when None)
        trust_placeholder_tempo: Keep a 120 BPM value from segment lists

    Returns:
        Project; inference problems are listed in project.warnings

    Raises:
        AnnotationImportError: If detection or import fails
    """
    bundle = import_bundle(document, trust_placeholder_tempo=trust_placeholder_tempo)
    return ProjectConverter(config=config).convert(bundle)


def import_file(
    path: str,
    config: Optional[ConverterConfig] = None,
    trust_placeholder_tempo: bool = False,
) -> Project:
    """Load an annotation file from disk and convert it to a project."""
    return import_and_convert(
        load_annotation_file(path),
        config=config,
        trust_placeholder_tempo=trust_placeholder_tempo,
    )
