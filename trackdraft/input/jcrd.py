"""JCRD (Isophonics chord/section JSON) importer.

JCRD documents are recognized by the detector so callers get a precise
error, but importing them is not supported yet.
"""

from typing import Any, Mapping

from ..core import AnnotationBundle
from ..core.errors import UnsupportedFormatError
from .base import AnnotationImporter


class JcrdImporter(AnnotationImporter):
    """Placeholder importer that rejects JCRD documents."""

    def import_document(self, document: Mapping[str, Any]) -> AnnotationBundle:
        raise UnsupportedFormatError("jcrd", "JCRD import not yet implemented")
