"""Annotation file loading."""

import json
from pathlib import Path
from typing import Any

from ..core.errors import MalformedDataError


class AnnotationLoader:
    """Reads annotation files from disk into parsed JSON values."""

    SUPPORTED_FORMATS = {".json", ".jams"}

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize AnnotationLoader.

        Args:
            encoding: Text encoding of the annotation files
        """
        self.encoding = encoding

    def load(self, path: str) -> Any:
        """
        Load and parse an annotation file.

        Args:
            path: Path to a .json or .jams file

        Returns:
            The parsed JSON value (not yet classified)

        Raises:
            ValueError: If file format not supported
            FileNotFoundError: If file doesn't exist
            MalformedDataError: If the file is not valid JSON
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Annotation file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        try:
            with open(path, encoding=self.encoding) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise MalformedDataError(f"{path.name} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise MalformedDataError(f"{path.name} is not {self.encoding} text") from e


def load_annotation_file(path: str) -> Any:
    """Load an annotation file with the default loader settings."""
    return AnnotationLoader().load(path)
