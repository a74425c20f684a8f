"""Project JSON export and loading."""

import json
from pathlib import Path

from ..core import Project
from ..core.errors import MalformedDataError


def export_project_json(project: Project, output_path: str, indent: int = 2) -> None:
    """
    Write a project as JSON.

    Args:
        project: Project to write
        output_path: Destination file; parent directories are created
        indent: JSON indentation
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(project.to_dict(), f, indent=indent, ensure_ascii=False)


def load_project_json(path: str) -> Project:
    """
    Load a project written by export_project_json.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MalformedDataError: If the file is not a project document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Project file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedDataError(f"{path.name} is not valid JSON: {e}") from e

    if not isinstance(data, dict) or "structure" not in data:
        raise MalformedDataError(f"{path.name} is not a TrackDraft project")

    try:
        return Project.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDataError(f"{path.name} has an invalid project layout: {e}") from e
