"""
Level Codec - JSON persistence of level blueprints.

Record layout:
    {
      "name": str, "width": int, "height": int,
      "grid_rows": int, "grid_cols": int,
      "blocks": [{"color": int, "x": int, "y": int}, ...],
      "arrows": [{"color": int, "direction": int, "length": int,
                  "head_x": int, "head_y": int,
                  "segments": [[x, y], ...]}, ...]
    }
"""
import json
import logging
from pathlib import Path
from typing import List, Union

from ..game.exceptions import InvalidBlueprint
from ..game.types import LevelBlueprint


logger = logging.getLogger(__name__)

LEVEL_SUFFIX = ".json"


def blueprint_to_json(blueprint: LevelBlueprint, indent: int = 2) -> str:
    """Serialize a blueprint to a JSON string."""
    return json.dumps(blueprint.to_dict(), indent=indent)


def blueprint_from_json(text: str) -> LevelBlueprint:
    """
    Parse a blueprint from a JSON string.

    Raises:
        InvalidBlueprint: If the text is not a well-formed level record
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidBlueprint(f"Level is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidBlueprint("Level record must be a JSON object")

    try:
        return LevelBlueprint.from_dict(data)
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise InvalidBlueprint(f"Malformed level record: {e!r}") from e


def save_level(blueprint: LevelBlueprint, path: Union[str, Path]) -> str:
    """
    Save a blueprint to a JSON file, creating parent directories.

    Returns:
        Path to the saved file
    """
    filepath = Path(path)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        f.write(blueprint_to_json(blueprint))

    logger.info("Level saved to: %s", filepath)
    return str(filepath)


def load_level(path: Union[str, Path]) -> LevelBlueprint:
    """
    Load a blueprint from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidBlueprint: If the file is not a well-formed level record
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Level file not found: {filepath}")

    with open(filepath, "r") as f:
        blueprint = blueprint_from_json(f.read())

    logger.debug("Level loaded from: %s", filepath)
    return blueprint


def list_levels(directory: Union[str, Path]) -> List[str]:
    """Level files in a directory, sorted by name."""
    directory = Path(directory)
    if not directory.exists():
        return []
    return sorted(str(p) for p in directory.glob(f"*{LEVEL_SUFFIX}") if p.is_file())
