"""
Level persistence and sequencing.
"""

from .codec import blueprint_from_json, blueprint_to_json, list_levels, load_level, save_level
from .level_manager import LevelSequence

__all__ = [
    'LevelSequence',
    'blueprint_from_json',
    'blueprint_to_json',
    'list_levels',
    'load_level',
    'save_level',
]
