"""
Level generation and analysis for Arrow Blast.
"""

from .level_generator import GenerationReport, LevelGenerator, generate
from .analysis import ammo_balance, find_collection_order, is_balanced, is_clearable

__all__ = [
    'GenerationReport',
    'LevelGenerator',
    'ammo_balance',
    'find_collection_order',
    'generate',
    'is_balanced',
    'is_clearable',
]
