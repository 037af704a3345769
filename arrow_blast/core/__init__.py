"""
Core abstractions for Arrow Blast players.

Provides the interfaces that game adapters and environments implement.
"""

from .game_interface import GameInterface, GameMetadata
from .env_interface import EnvInterface

__all__ = [
    'GameInterface',
    'GameMetadata',
    'EnvInterface',
]
