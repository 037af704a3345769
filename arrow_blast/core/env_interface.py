"""
Numeric environment contract for agents: flat observations plus an action mask.
"""

from abc import ABC, abstractmethod
from typing import Tuple, Dict, Any, List, Optional
import numpy as np


class EnvInterface(ABC):
    """
    Gym-style wrapper that encodes a game's state as a float vector.

    reset() and step() mirror the game calls but return observations in place
    of state dictionaries; get_game_state() still exposes the dictionary.
    """

    @property
    @abstractmethod
    def state_size(self) -> int:
        """Length of the observation vector."""
        pass

    @property
    @abstractmethod
    def action_size(self) -> int:
        pass

    @abstractmethod
    def reset(self, record: bool = False) -> np.ndarray:
        """
        Start a new level.

        Args:
            record: Keep per-step frames for get_replay()
        """
        pass

    @abstractmethod
    def step(self, action: int) -> Tuple[np.ndarray, float, bool, Dict[str, Any]]:
        """Returns (observation, reward, done, info)."""
        pass

    @abstractmethod
    def get_game_state(self) -> Dict[str, Any]:
        pass

    def action_mask(self) -> np.ndarray:
        """Actions worth taking now; every action unless a subclass knows better."""
        return np.ones(self.action_size, dtype=bool)

    def get_replay(self) -> List[Dict[str, Any]]:
        return []

    def seed(self, seed: Optional[int] = None) -> None:
        """Pick the level seed for the next reset."""
        pass
