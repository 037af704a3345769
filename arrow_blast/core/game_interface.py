"""
Player-facing game contract.

A game turns the rules engine into integer actions and shaped rewards, so a
scripted policy, a human front-end and a learning agent all drive a level the
same way.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Tuple, List


@dataclass
class GameMetadata:
    """Static facts about a game, for listings and agent setup."""

    name: str
    id: str
    description: str
    version: str = "1.0.0"
    supports_human: bool = True
    recommended_algorithms: List[str] = field(default_factory=lambda: ["dqn"])


class GameInterface(ABC):
    """
    Integer-action wrapper over a puzzle engine.

    Action 0 is always "wait". The meaning of the other indices is up to the
    game; legal_actions() lists the ones that do something right now.
    """

    @classmethod
    @abstractmethod
    def get_metadata(cls) -> GameMetadata:
        pass

    @abstractmethod
    def reset(self) -> Dict[str, Any]:
        """Load the next level and return its state dictionary."""
        pass

    @abstractmethod
    def step(self, action: int) -> Tuple[Dict[str, Any], float, bool, Dict[str, Any]]:
        """
        Apply one action, then advance the fire timer by one step.

        Returns:
            Tuple of (state, reward, done, info)
        """
        pass

    @abstractmethod
    def legal_actions(self) -> List[int]:
        """Wait plus every action that would change the state now."""
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """JSON-friendly snapshot of the wall, arrows, slots and counters."""
        pass

    @abstractmethod
    def is_valid_action(self, action: int) -> bool:
        pass

    @property
    @abstractmethod
    def action_space_size(self) -> int:
        pass

    @property
    @abstractmethod
    def action_names(self) -> List[str]:
        """Label per action index, e.g. "Collect (2,3)"."""
        pass

    def get_score(self) -> int:
        """Blocks destroyed so far."""
        return 0
