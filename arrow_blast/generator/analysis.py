"""
Level analysis - ammo balance and arrow clearability of a blueprint.

Used by the level tools to validate hand-made or loaded levels the same way
generated ones are guaranteed to behave.
"""

from collections import Counter
from typing import Dict, List, Tuple

from ..game.escape import can_escape
from ..game.grid_state import GridState
from ..game.types import Color, LevelBlueprint


def ammo_balance(blueprint: LevelBlueprint) -> Dict[Color, Tuple[int, int]]:
    """
    Blocks versus ammo for every color that appears in the level.

    Returns:
        Mapping color -> (block count, total ammo)
    """
    blocks = Counter(Color(b.color) for b in blueprint.blocks)
    ammo: Counter = Counter()
    for arrow in blueprint.arrows:
        ammo[Color(arrow.color)] += arrow.ammo

    return {
        color: (blocks.get(color, 0), ammo.get(color, 0))
        for color in sorted(set(blocks) | set(ammo))
    }


def is_balanced(blueprint: LevelBlueprint) -> bool:
    """True when every color has exactly as much ammo as blocks."""
    return all(count == ammo for count, ammo in ammo_balance(blueprint).values())


def find_collection_order(blueprint: LevelBlueprint) -> List[int]:
    """
    Simulate collecting arrows greedily until none can escape.

    Each round collects every arrow that is currently free, highest index
    first, so arrows placed later are preferred.

    Args:
        blueprint: Level to analyse (raises InvalidBlueprint if malformed)

    Returns:
        Arrow indices in a legal collection order. Shorter than the arrow
        list when some arrows can never escape.
    """
    grid = GridState()
    grid.load(blueprint)

    order: List[int] = []
    changed = True
    while changed and grid.has_arrows():
        changed = False
        for arrow in reversed(grid.arrows()):
            if can_escape(grid, arrow):
                grid.remove_arrow(arrow)
                order.append(arrow.id)
                changed = True
    return order


def is_clearable(blueprint: LevelBlueprint) -> bool:
    """True when every arrow of the level can eventually be collected."""
    return len(find_collection_order(blueprint)) == len(blueprint.arrows)
