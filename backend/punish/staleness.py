"""
Stale-move negation for shield interactions.

Every landed hit goes into a 9-slot queue; each copy of a move in the queue
weakens it by 1%. The weakened damage drives how long the defender sits in
shield stun and how much shield the hit eats.

Pure computation, no state of its own: the caller owns the queue.
"""

import math
from typing import List

from punish.frame_data import STALENESS_LEVELS


SHIELD_STUN_MULTIPLIER = 0.8665
SHIELD_DAMAGE_MULTIPLIER = 0.7
MIN_SHIELD_STUN = 2
STALENESS_QUEUE_SIZE = 9

# none -> 1.00, stale1 -> 0.99, ... stale9 -> 0.91
STALENESS_MULTIPLIERS = {
    level: round(1.0 - i * 0.01, 2) for i, level in enumerate(STALENESS_LEVELS)
}


def staleness_multiplier(staleness: str) -> float:
    """Damage multiplier for a staleness level. Unknown levels raise KeyError."""
    return STALENESS_MULTIPLIERS[staleness]


def calculate_shield_stun(damage: float, staleness: str = "none") -> int:
    """Frames the defender is locked in shield after absorbing the hit (min 2)."""
    adjusted = damage * staleness_multiplier(staleness)
    return max(MIN_SHIELD_STUN, math.floor(adjusted * SHIELD_STUN_MULTIPLIER + 2))


def calculate_shield_damage(damage: float, staleness: str = "none") -> int:
    adjusted = damage * staleness_multiplier(staleness)
    return math.floor(adjusted * SHIELD_DAMAGE_MULTIPLIER + 1)


# ---------------------------------------------------------------------------
# Staleness queue
# ---------------------------------------------------------------------------

def push_staleness(recent_ids: List[str], new_id: str,
                   max_size: int = STALENESS_QUEUE_SIZE) -> List[str]:
    """Return a new queue with new_id at the front, truncated to max_size."""
    return [new_id, *recent_ids][:max_size]


def staleness_level_of(recent_ids: List[str], move_id: str) -> str:
    count = sum(1 for m in recent_ids if m == move_id)
    if count == 0:
        return "none"
    if count >= 9:
        return "stale9"
    return f"stale{count}"
