"""
Frame advantage and punish enumeration for attacks blocked by shield.

Sign convention: a positive frame advantage means the shielding defender
acts before the attacker recovers, i.e. the attack is punishable.

Two independent ways out of shield are considered:
  - guard cancel: up smash, up special and grab straight out of shield, or
    any aerial after jump squat. These skip the shield release lag.
  - guard release: drop shield (fixed 11 frames) then start any other move.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from punish import config
from punish.frame_data import (
    GUARD_CANCEL,
    GUARD_RELEASE,
    CalculationContext,
    CalculationOptions,
    Fighter,
    Move,
    PunishMove,
    PunishResult,
    base_damage,
)
from punish.staleness import calculate_shield_damage, calculate_shield_stun

logger = logging.getLogger(__name__)

PERFECT_SHIELD_ADVANTAGE = 4
SHIELD_RELEASE_FRAMES = 11

# Effectiveness constants feed the probability heuristic (0-10 scale)
GUARD_CANCEL_DIRECT_EFFECTIVENESS = 8
GUARD_CANCEL_JUMP_EFFECTIVENESS = 7
GUARD_RELEASE_EFFECTIVENESS = 5


@dataclass
class FrameAdvantageResult:
    frame_advantage: int
    shield_stun: int
    shield_damage: int
    is_advantage: bool
    is_disadvantage: bool
    is_neutral: bool


def calculate_frame_advantage(
    attack_move: Move,
    shield_release_frames: int,
    staleness: str = "none",
    is_perfect_shield: bool = False,
) -> FrameAdvantageResult:
    """
    Frame advantage of the defender after blocking attack_move.

    Args:
        attack_move: The attack hitting shield
        shield_release_frames: Defender's shield release lag
        staleness: Staleness level of the attack
        is_perfect_shield: Adds a flat 4 frames when the block was a parry

    Returns:
        FrameAdvantageResult. Never raises for odd frame counts; negative
        values just come out as disadvantage.
    """
    damage = base_damage(attack_move.damage)
    shield_stun = calculate_shield_stun(damage, staleness)
    shield_damage = calculate_shield_damage(damage, staleness)

    attacker_exposed = attack_move.total_frames - attack_move.startup - attack_move.active
    defender_window = shield_stun + shield_release_frames

    frame_advantage = defender_window - attacker_exposed
    if is_perfect_shield:
        frame_advantage += PERFECT_SHIELD_ADVANTAGE

    return FrameAdvantageResult(
        frame_advantage=frame_advantage,
        shield_stun=shield_stun,
        shield_damage=shield_damage,
        is_advantage=frame_advantage > 0,
        is_disadvantage=frame_advantage < 0,
        is_neutral=frame_advantage == 0,
    )


def calculate_punish_window(
    attack_move: Move,
    defender: Fighter,
    staleness: str = "none",
    options: Optional[CalculationOptions] = None,
) -> PunishResult:
    """Frame advantage plus every punish the defender has in that window."""
    if options is None:
        options = CalculationOptions(staleness=staleness)

    advantage = calculate_frame_advantage(
        attack_move,
        defender.shield_data.shield_release_frames,
        staleness,
        options.allow_perfect_shield,
    )

    context = CalculationContext(
        staleness=staleness,
        shield_damage=advantage.shield_damage,
        shield_stun=advantage.shield_stun,
        range=attack_move.range,
        options=options,
    )

    punishing_moves = find_punishing_moves(
        defender,
        max(0, advantage.frame_advantage),
        context,
    )
    logger.debug(
        f"{attack_move.name} on {defender.name}'s shield: "
        f"{advantage.frame_advantage:+g} frames, {len(punishing_moves)} punishes"
    )

    return PunishResult(
        defending_fighter=defender,
        punishing_moves=punishing_moves,
        frame_advantage=advantage.frame_advantage,
        attacking_move=attack_move,
        calculation_context=context,
    )


# ---------------------------------------------------------------------------
# Punish enumeration
# ---------------------------------------------------------------------------

def find_punishing_moves(
    defender: Fighter,
    advantage_frames: int,
    context: CalculationContext,
) -> List[PunishMove]:
    """
    Enumerate the defender's responses that land within advantage_frames.

    advantage_frames is expected to be clamped to >= 0 by the caller.
    Results are filtered by the context options and sorted fastest first.
    """
    if advantage_frames <= 0:
        return []

    options = context.options
    candidates = []

    if options.allow_guard_cancel:
        candidates += _guard_cancel_options(defender, advantage_frames)
    if options.allow_out_of_shield:
        candidates += _guard_release_options(defender, advantage_frames)

    filtered = [
        p for p in candidates
        if p.damage >= options.minimum_damage
        and (not options.only_guaranteed or p.is_guaranteed)
        and p.move.range in options.range_filter
    ]
    # sort() is stable, so ties keep branch order
    filtered.sort(key=lambda p: p.total_frames)
    return filtered


def is_up_move(move: Move) -> bool:
    """Up smash / up special check. The explicit tag wins over the move name."""
    if move.is_up_variant is not None:
        return move.is_up_variant
    return "up" in move.name


def _is_up_smash(move: Move) -> bool:
    return move.category == "smash" and is_up_move(move)


def _is_up_special(move: Move) -> bool:
    return move.category == "special" and is_up_move(move)


def _is_grab(move: Move) -> bool:
    return move.category == "grab"


# (matcher, method, label) for moves usable directly out of shield
_DIRECT_GUARD_CANCELS = [
    (_is_up_smash, "guard_cancel_up_smash", "up smash"),
    (_is_up_special, "guard_cancel_up_b", "up special"),
    (_is_grab, "guard_cancel_grab", "shield grab"),
]


def _guard_cancel_options(defender: Fighter, advantage_frames: int) -> List[PunishMove]:
    punishes = []

    for matches, method, label in _DIRECT_GUARD_CANCELS:
        move = next((m for m in defender.moves if matches(m)), None)
        if move is not None and move.startup <= advantage_frames:
            punishes.append(_punish_move(
                move, method, move.startup, advantage_frames,
                GUARD_CANCEL_DIRECT_EFFECTIVENESS, GUARD_CANCEL,
                f"Guard cancel {label} (frame {move.startup})",
            ))

    jump_squat = defender.movement_data.jump_squat
    for move in defender.moves:
        if move.category != "aerial":
            continue
        total_frames = jump_squat + move.startup
        if total_frames <= advantage_frames:
            punishes.append(_punish_move(
                move, "guard_cancel_jump", total_frames, advantage_frames,
                GUARD_CANCEL_JUMP_EFFECTIVENESS, GUARD_CANCEL,
                f"Jump cancel: {jump_squat}F jump squat + {move.startup}F startup",
            ))

    return punishes


def _guard_release_options(defender: Fighter, advantage_frames: int) -> List[PunishMove]:
    punishes = []
    for move in defender.moves:
        if _is_grab(move) or _is_up_smash(move) or _is_up_special(move) or move.category == "aerial":
            continue
        total_frames = SHIELD_RELEASE_FRAMES + move.startup
        if total_frames <= advantage_frames:
            punishes.append(_punish_move(
                move, "out_of_shield", total_frames, advantage_frames,
                GUARD_RELEASE_EFFECTIVENESS, GUARD_RELEASE,
                f"Shield release: {SHIELD_RELEASE_FRAMES}F drop + {move.startup}F startup",
            ))
    return punishes


def _punish_move(move: Move, method: str, total_frames: int, advantage_frames: int,
                 effectiveness: float, guard_action_type: str, notes: str) -> PunishMove:
    return PunishMove(
        move=move,
        method=method,
        total_frames=total_frames,
        # a frame-perfect tie is a trade, not a guaranteed punish
        is_guaranteed=total_frames < advantage_frames,
        probability=punish_probability(total_frames, advantage_frames, effectiveness),
        damage=base_damage(move.damage),
        guard_action_type=guard_action_type,
        kill_percent=move.properties.kill_percent,
        notes=notes,
    )


def punish_probability(total_frames: int, advantage_frames: int, effectiveness: float) -> float:
    """More spare frames and a better option type -> likelier to land. Capped at 1."""
    frame_slack = advantage_frames - total_frames
    base_prob = min(1, frame_slack / 5)
    return min(1, base_prob + effectiveness / 10)


# ---------------------------------------------------------------------------
# Convenience predicates
# ---------------------------------------------------------------------------

def is_move_safe(attack_move: Move, shield_release_frames: int, staleness: str = "none") -> bool:
    result = calculate_frame_advantage(attack_move, shield_release_frames, staleness)
    return result.frame_advantage >= 0


def get_best_punish_options(punish_result: PunishResult, max_results: int = None) -> List[PunishMove]:
    """Guaranteed punishes only: kill moves first, then highest damage."""
    if max_results is None:
        max_results = config.BEST_PUNISH_LIMIT
    guaranteed = [p for p in punish_result.punishing_moves if p.is_guaranteed]
    guaranteed.sort(key=lambda p: (not p.move.properties.is_kill_move, -p.damage))
    return guaranteed[:max_results]
