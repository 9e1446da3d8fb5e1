"""
Frame data records for SSBU punish calculation.

Fighters and moves arrive already validated (from the data generation
scripts or a JSON export of them). The loaders here only copy fields from the
camelCase JSON layout into dataclasses; they do not check ranges or types.
Computed records (PunishMove, PunishResult) are built fresh per calculation.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union


STALENESS_LEVELS = (
    "none", "stale1", "stale2", "stale3", "stale4",
    "stale5", "stale6", "stale7", "stale8", "stale9",
)

GUARD_CANCEL = "guard_cancel"
GUARD_RELEASE = "guard_release"

DEFAULT_RANGE_FILTER = ["close", "mid", "far"]
DEFAULT_POSITION_FILTER = ["center"]

Damage = Union[float, List[float]]


def base_damage(damage: Damage) -> float:
    """First hit of a multi-hit move, or the scalar damage. Empty list -> 0."""
    if isinstance(damage, (list, tuple)):
        return damage[0] if len(damage) > 0 else 0
    return damage


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

@dataclass
class MoveProperties:
    is_kill_move: bool = False
    kill_percent: Optional[float] = None
    has_armor: bool = False
    armor_threshold: Optional[float] = None
    is_command_grab: bool = False
    is_spike: bool = False
    is_meteor: bool = False
    has_invincibility: bool = False
    has_intangibility: bool = False
    can_clank: bool = True
    priority: int = 1
    transcendent_priority: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "MoveProperties":
        return cls(
            is_kill_move=data.get("isKillMove", False),
            kill_percent=data.get("killPercent"),
            has_armor=data.get("hasArmor", False),
            armor_threshold=data.get("armorThreshold"),
            is_command_grab=data.get("isCommandGrab", False),
            is_spike=data.get("isSpike", False),
            is_meteor=data.get("isMeteor", False),
            has_invincibility=data.get("hasInvincibility", False),
            has_intangibility=data.get("hasIntangibility", False),
            can_clank=data.get("canClank", True),
            priority=data.get("priority", 1),
            transcendent_priority=data.get("transcendentPriority", False),
        )


@dataclass
class Move:
    """A single attack. total_frames == startup + active + recovery upstream."""
    id: str
    name: str
    display_name: str
    category: str
    type: str
    startup: int
    active: int
    recovery: int
    total_frames: int
    damage: Damage
    range: str
    on_shield: int = 0
    on_hit: int = 0
    on_whiff: int = 0
    input: str = ""
    base_knockback: float = 0
    knockback_growth: float = 0
    properties: MoveProperties = field(default_factory=MoveProperties)
    notes: Optional[str] = None
    # Explicit up-direction tag. None means "fall back to the move name".
    is_up_variant: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Move":
        return cls(
            id=data["id"],
            name=data["name"],
            display_name=data.get("displayName", data["name"]),
            category=data["category"],
            type=data["type"],
            startup=data["startup"],
            active=data["active"],
            recovery=data["recovery"],
            total_frames=data["totalFrames"],
            damage=data["damage"],
            range=data["range"],
            on_shield=data.get("onShield", 0),
            on_hit=data.get("onHit", 0),
            on_whiff=data.get("onWhiff", 0),
            input=data.get("input", ""),
            base_knockback=data.get("baseKnockback", 0),
            knockback_growth=data.get("knockbackGrowth", 0),
            properties=MoveProperties.from_dict(data.get("properties", {})),
            notes=data.get("notes"),
            is_up_variant=data.get("isUpVariant"),
        )


@dataclass
class OutOfShieldOption:
    move: str
    frames: int
    type: str
    effectiveness: float


@dataclass
class ShieldData:
    shield_release_frames: int = 11
    shield_health: float = 50
    shield_regen: float = 0.07
    shield_regen_delay: int = 30
    shield_drop_frames: int = 4
    shield_grab_frames: int = 6
    out_of_shield_options: List[OutOfShieldOption] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ShieldData":
        return cls(
            shield_release_frames=data["shieldReleaseFrames"],
            shield_health=data.get("shieldHealth", 50),
            shield_regen=data.get("shieldRegen", 0.07),
            shield_regen_delay=data.get("shieldRegenDelay", 30),
            shield_drop_frames=data.get("shieldDropFrames", 4),
            shield_grab_frames=data.get("shieldGrabFrames", 6),
            out_of_shield_options=[
                OutOfShieldOption(o["move"], o["frames"], o["type"], o["effectiveness"])
                for o in data.get("outOfShieldOptions", [])
            ],
        )


@dataclass
class MovementData:
    jump_squat: int = 3
    full_hop_height: float = 0
    short_hop_height: float = 0
    air_jumps: int = 1

    @classmethod
    def from_dict(cls, data: dict) -> "MovementData":
        return cls(
            jump_squat=data["jumpSquat"],
            full_hop_height=data.get("fullHopHeight", 0),
            short_hop_height=data.get("shortHopHeight", 0),
            air_jumps=data.get("airJumps", 1),
        )


@dataclass
class Fighter:
    id: str
    name: str
    display_name: str
    moves: List[Move]
    shield_data: ShieldData
    movement_data: MovementData
    series: str = ""
    weight: float = 100
    fall_speed: float = 0
    fast_fall_speed: float = 0
    gravity: float = 0
    walk_speed: float = 0
    run_speed: float = 0
    air_speed: float = 0

    def get_move(self, move_id: str) -> Optional[Move]:
        for move in self.moves:
            if move.id == move_id or move.name == move_id:
                return move
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "Fighter":
        return cls(
            id=data["id"],
            name=data["name"],
            display_name=data.get("displayName", data["name"]),
            moves=[Move.from_dict(m) for m in data.get("moves", [])],
            shield_data=ShieldData.from_dict(data["shieldData"]),
            movement_data=MovementData.from_dict(data["movementData"]),
            series=data.get("series", ""),
            weight=data.get("weight", 100),
            fall_speed=data.get("fallSpeed", 0),
            fast_fall_speed=data.get("fastFallSpeed", 0),
            gravity=data.get("gravity", 0),
            walk_speed=data.get("walkSpeed", 0),
            run_speed=data.get("runSpeed", 0),
            air_speed=data.get("airSpeed", 0),
        )


def load_fighters(path) -> List[Fighter]:
    """Read a JSON list of fighter records (camelCase layout) from disk."""
    with open(Path(path), encoding="utf-8") as fp:
        data = json.load(fp)
    return [Fighter.from_dict(f) for f in data]


# ---------------------------------------------------------------------------
# Calculation options and computed results
# ---------------------------------------------------------------------------

@dataclass
class CalculationOptions:
    staleness: str = "none"
    range_filter: List[str] = field(default_factory=lambda: list(DEFAULT_RANGE_FILTER))
    allow_out_of_shield: bool = True
    allow_guard_cancel: bool = True
    allow_perfect_shield: bool = False
    minimum_frame_advantage: float = -999
    maximum_frame_advantage: float = 999
    minimum_damage: float = 0
    only_guaranteed: bool = False
    include_kill_moves: bool = True
    # Reserved: accepted but not consumed by the enumeration.
    include_di_options: bool = False
    include_sdi_options: bool = False
    position_filter: List[str] = field(default_factory=lambda: list(DEFAULT_POSITION_FILTER))


@dataclass
class CalculationContext:
    staleness: str
    shield_damage: int
    shield_stun: int
    range: str
    options: CalculationOptions
    position: str = "center"


@dataclass
class PunishMove:
    move: Move
    method: str
    total_frames: int
    is_guaranteed: bool
    probability: float
    damage: float
    guard_action_type: str
    kill_percent: Optional[float] = None
    notes: str = ""


@dataclass
class PunishResult:
    defending_fighter: Fighter
    punishing_moves: List[PunishMove]
    frame_advantage: int
    attacking_move: Move
    calculation_context: CalculationContext
