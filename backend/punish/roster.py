"""
Sample frame data for a handful of fighters.

Used by the benchmark script and as realistic fixtures. Values are from
Ultimate Frame Data (ultimateframedata.com), rounded; multi-hit moves list
each hit and the engine only reads the first.

Format: character_key -> fighter constants + list of move tuples
    (name, display_name, category, type, startup, active, total_frames,
     damage, range, kill_percent)
recovery is derived as total_frames - startup - active.
"""

from typing import List, Optional

from punish.frame_data import (
    Fighter,
    Move,
    MoveProperties,
    MovementData,
    ShieldData,
)

FIGHTER_DATA = {
    "mario": {
        "name": "Mario",
        "series": "Super Mario",
        "weight": 98,
        "jump_squat": 3,
        "moves": [
            ("jab1", "Jab 1", "jab", "normal", 2, 2, 19, 2.2, "close", None),
            ("ftilt", "Forward Tilt", "tilt", "normal", 5, 3, 27, 7.0, "mid", None),
            ("utilt", "Up Tilt", "tilt", "normal", 5, 8, 30, 5.5, "close", None),
            ("dtilt", "Down Tilt", "tilt", "normal", 5, 3, 21, 7.0, "close", None),
            ("dash_attack", "Dash Attack", "dash", "normal", 6, 20, 38, 8.0, "mid", None),
            ("fsmash", "Forward Smash", "smash", "normal", 15, 3, 49, 17.8, "mid", 95),
            ("up_smash", "Up Smash", "smash", "normal", 9, 4, 38, 14.0, "close", 120),
            ("down_smash", "Down Smash", "smash", "normal", 5, 2, 47, 10.0, "close", None),
            ("nair", "Neutral Air", "aerial", "normal", 3, 20, 45, 8.0, "close", None),
            ("fair", "Forward Air", "aerial", "normal", 16, 4, 60, 14.0, "mid", 110),
            ("bair", "Back Air", "aerial", "normal", 6, 4, 33, 10.5, "close", None),
            ("uair", "Up Air", "aerial", "normal", 4, 4, 30, 7.0, "close", None),
            ("neutral_b", "Fireball", "special", "special", 17, 2, 50, 5.0, "projectile", None),
            ("up_b", "Super Jump Punch", "special", "special", 3, 3, 50, [5.0, 0.6, 0.6, 3.0], "close", None),
            ("grab", "Grab", "grab", "grab", 6, 2, 34, 0, "close", None),
        ],
    },
    "fox": {
        "name": "Fox",
        "series": "Star Fox",
        "weight": 77,
        "jump_squat": 3,
        "moves": [
            ("jab1", "Jab 1", "jab", "normal", 2, 1, 18, 1.8, "close", None),
            ("utilt", "Up Tilt", "tilt", "normal", 5, 6, 23, 6.0, "close", None),
            ("dtilt", "Down Tilt", "tilt", "normal", 7, 3, 20, 7.0, "close", None),
            ("up_smash", "Up Smash", "smash", "normal", 7, 3, 41, 16.0, "close", 105),
            ("nair", "Neutral Air", "aerial", "normal", 4, 28, 39, 9.0, "close", None),
            ("uair", "Up Air", "aerial", "normal", 8, 2, 32, [5.0, 11.0], "close", None),
            ("bair", "Back Air", "aerial", "normal", 7, 3, 32, 13.0, "mid", 140),
            ("up_b", "Fire Fox", "special", "special", 42, 25, 120, 2.0, "far", None),
            ("grab", "Grab", "grab", "grab", 6, 2, 37, 0, "close", None),
        ],
    },
    "bowser": {
        "name": "Bowser",
        "series": "Super Mario",
        "weight": 135,
        "jump_squat": 8,
        "moves": [
            ("jab1", "Jab 1", "jab", "normal", 4, 3, 24, 5.0, "close", None),
            ("dtilt", "Down Tilt", "tilt", "normal", 8, 3, 36, 11.0, "mid", None),
            ("up_smash", "Up Smash", "smash", "normal", 16, 5, 67, 22.0, "close", 80),
            ("nair", "Neutral Air", "aerial", "normal", 4, 20, 46, 5.0, "close", None),
            ("fair", "Forward Air", "aerial", "normal", 9, 4, 46, 13.0, "mid", 115),
            ("bair", "Back Air", "aerial", "normal", 7, 4, 41, 19.0, "mid", 90),
            ("up_b", "Whirling Fortress", "special", "special", 6, 30, 60, 11.0, "close", None),
            ("grab", "Grab", "grab", "grab", 8, 2, 40, 0, "close", None),
        ],
    },
}

ALL_FIGHTERS = sorted(FIGHTER_DATA)


def _build_move(key: str, row: tuple) -> Move:
    name, display, category, move_type, startup, active, total, damage, range_, kill_percent = row
    return Move(
        id=f"{key}-{name}",
        name=name,
        display_name=display,
        category=category,
        type=move_type,
        startup=startup,
        active=active,
        recovery=total - startup - active,
        total_frames=total,
        damage=list(damage) if isinstance(damage, list) else damage,
        range=range_,
        properties=MoveProperties(
            is_kill_move=kill_percent is not None,
            kill_percent=kill_percent,
        ),
    )


def build_fighter(key: str) -> Optional[Fighter]:
    data = FIGHTER_DATA.get(key.lower())
    if data is None:
        return None
    return Fighter(
        id=key.lower(),
        name=key.lower(),
        display_name=data["name"],
        series=data["series"],
        weight=data["weight"],
        moves=[_build_move(key.lower(), row) for row in data["moves"]],
        shield_data=ShieldData(shield_release_frames=11),
        movement_data=MovementData(jump_squat=data["jump_squat"]),
    )


def get_fighter(key: str) -> Optional[Fighter]:
    """Look up a sample fighter by key or display name."""
    if not key:
        return None
    fighter = build_fighter(key)
    if fighter is not None:
        return fighter
    for k, v in FIGHTER_DATA.items():
        if v["name"].lower() == key.lower():
            return build_fighter(k)
    return None


def get_roster() -> List[Fighter]:
    return [build_fighter(k) for k in ALL_FIGHTERS]
