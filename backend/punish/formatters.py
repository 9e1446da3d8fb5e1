# Display labels for punish results. Unknown keys fall back to the raw value.

METHOD_LABELS = {
    "out_of_shield": "Shield release",
    "guard_cancel_jump": "Jump cancel aerial",
    "guard_cancel_grab": "Shield grab",
    "guard_cancel_up_b": "Up B out of shield",
    "guard_cancel_up_smash": "Up smash out of shield",
}

MOVE_TYPE_LABELS = {
    "normal": "Normal",
    "special": "Special",
    "grab": "Grab",
    "throw": "Throw",
    "dodge": "Dodge",
    "movement": "Movement",
}


def format_method(method: str) -> str:
    return METHOD_LABELS.get(method, method)


def format_move_type(move_type: str) -> str:
    return MOVE_TYPE_LABELS.get(move_type, move_type)


def format_staleness(level: str) -> str:
    """'none' -> 'Fresh', 'stale3' -> 'Stale x3'."""
    if level == "none":
        return "Fresh"
    if level.startswith("stale") and level[5:].isdigit():
        return f"Stale x{level[5:]}"
    return level


def format_probability(probability: float) -> str:
    return f"{round(probability * 100)}%"


def format_frame_advantage(frames: float) -> str:
    return f"{frames:+g}F"
