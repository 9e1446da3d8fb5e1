"""Tests for the roster-wide punish calculation."""
import asyncio
import logging

import pytest

from punish import config
from punish.calculation_service import (
    CalculationError,
    CalculationRequest,
    calculate_punish_options,
    default_calculation_options,
    filter_punish_moves,
    validate_calculation_request,
)
from punish.frame_data import (
    CalculationOptions,
    Fighter,
    Move,
    MoveProperties,
    MovementData,
    ShieldData,
)


def _move(name, category="tilt", startup=5, active=2, total=30, damage=10.0,
          range_="close", kill_percent=None):
    return Move(
        id=name, name=name, display_name=name, category=category, type="normal",
        startup=startup, active=active, recovery=total - startup - active,
        total_frames=total, damage=damage, range=range_,
        properties=MoveProperties(is_kill_move=kill_percent is not None, kill_percent=kill_percent),
    )


def _fighter(fighter_id, moves, jump_squat=3):
    return Fighter(
        id=fighter_id, name=fighter_id, display_name=fighter_id.title(), moves=moves,
        shield_data=ShieldData(shield_release_frames=11),
        movement_data=MovementData(jump_squat=jump_squat),
    )


ATTACKER = _fighter("attacker", [])
# +20 for an 11-frame shield release
ATTACK = _move("fsmash", "smash", startup=5, active=5, total=20, damage=20)


def _punisher():
    return _fighter("punisher", [
        _move("up_smash", "smash", startup=9, damage=14, kill_percent=120),
        _move("up_b", "special", startup=3, damage=[5.0, 1.0]),
        _move("grab", "grab", startup=6, damage=0),
        _move("nair", "aerial", startup=3, damage=8),
        _move("fair", "aerial", startup=16, damage=12),
        _move("jab1", "jab", startup=2, damage=2.2),
        _move("neutral_b", "special", startup=9, damage=5, range_="mid"),
    ])


def _slowpoke():
    return _fighter("slowpoke", [_move("fsmash", "smash", startup=30, damage=20)])


def _run(request, **kwargs):
    return asyncio.run(calculate_punish_options(request, **kwargs))


def test_results_only_include_defenders_with_punishes():
    request = CalculationRequest(ATTACKER, ATTACK, [_punisher(), _slowpoke()], CalculationOptions())
    results = _run(request)
    assert [r.defending_fighter.id for r in results] == ["punisher"]
    assert results[0].frame_advantage == 20
    assert results[0].attacking_move is ATTACK


def test_final_order_guaranteed_first_then_damage():
    request = CalculationRequest(ATTACKER, ATTACK, [_punisher()], CalculationOptions())
    moves = _run(request)[0].punishing_moves
    assert [p.move.name for p in moves] == [
        "up_smash", "fair", "nair", "up_b", "jab1", "grab", "neutral_b",
    ]
    assert moves[-1].is_guaranteed is False


def test_frame_advantage_bounds_apply_to_whole_result():
    options = CalculationOptions(minimum_frame_advantage=21)
    assert _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], options)) == []

    options = CalculationOptions(maximum_frame_advantage=19)
    assert _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], options)) == []

    options = CalculationOptions(minimum_frame_advantage=20, maximum_frame_advantage=20)
    assert len(_run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], options))) == 1


def test_kill_moves_can_be_excluded():
    options = CalculationOptions(include_kill_moves=False)
    moves = _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], options))[0].punishing_moves
    assert "up_smash" not in {p.move.name for p in moves}


def test_only_guaranteed_and_minimum_damage():
    options = CalculationOptions(only_guaranteed=True, minimum_damage=8)
    moves = _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], options))[0].punishing_moves
    assert [p.move.name for p in moves] == ["up_smash", "fair", "nair"]


def test_staleness_option_shrinks_window():
    fresh = _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], CalculationOptions()))
    stale = _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], CalculationOptions(staleness="stale9")))
    assert stale[0].frame_advantage == 18
    assert stale[0].frame_advantage < fresh[0].frame_advantage
    assert stale[0].calculation_context.staleness == "stale9"


def test_empty_defender_list():
    assert _run(CalculationRequest(ATTACKER, ATTACK, [], CalculationOptions())) == []


def test_filter_punish_moves_uses_result_advantage():
    moves = _run(CalculationRequest(ATTACKER, ATTACK, [_punisher()], CalculationOptions()))[0].punishing_moves
    options = CalculationOptions(minimum_frame_advantage=5)
    assert filter_punish_moves(moves, 4, options) == []
    assert len(filter_punish_moves(moves, 5, options)) == len(moves)


def test_failure_aborts_batch():
    broken = _fighter("broken", [])
    broken.shield_data = None
    request = CalculationRequest(ATTACKER, ATTACK, [_punisher(), broken], CalculationOptions())

    with pytest.raises(CalculationError) as exc_info:
        _run(request, isolate_failures=False)
    assert isinstance(exc_info.value.__cause__, AttributeError)


def test_failure_isolation_skips_only_broken_defender(caplog):
    broken = _fighter("broken", [])
    broken.shield_data = None
    request = CalculationRequest(ATTACKER, ATTACK, [broken, _punisher()], CalculationOptions())

    with caplog.at_level(logging.ERROR, logger="punish.calculation_service"):
        results = _run(request, isolate_failures=True)

    assert [r.defending_fighter.id for r in results] == ["punisher"]
    assert "Skipping broken" in caplog.text


def test_failure_isolation_follows_config(monkeypatch):
    monkeypatch.setattr(config, "ISOLATE_FAILURES", True)
    broken = _fighter("broken", [])
    broken.shield_data = None
    request = CalculationRequest(ATTACKER, ATTACK, [broken], CalculationOptions())
    assert _run(request) == []


def test_reserved_options_are_reported(caplog):
    options = CalculationOptions(
        include_di_options=True, include_sdi_options=True, position_filter=["ledge"],
    )
    request = CalculationRequest(ATTACKER, ATTACK, [_punisher()], options)

    with caplog.at_level(logging.WARNING, logger="punish.calculation_service"):
        results = _run(request)

    assert len(results) == 1
    assert "include_di_options" in caplog.text
    assert "include_sdi_options" in caplog.text
    assert "position_filter" in caplog.text


def test_default_options_do_not_warn(caplog):
    request = CalculationRequest(ATTACKER, ATTACK, [_punisher()], CalculationOptions())
    with caplog.at_level(logging.WARNING, logger="punish.calculation_service"):
        _run(request)
    assert caplog.text == ""


def test_validate_calculation_request():
    assert validate_calculation_request(CalculationRequest(None, None)) == [
        "No attacking fighter selected",
        "No attack move selected",
        "No defending fighters selected",
        "Calculation options are not set",
    ]
    ok = CalculationRequest(ATTACKER, ATTACK, [_punisher()], CalculationOptions())
    assert validate_calculation_request(ok) == []


def test_default_calculation_options(monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_MIN_DAMAGE", 3.0)
    options = default_calculation_options(only_guaranteed=True)
    assert options.minimum_damage == 3.0
    assert options.only_guaranteed is True
    assert options.staleness == config.DEFAULT_STALENESS

    options = default_calculation_options(minimum_damage=10)
    assert options.minimum_damage == 10


def test_malformed_request_is_wrapped():
    missing_options = CalculationRequest(ATTACKER, ATTACK, [_punisher()], None)
    with pytest.raises(CalculationError) as exc_info:
        _run(missing_options, isolate_failures=True)
    assert isinstance(exc_info.value.__cause__, AttributeError)

    missing_defenders = CalculationRequest(ATTACKER, ATTACK, None, CalculationOptions())
    with pytest.raises(CalculationError) as exc_info:
        _run(missing_defenders, isolate_failures=True)
    assert isinstance(exc_info.value.__cause__, TypeError)
