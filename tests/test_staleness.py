"""Tests for stale-move negation and the staleness queue."""
import pytest

from punish.frame_data import STALENESS_LEVELS
from punish.staleness import (
    STALENESS_MULTIPLIERS,
    calculate_shield_damage,
    calculate_shield_stun,
    push_staleness,
    staleness_level_of,
)


def test_multiplier_table_steps_by_one_percent():
    assert STALENESS_MULTIPLIERS["none"] == 1.0
    assert STALENESS_MULTIPLIERS["stale1"] == 0.99
    assert STALENESS_MULTIPLIERS["stale9"] == 0.91
    assert len(STALENESS_MULTIPLIERS) == 10


def test_shield_stun_known_values():
    assert calculate_shield_stun(0) == 2
    assert calculate_shield_stun(5) == 6
    assert calculate_shield_stun(20) == 19
    assert calculate_shield_stun(999, "none") == 867


def test_shield_stun_minimum_for_negative_damage():
    assert calculate_shield_stun(-10) == 2
    assert calculate_shield_stun(-10, "stale9") == 2


def test_shield_stun_never_below_two_and_non_increasing_with_staleness():
    for damage in [0, 0.5, 1, 2.2, 7, 13.5, 20, 45, 120]:
        stuns = [calculate_shield_stun(damage, level) for level in STALENESS_LEVELS]
        assert all(s >= 2 for s in stuns)
        assert stuns == sorted(stuns, reverse=True)


def test_staleness_lowers_stun_for_large_hits():
    assert calculate_shield_stun(100, "stale9") < calculate_shield_stun(100, "stale1")
    assert calculate_shield_stun(100, "stale1") <= calculate_shield_stun(100, "none")


def test_shield_damage():
    assert calculate_shield_damage(0) == 1
    assert calculate_shield_damage(10) == 8
    assert calculate_shield_damage(10, "stale9") == 7


def test_unknown_staleness_level_raises():
    with pytest.raises(KeyError):
        calculate_shield_stun(10, "fresh")


def test_push_staleness_prepends_without_mutating():
    queue = ["ftilt", "jab1"]
    new_queue = push_staleness(queue, "nair")
    assert new_queue == ["nair", "ftilt", "jab1"]
    assert queue == ["ftilt", "jab1"]
    assert push_staleness([], "jab1") == ["jab1"]


def test_push_staleness_truncates():
    queue = [f"m{i}" for i in range(9)]
    new_queue = push_staleness(queue, "new")
    assert len(new_queue) == 9
    assert new_queue[0] == "new"
    assert "m8" not in new_queue

    assert push_staleness(["a", "b", "c"], "d", max_size=2) == ["d", "a"]


def test_staleness_level_of():
    assert staleness_level_of([], "jab1") == "none"
    assert staleness_level_of(["jab1"], "jab1") == "stale1"
    assert staleness_level_of(["jab1", "ftilt", "jab1"], "jab1") == "stale2"
    assert staleness_level_of(["ftilt"], "jab1") == "none"
    assert staleness_level_of(["jab1"] * 9, "jab1") == "stale9"
    assert staleness_level_of(["jab1"] * 12, "jab1") == "stale9"


def test_queue_feeds_level():
    queue = []
    for move in ["fair", "fair", "nair", "fair"]:
        queue = push_staleness(queue, move)
    assert staleness_level_of(queue, "fair") == "stale3"
    assert staleness_level_of(queue, "nair") == "stale1"
