"""
Punish calculation across a roster of defenders.

calculate_punish_options is a coroutine so a debounced UI can await it, but it
does no real async work: it loops over defenders synchronously. Overlapping
calls are independent; discarding stale results is up to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from punish import config
from punish.frame_calculator import calculate_punish_window
from punish.frame_data import (
    DEFAULT_POSITION_FILTER,
    CalculationOptions,
    Fighter,
    Move,
    PunishMove,
    PunishResult,
)

logger = logging.getLogger(__name__)


class CalculationError(Exception):
    """A batch calculation failed; the original error is chained as __cause__."""


@dataclass
class CalculationRequest:
    attacking_fighter: Optional[Fighter]
    attack_move: Optional[Move]
    defending_fighters: List[Fighter] = field(default_factory=list)
    options: Optional[CalculationOptions] = None


def default_calculation_options(**overrides) -> CalculationOptions:
    """CalculationOptions seeded from configuration, with keyword overrides."""
    values = {
        "staleness": config.DEFAULT_STALENESS,
        "minimum_damage": config.DEFAULT_MIN_DAMAGE,
        "minimum_frame_advantage": config.DEFAULT_MIN_FRAME_ADVANTAGE,
        "maximum_frame_advantage": config.DEFAULT_MAX_FRAME_ADVANTAGE,
    }
    values.update(overrides)
    return CalculationOptions(**values)


def validate_calculation_request(request: CalculationRequest) -> List[str]:
    """Return a list of problems with the request. Empty means it can run."""
    errors = []
    if not request.attacking_fighter:
        errors.append("No attacking fighter selected")
    if not request.attack_move:
        errors.append("No attack move selected")
    if not request.defending_fighters:
        errors.append("No defending fighters selected")
    if not request.options:
        errors.append("Calculation options are not set")
    return errors


async def calculate_punish_options(
    request: CalculationRequest,
    isolate_failures: Optional[bool] = None,
) -> List[PunishResult]:
    """
    Compute punishes for every defender against the request's attack.

    Each defender's moves go through a second filter with the caller's
    options, then are re-sorted guaranteed first and by damage. Defenders left
    with no moves are dropped.

    Args:
        request: Attack, defenders and options
        isolate_failures: Skip (and log) a defender that raises instead of
            failing the batch. Defaults to the LAGSCOPE_ISOLATE_FAILURES setting.

    Raises:
        CalculationError: the request itself is malformed (missing options or
            defenders), or a defender raised and isolation is off. No partial
            results are returned.
    """
    if isolate_failures is None:
        isolate_failures = config.ISOLATE_FAILURES

    try:
        options = request.options
        _warn_reserved_options(options)
        defenders = list(request.defending_fighters)
    except Exception as e:
        logger.exception("Calculation request is malformed")
        raise CalculationError("Calculation failed") from e

    results = []
    for defender in defenders:
        try:
            result = _calculate_for_defender(request.attack_move, defender, options)
        except Exception as e:
            defender_name = getattr(defender, "name", defender)
            if isolate_failures:
                logger.exception(f"Skipping {defender_name}: calculation failed")
                continue
            logger.exception(f"Calculation failed for {defender_name}")
            raise CalculationError("Calculation failed") from e

        if result is not None:
            results.append(result)

    logger.debug(f"{len(results)}/{len(defenders)} defenders can punish")
    return results


def _calculate_for_defender(attack_move: Move, defender: Fighter,
                            options: CalculationOptions) -> Optional[PunishResult]:
    result = calculate_punish_window(attack_move, defender, options.staleness, options)

    moves = filter_punish_moves(result.punishing_moves, result.frame_advantage, options)
    if not moves:
        return None

    moves.sort(key=lambda p: (not p.is_guaranteed, -p.damage))
    result.punishing_moves = moves
    return result


def filter_punish_moves(moves: List[PunishMove], frame_advantage: int,
                        options: CalculationOptions) -> List[PunishMove]:
    """Caller-facing filter. frame_advantage is the result's, not per move."""
    if not (options.minimum_frame_advantage <= frame_advantage <= options.maximum_frame_advantage):
        return []

    return [
        p for p in moves
        if p.move.range in options.range_filter
        and p.damage >= options.minimum_damage
        and (not options.only_guaranteed or p.is_guaranteed)
        and (options.include_kill_moves or not p.move.properties.is_kill_move)
    ]


def _warn_reserved_options(options: CalculationOptions):
    # DI/SDI and position filtering are not modelled yet
    if options.include_di_options:
        logger.warning("include_di_options is set but DI options are not calculated")
    if options.include_sdi_options:
        logger.warning("include_sdi_options is set but SDI options are not calculated")
    if list(options.position_filter) != DEFAULT_POSITION_FILTER:
        logger.warning(
            f"position_filter {options.position_filter} ignored: "
            f"calculations assume center stage"
        )
