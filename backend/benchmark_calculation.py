#!/usr/bin/env python3
"""
Benchmark script for the punish calculation over the sample roster.
Run with: python benchmark_calculation.py [attacker] [iterations]
"""
import asyncio
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from punish.calculation_service import (
    CalculationRequest,
    calculate_punish_options,
    default_calculation_options,
)
from punish.config import configure_logging
from punish.roster import ALL_FIGHTERS, get_fighter, get_roster


def benchmark_attacker(attacker_key: str, iterations: int = 200):
    """Time every move of one attacker against the whole sample roster."""
    attacker = get_fighter(attacker_key)
    if attacker is None:
        print(f"Unknown fighter: {attacker_key} (choose from {', '.join(ALL_FIGHTERS)})")
        sys.exit(1)

    defenders = get_roster()
    options = default_calculation_options()

    print(f"\n{'='*60}")
    print(f"{attacker.display_name.upper()} vs {len(defenders)} defenders, {iterations} iterations")
    print(f"{'='*60}")

    timings = {}
    for move in attacker.moves:
        request = CalculationRequest(attacker, move, defenders, options)
        start = time.time()
        for _ in range(iterations):
            results = asyncio.run(calculate_punish_options(request))
        elapsed = time.time() - start
        timings[move.name] = elapsed
        punishers = ", ".join(r.defending_fighter.display_name for r in results) or "-"
        print(f"{move.display_name:<20} {elapsed/iterations*1000:.3f}ms/call  punished by: {punishers}")

    return timings


def main():
    attacker_key = sys.argv[1] if len(sys.argv) > 1 else "mario"
    iterations = int(sys.argv[2]) if len(sys.argv) > 2 else 200

    configure_logging()
    timings = benchmark_attacker(attacker_key, iterations)

    total = sum(timings.values())
    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    print(f"Moves:  {len(timings)}")
    print(f"Total:  {total:.2f}s")
    if timings:
        slowest = max(timings, key=timings.get)
        print(f"Slowest move: {slowest} ({timings[slowest]/iterations*1000:.3f}ms/call)")


if __name__ == "__main__":
    main()
