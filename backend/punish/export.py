"""
Export punish results as CSV, plain text or JSON.

Exporters return strings; writing them somewhere is the caller's job.
One row per (defender, punish move) pair.
"""

import csv
import io
import json
from datetime import datetime
from typing import List

from punish import config
from punish.formatters import (
    format_frame_advantage,
    format_method,
    format_move_type,
    format_probability,
    format_staleness,
)
from punish.frame_data import PunishResult

GENERATOR = "LagScope - SSBU shield punish calculator"

CSV_HEADERS = [
    "Defender", "Move", "Move Type", "Damage", "Startup", "Total Frames",
    "Method", "Guaranteed", "Probability", "Kill %", "Frame Advantage",
    "Attack", "Range", "Staleness",
]


class ExportError(Exception):
    pass


def _flatten(results: List[PunishResult]) -> list:
    if not results:
        raise ExportError("No results to export")
    return [(r, p) for r in results for p in r.punishing_moves]


def _metadata(results: List[PunishResult], row_count: int) -> List[str]:
    return [
        f"Exported: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"Rows: {row_count}",
        f"Fighters: {len({r.defending_fighter.id for r in results})}",
        f"Generated by: {GENERATOR}",
    ]


def export_to_csv(results: List[PunishResult], include_metadata: bool = False) -> str:
    rows = _flatten(results)

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for result, punish in rows:
        writer.writerow([
            result.defending_fighter.display_name,
            punish.move.display_name,
            format_move_type(punish.move.type),
            punish.damage,
            punish.move.startup,
            punish.total_frames,
            format_method(punish.method),
            "Yes" if punish.is_guaranteed else "No",
            format_probability(punish.probability),
            punish.kill_percent if punish.kill_percent is not None else "-",
            result.frame_advantage,
            result.attacking_move.display_name,
            result.calculation_context.range,
            result.calculation_context.staleness,
        ])

    content = buf.getvalue()
    if include_metadata:
        content = "\n".join(_metadata(results, len(rows))) + "\n\n" + content
    return content


def _text_line(punish, with_probability: bool) -> str:
    line = (
        f"    - {punish.move.display_name} ({format_move_type(punish.move.type)})"
        f" - {punish.damage}% [{punish.move.startup}F/{punish.total_frames}F]"
        f" ({format_method(punish.method)})"
    )
    if with_probability:
        line += f" {format_probability(punish.probability)} to land"
    if punish.kill_percent:
        line += f" kills at {punish.kill_percent}%"
    return line


def export_to_text(results: List[PunishResult], include_metadata: bool = False) -> str:
    """Per-defender report, guaranteed punishes listed before the rest."""
    rows = _flatten(results)
    lines = []

    if include_metadata:
        lines.append(GENERATOR)
        lines.append("=" * 50)
        lines += _metadata(results, len(rows))
        lines.append("=" * 50)
        lines.append("")

    for result in results:
        ctx = result.calculation_context
        moves = result.punishing_moves[:config.MAX_RESULTS_DISPLAY]
        guaranteed = [p for p in moves if p.is_guaranteed]
        uncertain = [p for p in moves if not p.is_guaranteed]

        lines.append(f"# {result.defending_fighter.display_name}")
        lines.append(f"  Attack: {result.attacking_move.display_name}")
        lines.append(f"  Frame advantage: {format_frame_advantage(result.frame_advantage)}")
        lines.append(f"  Range: {ctx.range}")
        lines.append(f"  Staleness: {format_staleness(ctx.staleness)}")
        lines.append("")

        if guaranteed:
            lines.append("  [Guaranteed]")
            lines += [_text_line(p, with_probability=False) for p in guaranteed]
            lines.append("")
        if uncertain:
            lines.append("  [Not guaranteed]")
            lines += [_text_line(p, with_probability=True) for p in uncertain]
            lines.append("")

        lines.append("-" * 30)
        lines.append("")

    return "\n".join(lines)


def export_to_json(results: List[PunishResult], include_metadata: bool = False) -> str:
    rows = _flatten(results)
    data = {
        "results": [
            {
                "defender": r.defending_fighter.id,
                "attack": r.attacking_move.id,
                "frame_advantage": r.frame_advantage,
                "shield_stun": r.calculation_context.shield_stun,
                "shield_damage": r.calculation_context.shield_damage,
                "staleness": r.calculation_context.staleness,
                "range": r.calculation_context.range,
                "punishing_moves": [
                    {
                        "move": p.move.id,
                        "method": p.method,
                        "guard_action_type": p.guard_action_type,
                        "total_frames": p.total_frames,
                        "is_guaranteed": p.is_guaranteed,
                        "probability": round(p.probability, 3),
                        "damage": p.damage,
                        "kill_percent": p.kill_percent,
                        "notes": p.notes,
                    }
                    for p in r.punishing_moves
                ],
            }
            for r in results
        ],
    }
    if include_metadata:
        data["metadata"] = {
            "exported_at": datetime.now().isoformat(timespec="seconds"),
            "rows": len(rows),
            "fighters": len({r.defending_fighter.id for r in results}),
            "generator": GENERATOR,
        }
    return json.dumps(data, indent=2)


_EXPORTERS = {
    "csv": export_to_csv,
    "txt": export_to_text,
    "json": export_to_json,
}


def export_results(results: List[PunishResult], fmt: str, include_metadata: bool = False) -> str:
    exporter = _EXPORTERS.get(fmt)
    if exporter is None:
        raise ExportError(f"Unknown export format: {fmt}")
    return exporter(results, include_metadata)
