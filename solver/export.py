"""Plain-text export of a problem and what was generated for it."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from solver.models import Problem, Reframing, Solution

logger = logging.getLogger("solver.export")

_RULE = "=" * 60


def _section(title: str, pairs: list[tuple[str, str]]) -> list[str]:
    lines = [_RULE, title, _RULE]
    lines.extend(f"{key}: {value}" for key, value in pairs if value)
    lines.append("")
    return lines


def render_export(
    problem: Problem,
    solutions: list[Solution],
    reframings: list[Reframing] | None = None,
    generated_at: datetime | None = None,
) -> str:
    generated_at = generated_at or datetime.now(timezone.utc)

    lines = [f"Problem Solving Session - exported {generated_at.isoformat()}", ""]
    lines += _section("PROBLEM", [
        ("Description", problem.description),
        ("Domain", problem.domain),
        ("Complexity", f"{problem.complexity}/5"),
        ("Context", problem.context),
        ("Stakeholders", problem.stakeholders or ""),
        ("Root Causes", problem.root_causes or ""),
        ("Impact Assessment", problem.impact or ""),
    ])

    if reframings:
        lines += _section("REFRAMINGS", [
            (r.technique.value if r.technique else f"Reframing {i}", r.text)
            for i, r in enumerate(reframings, start=1)
        ])

    for i, solution in enumerate(solutions, start=1):
        lines += _section(f"SOLUTION {i}", [
            ("Title", solution.title),
            ("Description", solution.description),
            ("Details", solution.content),
            ("Source", "AI generated" if solution.is_ai else "Framework"),
        ])

    return "\n".join(lines)


def write_export(path: str | Path, text: str) -> Path:
    path = Path(path)
    path.write_text(text, encoding="utf-8")
    logger.info("Session exported: %s", path)
    return path
