"""
Tests for the plain-text session export.
"""

from __future__ import annotations

from datetime import datetime, timezone

from solver.export import render_export, write_export
from solver.models import Problem, Reframing, ReframingTechnique, Solution

_AT = datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)


def _problem(**kwargs) -> Problem:
    return Problem(description="Slow onboarding", domain="business", complexity=2, **kwargs)


def test_problem_and_solutions_sections():
    text = render_export(
        _problem(),
        [
            Solution(title="Checklist", description="One page", content="Detailed.", is_ai=True),
            Solution(title="Buddy system"),
        ],
        generated_at=_AT,
    )

    assert "exported 2024-05-01T09:30:00+00:00" in text
    assert "Description: Slow onboarding" in text
    assert "Complexity: 2/5" in text
    assert "SOLUTION 1" in text and "SOLUTION 2" in text
    assert "Title: Checklist" in text
    assert "Source: AI generated" in text
    assert "Source: Framework" in text


def test_empty_values_are_omitted():
    text = render_export(_problem(), [Solution(title="Buddy system")], generated_at=_AT)
    assert "Stakeholders:" not in text
    assert "Context:" not in text
    assert "REFRAMINGS" not in text


def test_reframings_section():
    text = render_export(
        _problem(stakeholders="HR"),
        [],
        reframings=[
            Reframing(text="What makes onboarding slower?", technique=ReframingTechnique.INVERSION),
            Reframing(text="Unlabelled"),
        ],
        generated_at=_AT,
    )
    assert "Stakeholders: HR" in text
    assert "inversion: What makes onboarding slower?" in text
    assert "Reframing 2: Unlabelled" in text


def test_write_export(tmp_path):
    path = write_export(tmp_path / "session.txt", "hello")
    assert path.read_text(encoding="utf-8") == "hello"
