"""Prompt builders: (problem, extras) -> plain prompt text for the vendor."""

from __future__ import annotations

from datetime import datetime, timezone

from solver.models import EnhancementCategory, Problem, ReframingTechnique, Solution

SYSTEM_PROMPT = (
    "You are an expert problem-solving assistant. Your responses should be helpful, "
    "innovative, and directly address the user's problem with actionable insights."
)

_TECHNIQUE_GUIDANCE = {
    ReframingTechnique.INVERSION: (
        "Inversion: flip the problem around, asking what would guarantee failure "
        "or what the opposite goal would look like"
    ),
    ReframingTechnique.SYSTEMS_THINKING: (
        "Systems thinking: place the problem inside the wider system of feedback "
        "loops, incentives and dependencies that produces it"
    ),
    ReframingTechnique.RANDOM_ASSOCIATION: (
        "Random association: connect the problem to an unrelated concept or field "
        "and borrow its perspective"
    ),
}

_ENHANCEMENT_INSTRUCTIONS = {
    EnhancementCategory.ELABORATE: (
        "Provide a detailed explanation of the following solution, diving deeper into "
        "the mechanisms, theory, and logic behind it:"
    ),
    EnhancementCategory.EXAMPLES: (
        "Provide 2-3 specific real-world examples or case studies of how this solution "
        "has been applied successfully in similar contexts:"
    ),
    EnhancementCategory.ACTION_STEPS: (
        "Create a practical implementation plan with 3-5 specific action steps, "
        "timeframes, and responsible roles for executing this solution:"
    ),
    EnhancementCategory.METRICS: (
        "Suggest 4-6 key performance indicators (KPIs) or metrics that would help "
        "measure the success of this solution:"
    ),
}

_DEFAULT_ENHANCEMENT = "Provide additional insights about this solution:"


def _optional(label: str, value: str | None) -> list[str]:
    return [f"{label}: {value}"] if value else []


def _problem_lines(problem: Problem) -> list[str]:
    return [
        f'Problem: "{problem.description}"',
        f"Domain: {problem.domain}",
        *_optional("Additional Context", problem.context),
        *_optional("Stakeholders", problem.stakeholders),
        *_optional("Root Causes", problem.root_causes),
        *_optional("Impact Assessment", problem.impact),
    ]


def _solution_lines(solution: Solution) -> list[str]:
    return [
        *_optional("Description", solution.description),
        *_optional("Content", solution.content),
    ]


def _nonce(now: datetime | None) -> str:
    # Only here to change the cache key on every request.
    return f"Request timestamp: {(now or datetime.now(timezone.utc)).isoformat()}"


def build_solution_prompt(problem: Problem, now: datetime | None = None) -> str:
    lines = _problem_lines(problem)
    lines.insert(2, f"Complexity: {problem.complexity}/5")

    return "\n".join([
        "Generate 3 innovative solutions for the following problem:",
        "",
        *lines,
        _nonce(now),
        "",
        "For each solution, provide:",
        "1. A title that captures the essence of the approach",
        "2. A one-sentence description that summarizes the solution",
        "3. A detailed explanation of how the solution addresses the problem (3-5 sentences)",
        "4. A suitable icon from Font Awesome (specify as a Font Awesome class name like 'fas fa-brain')",
        "",
        "Return the solutions in JSON format with the following structure:",
        "[",
        "  {",
        '    "title": "Solution Title",',
        '    "description": "Brief description",',
        '    "content": "Detailed explanation",',
        '    "icon": "fas fa-icon-name"',
        "  },",
        "  ...",
        "]",
        "",
        "Be creative, practical, and ensure the solutions are genuinely useful for solving "
        f"the stated problem in the {problem.domain} domain.",
    ])


def build_reframing_prompt(problem: Problem, now: datetime | None = None) -> str:
    techniques = [
        f"{i}. {_TECHNIQUE_GUIDANCE[technique]}"
        for i, technique in enumerate(ReframingTechnique, start=1)
    ]

    return "\n".join([
        "Reframe the following problem in 3 different innovative ways to help uncover "
        "new perspectives and solutions:",
        "",
        *_problem_lines(problem),
        _nonce(now),
        "",
        "Use exactly one cognitive technique per reframing, in this order:",
        *techniques,
        "",
        "Make sure each reframing opens up new solution spaces or angles, stays concise "
        "but insightful (1-2 sentences), and considers the additional context provided, if any.",
        "",
        "Return the reframings as an array of strings in JSON format:",
        '["Reframing 1", "Reframing 2", "Reframing 3"]',
        "",
        "Each reframing should be complete and coherent on its own.",
    ])


def build_enhancement_prompt(
    solution: Solution,
    category: EnhancementCategory | str,
    problem: Problem,
) -> str:
    try:
        instruction = _ENHANCEMENT_INSTRUCTIONS[EnhancementCategory(category)]
    except ValueError:
        instruction = _DEFAULT_ENHANCEMENT

    return "\n".join([
        instruction,
        "",
        f'Problem: "{problem.description}"',
        f'Solution: "{solution.title}"',
        *_solution_lines(solution),
        "",
        "Be specific, practical, and actionable in your response. Focus on providing "
        "genuinely useful information that would help implement this solution successfully.",
    ])


def build_custom_prompt(request: str, solution: Solution, problem: Problem) -> str:
    return "\n".join([
        "Please respond to the following request regarding a solution to a problem:",
        "",
        f'Original Problem: "{problem.description}"',
        f'Solution being discussed: "{solution.title}"',
        *_solution_lines(solution),
        "",
        f'User\'s request: "{request.strip()}"',
        "",
        "Provide a helpful, concise response that directly addresses the user's request "
        "in the context of this solution and problem.",
    ])
