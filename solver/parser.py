"""Response parser: vendor free text -> typed records.

The vendor is asked for a JSON array but often wraps it in prose or code
fences. Strategy:

1. ``json.loads`` on the whole text (status ``parsed``)
2. greedy match of the first ``[`` to the last ``]`` (status ``extracted``)
3. a single synthetic record around the raw text (status ``fallback``)

The public ``parse_*`` functions never raise.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from solver.errors import ParseError
from solver.models import (
    DEFAULT_ICON,
    FALLBACK_ICON,
    FALLBACK_TITLE,
    ParseStatus,
    Reframing,
    ReframingSet,
    ReframingTechnique,
    Solution,
    SolutionSet,
)

logger = logging.getLogger("solver.parser")

_ARRAY_SPAN = re.compile(r"\[[\s\S]*\]")


def extract_json_array(text: str) -> tuple[list[Any], ParseStatus]:
    """Return the JSON array held in ``text`` and how it was found."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        data = None
    if isinstance(data, list):
        return data, ParseStatus.PARSED

    match = _ARRAY_SPAN.search(text or "")
    if not match:
        raise ParseError("no JSON array found in response")

    try:
        data = json.loads(match.group(0))
    except ValueError as exc:
        raise ParseError(f"array span is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ParseError("array span did not decode to a list")
    return data, ParseStatus.EXTRACTED


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _normalize_solution(item: Any, index: int) -> Solution:
    if isinstance(item, str):
        item = {"content": item}
    elif not isinstance(item, dict):
        item = {}

    return Solution(
        title=_text(item.get("title")) or f"Solution {index}",
        description=_text(item.get("description")),
        content=_text(item.get("content")),
        icon=_text(item.get("icon")) or DEFAULT_ICON,
        is_ai=True,
    )


def parse_solutions(text: str) -> SolutionSet:
    try:
        items, status = extract_json_array(text)
    except ParseError as exc:
        logger.warning("Solutions reply not parseable (%s); using fallback record", exc)
        return SolutionSet(
            solutions=[
                Solution(title=FALLBACK_TITLE, content=text, icon=FALLBACK_ICON, is_ai=True)
            ],
            status=ParseStatus.FALLBACK,
        )

    solutions = [_normalize_solution(item, i) for i, item in enumerate(items, start=1)]
    logger.info("Parsed %d solutions (status=%s)", len(solutions), status.value)
    return SolutionSet(solutions=solutions, status=status)


def parse_reframings(text: str) -> ReframingSet:
    try:
        items, status = extract_json_array(text)
    except ParseError as exc:
        logger.warning("Reframing reply not parseable (%s); using raw text", exc)
        return ReframingSet(reframings=[Reframing(text=text)], status=ParseStatus.FALLBACK)

    techniques = list(ReframingTechnique)
    reframings = [
        Reframing(
            text=item if isinstance(item, str) else json.dumps(item),
            technique=techniques[i] if i < len(techniques) else None,
        )
        for i, item in enumerate(items)
    ]
    return ReframingSet(reframings=reframings, status=status)
