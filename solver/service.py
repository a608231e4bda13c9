"""ProblemSolver: the four user actions, each one prompt and one gateway call."""

from __future__ import annotations

import logging

from solver.client import GatewayClient
from solver.config import SessionConfig
from solver.enhancement import format_enhancement
from solver.models import (
    Enhancement,
    EnhancementCategory,
    Problem,
    ReframingSet,
    Solution,
    SolutionSet,
)
from solver.parser import parse_reframings, parse_solutions
from solver.prompts import (
    build_custom_prompt,
    build_enhancement_prompt,
    build_reframing_prompt,
    build_solution_prompt,
)

logger = logging.getLogger("solver.service")


class ProblemSolver:
    def __init__(self, client: GatewayClient) -> None:
        self._client = client

    async def session_from_gateway(self, session: SessionConfig) -> SessionConfig:
        """Return ``session`` updated with the gateway's default model."""
        return session.with_gateway_config(await self._client.load_config())

    async def generate_solutions(self, problem: Problem, session: SessionConfig) -> SolutionSet:
        reply = await self._client.complete_with_retries(build_solution_prompt(problem), session)
        result = parse_solutions(reply)
        logger.info(
            "Generated %d solutions for domain=%s (status=%s)",
            len(result.solutions), problem.domain, result.status.value,
        )
        return result

    async def reframe_problem(self, problem: Problem, session: SessionConfig) -> ReframingSet:
        reply = await self._client.complete_with_retries(build_reframing_prompt(problem), session)
        return parse_reframings(reply)

    async def enhance_solution(
        self,
        solution: Solution,
        category: EnhancementCategory | str,
        problem: Problem,
        session: SessionConfig,
    ) -> Enhancement:
        prompt = build_enhancement_prompt(solution, category, problem)
        reply = await self._client.complete_with_retries(prompt, session)
        return Enhancement(
            solution_title=solution.title,
            category=str(getattr(category, "value", category)),
            text=reply,
            html=format_enhancement(reply, category),
        )

    async def process_custom_prompt(
        self,
        request: str,
        solution: Solution,
        problem: Problem,
        session: SessionConfig,
    ) -> str:
        prompt = build_custom_prompt(request, solution, problem)
        reply = await self._client.complete_with_retries(prompt, session)
        return reply.strip()
