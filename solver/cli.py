"""Command line front-end for the problem solver.

Usage:
    solver solve "Customer churn is rising" --domain business --complexity 4
    solver reframe "Our release cadence is too slow" --domain technology
    solver enhance "Churn is rising" --title "Loyalty programme" --category "Suggest metrics"
    solver ask "Churn is rising" --title "Loyalty programme" "How much would this cost?"

Every command talks to a running gateway (``--gateway``). Exits 1 when the
request is rejected.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from solver.client import GatewayClient
from solver.config import SessionConfig
from solver.errors import SolverError
from solver.export import render_export, write_export
from solver.models import EnhancementCategory, Problem, Solution
from solver.service import ProblemSolver

logger = logging.getLogger("solver.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="solver", description="AI problem-solving assistant")
    parser.add_argument("--gateway", default="http://localhost:3000", help="Gateway base URL")
    parser.add_argument("--model", default=None, help="Model name (default: the gateway's)")
    parser.add_argument("--temperature", type=float, default=0.7)
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_problem_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("problem", help="Problem description")
        p.add_argument("--domain", default="general")
        p.add_argument("--complexity", type=int, default=3, choices=range(1, 6))
        p.add_argument("--context", default="")
        p.add_argument("--stakeholders", default=None)
        p.add_argument("--root-causes", default=None)
        p.add_argument("--impact", default=None)

    def add_solution_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--title", required=True, help="Title of the solution to work on")
        p.add_argument("--description", default="")
        p.add_argument("--content", default="")

    solve = sub.add_parser("solve", help="Generate solutions")
    add_problem_args(solve)
    solve.add_argument("--export", default=None, help="Write a text export to this path")

    reframe = sub.add_parser("reframe", help="Reframe the problem three ways")
    add_problem_args(reframe)

    enhance = sub.add_parser("enhance", help="Enhance a solution")
    add_problem_args(enhance)
    add_solution_args(enhance)
    enhance.add_argument(
        "--category",
        default=EnhancementCategory.ELABORATE.value,
        choices=[c.value for c in EnhancementCategory],
    )

    ask = sub.add_parser("ask", help="Ask a custom question about a solution")
    add_problem_args(ask)
    add_solution_args(ask)
    ask.add_argument("request", help="Your question")

    return parser


def _problem_from_args(args: argparse.Namespace) -> Problem:
    return Problem(
        description=args.problem,
        domain=args.domain,
        complexity=args.complexity,
        context=args.context,
        stakeholders=args.stakeholders,
        root_causes=args.root_causes,
        impact=args.impact,
    )


def _solution_from_args(args: argparse.Namespace) -> Solution:
    return Solution(title=args.title, description=args.description, content=args.content)


async def _run(args: argparse.Namespace) -> int:
    session = SessionConfig(gateway_url=args.gateway, temperature=args.temperature)
    problem = _problem_from_args(args)

    async with GatewayClient(session) as client:
        solver = ProblemSolver(client)
        session = await solver.session_from_gateway(session)
        if args.model:
            session = session.model_copy(update={"model": args.model})

        if args.command == "solve":
            result = await solver.generate_solutions(problem, session)
            for i, s in enumerate(result.solutions, start=1):
                print(f"{i}. {s.title}\n   {s.description}\n   {s.content}\n")
            if args.export:
                write_export(args.export, render_export(problem, result.solutions))
                print(f"Exported to {args.export}")

        elif args.command == "reframe":
            result = await solver.reframe_problem(problem, session)
            for r in result.reframings:
                label = r.technique.value if r.technique else "reframing"
                print(f"[{label}] {r.text}")

        elif args.command == "enhance":
            enhancement = await solver.enhance_solution(
                _solution_from_args(args), args.category, problem, session
            )
            print(enhancement.text)

        elif args.command == "ask":
            print(await solver.process_custom_prompt(
                args.request, _solution_from_args(args), problem, session
            ))

    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stderr,
    )

    try:
        return asyncio.run(_run(args))
    except SolverError as exc:
        logger.error("Request failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
