import asyncio
import logging
from typing import Protocol, Sequence

from .config import DEFAULT_MAX_PARALLEL
from .errors import GatewayError
from .models import CommitEvaluation, CommitRecord, EvaluationMode
from .parsing import evaluate_response
from .prompts import build_prompt

logger = logging.getLogger(__name__)


class Gateway(Protocol):
    async def complete(self, system_prompt: str, user_prompt: str) -> str: ...


async def _evaluate_one(
    gateway: Gateway,
    commit: CommitRecord,
    index: int,
    mode: EvaluationMode,
    slots: asyncio.Semaphore,
) -> tuple[int, CommitEvaluation]:
    # Each request is a one-commit batch, so the model always sees index 0
    system_prompt, user_prompt = build_prompt([commit], mode)
    async with slots:
        try:
            raw = await gateway.complete(system_prompt, user_prompt)
        except GatewayError as e:
            logger.warning("commit %d (%s): %s", index, commit.identifier[:8], e)
            return index, CommitEvaluation.fallback(index)
    try:
        return index, evaluate_response(raw, index)
    except Exception as e:
        logger.warning("commit %d (%s): unreadable evaluation: %s", index, commit.identifier[:8], e)
        return index, CommitEvaluation.fallback(index)


async def evaluate_commits(
    commits: Sequence[CommitRecord],
    mode: EvaluationMode,
    gateway: Gateway,
    max_parallel: int | None = DEFAULT_MAX_PARALLEL,
) -> list[CommitEvaluation]:
    """Evaluate every commit concurrently; one request per commit.

    Returns one evaluation per input commit, in input order. A failed call
    or unreadable reply degrades only that commit to the fallback
    evaluation; siblings are never cancelled.
    """
    if not commits:
        return []

    limit = max_parallel if max_parallel and max_parallel > 0 else len(commits)
    slots = asyncio.Semaphore(limit)
    logger.debug("evaluating %d commits (%s), max_parallel=%d", len(commits), mode.value, limit)

    tagged = await asyncio.gather(*(
        _evaluate_one(gateway, commit, i, mode, slots)
        for i, commit in enumerate(commits)
    ))
    return [evaluation for _, evaluation in sorted(tagged, key=lambda t: t[0])]


def evaluate(
    commits: Sequence[CommitRecord],
    mode: EvaluationMode,
    gateway: Gateway,
    max_parallel: int | None = DEFAULT_MAX_PARALLEL,
) -> list[CommitEvaluation]:
    """Synchronous entry point for the CLI."""
    return asyncio.run(evaluate_commits(commits, mode, gateway, max_parallel))
