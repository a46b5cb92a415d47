"""Shared fixtures for commit critic tests."""

import asyncio
import json

import pytest

from commit_critic.models import CommitRecord


def reply(**entry) -> str:
    """Build a well-formed one-commit reply."""
    return json.dumps({"commits": [entry]})


class FakeGateway:
    """Stands in for CompletionGateway; answers by commit message."""

    def __init__(self, answers, delays=None, default=None):
        self.answers = answers
        self.delays = delays or {}
        self.default = default
        self.calls = []
        self.in_flight = 0
        self.peak = 0

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        message = user_prompt.split("Message: ", 1)[1].split("\n", 1)[0]
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(message, 0))
        finally:
            self.in_flight -= 1
        answer = self.answers.get(message, self.default)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def commits():
    return [
        CommitRecord("a1b2c3d4e5", "wip"),
        CommitRecord("f6a7b8c9d0", "feat(api): add rate limiter"),
    ]


@pytest.fixture
def staged():
    diff = (
        "diff --git a/config.py b/config.py\n"
        "--- a/config.py\n"
        "+++ b/config.py\n"
        "@@ -1,2 +1,3 @@\n"
        " import os\n"
        "+RATE_LIMIT = 100\n"
    )
    return CommitRecord("staged", "(no message yet)", diff)
