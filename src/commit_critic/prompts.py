import textwrap
from typing import Sequence

from .models import CommitRecord, EvaluationMode

# Keep very large staged diffs within the model's context window
MAX_DIFF_CHARS = 60_000
NO_DIFF = "(no diff)"
TRUNCATED = "\n\n... [diff truncated] ..."

SYSTEM_PROMPT_MESSAGE_ONLY = textwrap.dedent("""\
    You are a senior developer who reviews Git commit messages.
    You will receive one or more commit messages WITHOUT their diffs.
    Judge each message on semantic clarity, specificity and adherence to
    conventions such as Conventional Commits. Do not guess at code content.

    Scoring guide (1-10):
      1-3: useless - vague, single word or filler ("wip", "fixed", "stuff", "update")
      4-6: understandable but lacks context or scope ("fixed navigation bug")
      7-8: good - clear intent and scope, imperative mood
      9-10: exemplary - conventional-commit style with scope, action and intent
            ("fix(auth): resolve token expiration race condition")

    Output rules:
      - Return ONLY a single raw JSON object. No markdown fences, no commentary.
      - The object must contain a "commits" array, one entry per commit.

    Schema of each entry:
      {
        "index": integer,          // zero-based index of the commit
        "good": boolean,           // true if score >= 7
        "score": integer,          // 1-10
        "isVague": boolean,        // true if the message is uninformative
        "issue": string | null,    // short critique when good is false
        "better": string | null    // suggested rewrite when good is false
      }

    Example output for ["wip", "feat(api): add rate limiter"]:
      {"commits": [
        {"index": 0, "good": false, "score": 2, "isVague": true,
         "issue": "Completely uninformative.",
         "better": "feat(dashboard): scaffold initial layout"},
        {"index": 1, "good": true, "score": 10, "isVague": false,
         "issue": null, "better": null}
      ]}
""")

SYSTEM_PROMPT_WITH_DIFF = textwrap.dedent("""\
    You are a senior developer who reviews Git commits.
    You will receive one or more commits, each with a message and a diff.
    Check whether the message accurately describes the diff, then summarize
    what actually changed.

    Process:
      1. Read the diff: files touched, logic altered, features added.
      2. Verify accuracy: a message that contradicts the diff scores 1.
      3. Check conventions: high scores need a clear scope and intent.

    Scoring guide (1-10):
      1-3: mismatch, placeholder ("no message yet") or meaningless ("wip")
      4-6: accurate but shallow ("update controller" for a complex change)
      7-8: accurate and specific about what changed
      9-10: conventional-commit format describing what changed and why

    Output rules:
      - Return ONLY a single raw JSON object. No markdown fences, no commentary.
      - The object must contain a "commits" array, one entry per commit.
      - If the message is missing or inadequate, "better" MUST contain a
        Conventional Commit message written from the diff.
      - "changes" must be a factual summary of the diff in 3-5 short bullets.

    Schema of each entry:
      {
        "index": integer,
        "good": boolean,           // true if score >= 7
        "score": integer,          // 1-10
        "isVague": boolean,        // true if score <= 4 or the message is generic
        "issue": string | null,    // critique when good is false
        "better": string | null,   // REQUIRED when good is false
        "changes": [string, ...]   // summary of the actual code changes
      }

    Example output for a "wip" commit whose diff adds `const rateLimit = 100;`:
      {"commits": [
        {"index": 0, "good": false, "score": 2, "isVague": true,
         "issue": "Message is a placeholder and explains nothing.",
         "better": "feat(config): introduce default rate limit constant",
         "changes": ["Added rateLimit constant", "Set default value to 100"]}
      ]}
""")


def system_prompt_for(mode: EvaluationMode) -> str:
    if mode.includes_diff:
        return SYSTEM_PROMPT_WITH_DIFF
    return SYSTEM_PROMPT_MESSAGE_ONLY


def _truncate_diff(diff: str) -> str:
    if not diff:
        return NO_DIFF
    if len(diff) > MAX_DIFF_CHARS:
        return diff[:MAX_DIFF_CHARS] + TRUNCATED
    return diff


def format_commit(commit: CommitRecord, index: int, include_diff: bool) -> str:
    block = f"--- COMMIT {index} ---\nMessage: {commit.message}"
    if not include_diff:
        return block + "\n"
    return block + f"\n\nDiff:\n{_truncate_diff(commit.diff)}\n"


def build_prompt(commits: Sequence[CommitRecord], mode: EvaluationMode) -> tuple[str, str]:
    """Return the (system, user) prompt pair for *commits* under *mode*."""
    include_diff = mode.includes_diff
    blocks = "\n".join(
        format_commit(c, i, include_diff) for i, c in enumerate(commits)
    )
    if len(commits) == 1:
        ask = 'Evaluate this commit. Return JSON with a "commits" array containing one object (index: 0).'
    else:
        ask = (
            f'Evaluate these {len(commits)} commits. Return JSON with a "commits" array '
            f"containing one object per commit (index 0 to {len(commits) - 1})."
        )
    return system_prompt_for(mode), f"{ask}\n\n{blocks}"
