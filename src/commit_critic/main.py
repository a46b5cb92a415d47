import argparse
import sys
import textwrap

from .analyzer import evaluate
from .config import Config, load_config, setup_logging, validate_config
from .errors import ConfigError, SourceAccessError, UserInputError
from .git_ops import commit, list_commits, list_remote_commits, staged_change
from .llm import CompletionGateway
from .models import EvaluationMode
from .report import propose, summarize
from .ui import styled, print_analysis, print_proposal, BOLD, YELLOW, DIM, RED, GREEN


def cmd_analyze(args, config: Config) -> int:
    gateway = CompletionGateway.from_config(config)
    n = args.max_commits

    print(styled(f"\nAnalyzing last {n} commits…\n", BOLD))
    if args.url:
        commits = list_remote_commits(args.url, args.branch, n)
    else:
        commits = list_commits(cwd=None, max_count=n)

    if not commits:
        print(styled("No commits found.", YELLOW))
        return 1

    print(styled(f"  Found {len(commits)} commits. Sending to AI for review…", DIM))
    evaluations = evaluate(commits, EvaluationMode.MESSAGE_ONLY, gateway, args.max_parallel)
    if not evaluations:
        print(styled("No evaluation returned.", RED))
        return 1

    print_analysis(summarize(commits, evaluations))
    return 0


def cmd_write(args, config: Config) -> int:
    gateway = CompletionGateway.from_config(config)

    staged = staged_change()
    if staged is None:
        raise UserInputError("No staged changes found.\nStage some files first:  git add <files>")

    print(styled("\nAnalyzing staged changes…", DIM))
    evaluations = evaluate([staged], EvaluationMode.MESSAGE_AND_DIFF, gateway, args.max_parallel)
    if not evaluations:
        print(styled("No evaluation returned.", RED))
        return 1

    proposal = propose(evaluations[0])
    print_proposal(proposal)

    # Interactive accept / override
    try:
        answer = input("Press Enter to accept, or type your own message (q to quit): ").strip()
    except EOFError:
        answer = "q"
    if answer.lower() == "q":
        print("Aborted.")
        return 0

    message = answer or proposal.suggestion
    if not message:
        print("No message provided. Exiting without committing.")
        return 0

    try:
        out = commit(message)
    except SourceAccessError as e:
        print(styled(f"\nCommit failed: {e}", RED))
        return 1
    if out:
        print(out)
    print(styled("\n✓ Committed!", GREEN, BOLD))
    return 0


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commit-critic",
        description="AI Commit Message Critic — analyze & improve your Git commits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              %(prog)s --analyze                       Review last commits (current repo)
              %(prog)s --analyze -n 25                 Review last 25 commits
              %(prog)s --analyze --url=<repo_url>      Review a remote repository (branch main)
              %(prog)s --analyze --url=<url> --branch dev
              %(prog)s --write                         Suggest a commit for staged changes
        """),
    )
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--analyze", action="store_true", help="Analyze existing commit history")
    group.add_argument("--write", action="store_true", help="Interactive commit message writer")

    parser.add_argument("--url", type=str, default=None,
                        help="Remote Git repo URL to analyze (used with --analyze)")
    parser.add_argument("--branch", type=str, default=None,
                        help="Branch of the remote repo to analyze (default: main)")
    parser.add_argument("-n", "--max-commits", type=int, default=config.max_commits,
                        help=f"Number of commits to analyze (default: {config.max_commits})")
    parser.add_argument("--max-parallel", type=int, default=config.max_parallel,
                        help=f"Maximum concurrent AI requests (default: {config.max_parallel})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(argv: list[str] | None = None) -> int:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    if (args.url or args.branch) and not args.analyze:
        parser.error("--url and --branch can only be used with --analyze")
    if args.branch and not args.url:
        parser.error("--branch can only be used with --url")
    if args.max_commits < 1:
        parser.error("--max-commits must be at least 1")
    if args.branch is None:
        args.branch = "main"

    setup_logging(args.verbose)

    try:
        validate_config(config)
        if args.analyze:
            return cmd_analyze(args, config)
        return cmd_write(args, config)
    except ConfigError as e:
        print(styled("Error: ", RED, BOLD) + str(e))
        return 1
    except SourceAccessError as e:
        print(styled("Error: ", RED, BOLD) + str(e))
        return 1
    except UserInputError as e:
        print(styled(str(e), YELLOW))
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
