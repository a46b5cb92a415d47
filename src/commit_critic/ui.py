# ──────────────────────────────────────────────
# ANSI helpers
# ──────────────────────────────────────────────
BOLD = "\033[1m"
DIM = "\033[2m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
MAGENTA = "\033[95m"
RESET = "\033[0m"
RULE = "━" * 48


def styled(text: str, *codes: str) -> str:
    return "".join(codes) + text + RESET


def first_line(message: str) -> str:
    lines = message.splitlines()
    return lines[0] if lines else ""


def _header(title: str, color: str) -> None:
    print()
    print(styled(RULE, color))
    print(styled(title, color, BOLD))
    print(styled(RULE, color))


def print_analysis(report) -> None:
    # ── Needs work ──
    _header("💩 COMMITS THAT NEED WORK", RED)
    if not report.needs_work:
        print("  (none)")
    for commit, e in report.needs_work:
        print()
        trunc = first_line(commit.message)[:80]
        print(f'  Commit: {styled(f"{trunc!r}", YELLOW)}')
        color = RED if e.score <= 3 else YELLOW
        print(f"  Score:  {styled(f'{e.score}/10', color, BOLD)}")
        print(f"  Issue:  {e.issue or 'No details'}")
        print(f"  Better: {styled(e.better or 'Describe what changed and why', GREEN)}")

    # ── Well written ──
    _header("💎 WELL-WRITTEN COMMITS", GREEN)
    if not report.well_written:
        print("  (none)")
    for commit, e in report.well_written:
        print()
        lines = [line for line in commit.message.splitlines() if line.strip()]
        head = lines[0] if lines else ""
        print(f'  Commit: {styled(f"{head!r}", CYAN)}')
        for rest in lines[1:]:
            print(f"          {styled(rest, DIM)}")
        print(f"  Score:  {styled(f'{e.score}/10', GREEN, BOLD)}")

    # ── Stats ──
    _header("📊 YOUR STATS", MAGENTA)
    print(f"  Total commits analyzed : {report.total}")
    print(f"  Average score          : {styled(f'{report.average_score:.1f}/10', BOLD)}")
    print(f"  Vague commits          : {report.vague_count} ({report.vague_pct:.1f}%)")
    print(f"  One-word commits       : {report.one_word_count} ({report.one_word_pct:.1f}%)")
    print()


def print_proposal(proposal) -> None:
    print()
    print(styled("Changes detected:", BOLD))
    for ch in proposal.changes_summary:
        print(f"  • {ch}")
    print()

    print(styled("Suggested commit message:", BOLD))
    print(styled(RULE, CYAN))
    print(styled(proposal.suggestion or "(no suggestion)", CYAN, BOLD))
    print(styled(RULE, CYAN))
    print()
