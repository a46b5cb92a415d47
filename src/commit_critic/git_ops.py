import logging
import shutil
import subprocess
import tempfile

from .config import DEFAULT_MAX_COMMITS
from .errors import SourceAccessError
from .models import STAGED_ID, CommitRecord
from .ui import styled, DIM

logger = logging.getLogger(__name__)

STAGED_PLACEHOLDER = "(no message yet)"


def run_git(args: list[str], cwd: str | None = None, timeout: int = 120) -> str:
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True, text=True, cwd=cwd,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise SourceAccessError(f"git {args[0]} timed out after {timeout}s")
    except FileNotFoundError:
        raise SourceAccessError("git is not installed or not on PATH")
    if result.returncode != 0:
        raise SourceAccessError(f"git {' '.join(args)} failed:\n{(result.stderr or result.stdout).strip()}")
    return result.stdout.strip()


def list_commits(cwd: str | None = None, max_count: int = DEFAULT_MAX_COMMITS) -> list[CommitRecord]:
    """Return the last *max_count* commits (message only) from the repo at *cwd*."""
    # NUL separates records, so multi-line bodies survive intact
    log = run_git(["log", "-n", str(max_count), "--format=%H%n%B%x00"], cwd=cwd)
    commits = []
    for block in log.split("\x00"):
        block = block.strip()
        if not block:
            continue
        identifier, _, message = block.partition("\n")
        commits.append(CommitRecord(identifier=identifier.strip(), message=message.strip()))
    return commits


def clone_repo(url: str, branch: str = "main", depth: int = DEFAULT_MAX_COMMITS) -> str:
    """Shallow-clone *branch* of *url* into a temp directory; return its path."""
    tmp = tempfile.mkdtemp(prefix="commit_critic_")
    print(styled(f"Cloning {url} ({branch}) …", DIM))
    try:
        subprocess.run(
            ["git", "clone", "--depth", str(max(depth, 1)), "--single-branch",
             "--branch", branch, url, tmp],
            check=True, capture_output=True, text=True, timeout=300,
        )
        return tmp
    except subprocess.TimeoutExpired:
        shutil.rmtree(tmp, ignore_errors=True)
        raise SourceAccessError("Cloning timed out (over 5 minutes). The repository might be too large or the network is slow.")
    except FileNotFoundError:
        shutil.rmtree(tmp, ignore_errors=True)
        raise SourceAccessError("git is not installed or not on PATH")
    except subprocess.CalledProcessError as e:
        shutil.rmtree(tmp, ignore_errors=True)

        err_msg = e.stderr.lower()
        if "authentication failed" in err_msg or "permission denied" in err_msg:
            raise SourceAccessError(f"Authentication failed for {url}.\n"
                                    f"If this is a private repo, try cloning it manually first and run without --url.")
        elif "repository not found" in err_msg or "could not read from remote" in err_msg:
            raise SourceAccessError(f"Repository not found or not accessible: {url}")
        elif "remote branch" in err_msg and "not found" in err_msg:
            raise SourceAccessError(f"Branch {branch!r} not found in {url}")
        else:
            raise SourceAccessError(f"Git clone failed:\n{e.stderr.strip()}")


def list_remote_commits(url: str, branch: str = "main", max_count: int = DEFAULT_MAX_COMMITS) -> list[CommitRecord]:
    tmp = clone_repo(url, branch, depth=max_count)
    try:
        return list_commits(cwd=tmp, max_count=max_count)
    finally:
        shutil.rmtree(tmp, ignore_errors=True)


def get_staged_diff(cwd: str | None = None) -> str:
    return run_git(["diff", "--staged"], cwd=cwd)


def staged_change(cwd: str | None = None) -> CommitRecord | None:
    """Wrap the staged diff as a pseudo-commit, or None if nothing is staged."""
    diff = get_staged_diff(cwd)
    if not diff:
        return None
    return CommitRecord(identifier=STAGED_ID, message=STAGED_PLACEHOLDER, diff=diff)


def commit(message: str, cwd: str | None = None) -> str:
    return run_git(["commit", "-m", message], cwd=cwd)
