import os
import sys
import logging
from dataclasses import dataclass

import dotenv

from .errors import ConfigError

LOG = logging.getLogger("commit_critic")

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-3-flash-preview"
DEFAULT_MAX_COMMITS = 10
DEFAULT_MAX_PARALLEL = 8


@dataclass(frozen=True)
class Config:
    api_key: str | None
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    max_commits: int = DEFAULT_MAX_COMMITS
    max_parallel: int = DEFAULT_MAX_PARALLEL


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOG.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def load_config() -> Config:
    dotenv.load_dotenv()

    key = os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY")
    return Config(
        api_key=key,
        base_url=os.getenv("OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
        model=os.getenv("OPENROUTER_MODEL", DEFAULT_MODEL),
        max_commits=_env_int("COMMIT_CRITIC_MAX_COMMITS", DEFAULT_MAX_COMMITS),
        max_parallel=_env_int("COMMIT_CRITIC_MAX_PARALLEL", DEFAULT_MAX_PARALLEL),
    )


def setup_logging(verbose: bool = False) -> None:
    """Enable debug logging when COMMIT_CRITIC_DEBUG=1 or --verbose."""
    level = logging.DEBUG if (verbose or os.getenv("COMMIT_CRITIC_DEBUG")) else logging.WARNING
    LOG.setLevel(level)
    if not LOG.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        LOG.addHandler(h)


def validate_config(config: Config) -> None:
    if not config.api_key:
        raise ConfigError(
            "OPENROUTER_API_KEY environment variable is not set.\n"
            "  Create a .env file with OPENROUTER_API_KEY=sk-or-..."
        )
