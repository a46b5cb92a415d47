class CommitCriticError(Exception):
    """Base exception for commit critic errors."""
    pass


class ConfigError(CommitCriticError):
    """Required configuration (API key) is missing."""
    pass


class SourceAccessError(CommitCriticError):
    """A git operation (clone, log, diff, commit) failed."""
    pass


class GatewayError(CommitCriticError):
    """The completion service failed or returned no content."""
    pass


class ParseError(CommitCriticError):
    """The completion service returned something that is not an evaluation."""
    pass


class UserInputError(CommitCriticError):
    """Nothing to work with: nothing staged, or no message given."""
    pass
