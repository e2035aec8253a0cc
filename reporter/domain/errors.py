"""Error types raised by the reporter."""


class ReporterError(Exception):
    """Base class for every error that aborts a command."""
    pass


class MissingCredential(ReporterError):
    """Raised when no GitHub token can be resolved."""

    def __init__(self, path: str):
        super().__init__(
            f"GitHub token neither given as a flag, nor found in env, nor in {path}"
        )
        self.path = path


class InvalidTarget(ReporterError):
    """Raised when a source string is not `owner` or `owner/name`."""

    def __init__(self, source: str):
        super().__init__(f"Unexpected source string: {source}")
        self.source = source


class NotFound(ReporterError):
    """Raised when a single repository lookup fails."""

    def __init__(self, full_name: str, reason: str = ""):
        message = f"Repository not found: {full_name}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.full_name = full_name


class UnknownPeriod(ReporterError):
    """Raised for a period name other than daily or weekly."""

    def __init__(self, name: str):
        super().__init__(f"Unknown range period: {name}")
        self.name = name


class UpstreamError(ReporterError):
    """Raised when the GitHub API call fails."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class RateLimitExceeded(UpstreamError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class InvalidSetting(ReporterError):
    """Raised when an environment setting cannot be parsed."""

    def __init__(self, name: str, value: str):
        super().__init__(f"Invalid value for {name}: {value!r}")
        self.name = name
        self.value = value
