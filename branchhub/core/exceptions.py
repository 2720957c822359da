"""Error taxonomy for feed synchronization and persistence."""


class BranchHubError(Exception):
    """Base class for application errors."""


class UpstreamError(BranchHubError):
    """The bank location feed answered with a failure or could not be reached."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(BranchHubError):
    """The feed answered, but not with the expected payload shape."""


class InvalidCoordinateError(BranchHubError, ValueError):
    """A "lat, lng" string could not be parsed into two finite numbers."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid coordinates: {value!r}")
        self.value = value


class PersistenceError(BranchHubError):
    """A write against the branch store failed and was rolled back."""
