"""Exceptions raised while reading notes from GitHub."""


class GitNotesError(Exception):
    """Base class for every failure that should abort a run."""


class GitHubAPIError(GitNotesError):
    """The API answered with a non-2xx status."""
    
    def __init__(self, status_code: int, reason: str, body: str, url: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.url = url
        super().__init__(f"{status_code} {reason}: {body}")


class GitHubConnectionError(GitNotesError):
    """The request never got a response (DNS, connect, read errors)."""


class MalformedResponseError(GitNotesError):
    """A response is missing a field we need, or is not JSON at all."""


class BlobDecodeError(GitNotesError):
    """A blob payload could not be turned into text."""


class ConfigError(GitNotesError):
    """An environment setting has an unusable value."""
