"""Custom exceptions for the GitLab file URL integration."""


class GitLabFileUrlError(Exception):
    """Base exception for all GitLab file URL errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class InvalidUrlError(GitLabFileUrlError):
    """Raised when a URL cannot be translated into a raw content URL."""


class NestedGroupUrlRequiredError(InvalidUrlError):
    """Raised when a project ID lookup is attempted on a URL without /-/blob/."""

    def __init__(self, message: str = "Please provide full path to yaml file from GitLab") -> None:
        super().__init__(message)


class ProjectIdLookupError(GitLabFileUrlError):
    """Raised when the numeric project ID for a URL cannot be resolved."""

    def __init__(self, target: str, cause: Exception) -> None:
        self.target = target
        super().__init__(f"Could not get GitLab project ID for: {target}, {cause}")


class AuthenticationError(GitLabFileUrlError):
    """Raised when authentication fails or token is invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, status_code=401)


class NotFoundError(GitLabFileUrlError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str = "Resource") -> None:
        super().__init__(f"{resource} not found", status_code=404)


class GitLabAPIError(GitLabFileUrlError):
    """Raised for unexpected GitLab API errors."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(f"GitLab API error ({status_code}): {message}", status_code=status_code)
