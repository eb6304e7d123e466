"""Domain layer errors."""

from collections.abc import Iterable


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class StorageUnavailable(DomainError):
    """Raised when the backing store cannot be reached.

    Transient: callers may retry with backoff. Never to be read as
    "no data".
    """

    def __init__(self, operation: str, cause: str | None = None):
        self.operation = operation
        message = f"Storage unavailable during {operation}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)


class NotAuthenticated(DomainError):
    """Raised when a mutation is attempted without a known viewer."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Authentication required to {action}")


class NotAuthorizedError(DomainError):
    """Raised when a user acts on content they may not modify."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ContentRemovedError(DomainError):
    """Raised when attempting to edit removed content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot edit removed {resource} {resource_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class MalformedGraph(DomainError):
    """A comment graph contained cycles, self-references or duplicates.

    Recovered locally by the forest builder; reported, not raised.
    """

    def __init__(self, post_id: str, comment_ids: Iterable[str], reason: str):
        self.post_id = post_id
        self.comment_ids = list(comment_ids)
        self.reason = reason
        super().__init__(
            f"Malformed comment graph on post {post_id} ({reason}): "
            f"{', '.join(self.comment_ids)}"
        )
