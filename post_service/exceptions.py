from typing import Optional


class PostServiceError(Exception):
    """Base class for errors raised by repositories and services."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFound(PostServiceError):
    """
    Raised where an entity must exist for the operation to continue, e.g.
    deleting a comment or like, or bumping the counters of a post.
    """

    def __init__(
        self,
        entity: str,
        entity_id: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"{entity} not found")


class InvalidIdentifier(PostServiceError):
    """The supplied id is not a well-formed identifier."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"'{value}' is not a valid identifier")


class PersistenceError(PostServiceError):
    """Constraint violations and connectivity failures reported by the store."""


class ValidationError(PostServiceError):
    """A required field or parameter is missing or has an unsupported value."""
