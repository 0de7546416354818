"""Domain layer errors.

Every taxonomy failure is its own type so the API layer can map each kind
to a client-facing status without parsing messages.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TagNotFoundError(NotFoundError):
    """Raised when a tag id does not resolve."""

    def __init__(self, identifier: str):
        super().__init__("Tag", identifier)


class DuplicateNameOrSlugError(BusinessRuleViolationError):
    """Raised when another tag already uses the name or slug."""

    def __init__(self, name: str, slug: str):
        self.name = name
        self.slug = slug
        super().__init__(f"A tag with name '{name}' or slug '{slug}' already exists")


class TagLockedError(BusinessRuleViolationError):
    """Raised when modifying, merging or deleting a locked tag."""

    def __init__(self, tag_id: str):
        self.tag_id = tag_id
        super().__init__(f"Tag {tag_id} is locked")


class TagProtectedError(BusinessRuleViolationError):
    """Raised when deleting a protected tag under the protect-all policy."""

    def __init__(self, tag_id: str):
        self.tag_id = tag_id
        super().__init__(f"Tag {tag_id} is protected and cannot be deleted")


class SelfParentError(ValidationError):
    """Raised when a tag would become its own parent."""

    def __init__(self, tag_id: str):
        self.tag_id = tag_id
        super().__init__(f"Tag {tag_id} cannot be its own parent")


class CycleDetectedError(ValidationError):
    """Raised when a parent assignment would close a loop in the hierarchy."""

    def __init__(self, tag_id: str, parent_id: str):
        self.tag_id = tag_id
        self.parent_id = parent_id
        super().__init__(
            f"Setting parent of tag {tag_id} to {parent_id} would create a cycle"
        )


class TreeTooDeepError(ValidationError):
    """Raised when a tag would sit deeper than the configured maximum."""

    def __init__(self, level: int, max_depth: int):
        self.level = level
        self.max_depth = max_depth
        super().__init__(f"Tag level {level} exceeds maximum tree depth {max_depth}")


class BulkLimitExceededError(ValidationError):
    """Raised when a bulk call names more items than allowed."""

    def __init__(self, requested: int, limit: int):
        self.requested = requested
        self.limit = limit
        super().__init__(
            f"Maximum {limit} tags per bulk operation (requested {requested})"
        )


class TagCountExceededError(ValidationError):
    """Raised when a post would carry more tags than allowed."""

    def __init__(self, adding: int, current: int, limit: int):
        super().__init__(
            f"Cannot add {adding} tags: would exceed max of {limit} tags per post "
            f"(current: {current})"
        )


class FollowingDisabledError(BusinessRuleViolationError):
    """Raised when following is switched off in the configuration."""

    def __init__(self) -> None:
        super().__init__("Tag following is disabled")


class AlreadyFollowingError(BusinessRuleViolationError):
    """Raised when a user follows a tag twice."""

    def __init__(self, tag_id: str, user_id: str):
        super().__init__(f"User {user_id} already follows tag {tag_id}")


class NotFollowingError(BusinessRuleViolationError):
    """Raised when unfollowing a tag the user does not follow."""

    def __init__(self, tag_id: str, user_id: str):
        super().__init__(f"User {user_id} does not follow tag {tag_id}")
