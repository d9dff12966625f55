"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input, rejected before any write is attempted."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class DuplicateFriendshipError(BusinessRuleViolationError):
    """Raised when a friendship record already exists for an identity pair."""

    def __init__(self, first: str, second: str):
        self.pair = tuple(sorted((first, second)))
        super().__init__(f"A friendship already exists between {first} and {second}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AccessDeniedError(DomainError):
    """Raised when an identity may not read or write a comment thread.

    The message is deliberately generic so a denial never reveals thread
    content or participants.
    """

    def __init__(self) -> None:
        super().__init__("You do not have access to this conversation")


class RetrievalError(DomainError):
    """Raised when reading one of the feed's source streams fails."""

    def __init__(self, stream: str, reason: str):
        self.stream = stream
        self.reason = reason
        super().__init__(f"Could not load {stream}: {reason}")


class WriteConflictError(DomainError):
    """Raised when a concurrent write won the race for the same slot.

    The caller retries the whole operation.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"Concurrent update on {resource} {identifier}, please retry")
