"""Domain exceptions raised by entities and the state machines.

Use cases translate these into ``libs.result.Error`` values; nothing in the
domain layer knows about HTTP.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for moderation rule violations"""

    code = "DOMAIN_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(DomainError):
    """A required field is missing or a value is malformed"""

    code = "VALIDATION_ERROR"


class InvalidTransition(DomainError):
    """The action is not legal from the entity's current status"""

    code = "INVALID_TRANSITION"

    def __init__(self, entity: str, current: str, action: str):
        self.entity = entity
        self.current = current
        self.action = action
        super().__init__(f"Cannot {action} {entity} in status '{current}'")


class ConcurrencyConflict(DomainError):
    """The entity was modified since the caller last read it"""

    code = "CONFLICT"

    def __init__(self, entity: str, entity_id: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{entity.capitalize()} {entity_id} was modified concurrently "
            f"(expected version {expected}, current version {actual})"
        )


class NotFound(DomainError):
    """The referenced entity does not exist"""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(
            f"{entity.capitalize()} {entity_id} not found", code=f"{entity.upper()}_NOT_FOUND"
        )
