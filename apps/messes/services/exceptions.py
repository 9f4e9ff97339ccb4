"""
Domain-specific exceptions for messes app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MessesServiceError(Exception):
    """Base exception for all messes service errors."""
    pass


class MessNotFoundError(MessesServiceError):
    """Raised when a mess does not exist or is inaccessible."""
    pass


class MessNameTakenError(MessesServiceError):
    """Raised when creating a mess whose name is already in use."""
    pass


class InvalidMessPasswordError(MessesServiceError):
    """Raised when the join password is incorrect."""
    pass


class AlreadyMemberError(MessesServiceError):
    """Raised when a user tries to join a mess they're already in."""
    pass


class DuplicateMemberError(MessesServiceError):
    """Raised when a roster entry with the same email already exists."""
    pass


class NotMemberError(MessesServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class ManagerCannotLeaveError(MessesServiceError):
    """Raised when a manager tries to leave their mess."""
    pass


class CannotRemoveSelfError(MessesServiceError):
    """Raised when a manager tries to remove their own roster entry."""
    pass


class InsufficientPermissionsError(MessesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class LinkedEmailChangeError(MessesServiceError):
    """Raised when editing the email of a roster entry linked to an account."""
    pass
