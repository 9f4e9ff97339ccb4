"""
Domain-specific exceptions for household app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class HouseholdServiceError(Exception):
    """Base exception for all household service errors."""
    pass


class MessNotFoundError(HouseholdServiceError):
    """Raised when a mess does not exist."""
    pass


class NotMessMemberError(HouseholdServiceError):
    """Raised when user is not on the roster of the mess."""
    pass


class MemberNotFoundError(HouseholdServiceError):
    """Raised when a task assignee is not on the roster."""
    pass


class NoticeNotFoundError(HouseholdServiceError):
    """Raised when a notice does not exist in the mess."""
    pass


class TaskNotFoundError(HouseholdServiceError):
    """Raised when a task does not exist in the mess."""
    pass


class InsufficientPermissionsError(HouseholdServiceError):
    """Raised when user lacks permission to change a notice or task."""
    pass


class EmptyNoticeError(HouseholdServiceError):
    """Raised when posting a notice without text."""
    pass


class ReviewNotFoundError(HouseholdServiceError):
    """Raised when a review does not exist in the mess."""
    pass


class DuplicateReviewError(HouseholdServiceError):
    """Raised when a member already reviewed the mess."""
    pass


class InvalidRatingError(HouseholdServiceError):
    """Raised when a rating is outside 1-5."""
    pass
