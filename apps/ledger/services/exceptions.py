"""
Domain-specific exceptions for ledger app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger service errors."""
    pass


# =============================================================================
# Validation
# =============================================================================

class InvalidAmountError(LedgerServiceError):
    """Raised when an amount is not a finite number or not positive where required."""
    pass


class InvalidMealCountError(LedgerServiceError):
    """Raised when a meal count is negative or not a whole number."""
    pass


class MissingPayerError(LedgerServiceError):
    """Raised when a debt request names no payer."""
    pass


class SelfDebtRequestError(LedgerServiceError):
    """Raised when payer and receiver of a debt request are the same member."""
    pass


class InvalidDateRangeError(LedgerServiceError):
    """Raised when a date range bound cannot be parsed."""
    pass


# =============================================================================
# Authorization
# =============================================================================

class InsufficientPermissionsError(LedgerServiceError):
    """Raised when user lacks the role required for an action."""
    pass


class NotPayerError(LedgerServiceError):
    """Raised when someone other than the payer resolves a debt request."""
    pass


class NotMessMemberError(LedgerServiceError):
    """Raised when user is not on the roster of the mess."""
    pass


# =============================================================================
# State
# =============================================================================

class DebtRequestStateError(LedgerServiceError):
    """Raised when resolving a debt request that is no longer pending."""
    pass


# =============================================================================
# Lookup
# =============================================================================

class MessNotFoundError(LedgerServiceError):
    """Raised when a mess does not exist."""
    pass


class MemberNotFoundError(LedgerServiceError):
    """Raised when a member is not on the roster of the mess."""
    pass


class RecordNotFoundError(LedgerServiceError):
    """Raised when a ledger record does not exist in the mess."""
    pass
